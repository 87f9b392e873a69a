"""Configuration, dataset schema and typed result structures."""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Tuple, TypedDict


TARGET_COLUMN = 'Target'

# Column order of a cleaned dataset
COLUMNS = [
    'Age', 'Sex', 'ChestPain', 'RestBP', 'Chol', 'Fbs', 'RestECG',
    'MaxHR', 'ExAng', 'Oldpeak', 'Slope', 'Ca', 'Thal', TARGET_COLUMN
]

CHEST_PAIN_CODES: Dict[str, int] = {
    'typical': 1,
    'asymptomatic': 2,
    'nonanginal': 3,
    'nontypical': 4,
}

THAL_CODES: Dict[str, int] = {
    'normal': 1,
    'fixed': 2,
    'reversable': 3,
}

CATEGORY_TABLES: Dict[str, Dict[str, int]] = {
    'ChestPain': CHEST_PAIN_CODES,
    'Thal': THAL_CODES,
}

# Features drawn as box plots against Target
NUMERIC_FEATURES = ['Age', 'RestBP', 'Chol', 'MaxHR', 'Oldpeak', 'Ca']

METRIC_COLUMNS = ['Accuracy', 'Precision', 'Recall', 'F1', 'Specificity']

# Display marker for a metric whose denominator was zero
UNDEFINED = 'undefined'


@dataclass
class AnalysisConfig:
    """Configuration object for splitting and model comparison."""
    target_column: str = TARGET_COLUMN
    split_ratio: float = 0.8
    random_state: int = 42


@dataclass
class CleaningConfig:
    """Which columns get mean imputation instead of a row drop."""
    impute_columns: Tuple[str, ...] = field(default_factory=lambda: ('Thal',))


class ModelMetrics(TypedDict, total=False):
    """Type-safe structure for model metrics."""
    Accuracy: float
    Precision: float
    Recall: float
    F1: float
    Specificity: float


class EDAResults(TypedDict):
    """Type-safe structure for EDA results."""
    stats: Dict[str, Any]
    plot_data: List[Dict[str, Any]]
    correlation_data: List[Dict[str, Any]]


def calculate_split_percentages(split_ratio: float) -> tuple[int, int]:
    """Calculate train/test split percentages."""
    train_percent = int(round(split_ratio * 100))
    test_percent = 100 - train_percent
    return train_percent, test_percent


def validate_analysis_config(config: AnalysisConfig) -> Dict[str, Any]:
    """Validate split and seed settings before a run."""
    errors = []

    try:
        ratio = float(config.split_ratio)
        if ratio <= 0 or ratio >= 1:
            errors.append("Split ratio must be between 0 and 1")
    except (ValueError, TypeError):
        errors.append("Split ratio must be a valid number")

    if not isinstance(config.random_state, int) or isinstance(config.random_state, bool):
        errors.append("Random state must be an integer")

    if config.target_column not in COLUMNS:
        errors.append(f"Target column '{config.target_column}' is not part of the dataset schema")

    return {
        'valid': len(errors) == 0,
        'errors': errors
    }


# ---------------------------------------------------------------------------
# Features implemented in this module
# - Fixed 14-column schema and ChestPain/Thal lookup tables
# - AnalysisConfig / CleaningConfig dataclasses
# - Typed dictionaries for metrics and EDA results
# - Split percentage helper and config validation
# ---------------------------------------------------------------------------
