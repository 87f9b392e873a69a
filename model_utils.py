"""
Pipeline entry points used by the Flask app.
Load -> clean -> explore -> split -> fit/predict -> evaluate -> report.
"""

import logging

import pandas as pd
from typing import Dict, Any, Optional

from heart_ml import (
    AnalysisConfig,
    CleaningConfig,
    ModelComparer,
    read_dataset,
    clean_dataset,
    perform_eda,
    validate_analysis_config,
    calculate_split_percentages,
    safe_json_convert,
)
from heart_ml.charts import (
    create_class_balance_chart,
    create_correlation_heatmap,
    create_feature_boxplots,
    create_model_comparison_chart,
)
from heart_ml.reporting import comparison_table_records, comparison_table_to_text

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Console logging for the pipeline modules."""
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')


def load_clean_dataset(path: str, cleaning: Optional[CleaningConfig] = None) -> pd.DataFrame:
    """Read the CSV at ``path`` and return the cleaned dataset."""
    return clean_dataset(read_dataset(path), cleaning)


def explore_dataset(df: pd.DataFrame) -> Dict[str, Any]:
    """EDA payload plus rendered charts for a cleaned dataset."""
    eda = perform_eda(df)
    eda['charts'] = {
        'class_balance': create_class_balance_chart(eda['stats']),
        'boxplots': create_feature_boxplots(df),
        'correlation': create_correlation_heatmap(df),
    }
    return eda


def compare_models(df: pd.DataFrame, config: AnalysisConfig) -> Dict[str, Any]:
    """Fit the three classifiers on a cleaned dataset and tabulate the results."""
    comparer = ModelComparer(random_state=config.random_state)
    results = comparer.run(df, config)
    table = results['table']
    train_percent, test_percent = calculate_split_percentages(config.split_ratio)

    return {
        'table': table,
        'best_model_name': results['best_model_name'],
        'all_results': comparison_table_records(table),
        'confusion': {name: run.counts.as_dict() for name, run in results['runs'].items()},
        'split': {
            'train_rows': len(results['split'].train),
            'test_rows': len(results['split'].test),
            'train_percent': train_percent,
            'test_percent': test_percent,
        },
        'chart': create_model_comparison_chart(table),
    }


def run_analysis(path: str, split_ratio: float = 0.8, random_state: int = 42) -> Dict[str, Any]:
    """Run the whole pipeline on one CSV and print the comparison table."""
    config = AnalysisConfig(split_ratio=split_ratio, random_state=random_state)
    validation = validate_analysis_config(config)
    if not validation['valid']:
        raise ValueError("; ".join(validation['errors']))

    df = load_clean_dataset(path)
    logger.info("Running analysis on %d cleaned rows from %s", len(df), path)
    eda = perform_eda(df)
    comparison = compare_models(df, config)
    print(comparison_table_to_text(comparison['table']))

    return {
        'rows': len(df),
        'stats': eda['stats'],
        **comparison,
    }


def json_ready(result: Dict[str, Any]) -> Dict[str, Any]:
    """Drop the DataFrame from a comparison result and make the rest JSON-safe."""
    return {key: safe_json_convert(value) for key, value in result.items() if key != 'table'}


__all__ = [
    'configure_logging',
    'load_clean_dataset',
    'explore_dataset',
    'compare_models',
    'run_analysis',
    'json_ready',
]
