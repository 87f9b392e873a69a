"""Exploratory Data Analysis helpers using pandas built-ins.

Produces summary statistics, per-feature box plot payloads split by Target,
and correlation matrices per Target class melted into long rows.
"""

import logging

import pandas as pd
from typing import Dict, List, Any, Optional

from .config import NUMERIC_FEATURES, TARGET_COLUMN, EDAResults
from .utils import safe_json_convert

logger = logging.getLogger(__name__)


def summarize_dataset(df: pd.DataFrame, target: str = TARGET_COLUMN) -> Dict[str, Any]:
    """Shape, dtypes, missingness, duplicates, describe() and class balance."""
    total_cells = df.shape[0] * df.shape[1]
    info_stats = {
        "rows": df.shape[0],
        "cols": df.shape[1],
        "columns": list(df.columns),
        "dtypes": df.dtypes.astype(str).to_dict(),
        "missing": df.isnull().sum().to_dict(),
        "duplicate_rows": int(df.duplicated().sum()),
        "describe": df.describe().round(4).to_dict(),
        "data_completeness": round((1 - df.isnull().sum().sum() / total_cells) * 100, 2) if total_cells else 100.0,
    }

    if target in df.columns:
        counts = df[target].value_counts().sort_index()
        info_stats["class_balance"] = {str(k): int(v) for k, v in counts.items()}
        info_stats["positive_rate"] = float(df[target].mean()) if len(df) else None

    return {key: safe_json_convert(value) for key, value in info_stats.items()}


def boxplot_data(df: pd.DataFrame, features: Optional[List[str]] = None,
                 target: str = TARGET_COLUMN) -> List[Dict[str, Any]]:
    """Values of each numeric feature grouped by Target class."""
    features = features or [c for c in NUMERIC_FEATURES if c in df.columns]
    plot_data = []
    for feature in features:
        groups = {
            str(label): safe_json_convert(group[feature].dropna())
            for label, group in df.groupby(target, sort=True)
        }
        plot_data.append({
            "type": "box",
            "column": feature,
            "groups": groups,
            "title": f"{feature} by {target}"
        })
    return plot_data


def correlation_long(df: pd.DataFrame, by: Optional[str] = TARGET_COLUMN) -> pd.DataFrame:
    """Correlation matrix per ``by`` class in long form.

    Columns: the class label (when ``by`` is set), Var1, Var2, value. The
    grouping column itself is left out of each matrix.
    """
    numeric = df.select_dtypes(include=['number'])
    if by is None:
        return _melt_corr(numeric)
    if by not in numeric.columns:
        raise ValueError(f"Grouping column '{by}' must be numeric and present")

    frames = []
    for label, group in numeric.groupby(by, sort=True):
        melted = _melt_corr(group.drop(columns=[by]))
        melted.insert(0, by, label)
        frames.append(melted)
    if not frames:
        return pd.DataFrame(columns=[by, 'Var1', 'Var2', 'value'])
    return pd.concat(frames, ignore_index=True)


def _melt_corr(numeric: pd.DataFrame) -> pd.DataFrame:
    corr = numeric.corr()
    corr.index.name = 'Var1'
    return corr.reset_index().melt(id_vars='Var1', var_name='Var2', value_name='value')


def perform_eda(df: pd.DataFrame, target: str = TARGET_COLUMN) -> EDAResults:
    """Summary stats, box plot payloads and per-class correlations."""
    stats = summarize_dataset(df, target)
    logger.info("Summary statistics:\n%s", df.describe().round(2).to_string())
    return {
        "stats": stats,
        "plot_data": boxplot_data(df, target=target),
        "correlation_data": safe_json_convert(correlation_long(df, by=target)),
    }


# ---------------------------------------------------------------------------
# Features implemented in this module
# - summarize_dataset: shape, dtypes, missingness, duplicates, class balance
# - boxplot_data: numeric features grouped by Target
# - correlation_long: per-class correlation matrices, melted to long rows
# - perform_eda: bundle of the above as an EDAResults payload
# ---------------------------------------------------------------------------
