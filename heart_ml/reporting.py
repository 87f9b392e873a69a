"""Model comparison table assembly and presentation formatting."""

from typing import Mapping

import pandas as pd

from .config import METRIC_COLUMNS, UNDEFINED, ModelMetrics
from .evaluation import is_undefined


def build_comparison_table(results: Mapping[str, ModelMetrics]) -> pd.DataFrame:
    """One row per model in evaluation order, one column per metric.

    Metrics are copied as-is; a metric absent from a model's set is NaN.
    """
    rows = []
    for model_name, metrics in results.items():
        row = {'Model': model_name}
        for column in METRIC_COLUMNS:
            row[column] = metrics.get(column, float('nan'))
        rows.append(row)
    return pd.DataFrame(rows, columns=['Model'] + METRIC_COLUMNS)


def format_comparison_table(table: pd.DataFrame, digits: int = 4) -> pd.DataFrame:
    """Round metrics for display and spell out undefined values."""
    formatted = table.copy()
    for column in METRIC_COLUMNS:
        if column in formatted.columns:
            formatted[column] = [
                UNDEFINED if is_undefined(v) else f"{v:.{digits}f}" for v in table[column]
            ]
    return formatted


def comparison_table_to_text(table: pd.DataFrame, digits: int = 4) -> str:
    """Plain-text rendering for console output."""
    return format_comparison_table(table, digits).to_string(index=False)


def comparison_table_to_csv(table: pd.DataFrame, best_model: str = None) -> str:
    """CSV export; undefined metrics are written as the marker, not blank."""
    export = table.copy()
    for column in METRIC_COLUMNS:
        if column in export.columns:
            export[column] = [UNDEFINED if is_undefined(v) else v for v in table[column]]
    if best_model is not None:
        export.insert(1, 'Best_Model', ['Yes' if m == best_model else 'No' for m in export['Model']])
    return export.to_csv(index=False)


def comparison_table_records(table: pd.DataFrame) -> list:
    """JSON-ready rows with None standing in for undefined metrics."""
    records = []
    for row in table.to_dict('records'):
        records.append({
            key: (None if key in METRIC_COLUMNS and is_undefined(value) else value)
            for key, value in row.items()
        })
    return records


def best_model_name(table: pd.DataFrame, metric: str = 'Accuracy') -> str:
    """Model with the highest defined value of ``metric``."""
    scores = table.set_index('Model')[metric].dropna()
    if scores.empty:
        raise ValueError(f"No model has a defined {metric}")
    return str(scores.idxmax())
