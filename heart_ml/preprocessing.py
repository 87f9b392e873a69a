"""Cleaning and encoding for the heart-disease dataset.

Turns a raw frame (text categories, duplicates, gaps) into the numeric
dataset the models consume, and builds the feature scaler used by the
distance-based classifiers.
"""

import logging

import numpy as np
import pandas as pd
from typing import Dict, List, Optional, Tuple
from sklearn.compose import ColumnTransformer
from sklearn.preprocessing import StandardScaler

from .config import CATEGORY_TABLES, COLUMNS, NUMERIC_FEATURES, TARGET_COLUMN, CleaningConfig

logger = logging.getLogger(__name__)


def encode_category(series: pd.Series, table: Dict[str, int], allow_fractional: bool = False) -> pd.Series:
    """Map category labels to integer codes through a lookup table.

    Labels match case-insensitively after stripping whitespace. Values that
    are already codes are kept; with ``allow_fractional`` any number inside
    the code range is kept too, so a mean-imputed value survives re-encoding.
    Anything else becomes NaN.
    """
    lookup = {label.lower(): code for label, code in table.items()}
    codes = set(table.values())
    low, high = min(codes), max(codes)

    def _encode(value) -> float:
        if isinstance(value, str):
            return float(lookup.get(value.strip().lower(), np.nan))
        if pd.isna(value):
            return np.nan
        number = float(value)
        if number in codes or (allow_fractional and low <= number <= high):
            return number
        return np.nan

    return series.map(_encode).astype(float)


def decode_category(series: pd.Series, table: Dict[str, int]) -> pd.Series:
    """Map integer codes back to their labels; other values become NaN."""
    labels = {code: label for label, code in table.items()}

    def _decode(value):
        if isinstance(value, str) or pd.isna(value):
            return np.nan
        number = float(value)
        if not number.is_integer():
            return np.nan
        return labels.get(int(number), np.nan)

    return series.map(_decode).astype(object)


def decode_categories(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` with ChestPain and Thal as text labels."""
    decoded = df.copy()
    for column, table in CATEGORY_TABLES.items():
        if column in decoded.columns:
            decoded[column] = decode_category(decoded[column], table)
    return decoded


def clean_dataset(df: pd.DataFrame, config: Optional[CleaningConfig] = None) -> pd.DataFrame:
    """Drop duplicates, encode categories, impute and drop incomplete rows.

    Columns in ``config.impute_columns`` have their gaps filled with the
    column mean, taken after encoding and before any row is dropped. Rows
    missing any other value are removed. Applying this to its own output
    returns an equal frame.
    """
    config = config or CleaningConfig()

    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Dataset is missing columns: {missing}")

    unknown = [c for c in config.impute_columns if c not in COLUMNS]
    if unknown:
        raise ValueError(f"Cannot impute columns outside the dataset schema: {unknown}")

    start_rows = len(df)
    cleaned = df[COLUMNS].drop_duplicates().copy()
    duplicates = start_rows - len(cleaned)

    for column, table in CATEGORY_TABLES.items():
        cleaned[column] = encode_category(
            cleaned[column], table, allow_fractional=column in config.impute_columns
        )

    other_columns = [c for c in COLUMNS if c not in CATEGORY_TABLES]
    cleaned[other_columns] = cleaned[other_columns].apply(pd.to_numeric, errors='coerce')

    for column in config.impute_columns:
        gaps = int(cleaned[column].isna().sum())
        if gaps:
            mean = cleaned[column].mean()
            if pd.isna(mean):
                logger.warning("Column %s has no values to impute from", column)
                continue
            cleaned[column] = cleaned[column].fillna(mean)
            logger.info("Imputed %d missing %s values with mean %.4f", gaps, column, mean)

    before_drop = len(cleaned)
    cleaned = cleaned.dropna()
    incomplete = before_drop - len(cleaned)

    # Labels that differ only in case or spacing collapse to one code
    cleaned = cleaned.drop_duplicates()

    for column in COLUMNS:
        if column in config.impute_columns:
            continue
        values = cleaned[column]
        if len(values) and np.all(np.mod(values.to_numpy(dtype=float), 1) == 0):
            cleaned[column] = values.astype('int64')

    cleaned = cleaned.reset_index(drop=True)
    logger.info(
        "Cleaned dataset: %d -> %d rows (%d duplicates, %d incomplete)",
        start_rows, len(cleaned), duplicates, incomplete
    )
    return cleaned


def split_features_target(df: pd.DataFrame, target: str = TARGET_COLUMN) -> Tuple[pd.DataFrame, pd.Series]:
    """Separate features and target."""
    if target not in df.columns:
        raise ValueError(f"Target column '{target}' not found in dataset")
    return df.drop(columns=[target]), df[target]


def create_preprocessing_pipeline(numeric_features: Optional[List[str]] = None) -> ColumnTransformer:
    """Standardize the continuous features and pass the coded ones through."""
    numeric_features = list(numeric_features or NUMERIC_FEATURES)
    if TARGET_COLUMN in numeric_features:
        raise ValueError("Target column cannot be used as a feature")

    return ColumnTransformer(
        transformers=[('num', StandardScaler(), numeric_features)],
        remainder='passthrough'
    )


# ---------------------------------------------------------------------------
# Features implemented in this module
# - Lookup-table encoding of ChestPain/Thal with a NaN unknown sentinel
# - Decoding codes back to labels
# - Idempotent clean_dataset: dedupe, encode, mean-impute, drop incomplete
# - Feature/target separation and ColumnTransformer scaler for the models
# ---------------------------------------------------------------------------
