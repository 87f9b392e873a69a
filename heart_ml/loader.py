"""CSV loading and header validation for the heart-disease dataset."""

import logging
import os

import pandas as pd

from .config import COLUMNS, TARGET_COLUMN

logger = logging.getLogger(__name__)

# Alternate name of the outcome column in the ISLR distribution of the data
OUTCOME_ALIASES = {'AHD': {'yes': 1, 'no': 0}}


def read_dataset(path: str) -> pd.DataFrame:
    """Read the dataset CSV and return it with the fixed column order.

    Raises ValueError for a missing, empty or unparsable file and for a
    header that does not match the schema. Nothing is cleaned here.
    """
    if not path or not os.path.exists(path):
        raise ValueError(f"Dataset file not found: {path}")
    if os.path.getsize(path) == 0:
        raise ValueError("File is empty.")

    try:
        df = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ValueError(f"Failed to read the file: {e}") from e

    if df.empty:
        raise ValueError("File contains no data.")

    logger.info("Loaded %s: %d rows x %d columns", path, df.shape[0], df.shape[1])
    return normalize_columns(df)


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Map a raw frame onto the 14-column schema."""
    df = df.copy()

    # Row-number column written by R's write.csv
    index_cols = [c for c in df.columns if str(c).startswith('Unnamed:') or str(c).strip() == '']
    if index_cols:
        df = df.drop(columns=index_cols)

    for alias, values in OUTCOME_ALIASES.items():
        if alias in df.columns and TARGET_COLUMN not in df.columns:
            df[TARGET_COLUMN] = df[alias].map(
                lambda v: values.get(str(v).strip().lower()) if pd.notna(v) else None
            )
            df = df.drop(columns=[alias])

    missing = [c for c in COLUMNS if c not in df.columns]
    extra = [c for c in df.columns if c not in COLUMNS]
    if missing or extra:
        parts = []
        if missing:
            parts.append(f"missing columns {missing}")
        if extra:
            parts.append(f"unexpected columns {extra}")
        raise ValueError("CSV header does not match the dataset schema: " + "; ".join(parts))

    target = pd.to_numeric(df[TARGET_COLUMN], errors='coerce')
    bad = target.notna() & ~target.isin([0, 1])
    if bad.any():
        raise ValueError(f"Target column must be binary 0/1, found {sorted(target[bad].unique().tolist())}")

    return df[COLUMNS]


# ---------------------------------------------------------------------------
# Features implemented in this module
# - read_dataset: fail-fast CSV loading with schema validation
# - normalize_columns: drop row-number column, AHD Yes/No -> Target 1/0
# ---------------------------------------------------------------------------
