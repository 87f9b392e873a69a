"""Stratified, seeded train/test partitioning."""

import logging
from dataclasses import dataclass

import pandas as pd
from sklearn.model_selection import train_test_split

from .config import TARGET_COLUMN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Split:
    """Disjoint train and test subsets of one dataset.

    Both frames keep the row index of the dataset they came from.
    """
    train: pd.DataFrame
    test: pd.DataFrame

    @property
    def train_fraction(self) -> float:
        total = len(self.train) + len(self.test)
        return len(self.train) / total if total else float('nan')


def split_dataset(df: pd.DataFrame, ratio: float = 0.8, seed: int = 42,
                  target: str = TARGET_COLUMN) -> Split:
    """Partition ``df`` into train/test preserving the Target class balance.

    The same frame, ratio and seed always give the same membership.
    """
    if not 0 < ratio < 1:
        raise ValueError(f"Split ratio must be between 0 and 1, got {ratio}")
    if target not in df.columns:
        raise ValueError(f"Target column '{target}' not found in dataset")

    train, test = train_test_split(
        df, train_size=ratio, stratify=df[target], random_state=seed
    )
    logger.info(
        "Split %d rows into %d train / %d test (ratio=%.2f, seed=%d)",
        len(df), len(train), len(test), ratio, seed
    )
    return Split(train=train, test=test)
