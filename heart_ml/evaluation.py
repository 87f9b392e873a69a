"""Confusion-count tabulation and binary classification metrics.

All metrics are pure functions of the four confusion counts. A metric whose
denominator is zero is NaN, which the reporting layer shows as "undefined";
no value is rounded here.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict

import numpy as np
from sklearn.metrics import confusion_matrix

from .config import ModelMetrics


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else float('nan')


@dataclass(frozen=True)
class ConfusionCounts:
    """Predicted-vs-actual agreement counts for a binary classifier."""
    tp: int
    fp: int
    tn: int
    fn: int

    def __post_init__(self):
        for name in ('tp', 'fp', 'tn', 'fn'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn

    @property
    def accuracy(self) -> float:
        return _ratio(self.tp + self.tn, self.total)

    @property
    def precision(self) -> float:
        return _ratio(self.tp, self.tp + self.fp)

    @property
    def recall(self) -> float:
        return _ratio(self.tp, self.tp + self.fn)

    @property
    def specificity(self) -> float:
        return _ratio(self.tn, self.tn + self.fp)

    @property
    def f1(self) -> float:
        precision, recall = self.precision, self.recall
        if math.isnan(precision) or math.isnan(recall):
            return float('nan')
        return _ratio(2 * precision * recall, precision + recall)

    def as_dict(self) -> Dict[str, int]:
        return {'TP': int(self.tp), 'FP': int(self.fp), 'TN': int(self.tn), 'FN': int(self.fn)}


def tabulate_confusion(y_true: Any, y_pred: Any) -> ConfusionCounts:
    """Count predicted-vs-actual label pairs for labels in {0, 1}.

    Args
    ----
    y_true:
        Actual labels of the test subset.
    y_pred:
        Labels predicted for the same rows, in the same order.

    Raises
    ------
    ValueError
        If the lengths differ or a label other than 0/1 appears.
    """
    y_true = np.asarray(y_true).ravel()
    y_pred = np.asarray(y_pred).ravel()
    if y_true.shape != y_pred.shape:
        raise ValueError(f"Label length mismatch: {len(y_true)} actual vs {len(y_pred)} predicted")

    for name, labels in (('actual', y_true), ('predicted', y_pred)):
        unknown = set(np.unique(labels).tolist()) - {0, 1}
        if unknown:
            raise ValueError(f"Non-binary {name} labels: {sorted(unknown)}")

    if len(y_true) == 0:
        return ConfusionCounts(tp=0, fp=0, tn=0, fn=0)

    tn, fp, fn, tp = confusion_matrix(y_true.astype(int), y_pred.astype(int), labels=[0, 1]).ravel()
    return ConfusionCounts(tp=int(tp), fp=int(fp), tn=int(tn), fn=int(fn))


def compute_metrics(counts: ConfusionCounts) -> ModelMetrics:
    """Derive the reported metric set from confusion counts."""
    return {
        'Accuracy': counts.accuracy,
        'Precision': counts.precision,
        'Recall': counts.recall,
        'F1': counts.f1,
        'Specificity': counts.specificity,
    }


def is_undefined(value: Any) -> bool:
    """True for the NaN marker of a zero-denominator metric."""
    try:
        return value is None or math.isnan(value)
    except TypeError:
        return False
