"""Fit the three reference classifiers and compare them on one split."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, clone
from sklearn.calibration import CalibratedClassifierCV
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.svm import SVC

from .config import AnalysisConfig, ModelMetrics, validate_analysis_config
from .evaluation import ConfusionCounts, compute_metrics, tabulate_confusion
from .preprocessing import create_preprocessing_pipeline, split_features_target
from .reporting import best_model_name, build_comparison_table, comparison_table_to_text
from .splitting import Split, split_dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelRun:
    """Outcome of fitting and scoring one classifier."""
    name: str
    model: Pipeline
    counts: ConfusionCounts
    metrics: ModelMetrics
    probabilities: Optional[np.ndarray]
    training_time: float


def build_models(random_state: int = 42) -> List[Tuple[str, Pipeline]]:
    """Logistic regression, SVM and random forest, in evaluation order.

    The linear and kernel models see standardized continuous features; the
    forest sees the coded values as they are. SVM probabilities come from
    sigmoid calibration over cross-validated decision values.
    """
    return [
        ('LogisticRegression', Pipeline([
            ('scaler', create_preprocessing_pipeline()),
            ('model', LogisticRegression(max_iter=1000, random_state=random_state)),
        ])),
        ('SVM', Pipeline([
            ('scaler', create_preprocessing_pipeline()),
            ('model', CalibratedClassifierCV(
                SVC(kernel='rbf', C=1.0, gamma='scale', random_state=random_state),
                ensemble=False
            )),
        ])),
        ('RandomForest', Pipeline([
            ('model', RandomForestClassifier(n_estimators=100, random_state=random_state)),
        ])),
    ]


def fit_model(estimator: Pipeline, train: pd.DataFrame, target: str) -> Pipeline:
    """Fit a fresh copy of ``estimator`` on the training subset."""
    X_train, y_train = split_features_target(train, target)
    model = clone(estimator)
    return model.fit(X_train, y_train)


def predict_labels(model: Pipeline, test: pd.DataFrame, target: str) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """Predicted labels and, where available, positive-class probabilities."""
    X_test, _ = split_features_target(test, target)
    labels = np.asarray(model.predict(X_test)).astype(int)
    probabilities = None
    if hasattr(model, 'predict_proba'):
        probabilities = model.predict_proba(X_test)[:, 1]
    return labels, probabilities


class ModelComparer(BaseEstimator):
    """Split a cleaned dataset once and score every reference model on it."""

    def __init__(self, random_state: int = 42):
        self.random_state = random_state
        self.runs_: Dict[str, ModelRun] = {}
        self.split_: Optional[Split] = None

    def run(self, df: pd.DataFrame, config: AnalysisConfig) -> Dict[str, Any]:
        """Train and compare the models on a cleaned dataset."""
        logger.info("Starting comparison with target: %s", config.target_column)
        self._validate_inputs(df, config)

        self.split_ = split_dataset(
            df, ratio=config.split_ratio, seed=config.random_state, target=config.target_column
        )
        self.runs_ = self._train_models(self.split_, config.target_column)

        table = build_comparison_table({name: run.metrics for name, run in self.runs_.items()})
        logger.info("Model comparison:\n%s", comparison_table_to_text(table))

        return {
            'split': self.split_,
            'runs': self.runs_,
            'table': table,
            'best_model_name': best_model_name(table),
        }

    def _validate_inputs(self, df: pd.DataFrame, config: AnalysisConfig) -> None:
        """Validate input data and configuration."""
        check = validate_analysis_config(config)
        if not check['valid']:
            raise ValueError("; ".join(check['errors']))

        if config.target_column not in df.columns:
            raise ValueError(f"Target column '{config.target_column}' not found in dataset")

        if df.isna().any().any():
            raise ValueError("Dataset has missing values; clean it before comparing models")

        if len(df) < 10:
            raise ValueError("Dataset too small. Need at least 10 rows for training")

        if df[config.target_column].nunique() < 2:
            raise ValueError("Classification requires both Target classes to be present")

    def _train_models(self, split: Split, target: str) -> Dict[str, ModelRun]:
        """Fit, predict and tabulate each model; failures are logged and skipped."""
        runs = {}
        _, y_test = split_features_target(split.test, target)

        for name, estimator in build_models(self.random_state):
            try:
                start_time = time.time()
                model = fit_model(estimator, split.train, target)
                elapsed_time = time.time() - start_time

                labels, probabilities = predict_labels(model, split.test, target)
                counts = tabulate_confusion(y_test, labels)
                runs[name] = ModelRun(
                    name=name,
                    model=model,
                    counts=counts,
                    metrics=compute_metrics(counts),
                    probabilities=probabilities,
                    training_time=round(elapsed_time, 3),
                )
                logger.info(
                    "%s completed - Accuracy: %.3f, Time: %.2fs, counts: %s",
                    name, counts.accuracy, elapsed_time, counts.as_dict()
                )
            except Exception:
                logger.exception("Error training %s", name)
                continue

        if not runs:
            raise RuntimeError("No models trained successfully")

        return runs
