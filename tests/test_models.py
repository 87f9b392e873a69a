import math
import warnings

import numpy as np
import pytest
from sklearn.base import BaseEstimator
from sklearn.pipeline import Pipeline

from heart_ml import models
from heart_ml.config import AnalysisConfig
from heart_ml.models import ModelComparer, build_models, fit_model, predict_labels
from heart_ml.splitting import split_dataset


@pytest.fixture
def comparison(clean_df):
    return ModelComparer(random_state=0).run(clean_df, AnalysisConfig(random_state=0))


def test_three_models_in_evaluation_order(comparison):
    assert comparison['table']['Model'].tolist() == ['LogisticRegression', 'SVM', 'RandomForest']
    assert comparison['best_model_name'] in comparison['runs']


def test_counts_are_tabulated_from_the_test_subset(comparison):
    y_test = comparison['split'].test['Target']
    for run in comparison['runs'].values():
        assert run.counts.total == len(y_test)
        assert run.counts.tp + run.counts.fn == int(y_test.sum())
        assert run.counts.tn + run.counts.fp == int((y_test == 0).sum())


def test_metrics_match_counts(comparison):
    table = comparison['table'].set_index('Model')
    for name, run in comparison['runs'].items():
        assert table.loc[name, 'Accuracy'] == pytest.approx(run.counts.accuracy)
        for value in run.metrics.values():
            assert math.isnan(value) or 0.0 <= value <= 1.0


def test_probabilities_align_with_test_rows(comparison):
    n_test = len(comparison['split'].test)
    for run in comparison['runs'].values():
        assert run.probabilities.shape == (n_test,)
        assert np.all((run.probabilities >= 0) & (run.probabilities <= 1))


def test_runs_are_reproducible(clean_df):
    config = AnalysisConfig(random_state=5)
    first = ModelComparer(random_state=5).run(clean_df, config)
    second = ModelComparer(random_state=5).run(clean_df, config)
    assert first['table'].equals(second['table'])


def test_fit_and_predict_contract(clean_df):
    split = split_dataset(clean_df, ratio=0.8, seed=0)
    name, estimator = build_models(0)[0]
    model = fit_model(estimator, split.train, 'Target')
    labels, probabilities = predict_labels(model, split.test, 'Target')
    assert set(np.unique(labels)) <= {0, 1}
    assert len(labels) == len(split.test) == len(probabilities)


def test_rejects_uncleaned_data(dirty_df):
    with pytest.raises(ValueError):
        ModelComparer().run(dirty_df, AnalysisConfig())


def test_rejects_invalid_config(clean_df):
    with pytest.raises(ValueError, match="Split ratio"):
        ModelComparer().run(clean_df, AnalysisConfig(split_ratio=1.2))


def test_rejects_single_class(clean_df):
    one_class = clean_df[clean_df['Target'] == 1]
    with pytest.raises(ValueError, match="both Target classes"):
        ModelComparer().run(one_class, AnalysisConfig())


class FailingClassifier(BaseEstimator):
    def fit(self, X, y):
        raise RuntimeError("solver did not converge")


def test_failing_model_is_skipped(clean_df, monkeypatch):
    reference = models.build_models

    def with_failing_model(random_state=42):
        return reference(random_state) + [('Failing', Pipeline([('model', FailingClassifier())]))]

    monkeypatch.setattr(models, 'build_models', with_failing_model)
    result = ModelComparer(random_state=0).run(clean_df, AnalysisConfig(random_state=0))

    assert list(result['runs']) == ['LogisticRegression', 'SVM', 'RandomForest']
    assert 'Failing' not in result['table']['Model'].tolist()


def test_all_models_failing_raises(clean_df, monkeypatch):
    monkeypatch.setattr(
        models, 'build_models',
        lambda random_state=42: [('Failing', Pipeline([('model', FailingClassifier())]))]
    )
    with pytest.raises(RuntimeError, match="No models trained"):
        ModelComparer().run(clean_df, AnalysisConfig())


def test_svm_probabilities_without_deprecated_options(clean_df):
    split = split_dataset(clean_df, ratio=0.8, seed=0)
    name, estimator = build_models(0)[1]
    assert name == 'SVM'
    with warnings.catch_warnings():
        warnings.simplefilter('error', FutureWarning)
        model = fit_model(estimator, split.train, 'Target')
    labels, probabilities = predict_labels(model, split.test, 'Target')
    assert probabilities.shape == (len(split.test),)
    assert np.all((probabilities >= 0) & (probabilities <= 1))
