import numpy as np
import pandas as pd
import pytest

from heart_ml.config import CHEST_PAIN_CODES, THAL_CODES, CleaningConfig
from heart_ml.preprocessing import (
    clean_dataset,
    create_preprocessing_pipeline,
    decode_categories,
    decode_category,
    encode_category,
    split_features_target,
)


def test_encode_known_chest_pain_labels():
    encoded = encode_category(pd.Series(['typical', 'asymptomatic', 'nonanginal', 'nontypical']), CHEST_PAIN_CODES)
    assert encoded.tolist() == [1.0, 2.0, 3.0, 4.0]


def test_encode_ignores_case_and_spacing():
    encoded = encode_category(pd.Series([' Normal', 'FIXED ', 'reversable']), THAL_CODES)
    assert encoded.tolist() == [1.0, 2.0, 3.0]


def test_unknown_label_is_missing_not_zero():
    encoded = encode_category(pd.Series(['atypical', '', None, 7]), CHEST_PAIN_CODES)
    assert encoded.isna().all()


def test_fractional_codes_kept_only_when_allowed():
    series = pd.Series([2.25, 1.0])
    assert encode_category(series, THAL_CODES).isna().tolist() == [True, False]
    assert encode_category(series, THAL_CODES, allow_fractional=True).tolist() == [2.25, 1.0]


def test_encode_decode_round_trip():
    for table in (CHEST_PAIN_CODES, THAL_CODES):
        labels = pd.Series(list(table))
        decoded = decode_category(encode_category(labels, table), table)
        assert decoded.tolist() == labels.tolist()


def test_clean_dataset_drops_duplicates_and_incomplete_rows(dirty_df):
    cleaned = clean_dataset(dirty_df)
    # 303 rows: 3 duplicates, one unknown ChestPain, one missing Ca
    assert len(dirty_df) == 303
    assert len(cleaned) == 298
    assert not cleaned.duplicated().any()
    assert cleaned.isna().sum().sum() == 0
    assert 998 not in cleaned['Chol'].tolist()


def test_clean_dataset_normalizes_label_spelling(dirty_df):
    cleaned = clean_dataset(dirty_df)
    row = cleaned[cleaned['Chol'] == 997].iloc[0]
    assert row['ChestPain'] == 1


def test_thal_imputed_with_mean_before_row_drop(dirty_df):
    codes = dirty_df.drop_duplicates()['Thal'].map(
        lambda v: THAL_CODES.get(v, np.nan) if isinstance(v, str) else np.nan
    )
    expected = codes.mean()

    cleaned = clean_dataset(dirty_df)
    imputed = cleaned[cleaned['Chol'].isin([999, 996])]['Thal']
    assert len(imputed) == 2
    assert imputed.tolist() == pytest.approx([expected, expected])


def test_imputation_can_be_disabled(dirty_df):
    cleaned = clean_dataset(dirty_df, CleaningConfig(impute_columns=()))
    assert not cleaned['Chol'].isin([999, 996]).any()
    assert cleaned['Thal'].dtype == np.int64


def test_clean_dataset_is_idempotent(dirty_df):
    once = clean_dataset(dirty_df)
    twice = clean_dataset(once)
    pd.testing.assert_frame_equal(once, twice)


def test_clean_dataset_output_types(clean_df):
    assert clean_df['ChestPain'].dtype == np.int64
    assert clean_df['Target'].dtype == np.int64
    assert set(clean_df['ChestPain'].unique()) <= set(CHEST_PAIN_CODES.values())
    assert list(clean_df.index) == list(range(len(clean_df)))


def test_clean_dataset_requires_schema(raw_df):
    with pytest.raises(ValueError, match="missing columns"):
        clean_dataset(raw_df.drop(columns=['Thal']))


def test_impute_columns_must_be_in_schema(raw_df):
    with pytest.raises(ValueError, match="outside the dataset schema"):
        clean_dataset(raw_df, CleaningConfig(impute_columns=('Cholesterol',)))


def test_decode_categories_restores_labels(raw_df, clean_df):
    decoded = decode_categories(clean_df)
    assert decoded['ChestPain'].tolist() == raw_df['ChestPain'].tolist()
    assert decoded['Thal'].tolist() == raw_df['Thal'].tolist()


def test_split_features_target(clean_df):
    X, y = split_features_target(clean_df)
    assert 'Target' not in X.columns
    assert y.name == 'Target'
    with pytest.raises(ValueError):
        split_features_target(clean_df, 'Outcome')


def test_preprocessing_pipeline_rejects_target():
    with pytest.raises(ValueError):
        create_preprocessing_pipeline(['Age', 'Target'])
