import numpy as np
import pandas as pd
import pytest

from heart_ml.config import CHEST_PAIN_CODES, COLUMNS, THAL_CODES
from heart_ml.preprocessing import clean_dataset


def make_raw_frame(n=300, seed=0):
    """Synthetic raw dataset with text categories and a weak class signal."""
    rng = np.random.RandomState(seed)
    target = rng.binomial(1, 0.45, n)
    data = {
        'Age': rng.randint(29, 78, n),
        'Sex': rng.randint(0, 2, n),
        'ChestPain': rng.choice(list(CHEST_PAIN_CODES), n),
        'RestBP': rng.randint(94, 200, n),
        'Chol': rng.randint(126, 564, n),
        'Fbs': rng.randint(0, 2, n),
        'RestECG': rng.randint(0, 3, n),
        'MaxHR': 160 - 25 * target + rng.randint(-30, 30, n),
        'ExAng': rng.randint(0, 2, n),
        'Oldpeak': np.round(rng.uniform(0, 4, n) + target, 1),
        'Slope': rng.randint(1, 4, n),
        'Ca': rng.randint(0, 4, n),
        'Thal': rng.choice(list(THAL_CODES), n),
        'Target': target,
    }
    return pd.DataFrame(data, columns=COLUMNS)


@pytest.fixture
def raw_df():
    return make_raw_frame()


@pytest.fixture
def dirty_df(raw_df):
    """Raw frame with duplicates, an unknown category and gaps.

    Row markers (Chol values) identify the edited rows after cleaning.
    """
    df = raw_df.copy()
    df['Thal'] = df['Thal'].astype(object)
    df['Ca'] = df['Ca'].astype(float)
    df.loc[0, 'ChestPain'] = 'atypical'
    df.loc[1, 'Thal'] = np.nan
    df.loc[2, 'Ca'] = np.nan
    df.loc[3, 'ChestPain'] = '  Typical '
    df.loc[4, 'Thal'] = 'unknown'
    df.loc[[1, 2, 3, 4], 'Chol'] = [999, 998, 997, 996]
    duplicates = df.iloc[[10, 11, 12]]
    return pd.concat([df, duplicates], ignore_index=True)


@pytest.fixture
def clean_df(raw_df):
    return clean_dataset(raw_df)


@pytest.fixture
def csv_path(tmp_path, raw_df):
    path = tmp_path / 'heart.csv'
    raw_df.to_csv(path, index=False)
    return str(path)
