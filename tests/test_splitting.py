import pytest

from heart_ml.splitting import split_dataset


def test_split_is_reproducible(raw_df):
    first = split_dataset(raw_df, ratio=0.8, seed=7)
    second = split_dataset(raw_df, ratio=0.8, seed=7)
    assert list(first.train.index) == list(second.train.index)
    assert list(first.test.index) == list(second.test.index)


def test_split_partitions_every_row_once(raw_df):
    split = split_dataset(raw_df, ratio=0.8, seed=1)
    train_rows, test_rows = set(split.train.index), set(split.test.index)
    assert train_rows.isdisjoint(test_rows)
    assert train_rows | test_rows == set(raw_df.index)


def test_split_train_fraction(raw_df):
    split = split_dataset(raw_df, ratio=0.8, seed=3)
    assert len(raw_df) == 300
    assert len(split.train) == 240
    assert len(split.test) == 60
    assert split.train_fraction == pytest.approx(0.8)


def test_split_preserves_class_balance(raw_df):
    overall = raw_df['Target'].mean()
    for seed in range(5):
        split = split_dataset(raw_df, ratio=0.8, seed=seed)
        assert abs(split.train['Target'].mean() - overall) <= 0.05
        assert abs(split.test['Target'].mean() - overall) <= 0.05


def test_different_seeds_change_membership(raw_df):
    a = split_dataset(raw_df, ratio=0.8, seed=1)
    b = split_dataset(raw_df, ratio=0.8, seed=2)
    assert set(a.test.index) != set(b.test.index)


@pytest.mark.parametrize('ratio', [0, 1, -0.2, 1.5])
def test_split_rejects_ratio_outside_unit_interval(raw_df, ratio):
    with pytest.raises(ValueError, match="between 0 and 1"):
        split_dataset(raw_df, ratio=ratio, seed=0)


def test_split_requires_target(raw_df):
    with pytest.raises(ValueError):
        split_dataset(raw_df.drop(columns=['Target']), ratio=0.8, seed=0)
