import pytest

from imu_har.features.names import FEATURE_NAMES
from imu_har.features.normalize import normalize_batch, to_frame


def test_min_max_map_to_unit_interval():
    rows = [{"a": 0.0, "b": 5.0}, {"a": 10.0, "b": 5.0}, {"a": 2.5, "b": 5.0}]
    out = normalize_batch(rows)
    assert [r["a"] for r in out] == [-1.0, 1.0, pytest.approx(-0.5)]
    assert all(r["b"] == 0.0 for r in out)


def test_columns_are_independent():
    rows = [{"a": 1.0, "b": -100.0}, {"a": 2.0, "b": 100.0}]
    out = normalize_batch(rows)
    assert out == [{"a": -1.0, "b": -1.0}, {"a": 1.0, "b": 1.0}]


def test_key_order_is_kept():
    rows = [{"z": 1.0, "a": 2.0}, {"z": 3.0, "a": 4.0}]
    assert list(normalize_batch(rows)[0]) == ["z", "a"]


def test_single_row_is_all_zero():
    assert normalize_batch([{"a": 3.0, "b": -2.0}]) == [{"a": 0.0, "b": 0.0}]


def test_empty_batch():
    assert normalize_batch([]) == []


def test_mismatched_keys():
    with pytest.raises(ValueError):
        normalize_batch([{"a": 1.0}, {"b": 1.0}])


def test_to_frame_is_canonical():
    df = to_frame([{"angle(z,gravityMean)": 1.0, "tBodyAcc-mean()-x": 2.0}])
    assert tuple(df.columns) == FEATURE_NAMES
    assert df.loc[0, "tBodyAcc-mean()-x"] == 2.0
    assert df.loc[0, "tBodyAcc-mean()-y"] == 0.0
    assert to_frame([]).shape == (0, 561)
