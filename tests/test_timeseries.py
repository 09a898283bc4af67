"""Tests for the time-indexed helpers."""
import numpy as np
import pandas as pd
import pytest

from geoframe_stats.errors import UnsupportedMethod
from geoframe_stats.timeseries import as_time_series, as_time_table, find_outliers, unwrap


def create_time_series(data):
    dates = pd.date_range("2023-01-01", periods=len(data), freq="D")
    return pd.Series(np.asarray(data, dtype=float), index=dates)


class TestAsTimeSeries:

    def test_from_values_and_index(self):
        dates = pd.date_range("2023-01-01", periods=3)
        series = as_time_series([1, 2, 3], index=dates, name="967")
        assert series.name == "967"
        assert series.dtype == float
        assert isinstance(series.index, pd.DatetimeIndex)

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            as_time_series([1.0, 2.0], index=pd.date_range("2023-01-01", periods=3))

    def test_requires_datetime_index(self):
        with pytest.raises(TypeError):
            as_time_series(pd.Series([1.0, 2.0], index=[0, 1]))

    def test_plain_values_need_index(self):
        with pytest.raises(TypeError):
            as_time_series([1.0, 2.0])

    def test_sorts_timestamps(self):
        dates = pd.to_datetime(["2023-01-03", "2023-01-01", "2023-01-02"])
        series = as_time_series([3.0, 1.0, 2.0], index=dates)
        assert series.index.is_monotonic_increasing
        assert list(series) == [1.0, 2.0, 3.0]

    def test_table_is_sorted_and_left_unconverted(self):
        dates = pd.to_datetime(["2023-01-02", "2023-01-01"])
        table = as_time_table(pd.DataFrame({"A": ["2.0", "--"]}, index=dates))
        assert table.index.is_monotonic_increasing
        assert list(table["A"]) == ["--", "2.0"]

    def test_table_requires_datetime_index(self):
        with pytest.raises(TypeError):
            as_time_table(pd.DataFrame({"A": [1.0, 2.0]}))

    def test_unwrap(self):
        series = create_time_series([1, 2, 3])
        values = unwrap(series)
        assert isinstance(values, np.ndarray)
        np.testing.assert_array_equal(values, [1.0, 2.0, 3.0])


class TestFindOutliers:

    def test_single_series(self):
        ta = create_time_series([10, 12, 10, 15, 100, 10, 11, 10, 14, 13])

        outliers = find_outliers(ta)

        assert len(outliers) == 1
        assert list(outliers[0].values) == [100.0]
        assert outliers[0].index[0] == pd.Timestamp("2023-01-05")

    def test_table_one_result_per_column(self):
        dates = pd.date_range("2023-01-01", periods=10, freq="D")
        table = pd.DataFrame(
            {
                "A": [10, 12, 10, 15, 100, 10, 11, 10, 14, 13],
                "B": [5, 6, 5, 7, 6, 5, 6, 7, 5, 6],
            },
            index=dates,
        )

        outliers = find_outliers(table, method="MAD", threshold=3.0)

        assert len(outliers) == 2
        assert list(outliers[0].index) == [pd.Timestamp("2023-01-05")]
        assert outliers[1].empty

    def test_unsupported_method(self):
        with pytest.raises(UnsupportedMethod):
            find_outliers(create_time_series([1, 2, 3]), method="Grubbs")

    def test_empty_series(self):
        outliers = find_outliers(pd.Series([], index=pd.DatetimeIndex([]), dtype=float))
        assert len(outliers) == 1
        assert outliers[0].empty

    def test_requires_datetime_index(self):
        with pytest.raises(TypeError):
            find_outliers(pd.Series([1.0, 2.0, 50.0], index=[0, 1, 2]))
