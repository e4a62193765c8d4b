import math
from decimal import Decimal

import pyarrow as pa
import pytest

from seriesground import Series
from seriesground.errors import (
    IllegalStateError,
    InvalidArgumentError,
    OutOfRangeError,
    SeriesError,
    UnsupportedOperationError,
)


@pytest.fixture
def shuffled():
    """values=[10, 20, 30, 40] seen as [20, 40, 10, 30]"""
    return Series.from_index_and_values([1, 3, 0, 2], [10, 20, 30, 40])


def test_from_values_identity_index():
    series = Series.from_values([10, 20, 30])
    assert series.index().to_pylist() == [0, 1, 2]
    assert series.to_pylist() == [10, 20, 30]
    assert series.size() == len(series) == 3


def test_from_values_none():
    with pytest.raises(InvalidArgumentError):
        Series.from_values(None)


@pytest.mark.parametrize("index, values", [(None, [1, 2]), ([0, 1], None)])
def test_from_index_and_values_none(index, values):
    with pytest.raises(InvalidArgumentError):
        Series.from_index_and_values(index, values)


@pytest.mark.parametrize("index", [[0, 3], [-1], [0, None], [0.5]])
def test_from_index_and_values_invalid_index(index):
    with pytest.raises(InvalidArgumentError):
        Series.from_index_and_values(index, [1, 2, 3])


def test_from_values_not_representable():
    with pytest.raises(InvalidArgumentError):
        Series.from_values([1, "a"])


@pytest.mark.parametrize(
    "index, values",
    [
        ([2, 0, 1], [10, 20, 30]),
        ([0, 1, 3], [5, 6, 7, 8]),
        ([1, 1, 1, 1, 1], ["a", "b"]),
        ([], [1, 2, 3]),
    ],
)
def test_get_resolves_through_index(index, values):
    series = Series.from_index_and_values(index, values)
    assert series.size() == len(index)
    for i, idx in enumerate(index):
        assert series.get(i) == values[idx]


@pytest.mark.parametrize("position", [-1, 3, 100])
def test_get_out_of_range(position):
    series = Series.from_values([1, 2, 3])
    with pytest.raises(OutOfRangeError):
        series.get(position)
    with pytest.raises(IndexError):
        series[position]


@pytest.mark.parametrize("position", [1.0, True, "1", None])
def test_get_requires_integer(position):
    series = Series.from_values([1, 2, 3])
    with pytest.raises(InvalidArgumentError):
        series.get(position)
    with pytest.raises(InvalidArgumentError):
        series[position]


def test_errors_are_series_errors():
    with pytest.raises(SeriesError):
        Series.from_values([1]).get(1)


def test_values_is_projected():
    series = Series.from_index_and_values([2, 0, 1], [10, 20, 30])
    assert series.values().to_pylist() == [30, 10, 20]
    assert isinstance(series.values(), pa.Array)


def test_values_roundtrip(shuffled):
    identity = list(range(shuffled.size()))
    rebuilt = Series.from_index_and_values(identity, shuffled.values())
    assert rebuilt.equals(shuffled)
    assert rebuilt.to_pylist() == shuffled.to_pylist()


def test_arrow_buffer_is_not_copied():
    data = pa.array([1, 2, 3])
    series = Series.from_values(data)
    assert series._values is data

    chunked = pa.chunked_array([[1, 2], [3]])
    assert Series.from_values(chunked).to_pylist() == [1, 2, 3]


def test_iteration_is_restartable(shuffled):
    assert list(shuffled) == [20, 40, 10, 30]
    assert list(shuffled) == [20, 40, 10, 30]


def test_unique_only_referenced_values():
    series = Series.from_index_and_values([2, 0, 1], [10, 20, 10])
    assert set(series.unique().to_pylist()) == {10, 20}

    series = Series.from_index_and_values([0, 1], [1, 2, 3])
    assert set(series.unique().to_pylist()) == {1, 2}


def test_with_index_resolves_positions():
    series = Series.from_index_and_values([5, 3, 1], list(range(10, 70, 10)))
    view = series.with_index([2, 0])
    assert view.index().to_pylist() == [1, 5]
    assert view.to_pylist() == [20, 60]
    assert view._values is series._values


def test_with_index_composes(shuffled):
    a = [3, 3, 0, 1]
    b = [2, 0, 1]
    composed = [a[i] for i in b]
    assert shuffled.with_index(a).with_index(b).equals(shuffled.with_index(composed))


@pytest.mark.parametrize("new_index", [[4], [-1], None])
def test_with_index_out_of_range(shuffled, new_index):
    with pytest.raises(InvalidArgumentError):
        shuffled.with_index(new_index)


def test_slicing_is_a_view(shuffled):
    view = shuffled[1:3]
    assert view.to_pylist() == [40, 10]
    assert view._values is shuffled._values
    assert shuffled[::-1].to_pylist() == [30, 10, 40, 20]


def test_sort_by_natural_order():
    series = Series.from_values([30, 10, 20])
    ordered = series.sort_by()
    assert ordered.to_pylist() == [10, 20, 30]
    assert series.to_pylist() == [30, 10, 20]
    assert series.index().to_pylist() == [0, 1, 2]


def test_sort_by_comparator_is_stable():
    words = Series.from_values(["bb", "a", "cc", "d", "ee"])
    by_length = words.sort_by(lambda left, right: len(left) - len(right))
    assert by_length.to_pylist() == ["a", "d", "bb", "cc", "ee"]
    assert words.to_pylist() == ["bb", "a", "cc", "d", "ee"]


def test_sort_by_descending(shuffled):
    assert shuffled.sort_by(descending=True).to_pylist() == [40, 30, 20, 10]
    assert shuffled.sort_by(
        lambda left, right: left - right, descending=True
    ).to_pylist() == [40, 30, 20, 10]


def test_sort_by_shares_buffer(shuffled):
    ordered = shuffled.sort_by()
    assert ordered._values is shuffled._values
    assert ordered.index().to_pylist() == [0, 1, 2, 3]


def test_sort_by_empty():
    assert Series.from_values([]).sort_by().size() == 0


def test_select_by_mask(shuffled):
    mask = Series.from_values([True, False, True, False])
    selected = shuffled.select_by_mask(mask)
    assert selected.to_pylist() == [20, 10]
    assert selected.size() == 2
    assert selected.index().to_pylist() == [1, 0]
    assert selected._values is shuffled._values


def test_select_by_mask_nulls_are_false(shuffled):
    selected = shuffled.select_by_mask([None, True, None, True])
    assert selected.to_pylist() == [40, 30]


def test_select_by_mask_size_mismatch(shuffled):
    with pytest.raises(InvalidArgumentError):
        shuffled.select_by_mask(Series.from_values([True, False]))


def test_select_by_mask_not_boolean(shuffled):
    with pytest.raises(InvalidArgumentError):
        shuffled.select_by_mask([1, 0, 1, 0])


def test_map_values_resets_buffer(shuffled):
    mapped = shuffled.map_values(lambda v: v // 10)
    assert mapped.to_pylist() == [2, 4, 1, 3]
    assert mapped.index().to_pylist() == [0, 1, 2, 3]


def test_combine_with(shuffled):
    other = Series.from_values(["a", "b", "c", "d"])
    combined = shuffled.combine_with(other, lambda n, s: f"{s}{n}")
    assert combined.to_pylist() == ["a20", "b40", "c10", "d30"]
    assert combined.index().to_pylist() == [0, 1, 2, 3]


def test_results_not_representable(shuffled):
    with pytest.raises(InvalidArgumentError):
        shuffled.map_values(lambda v: v if v > 20 else str(v))
    with pytest.raises(InvalidArgumentError):
        shuffled.map_values(lambda v: object())
    with pytest.raises(InvalidArgumentError):
        shuffled.combine_with(shuffled, lambda a, b: object())
    with pytest.raises(InvalidArgumentError):
        shuffled.prefix(lambda acc, v: object(), None)


def test_combine_with_size_mismatch(shuffled):
    with pytest.raises(InvalidArgumentError):
        shuffled.combine_with(Series.from_values([1]), lambda a, b: a + b)


def test_reduce(shuffled):
    assert shuffled.reduce(lambda acc, v: acc + [v], []) == [20, 40, 10, 30]
    assert shuffled.reduce(lambda acc, v: acc + v, 0) == 100


def test_prefix(shuffled):
    scanned = shuffled.prefix(lambda acc, v: acc + v, 0)
    assert scanned.to_pylist() == [20, 60, 70, 100]
    assert Series.from_values([]).prefix(lambda acc, v: acc + v, 0).size() == 0


def test_statistics_use_index(shuffled):
    view = shuffled.with_index([0, 1])  # [20, 40]
    assert view.sum() == 60.0
    assert view.mean() == 30.0
    assert view.min() == 20.0
    assert view.max() == 40.0
    assert view.count() == 2


def test_sum_of_empty_series():
    assert Series.from_values([]).sum() == 0.0


def test_variance_and_std():
    series = Series.from_values([2, 4, 4, 4, 5, 5, 7, 9])
    assert series.var() == pytest.approx(32 / 7)
    assert series.std() == pytest.approx(math.sqrt(32 / 7))


@pytest.mark.parametrize(
    "values, expected",
    [
        ([7, 1, 3], 3),
        ([1, 2, 3, 4], 2.5),
        ([4, 1, 3, 2], 2.5),
        ([5], 5),
    ],
)
def test_median_sorts_values(values, expected):
    assert Series.from_values(values).median() == expected


def test_median_ignores_buffer_order():
    # logical order [9, 1, 5]: unsorted middle would be 1
    series = Series.from_index_and_values([2, 0, 1], [1, 5, 9])
    assert series.median() == 5


@pytest.mark.parametrize("statistic", ["mean", "min", "max", "var", "std", "median"])
def test_statistics_of_empty_series(statistic):
    with pytest.raises(IllegalStateError):
        getattr(Series.from_values([]), statistic)()


@pytest.mark.parametrize("statistic", ["var", "std"])
def test_variance_of_single_value(statistic):
    with pytest.raises(IllegalStateError):
        getattr(Series.from_values([3]), statistic)()


@pytest.mark.parametrize("statistic", ["sum", "mean", "min", "max", "var", "median"])
def test_statistics_of_non_numeric_series(statistic):
    series = Series.from_values(["a", "b"])
    with pytest.raises(UnsupportedOperationError):
        getattr(series, statistic)()


def test_statistics_refuse_nulls_and_booleans():
    with pytest.raises(UnsupportedOperationError):
        Series.from_values([1, None, 3]).sum()
    with pytest.raises(UnsupportedOperationError):
        Series.from_values([True, False]).sum()


def test_custom_coercion_is_kept_by_views():
    series = Series.from_values(["1", "20", "3"], to_float=float)
    assert series.sum() == 24.0
    assert series.sort_by().with_index([0, 1]).max() == 20.0


def test_decimal_values():
    series = Series.from_values([Decimal("1.5"), Decimal("2.5")])
    assert series.mean() == 2.0


def test_str_renders_index_and_values():
    series = Series.from_index_and_values([2, 0], ["x", "y", "z"])
    assert str(series) == "index | value\n----- | -----\n2     | z    \n0     | x    "
