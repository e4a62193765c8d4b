"""Indexed series of values.

A :class:`Series` is a one dimensional sequence of values
made of two parts:

* A **value buffer**, an immutable :class:`pyarrow.Array`
  holding the actual data.
* An **index**, an immutable :class:`pyarrow.Int64Array` of
  positions into the value buffer.

The index defines both the length and the order of the series,
so the series ``[20, 40, 10]`` might actually be stored as::

    values: [10, 20, 30, 40]
    index:  [1, 3, 0]

This allows to filter, sort and slice a series by only
computing a new index. The value buffer is shared by
all the series derived from it and is never copied::

    values: [10, 20, 30, 40]   <-- shared
    index:  [1, 3, 0]          <-- series
    index:  [0, 1]             <-- series.sort_by()

Only the operations that compute new values (like :meth:`Series.map_values`)
allocate a new buffer.

>>> from seriesground import Series
>>> prices = Series.from_values([30, 10, 20])
>>> prices.sort_by().to_pylist()
[10, 20, 30]
>>> prices.sort_by().index().to_pylist()
[1, 2, 0]
>>> prices.select_by_mask(prices.map_values(lambda v: v > 15)).to_pylist()
[30, 20]
>>> prices.median()
20.0
"""

import functools
import itertools
import math
import numbers
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Self

import pyarrow as pa
import pyarrow.compute as pc

from .errors import (
    IllegalStateError,
    InvalidArgumentError,
    OutOfRangeError,
    UnsupportedOperationError,
)
from .utils import tabulate

if TYPE_CHECKING:
    from .groupby import SeriesGroupBy

__all__ = ("Series", "as_float")


def as_float(value: Any) -> float:
    """Coerce a value of a series to a float.

    This is the default coercion used by the statistics
    of a :class:`Series`. Only real numbers and decimals
    are accepted, booleans are refused even though they
    are integers for Python.

    >>> as_float(3)
    3.0
    >>> as_float("3")
    Traceback (most recent call last):
      ...
    TypeError: '3' is not a number
    """
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        raise TypeError(f"{value!r} is not a number")
    return float(value)


def _as_buffer(values: Iterable[Any]) -> pa.Array:
    """Convert the provided values to an arrow array.

    Arrow arrays are used as they are, so that
    creating a series out of them doesn't copy data.
    """
    if isinstance(values, pa.ChunkedArray):
        return values.combine_chunks()
    if isinstance(values, pa.Array):
        return values
    if not isinstance(values, (list, tuple)):
        values = list(values)
    try:
        return pa.array(values)
    except (pa.ArrowException, TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Unable to store values in a series: {e}") from e


def _as_index(positions: Iterable[int], size: int) -> pa.Int64Array:
    """Convert positions to an index, checking they are all within ``[0, size)``."""
    if isinstance(positions, pa.ChunkedArray):
        positions = positions.combine_chunks()
    if isinstance(positions, pa.Array) and not pa.types.is_integer(positions.type):
        raise InvalidArgumentError(f"Index must contain integers, got {positions.type}")
    if not isinstance(positions, (pa.Array, list, tuple)):
        positions = list(positions)

    try:
        if isinstance(positions, pa.Array):
            index = positions.cast(pa.int64())
        else:
            index = pa.array(positions, type=pa.int64())
    except (pa.ArrowException, TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Index must contain integers: {e}") from e

    if index.null_count:
        raise InvalidArgumentError("Index can't contain null positions.")
    if len(index):
        bounds = pc.min_max(index)
        if bounds["min"].as_py() < 0 or bounds["max"].as_py() >= size:
            raise InvalidArgumentError(
                f"Index values must be within valid range [0, {size})."
            )
    return index


class Series:
    """An immutable sequence of values, accessed through an index.

    Series are usually created from a list of values,
    in which case the index will simply be ``[0, 1, ..., N-1]``:

    >>> s = Series.from_values([10, 20, 30])
    >>> s.index().to_pylist()
    [0, 1, 2]

    But an explicit index can be provided to pick
    the values in a different order, skipping or repeating them:

    >>> s = Series.from_index_and_values([2, 0, 2], [10, 20, 30])
    >>> s.to_pylist()
    [30, 10, 30]

    Statistics like :meth:`mean` or :meth:`std` need to convert
    the values to numbers, the ``to_float`` callable is used for that
    and defaults to :func:`as_float`.
    """

    def __init__(
        self,
        index: Iterable[int] | None,
        values: Iterable[Any],
        to_float: Callable[[Any], float] = as_float,
    ) -> None:
        """
        :param index: The positions in values that constitute the series.
                      ``None`` means all values in their order.
        :param values: The values of the series, an arrow array or any iterable.
        :param to_float: How to convert values to numbers when computing statistics.
        """
        if values is None:
            raise InvalidArgumentError("Values cannot be None.")

        self._values = _as_buffer(values)
        if index is None:
            index = range(len(self._values))
        self._index = _as_index(index, len(self._values))
        self._to_float = to_float

    @classmethod
    def from_values(
        cls, values: Iterable[Any], to_float: Callable[[Any], float] = as_float
    ) -> Self:
        """Create a series containing all the values in their order."""
        if values is None:
            raise InvalidArgumentError("Values cannot be None.")
        return cls(None, values, to_float)

    @classmethod
    def from_index_and_values(
        cls,
        index: Iterable[int],
        values: Iterable[Any],
        to_float: Callable[[Any], float] = as_float,
    ) -> Self:
        """Create a series of the values referenced by index.

        The index can be longer or shorter than values,
        as far as all its entries are valid positions in values.
        """
        if index is None or values is None:
            raise InvalidArgumentError("Values and index cannot be None.")
        return cls(index, values, to_float)

    @property
    def to_float(self) -> Callable[[Any], float]:
        """The coercion used to compute statistics."""
        return self._to_float

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[Any]:
        for position in range(len(self)):
            yield self.get(position)

    def __getitem__(self, key: int | slice) -> Any:
        if isinstance(key, slice):
            return self.with_index(range(*key.indices(len(self))))
        return self.get(key)

    def __str__(self) -> str:
        return tabulate.tabulate({"index": self._index.to_pylist(), "value": self})

    def __repr__(self) -> str:
        return f"Series(type={self._values.type}, size={len(self)})"

    def size(self) -> int:
        """Number of values in the series, which is the length of the index."""
        return len(self._index)

    def get(self, i: int) -> Any:
        """Get the value at logical position ``i``.

        The position is resolved through the index,
        so this returns ``values[index[i]]``.
        Only integers are accepted as positions, booleans are rejected too.
        """
        if isinstance(i, bool) or not isinstance(i, numbers.Integral):
            raise InvalidArgumentError(f"Position must be an integer, got {i!r}")
        if not 0 <= i < len(self):
            raise OutOfRangeError(f"Index out of bounds: {i}")
        return self._values[self._index[i].as_py()].as_py()

    def index(self) -> pa.Int64Array:
        """The positions in the value buffer referenced by the series."""
        return self._index

    def values(self) -> pa.Array:
        """The values of the series, in the order of the index.

        This is a new array and not the underlying value buffer:

        >>> Series.from_index_and_values([2, 0, 1], [10, 20, 30]).values().to_pylist()
        [30, 10, 20]
        """
        return self._values.take(self._index)

    def to_pylist(self) -> list[Any]:
        """The values of the series as a Python list."""
        return self.values().to_pylist()

    def unique(self) -> pa.Array:
        """Distinct values of the series in order of first appearance.

        Values of the buffer that are not referenced by the index are ignored:

        >>> Series.from_index_and_values([0, 1, 3], [1, 2, 3, 2]).unique().to_pylist()
        [1, 2]
        """
        return pc.unique(self.values())

    def equals(self, other: "Series") -> bool:
        """If two series contain the same values in the same order.

        The index and value buffers might differ,
        only the values as seen through the index are compared.
        """
        if not isinstance(other, Series):
            return False
        return self.values().equals(other.values())

    def with_index(self, new_index: Iterable[int]) -> Self:
        """Create a new series picking values by their position in this series.

        The entries of ``new_index`` are positions in this series,
        not in the value buffer. So if the current index is ``[5, 3, 1]``
        a ``new_index`` of ``[2, 0]`` will lead to a series with
        index ``[1, 5]``.

        The new series shares the value buffer with this one.
        """
        if new_index is None:
            raise InvalidArgumentError("The new index cannot be None.")
        positions = _as_index(new_index, len(self))
        return self.__class__(self._index.take(positions), self._values, self._to_float)

    def sort_by(
        self,
        comparator: Callable[[Any, Any], int] | None = None,
        descending: bool = False,
    ) -> Self:
        """Sort the series, the sort is stable.

        :param comparator: A function that given two values returns
                           a negative number, zero or a positive number
                           if the first is lower, equal or greater than the second.
                           When not provided values are compared by their natural order.
        :param descending: If the order should be reversed.
        """
        if len(self) == 0:
            return self.with_index([])

        if comparator is None:
            positions = pc.array_sort_indices(
                self.values(), order="descending" if descending else "ascending"
            )
        else:
            values = self.to_pylist()
            sort_key = functools.cmp_to_key(
                lambda left, right: comparator(values[left], values[right])
            )
            positions = sorted(range(len(values)), key=sort_key, reverse=descending)
        return self.with_index(positions)

    def select_by_mask(self, mask: "Series | Iterable[bool]") -> Self:
        """Keep only the values for which mask is ``True``.

        The mask is a series of booleans with the same size as this series,
        null entries in the mask are treated as ``False``.

        >>> s = Series.from_index_and_values([1, 3, 0, 2], [10, 20, 30, 40])
        >>> s.select_by_mask([True, False, True, False]).to_pylist()
        [20, 10]
        """
        if mask is None:
            raise InvalidArgumentError("Mask cannot be None.")
        if not isinstance(mask, Series):
            mask = Series.from_values(mask)
        if len(mask) != len(self):
            raise InvalidArgumentError("Series sizes must match for selection.")

        mask_values = mask.values()
        if pa.types.is_null(mask_values.type):
            mask_values = mask_values.cast(pa.bool_())
        if not pa.types.is_boolean(mask_values.type):
            raise InvalidArgumentError(
                f"Mask must contain booleans, got {mask_values.type}"
            )
        return self.__class__(
            self._index.filter(mask_values), self._values, self._to_float
        )

    def map_values(
        self, mapper: Callable[[Any], Any], to_float: Callable[[Any], float] = as_float
    ) -> "Series":
        """Create a new series with the result of ``mapper`` for each value.

        The results are stored in a new arrow array, so they must
        all be of a type arrow can store together. Mixed types or
        arbitrary Python objects raise :class:`InvalidArgumentError`.
        """
        return Series.from_values([mapper(value) for value in self], to_float)

    def combine_with(
        self,
        other: "Series",
        combiner: Callable[[Any, Any], Any],
        to_float: Callable[[Any], float] = as_float,
    ) -> "Series":
        """Combine the values of two series of the same size, pair by pair.

        Like for :meth:`map_values` the results must be storable
        in a single arrow array, or :class:`InvalidArgumentError` is raised.

        >>> a = Series.from_values([1, 2, 3])
        >>> a.combine_with(Series.from_values([10, 20, 30]), lambda x, y: x + y).to_pylist()
        [11, 22, 33]
        """
        if other is None:
            raise InvalidArgumentError("The other series cannot be None.")
        if len(other) != len(self):
            raise InvalidArgumentError("Series sizes must match for combination.")
        return Series.from_values(
            [combiner(left, right) for left, right in zip(self, other)], to_float
        )

    def reduce(self, accumulator: Callable[[Any, Any], Any], initial: Any) -> Any:
        """Fold the values from left to right, starting from ``initial``."""
        return functools.reduce(accumulator, self, initial)

    def prefix(
        self,
        op: Callable[[Any, Any], Any],
        initial: Any,
        to_float: Callable[[Any], float] = as_float,
    ) -> "Series":
        """Inclusive scan of the values.

        Each value of the resulting series is the
        accumulation of all the values up to that position.
        The accumulated values must be storable in a single arrow array,
        or :class:`InvalidArgumentError` is raised.

        >>> Series.from_values([1, 2, 3, 4]).prefix(lambda acc, v: acc + v, 0).to_pylist()
        [1, 3, 6, 10]
        """
        scanned = itertools.accumulate(self, op, initial=initial)
        next(scanned)  # skip the initial value
        return Series.from_values(list(scanned), to_float)

    def count(self) -> int:
        """Number of values in the series."""
        return len(self)

    def sum(self) -> float:
        """Sum of the values, ``0.0`` for an empty series."""
        return pc.sum(self._numbers(), min_count=0).as_py()

    def mean(self) -> float:
        """Arithmetic mean of the values."""
        self._require_size(1, "mean")
        return pc.mean(self._numbers()).as_py()

    def min(self) -> float:
        """Lowest value of the series."""
        self._require_size(1, "min")
        return pc.min_max(self._numbers())["min"].as_py()

    def max(self) -> float:
        """Highest value of the series."""
        self._require_size(1, "max")
        return pc.min_max(self._numbers())["max"].as_py()

    def var(self) -> float:
        """Sample variance of the values, computed with ``n - 1`` degrees of freedom."""
        self._require_size(2, "variance")
        return pc.variance(self._numbers(), ddof=1).as_py()

    def std(self) -> float:
        """Sample standard deviation, the square root of :meth:`var`."""
        return math.sqrt(self.var())

    def median(self) -> float:
        """The middle value of the series once sorted.

        For series with an even number of values
        the two values in the middle are averaged.
        """
        self._require_size(1, "median")
        numbers = self._numbers()
        ordered = numbers.take(pc.array_sort_indices(numbers))
        middle = len(ordered) // 2
        if len(ordered) % 2:
            return ordered[middle].as_py()
        return (ordered[middle - 1].as_py() + ordered[middle].as_py()) / 2

    def groupby(self) -> "SeriesGroupBy":
        """Group the positions of the series by their value."""
        from .groupby import SeriesGroupBy

        return SeriesGroupBy.of(self)

    def _require_size(self, minimum: int, statistic: str) -> None:
        if len(self) < minimum:
            raise IllegalStateError(
                f"Cannot compute {statistic} of a series with less than {minimum} values."
            )

    def _numbers(self) -> pa.DoubleArray:
        """The values of the series coerced to floats.

        Numeric arrow arrays are cast directly when the default
        coercion is in use, all other values are passed to ``to_float``.
        """
        projected = self.values()
        value_type = projected.type
        if (
            self._to_float is as_float
            and not projected.null_count
            and (
                pa.types.is_integer(value_type)
                or pa.types.is_floating(value_type)
                or pa.types.is_decimal(value_type)
            )
        ):
            return projected.cast(pa.float64())

        try:
            numbers = pa.array(
                [self._to_float(value) for value in self], type=pa.float64()
            )
        except Exception as e:
            raise UnsupportedOperationError(f"The series is not numeric: {e}") from e
        if numbers.null_count:
            raise UnsupportedOperationError("The series contains values that are not numbers.")
        return numbers
