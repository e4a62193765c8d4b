"""Group the values of a series and aggregate them.

Frequently when analysing data it's necessary to
compute statistics like the count, sum or mean of
the values that share some property.

A :class:`SeriesGroupBy` partitions the positions of a series
by their value, for example given the series::

    ["apple", "banana", "apple", "banana", "apple"]

the groups would be::

    apple  -> [0, 2, 4]
    banana -> [1, 3]

Then an aggregation function can be applied to the values of
each group, leading to a new series with one value for each group.
Groups are always kept in the order in which their value was
first found in the series, so counting the values would lead to::

    [3, 2]

>>> from seriesground import Series, CountAggregation
>>> fruits = Series.from_values(["apple", "banana", "apple", "banana", "apple"])
>>> grouped = fruits.groupby()
>>> grouped.groups()
{'apple': (0, 2, 4), 'banana': (1, 3)}
>>> grouped.index().to_pylist()
['apple', 'banana']
>>> grouped.aggregate(CountAggregation()).to_pylist()
[3, 2]
"""

from typing import Any, Callable, Iterator, Self

import pyarrow as pa
import pyarrow.compute as pc
from loguru import logger

from .errors import InvalidArgumentError
from .series import Series
from .utils.inspect import get_qualname

__all__ = ("SeriesGroupBy",)

_NAN_KEY = object()


def _lookup_key(key: Any) -> Any:
    """Make NaN usable as a dictionary key, every NaN maps to the same key."""
    if isinstance(key, float) and key != key:
        return _NAN_KEY
    return key


class SeriesGroupBy:
    """Positions of a series grouped by their value.

    The grouping is computed once, when the object is created,
    and never changes as the series itself is immutable.
    """

    def __init__(self, series: Series) -> None:
        """
        :param series: The series whose values have to be grouped.
        """
        if series is None:
            raise InvalidArgumentError("Series cannot be None.")
        if not isinstance(series, Series):
            raise InvalidArgumentError(
                f"Can only group a Series, got {type(series).__name__}"
            )

        self._series = series
        self._values = series.values()
        self._keys, self._positions = self._group_positions(self._values)
        self._lookup = {
            _lookup_key(key): idx for idx, key in enumerate(self._keys.to_pylist())
        }
        logger.debug(
            "Grouped {} values into {} groups", len(self._values), len(self._keys)
        )

    @classmethod
    def of(cls, series: Series) -> Self:
        """Group the values of ``series``."""
        return cls(series)

    @staticmethod
    def _group_positions(values: pa.Array) -> tuple[pa.Array, list[tuple[int, ...]]]:
        """Find the distinct values and the positions where each one appears.

        Dictionary encoding the values gives us the distinct
        values in order of first appearance and, for each position,
        the index of its value among the distinct ones.
        So a single pass over the indices is enough to collect
        the positions of each group.

        Arrow tells ``0.0`` and ``-0.0`` apart while Python
        considers them equal, so signed zeros are folded into ``0.0``
        before encoding. NaNs are already a single group for Arrow.
        """
        if len(values) == 0:
            return values, []

        if pa.types.is_float32(values.type) or pa.types.is_float64(values.type):
            values = pc.add(values, pa.scalar(0.0, type=values.type))

        try:
            encoded = pc.dictionary_encode(values, null_encoding="encode")
        except pa.ArrowException as e:
            raise InvalidArgumentError(
                f"Values of type {values.type} can't be grouped: {e}"
            ) from e

        positions: list[list[int]] = [[] for _ in range(len(encoded.dictionary))]
        for position, code in enumerate(encoded.indices.to_pylist()):
            positions[code].append(position)
        return encoded.dictionary, [tuple(group) for group in positions]

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[tuple[Any, Series]]:
        """Iterate over the ``(key, series)`` pairs of each group."""
        for key, positions in zip(self._keys.to_pylist(), self._positions):
            yield key, self._subseries(positions)

    def __str__(self) -> str:
        return f"SeriesGroupBy(groups={len(self)}, {self._series!r})"

    __repr__ = __str__

    def series(self) -> Series:
        """The series that was grouped."""
        return self._series

    def groups(self) -> dict[Any, tuple[int, ...]]:
        """The positions in the series of each group, by group value.

        A new dictionary is returned every time, so it can
        be modified without affecting the grouping.
        """
        return dict(zip(self._keys.to_pylist(), self._positions))

    def index(self) -> pa.Array:
        """The distinct values of the series in order of first appearance.

        This is also the order of the rows of an aggregation result.
        """
        return self._keys

    def get_group(self, key: Any) -> Series:
        """The values of a single group as a new series.

        Any NaN finds the NaN group, even though NaN is never equal to itself.
        The dictionary returned by :meth:`groups` doesn't have this property,
        its NaN key can only be found by iterating it.
        """
        try:
            idx = self._lookup[_lookup_key(key)]
        except KeyError:
            raise InvalidArgumentError(f"No group for value: {key!r}") from None
        return self._subseries(self._positions[idx])

    def aggregate(self, aggregator: Callable[[Series], Any]) -> Series:
        """Apply ``aggregator`` to the values of each group.

        The aggregator receives a series with the values
        of the group, in the same order they had in the grouped series,
        and returns a summary of them.

        The result is a series with the value returned
        by the aggregator for each group. The returned values must be
        storable in a single arrow array, so aggregators returning values
        of mixed types or arbitrary Python objects fail with
        :class:`seriesground.errors.InvalidArgumentError`.

        >>> numbers = Series.from_values([5, 10, 5, 20, 10, 5, 20])
        >>> numbers.groupby().aggregate(lambda group: group.reduce(lambda a, b: a + b, 0)).to_pylist()
        [15, 20, 40]
        """
        if aggregator is None:
            raise InvalidArgumentError("Aggregator function cannot be None.")
        if not callable(aggregator):
            raise InvalidArgumentError(
                f"Aggregator must be callable, got {type(aggregator).__name__}"
            )

        logger.debug(
            "Aggregating {} groups with {}", len(self), get_qualname(aggregator)
        )
        return Series.from_values([aggregator(group) for _, group in self])

    def _subseries(self, positions: tuple[int, ...]) -> Series:
        """Build a series with the values at the given positions.

        The values are copied in a new buffer,
        the resulting series is not a view over the grouped series.
        """
        return Series.from_values(
            self._values.take(pa.array(positions, type=pa.int64())),
            self._series.to_float,
        )
