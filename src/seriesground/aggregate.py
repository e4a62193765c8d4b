"""Ready made aggregations for grouped series.

:meth:`seriesground.SeriesGroupBy.aggregate` accepts any
function that given a series returns a summary of it,
this module provides the most common ones.

For example, given the values::

    city,        n_employees
    New York,    10
    New York,    15
    Los Angeles, 8
    Los Angeles, 12
    New York,    20

We could group the employees by city and compute their sum to get::

    city,        total_employees
    New York,    45
    Los Angeles, 20

>>> from seriesground import Series
>>> cities = Series.from_values(["New York", "New York", "Los Angeles", "Los Angeles", "New York"])
>>> employees = Series.from_values([10, 15, 8, 12, 20])
>>> grouped = cities.groupby()
>>> grouped.index().to_pylist()
['New York', 'Los Angeles']
>>> [SumAggregation()(employees.with_index(positions))
...  for positions in grouped.groups().values()]
[45.0, 20.0]
"""

import abc
from typing import Any, Callable

from .series import Series

__all__ = (
    "Aggregation",
    "CountAggregation",
    "SumAggregation",
    "MeanAggregation",
    "MinAggregation",
    "MaxAggregation",
    "MedianAggregation",
    "VarAggregation",
    "StdAggregation",
    "ReduceAggregation",
)


class Aggregation(abc.ABC):
    """Base class for aggregations.

    Every aggregation is a callable that receives
    the series of values of a group and returns
    the aggregated value for that group.
    """

    def __str__(self) -> str:
        return f"{self.__class__.__name__}()"

    __repr__ = __str__

    @abc.abstractmethod
    def __call__(self, series: Series) -> Any: ...


class StatisticAggregation(Aggregation):
    """Provide a base implementation for aggregations that are statistics of the series.

    Subclasses only have to declare which
    method of :class:`Series` computes the statistic.
    """

    statistic: str

    def __call__(self, series: Series) -> Any:
        return getattr(series, self.statistic)()


class CountAggregation(StatisticAggregation):
    """Count the values of a group."""

    statistic = "count"


class SumAggregation(StatisticAggregation):
    """Compute the sum of the values of a group."""

    statistic = "sum"


class MeanAggregation(StatisticAggregation):
    """Compute the mean of the values of a group."""

    statistic = "mean"


class MinAggregation(StatisticAggregation):
    """Compute the min of the values of a group."""

    statistic = "min"


class MaxAggregation(StatisticAggregation):
    """Compute the max of the values of a group."""

    statistic = "max"


class MedianAggregation(StatisticAggregation):
    """Compute the median of the values of a group."""

    statistic = "median"


class VarAggregation(StatisticAggregation):
    """Compute the sample variance of the values of a group.

    Groups with a single value have no variance,
    and will fail with :class:`seriesground.errors.IllegalStateError`.
    """

    statistic = "var"


class StdAggregation(StatisticAggregation):
    """Compute the sample standard deviation of the values of a group."""

    statistic = "std"


class ReduceAggregation(Aggregation):
    """Fold the values of each group with a custom accumulator.

    >>> from seriesground import Series
    >>> words = Series.from_values(["a", "b", "a", "c"])
    >>> words.groupby().aggregate(ReduceAggregation(lambda acc, v: acc + v, "")).to_pylist()
    ['aa', 'b', 'c']
    """

    def __init__(self, accumulator: Callable[[Any, Any], Any], initial: Any) -> None:
        """
        :param accumulator: Function combining the accumulated value with the next value.
        :param initial: The value the accumulation starts from.
        """
        self.accumulator = accumulator
        self.initial = initial

    def __str__(self) -> str:
        return f"ReduceAggregation(initial={self.initial!r})"

    __repr__ = __str__

    def __call__(self, series: Series) -> Any:
        return series.reduce(self.accumulator, self.initial)
