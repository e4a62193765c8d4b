"""SeriesGround

Indexed series of values and their grouping, built on top of Apache Arrow.

A :class:`Series` keeps its values in an immutable arrow array
and accesses them through an index of positions. Filtering, sorting
and slicing a series only compute a new index, the values are
shared by all the series derived from the same data.

A :class:`SeriesGroupBy` partitions the positions of a series
by their value and applies aggregations to each group, producing
new series.

>>> from seriesground import Series
>>> letters = Series.from_values(["b", "a", "b", "c"])
>>> letters.sort_by().to_pylist()
['a', 'b', 'b', 'c']
>>> letters.groupby().aggregate(len).to_pylist()
[2, 1, 1]

The library logs through ``loguru`` and is silent by default,
call ``logger.enable("seriesground")`` to see its debug messages.
"""

from loguru import logger

from .aggregate import (
    Aggregation,
    CountAggregation,
    MaxAggregation,
    MeanAggregation,
    MedianAggregation,
    MinAggregation,
    ReduceAggregation,
    StdAggregation,
    SumAggregation,
    VarAggregation,
)
from .errors import (
    IllegalStateError,
    InvalidArgumentError,
    OutOfRangeError,
    SeriesError,
    UnsupportedOperationError,
)
from .groupby import SeriesGroupBy
from .series import Series, as_float

logger.disable("seriesground")

__all__ = (
    "Series",
    "SeriesGroupBy",
    "as_float",
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
    "SeriesError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "IllegalStateError",
    "UnsupportedOperationError",
)
