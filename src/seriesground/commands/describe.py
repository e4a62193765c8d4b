"""Command line interface for describing a series of values.

Values are collected in a :class:`seriesground.Series`, its statistics
are computed and, optionally, the values are grouped
with :class:`seriesground.SeriesGroupBy` to count them.

The results are printed to the console in a tabular format
using the :mod:`seriesground.utils.tabulate` module.
"""

import argparse
import sys
from typing import Any

from loguru import logger

from seriesground import CountAggregation, Series
from seriesground.errors import IllegalStateError, UnsupportedOperationError
from seriesground.utils import tabulate

NUMERIC_STATISTICS = ("sum", "mean", "min", "max", "std", "median")


def parse_values(texts: list[str]) -> list[Any]:
    """Parse the values as numbers if all of them are numbers.

    Integers are preferred to floats, if any of the values
    is not a number, all values are kept as strings.

    >>> parse_values(["1", "2.5"])
    [1, 2.5]
    >>> parse_values(["1", "apple"])
    ['1', 'apple']
    """
    values = []
    for text in texts:
        try:
            values.append(int(text))
            continue
        except ValueError:
            pass
        try:
            values.append(float(text))
        except ValueError:
            return list(texts)
    return values


def describe(series: Series) -> dict[str, Any]:
    """Compute the statistics of a series.

    Series that are not numeric only report their count,
    statistics that require more values than available are ``None``.
    """
    statistics: dict[str, Any] = {"count": series.count()}
    try:
        series.sum()
    except UnsupportedOperationError:
        return statistics

    for name in NUMERIC_STATISTICS:
        try:
            statistics[name] = getattr(series, name)()
        except IllegalStateError:
            statistics[name] = None
    return statistics


def main(argv: list[str] | None = None) -> None:
    """Parse the command line arguments and describe the values."""
    parser = argparse.ArgumentParser(description="Describe a series of values.")
    parser.add_argument(
        "-g",
        "--group",
        action="store_true",
        help="Also count how many times each distinct value appears.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug messages to stderr."
    )
    parser.add_argument("values", nargs="+", help="The values of the series.")
    args = parser.parse_args(argv)

    if args.verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
        logger.enable("seriesground")

    series = Series.from_values(parse_values(args.values))
    print(series)
    print()

    statistics = describe(series)
    print(
        tabulate.tabulate(
            {"statistic": list(statistics.keys()), "value": list(statistics.values())}
        )
    )

    if args.group:
        grouped = series.groupby()
        counts = grouped.aggregate(CountAggregation())
        print()
        print(tabulate.tabulate({"value": grouped.index().to_pylist(), "count": counts}))


if __name__ == "__main__":
    main()
