"""Format columns of values into a text table for print.

The `tabulate` function takes a mapping of column names to
equally long sequences of values (lists, arrow arrays or series)
and formats them into a text table.
It will truncate long strings, format floats to 2 decimal places, and limit the number of rows to display.

Example:

    >>> data = {
    ...     "fruit": ["apple", "banana", "apple"],
    ...     "qty": [3, 12, 5],
    ...     "price": [0.5, 0.25, 0.75],
    ... }
    >>> print(tabulate(data))
    fruit  | qty | price
    ------ | --- | -----
    apple  | 3   | 0.50
    banana | 12  | 0.25
    apple  | 5   | 0.75
"""

from typing import Any, Mapping, Sequence

import pyarrow as pa


def tabulate(columns: Mapping[str, Sequence[Any]], max_rows: int = 20) -> str:
    """Format columns of values into a text table.

    Will produce a string like::

        index | value
        ----- | -----
        2     | 30
        0     | 10
    """
    cols = list(columns.keys())
    num_rows = max((len(values) for values in columns.values()), default=0)
    rows = [
        [format_value(columns[c][rowidx]) for c in cols]
        for rowidx in range(min(num_rows, max_rows))
    ]

    colsizes = compute_max_colsize(cols, rows)
    header = [maketablerow(cols, colsizes=colsizes)]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes) for row in rows]

    table = "\n".join(header + separator + textrows)
    if num_rows > max_rows:
        table += f"\n... and {num_rows - max_rows} more rows"
    return table


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    )


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    Arrow scalars are converted to Python values first,
    then floats are formatted to 2 decimal places
    and long strings are truncated.
    """
    if isinstance(v, pa.Scalar):
        v = v.as_py()

    if isinstance(v, float):
        return f"{v:.2f}"
    elif isinstance(v, bool):
        return "true" if v else "false"
    elif v is None:
        return "-"

    v = str(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
