"""Exceptions raised by series and groupings.

Every failure is surfaced as a subclass of :class:`SeriesError`,
each one also inheriting from the builtin exception that
describes the same kind of problem. That way callers can
either catch the specific error or rely on the builtin
one they would expect from a Python container::

    try:
        series.get(10)
    except IndexError:
        ...
"""

__all__ = (
    "SeriesError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "IllegalStateError",
    "UnsupportedOperationError",
)


class SeriesError(Exception):
    """Base class for all errors raised by SeriesGround."""

    pass


class InvalidArgumentError(SeriesError, ValueError):
    """A required argument is missing, has a mismatching size or is out of range."""

    pass


class OutOfRangeError(SeriesError, IndexError):
    """A logical position outside of ``[0, size())`` was accessed."""

    pass


class IllegalStateError(SeriesError, RuntimeError):
    """The operation can't be computed on a series of this size."""

    pass


class UnsupportedOperationError(SeriesError, TypeError):
    """The values of the series can't be coerced to numbers."""

    pass
