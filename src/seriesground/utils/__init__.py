"""Generic utilities and helpers.

Helpers that are used by the series and groupings
but are not specifically bound to them, like
rendering columns of values as text or naming
the callables provided by users.
"""

from . import inspect, tabulate

__all__ = ("inspect", "tabulate")
