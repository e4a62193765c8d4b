"""Provide insights about Python objects."""

import functools
import inspect
from typing import Any


def get_qualname(obj: Any) -> str:
    """Get the qualified name of a callable.

    Used to name the aggregators, mappers and other
    functions provided to a series when they are logged.

    Will return something like `module.class.method`
    for methods, `module.function` for functions and
    `module.Class` for callable objects.

    >>> get_qualname(len)
    'builtins.len'
    >>> from seriesground.aggregate import SumAggregation
    >>> get_qualname(SumAggregation())
    'seriesground.aggregate.SumAggregation'
    >>> get_qualname(functools.partial(max, 0))
    'partial(builtins.max)'
    """
    if isinstance(obj, functools.partial):
        return f"partial({get_qualname(obj.func)})"

    module = inspect.getmodule(obj)
    module_name = module.__name__ if module is not None else "<unknown>"
    if inspect.ismethod(obj):
        class_name = obj.__self__.__class__.__name__
        return f"{module_name}.{class_name}.{obj.__name__}"
    elif inspect.isfunction(obj) or inspect.isbuiltin(obj):
        return f"{module_name}.{obj.__qualname__}"
    elif inspect.isclass(obj):
        return f"{module_name}.{obj.__name__}"
    return f"{module_name}.{obj.__class__.__name__}"
