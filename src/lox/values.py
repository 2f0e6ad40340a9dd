"""
Runtime values of the Lox expression language.

Values are plain Python objects: ``str`` (String), ``float`` (Number),
``bool`` (Boolean) and ``None`` (nil). Numbers are always floats.
"""

from __future__ import annotations

import math

Value = str | float | bool | None


def is_number(value: Value) -> bool:
    """True for Lox numbers only; booleans are never numbers."""
    return isinstance(value, float)


def is_truthy(value: Value) -> bool:
    """
    Lox truthiness.

    nil and false are falsy; everything else, including 0 and "", is truthy.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Value, b: Value) -> bool:
    """
    Lox equality.

    Values of different types are never equal (true != 1). NaN is not
    equal to itself.
    """
    if a is None or b is None:
        return a is None and b is None
    if type(a) is not type(b):
        return False
    return a == b


def type_name(value: Value) -> str:
    """Name of the value's type, for error messages."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "number"
    return "string"


def stringify(value: Value) -> str:
    """Render a value the way the prompt displays it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return value
