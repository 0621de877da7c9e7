"""Value model helpers: kind detection and text rendering of JSON values."""

import math
from typing import Any

from .types import InterpolationTypeError, JSONValue, ValueKind


def kind_of(value: Any) -> ValueKind:
    """
    Detect the kind of a single JSON value.

    Args:
        value: Value to analyze

    Returns:
        ValueKind enum indicating the value kind

    Raises:
        TypeError: If value is not JSON-able
    """
    # bool is a subclass of int, so it has to be checked first
    if value is None:
        return ValueKind.NULL
    elif isinstance(value, bool):
        return ValueKind.BOOL
    elif isinstance(value, (int, float)):
        return ValueKind.NUMBER
    elif isinstance(value, str):
        return ValueKind.STRING
    elif isinstance(value, list):
        return ValueKind.ARRAY
    elif isinstance(value, dict):
        return ValueKind.OBJECT
    raise TypeError(f"Not a JSON-able value: {type(value).__name__}")


def format_number(value: float) -> str:
    """Render a number independently of the current locale."""
    if isinstance(value, int):
        return str(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def render(value: JSONValue, where: str = "string") -> str:
    """
    Render a scalar value as text for string interpolation.

    Strings are used as-is, numbers are formatted with format_number,
    and booleans and null become ``[true]``, ``[false]`` and ``[null]``.

    Args:
        value: Value to render
        where: Description of the rendering site, used in error messages

    Returns:
        Text form of the value

    Raises:
        InterpolationTypeError: If value is an array or object
    """
    kind = kind_of(value)
    if kind == ValueKind.STRING:
        return value
    if kind == ValueKind.NUMBER:
        return format_number(value)
    if kind == ValueKind.BOOL:
        return "[true]" if value else "[false]"
    if kind == ValueKind.NULL:
        return "[null]"
    raise InterpolationTypeError(
        f"Cannot interpolate {kind.value} into {where}",
        context={"kind": kind.value},
    )


def describe(value: Any) -> str:
    """Short human-readable description of a value for diagnostics."""
    try:
        kind = kind_of(value)
    except TypeError:
        return type(value).__name__
    if kind == ValueKind.ARRAY:
        return f"array of {len(value)} items"
    if kind == ValueKind.OBJECT:
        return f"object with {len(value)} keys"
    return kind.value
