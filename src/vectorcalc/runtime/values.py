"""
Runtime values for the vectorCalc interpreter.

A Value pairs the raw Python datum (float, Vector3 or bool) with its
ValueType.  Values are immutable and are only created through the
constructors below, so a Value is never partially initialized.
"""

from dataclasses import dataclass
from typing import Union

from ..types import ValueType, NUMBER, VECTOR, BOOLEAN
from ..vecmath import Vector3, ZERO_VECTOR


@dataclass(frozen=True)
class Value:
    """
    A runtime value with vectorCalc type information.

    The `data` field holds the Python object (float, Vector3 or bool).
    The `type` field holds the ValueType used for operator dispatch.
    """
    data: Union[float, Vector3, bool]
    type: ValueType

    def __repr__(self) -> str:
        return f"Value({self.data!r}, {self.type})"

    @property
    def is_number(self) -> bool:
        return self.type == NUMBER

    @property
    def is_vector(self) -> bool:
        return self.type == VECTOR

    @property
    def is_boolean(self) -> bool:
        return self.type == BOOLEAN


# Convenience constructors

def number_val(x: float) -> Value:
    """Create a number value."""
    return Value(float(x), NUMBER)


def vector_val(v: Vector3) -> Value:
    """Create a vector value."""
    if not isinstance(v, Vector3):
        v = Vector3(*(float(c) for c in v))
    return Value(v, VECTOR)


def bool_val(b: bool) -> Value:
    """Create a boolean value."""
    return Value(bool(b), BOOLEAN)


def default_value(vtype: ValueType) -> Value:
    """The value a freshly declared variable of `vtype` holds."""
    if vtype == NUMBER:
        return number_val(0.0)
    if vtype == VECTOR:
        return vector_val(ZERO_VECTOR)
    raise ValueError(f"variables cannot be declared as {vtype}")


def format_value(value: Value, precision: int = 2) -> str:
    """Render a number or vector the way `print` writes it, without newline.

    Raises ValueError for booleans, which have no printed form.
    """
    if value.type == NUMBER:
        return f"{value.data:.{precision}f}"
    if value.type == VECTOR:
        v = value.data
        return f"{{{v.x:.{precision}f}, {v.y:.{precision}f}, {v.z:.{precision}f}}}"
    raise ValueError(f"cannot format a {value.type} value")
