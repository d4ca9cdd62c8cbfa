"""
Scalar and 3-vector arithmetic for vectorCalc.

All functions are pure; ``Vector3`` is immutable and every operation
returns a new instance.

Equality comes in two flavours.  ``numbers_equal`` / ``vectors_equal``
implement the language's historical one-sided test ``(b - a) < epsilon``,
which is true whenever ``b < a``.  ``numbers_close`` / ``vectors_close``
use the symmetric ``abs(a - b) < epsilon`` and are selected by the
interpreter when ``symmetric_equality`` is configured.
"""

import math
from dataclasses import dataclass
from typing import Iterator

EPSILON = 0.0001


@dataclass(frozen=True)
class Vector3:
    """A 3-component real vector."""
    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))


ZERO_VECTOR = Vector3(0.0, 0.0, 0.0)


def vector(x: float, y: float, z: float) -> Vector3:
    """Make a ``Vector3`` from anything float() accepts."""
    return Vector3(float(x), float(y), float(z))


## componentwise operations
## ------------------------

def add(a: Vector3, b: Vector3) -> Vector3:
    """ ``a + b``"""
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def subtract(a: Vector3, b: Vector3) -> Vector3:
    """ ``a - b``"""
    return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)


def negate(a: Vector3) -> Vector3:
    """ ``-a``"""
    return Vector3(-a.x, -a.y, -a.z)


def scale(a: Vector3, s: float) -> Vector3:
    """ vector ``a`` times scalar ``s``"""
    return Vector3(a.x * s, a.y * s, a.z * s)


## products
## --------

def dot(a: Vector3, b: Vector3) -> float:
    """Inner product of ``a`` and ``b``."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector3, b: Vector3) -> Vector3:
    """Right-handed cross product ``a x b``."""
    return Vector3(a.y * b.z - a.z * b.y,
                   a.z * b.x - a.x * b.z,
                   a.x * b.y - a.y * b.x)


def magnitude(a: Vector3) -> float:
    return math.sqrt(dot(a, a))


## scalar division with IEEE-754 results
## -------------------------------------

def divide(a: float, b: float) -> float:
    """``a / b`` returning +/-inf or nan for a zero divisor instead of raising.

    The sign of an infinite result follows the signs of both operands,
    including a negative zero divisor.
    """
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def reciprocal(s: float) -> float:
    return divide(1.0, s)


## equality within epsilon
## -----------------------

def numbers_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """One-sided comparison: true iff ``(b - a) < epsilon``."""
    return (b - a) < epsilon


def vectors_equal(a: Vector3, b: Vector3, epsilon: float = EPSILON) -> bool:
    """Componentwise ``numbers_equal``."""
    return (numbers_equal(a.x, b.x, epsilon) and
            numbers_equal(a.y, b.y, epsilon) and
            numbers_equal(a.z, b.z, epsilon))


def numbers_close(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """ are two scalars the same within epsilon"""
    return abs(a - b) < epsilon


def vectors_close(a: Vector3, b: Vector3, epsilon: float = EPSILON) -> bool:
    """Componentwise ``numbers_close``."""
    return (numbers_close(a.x, b.x, epsilon) and
            numbers_close(a.y, b.y, epsilon) and
            numbers_close(a.z, b.z, epsilon))
