"""
Type definitions for vectorCalc.

The language has three runtime types.  Only numbers and vectors can be
declared as variables; booleans appear solely as results of comparisons
and control statements.
"""

from enum import Enum
from typing import Optional


class ValueType(Enum):
    """The type of a runtime value or declared variable."""
    NUMBER = "Number"
    VECTOR = "Vector"
    BOOLEAN = "Boolean"

    @property
    def is_declarable(self) -> bool:
        """Whether a variable may be declared with this type."""
        return self is not ValueType.BOOLEAN

    def __str__(self) -> str:
        return self.value


NUMBER = ValueType.NUMBER
VECTOR = ValueType.VECTOR
BOOLEAN = ValueType.BOOLEAN


def resolve_type_name(name: str) -> Optional[ValueType]:
    """Resolve a type keyword (``Number``, ``vector``, ...) to a ValueType.

    Returns None for unknown names.
    """
    lowered = name.strip().lower()
    for vtype in ValueType:
        if vtype.value.lower() == lowered:
            return vtype
    return None
