"""
Variable storage for the vectorCalc interpreter.

One flat, program-wide namespace: no scopes, no shadowing.  A name is
declared once with a type and keeps that type for the whole run; the
first declaration wins and later ones are rejected.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..types import ValueType
from .values import Value, default_value

logger = logging.getLogger(__name__)


@dataclass
class VariableEntry:
    """A declared variable: its fixed type and current value."""
    name: str
    type: ValueType
    value: Value


class VariableStore:
    """
    Maps identifier names to declared type and current value.

    `set` does not type-check; callers compare `type_of(name)` with the
    value's type before storing.
    """

    def __init__(self):
        self._entries: Dict[str, VariableEntry] = {}

    def declare(self, name: str, vtype: ValueType) -> bool:
        """Declare `name` with its default value.

        Returns False, leaving the existing entry untouched, if `name` is
        already declared.
        """
        if not vtype.is_declarable:
            raise ValueError(f"variables cannot be declared as {vtype}")
        if name in self._entries:
            return False
        self._entries[name] = VariableEntry(name, vtype, default_value(vtype))
        logger.debug("declared <%s %s>", vtype, name)
        return True

    def is_declared(self, name: str) -> bool:
        return name in self._entries

    def type_of(self, name: str) -> Optional[ValueType]:
        """The declared type of `name`, or None if undeclared."""
        entry = self._entries.get(name)
        return entry.type if entry is not None else None

    def get(self, name: str) -> Optional[Value]:
        """The current value of `name`, or None if undeclared."""
        entry = self._entries.get(name)
        return entry.value if entry is not None else None

    def set(self, name: str, value: Value) -> bool:
        """Store `value` under `name`; False if `name` is undeclared."""
        entry = self._entries.get(name)
        if entry is None:
            return False
        entry.value = value
        logger.debug("set <%s %s> to %r", entry.type, name, value.data)
        return True

    def names(self) -> List[str]:
        """Declared names in declaration order."""
        return list(self._entries)

    def snapshot(self) -> Dict[str, Value]:
        """A copy of the current name -> value mapping."""
        return {name: entry.value for name, entry in self._entries.items()}

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
