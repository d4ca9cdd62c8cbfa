"""
Source positions for vectorCalc AST nodes and diagnostics.

A parser attaches spans to the nodes it builds; nodes built by hand carry
no span and diagnostics about them simply omit the location.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourceLocation:
    """Represents a position in source code."""
    line: int           # 1-indexed line number
    column: int         # 1-indexed column number
    offset: int = 0     # 0-indexed character offset from start
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a range in source code."""
    start: SourceLocation
    end: SourceLocation

    @classmethod
    def at(cls, line: int, column: int, filename: Optional[str] = None) -> "SourceSpan":
        """A zero-width span at a single position."""
        loc = SourceLocation(line, column, filename=filename)
        return cls(loc, loc)

    def __str__(self) -> str:
        if self.start.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
