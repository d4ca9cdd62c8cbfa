"""
Abstract Syntax Tree (AST) node definitions for vectorCalc.

A program is a tree of four node kinds: number constants, vector
constants, identifier references and operator nodes.  Statements and
expressions share the same representation; an operator code selects the
behaviour (arithmetic, comparison, assignment, control flow, print).

Nodes are frozen once built and each operator node owns a tuple of its
children, so trees never share subtrees and cannot contain cycles.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Any, List

from .location import SourceSpan
from .types import ValueType
from .vecmath import Vector3


# =============================================================================
# Operator codes
# =============================================================================

class OperatorCode(Enum):
    """Operators, with their source symbol and operand count bounds.

    A `None` upper bound means any number of operands at or above the
    lower bound.
    """
    SEQUENCE = (";", 2, None)
    ASSIGN = ("=", 2, 2)
    IF = ("if", 2, 3)
    WHILE = ("while", 2, 2)
    PRINT = ("print", 1, 1)
    NEGATE = ("neg", 1, 1)
    ADD = ("+", 2, 2)
    SUBTRACT = ("-", 2, 2)
    MULTIPLY = ("*", 2, 2)
    DIVIDE = ("/", 2, 2)
    CROSS = ("cross", 2, 2)
    DOT = ("dot", 2, 2)
    LESS = ("<", 2, 2)
    GREATER = (">", 2, 2)
    GREATER_EQUAL = (">=", 2, 2)
    LESS_EQUAL = ("<=", 2, 2)
    EQUAL = ("==", 2, 2)
    NOT_EQUAL = ("!=", 2, 2)

    def __init__(self, symbol: str, min_operands: int, max_operands: Optional[int]):
        self.symbol = symbol
        self.min_operands = min_operands
        self.max_operands = max_operands

    def accepts(self, count: int) -> bool:
        """Whether an operator node with `count` operands is well formed."""
        if count < self.min_operands:
            return False
        return self.max_operands is None or count <= self.max_operands

    @property
    def is_ordering(self) -> bool:
        """<, >, >=, <= : defined on numbers only."""
        return self in _ORDERING

    @property
    def is_equality(self) -> bool:
        return self in (OperatorCode.EQUAL, OperatorCode.NOT_EQUAL)

    @property
    def is_comparison(self) -> bool:
        return self.is_ordering or self.is_equality

    @classmethod
    def from_symbol(cls, symbol: str) -> "OperatorCode":
        """Look up an operator code by its source symbol."""
        for code in cls:
            if code.symbol == symbol:
                return code
        raise ValueError(f"unknown operator symbol: {symbol!r}")


_ORDERING = frozenset({
    OperatorCode.LESS, OperatorCode.GREATER,
    OperatorCode.GREATER_EQUAL, OperatorCode.LESS_EQUAL,
})


# =============================================================================
# Nodes
# =============================================================================

@dataclass(frozen=True)
class AstNode:
    """Base class for all AST nodes."""
    span: Optional[SourceSpan] = field(default=None, kw_only=True, compare=False, repr=False)

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)

    def children(self) -> Tuple["AstNode", ...]:
        return ()


class AstVisitor:
    """Base class for AST visitors."""

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


@dataclass(frozen=True)
class NumberConstant(AstNode):
    """A scalar literal."""
    value: float


@dataclass(frozen=True)
class VectorConstant(AstNode):
    """A vector literal, e.g. {1, 0, 0}."""
    value: Vector3


@dataclass(frozen=True)
class Identifier(AstNode):
    """A variable reference.

    `declared_type` is fixed when the node is built: given at a
    declaration site, looked up in the variable store at a reference
    site.  It is None when the name was unknown at build time.
    """
    name: str
    declared_type: Optional[ValueType] = None


@dataclass(frozen=True)
class Operator(AstNode):
    """An operator applied to an ordered tuple of operand nodes."""
    code: OperatorCode
    operands: Tuple[AstNode, ...] = ()

    def __post_init__(self):
        # Accept any sequence but always own an immutable tuple.
        object.__setattr__(self, "operands", tuple(self.operands))
        if not self.code.accepts(len(self.operands)):
            raise ValueError(
                f"operator '{self.code.symbol}' does not take {len(self.operands)} operand(s)"
            )
        for operand in self.operands:
            if not isinstance(operand, AstNode):
                raise ValueError(f"operand of '{self.code.symbol}' is not an AST node: {operand!r}")

    def children(self) -> Tuple[AstNode, ...]:
        return self.operands

    def operand(self, index: int) -> Optional[AstNode]:
        """The operand at `index`, or None when absent (e.g. a missing else)."""
        if index < len(self.operands):
            return self.operands[index]
        return None


# =============================================================================
# Visitor Helpers
# =============================================================================

def walk(node: AstNode):
    """Yield `node` and all of its descendants, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def depth(node: AstNode) -> int:
    """Nesting depth of the tree; evaluation recurses this deep."""
    kids = node.children()
    if not kids:
        return 1
    return 1 + max(depth(child) for child in kids)


class FormatVisitor(AstVisitor):
    """Debug visitor that renders the AST structure as indented text."""

    def __init__(self, indent: int = 0):
        self.indent = indent
        self.lines: List[str] = []

    def _emit(self, text: str) -> None:
        self.lines.append("  " * self.indent + text)

    def visit_NumberConstant(self, node: NumberConstant) -> None:
        self._emit(f"NumberConstant {node.value!r}")

    def visit_VectorConstant(self, node: VectorConstant) -> None:
        v = node.value
        self._emit(f"VectorConstant {{{v.x!r}, {v.y!r}, {v.z!r}}}")

    def visit_Identifier(self, node: Identifier) -> None:
        self._emit(f"Identifier {node.name} : {node.declared_type or '?'}")

    def visit_Operator(self, node: Operator) -> None:
        self._emit(f"Operator {node.code.name} ({node.code.symbol})")
        self.indent += 1
        for operand in node.operands:
            operand.accept(self)
        self.indent -= 1


def format_ast(node: AstNode) -> str:
    """Render an AST node as indented text for debugging."""
    visitor = FormatVisitor()
    node.accept(visitor)
    return "\n".join(visitor.lines)


def print_ast(node: AstNode) -> None:
    """Print an AST node for debugging."""
    print(format_ast(node))
