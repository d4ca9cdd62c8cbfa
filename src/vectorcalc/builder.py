"""
AST construction for vectorCalc.

TreeBuilder is the interface a parser's semantic actions call to build a
program tree.  It is also the convenient way to write programs by hand::

    b = TreeBuilder(ctx)
    x = b.declare("x", NUMBER)
    program = b.sequence(
        b.assign(x, b.number(3)),
        b.print_(b.reference("x")),
    )

Identifier types are resolved here, once: a declaration registers the
name in the variable store, a reference copies the type the store holds.
A repeated declaration is reported to the diagnostic sink as
AlreadyDeclared and the existing variable is left as it was.
"""

from typing import Optional

from .ast import (
    AstNode, NumberConstant, VectorConstant, Identifier, Operator, OperatorCode,
)
from .errors import error_already_declared
from .location import SourceSpan
from .runtime.context import ExecutionContext, create_context
from .types import ValueType, resolve_type_name
from .vecmath import vector


class TreeBuilder:
    """Builds AST nodes bound to one execution context."""

    def __init__(self, context: Optional[ExecutionContext] = None):
        self.ctx = context or create_context()

    # --- leaves ---

    def number(self, value: float, span: SourceSpan = None) -> NumberConstant:
        return NumberConstant(float(value), span=span)

    def vector(self, x: float, y: float, z: float, span: SourceSpan = None) -> VectorConstant:
        return VectorConstant(vector(x, y, z), span=span)

    def declare(self, name: str, vtype, span: SourceSpan = None) -> Identifier:
        """An identifier at its declaration site.

        `vtype` is a ValueType or a type keyword such as "Vector".

        The returned node carries `vtype` even when the declaration is
        rejected; evaluation consults the store, which keeps the first
        declaration.
        """
        if not isinstance(vtype, ValueType):
            resolved = resolve_type_name(vtype)
            if resolved is None:
                raise ValueError(f"unknown type name: {vtype!r}")
            vtype = resolved
        if not self.ctx.store.declare(name, vtype):
            self.ctx.report(error_already_declared(name, span))
        return Identifier(name, vtype, span=span)

    def reference(self, name: str, span: SourceSpan = None) -> Identifier:
        """An identifier at a use site, typed from the store."""
        return Identifier(name, self.ctx.store.type_of(name), span=span)

    # --- operators ---

    def operator(self, code: OperatorCode, *operands: AstNode, span: SourceSpan = None) -> Operator:
        return Operator(code, operands, span=span)

    def sequence(self, *statements: AstNode, span: SourceSpan = None) -> AstNode:
        """Statements in order; a single statement is returned unwrapped."""
        if len(statements) == 1:
            return statements[0]
        return self.operator(OperatorCode.SEQUENCE, *statements, span=span)

    def assign(self, target: Identifier, expr: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.ASSIGN, target, expr, span=span)

    def if_(self, condition: AstNode, then: AstNode, else_: AstNode = None,
            span: SourceSpan = None) -> Operator:
        if else_ is None:
            return self.operator(OperatorCode.IF, condition, then, span=span)
        return self.operator(OperatorCode.IF, condition, then, else_, span=span)

    def while_(self, condition: AstNode, body: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.WHILE, condition, body, span=span)

    def print_(self, expr: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.PRINT, expr, span=span)

    def neg(self, expr: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.NEGATE, expr, span=span)

    def add(self, a: AstNode, b: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.ADD, a, b, span=span)

    def sub(self, a: AstNode, b: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.SUBTRACT, a, b, span=span)

    def mul(self, a: AstNode, b: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.MULTIPLY, a, b, span=span)

    def div(self, a: AstNode, b: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.DIVIDE, a, b, span=span)

    def cross(self, a: AstNode, b: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.CROSS, a, b, span=span)

    def dot(self, a: AstNode, b: AstNode, span: SourceSpan = None) -> Operator:
        return self.operator(OperatorCode.DOT, a, b, span=span)

    def compare(self, code, a: AstNode, b: AstNode, span: SourceSpan = None) -> Operator:
        """A comparison given its code or source symbol ('<', '==', ...)."""
        if not isinstance(code, OperatorCode):
            code = OperatorCode.from_symbol(code)
        if not code.is_comparison:
            raise ValueError(f"'{code.symbol}' is not a comparison operator")
        return self.operator(code, a, b, span=span)
