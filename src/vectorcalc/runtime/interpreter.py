"""
Tree-walking interpreter for vectorCalc.

Evaluates AST nodes to Values.  Evaluation is a plain recursion whose
depth equals the nesting depth of the tree; the first error raised by any
node unwinds the whole call chain.
"""

import io
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, TextIO, Union

from .values import Value, number_val, vector_val, bool_val, format_value
from .context import ExecutionContext, create_context
from .. import vecmath
from ..ast import (
    AstNode, NumberConstant, VectorConstant, Identifier, Operator, OperatorCode,
)
from ..errors import (
    Diagnostic, ErrorSeverity, VectorCalcError,
    error_not_declared, error_type_mismatch, error_incompatible_assignment,
    error_undefined_operation, error_unsupported_operation,
    error_invalid_print_argument, error_out_of_memory, warning_run_stopped,
)
from ..types import NUMBER, VECTOR, BOOLEAN

logger = logging.getLogger(__name__)

_INCOMPATIBLE = "incompatible types: {} and {}"


class Interpreter:
    """
    Tree-walking interpreter for vectorCalc.

    Evaluates AST nodes by dispatching on node class, then on operator
    code for operator nodes.
    """

    _OPERATOR_HANDLERS: Dict[OperatorCode, str] = {
        OperatorCode.SEQUENCE: "_exec_sequence",
        OperatorCode.ASSIGN: "_exec_assign",
        OperatorCode.IF: "_exec_if",
        OperatorCode.WHILE: "_exec_while",
        OperatorCode.PRINT: "_exec_print",
        OperatorCode.NEGATE: "_eval_negate",
        OperatorCode.ADD: "_eval_add_subtract",
        OperatorCode.SUBTRACT: "_eval_add_subtract",
        OperatorCode.MULTIPLY: "_eval_multiply",
        OperatorCode.DIVIDE: "_eval_divide",
        OperatorCode.CROSS: "_eval_cross",
        OperatorCode.DOT: "_eval_dot",
        OperatorCode.LESS: "_eval_ordering",
        OperatorCode.GREATER: "_eval_ordering",
        OperatorCode.GREATER_EQUAL: "_eval_ordering",
        OperatorCode.LESS_EQUAL: "_eval_ordering",
        OperatorCode.EQUAL: "_eval_equality",
        OperatorCode.NOT_EQUAL: "_eval_equality",
    }

    def __init__(self, context: Optional[ExecutionContext] = None):
        """
        Initialize the interpreter.

        Args:
            context: Store, diagnostics, output and config to run against;
                a fresh context writing to stdout when omitted
        """
        self.ctx = context or create_context()
        config = self.ctx.config
        if config.symmetric_equality:
            self._numbers_equal = vecmath.numbers_close
            self._vectors_equal = vecmath.vectors_close
        else:
            self._numbers_equal = vecmath.numbers_equal
            self._vectors_equal = vecmath.vectors_equal

    @property
    def store(self):
        return self.ctx.store

    def evaluate(self, node: AstNode) -> Value:
        """Evaluate a node to produce a Value."""
        if isinstance(node, NumberConstant):
            return number_val(node.value)
        elif isinstance(node, VectorConstant):
            return vector_val(node.value)
        elif isinstance(node, Identifier):
            return self._eval_identifier(node)
        elif isinstance(node, Operator):
            handler = getattr(self, self._OPERATOR_HANDLERS[node.code])
            return handler(node)
        else:
            raise ValueError(f"Unknown node type: {type(node).__name__}")

    def _eval_identifier(self, ident: Identifier) -> Value:
        """Evaluate an identifier (variable lookup)."""
        value = self.store.get(ident.name)
        if value is None:
            raise error_not_declared(ident.name, ident.span)
        return value

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def _exec_sequence(self, op: Operator) -> Value:
        """Evaluate statements left to right; the last result is kept."""
        result = None
        for stmt in op.operands:
            result = self.evaluate(stmt)
        return result

    def _exec_assign(self, op: Operator) -> Value:
        target, expr = op.operands
        if not isinstance(target, Identifier):
            raise error_type_mismatch(
                f"cannot assign to a {type(target).__name__}; the target must be a variable",
                op.span,
            )
        rhs = self.evaluate(expr)

        declared = self.store.type_of(target.name)
        if declared is None:
            raise error_not_declared(target.name, target.span)
        if declared != rhs.type:
            raise error_incompatible_assignment(target.name, str(declared), str(rhs.type), op.span)

        self.store.set(target.name, rhs)
        return bool_val(False)

    def _condition(self, op: Operator, statement: str) -> bool:
        condition = self.evaluate(op.operands[0])
        if condition.type != BOOLEAN:
            raise error_type_mismatch(
                f"{statement} failed, the condition is {condition.type}, not Boolean",
                op.operands[0].span or op.span,
            )
        return condition.data

    def _exec_if(self, op: Operator) -> Value:
        if self._condition(op, "if"):
            return self.evaluate(op.operands[1])
        else_branch = op.operand(2)
        if else_branch is not None:
            return self.evaluate(else_branch)
        return bool_val(False)

    def _exec_while(self, op: Operator) -> Value:
        body = op.operands[1]
        while self._condition(op, "while"):
            self.evaluate(body)
        return bool_val(False)

    def _exec_print(self, op: Operator) -> Value:
        subject = op.operands[0]
        value = self.evaluate(subject)
        if value.type == BOOLEAN:
            raise error_invalid_print_argument(str(value.type), subject.span or op.span)

        prefix = f"{subject.name} = " if isinstance(subject, Identifier) else ""
        self.ctx.output.write(f"{prefix}{format_value(value, self.ctx.config.precision)}\n")
        return bool_val(True)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _operands(self, op: Operator):
        return self.evaluate(op.operands[0]), self.evaluate(op.operands[1])

    def _reject_booleans(self, op: Operator, left: Value, right: Value) -> None:
        if left.type == BOOLEAN or right.type == BOOLEAN:
            raise error_type_mismatch(
                f"operator '{op.code.symbol}' is not defined for Boolean operands",
                op.span,
            )

    def _eval_negate(self, op: Operator) -> Value:
        operand = self.evaluate(op.operands[0])
        if operand.type == VECTOR:
            return vector_val(vecmath.negate(operand.data))
        elif operand.type == NUMBER:
            return number_val(-operand.data)
        raise error_type_mismatch(f"wrong argument for negation: {operand.type}", op.span)

    def _eval_add_subtract(self, op: Operator) -> Value:
        left, right = self._operands(op)
        self._reject_booleans(op, left, right)
        if left.type != right.type:
            raise error_type_mismatch(_INCOMPATIBLE.format(left.type, right.type), op.span)

        if left.type == VECTOR:
            if op.code == OperatorCode.ADD:
                return vector_val(vecmath.add(left.data, right.data))
            return vector_val(vecmath.subtract(left.data, right.data))
        if op.code == OperatorCode.ADD:
            return number_val(left.data + right.data)
        return number_val(left.data - right.data)

    def _eval_multiply(self, op: Operator) -> Value:
        left, right = self._operands(op)
        self._reject_booleans(op, left, right)

        if left.type == NUMBER and right.type == NUMBER:
            return number_val(left.data * right.data)
        elif left.type == NUMBER:
            return vector_val(vecmath.scale(right.data, left.data))
        elif right.type == NUMBER:
            return vector_val(vecmath.scale(left.data, right.data))
        raise error_undefined_operation(
            "vector multiplication is undefined",
            op.span,
            hints=["use cross(a, b) or dot(a, b) to multiply two vectors"],
        )

    def _eval_divide(self, op: Operator) -> Value:
        left, right = self._operands(op)
        self._reject_booleans(op, left, right)

        if right.type == VECTOR:
            raise error_undefined_operation(
                f"division of a {left.type} by a Vector is undefined", op.span)
        if self.ctx.config.guard_division and right.data == 0:
            raise error_undefined_operation("division by zero", op.span)

        if left.type == NUMBER:
            return number_val(vecmath.divide(left.data, right.data))
        return vector_val(vecmath.scale(left.data, vecmath.reciprocal(right.data)))

    def _vector_operands(self, op: Operator):
        left, right = self._operands(op)
        if left.type != VECTOR or right.type != VECTOR:
            raise error_type_mismatch(
                f"{op.code.symbol} requires two Vectors, got {left.type} and {right.type}",
                op.span,
            )
        return left.data, right.data

    def _eval_cross(self, op: Operator) -> Value:
        return vector_val(vecmath.cross(*self._vector_operands(op)))

    def _eval_dot(self, op: Operator) -> Value:
        return number_val(vecmath.dot(*self._vector_operands(op)))

    # -------------------------------------------------------------------------
    # Comparisons
    # -------------------------------------------------------------------------

    _ORDERINGS: Dict[OperatorCode, Callable[[float, float], bool]] = {
        OperatorCode.LESS: lambda a, b: a < b,
        OperatorCode.GREATER: lambda a, b: a > b,
        OperatorCode.GREATER_EQUAL: lambda a, b: a >= b,
        OperatorCode.LESS_EQUAL: lambda a, b: a <= b,
    }

    def _eval_ordering(self, op: Operator) -> Value:
        left, right = self._operands(op)
        self._reject_booleans(op, left, right)

        if left.type == VECTOR and right.type == VECTOR:
            raise error_unsupported_operation(
                f"operation '{op.code.symbol}' can't be performed on vectors", op.span)
        if left.type != right.type:
            raise error_type_mismatch(_INCOMPATIBLE.format(left.type, right.type), op.span)
        return bool_val(self._ORDERINGS[op.code](left.data, right.data))

    def _eval_equality(self, op: Operator) -> Value:
        left, right = self._operands(op)
        self._reject_booleans(op, left, right)
        if left.type != right.type:
            raise error_type_mismatch(_INCOMPATIBLE.format(left.type, right.type), op.span)

        if left.type == VECTOR:
            equal = self._vectors_equal(left.data, right.data, self.ctx.config.epsilon)
        else:
            equal = self._numbers_equal(left.data, right.data, self.ctx.config.epsilon)
        if op.code == OperatorCode.NOT_EQUAL:
            return bool_val(not equal)
        return bool_val(equal)


# =============================================================================
# Program execution
# =============================================================================

@dataclass
class ExecutionResult:
    """Result of running a vectorCalc program."""
    success: bool
    output: str = ""
    diagnostics: List[Diagnostic] = field(default_factory=list)
    statements_run: int = 0
    stopped_early: bool = False

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == ErrorSeverity.ERROR)

    @property
    def error_message(self) -> Optional[str]:
        """The first error message, if any."""
        for d in self.diagnostics:
            if d.severity == ErrorSeverity.ERROR:
                return d.message
        return None

    def summary(self) -> str:
        """The closing line a host prints after a run."""
        count = self.error_count
        if count == 0:
            return "... dataset successfully created."
        if count == 1:
            return "1 error found; no dataset created."
        return f"{count} errors found; no dataset created."

    def write_to(self, stream: TextIO) -> bool:
        """Write the program output to `stream` unless the run failed."""
        if not self.success:
            return False
        stream.write(self.output)
        return True


def top_level_statements(program: Union[AstNode, Iterable[AstNode]]) -> List[AstNode]:
    """Split a program into the statements a host runs one at a time.

    A top-level sequence is flattened so that a failing statement does not
    prevent later ones from running.
    """
    if not isinstance(program, AstNode):
        statements = []
        for node in program:
            statements.extend(top_level_statements(node))
        return statements
    if isinstance(program, Operator) and program.code == OperatorCode.SEQUENCE:
        return top_level_statements(program.operands)
    return [program]


def execute(
    program: Union[AstNode, Iterable[AstNode]],
    context: Optional[ExecutionContext] = None,
) -> ExecutionResult:
    """
    Run a program statement by statement.

    Each failing statement is recorded in the context's diagnostics and
    execution moves on to the next one.  An out-of-memory condition, or
    reaching the configured error limit, stops the run; the latter is
    recorded as a RunStopped warning naming the skipped statements.  Output is
    buffered and only exposed when no error was recorded, including any
    recorded while the tree was being built.

    Args:
        program: A root node or a sequence of top-level statements
        context: The context the tree was built against (fresh if omitted)

    Returns:
        ExecutionResult with output and diagnostics
    """
    ctx = context or create_context()
    buffer = io.StringIO()
    sink, ctx.output = ctx.output, buffer
    interpreter = Interpreter(ctx)

    statements = top_level_statements(program)
    ran = 0
    stopped = False
    try:
        for stmt in statements:
            if ctx.diagnostics.should_stop:
                logger.warning("stopping after %d error(s)", ctx.diagnostics.error_count)
                ctx.diagnostics.add(
                    warning_run_stopped(ctx.diagnostics.error_count, len(statements) - ran))
                stopped = True
                break
            ran += 1
            try:
                interpreter.evaluate(stmt)
            except VectorCalcError as e:
                logger.debug("statement %d failed: %s", ran, e.diagnostic.message)
                ctx.report(e)
            except MemoryError:
                logger.warning("out of memory in statement %d; aborting", ran)
                ctx.report(error_out_of_memory(stmt.span))
                stopped = True
                break
    finally:
        ctx.output = sink

    success = not ctx.has_errors
    return ExecutionResult(
        success=success,
        output=buffer.getvalue() if success else "",
        diagnostics=list(ctx.diagnostics.diagnostics),
        statements_run=ran,
        stopped_early=stopped,
    )


def evaluate(node: AstNode, context: Optional[ExecutionContext] = None) -> Value:
    """Evaluate a single node against `context` (fresh if omitted)."""
    return Interpreter(context).evaluate(node)
