"""
Tests for the vectorCalc tree-walking interpreter.
"""

import io
import math

import pytest

from vectorcalc import (
    TreeBuilder, Interpreter, InterpreterConfig, create_context,
    ErrorKind, VectorCalcError, OperandTypeError, OperationError, SemanticError, OutputError,
    Identifier, Operator, OperatorCode, NumberConstant,
    NUMBER, VECTOR, BOOLEAN, Vector3,
    number_val, vector_val, bool_val,
)


def make(config=None):
    """A builder and interpreter sharing a context that prints to a buffer."""
    ctx = create_context(config=config, output=io.StringIO())
    return TreeBuilder(ctx), Interpreter(ctx)


def output_of(interp):
    return interp.ctx.output.getvalue()


def raises_kind(interp, node, kind):
    with pytest.raises(VectorCalcError) as excinfo:
        interp.evaluate(node)
    assert excinfo.value.kind == kind
    return excinfo.value


# --- Leaves ---

class TestLeaves:
    """Test constants and identifier lookup."""

    def test_number_constant(self):
        b, interp = make()
        assert interp.evaluate(b.number(2.5)) == number_val(2.5)

    def test_vector_constant(self):
        b, interp = make()
        assert interp.evaluate(b.vector(1, 2, 3)) == vector_val((1, 2, 3))

    def test_identifier_returns_stored_value(self):
        b, interp = make()
        b.declare("v", VECTOR)
        interp.store.set("v", vector_val((4, 5, 6)))
        assert interp.evaluate(b.reference("v")) == vector_val((4, 5, 6))

    def test_undeclared_identifier(self):
        """Referencing an undeclared identifier fails NotDeclared."""
        b, interp = make()
        err = raises_kind(interp, b.reference("ghost"), ErrorKind.NOT_DECLARED)
        assert isinstance(err, SemanticError)
        assert "ghost" in err.diagnostic.message

    def test_unknown_node_type(self):
        _, interp = make()
        with pytest.raises(ValueError):
            interp.evaluate("not a node")


# --- Statements ---

class TestAssignment:
    """Test assignment semantics."""

    def test_assign_stores_value(self):
        b, interp = make()
        x = b.declare("x", NUMBER)
        result = interp.evaluate(b.assign(x, b.number(3)))
        assert result == bool_val(False)
        assert interp.store.get("x") == number_val(3.0)

    def test_assign_expression_result(self):
        b, interp = make()
        v = b.declare("v", VECTOR)
        interp.evaluate(b.assign(v, b.add(b.vector(1, 1, 1), b.vector(1, 2, 3))))
        assert interp.store.get("v").data == Vector3(2.0, 3.0, 4.0)

    def test_type_mismatch_leaves_value_unchanged(self):
        """Assigning a Vector to a Number variable fails and keeps the old value."""
        b, interp = make()
        x = b.declare("x", NUMBER)
        interp.evaluate(b.assign(x, b.number(9)))
        err = raises_kind(interp, b.assign(x, b.vector(1, 2, 3)), ErrorKind.TYPE_MISMATCH)
        assert isinstance(err, OperandTypeError)
        assert interp.store.get("x") == number_val(9.0)

    def test_boolean_cannot_be_assigned(self):
        b, interp = make()
        x = b.declare("x", NUMBER)
        raises_kind(interp, b.assign(x, b.compare("<", b.number(1), b.number(2))),
                    ErrorKind.TYPE_MISMATCH)

    def test_assign_to_undeclared(self):
        b, interp = make()
        raises_kind(interp, b.assign(b.reference("nope"), b.number(1)), ErrorKind.NOT_DECLARED)

    def test_target_is_not_read(self):
        """The assignment target is a name, not a value read."""
        b, interp = make()
        x = b.declare("x", NUMBER)
        interp.evaluate(b.assign(x, b.add(b.reference("x"), b.number(1))))
        interp.evaluate(b.assign(x, b.add(b.reference("x"), b.number(1))))
        assert interp.store.get("x") == number_val(2.0)

    def test_target_must_be_identifier(self):
        _, interp = make()
        node = Operator(OperatorCode.ASSIGN, (NumberConstant(1.0), NumberConstant(2.0)))
        raises_kind(interp, node, ErrorKind.TYPE_MISMATCH)


class TestSequence:
    """Test statement sequencing."""

    def test_result_is_last_statement(self):
        b, interp = make()
        assert interp.evaluate(b.sequence(b.number(1), b.number(2))) == number_val(2.0)

    def test_left_to_right(self):
        b, interp = make()
        x = b.declare("x", NUMBER)
        program = b.sequence(
            b.assign(x, b.number(1)),
            b.assign(x, b.mul(b.reference("x"), b.number(10))),
            b.reference("x"),
        )
        assert interp.evaluate(program) == number_val(10.0)


class TestIf:
    """Test conditionals."""

    def test_then_branch(self):
        b, interp = make()
        node = b.if_(b.compare("<", b.number(1), b.number(2)), b.number(10), b.number(20))
        assert interp.evaluate(node) == number_val(10.0)

    def test_else_branch(self):
        b, interp = make()
        node = b.if_(b.compare(">", b.number(1), b.number(2)), b.number(10), b.number(20))
        assert interp.evaluate(node) == number_val(20.0)

    def test_false_without_else(self):
        b, interp = make()
        node = b.if_(b.compare(">", b.number(1), b.number(2)), b.number(10))
        assert interp.evaluate(node) == bool_val(False)

    def test_condition_must_be_boolean(self):
        b, interp = make()
        raises_kind(interp, b.if_(b.number(1), b.number(10)), ErrorKind.TYPE_MISMATCH)

    def test_untaken_branch_is_not_evaluated(self):
        b, interp = make()
        node = b.if_(b.compare("<", b.number(1), b.number(2)),
                     b.number(1), b.reference("undeclared"))
        assert interp.evaluate(node) == number_val(1.0)


class TestWhile:
    """Test loops."""

    def test_counts_down(self):
        b, interp = make()
        n = b.declare("n", NUMBER)
        interp.evaluate(b.assign(n, b.number(3)))
        total = b.declare("total", NUMBER)
        loop = b.while_(
            b.compare(">", b.reference("n"), b.number(0)),
            b.sequence(
                b.assign(total, b.add(b.reference("total"), b.reference("n"))),
                b.assign(n, b.sub(b.reference("n"), b.number(1))),
            ),
        )
        assert interp.evaluate(loop) == bool_val(False)
        assert interp.store.get("total") == number_val(6.0)
        assert interp.store.get("n") == number_val(0.0)

    def test_false_condition_skips_body(self):
        b, interp = make()
        loop = b.while_(b.compare("<", b.number(2), b.number(1)), b.print_(b.number(1)))
        assert interp.evaluate(loop) == bool_val(False)
        assert output_of(interp) == ""

    def test_condition_must_be_boolean(self):
        b, interp = make()
        raises_kind(interp, b.while_(b.vector(1, 0, 0), b.number(1)), ErrorKind.TYPE_MISMATCH)


class TestPrint:
    """Test output formatting."""

    def test_print_number(self):
        b, interp = make()
        assert interp.evaluate(b.print_(b.number(3.14159))) == bool_val(True)
        assert output_of(interp) == "3.14\n"

    def test_print_vector(self):
        b, interp = make()
        interp.evaluate(b.print_(b.vector(1, -2.5, 0.333)))
        assert output_of(interp) == "{1.00, -2.50, 0.33}\n"

    def test_identifier_prefix(self):
        b, interp = make()
        v = b.declare("v", VECTOR)
        interp.evaluate(b.assign(v, b.vector(1, 2, 3)))
        interp.evaluate(b.print_(b.reference("v")))
        assert output_of(interp) == "v = {1.00, 2.00, 3.00}\n"

    def test_expression_has_no_prefix(self):
        b, interp = make()
        b.declare("x", NUMBER)
        interp.evaluate(b.print_(b.neg(b.reference("x"))))
        assert output_of(interp) == "-0.00\n"

    def test_print_boolean_fails(self):
        b, interp = make()
        err = raises_kind(interp, b.print_(b.compare("==", b.number(1), b.number(1))),
                          ErrorKind.INVALID_PRINT_ARGUMENT)
        assert isinstance(err, OutputError)
        assert output_of(interp) == ""

    def test_failed_identifier_print_writes_nothing(self):
        b, interp = make()
        raises_kind(interp, b.print_(b.reference("ghost")), ErrorKind.NOT_DECLARED)
        assert output_of(interp) == ""

    def test_configured_precision(self):
        b, interp = make(InterpreterConfig(precision=3))
        interp.evaluate(b.print_(b.number(1)))
        assert output_of(interp) == "1.000\n"


# --- Arithmetic ---

class TestNegate:

    def test_negate_number(self):
        b, interp = make()
        assert interp.evaluate(b.neg(b.number(2))) == number_val(-2.0)

    def test_negate_vector(self):
        b, interp = make()
        assert interp.evaluate(b.neg(b.vector(1, -2, 3))) == vector_val((-1, 2, -3))

    def test_negate_boolean(self):
        b, interp = make()
        raises_kind(interp, b.neg(b.compare("<", b.number(1), b.number(2))),
                    ErrorKind.TYPE_MISMATCH)


class TestAddSubtract:

    def test_numbers(self):
        b, interp = make()
        assert interp.evaluate(b.add(b.number(2), b.number(3))) == number_val(5.0)
        assert interp.evaluate(b.sub(b.number(2), b.number(3))) == number_val(-1.0)

    def test_vectors(self):
        b, interp = make()
        assert interp.evaluate(b.add(b.vector(1, 2, 3), b.vector(1, 1, 1))) == vector_val((2, 3, 4))
        assert interp.evaluate(b.sub(b.vector(1, 2, 3), b.vector(1, 1, 1))) == vector_val((0, 1, 2))

    @pytest.mark.parametrize("code", [OperatorCode.ADD, OperatorCode.SUBTRACT])
    def test_mixed_types(self, code):
        b, interp = make()
        raises_kind(interp, b.operator(code, b.number(1), b.vector(1, 2, 3)), ErrorKind.TYPE_MISMATCH)
        raises_kind(interp, b.operator(code, b.vector(1, 2, 3), b.number(1)), ErrorKind.TYPE_MISMATCH)

    def test_booleans(self):
        b, interp = make()
        t = b.compare("<", b.number(1), b.number(2))
        raises_kind(interp, b.add(t, t), ErrorKind.TYPE_MISMATCH)


class TestMultiply:

    def test_numbers(self):
        b, interp = make()
        assert interp.evaluate(b.mul(b.number(4), b.number(2.5))) == number_val(10.0)

    def test_scalar_times_vector(self):
        b, interp = make()
        assert interp.evaluate(b.mul(b.number(2), b.vector(1, 2, 3))) == vector_val((2, 4, 6))
        assert interp.evaluate(b.mul(b.vector(1, 2, 3), b.number(2))) == vector_val((2, 4, 6))

    def test_vector_times_vector_is_undefined(self):
        b, interp = make()
        b.declare("v", VECTOR)
        b.declare("w", VECTOR)
        err = raises_kind(interp, b.mul(b.reference("v"), b.reference("w")),
                          ErrorKind.UNDEFINED_OPERATION)
        assert isinstance(err, OperationError)
        assert err.diagnostic.hints

    def test_boolean_operand(self):
        b, interp = make()
        t = b.compare("<", b.number(1), b.number(2))
        raises_kind(interp, b.mul(t, b.number(2)), ErrorKind.TYPE_MISMATCH)


class TestDivide:

    def test_numbers_give_quotient(self):
        b, interp = make()
        assert interp.evaluate(b.div(b.number(6), b.number(3))) == number_val(2.0)

    def test_vector_by_number(self):
        b, interp = make()
        assert interp.evaluate(b.div(b.vector(2, 4, 6), b.number(2))) == vector_val((1, 2, 3))

    def test_number_by_vector_is_undefined(self):
        b, interp = make()
        raises_kind(interp, b.div(b.number(1), b.vector(1, 1, 1)), ErrorKind.UNDEFINED_OPERATION)

    def test_vector_by_vector_is_undefined(self):
        b, interp = make()
        raises_kind(interp, b.div(b.vector(1, 1, 1), b.vector(1, 1, 1)), ErrorKind.UNDEFINED_OPERATION)

    def test_division_by_zero_propagates_ieee_values(self):
        b, interp = make()
        assert interp.evaluate(b.div(b.number(1), b.number(0))).data == math.inf
        assert math.isnan(interp.evaluate(b.div(b.number(0), b.number(0))).data)
        v = interp.evaluate(b.div(b.vector(1, 0, -1), b.number(0))).data
        assert v.x == math.inf
        assert math.isnan(v.y)
        assert v.z == -math.inf

    def test_guarded_division(self):
        b, interp = make(InterpreterConfig(guard_division=True))
        raises_kind(interp, b.div(b.number(1), b.number(0)), ErrorKind.UNDEFINED_OPERATION)
        raises_kind(interp, b.div(b.vector(1, 0, 0), b.number(0)), ErrorKind.UNDEFINED_OPERATION)
        assert interp.evaluate(b.div(b.number(1), b.number(4))) == number_val(0.25)


class TestProducts:

    def test_cross(self):
        b, interp = make()
        result = interp.evaluate(b.cross(b.vector(1, 0, 0), b.vector(0, 1, 0)))
        assert result == vector_val((0, 0, 1))

    def test_dot(self):
        b, interp = make()
        result = interp.evaluate(b.dot(b.vector(1, 2, 3), b.vector(4, 5, 6)))
        assert result == number_val(32.0)
        assert result.type == NUMBER

    @pytest.mark.parametrize("code", [OperatorCode.CROSS, OperatorCode.DOT])
    def test_require_vectors(self, code):
        b, interp = make()
        raises_kind(interp, b.operator(code, b.number(1), b.vector(1, 2, 3)), ErrorKind.TYPE_MISMATCH)
        raises_kind(interp, b.operator(code, b.vector(1, 2, 3), b.number(1)), ErrorKind.TYPE_MISMATCH)


# --- Comparisons ---

class TestOrdering:

    @pytest.mark.parametrize("symbol,left,right,expected", [
        ("<", 1, 2, True),
        ("<", 2, 2, False),
        (">", 3, 2, True),
        (">=", 2, 2, True),
        (">=", 1, 2, False),
        ("<=", 2, 2, True),
        ("<=", 3, 2, False),
    ])
    def test_numbers(self, symbol, left, right, expected):
        b, interp = make()
        result = interp.evaluate(b.compare(symbol, b.number(left), b.number(right)))
        assert result == bool_val(expected)

    def test_vectors_are_unsupported(self):
        b, interp = make()
        raises_kind(interp, b.compare("<", b.vector(1, 0, 0), b.vector(0, 1, 0)),
                    ErrorKind.UNSUPPORTED_OPERATION)

    def test_mixed_types(self):
        b, interp = make()
        raises_kind(interp, b.compare(">", b.number(1), b.vector(0, 1, 0)), ErrorKind.TYPE_MISMATCH)
        raises_kind(interp, b.compare(">", b.vector(0, 1, 0), b.number(1)), ErrorKind.TYPE_MISMATCH)


class TestEquality:

    def test_numbers(self):
        b, interp = make()
        assert interp.evaluate(b.compare("==", b.number(1), b.number(1.00001))) == bool_val(True)
        assert interp.evaluate(b.compare("!=", b.number(1), b.number(2))) == bool_val(True)

    def test_vectors(self):
        b, interp = make()
        assert interp.evaluate(b.compare("==", b.vector(1, 2, 3), b.vector(1, 2, 3))) == bool_val(True)
        assert interp.evaluate(b.compare("!=", b.vector(1, 2, 3), b.vector(1, 2, 4))) == bool_val(True)

    def test_one_sided_by_default(self):
        b, interp = make()
        assert interp.evaluate(b.compare("==", b.number(5), b.number(3))) == bool_val(True)

    def test_symmetric_when_configured(self):
        b, interp = make(InterpreterConfig(symmetric_equality=True))
        assert interp.evaluate(b.compare("==", b.number(5), b.number(3))) == bool_val(False)
        assert interp.evaluate(b.compare("==", b.vector(1, 2, 3), b.vector(1, 2, 1))) == bool_val(False)

    def test_configured_epsilon(self):
        b, interp = make(InterpreterConfig(epsilon=0.5, symmetric_equality=True))
        assert interp.evaluate(b.compare("==", b.number(1), b.number(1.25))) == bool_val(True)

    def test_mixed_types(self):
        b, interp = make()
        raises_kind(interp, b.compare("==", b.number(1), b.vector(1, 1, 1)), ErrorKind.TYPE_MISMATCH)

    def test_booleans(self):
        b, interp = make()
        t = b.compare("<", b.number(1), b.number(2))
        raises_kind(interp, b.compare("==", t, t), ErrorKind.TYPE_MISMATCH)


# --- Fail-fast ---

class TestFailFast:

    def test_error_aborts_remaining_statements(self):
        b, interp = make()
        x = b.declare("x", NUMBER)
        program = b.sequence(
            b.print_(b.number(1)),
            b.mul(b.vector(1, 0, 0), b.vector(0, 1, 0)),
            b.assign(x, b.number(5)),
        )
        raises_kind(interp, program, ErrorKind.UNDEFINED_OPERATION)
        assert output_of(interp) == "1.00\n"
        assert interp.store.get("x") == number_val(0.0)

    def test_error_inside_loop_body_stops_loop(self):
        b, interp = make()
        n = b.declare("n", NUMBER)
        interp.evaluate(b.assign(n, b.number(3)))
        loop = b.while_(
            b.compare(">", b.reference("n"), b.number(0)),
            b.sequence(
                b.print_(b.reference("n")),
                b.assign(n, b.vector(0, 0, 0)),
            ),
        )
        raises_kind(interp, loop, ErrorKind.TYPE_MISMATCH)
        assert output_of(interp) == "n = 3.00\n"
