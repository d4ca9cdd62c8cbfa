"""
vectorCalc - evaluation core for a small scalar/vector scripting language.

This module provides:
- Vector math: Vector3 and the scalar/vector arithmetic library
- AST: Constant, identifier and operator nodes
- TreeBuilder: Node construction with declaration handling
- Interpreter: Tree-walking evaluator
- Diagnostics: Typed errors and the collector that counts them

Usage:
    from vectorcalc import TreeBuilder, create_context, execute, NUMBER

    ctx = create_context()
    b = TreeBuilder(ctx)
    x = b.declare("x", NUMBER)
    program = b.sequence(
        b.assign(x, b.number(3)),
        b.print_(b.reference("x")),
    )
    result = execute(program, ctx)
    print(result.output, end="")     # x = 3.00
    print(result.summary())
"""

from .location import (
    SourceLocation,
    SourceSpan,
)

from .vecmath import (
    Vector3,
    ZERO_VECTOR,
    EPSILON,
)

from .types import (
    ValueType,
    NUMBER,
    VECTOR,
    BOOLEAN,
    resolve_type_name,
)

from .ast import (
    # Base
    AstNode,
    AstVisitor,
    OperatorCode,
    # Nodes
    NumberConstant,
    VectorConstant,
    Identifier,
    Operator,
    # Helpers
    walk,
    depth,
    format_ast,
    print_ast,
)

from .errors import (
    ErrorKind,
    ErrorSeverity,
    Diagnostic,
    DiagnosticCollector,
    VectorCalcError,
    SemanticError,
    OperandTypeError,
    OperationError,
    OutputError,
    ResourceError,
)

from .config import (
    InterpreterConfig,
    load_config,
    configure_logging,
)

from .runtime import (
    Value,
    number_val,
    vector_val,
    bool_val,
    VariableStore,
    ExecutionContext,
    create_context,
    Interpreter,
    ExecutionResult,
    execute,
    evaluate,
)

from .builder import TreeBuilder

__version__ = "0.1.0"

__all__ = [
    # Locations
    'SourceLocation',
    'SourceSpan',
    # Vector math
    'Vector3',
    'ZERO_VECTOR',
    'EPSILON',
    # Types
    'ValueType',
    'NUMBER',
    'VECTOR',
    'BOOLEAN',
    'resolve_type_name',
    # AST
    'AstNode',
    'AstVisitor',
    'OperatorCode',
    'NumberConstant',
    'VectorConstant',
    'Identifier',
    'Operator',
    'walk',
    'depth',
    'format_ast',
    'print_ast',
    # Errors
    'ErrorKind',
    'ErrorSeverity',
    'Diagnostic',
    'DiagnosticCollector',
    'VectorCalcError',
    'SemanticError',
    'OperandTypeError',
    'OperationError',
    'OutputError',
    'ResourceError',
    # Config
    'InterpreterConfig',
    'load_config',
    'configure_logging',
    # Runtime
    'Value',
    'number_val',
    'vector_val',
    'bool_val',
    'VariableStore',
    'ExecutionContext',
    'create_context',
    'Interpreter',
    'ExecutionResult',
    'execute',
    'evaluate',
    # Building
    'TreeBuilder',
]
