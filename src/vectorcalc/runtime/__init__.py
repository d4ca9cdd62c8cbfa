"""
vectorCalc runtime - tree-walking evaluation.

This module provides:
- Value: Runtime values tagged with their ValueType
- VariableStore: The flat, program-wide variable table
- ExecutionContext: Store, diagnostics, output sink and configuration
- Interpreter: Evaluates AST nodes
- execute: Runs a program statement by statement
"""

from .values import (
    Value,
    number_val,
    vector_val,
    bool_val,
    default_value,
    format_value,
)

from .store import (
    VariableEntry,
    VariableStore,
)

from .context import (
    ExecutionContext,
    create_context,
)

from .interpreter import (
    Interpreter,
    ExecutionResult,
    execute,
    evaluate,
    top_level_statements,
)

__all__ = [
    # Values
    'Value',
    'number_val',
    'vector_val',
    'bool_val',
    'default_value',
    'format_value',

    # Store
    'VariableEntry',
    'VariableStore',

    # Context
    'ExecutionContext',
    'create_context',

    # Interpreter
    'Interpreter',
    'ExecutionResult',
    'execute',
    'evaluate',
    'top_level_statements',
]
