"""
Execution context for the vectorCalc interpreter.

Bundles the state shared by tree building and evaluation: the variable
store, the diagnostic sink, the output stream and the configuration.
"""

import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO

from .store import VariableStore
from ..config import InterpreterConfig
from ..errors import DiagnosticCollector, VectorCalcError


@dataclass
class ExecutionContext:
    """
    The full execution context for one vectorCalc program.

    Tracks:
    - Variables (one flat namespace)
    - Diagnostics (errors/warnings)
    - The output sink written by `print`
    - Interpreter configuration
    """
    store: VariableStore = field(default_factory=VariableStore)
    diagnostics: DiagnosticCollector = field(default_factory=DiagnosticCollector)
    output: TextIO = field(default_factory=lambda: sys.stdout)
    config: InterpreterConfig = field(default_factory=InterpreterConfig)

    def report(self, error: VectorCalcError) -> None:
        """Record an error in the diagnostic sink."""
        self.diagnostics.add_error(error)

    @property
    def has_errors(self) -> bool:
        """Check if any errors occurred."""
        return self.diagnostics.has_errors

    @property
    def error_count(self) -> int:
        return self.diagnostics.error_count


def create_context(
    config: Optional[InterpreterConfig] = None,
    output: Optional[TextIO] = None,
    store: Optional[VariableStore] = None,
) -> ExecutionContext:
    """
    Create a new execution context.

    Args:
        config: Interpreter settings (defaults when omitted)
        output: Stream `print` writes to (stdout when omitted)
        store: An existing variable store to share (fresh when omitted)

    Returns:
        An ExecutionContext whose diagnostic limit follows the config
    """
    config = config or InterpreterConfig()
    return ExecutionContext(
        store=store if store is not None else VariableStore(),
        diagnostics=DiagnosticCollector(max_errors=config.max_errors),
        output=output if output is not None else sys.stdout,
        config=config,
    )
