"""
vectorCalc exceptions and diagnostics.

Error code ranges:
- E2xx: Type errors (operand and assignment type conflicts)
- E3xx: Semantic errors (variable lifecycle)
- E4xx: Runtime errors (output)
- E5xx: Resource errors
- W1xx: Runner warnings
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

from .location import SourceSpan


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"


class ErrorKind(Enum):
    """The taxonomy of diagnostics: evaluation failures plus runner warnings."""
    NOT_DECLARED = "NotDeclared"
    ALREADY_DECLARED = "AlreadyDeclared"
    TYPE_MISMATCH = "TypeMismatch"
    UNDEFINED_OPERATION = "UndefinedOperation"
    UNSUPPORTED_OPERATION = "UnsupportedOperation"
    INVALID_PRINT_ARGUMENT = "InvalidPrintArgument"
    OUT_OF_MEMORY = "OutOfMemory"
    RUN_STOPPED = "RunStopped"

    @property
    def is_fatal(self) -> bool:
        """Whether a host must stop after this error."""
        return self is ErrorKind.OUT_OF_MEMORY


@dataclass
class Diagnostic:
    """A single diagnostic message (error, warning, etc.)."""
    code: str                       # E201, E301, etc.
    kind: ErrorKind
    message: str                    # Human-readable message
    severity: ErrorSeverity = ErrorSeverity.ERROR
    span: Optional[SourceSpan] = None
    hints: List[str] = field(default_factory=list)

    def format(self) -> str:
        """Format the diagnostic for display."""
        header = f"{self.severity.value}[{self.code}]: {self.message}"
        parts = [f"{self.span.start}: {header}" if self.span else header]
        for hint in self.hints:
            parts.append(f"    = hint: {hint}")
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        data = {
            "code": self.code,
            "kind": self.kind.value,
            "message": self.message,
            "severity": self.severity.value,
            "hints": self.hints,
        }
        if self.span is not None:
            data["range"] = {
                "start": {"line": self.span.start.line, "column": self.span.start.column},
                "end": {"line": self.span.end.line, "column": self.span.end.column},
            }
        return data


class VectorCalcError(Exception):
    """Base exception for vectorCalc evaluation errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def kind(self) -> ErrorKind:
        return self.diagnostic.kind

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.format()


class SemanticError(VectorCalcError):
    """Variable lifecycle error (E3xx)."""
    pass


class OperandTypeError(VectorCalcError):
    """Operand or assignment type conflict (E2xx)."""
    pass


class OperationError(VectorCalcError):
    """Operation undefined or unsupported for its operand types (E2xx)."""
    pass


class OutputError(VectorCalcError):
    """Error while writing program output (E4xx)."""
    pass


class ResourceError(VectorCalcError):
    """Unrecoverable resource failure (E5xx)."""
    pass


# --- Semantic error codes ---

def error_not_declared(name: str, span: SourceSpan = None) -> SemanticError:
    """E301: Identifier used before declaration."""
    diag = Diagnostic(
        code="E301",
        kind=ErrorKind.NOT_DECLARED,
        message=f"variable '{name}' has not been declared",
        span=span,
        hints=["declare the variable as 'Number' or 'Vector' before using it"],
    )
    return SemanticError(diag)


def error_already_declared(name: str, span: SourceSpan = None) -> SemanticError:
    """E302: Second declaration of a name."""
    diag = Diagnostic(
        code="E302",
        kind=ErrorKind.ALREADY_DECLARED,
        message=f"variable '{name}' has already been declared",
        span=span,
    )
    return SemanticError(diag)


# --- Type error codes ---

def error_type_mismatch(message: str, span: SourceSpan = None) -> OperandTypeError:
    """E201: Incompatible operand or assignment types."""
    diag = Diagnostic(
        code="E201",
        kind=ErrorKind.TYPE_MISMATCH,
        message=message,
        span=span,
    )
    return OperandTypeError(diag)


def error_incompatible_assignment(name: str, declared: str, found: str,
                                  span: SourceSpan = None) -> OperandTypeError:
    """E201: Assigning a value of the wrong type."""
    return error_type_mismatch(
        f"incompatible types to assign: '{name}' is {declared}, value is {found}",
        span,
    )


def error_undefined_operation(message: str, span: SourceSpan = None,
                              hints: List[str] = None) -> OperationError:
    """E202: Operation has no meaning for the operand types."""
    diag = Diagnostic(
        code="E202",
        kind=ErrorKind.UNDEFINED_OPERATION,
        message=message,
        span=span,
        hints=list(hints or []),
    )
    return OperationError(diag)


def error_unsupported_operation(message: str, span: SourceSpan = None) -> OperationError:
    """E203: Operation cannot be performed on vectors."""
    diag = Diagnostic(
        code="E203",
        kind=ErrorKind.UNSUPPORTED_OPERATION,
        message=message,
        span=span,
    )
    return OperationError(diag)


# --- Runtime error codes ---

def error_invalid_print_argument(found: str, span: SourceSpan = None) -> OutputError:
    """E401: Printing a value that has no textual form."""
    diag = Diagnostic(
        code="E401",
        kind=ErrorKind.INVALID_PRINT_ARGUMENT,
        message=f"wrong argument for printing: cannot print a {found}",
        span=span,
        hints=["only Number and Vector values can be printed"],
    )
    return OutputError(diag)


# --- Resource error codes ---

def error_out_of_memory(span: SourceSpan = None) -> ResourceError:
    """E501: Allocation failure."""
    diag = Diagnostic(
        code="E501",
        kind=ErrorKind.OUT_OF_MEMORY,
        message="out of memory encountered",
        span=span,
    )
    return ResourceError(diag)


# --- Runner warnings ---

def warning_run_stopped(error_count: int, skipped: int) -> Diagnostic:
    """W101: The error limit was reached and later statements were skipped."""
    return Diagnostic(
        code="W101",
        kind=ErrorKind.RUN_STOPPED,
        message=f"stopped after {error_count} error(s); {skipped} statement(s) not run",
        severity=ErrorSeverity.WARNING,
        hints=["raise max_errors to see more errors in one run"],
    )


class DiagnosticCollector:
    """Collects diagnostics during a program run."""

    def __init__(self, max_errors: int = 20):
        self.diagnostics: List[Diagnostic] = []
        self.max_errors = max_errors
        self._error_count = 0

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self.diagnostics.append(diagnostic)
        if diagnostic.severity == ErrorSeverity.ERROR:
            self._error_count += 1

    def add_error(self, error: VectorCalcError) -> None:
        """Add an error exception as a diagnostic."""
        self.add(error.diagnostic)

    def of_kind(self, kind: ErrorKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == ErrorSeverity.WARNING)

    @property
    def has_errors(self) -> bool:
        return self._error_count > 0

    @property
    def has_warnings(self) -> bool:
        return self.warning_count > 0

    @property
    def should_stop(self) -> bool:
        """Check if we've hit the max error limit."""
        return self._error_count >= self.max_errors

    def format_all(self) -> str:
        """Format all diagnostics for display."""
        parts = [d.format() for d in self.diagnostics]
        if self._error_count > 0:
            parts.append(f"\n{self._error_count} error(s), {self.warning_count} warning(s)")
        elif self.warning_count > 0:
            parts.append(f"\n{self.warning_count} warning(s)")
        return "\n\n".join(parts)

    def to_json(self) -> dict:
        """Convert all diagnostics to JSON format."""
        return {
            "diagnostics": [d.to_json() for d in self.diagnostics],
            "error_count": self._error_count,
            "warning_count": self.warning_count,
        }
