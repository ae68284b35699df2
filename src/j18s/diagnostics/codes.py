"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Plural rule compilation errors (hard, raised at registration)
        2000-2999: Translation anomalies (soft, logged and degraded)
        3000-3999: Bound-entity refresh errors
    """

    # Plural rule errors (1000-1999)
    INVALID_PLURAL_RULE = 1001
    PLURAL_RULE_TOO_LONG = 1002
    PLURAL_RULE_TOO_DEEP = 1003

    # Translation anomalies (2000-2999)
    MISSING_TRANSLATION = 2001
    MALFORMED_METADATA = 2002
    UNDEFINED_PLACEHOLDER_ARGUMENT = 2003

    # Refresh errors (3000-3999)
    REFRESH_FAILED = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        position: Character offset in the rule expression (rule errors only)
        source: Offending input, for context in formatted output
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    position: int | None = None
    source: str | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __post_init__(self) -> None:
        """Validate Diagnostic invariants.

        Raises:
            ValueError: If position is negative
        """
        if self.position is not None and self.position < 0:
            msg = f"Diagnostic.position must be >= 0, got {self.position}"
            raise ValueError(msg)

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[INVALID_PLURAL_RULE]: Unexpected character '$' in plural expression
              --> nplurals=2; plural=n $ 1
                                     ^
              = help: Plural expressions may only use n, integers and C operators

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
