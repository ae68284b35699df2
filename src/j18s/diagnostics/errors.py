"""j18s exception hierarchy with structured diagnostics.

Only plural rule compilation is a hard failure. Translation-time anomalies
(missing translations, malformed metadata, missing placeholder arguments)
degrade to a best-effort string and are reported via logging instead.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from j18s.binding.translator import RefreshReport

__all__ = ["InvalidPluralRuleError", "J18sError", "RefreshError"]


class J18sError(Exception):
    """Base exception for all j18s errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize J18sError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidPluralRuleError(J18sError, ValueError):
    """Plural rule expression failed to compile.

    Raised synchronously by register_language() and compile_plural_rule(),
    never deferred to translation time.

    Example:
        >>> engine.register_language("et", {}, "nplurals=2; plural=n !!= 1")
        Traceback (most recent call last):
        ...
        InvalidPluralRuleError: error[INVALID_PLURAL_RULE]: ...
    """


class RefreshError(J18sError):
    """Bulk refresh stopped at a failing entity.

    Raised only under RefreshPolicy.ABORT. The default CONTINUE policy
    reports failures in the returned RefreshReport instead.

    Attributes:
        report: Entities refreshed before the failure, plus the failure itself
    """

    def __init__(self, message: str | Diagnostic, report: RefreshReport) -> None:
        """Initialize RefreshError.

        Args:
            message: Error message string OR Diagnostic object
            report: Partial refresh report up to and including the failure
        """
        super().__init__(message)
        self.report = report
