"""Diagnostic system for j18s errors.

Provides structured error diagnostics with codes, positions and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import InvalidPluralRuleError, J18sError, RefreshError
from .formatter import DiagnosticFormatter
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "InvalidPluralRuleError",
    "J18sError",
    "RefreshError",
]
