"""Diagnostic formatting service.

Renders diagnostics in Rust compiler style for exception messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from .codes import Diagnostic

__all__ = ["DiagnosticFormatter"]


def _escape_control_chars(text: str) -> str:
    """Escape control characters so diagnostics cannot forge log lines."""
    return "".join(
        ch if ch.isprintable() or ch == " " else ch.encode("unicode_escape").decode("ascii")
        for ch in text
    )


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        max_content_length: Source text longer than this is truncated in output

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> print(formatter.format(ErrorTemplate.plural_rule_too_long(2000, 1024)))
        error[PLURAL_RULE_TOO_LONG]: Plural rule is 2000 characters long (limit: 1024)
          = help: Real-world plural rules are a few hundred characters at most
    """

    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Output is a severity[CODE] header, then the source line with a caret
        under the error position, then the hint.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        lines = [
            f"{diagnostic.severity}[{diagnostic.code.name}]: "
            f"{_escape_control_chars(diagnostic.message)}"
        ]
        if diagnostic.source is not None:
            source = _escape_control_chars(self._truncate(diagnostic.source))
            lines.append(f"  --> {source}")
            position = diagnostic.position
            if position is not None and position <= len(source):
                lines.append("      " + " " * position + "^")
        if diagnostic.hint:
            lines.append(f"  = help: {_escape_control_chars(diagnostic.hint)}")
        return "\n".join(lines)

    def _truncate(self, text: str) -> str:
        if len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
