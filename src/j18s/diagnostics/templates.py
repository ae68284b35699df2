"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every error case in one place.
    """

    _RULE_HINT = "Use the gettext form: nplurals=N; plural=<C expression over n>"

    @staticmethod
    def invalid_plural_rule(reason: str, source: str, position: int | None = None) -> Diagnostic:
        """Plural rule expression failed to compile.

        Args:
            reason: What the compiler found wrong
            source: The rule text being compiled
            position: Character offset of the problem, when known

        Returns:
            Diagnostic for INVALID_PLURAL_RULE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_RULE,
            message=f"Invalid plural rule: {reason}",
            position=position,
            source=source,
            hint=ErrorTemplate._RULE_HINT,
        )

    @staticmethod
    def plural_rule_too_long(length: int, limit: int) -> Diagnostic:
        """Plural rule exceeds the configured length limit.

        Args:
            length: Actual rule length in characters
            limit: Maximum accepted length

        Returns:
            Diagnostic for PLURAL_RULE_TOO_LONG
        """
        return Diagnostic(
            code=DiagnosticCode.PLURAL_RULE_TOO_LONG,
            message=f"Plural rule is {length} characters long (limit: {limit})",
            hint="Real-world plural rules are a few hundred characters at most",
        )

    @staticmethod
    def plural_rule_too_deep(source: str, position: int, limit: int) -> Diagnostic:
        """Plural expression nests deeper than the configured limit.

        Args:
            source: The rule text being compiled
            position: Offset where the limit was hit
            limit: Maximum accepted nesting depth

        Returns:
            Diagnostic for PLURAL_RULE_TOO_DEEP
        """
        return Diagnostic(
            code=DiagnosticCode.PLURAL_RULE_TOO_DEEP,
            message=f"Plural expression nesting exceeds depth limit ({limit})",
            position=position,
            source=source,
            hint="Flatten redundant parentheses or nested ternaries",
        )

    @staticmethod
    def missing_translation(language: str, context: str, text: str) -> Diagnostic:
        """No catalog entry for the requested text.

        Args:
            language: Effective language of the request
            context: Context group searched
            text: Untranslated source text

        Returns:
            Diagnostic for MISSING_TRANSLATION (warning severity)
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_TRANSLATION,
            message=f"No translation for '{text}' in context '{context}' of language '{language}'",
            hint="The untranslated source text is displayed instead",
            severity="warning",
        )

    @staticmethod
    def malformed_metadata(field: str, raw_value: object, replacement: object) -> Diagnostic:
        """Stored metadata value could not be interpreted.

        Args:
            field: Metadata field name (camelCase)
            raw_value: Value found in the store
            replacement: Value used instead

        Returns:
            Diagnostic for MALFORMED_METADATA (warning severity)
        """
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_METADATA,
            message=f"Malformed {field} metadata {raw_value!r}, using {replacement!r}",
            severity="warning",
        )

    @staticmethod
    def undefined_placeholder_argument(placeholder: str) -> Diagnostic:
        """Placeholder has no corresponding argument.

        Args:
            placeholder: Placeholder token left in the output

        Returns:
            Diagnostic for UNDEFINED_PLACEHOLDER_ARGUMENT (warning severity)
        """
        return Diagnostic(
            code=DiagnosticCode.UNDEFINED_PLACEHOLDER_ARGUMENT,
            message=f"No argument for placeholder '{placeholder}', left verbatim",
            severity="warning",
        )

    @staticmethod
    def refresh_failed(entity: object, error: BaseException) -> Diagnostic:
        """Translating one tracked entity failed during a bulk refresh.

        Args:
            entity: The entity that could not be translated
            error: The exception raised while translating it

        Returns:
            Diagnostic for REFRESH_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.REFRESH_FAILED,
            message=f"Refreshing {entity!r} failed: {type(error).__name__}: {error}",
            hint="Check the entity's stored metadata and the metadata store in use",
        )
