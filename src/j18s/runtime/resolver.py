"""Translation resolver - turns a request into a formatted string.

Implements the fallback cascade:

1. Effective language: the request's override, else the active language.
2. Plural form: the language's selector, or a hardcoded n != 1 guess when
   the language is not registered.
3. Template lookup, first usable value wins:
   a. catalog variant at the form index, else variant index 0
   b. untranslated (text, plural)[form index]
   c. the source text, then the entity's raw content (bound entities only)
4. Placeholder substitution.

Values are "usable" when they are non-empty strings, so an empty
translation falls through to the next step.

The resolver is stateless and never mutates the catalog. Missing
translations are logged, never raised.

Python 3.13+.
"""

from __future__ import annotations

import logging
import numbers
import operator
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from j18s.constants import DEFAULT_CONTEXT, DEFAULT_PLURAL_COUNT
from j18s.diagnostics import ErrorTemplate
from j18s.runtime.catalog import Catalog, Variant
from j18s.runtime.formatter import coerce_args, format_string
from j18s.runtime.plural_rules import default_form_index

__all__ = ["Resolver", "TranslationRequest"]

logger = logging.getLogger(__name__)

# Debug messages are high-volume; keep source text short in log lines.
_LOG_TRUNCATE_DEBUG: int = 50


def _to_form_index(result: object) -> int:
    """Coerce a native selector result to a form index.

    Integral numbers, and floats or Decimals with an integral value, are
    used as-is. Negative, NaN, infinite, fractional and non-numeric results
    select form 0.
    """
    match result:
        case numbers.Integral():
            index = operator.index(result)
        case float() if result.is_integer():
            index = int(result)
        case Decimal() if result.is_finite() and result == result.to_integral_value():
            index = int(result)
        case _:
            return 0
    return max(index, 0)


@dataclass(frozen=True, slots=True)
class TranslationRequest:
    """Everything needed to resolve one string.

    Attributes:
        text: Untranslated singular source text (catalog key)
        plural: Untranslated plural source text (None: same as text)
        plural_count: Quantity selecting the plural form
        context: Context group (empty normalizes to "default")
        language: One-shot language override (None: active language)
        args: Replacement values for %s / %1$s placeholders
    """

    text: str
    plural: str | None = None
    plural_count: int | float | Decimal = DEFAULT_PLURAL_COUNT
    context: str = DEFAULT_CONTEXT
    language: str | None = None
    args: tuple[object, ...] = ()

    def __post_init__(self) -> None:
        """Normalize an empty context and non-tuple args."""
        if not self.context:
            object.__setattr__(self, "context", DEFAULT_CONTEXT)
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", coerce_args(self.args))


def _usable(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def _pick_variant(variant: Variant, form: int) -> str | None:
    """Index a variant by form, falling back to index 0."""
    if isinstance(variant, str):
        return _usable(variant)
    if not isinstance(variant, Sequence):
        return None
    if 0 <= form < len(variant) and (chosen := _usable(variant[form])) is not None:
        return chosen
    return _usable(variant[0]) if variant else None


class Resolver:
    """Resolves translation requests against a catalog.

    Thread Safety:
        Holds no mutable state of its own; safe to share as long as the
        catalog is not being re-registered concurrently.
    """

    __slots__ = ("_catalog",)

    def __init__(self, catalog: Catalog) -> None:
        """Initialize resolver.

        Args:
            catalog: Catalog consulted for every lookup
        """
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        """Catalog consulted by this resolver (read-only)."""
        return self._catalog

    def select_form(self, language: str, count: int | float | Decimal) -> int:
        """Plural form index for count in language.

        Unregistered languages bypass any compiled rule and use the binary
        n != 1 guess.

        Args:
            language: Effective language
            count: Plural count

        Returns:
            Non-negative form index
        """
        selector = self._catalog.get_selector(language)
        if selector is None:
            return default_form_index(count)
        return _to_form_index(selector(count))

    def resolve_template(
        self,
        request: TranslationRequest,
        active_language: str,
        raw_content: str | None = None,
    ) -> str:
        """Choose the unformatted template for request (cascade steps 1-3).

        Args:
            request: Translation request
            active_language: Language used when the request has no override
            raw_content: Entity's current content, the last-resort fallback

        Returns:
            Template string ("" only when every fallback is empty)
        """
        language = request.language or active_language
        form = self.select_form(language, request.plural_count)

        variant = self._catalog.get_variant(language, request.context, request.text)
        if variant is not None and (chosen := _pick_variant(variant, form)) is not None:
            return chosen

        if variant is None and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s",
                ErrorTemplate.missing_translation(
                    language, request.context, request.text[:_LOG_TRUNCATE_DEBUG]
                ),
            )

        plural = request.plural if request.plural is not None else request.text
        untranslated = (request.text, plural)
        if form < len(untranslated) and (chosen := _usable(untranslated[form])) is not None:
            return chosen
        if (chosen := _usable(request.text)) is not None:
            return chosen
        return raw_content or ""

    def resolve(
        self,
        request: TranslationRequest,
        active_language: str,
        raw_content: str | None = None,
    ) -> str:
        """Resolve request to its final, formatted string (cascade steps 1-5).

        Args:
            request: Translation request
            active_language: Language used when the request has no override
            raw_content: Entity's current content, the last-resort fallback

        Returns:
            Translated and formatted string. Never raises for missing data.
        """
        template = self.resolve_template(request, active_language, raw_content)
        return format_string(template, request.args)
