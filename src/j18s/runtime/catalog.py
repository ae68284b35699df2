"""Catalog store: per-language translation contexts and plural selectors.

A catalog maps language -> context -> source text -> variant, where a
variant is either one translated string or a sequence of strings indexed by
plural form. Each language owns exactly one plural selector.

Registration replaces a language wholesale; there is no merging. The
contexts mapping is stored by reference, so later edits made by the caller
are visible to the next lookup.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from j18s.locale_utils import normalize_language
from j18s.runtime.plural_rules import PluralSelector, coerce_plural_rule

__all__ = ["Catalog", "CatalogContexts", "LanguageEntry", "Variant"]

logger = logging.getLogger(__name__)

type Variant = str | Sequence[str]
"""One translation, or translations indexed by plural form."""

type CatalogContexts = Mapping[str, Mapping[str, Variant]]
"""Context name -> source text -> variant."""


@dataclass(frozen=True, slots=True)
class LanguageEntry:
    """Registered state of one language.

    Attributes:
        contexts: Translation contexts, held by reference
        selector: Plural selector for the language (never None)
    """

    contexts: CatalogContexts
    selector: PluralSelector


class Catalog:
    """In-memory collection of registered languages.

    Not synchronized. TranslationEngine(thread_safe=True) serializes access
    when the catalog is shared between threads.

    Example:
        >>> catalog = Catalog()
        >>> catalog.register("et", {"default": {"cat": ["kass", "kassid"]}})
        'et'
        >>> catalog.get_variant("et", "default", "cat")
        ['kass', 'kassid']
        >>> catalog.get_selector("et")(2)
        1
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        """Initialize an empty catalog."""
        self._entries: dict[str, LanguageEntry] = {}

    def register(
        self,
        language: str | None,
        contexts: CatalogContexts | None,
        plural_rule: str | PluralSelector | None = None,
    ) -> str:
        """Register or fully replace a language.

        Args:
            language: Language identifier (None normalizes to "")
            contexts: Context -> text -> variant mapping (None registers no texts)
            plural_rule: Rule header, native selector, or None for the default rule

        Returns:
            Normalized language key

        Raises:
            InvalidPluralRuleError: If plural_rule fails to compile. The
                catalog is left unchanged in that case.
        """
        key = normalize_language(language)
        selector = coerce_plural_rule(plural_rule)
        replaced = key in self._entries
        self._entries[key] = LanguageEntry(
            contexts=contexts if contexts is not None else {},
            selector=selector,
        )
        logger.info(
            "%s language '%s' (%d contexts)",
            "Replaced" if replaced else "Registered",
            key,
            len(self._entries[key].contexts),
        )
        return key

    def remove(self, language: str | None) -> bool:
        """Remove a language.

        Returns:
            True if the language was registered
        """
        key = normalize_language(language)
        removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug("Removed language '%s'", key)
        return removed

    def get_entry(self, language: str | None) -> LanguageEntry | None:
        """Return the registered entry for language, if any."""
        return self._entries.get(normalize_language(language))

    def get_selector(self, language: str | None) -> PluralSelector | None:
        """Return the plural selector for language, or None if unregistered."""
        entry = self.get_entry(language)
        return entry.selector if entry is not None else None

    def get_variant(self, language: str | None, context: str, text: str) -> Variant | None:
        """Look up the variant for (language, context, text).

        Returns:
            The stored variant, or None when any level of the lookup is missing
        """
        entry = self.get_entry(language)
        if entry is None:
            return None
        texts = entry.contexts.get(context)
        if texts is None:
            return None
        return texts.get(text)

    def has_language(self, language: str | None) -> bool:
        """Check whether language is registered."""
        return normalize_language(language) in self._entries

    @property
    def languages(self) -> tuple[str, ...]:
        """Registered language keys in registration order."""
        return tuple(self._entries)

    def __contains__(self, language: object) -> bool:
        return normalize_language(language) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Catalog(languages={self.languages!r})"
