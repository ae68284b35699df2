"""TranslationEngine - main API for string translation.

Owns the catalog, the active language and the refresh listeners. Callers
construct one engine and pass it to every call site instead of relying on
process-wide state.

Python 3.13+. External dependency: Babel (system language detection).
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from contextlib import AbstractContextManager, nullcontext
from decimal import Decimal

from j18s.constants import DEFAULT_CONTEXT, DEFAULT_LANGUAGE, DEFAULT_PLURAL_COUNT
from j18s.locale_utils import get_system_language, normalize_language
from j18s.runtime.catalog import Catalog, CatalogContexts
from j18s.runtime.plural_rules import PluralSelector
from j18s.runtime.resolver import Resolver, TranslationRequest

__all__ = ["RefreshListener", "TranslationEngine"]

logger = logging.getLogger(__name__)

type RefreshListener = Callable[[], object]
"""Zero-argument callback fired when every tracked entity must be re-translated."""


class TranslationEngine:
    """Translation catalog plus active-language state.

    Thread Safety:
        By default, engines are NOT thread-safe: registration and language
        switches assume a single logical caller.

        For concurrent access, use thread_safe=True:
        - register_language(), set_active_language() and translate() are
          serialized through an internal RLock
        - Refresh listeners run while the lock is held, so they may call
          back into the engine from the same thread

    Examples:
        >>> engine = TranslationEngine("et")
        >>> engine.register_language("et", {
        ...     "default": {"%d cat": ["%d kass", "%d kassi"]},
        ... })
        >>> engine.translate("%d cat", plural="%d cats", plural_count=3, args=[3])
        '3 kassi'
        >>> engine.translate("Hello")  # no entry: untranslated source
        'Hello'
    """

    __slots__ = (
        "_active_language",
        "_catalog",
        "_listeners",
        "_lock",
        "_resolver",
        "_thread_safe",
    )

    def __init__(
        self,
        language: str | None = DEFAULT_LANGUAGE,
        /,
        *,
        thread_safe: bool = False,
    ) -> None:
        """Initialize engine.

        Args:
            language: Initially active language [positional-only]
            thread_safe: Serialize all operations through an internal RLock
        """
        self._active_language = normalize_language(language)
        self._catalog = Catalog()
        self._resolver = Resolver(self._catalog)
        self._listeners: list[RefreshListener] = []
        self._thread_safe = thread_safe
        self._lock: threading.RLock | None = threading.RLock() if thread_safe else None

        logger.info(
            "TranslationEngine initialized (language=%s, thread_safe=%s)",
            self._active_language,
            thread_safe,
        )

    @classmethod
    def for_system_language(cls, *, thread_safe: bool = False) -> TranslationEngine:
        """Factory creating an engine whose active language is the system locale.

        Detection is delegated to Babel; "en" is used when nothing is set.

        Returns:
            Engine with the detected language active

        Example:
            >>> engine = TranslationEngine.for_system_language()
            >>> engine.active_language  # Depends on LC_MESSAGES / LANG
            'et_EE'
        """
        return cls(get_system_language(), thread_safe=thread_safe)

    def _guard(self) -> AbstractContextManager[object]:
        return self._lock if self._lock is not None else nullcontext()

    @property
    def active_language(self) -> str:
        """Currently active language (read-only, see set_active_language)."""
        return self._active_language

    @property
    def catalog(self) -> Catalog:
        """Catalog holding every registered language (read-only)."""
        return self._catalog

    @property
    def resolver(self) -> Resolver:
        """Resolver bound to this engine's catalog (read-only)."""
        return self._resolver

    @property
    def is_thread_safe(self) -> bool:
        """Check if engine uses thread-safe operations (read-only)."""
        return self._thread_safe

    def __repr__(self) -> str:
        return (
            f"TranslationEngine(active_language={self._active_language!r}, "
            f"languages={self._catalog.languages!r})"
        )

    # ------------------------------------------------------------------
    # Refresh listeners
    # ------------------------------------------------------------------

    def add_refresh_listener(self, listener: RefreshListener) -> None:
        """Register a callback fired on every effective language switch.

        Adding the same listener twice has no effect.
        """
        with self._guard():
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_refresh_listener(self, listener: RefreshListener) -> bool:
        """Unregister a refresh callback.

        Returns:
            True if the listener was registered
        """
        with self._guard():
            try:
                self._listeners.remove(listener)
            except ValueError:
                return False
            return True

    def _notify_listeners(self) -> None:
        # Copy: a listener may add or remove listeners while being notified
        for listener in tuple(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Catalog registration
    # ------------------------------------------------------------------

    def register_language(
        self,
        language: str | None,
        contexts: CatalogContexts | None,
        plural_rule: str | PluralSelector | None = None,
    ) -> None:
        """Add a language, or replace an existing one wholesale.

        Contexts are grouped by context name; use "default" for the default
        context. Use a list for plural forms: form 0 takes the first item,
        form 1 the second, and so on.

            {
                "default": {"original": "tõlge"},
                "menu": {"file": ["fail", "failid"]},
            }

        Args:
            language: Language identifier (None registers under "")
            contexts: Translations grouped by context
            plural_rule: gettext header ("nplurals=2; plural=n != 1"), a
                native selector callable, or None for the default rule

        Raises:
            InvalidPluralRuleError: If plural_rule does not compile. Nothing
                is registered in that case.
        """
        with self._guard():
            key = self._catalog.register(language, contexts, plural_rule)
            if key == self._active_language:
                self.set_active_language(key, force_refresh=True)

    def set_active_language(self, language: str | None, *, force_refresh: bool = False) -> bool:
        """Switch the active language and notify refresh listeners.

        Args:
            language: New active language
            force_refresh: Notify listeners even if the language is unchanged

        Returns:
            True if refresh listeners were notified
        """
        key = normalize_language(language)
        with self._guard():
            if key == self._active_language and not force_refresh:
                return False
            if key != self._active_language:
                logger.info("Active language: %s -> %s", self._active_language, key)
            self._active_language = key
            self._notify_listeners()
            return True

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate_request(self, request: TranslationRequest, raw_content: str | None = None) -> str:
        """Resolve a prepared request against the active language.

        Args:
            request: Translation request
            raw_content: Last-resort fallback text (bound entities only)

        Returns:
            Translated and formatted string
        """
        with self._guard():
            return self._resolver.resolve(request, self._active_language, raw_content)

    def translate(
        self,
        text: str,
        *,
        plural: str | None = None,
        plural_count: int | float | Decimal = DEFAULT_PLURAL_COUNT,
        context: str | None = None,
        language: str | None = None,
        args: Iterable[object] | str | None = None,
    ) -> str:
        """Translate a string.

        Stateless: no metadata is written and the active language is not
        changed, even when language is given.

        Args:
            text: String to be translated (catalog key)
            plural: Untranslated plural text, used when no translation exists
            plural_count: Count selecting the plural form (default: 1)
            context: Context for the translation (default: "default")
            language: Translate with this language instead of the active one
            args: Replacement string or sequence for %s and %1$s placeholders

        Returns:
            Translated string

        Example:
            >>> engine.translate("%s has %d cats", args=["Ann", 2])
            'Ann has 2 cats'
        """
        request = TranslationRequest(
            text=text,
            plural=plural,
            plural_count=plural_count,
            context=context or DEFAULT_CONTEXT,
            language=language,
            args=args,  # type: ignore[arg-type]  # normalized in __post_init__
        )
        return self.translate_request(request)

    def translate_plural(
        self,
        text: str,
        plural: str,
        plural_count: int | float | Decimal,
        *args: object,
        context: str | None = None,
    ) -> str:
        """Translate with positional replacement arguments.

        Example:
            >>> engine.translate_plural("%d file", "%d files", 4, 4)
            '4 files'
        """
        return self.translate(
            text, plural=plural, plural_count=plural_count, context=context, args=args
        )
