"""ElementTranslator - translation of bound entities.

Composes metadata reads and writes with the engine's resolver:

    read metadata -> merge call arguments -> write metadata back
    -> resolve -> display result on the entity

Registered as an engine refresh listener (by default), it re-renders every
tracked entity from its stored metadata whenever the active language
changes.

Refresh policy:
    RefreshPolicy.CONTINUE (default) translates every entity even when some
    fail; failures are logged and returned in the RefreshReport.
    RefreshPolicy.ABORT raises RefreshError at the first failure, carrying
    the partial report. Entities are visited in locator order.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal

from j18s.binding.elements import mark_for_translation
from j18s.binding.metadata import read_metadata, write_metadata
from j18s.binding.stores import MetadataStore, apply_result, detect_store, raw_content
from j18s.constants import DEFAULT_CONTEXT
from j18s.diagnostics import Diagnostic, ErrorTemplate, RefreshError
from j18s.enums import RefreshPolicy
from j18s.runtime.engine import TranslationEngine
from j18s.runtime.formatter import coerce_args
from j18s.runtime.resolver import TranslationRequest

__all__ = [
    "ElementTranslator",
    "EntityLocator",
    "RefreshFailure",
    "RefreshReport",
    "UpdateOptions",
]

logger = logging.getLogger(__name__)

type EntityLocator = Callable[[], Iterable[object]]
"""Returns every entity currently marked for translation."""


@dataclass(frozen=True, slots=True)
class UpdateOptions:
    """Option-style arguments for ElementTranslator.update_with_options().

    Fields left as None keep the entity's stored value.

    Attributes:
        text: Untranslated singular text
        plural: Untranslated plural text
        plural_count: Count selecting the plural form
        context: Context group
        use_lang: Language override for this entity
        text_args: Replacement string or sequence for placeholders
    """

    text: str | None = None
    plural: str | None = None
    plural_count: int | float | Decimal | None = None
    context: str | None = None
    use_lang: str | None = None
    text_args: Iterable[object] | str | None = None


@dataclass(frozen=True, slots=True)
class RefreshFailure:
    """One entity that could not be refreshed.

    Attributes:
        entity: The failing entity
        error: Exception raised while translating it
        diagnostic: Structured description of the failure
    """

    entity: object
    error: Exception
    diagnostic: Diagnostic


@dataclass(frozen=True, slots=True)
class RefreshReport:
    """Outcome of a bulk refresh.

    Attributes:
        refreshed: Number of entities translated successfully
        failures: Entities that failed, in visiting order
    """

    refreshed: int = 0
    failures: tuple[RefreshFailure, ...] = ()

    @property
    def ok(self) -> bool:
        """True when no entity failed."""
        return not self.failures

    @property
    def total(self) -> int:
        """Number of entities visited."""
        return self.refreshed + len(self.failures)


class ElementTranslator:
    """Translates entities and keeps their translation metadata current.

    Examples:
        >>> engine = TranslationEngine("en")
        >>> document = ElementCollection()
        >>> translator = ElementTranslator(engine, document.marked)
        >>> engine.register_language("et", {"default": {"Hello": "Tere"}})
        >>> title = document.add(Element("Hello"))
        >>> translator.create_translation_element(title)
        'Hello'
        >>> engine.set_active_language("et")
        True
        >>> title.content
        'Tere'
    """

    __slots__ = ("_detected", "_engine", "_locator", "_refresh_policy", "_store")

    def __init__(
        self,
        engine: TranslationEngine,
        locator: EntityLocator,
        *,
        store: MetadataStore | None = None,
        refresh_policy: RefreshPolicy = RefreshPolicy.CONTINUE,
        auto_refresh: bool = True,
    ) -> None:
        """Initialize translator.

        Args:
            engine: Engine providing catalog and active language
            locator: Returns the entities to refresh, in refresh order
            store: Metadata strategy for every entity; None detects one per entity type
            refresh_policy: What refresh() does when an entity fails
            auto_refresh: Register refresh() as an engine refresh listener
        """
        self._engine = engine
        self._locator = locator
        self._store = store
        self._detected: dict[type, MetadataStore] = {}
        self._refresh_policy = RefreshPolicy(refresh_policy)
        if auto_refresh:
            engine.add_refresh_listener(self.refresh)

    @property
    def engine(self) -> TranslationEngine:
        """Engine used for resolution (read-only)."""
        return self._engine

    @property
    def store(self) -> MetadataStore | None:
        """Metadata strategy passed at construction (None: detected per entity type)."""
        return self._store

    @property
    def refresh_policy(self) -> RefreshPolicy:
        """Failure policy of refresh() (read-only)."""
        return self._refresh_policy

    def close(self) -> None:
        """Stop listening for engine language switches."""
        self._engine.remove_refresh_listener(self.refresh)

    def _store_for(self, entity: object) -> MetadataStore:
        if self._store is not None:
            return self._store
        host_type = type(entity)
        store = self._detected.get(host_type)
        if store is None:
            store = self._detected[host_type] = detect_store(entity)
            logger.debug("Detected %s metadata store for %s", store.kind, host_type.__name__)
        return store

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_translation_element(
        self,
        entity: object,
        *,
        text: str | None = None,
        plural: str | None = None,
        plural_count: int | float | Decimal | None = None,
        context: str | None = None,
        use_lang: str | None = None,
        text_args: Iterable[object] | str | None = None,
    ) -> str:
        """Turn an ordinary entity into a translated, tracked one.

        Args:
            entity: Entity to translate
            text: Untranslated text (defaults to the entity's content)
            plural: Untranslated plural text (defaults to text)
            plural_count: Count selecting the plural form (defaults to 1)
            context: Context group (defaults to "default")
            use_lang: Always translate this entity into this language
            text_args: Replacement string or sequence for placeholders

        Returns:
            The string now displayed by the entity
        """
        store = self._store_for(entity)
        content = raw_content(entity)  # type: ignore[arg-type]

        write_metadata(store, entity, "text", text or content)
        write_metadata(store, entity, "plural", plural or text or content)
        write_metadata(store, entity, "context", context or DEFAULT_CONTEXT)
        if plural_count is not None:
            write_metadata(store, entity, "pluralCount", plural_count)
        if text_args is not None:
            write_metadata(store, entity, "textArgs", coerce_args(text_args))
        if use_lang:
            write_metadata(store, entity, "useLang", use_lang)

        mark_for_translation(entity)
        return self.translate_element(entity)

    def update(self, entity: object, context: str | None = None, *args: object) -> str:
        """Translate the singular form of entity.

        Args:
            entity: Entity to translate
            context: Context group (None keeps the stored one)
            *args: Replacement values (replace the stored arguments)

        Returns:
            The string now displayed by the entity
        """
        return self.update_plural(entity, context, 1, *args)

    def update_plural(
        self,
        entity: object,
        context: str | None,
        plural_count: int | float | Decimal | None,
        *args: object,
    ) -> str:
        """Translate entity for plural_count.

        Args:
            entity: Entity to translate
            context: Context group (None keeps the stored one)
            plural_count: Count selecting the plural form (None keeps the stored one)
            *args: Replacement values (replace the stored arguments)

        Returns:
            The string now displayed by the entity
        """
        return self._update(entity, context, plural_count, args)

    def update_with_options(self, entity: object, options: UpdateOptions) -> str:
        """Translate entity using option-style arguments.

        Unlike the positional forms, omitted arguments keep their stored values.

        Returns:
            The string now displayed by the entity
        """
        store = self._store_for(entity)
        if options.text is not None:
            write_metadata(store, entity, "text", options.text)
        if options.plural is not None:
            write_metadata(store, entity, "plural", options.plural)
        if options.use_lang is not None:
            write_metadata(store, entity, "useLang", options.use_lang or None)
        args = coerce_args(options.text_args) if options.text_args is not None else None
        return self._update(entity, options.context, options.plural_count, args)

    def translate_element(self, entity: object) -> str:
        """Re-translate entity from its stored metadata.

        Returns:
            The string now displayed by the entity
        """
        return self._update(entity, None, None, None)

    def refresh(self) -> RefreshReport:
        """Re-translate every entity returned by the locator.

        Returns:
            RefreshReport with the number refreshed and any failures

        Raises:
            RefreshError: Under RefreshPolicy.ABORT, at the first failure
        """
        refreshed = 0
        failures: list[RefreshFailure] = []
        for entity in self._locator():
            try:
                self.translate_element(entity)
            except Exception as error:  # noqa: BLE001 - collected into the report
                diagnostic = ErrorTemplate.refresh_failed(entity, error)
                failures.append(RefreshFailure(entity, error, diagnostic))
                logger.warning("%s", diagnostic)
                if self._refresh_policy is RefreshPolicy.ABORT:
                    report = RefreshReport(refreshed, tuple(failures))
                    raise RefreshError(diagnostic, report) from error
            else:
                refreshed += 1

        report = RefreshReport(refreshed, tuple(failures))
        logger.debug(
            "Refreshed %d entities for language '%s' (%d failures)",
            report.refreshed,
            self._engine.active_language,
            len(report.failures),
        )
        return report

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _update(
        self,
        entity: object,
        context: str | None,
        plural_count: int | float | Decimal | None,
        args: tuple[object, ...] | None,
    ) -> str:
        store = self._store_for(entity)
        metadata = read_metadata(store, entity)  # type: ignore[arg-type]

        if context is None:
            context = metadata.context
        context = context or DEFAULT_CONTEXT
        if plural_count is None:
            plural_count = metadata.plural_count
        if args is None:
            args = metadata.text_args

        write_metadata(store, entity, "pluralCount", plural_count)
        write_metadata(store, entity, "context", context)
        if _args_changed(store, metadata.text_args, args):
            write_metadata(store, entity, "textArgs", args)

        request = TranslationRequest(
            text=metadata.text,
            plural=metadata.plural,
            plural_count=plural_count,
            context=context,
            language=metadata.use_lang,
            args=args,
        )
        fallback = raw_content(entity)  # type: ignore[arg-type]
        result = self._engine.translate_request(request, fallback)
        apply_result(entity, result)  # type: ignore[arg-type]
        return result


def _args_changed(
    store: MetadataStore, stored: tuple[object, ...], new: tuple[object, ...]
) -> bool:
    """Compare arguments by value, as the store would hold them."""
    if store.string_only:
        return tuple(str(arg) for arg in stored) != tuple(str(arg) for arg in new)
    return stored != new
