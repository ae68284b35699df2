"""Per-entity translation metadata.

An entity remembers how it was last translated (source text, plural text,
context, plural count, replacement arguments and an optional language
override) so a language switch can re-render it without the caller
supplying those values again.

Malformed stored values never raise: a non-numeric plural count reads as 1.

Python 3.13+.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from j18s.binding.stores import ContentHost, MetadataStore, raw_content
from j18s.constants import DEFAULT_CONTEXT, DEFAULT_PLURAL_COUNT, TEXT_ARGS_SEPARATOR
from j18s.diagnostics import ErrorTemplate
from j18s.runtime.formatter import coerce_args

__all__ = [
    "METADATA_FIELDS",
    "ElementMetadata",
    "parse_plural_count",
    "parse_text_args",
    "read_metadata",
    "serialize_text_args",
    "write_metadata",
]

logger = logging.getLogger(__name__)

METADATA_FIELDS: tuple[str, ...] = (
    "text",
    "plural",
    "context",
    "pluralCount",
    "textArgs",
    "useLang",
)

_ARGS_SPLIT_PATTERN = re.compile(r"\s*;\s*")


@dataclass(slots=True)
class ElementMetadata:
    """Translation metadata read from one entity.

    Attributes:
        text: Untranslated singular text (catalog key)
        plural: Untranslated plural text
        plural_count: Count selecting the plural form
        context: Context group
        text_args: Replacement values for placeholders
        use_lang: Language override for this entity only
    """

    text: str
    plural: str
    plural_count: int | float = DEFAULT_PLURAL_COUNT
    context: str = DEFAULT_CONTEXT
    text_args: tuple[object, ...] = ()
    use_lang: str | None = None


def serialize_text_args(args: Iterable[object]) -> str:
    """Join arguments for a string-only store.

    Example:
        >>> serialize_text_args(["Ann", 5])
        'Ann; 5'
    """
    return TEXT_ARGS_SEPARATOR.join(str(arg) for arg in args)


def parse_text_args(raw: object) -> tuple[object, ...]:
    """Read stored arguments back.

    Strings are split on ";" with surrounding whitespace; the empty string is
    no arguments. Sequences from structured stores are kept as they are.

    Example:
        >>> parse_text_args("Ann ;5")
        ('Ann', '5')
        >>> parse_text_args("")
        ()
    """
    if raw is None or raw == "":
        return ()
    if isinstance(raw, str):
        return tuple(_ARGS_SPLIT_PATTERN.split(raw))
    if isinstance(raw, Iterable):
        return tuple(raw)
    return (raw,)


def parse_plural_count(raw: object) -> int | float:
    """Read a stored plural count, normalizing malformed values to 1.

    Example:
        >>> parse_plural_count("3"), parse_plural_count(0), parse_plural_count("many")
        (3, 0, 1)
    """
    value: int | float | None = None
    match raw:
        case bool():
            value = None
        case int():
            value = raw
        case float() if math.isfinite(raw):
            value = raw
        case Decimal() if raw.is_finite():
            value = int(raw) if raw == raw.to_integral_value() else float(raw)
        case str():
            stripped = raw.strip()
            try:
                value = int(stripped)
            except ValueError:
                try:
                    parsed = Decimal(stripped)
                except InvalidOperation:
                    parsed = None
                if parsed is not None and parsed.is_finite():
                    value = int(parsed) if parsed == parsed.to_integral_value() else float(parsed)
    if value is None:
        logger.debug(
            "%s", ErrorTemplate.malformed_metadata("pluralCount", raw, DEFAULT_PLURAL_COUNT)
        )
        return DEFAULT_PLURAL_COUNT
    return value


def read_metadata(store: MetadataStore, entity: ContentHost) -> ElementMetadata:
    """Load translation metadata from entity.

    Missing text and plural are synthesized from the entity's trimmed content
    (plural falls back to text) and written back so later reads agree.

    Args:
        store: Metadata strategy for entity
        entity: Entity to read

    Returns:
        ElementMetadata with defaults applied
    """
    text = store.get(entity, "text")
    if text is None:
        text = raw_content(entity)
        store.set(entity, "text", text)

    plural = store.get(entity, "plural")
    if plural is None:
        plural = text
        store.set(entity, "plural", plural)

    use_lang = store.get(entity, "useLang")
    return ElementMetadata(
        text=str(text),
        plural=str(plural),
        plural_count=parse_plural_count(store.get(entity, "pluralCount", DEFAULT_PLURAL_COUNT)),
        context=str(store.get(entity, "context") or DEFAULT_CONTEXT),
        text_args=parse_text_args(store.get(entity, "textArgs")),
        use_lang=str(use_lang) if use_lang else None,
    )


def write_metadata(store: MetadataStore, entity: object, field: str, value: object) -> None:
    """Persist one metadata field, serializing for string-only stores.

    Args:
        store: Metadata strategy for entity
        entity: Entity to write
        field: One of METADATA_FIELDS
        value: Value to store (None removes the field)

    Raises:
        ValueError: If field is not a metadata field
    """
    if field not in METADATA_FIELDS:
        msg = f"Unknown metadata field: {field!r}"
        raise ValueError(msg)
    if field == "textArgs" and value is not None:
        args = coerce_args(value)
        value = serialize_text_args(args) if store.string_only else args
    store.set(entity, field, value)
