"""Metadata stores: where per-entity translation metadata lives.

Two strategies cover the storage media hosts offer:

- DatasetStore: a structured ``dataset`` mapping on the entity, keys are the
  prefixed camelCase field name (``j18sPluralCount``). Values keep their type.
- AttributeStore: flat string attributes via ``get_attribute`` /
  ``set_attribute``, keys are hyphenated (``data-j18s-plural-count``).
  Every value is stored as a string.

detect_store() probes an entity once and returns the matching strategy;
callers keep the returned store instead of re-probing on every access.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import MutableMapping
from typing import Protocol, runtime_checkable

from j18s.constants import METADATA_PREFIX
from j18s.enums import StoreKind

__all__ = [
    "AttributeHost",
    "AttributeStore",
    "ContentHost",
    "DatasetHost",
    "DatasetStore",
    "MetadataStore",
    "apply_result",
    "attribute_key",
    "dataset_key",
    "detect_store",
    "raw_content",
    "to_camel_case",
    "to_kebab_case",
]

_UPPER_PATTERN = re.compile(r"[A-Z]")
_HYPHEN_PATTERN = re.compile(r"-([a-z])")


# ============================================================================
# KEY NAMING
# ============================================================================


def to_kebab_case(name: str) -> str:
    """Convert camelCase to hyphenated form.

    Example:
        >>> to_kebab_case("pluralCount")
        'plural-count'
    """
    return _UPPER_PATTERN.sub(lambda m: "-" + m.group(0).lower(), name)


def to_camel_case(name: str) -> str:
    """Convert hyphenated form to camelCase.

    Example:
        >>> to_camel_case("text-args")
        'textArgs'
    """
    return _HYPHEN_PATTERN.sub(lambda m: m.group(1).upper(), name)


def dataset_key(field: str) -> str:
    """Key of a metadata field in a structured store.

    Example:
        >>> dataset_key("useLang")
        'j18sUseLang'
    """
    return METADATA_PREFIX + field[:1].upper() + field[1:]


def attribute_key(field: str) -> str:
    """Key of a metadata field in a flat attribute store.

    Example:
        >>> attribute_key("useLang")
        'data-j18s-use-lang'
    """
    return f"data-{METADATA_PREFIX}-{to_kebab_case(field)}"


# ============================================================================
# HOST PROTOCOLS
# ============================================================================


@runtime_checkable
class ContentHost(Protocol):
    """Entity with displayed textual content."""

    content: str


@runtime_checkable
class DatasetHost(Protocol):
    """Entity exposing a structured key-value store."""

    content: str
    dataset: MutableMapping[str, object]


@runtime_checkable
class AttributeHost(Protocol):
    """Entity exposing flat string attributes."""

    content: str

    def get_attribute(self, name: str) -> str | None: ...

    def set_attribute(self, name: str, value: str) -> None: ...

    def remove_attribute(self, name: str) -> None: ...


def raw_content(entity: ContentHost) -> str:
    """Entity's current content, trimmed."""
    return (entity.content or "").strip()


def apply_result(entity: ContentHost, text: str) -> None:
    """Display a resolved string as the entity's content."""
    entity.content = text


# ============================================================================
# STORES
# ============================================================================


class MetadataStore(Protocol):
    """Read/write access to one metadata field of an entity.

    Attributes:
        kind: Storage medium of this strategy
        string_only: True when every stored value becomes a string
    """

    kind: StoreKind
    string_only: bool

    def get(self, entity: object, field: str, default: object = None) -> object: ...

    def set(self, entity: object, field: str, value: object) -> None: ...


class DatasetStore:
    """Structured key-value strategy (``entity.dataset[j18sField]``)."""

    __slots__ = ()

    kind = StoreKind.DATASET
    string_only = False

    def get(self, entity: DatasetHost, field: str, default: object = None) -> object:
        """Read field, or default when it is not stored."""
        return entity.dataset.get(dataset_key(field), default)

    def set(self, entity: DatasetHost, field: str, value: object) -> None:
        """Write field; None removes it."""
        key = dataset_key(field)
        if value is None:
            entity.dataset.pop(key, None)
        else:
            entity.dataset[key] = value

    def __repr__(self) -> str:
        return "DatasetStore()"


class AttributeStore:
    """Flat string attribute strategy (``data-j18s-field``)."""

    __slots__ = ()

    kind = StoreKind.ATTRIBUTE
    string_only = True

    def get(self, entity: AttributeHost, field: str, default: object = None) -> object:
        """Read field, or default when the attribute is absent."""
        value = entity.get_attribute(attribute_key(field))
        return default if value is None else value

    def set(self, entity: AttributeHost, field: str, value: object) -> None:
        """Write field as a string; None removes the attribute."""
        key = attribute_key(field)
        if value is None:
            entity.remove_attribute(key)
        else:
            entity.set_attribute(key, str(value))

    def __repr__(self) -> str:
        return "AttributeStore()"


def detect_store(entity: object) -> MetadataStore:
    """Probe entity capabilities and pick a metadata strategy.

    Structured stores win when both are available.

    Args:
        entity: Entity that will carry translation metadata

    Returns:
        DatasetStore or AttributeStore

    Raises:
        TypeError: If the entity supports neither storage medium
    """
    if isinstance(entity, DatasetHost):
        return DatasetStore()
    if isinstance(entity, AttributeHost):
        return AttributeStore()
    msg = (
        f"{type(entity).__name__} has neither a 'dataset' mapping nor "
        "get_attribute/set_attribute/remove_attribute methods"
    )
    raise TypeError(msg)
