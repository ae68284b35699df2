"""Bound-entity translation.

Stores translation metadata on entities (UI elements or anything shaped
like one) and re-renders them when the active language changes.

Python 3.13+.
"""

from .elements import (
    AttributeElement,
    Element,
    ElementCollection,
    add_class_name,
    has_class_name,
    mark_for_translation,
)
from .metadata import (
    METADATA_FIELDS,
    ElementMetadata,
    parse_plural_count,
    parse_text_args,
    read_metadata,
    serialize_text_args,
    write_metadata,
)
from .stores import (
    AttributeStore,
    DatasetStore,
    MetadataStore,
    attribute_key,
    dataset_key,
    detect_store,
    to_camel_case,
    to_kebab_case,
)
from .translator import (
    ElementTranslator,
    EntityLocator,
    RefreshFailure,
    RefreshReport,
    UpdateOptions,
)

__all__ = [
    "METADATA_FIELDS",
    "AttributeElement",
    "AttributeStore",
    "DatasetStore",
    "Element",
    "ElementCollection",
    "ElementMetadata",
    "ElementTranslator",
    "EntityLocator",
    "MetadataStore",
    "RefreshFailure",
    "RefreshReport",
    "UpdateOptions",
    "add_class_name",
    "attribute_key",
    "dataset_key",
    "detect_store",
    "has_class_name",
    "mark_for_translation",
    "parse_plural_count",
    "parse_text_args",
    "read_metadata",
    "serialize_text_args",
    "to_camel_case",
    "to_kebab_case",
    "write_metadata",
]
