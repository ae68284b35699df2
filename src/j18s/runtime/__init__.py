"""j18s runtime package.

Provides the plural rule compiler, the catalog store, placeholder
formatting, the resolver and the TranslationEngine API.

Python 3.13+.
"""

from .catalog import Catalog, CatalogContexts, LanguageEntry, Variant
from .engine import RefreshListener, TranslationEngine
from .formatter import coerce_args, format_string
from .plural_rules import (
    PluralRule,
    PluralSelector,
    coerce_plural_rule,
    compile_plural_rule,
    default_form_index,
)
from .resolver import Resolver, TranslationRequest

__all__ = [
    "Catalog",
    "CatalogContexts",
    "LanguageEntry",
    "PluralRule",
    "PluralSelector",
    "RefreshListener",
    "Resolver",
    "TranslationEngine",
    "TranslationRequest",
    "Variant",
    "coerce_args",
    "coerce_plural_rule",
    "compile_plural_rule",
    "default_form_index",
    "format_string",
]
