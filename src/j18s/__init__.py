"""j18s - translation resolution and pluralization engine.

Resolves source strings into localized, placeholder-substituted output for
the active language, with gettext-style plural rules and per-entity
translation metadata that survives language switches.

Public API:
    TranslationEngine - Catalog, active language and string translation
    ElementTranslator - Translation of bound entities with refresh support
    TranslationRequest - Explicit request value for the resolver
    compile_plural_rule - Compile "nplurals=N; plural=..." into a selector
    format_string - %s / %1$s placeholder substitution

Exceptions:
    J18sError - Base exception class
    InvalidPluralRuleError - Plural rule failed to compile
    RefreshError - Bulk refresh aborted (RefreshPolicy.ABORT only)

Submodules:
    j18s.runtime - Catalog, resolver, formatter and plural rules
    j18s.binding - Metadata stores, host adapters and ElementTranslator
    j18s.diagnostics - Diagnostic codes, templates and formatting
"""

from .binding import ElementTranslator, UpdateOptions
from .diagnostics import InvalidPluralRuleError, J18sError, RefreshError
from .enums import RefreshPolicy
from .runtime import (
    PluralRule,
    TranslationEngine,
    TranslationRequest,
    compile_plural_rule,
    format_string,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("j18s")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ElementTranslator",
    "InvalidPluralRuleError",
    "J18sError",
    "PluralRule",
    "RefreshError",
    "RefreshPolicy",
    "TranslationEngine",
    "TranslationRequest",
    "UpdateOptions",
    "__version__",
    "compile_plural_rule",
    "format_string",
]
