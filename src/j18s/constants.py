"""Shared constants for j18s.

This module provides centralized configuration constants used across the
runtime and binding packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Translation defaults: Values assumed when a request omits a field
- Metadata naming: Key prefix and serialization conventions for bound entities
- Rule limits: Size constraints for plural rule expressions

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Translation defaults
    "DEFAULT_LANGUAGE",
    "DEFAULT_CONTEXT",
    "DEFAULT_PLURAL_COUNT",
    "DEFAULT_PLURAL_RULE",
    # Metadata naming
    "METADATA_PREFIX",
    "TRANSLATE_CLASS_NAME",
    "TEXT_ARGS_SEPARATOR",
    # Rule limits
    "MAX_RULE_LENGTH",
    "MAX_RULE_DEPTH",
    "PLURAL_RULE_CACHE_SIZE",
]

# ============================================================================
# TRANSLATION DEFAULTS
# ============================================================================

# Active language of a freshly constructed engine.
DEFAULT_LANGUAGE: str = "en"

# Context group used when a request names none.
DEFAULT_CONTEXT: str = "default"

# Plural count assumed when a request names none (selects the singular form).
DEFAULT_PLURAL_COUNT: int = 1

# Two-form rule installed when a language is registered without one.
DEFAULT_PLURAL_RULE: str = "nplurals=2; plural=n != 1"

# ============================================================================
# METADATA NAMING
# ============================================================================

# Prefix for every metadata key stored on a bound entity.
# Structured stores get "j18sPluralCount", flat stores get "data-j18s-plural-count".
METADATA_PREFIX: str = "j18s"

# Class name marking an entity as tracked for translation refreshes.
TRANSLATE_CLASS_NAME: str = "j18s-translate"

# Joins text arguments when the storage medium only holds strings.
TEXT_ARGS_SEPARATOR: str = "; "

# ============================================================================
# RULE LIMITS
# ============================================================================

# Maximum plural rule header length in characters.
# Real gettext rules are under 200 characters; the largest (Arabic) is ~110.
MAX_RULE_LENGTH: int = 1024

# Maximum nesting depth while parsing a plural expression.
# Prevents RecursionError on adversarial input like "((((((...n))))))".
MAX_RULE_DEPTH: int = 50

# Compiled rules kept in memory, keyed by expression string.
PLURAL_RULE_CACHE_SIZE: int = 128
