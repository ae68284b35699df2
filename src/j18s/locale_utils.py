"""Language identifier utilities.

Centralizes the normalization of language keys used by the catalog and the
engine, plus system language detection backed by Babel.

Catalog keys are opaque strings: "en-US" and "en_US" are different keys.
Only absent values are normalized (to the empty string).

Python 3.13+.
"""

from __future__ import annotations

import logging

from j18s.constants import DEFAULT_LANGUAGE

__all__ = [
    "get_system_language",
    "normalize_language",
]

logger = logging.getLogger(__name__)


def normalize_language(language: object) -> str:
    """Normalize a language identifier to a catalog key.

    Args:
        language: Language identifier; None or empty normalizes to ""

    Returns:
        String key used for catalog storage and lookup

    Example:
        >>> normalize_language("et")
        'et'
        >>> normalize_language(None)
        ''
        >>> normalize_language(42)
        '42'
    """
    if language is None:
        return ""
    return str(language)


def get_system_language(*, fallback: str = DEFAULT_LANGUAGE) -> str:
    """Detect the system language using Babel.

    Delegates to babel.core.default_locale() for the LC_MESSAGES category,
    which inspects LC_MESSAGES, LANGUAGE, LC_ALL, LC_CTYPE and LANG (in that
    order) and strips encoding suffixes.

    Args:
        fallback: Language returned when nothing can be detected

    Returns:
        Detected locale identifier in POSIX form (e.g., "et_EE"), or fallback

    Example:
        >>> import os
        >>> os.environ["LANGUAGE"] = "et_EE.UTF-8"
        >>> get_system_language()
        'et_EE'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.core import default_locale  # noqa: PLC0415

    detected = default_locale("LC_MESSAGES")
    if not detected:
        logger.debug("System language not detected, using fallback: %s", fallback)
        return fallback
    return detected
