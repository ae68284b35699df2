"""Enumerations for j18s type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum

__all__ = ["RefreshPolicy", "StoreKind"]


class RefreshPolicy(StrEnum):
    """Behavior of a bulk refresh when one entity fails to translate.

    StrEnum provides automatic string conversion: str(RefreshPolicy.CONTINUE) == "continue"
    """

    CONTINUE = "continue"
    """Keep refreshing the remaining entities, report failures at the end."""

    ABORT = "abort"
    """Stop at the first failure and raise RefreshError with the partial report."""


class StoreKind(StrEnum):
    """Storage medium used for per-entity translation metadata.

    StrEnum provides automatic string conversion: str(StoreKind.DATASET) == "dataset"
    """

    DATASET = "dataset"
    """Structured key-value store, camelCase keys (j18sPluralCount)."""

    ATTRIBUTE = "attribute"
    """Flat string attributes, hyphenated keys (data-j18s-plural-count)."""
