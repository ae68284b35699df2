"""Pytest configuration for the j18s test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from j18s import TranslationEngine
from j18s.binding import ElementCollection, ElementTranslator

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def engine() -> TranslationEngine:
    """Engine with English active and Estonian + Polish registered."""
    engine = TranslationEngine("en")
    engine.register_language(
        "en",
        {"default": {"cat": ["1 cat", "%d cats"]}},
    )
    engine.register_language(
        "et",
        {
            "default": {
                "Hello": "Tere",
                "cat": ["%d kass", "%d kassi"],
                "%s has %d messages": "%s-l on %d sõnumit",
            },
            "menu": {"File": "Fail"},
        },
    )
    engine.register_language(
        "pl",
        {"default": {"file": ["%d plik", "%d pliki", "%d plików"]}},
        "nplurals=3; plural=n==1 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2",
    )
    return engine


@pytest.fixture
def document() -> ElementCollection:
    """Empty document stand-in."""
    return ElementCollection()


@pytest.fixture
def translator(engine: TranslationEngine, document: ElementCollection) -> ElementTranslator:
    """Translator refreshing the marked elements of document."""
    return ElementTranslator(engine, document.marked)
