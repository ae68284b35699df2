"""Tests for catalog.py - language registration and lookup."""

from __future__ import annotations

import logging

import pytest

from j18s.diagnostics import InvalidPluralRuleError
from j18s.runtime.catalog import Catalog, LanguageEntry
from j18s.runtime.plural_rules import PluralRule


class TestRegister:
    """Catalog.register() behavior."""

    def test_returns_normalized_key(self) -> None:
        catalog = Catalog()
        assert catalog.register("et", {}) == "et"
        assert catalog.register(None, {}) == ""

    def test_default_rule_installed(self) -> None:
        catalog = Catalog()
        catalog.register("et", {"default": {}})
        selector = catalog.get_selector("et")
        assert isinstance(selector, PluralRule)
        assert (selector(1), selector(2)) == (0, 1)

    def test_callable_rule_kept(self) -> None:
        def always_two(count: object) -> int:
            return 2

        catalog = Catalog()
        catalog.register("xx", {}, always_two)
        assert catalog.get_selector("xx") is always_two

    def test_none_contexts_registers_no_texts(self) -> None:
        catalog = Catalog()
        catalog.register("et", None)
        assert catalog.has_language("et")
        assert catalog.get_variant("et", "default", "Hello") is None

    def test_reregistration_replaces_wholesale(self) -> None:
        """No merging: texts from the first registration disappear."""
        catalog = Catalog()
        catalog.register("et", {"default": {"Hello": "Tere", "Bye": "Head aega"}})
        catalog.register("et", {"default": {"Hello": "Tervist"}})
        assert catalog.get_variant("et", "default", "Hello") == "Tervist"
        assert catalog.get_variant("et", "default", "Bye") is None
        assert catalog.languages == ("et",)

    def test_contexts_held_by_reference(self) -> None:
        contexts: dict[str, dict[str, str]] = {"default": {}}
        catalog = Catalog()
        catalog.register("et", contexts)
        contexts["default"]["Hello"] = "Tere"
        assert catalog.get_variant("et", "default", "Hello") == "Tere"

    def test_invalid_rule_leaves_catalog_unchanged(self) -> None:
        catalog = Catalog()
        catalog.register("et", {"default": {"Hello": "Tere"}})
        with pytest.raises(InvalidPluralRuleError):
            catalog.register("et", {"default": {"Hello": "Tervist"}}, "plural=n $ 1")
        assert catalog.get_variant("et", "default", "Hello") == "Tere"

    def test_registration_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        catalog = Catalog()
        with caplog.at_level(logging.INFO, logger="j18s.runtime.catalog"):
            catalog.register("et", {"default": {}, "menu": {}})
            catalog.register("et", {})
        assert "Registered language 'et' (2 contexts)" in caplog.text
        assert "Replaced language 'et' (0 contexts)" in caplog.text


class TestLookup:
    """Variant and entry lookup."""

    @pytest.fixture
    def catalog(self) -> Catalog:
        catalog = Catalog()
        catalog.register(
            "et",
            {"default": {"cat": ["kass", "kassid"]}, "menu": {"File": "Fail"}},
        )
        return catalog

    def test_variant_sequence(self, catalog: Catalog) -> None:
        assert catalog.get_variant("et", "default", "cat") == ["kass", "kassid"]

    def test_variant_string(self, catalog: Catalog) -> None:
        assert catalog.get_variant("et", "menu", "File") == "Fail"

    @pytest.mark.parametrize(
        ("language", "context", "text"),
        [
            ("de", "default", "cat"),
            ("et", "missing", "cat"),
            ("et", "default", "dog"),
            ("et", "menu", "cat"),
        ],
    )
    def test_missing_levels_return_none(
        self, catalog: Catalog, language: str, context: str, text: str
    ) -> None:
        assert catalog.get_variant(language, context, text) is None

    def test_get_entry(self, catalog: Catalog) -> None:
        entry = catalog.get_entry("et")
        assert isinstance(entry, LanguageEntry)
        assert set(entry.contexts) == {"default", "menu"}
        assert catalog.get_entry("de") is None

    def test_unregistered_selector_is_none(self, catalog: Catalog) -> None:
        assert catalog.get_selector("de") is None

    def test_language_keys_are_opaque(self, catalog: Catalog) -> None:
        """Region separators are not normalized."""
        catalog.register("en-US", {})
        assert "en-US" in catalog
        assert "en_US" not in catalog


class TestRemoveAndIntrospection:
    """remove(), languages, len() and repr()."""

    def test_remove(self) -> None:
        catalog = Catalog()
        catalog.register("et", {})
        assert catalog.remove("et") is True
        assert catalog.remove("et") is False
        assert len(catalog) == 0

    def test_languages_in_registration_order(self) -> None:
        catalog = Catalog()
        for language in ("pl", "et", "en"):
            catalog.register(language, {})
        assert catalog.languages == ("pl", "et", "en")
        assert len(catalog) == 3
        assert repr(catalog) == "Catalog(languages=('pl', 'et', 'en'))"
