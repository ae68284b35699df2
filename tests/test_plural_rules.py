"""Tests for plural_rules.py - gettext plural rule compilation.

Coverage:
    - Default two-form rule and blank-rule fallback
    - Real-world rules (Polish, Russian, Arabic, Japanese)
    - C operator semantics (precedence, ternary, integer division, booleans)
    - Collapse policy: division by zero, negative results and non-finite counts select form 0
    - Compile-time errors with positions, length and depth limits
    - Memoization and coerce_plural_rule()
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from j18s.constants import DEFAULT_PLURAL_RULE, MAX_RULE_DEPTH, MAX_RULE_LENGTH
from j18s.diagnostics import DiagnosticCode, InvalidPluralRuleError
from j18s.runtime.plural_rules import (
    PluralRule,
    coerce_plural_rule,
    compile_plural_rule,
    default_form_index,
)

POLISH = (
    "nplurals=3; plural=n==1 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2"
)
RUSSIAN = (
    "nplurals=3; plural=(n%10==1 && n%100!=11?0:"
    "(n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20)?1:2));"
)
ARABIC = (
    "nplurals=6; plural=(n==0?0:n==1?1:n==2?2:n%100>=3 && n%100<=10?3:"
    "n%100>=11 && n%100<=99?4:5);"
)


class TestDefaultRule:
    """Rule installed when no expression is given."""

    @pytest.mark.parametrize("expression", [None, "", "   "])
    def test_missing_expression_uses_default(self, expression: str | None) -> None:
        """None and blank expressions compile to the n != 1 rule."""
        rule = compile_plural_rule(expression)
        assert rule.expression == DEFAULT_PLURAL_RULE
        assert rule.nplurals == 2

    def test_zero_selects_plural(self) -> None:
        """Count 0 selects the plural form, like ordinary n != 1."""
        rule = compile_plural_rule()
        assert rule(0) == 1
        assert rule(1) == 0
        assert rule(2) == 1

    @given(count=st.integers(min_value=0, max_value=10**9))
    def test_default_rule_matches_reference(self, count: int) -> None:
        """Compiled default rule agrees with default_form_index()."""
        event(f"singular={count == 1}")
        assert compile_plural_rule(None)(count) == default_form_index(count)


class TestRealWorldRules:
    """gettext rules as they appear in PO file headers."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, 2), (1, 0), (2, 1), (4, 1), (5, 2), (12, 2), (22, 1), (25, 2), (104, 1)],
    )
    def test_polish(self, count: int, expected: int) -> None:
        """Polish three-form rule."""
        assert compile_plural_rule(POLISH)(count) == expected

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(1, 0), (2, 1), (5, 2), (11, 2), (21, 0), (22, 1), (111, 2)],
    )
    def test_russian_with_trailing_semicolon(self, count: int, expected: int) -> None:
        """Russian rule with outer parentheses and trailing semicolon."""
        rule = compile_plural_rule(RUSSIAN)
        assert rule.nplurals == 3
        assert rule(count) == expected

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, 0), (1, 1), (2, 2), (3, 3), (10, 3), (11, 4), (99, 4), (100, 5), (102, 5)],
    )
    def test_arabic_six_forms(self, count: int, expected: int) -> None:
        """Arabic rule selects all six forms."""
        assert compile_plural_rule(ARABIC)(count) == expected

    def test_single_form_language(self) -> None:
        """Languages without plurals always select form 0."""
        rule = compile_plural_rule("nplurals=1; plural=0;")
        assert [rule(n) for n in (0, 1, 2, 100)] == [0, 0, 0, 0]

    def test_nplurals_is_optional(self) -> None:
        """A bare plural= clause compiles with nplurals None."""
        rule = compile_plural_rule("plural=n > 1")
        assert rule.nplurals is None
        assert rule(1) == 0
        assert rule(2) == 1


class TestOperatorSemantics:
    """C operator behavior of the expression evaluator."""

    @pytest.mark.parametrize(
        ("expression", "count", "expected"),
        [
            ("1 + 2 * 3", 0, 7),
            ("(1 + 2) * 3", 0, 9),
            ("n / 2", 5, 2),
            ("n % 3", 7, 1),
            ("n == 1", 1, 1),
            ("n == 1", 2, 0),
            ("!n", 0, 1),
            ("!n", 5, 0),
            ("-n + 3", 1, 2),
            ("+n", 4, 4),
            ("n || 0 && 0", 1, 1),
            ("n >= 2 && n <= 4", 3, 1),
            ("n < 2 || n > 4", 3, 0),
            ("n == 0 ? 0 : n == 1 ? 1 : 2", 0, 0),
            ("n == 0 ? 0 : n == 1 ? 1 : 2", 1, 1),
            ("n == 0 ? 0 : n == 1 ? 1 : 2", 7, 2),
            ("n != 1 ? n > 4 ? 2 : 1 : 0", 5, 2),
        ],
    )
    def test_expression(self, expression: str, count: int, expected: int) -> None:
        """Expression evaluates with C precedence and integer semantics."""
        assert compile_plural_rule(f"plural={expression}")(count) == expected

    def test_whitespace_is_insignificant(self) -> None:
        """Spaces, tabs and newlines between tokens are ignored."""
        rule = compile_plural_rule("nplurals=2;\n\tplural = ( n\t!= 1 )")
        assert rule(1) == 0
        assert rule(3) == 1


class TestCollapsePolicy:
    """Results without a usable value collapse to form 0."""

    @pytest.mark.parametrize("expression", ["n / 0", "n % 0", "(n - n) ? 1 : n / (n - n)"])
    def test_division_by_zero_selects_form_zero(self, expression: str) -> None:
        """Division or modulo by zero never raises."""
        assert compile_plural_rule(f"plural={expression}")(3) == 0

    def test_negative_result_selects_form_zero(self) -> None:
        """Negative indexes are never returned."""
        rule = compile_plural_rule("plural=n - 5")
        assert rule(1) == 0
        assert rule(7) == 2

    def test_false_result_selects_form_zero(self) -> None:
        """Falsy evaluation gives 0."""
        assert compile_plural_rule("plural=0")(10) == 0


class TestCountTypes:
    """Counts other than int."""

    def test_integral_float_behaves_like_int(self) -> None:
        """1.0 is singular under the default rule."""
        assert compile_plural_rule()(1.0) == 0

    def test_fractional_float_is_plural(self) -> None:
        """2.5 != 1 selects the plural form."""
        assert compile_plural_rule()(2.5) == 1

    def test_decimal_count(self) -> None:
        """Decimal counts are accepted."""
        rule = compile_plural_rule(POLISH)
        assert rule(Decimal("1")) == 0
        assert rule(Decimal("3")) == 1

    def test_bool_count(self) -> None:
        """True counts as 1."""
        assert compile_plural_rule()(True) == 0

    @pytest.mark.parametrize(
        "count", [float("inf"), float("-inf"), float("nan"), Decimal("Infinity"), Decimal("NaN")]
    )
    def test_non_finite_count_selects_form_zero(self, count: float | Decimal) -> None:
        """Modulo and division over infinity or NaN never raise."""
        assert compile_plural_rule(POLISH)(count) == 0
        assert compile_plural_rule("nplurals=2; plural=n / 2 > 1")(count) == 0

    def test_huge_decimal_selects_form_zero(self) -> None:
        """Decimals beyond float range overflow to infinity."""
        assert compile_plural_rule(POLISH)(Decimal("1e400")) == 0


class TestCompileErrors:
    """Malformed rules fail at compile time."""

    @pytest.mark.parametrize(
        "expression",
        [
            "nplurals=2; plural=n !!= 1",
            "nplurals=2",
            "nplurals=x; plural=n",
            "nplurals=0; plural=0",
            "plural=",
            "plural=(n",
            "plural=n)",
            "plural=foo",
            "plural=n1",
            "plural=1 ? 2",
            "plural=n; plural=n",
            "nplurals=2; extra=1; plural=n",
            "garbage",
            "plural=import os",
            "plural=__import__('os')",
            "plural=n ** 2",
        ],
    )
    def test_invalid_rule_raises(self, expression: str) -> None:
        """Every malformed rule raises InvalidPluralRuleError."""
        with pytest.raises(InvalidPluralRuleError) as exc_info:
            compile_plural_rule(expression)
        assert exc_info.value.diagnostic is not None

    def test_error_is_value_error(self) -> None:
        """InvalidPluralRuleError can be caught as ValueError."""
        with pytest.raises(ValueError, match="INVALID_PLURAL_RULE"):
            compile_plural_rule("plural=n $ 1")

    def test_error_position_points_into_source(self) -> None:
        """Diagnostic position is the offending character's offset in the header."""
        source = "nplurals=2; plural=n $ 1"
        with pytest.raises(InvalidPluralRuleError) as exc_info:
            compile_plural_rule(source)
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code is DiagnosticCode.INVALID_PLURAL_RULE
        assert diagnostic.position == source.index("$")
        assert diagnostic.source == source

    def test_length_limit(self) -> None:
        """Rules longer than MAX_RULE_LENGTH are rejected before parsing."""
        source = "plural=" + "n+" * MAX_RULE_LENGTH + "n"
        with pytest.raises(InvalidPluralRuleError) as exc_info:
            compile_plural_rule(source)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.PLURAL_RULE_TOO_LONG

    @pytest.mark.parametrize(
        "expression",
        [
            "(" * (MAX_RULE_DEPTH + 10) + "n" + ")" * (MAX_RULE_DEPTH + 10),
            "!" * (MAX_RULE_DEPTH + 10) + "n",
        ],
    )
    def test_depth_limit(self, expression: str) -> None:
        """Deep nesting is rejected instead of exhausting the stack."""
        with pytest.raises(InvalidPluralRuleError) as exc_info:
            compile_plural_rule(f"plural={expression}")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.PLURAL_RULE_TOO_DEEP

    @given(garbage=st.text(alphabet="abcdefghijklmopqrstuvwxyz$#@'\"[]{}", min_size=1))
    def test_identifiers_other_than_n_rejected(self, garbage: str) -> None:
        """No text built from foreign characters compiles."""
        with pytest.raises(InvalidPluralRuleError):
            compile_plural_rule(f"plural={garbage}")


class TestPluralRuleObject:
    """PluralRule value semantics and memoization."""

    def test_rule_is_frozen(self) -> None:
        """Compiled rules cannot be mutated."""
        rule = compile_plural_rule()
        with pytest.raises(dataclasses.FrozenInstanceError):
            rule.nplurals = 5  # type: ignore[misc]

    def test_compilation_is_memoized(self) -> None:
        """Same header (modulo outer whitespace) yields the same object."""
        first = compile_plural_rule("nplurals=2; plural=n > 1")
        second = compile_plural_rule("  nplurals=2; plural=n > 1  ")
        assert first is second

    @given(count=st.integers(min_value=0, max_value=10**6))
    def test_results_are_non_negative_ints(self, count: int) -> None:
        """Every count maps to an int in range for the declared nplurals."""
        rule = compile_plural_rule(POLISH)
        form = rule(count)
        assert isinstance(form, int)
        assert rule.nplurals is not None
        assert 0 <= form < rule.nplurals


class TestCoercePluralRule:
    """coerce_plural_rule() selection between verbatim and compiled."""

    def test_callable_used_verbatim(self) -> None:
        """Native selectors are not wrapped."""

        def selector(count: int) -> int:
            return 0

        assert coerce_plural_rule(selector) is selector

    def test_string_is_compiled(self) -> None:
        """Strings compile to PluralRule."""
        assert isinstance(coerce_plural_rule("plural=n > 1"), PluralRule)

    def test_none_is_default(self) -> None:
        """None compiles to the default rule."""
        rule = coerce_plural_rule(None)
        assert isinstance(rule, PluralRule)
        assert rule.expression == DEFAULT_PLURAL_RULE

    def test_other_types_rejected(self) -> None:
        """Numbers are neither rules nor selectors."""
        with pytest.raises(InvalidPluralRuleError):
            coerce_plural_rule(42)  # type: ignore[arg-type]
