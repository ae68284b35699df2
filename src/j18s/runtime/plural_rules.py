"""Plural rule compiler for gettext-style plural expressions.

Turns a rule header such as ``"nplurals=3; plural=n%10==1 && n%100!=11 ? 0 : n != 0 ? 1 : 2"``
into a pure callable mapping a count to a plural form index.

The expression is never handed to eval(). It is tokenized and parsed into a
small immutable AST restricted to integer literals, the variable ``n`` and the
C operators gettext rules use, then evaluated by walking that AST.

Grammar (C precedence, lowest first):
    conditional := or_expr ("?" conditional ":" conditional)?
    or_expr     := and_expr ("||" and_expr)*
    and_expr    := equality ("&&" equality)*
    equality    := relation (("==" | "!=") relation)*
    relation    := additive (("<" | "<=" | ">" | ">=") additive)*
    additive    := term (("+" | "-") term)*
    term        := unary (("*" | "/" | "%") unary)*
    unary       := ("!" | "-" | "+") unary | primary
    primary     := INTEGER | "n" | "(" conditional ")"

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from j18s.constants import (
    DEFAULT_PLURAL_RULE,
    MAX_RULE_DEPTH,
    MAX_RULE_LENGTH,
    PLURAL_RULE_CACHE_SIZE,
)
from j18s.diagnostics import ErrorTemplate, InvalidPluralRuleError

__all__ = [
    "PluralRule",
    "PluralSelector",
    "coerce_plural_rule",
    "compile_plural_rule",
    "default_form_index",
]

type PluralSelector = Callable[[int | float | Decimal], int]
"""Any callable mapping a count to a plural form index."""

type _Number = int | float

# Longest operators first so "<=" wins over "<".
_OPERATORS: tuple[str, ...] = (
    "||", "&&", "==", "!=", "<=", ">=",
    "<", ">", "+", "-", "*", "/", "%", "!", "?", ":", "(", ")",
)

_ASCII_DIGITS: str = "0123456789"


# ============================================================================
# AST
# ============================================================================


@dataclass(frozen=True, slots=True)
class _Literal:
    value: int


@dataclass(frozen=True, slots=True)
class _Variable:
    """The count, always named ``n``."""


@dataclass(frozen=True, slots=True)
class _Unary:
    op: str
    operand: _Node


@dataclass(frozen=True, slots=True)
class _Binary:
    op: str
    left: _Node
    right: _Node


@dataclass(frozen=True, slots=True)
class _Conditional:
    test: _Node
    then: _Node
    otherwise: _Node


type _Node = _Literal | _Variable | _Unary | _Binary | _Conditional


# ============================================================================
# TOKENIZER
# ============================================================================


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str  # "int", "n", "op", "eof"
    text: str
    pos: int


def _tokenize(expression: str, source: str, offset: int) -> list[_Token]:
    """Split a plural expression into tokens.

    Args:
        expression: Expression text (the part after "plural=")
        source: Full rule header, for error reporting
        offset: Position of expression within source

    Returns:
        Token list terminated by an "eof" token

    Raises:
        InvalidPluralRuleError: On any character outside the grammar
    """
    tokens: list[_Token] = []
    pos = 0
    length = len(expression)
    while pos < length:
        ch = expression[pos]
        if ch.isspace():
            pos += 1
            continue
        if ch in _ASCII_DIGITS:
            start = pos
            while pos < length and expression[pos] in _ASCII_DIGITS:
                pos += 1
            tokens.append(_Token("int", expression[start:pos], offset + start))
            continue
        if ch == "n":
            # "n" must not run into other identifier characters ("nn", "n1", "not")
            nxt = expression[pos + 1] if pos + 1 < length else ""
            if nxt.isalnum() or nxt == "_":
                diagnostic = ErrorTemplate.invalid_plural_rule(
                    "only the variable 'n' is allowed", source, offset + pos
                )
                raise InvalidPluralRuleError(diagnostic)
            tokens.append(_Token("n", ch, offset + pos))
            pos += 1
            continue
        for op in _OPERATORS:
            if expression.startswith(op, pos):
                tokens.append(_Token("op", op, offset + pos))
                pos += len(op)
                break
        else:
            diagnostic = ErrorTemplate.invalid_plural_rule(
                f"unexpected character {ch!r}", source, offset + pos
            )
            raise InvalidPluralRuleError(diagnostic)
    tokens.append(_Token("eof", "", offset + length))
    return tokens


# ============================================================================
# PARSER
# ============================================================================


class _Parser:
    """Recursive-descent parser over a token list.

    Binary levels are table-driven; each entry lists the operators accepted
    at that precedence level, lowest precedence first.
    """

    _LEVELS: tuple[tuple[str, ...], ...] = (
        ("||",),
        ("&&",),
        ("==", "!="),
        ("<", "<=", ">", ">="),
        ("+", "-"),
        ("*", "/", "%"),
    )

    __slots__ = ("_depth", "_index", "_max_depth", "_source", "_tokens")

    def __init__(self, tokens: list[_Token], source: str, max_depth: int) -> None:
        self._tokens = tokens
        self._source = source
        self._index = 0
        self._depth = 0
        self._max_depth = max_depth

    @property
    def _current(self) -> _Token:
        return self._tokens[self._index]

    def _fail(self, reason: str, token: _Token) -> InvalidPluralRuleError:
        return InvalidPluralRuleError(
            ErrorTemplate.invalid_plural_rule(reason, self._source, token.pos)
        )

    def _accept(self, *ops: str) -> str | None:
        token = self._current
        if token.kind == "op" and token.text in ops:
            self._index += 1
            return token.text
        return None

    def _expect(self, op: str) -> None:
        if self._accept(op) is None:
            token = self._current
            found = "end of expression" if token.kind == "eof" else repr(token.text)
            raise self._fail(f"expected {op!r}, found {found}", token)

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > self._max_depth:
            diagnostic = ErrorTemplate.plural_rule_too_deep(
                self._source, self._current.pos, self._max_depth
            )
            raise InvalidPluralRuleError(diagnostic)

    def parse(self) -> _Node:
        if self._current.kind == "eof":
            raise self._fail("empty plural expression", self._current)
        node = self._conditional()
        if self._current.kind != "eof":
            raise self._fail(f"unexpected {self._current.text!r}", self._current)
        return node

    def _conditional(self) -> _Node:
        self._enter()
        test = self._binary(0)
        if self._accept("?") is not None:
            then = self._conditional()
            self._expect(":")
            otherwise = self._conditional()
            test = _Conditional(test, then, otherwise)
        self._depth -= 1
        return test

    def _binary(self, level: int) -> _Node:
        if level == len(self._LEVELS):
            return self._unary()
        ops = self._LEVELS[level]
        left = self._binary(level + 1)
        while (op := self._accept(*ops)) is not None:
            right = self._binary(level + 1)
            left = _Binary(op, left, right)
        return left

    def _unary(self) -> _Node:
        op = self._accept("!", "-", "+")
        if op is not None:
            self._enter()
            node = _Unary(op, self._unary())
            self._depth -= 1
            return node
        return self._primary()

    def _primary(self) -> _Node:
        token = self._current
        match token.kind:
            case "int":
                self._index += 1
                return _Literal(int(token.text))
            case "n":
                self._index += 1
                return _Variable()
            case "op" if token.text == "(":
                self._index += 1
                node = self._conditional()
                self._expect(")")
                return node
            case "eof":
                raise self._fail("unexpected end of expression", token)
            case _:
                raise self._fail(f"unexpected {token.text!r}", token)


# ============================================================================
# EVALUATION
# ============================================================================


class _NotANumber(ArithmeticError):
    """Internal signal: the expression has no numeric value (division by zero)."""


def _c_div(a: _Number, b: _Number) -> _Number:
    if b == 0:
        raise _NotANumber
    if isinstance(a, int) and isinstance(b, int):
        quotient = abs(a) // abs(b)
        return quotient if (a >= 0) == (b >= 0) else -quotient
    return math.trunc(a / b)


def _c_mod(a: _Number, b: _Number) -> _Number:
    if b == 0:
        raise _NotANumber
    if isinstance(a, int) and isinstance(b, int):
        return a - b * _c_div(a, b)
    return math.fmod(a, b)


def _evaluate(node: _Node, n: _Number) -> _Number:
    """Evaluate an expression node with C semantics (booleans are 0/1)."""
    match node:
        case _Literal(value):
            return value
        case _Variable():
            return n
        case _Unary("!", operand):
            return int(not _evaluate(operand, n))
        case _Unary("-", operand):
            return -_evaluate(operand, n)
        case _Unary(_, operand):
            return _evaluate(operand, n)
        case _Binary("||", left, right):
            return int(bool(_evaluate(left, n)) or bool(_evaluate(right, n)))
        case _Binary("&&", left, right):
            return int(bool(_evaluate(left, n)) and bool(_evaluate(right, n)))
        case _Conditional(test, then, otherwise):
            return _evaluate(then, n) if _evaluate(test, n) else _evaluate(otherwise, n)
        case _Binary(op, left, right):
            a = _evaluate(left, n)
            b = _evaluate(right, n)
            match op:
                case "==":
                    return int(a == b)
                case "!=":
                    return int(a != b)
                case "<":
                    return int(a < b)
                case "<=":
                    return int(a <= b)
                case ">":
                    return int(a > b)
                case ">=":
                    return int(a >= b)
                case "+":
                    return a + b
                case "-":
                    return a - b
                case "*":
                    return a * b
                case "/":
                    return _c_div(a, b)
                case _:
                    return _c_mod(a, b)
    msg = f"Unknown plural expression node: {node!r}"
    raise TypeError(msg)


def _to_operand(count: int | float | Decimal) -> _Number:
    """Convert a count to the operand bound to ``n``."""
    if isinstance(count, bool):
        return int(count)
    if isinstance(count, int):
        return count
    value = float(count)
    if not math.isfinite(value):
        raise _NotANumber
    if value.is_integer():
        return int(value)
    return value


def _to_form_index(value: _Number) -> int:
    """Collapse an evaluation result to a form index: falsy, NaN and negatives give 0."""
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    index = int(value)
    return index if index > 0 else 0


def default_form_index(count: int | float | Decimal) -> int:
    """Binary singular/plural guess used when a language has no catalog entry.

    Args:
        count: Plural count

    Returns:
        0 when count equals 1, otherwise 1

    Example:
        >>> default_form_index(1), default_form_index(0), default_form_index(5)
        (0, 1, 1)
    """
    return 0 if count == 1 else 1


# ============================================================================
# PUBLIC API
# ============================================================================


@dataclass(frozen=True, slots=True)
class PluralRule:
    """Compiled plural rule.

    Immutable and side-effect free; one instance is shared by every lookup
    against the language it was registered for.

    Attributes:
        expression: Rule header the rule was compiled from
        nplurals: Declared number of forms (None when the header omits it)

    Example:
        >>> rule = compile_plural_rule("nplurals=2; plural=n != 1")
        >>> rule(0), rule(1), rule(2)
        (1, 0, 1)
        >>> rule.nplurals
        2
    """

    expression: str
    nplurals: int | None
    _root: _Node

    def __call__(self, count: int | float | Decimal) -> int:
        """Select the plural form index for count.

        Args:
            count: Non-negative quantity

        Returns:
            Non-negative form index. Division by zero, a negative
            result or a non-finite count selects form 0.
        """
        try:
            value = _evaluate(self._root, _to_operand(count))
        except _NotANumber:
            return 0
        return _to_form_index(value)


def _parse_header(source: str) -> tuple[int | None, str, int]:
    """Split a rule header into (nplurals, expression, expression offset).

    Raises:
        InvalidPluralRuleError: On missing "plural=", unknown or repeated keys,
            or a malformed nplurals value
    """
    nplurals: int | None = None
    expression: str | None = None
    expression_offset = 0
    seen: set[str] = set()

    offset = 0
    for clause in source.split(";"):
        clause_offset = offset
        offset += len(clause) + 1
        if not clause.strip():
            continue
        key, sep, value = clause.partition("=")
        key = key.strip()
        if not sep:
            diagnostic = ErrorTemplate.invalid_plural_rule(
                f"expected 'key=value', found {clause.strip()!r}", source, clause_offset
            )
            raise InvalidPluralRuleError(diagnostic)
        if key in seen:
            diagnostic = ErrorTemplate.invalid_plural_rule(
                f"duplicate key {key!r}", source, clause_offset
            )
            raise InvalidPluralRuleError(diagnostic)
        seen.add(key)
        match key:
            case "nplurals":
                stripped = value.strip()
                digits = stripped and all(ch in _ASCII_DIGITS for ch in stripped)
                if not digits or int(stripped) < 1:
                    diagnostic = ErrorTemplate.invalid_plural_rule(
                        f"nplurals must be a positive integer, found {stripped!r}",
                        source,
                        clause_offset,
                    )
                    raise InvalidPluralRuleError(diagnostic)
                nplurals = int(stripped)
            case "plural":
                expression = value
                expression_offset = clause_offset + len(clause) - len(value)
            case _:
                diagnostic = ErrorTemplate.invalid_plural_rule(
                    f"unknown key {key!r}", source, clause_offset
                )
                raise InvalidPluralRuleError(diagnostic)

    if expression is None:
        diagnostic = ErrorTemplate.invalid_plural_rule("missing 'plural=' clause", source, 0)
        raise InvalidPluralRuleError(diagnostic)
    return nplurals, expression, expression_offset


@functools.lru_cache(maxsize=PLURAL_RULE_CACHE_SIZE)
def _compile_cached(source: str) -> PluralRule:
    nplurals, expression, expression_offset = _parse_header(source)
    tokens = _tokenize(expression, source, expression_offset)
    root = _Parser(tokens, source, MAX_RULE_DEPTH).parse()
    return PluralRule(expression=source, nplurals=nplurals, _root=root)


def compile_plural_rule(expression: str | None = None) -> PluralRule:
    """Compile a gettext plural rule header into a PluralRule.

    Compilation is memoized per expression string, so registering several
    languages with the same rule parses it once.

    Args:
        expression: Header like "nplurals=2; plural=n != 1". None or blank
            installs the default two-form rule.

    Returns:
        Compiled PluralRule

    Raises:
        InvalidPluralRuleError: If the header or expression is malformed,
            longer than MAX_RULE_LENGTH, or nested deeper than MAX_RULE_DEPTH

    Example:
        >>> rule = compile_plural_rule("nplurals=3; plural=n==1 ? 0 : n>=2 && n<=4 ? 1 : 2")
        >>> [rule(n) for n in (1, 3, 5)]
        [0, 1, 2]
    """
    if expression is None or not expression.strip():
        expression = DEFAULT_PLURAL_RULE
    source = expression.strip()
    if len(source) > MAX_RULE_LENGTH:
        diagnostic = ErrorTemplate.plural_rule_too_long(len(source), MAX_RULE_LENGTH)
        raise InvalidPluralRuleError(diagnostic)
    return _compile_cached(source)


def coerce_plural_rule(rule: str | PluralSelector | None) -> PluralSelector:
    """Return a selector for rule: callables verbatim, everything else compiled.

    Args:
        rule: Rule header, native selector callable, or None

    Returns:
        Plural selector callable

    Raises:
        InvalidPluralRuleError: If rule is neither a string, a callable nor None,
            or if the string fails to compile
    """
    if callable(rule):
        return rule
    if rule is not None and not isinstance(rule, str):
        diagnostic = ErrorTemplate.invalid_plural_rule(
            f"expected a rule string or callable, got {type(rule).__name__}", repr(rule)
        )
        raise InvalidPluralRuleError(diagnostic)
    return compile_plural_rule(rule)
