"""Placeholder substitution for resolved translation templates.

Supports two printf-like placeholder forms:

- Positional ``%1$s`` / ``%2$d``: 1-based index into the arguments
- Sequential ``%s`` / ``%d``: consume arguments left to right

``%s`` and ``%d`` are interchangeable; values are substituted with str()
and no numeric formatting is applied. A placeholder without a matching
argument stays in the output verbatim.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from j18s.diagnostics import ErrorTemplate

__all__ = ["coerce_args", "format_string"]

logger = logging.getLogger(__name__)

# One scan recognizes both forms, so substituted values are never rescanned.
# Positional is tried first at each position: "%1$s" is not "%" + "1$s".
_PLACEHOLDER_PATTERN = re.compile(r"%(\d+)\$[sd]|%[sd]")


def coerce_args(args: object) -> tuple[object, ...]:
    """Normalize replacement arguments to a tuple.

    A lone string is one argument, not a sequence of characters.

    Args:
        args: None, a single string, or an iterable of values

    Returns:
        Tuple of replacement values

    Example:
        >>> coerce_args(None)
        ()
        >>> coerce_args("Ann")
        ('Ann',)
        >>> coerce_args(["Ann", 5])
        ('Ann', 5)
    """
    if args is None:
        return ()
    if isinstance(args, str):
        return (args,)
    if isinstance(args, Iterable):
        return tuple(args)
    return (args,)


def format_string(template: str | None, args: Iterable[object] | None = None) -> str:
    """Substitute placeholders in template.

    Args:
        template: Template text (None is treated as "")
        args: Replacement values (None is treated as no arguments). A None
            value counts as missing.

    Returns:
        Formatted string

    Example:
        >>> format_string("Hello %s, you have %d messages", ["Ann", 5])
        'Hello Ann, you have 5 messages'
        >>> format_string("%2$s before %1$s", ["B", "A"])
        'A before B'
        >>> format_string("%s and %s", ["X"])
        'X and %s'
    """
    if not template:
        return ""
    values = coerce_args(args)
    sequential = 0

    def substitute(match: re.Match[str]) -> str:
        nonlocal sequential
        position = match.group(1)
        if position is not None:
            # "%0$s" addresses the first argument
            index = (int(position) or 1) - 1
        else:
            index = sequential
            sequential += 1
        if index < len(values) and values[index] is not None:
            return str(values[index])
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", ErrorTemplate.undefined_placeholder_argument(match.group(0)))
        return match.group(0)

    return _PLACEHOLDER_PATTERN.sub(substitute, template)
