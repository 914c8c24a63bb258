"""Per-operator comparison rules."""

from __future__ import annotations

import re
from collections.abc import Callable

REGEX_OPERATORS: frozenset[str] = frozenset({"=~", "!~"})
STRING_OPERATORS: frozenset[str] = frozenset({"^~", "$=", "!=", "="})


def _search(value: str, pattern: re.Pattern[str]) -> bool:
    return pattern.search(value) is not None


def _not_search(value: str, pattern: re.Pattern[str]) -> bool:
    return pattern.search(value) is None


# String comparisons are case-sensitive; only patterns know about /i.
_RULES: dict[str, Callable[[str, object], bool]] = {
    "=~": _search,
    "!~": _not_search,
    "^~": lambda value, literal: value.startswith(literal),
    "$=": lambda value, literal: value.endswith(literal),
    "!=": lambda value, literal: value != literal,
    "=": lambda value, literal: value == literal,
}


def apply(operator: str, field_value: str, operand: str | re.Pattern[str]) -> bool:
    """Test a field value against a literal or compiled pattern.

    Args:
        operator: One of ``=~ !~ ^~ $= != =``.
        field_value: The message field content ("" when absent).
        operand: A compiled pattern for ``=~``/``!~``, a string otherwise.

    Returns:
        Whether the field satisfies the operator.

    Raises:
        KeyError: If ``operator`` is not one of the six known operators.
            The parser never builds such a clause.
    """
    return _RULES[operator](field_value, operand)
