"""Evaluate an expression tree against one message."""

from __future__ import annotations

from collections.abc import Mapping

from mailfilter.filter import matcher
from mailfilter.filter.ast_nodes import And, Expression, MatchClause, Or


def field_value(message: Mapping[str, str], field: str) -> str:
    """Look up a field, treating an absent field as the empty string."""
    value = message.get(field)
    if value is None:
        return ""
    return value


def evaluate(expression: Expression, message: Mapping[str, str]) -> bool:
    """Evaluate ``expression`` against ``message``.

    ``And`` and ``Or`` never look at their right side when the left side
    already decides the result, so fields referenced only on the right are
    not fetched from the message.
    """
    if isinstance(expression, MatchClause):
        value = field_value(message, expression.field)
        return matcher.apply(expression.operator, value, expression.value)
    if isinstance(expression, And):
        if not evaluate(expression.left, message):
            return False
        return evaluate(expression.right, message)
    if isinstance(expression, Or):
        if evaluate(expression.left, message):
            return True
        return evaluate(expression.right, message)
    raise TypeError(f"Unknown expression node: {expression!r}")
