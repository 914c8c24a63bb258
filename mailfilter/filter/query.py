"""Compile a filter string once and evaluate it against many messages."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TypeVar

from mailfilter.filter.ast_nodes import Expression
from mailfilter.filter.evaluator import evaluate
from mailfilter.filter.lexer import tokenize
from mailfilter.filter.parser import parse

M = TypeVar("M", bound=Mapping[str, str])


@dataclass(frozen=True)
class CompiledFilter:
    """A parsed, immutable filter ready for repeated evaluation.

    Attributes:
        source: The filter text this was compiled from.
        expression: The expression tree, or None for a blank filter,
            which matches every message.
    """

    source: str
    expression: Expression | None

    def matches(self, message: Mapping[str, str]) -> bool:
        """Return whether ``message`` satisfies the filter."""
        if self.expression is None:
            return True
        return evaluate(self.expression, message)

    def select(self, messages: Iterable[M]) -> Iterator[M]:
        """Yield the matching messages, preserving their order."""
        for message in messages:
            if self.matches(message):
                yield message


def compile_filter(text: str) -> CompiledFilter:
    """Compile a filter expression.

    Args:
        text: The filter expression, e.g. ``subject=~/invoice/i and from$=@example.com``.

    Returns:
        A CompiledFilter. A blank ``text`` yields a filter matching everything.

    Raises:
        LexError: If the text contains a malformed token.
        ParseError: If the tokens violate the grammar.
        PatternError: If a pattern literal is not a valid regular expression.
    """
    if not text.strip():
        return CompiledFilter(source=text, expression=None)
    return CompiledFilter(source=text, expression=parse(tokenize(text), text))
