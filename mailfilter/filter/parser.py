"""Parse filter tokens into an expression tree."""

from __future__ import annotations

import re
from importlib import resources
from typing import Any

from lark import Lark, Transformer, UnexpectedToken
from lark import Token as LarkToken
from lark.exceptions import VisitError

from mailfilter.exceptions import FilterError, ParseError, PatternError
from mailfilter.filter.ast_nodes import And, Expression, MatchClause, Or
from mailfilter.filter.matcher import REGEX_OPERATORS
from mailfilter.filter.tokens import KIND_DESCRIPTIONS, Token, TokenKind

# Pattern modifier letter -> re flag
_REGEX_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
}


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("mailfilter.filter").joinpath("grammar.lark").read_text()


_GRAMMAR_TEXT = _load_grammar()

_parser = Lark(
    _GRAMMAR_TEXT,
    parser="lalr",
    lexer="basic",
)


def _describe(kind: str) -> str:
    return KIND_DESCRIPTIONS.get(kind, kind)


def compile_pattern(token: Token) -> re.Pattern[str]:
    """Compile a pattern literal token, applying its modifiers.

    Raises:
        PatternError: If the pattern body is not a valid regular expression.
    """
    flags = 0
    for modifier in token.flags:
        flags |= _REGEX_FLAGS[modifier]
    try:
        return re.compile(token.value, flags)
    except re.error as e:
        raise PatternError(token.value, token.position, str(e)) from e


class _FilterTransformer(Transformer):
    """Transform the Lark parse tree into MatchClause/And/Or nodes.

    Lark tokens only carry type, text and position, so literal tokens are
    looked up by position to recover their content and modifiers.
    """

    def __init__(self, tokens: list[Token]) -> None:
        super().__init__()
        self._by_position = {token.position: token for token in tokens}

    def start(self, items: list[Any]) -> Expression:
        return items[0]

    def or_expr(self, items: list[Any]) -> Expression:
        # items alternate operand, OR token, operand, ...
        result = items[0]
        for operand in items[2::2]:
            result = Or(result, operand)
        return result

    def and_expr(self, items: list[Any]) -> Expression:
        result = items[0]
        for operand in items[2::2]:
            result = And(result, operand)
        return result

    def group(self, items: list[Any]) -> Expression:
        # LPAREN expr RPAREN
        return items[1]

    def match_clause(self, items: list[Any]) -> MatchClause:
        field_token, op_token, literal_token = items
        operator = str(op_token)
        literal = self._by_position[literal_token.start_pos]

        if operator in REGEX_OPERATORS:
            if literal.kind is not TokenKind.PATTERN_LITERAL:
                raise ParseError(
                    literal.position,
                    (_describe(TokenKind.PATTERN_LITERAL.value),),
                    _describe(literal.kind.value),
                )
            value: str | re.Pattern[str] = compile_pattern(literal)
        else:
            if literal.kind is not TokenKind.STRING_LITERAL:
                raise ParseError(
                    literal.position,
                    (_describe(TokenKind.STRING_LITERAL.value),),
                    _describe(literal.kind.value),
                )
            value = literal.value

        return MatchClause(field=str(field_token).lower(), operator=operator, value=value)


def _to_lark(token: Token) -> LarkToken:
    kind = "$END" if token.kind is TokenKind.EOF else token.kind.value
    return LarkToken(kind, token.text, start_pos=token.position)


def parse(tokens: list[Token], source: str = "") -> Expression:
    """Build an expression tree from lexer tokens.

    Args:
        tokens: EOF-terminated tokens from :func:`mailfilter.filter.lexer.tokenize`.
        source: The filter text the tokens came from.

    Returns:
        The root of the expression tree.

    Raises:
        ParseError: On any grammar violation (missing operand, unmatched
            parenthesis, dangling connective, operator/literal mismatch).
        PatternError: If a pattern literal is not a valid regular expression.
    """
    interactive = _parser.parse_interactive(source)
    try:
        for token in tokens:
            if token.kind is TokenKind.EOF:
                break
            interactive.feed_token(_to_lark(token))
        tree = interactive.feed_eof(_to_lark(tokens[-1]))
    except UnexpectedToken as e:
        expected = tuple(sorted({_describe(name) for name in e.expected}))
        raise ParseError(e.token.start_pos, expected, _describe(e.token.type)) from None

    try:
        return _FilterTransformer(tokens).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, FilterError):
            raise e.orig_exc from None
        raise
