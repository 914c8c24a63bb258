"""Token types produced by the filter lexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(Enum):
    """Kinds of lexemes in a filter expression.

    The enum value doubles as the terminal name in ``grammar.lark``.
    """

    FIELD = "FIELD"
    OP = "OP"
    STRING_LITERAL = "STRING_LITERAL"
    PATTERN_LITERAL = "PATTERN_LITERAL"
    AND = "AND"
    OR = "OR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"


# Human-readable names used in parse error messages
KIND_DESCRIPTIONS: dict[str, str] = {
    "FIELD": "field name",
    "OP": "operator",
    "STRING_LITERAL": "string literal",
    "PATTERN_LITERAL": "pattern literal",
    "AND": "'and'",
    "OR": "'or'",
    "LPAREN": "'('",
    "RPAREN": "')'",
    "EOF": "end of input",
    "$END": "end of input",
}


@dataclass(frozen=True)
class Token:
    """A single lexeme of a filter expression.

    Attributes:
        kind: The token kind.
        text: The raw lexeme as written (quotes and slashes included).
        position: 0-based offset of the lexeme in the filter string.
        value: Literal content: the pattern body, the unquoted string,
            or the lexeme itself for non-literal tokens.
        flags: Regex modifiers of a pattern literal (only ``"i"``).
    """

    kind: TokenKind
    text: str
    position: int
    value: str = ""
    flags: frozenset[str] = field(default_factory=frozenset)
