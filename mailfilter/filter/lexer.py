"""Split a filter expression into tokens."""

from __future__ import annotations

from mailfilter.exceptions import LexError, ParseError
from mailfilter.filter.tokens import Token, TokenKind

# Two-character operators must be tried before "=" (longest match)
OPERATORS: tuple[str, ...] = ("=~", "!~", "^~", "$=", "!=", "=")

PATTERN_MODIFIERS: frozenset[str] = frozenset({"i"})

_KEYWORDS: dict[str, TokenKind] = {
    "and": TokenKind.AND,
    "or": TokenKind.OR,
}

_WHITESPACE = " \t\n\r"

# Characters a bare word may not start with
_OPERATOR_CHARS = frozenset("=~!^$")


def _is_field_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_field_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_-."


class _Lexer:
    """Context-sensitive scanner: a value is only read right after an operator."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.length = len(text)

    def _skip_whitespace(self) -> None:
        while self.pos < self.length and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def _peek_operator(self) -> str | None:
        for op in OPERATORS:
            if self.text.startswith(op, self.pos):
                return op
        return None

    def _read_delimited(self, delimiter: str, what: str) -> tuple[str, str]:
        """Read ``<delimiter>body<delimiter>`` and return (raw lexeme, body)."""
        start = self.pos
        end = self.text.find(delimiter, start + 1)
        if end == -1:
            raise LexError(start, f"Unterminated {what}")
        self.pos = end + 1
        return self.text[start : self.pos], self.text[start + 1 : end]

    def _read_pattern(self) -> Token:
        start = self.pos
        raw, body = self._read_delimited("/", "pattern literal")
        if not body:
            raise LexError(start, "Empty pattern literal")

        flags: set[str] = set()
        if self.pos < self.length and self.text[self.pos] in PATTERN_MODIFIERS:
            flags.add(self.text[self.pos])
            raw += self.text[self.pos]
            self.pos += 1
        if self.pos < self.length and _is_field_char(self.text[self.pos]):
            raise LexError(self.pos, f"Unknown pattern modifier '{self.text[self.pos]}'")

        return Token(TokenKind.PATTERN_LITERAL, raw, start, body, frozenset(flags))

    def _read_bareword(self) -> Token:
        start = self.pos
        while self.pos < self.length:
            ch = self.text[self.pos]
            if ch in _WHITESPACE or ch in "()":
                break
            self.pos += 1
        word = self.text[start : self.pos]
        return Token(TokenKind.STRING_LITERAL, word, start, word)

    def _read_value(self) -> Token | None:
        """Read the operand that follows an operator, if there is one."""
        self._skip_whitespace()
        if self.pos >= self.length:
            return None

        ch = self.text[self.pos]
        if ch in "()":
            return None
        if ch == "/":
            return self._read_pattern()
        if ch == '"':
            start = self.pos
            raw, body = self._read_delimited('"', "string literal")
            return Token(TokenKind.STRING_LITERAL, raw, start, body)
        if ch in _OPERATOR_CHARS:
            found = "operator" if self._peek_operator() else f"'{ch}'"
            raise ParseError(self.pos, ("pattern literal", "string literal"), found)
        return self._read_bareword()

    def _read_identifier(self) -> Token:
        start = self.pos
        while self.pos < self.length and _is_field_char(self.text[self.pos]):
            self.pos += 1
        word = self.text[start : self.pos]
        kind = _KEYWORDS.get(word.lower(), TokenKind.FIELD)
        return Token(kind, word, start, word)

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []

        while True:
            self._skip_whitespace()

            if self.pos >= self.length:
                tokens.append(Token(TokenKind.EOF, "", self.pos))
                return tokens

            ch = self.text[self.pos]
            start = self.pos

            if ch == "(":
                tokens.append(Token(TokenKind.LPAREN, ch, start, ch))
                self.pos += 1
            elif ch == ")":
                tokens.append(Token(TokenKind.RPAREN, ch, start, ch))
                self.pos += 1
            elif _is_field_start(ch):
                tokens.append(self._read_identifier())
            else:
                op = self._peek_operator()
                if op is None:
                    raise LexError(start, f"Unexpected character '{ch}'")
                tokens.append(Token(TokenKind.OP, op, start, op))
                self.pos += len(op)
                value = self._read_value()
                if value is not None:
                    tokens.append(value)


def tokenize(text: str) -> list[Token]:
    """Split a filter expression into tokens.

    Args:
        text: The filter expression.

    Returns:
        The tokens in source order, terminated by an EOF token.

    Raises:
        LexError: On an unterminated or empty literal, an unknown pattern
            modifier, or a character that cannot start any token.
        ParseError: If an operator is followed by operator
            characters, e.g. ``subject==x`` or ``subject=^x``.
    """
    return _Lexer(text).tokenize()
