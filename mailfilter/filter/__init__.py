"""Filter expression language: lexing, parsing and evaluation."""

from mailfilter.exceptions import FilterError, LexError, ParseError, PatternError
from mailfilter.filter.ast_nodes import And, Expression, MatchClause, Or
from mailfilter.filter.evaluator import evaluate
from mailfilter.filter.lexer import tokenize
from mailfilter.filter.parser import parse
from mailfilter.filter.query import CompiledFilter, compile_filter
from mailfilter.filter.tokens import Token, TokenKind

__all__ = [
    "And",
    "CompiledFilter",
    "Expression",
    "FilterError",
    "LexError",
    "MatchClause",
    "Or",
    "ParseError",
    "PatternError",
    "Token",
    "TokenKind",
    "compile_filter",
    "evaluate",
    "parse",
    "tokenize",
]
