"""Unit tests for the filter parser."""

from __future__ import annotations

import re

import pytest

from mailfilter.exceptions import ParseError, PatternError
from mailfilter.filter.ast_nodes import And, Expression, MatchClause, Or
from mailfilter.filter.lexer import tokenize
from mailfilter.filter.parser import parse


def _parse(text: str) -> Expression:
    return parse(tokenize(text), text)


def _clause(field: str, value: str, operator: str = "=") -> MatchClause:
    return MatchClause(field=field, operator=operator, value=value)


# ---------------------------------------------------------------------------
# Single clauses
# ---------------------------------------------------------------------------


class TestMatchClause:
    def test_string_clause(self) -> None:
        assert _parse('from$="@example.com"') == _clause("from", "@example.com", "$=")

    def test_bareword_clause(self) -> None:
        assert _parse("to^~bob") == _clause("to", "bob", "^~")

    def test_pattern_clause_is_compiled(self) -> None:
        result = _parse("subject=~/thank you/")
        assert isinstance(result, MatchClause)
        assert result.operator == "=~"
        assert isinstance(result.value, re.Pattern)
        assert result.value.pattern == "thank you"
        assert not result.value.flags & re.IGNORECASE

    def test_case_insensitive_pattern(self) -> None:
        result = _parse("subject!~/re:/i")
        assert isinstance(result, MatchClause)
        assert result.operator == "!~"
        assert result.value.flags & re.IGNORECASE

    def test_field_name_is_lowercased(self) -> None:
        assert _parse("Subject=x").field == "subject"

    def test_empty_string_literal(self) -> None:
        assert _parse('subject=""') == _clause("subject", "")


# ---------------------------------------------------------------------------
# Connectives
# ---------------------------------------------------------------------------


class TestConnectives:
    def test_and(self) -> None:
        assert _parse("a=1 and b=2") == And(_clause("a", "1"), _clause("b", "2"))

    def test_or(self) -> None:
        assert _parse("a=1 OR b=2") == Or(_clause("a", "1"), _clause("b", "2"))

    def test_and_binds_tighter_than_or(self) -> None:
        assert _parse("a=1 or b=2 and c=3") == Or(
            _clause("a", "1"),
            And(_clause("b", "2"), _clause("c", "3")),
        )

    def test_and_binds_tighter_on_the_left(self) -> None:
        assert _parse("a=1 and b=2 or c=3") == Or(
            And(_clause("a", "1"), _clause("b", "2")),
            _clause("c", "3"),
        )

    def test_or_is_left_associative(self) -> None:
        assert _parse("a=1 or b=2 or c=3") == Or(
            Or(_clause("a", "1"), _clause("b", "2")),
            _clause("c", "3"),
        )

    def test_and_is_left_associative(self) -> None:
        assert _parse("a=1 and b=2 and c=3") == And(
            And(_clause("a", "1"), _clause("b", "2")),
            _clause("c", "3"),
        )

    def test_parentheses_override_precedence(self) -> None:
        assert _parse("(a=1 or b=2) and c=3") == And(
            Or(_clause("a", "1"), _clause("b", "2")),
            _clause("c", "3"),
        )

    def test_redundant_parentheses(self) -> None:
        assert _parse("((a=1))") == _clause("a", "1")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_missing_operand(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("subject=~")
        err = exc_info.value
        assert err.position == 9
        assert set(err.expected) == {"pattern literal", "string literal"}
        assert err.found == "end of input"

    def test_unclosed_parenthesis(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("(a=1")
        assert "')'" in exc_info.value.expected
        assert exc_info.value.found == "end of input"
        assert exc_info.value.position == 4

    def test_unopened_parenthesis(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("a=1)")
        assert exc_info.value.found == "')'"
        assert exc_info.value.position == 3

    def test_dangling_connective(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("a=1 and")
        assert exc_info.value.found == "end of input"

    def test_leading_connective(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("and a=1")
        assert exc_info.value.position == 0
        assert exc_info.value.found == "'and'"

    def test_missing_connective(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("a=1 b=2")
        assert exc_info.value.position == 4
        assert exc_info.value.found == "field name"

    def test_missing_field(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("=1")
        assert exc_info.value.position == 0
        assert exc_info.value.found == "operator"

    def test_empty_group(self) -> None:
        with pytest.raises(ParseError):
            _parse("()")

    def test_regex_operator_needs_pattern(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse('subject=~"thanks"')
        assert exc_info.value.position == 9
        assert exc_info.value.expected == ("pattern literal",)
        assert exc_info.value.found == "string literal"

    def test_string_operator_rejects_pattern(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("subject=/thanks/")
        assert exc_info.value.expected == ("string literal",)
        assert exc_info.value.found == "pattern literal"

    def test_message_names_expectation(self) -> None:
        with pytest.raises(ParseError, match="at position 9, found end of input"):
            _parse("subject=~")


class TestPatternErrors:
    def test_invalid_regex(self) -> None:
        with pytest.raises(PatternError) as exc_info:
            _parse("subject=~/(/")
        assert exc_info.value.pattern == "("
        assert exc_info.value.position == 9

    def test_invalid_regex_inside_group(self) -> None:
        with pytest.raises(PatternError):
            _parse("a=1 or (b=2 and c=~/[a-/i)")


class TestUnknownOperators:
    @pytest.mark.parametrize(
        ("text", "position"),
        [
            ("subject==hello", 8),
            ("subject=^x", 8),
            ("subject=$x", 8),
            ("subject= ~x", 9),
            ("subject!=!x", 9),
        ],
    )
    def test_operator_followed_by_operator_characters(self, text: str, position: int) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse(text)
        assert exc_info.value.position == position
        assert "string literal" in exc_info.value.expected

    def test_doubled_equals_reports_operator(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("subject==hello")
        assert exc_info.value.found == "operator"

    def test_operator_characters_inside_value(self) -> None:
        assert _parse("subject=a=b") == _clause("subject", "a=b")
        assert _parse('subject="=hello"') == _clause("subject", "=hello")
