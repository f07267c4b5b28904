# tests/parser_tests/test_parse_errors.py
# This file is part of Arbor - A Truth Tree Solver
#
# Test suite for formula parser error handling

"""Test suite for formula parser error handling.

Malformed text must surface as ParseError from parse(), and as None from
try_parse(), which is how tree nodes with unparsable text become inert.
"""

import pytest
from parser import parse, try_parse, ParseError


class TestFormulaParserErrors:
    """Test cases for rejecting malformed formulas."""

    INVALID_FORMULAS = [
        "",
        "   ",
        "P ∧",
        "∧ Q",
        "P Q",
        "(P ∨ Q",
        "P ∨ Q)",
        "()",
        "P → → Q",
        "¬",
        "P # Q",
        "×",
        "◯",
    ]

    @pytest.mark.parametrize("formula", INVALID_FORMULAS)
    def test_invalid_formula_raises_parse_error(self, formula):
        """Malformed formulas raise ParseError."""
        with pytest.raises(ParseError):
            parse(formula)

    @pytest.mark.parametrize("formula", INVALID_FORMULAS)
    def test_try_parse_returns_none(self, formula):
        """try_parse never raises on malformed input."""
        assert try_parse(formula) is None

    def test_empty_formula_message(self):
        """An empty formula is reported as such."""
        with pytest.raises(ParseError, match="empty"):
            parse("")

    def test_syntax_error_names_offending_token(self):
        """Syntax errors point at the token where parsing failed."""
        with pytest.raises(ParseError, match="Syntax error near 'Q'"):
            parse("P Q")

    def test_unexpected_end_of_formula(self):
        """Formulas cut short report the unexpected end."""
        with pytest.raises(ParseError, match="Unexpected end of formula"):
            parse("P ∧")

    def test_illegal_character_becomes_parse_error(self):
        """Lexer errors are wrapped into ParseError."""
        with pytest.raises(ParseError, match="Illegal character"):
            parse("P # Q")

    def test_try_parse_returns_formula_for_valid_text(self):
        assert str(try_parse("P -> Q")) == "(P → Q)"
