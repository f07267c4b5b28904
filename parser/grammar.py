# parser/grammar.py
# This file is part of Arbor - A Truth Tree Solver
#
# LALR(1) grammar and parser for propositional formulas using SLY

"""Propositional grammar implementation using SLY parser generator.

Operator Precedence (lowest to highest):
- IFF ('↔'): right-associative
- IMPLIES ('→'): right-associative
- OR ('∨'): left-associative
- AND ('∧'): left-associative
- NOT ('¬'): right-associative
"""

from sly import Parser
from .lexer import FormulaLexer
from .ast_nodes import Formula, Atom, Not, And, Or, Conditional, Biconditional
from .exceptions import ParseError
from utils.logger import get_logger


class _FormulaParser(Parser):
    """SLY-based LALR(1) parser for propositional formulas.

    Attributes:
        tokens: Token types from FormulaLexer
        precedence: Operator precedence and associativity rules
    """

    tokens = FormulaLexer.tokens

    precedence = (
        ("right", "IFF"),
        ("right", "IMPLIES"),
        ("left", "OR"),
        ("left", "AND"),
        ("right", "NOT"),
    )

    @_("expr")
    def start(self, p) -> Formula:
        """Start rule: a complete formula is a single expression."""
        return p.expr

    @_("NOT expr")
    def expr(self, p) -> Formula:
        """Negation."""
        return Not(p.expr)

    @_("expr AND expr")
    def expr(self, p) -> Formula:
        """Conjunction."""
        return And(p.expr0, p.expr1)

    @_("expr OR expr")
    def expr(self, p) -> Formula:
        """Disjunction."""
        return Or(p.expr0, p.expr1)

    @_("expr IMPLIES expr")
    def expr(self, p) -> Formula:
        """Material conditional."""
        return Conditional(p.expr0, p.expr1)

    @_("expr IFF expr")
    def expr(self, p) -> Formula:
        """Biconditional."""
        return Biconditional(p.expr0, p.expr1)

    @_("LPAREN expr RPAREN")
    def expr(self, p) -> Formula:
        """Parenthesized expression for grouping."""
        return p.expr

    @_("ID")
    def expr(self, p) -> Formula:
        """Identifier as propositional variable."""
        return Atom(p.ID)

    def parse(self, text: str) -> Formula:
        """Parse formula text into AST.

        Args:
            text: Formula string to parse

        Returns:
            Root AST node representing the parsed formula

        Raises:
            ParseError: If formula is empty or contains syntax errors
        """
        logger = get_logger()
        logger.debug(f"Parsing formula: {text}")

        try:
            if text.strip() == "":
                raise ParseError("Input formula is empty.")

            ast_result = super().parse(FormulaLexer().tokenize(text))

            if ast_result is None:
                raise ParseError("Failed to parse formula (syntax error).")

            logger.debug(
                f"Successfully parsed formula into {type(ast_result).__name__}"
            )
            return ast_result

        except ParseError:
            logger.debug("Parse error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected parsing error: {e}")
            raise ParseError(f"Parse failed: {e}")

    def error(self, token):
        """Handle syntax errors during parsing.

        Args:
            token: Problematic token or None for EOF errors

        Raises:
            ParseError: Always raises with detailed error information
        """
        if token:
            error_msg = (
                f"Syntax error near '{token.value}' "
                f"(type: {token.type}) at line {token.lineno}, position {token.index}"
            )
        else:
            error_msg = "Syntax error: Unexpected end of formula"

        raise ParseError(error_msg)
