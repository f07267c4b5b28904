# parser/lexer.py
# This file is part of Arbor - A Truth Tree Solver
#
# Lexical analyzer for propositional formula tokenization using SLY

"""Lexical analyzer for propositional formula strings.

This module implements tokenization of the formulas written on truth tree
lines. Every connective is accepted both in its logic-textbook symbol and in an
ASCII spelling, so files produced by hand and files produced by the solver can
be read with the same lexer.

Supported Tokens:
- Negation: ¬, ~, !
- Conjunction: ∧, &
- Disjunction: ∨, |
- Conditional: →, ->
- Biconditional: ↔, <->
- Parentheses and identifiers (propositional variables)
- Whitespace: ignored during tokenization
"""

from sly import Lexer
from utils.logger import get_logger


class FormulaLexer(Lexer):
    """SLY-based lexer for propositional formula tokenization.

    Attributes:
        tokens: Set of valid token types
        ignore: Characters to skip during tokenization
    """

    tokens = {
        "ID",
        "NOT",
        "AND",
        "OR",
        "IFF",
        "IMPLIES",
        "LPAREN",
        "RPAREN",
    }

    ignore = " \t\r\n"

    # IFF is listed before IMPLIES so "<->" is never split
    IFF = r"↔|<->"
    IMPLIES = r"→|->"
    NOT = r"¬|~|!"
    AND = r"∧|&"
    OR = r"∨|\|"
    LPAREN = r"\("
    RPAREN = r"\)"

    ID = r"[a-zA-Z_][a-zA-Z0-9_]*"

    def error(self, t):
        """Handle illegal characters during tokenization.

        Args:
            t: SLY token object containing error context

        Raises:
            ValueError: Always raised with character and position information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        error_pos = self.index

        logger.debug(f"Illegal character '{illegal_char}' at position {error_pos}")

        self.index += 1

        raise ValueError(
            f"Illegal character '{illegal_char}' encountered at position {error_pos}"
        )
