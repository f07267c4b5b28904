# parser/__init__.py
# This file is part of Arbor - A Truth Tree Solver
#
# Formula parsing and decomposition components

"""Propositional formula parsing and tableau decomposition rules.

This package turns the text written on a truth tree line into an immutable
formula value and tells the solver what that formula decomposes into.

Core Functions:
    parse: Converts formula strings into Abstract Syntax Trees
    try_parse: Same as parse, but returns None for malformed text
    decompose: Applies the tableau rule for the formula's main connective

Supported Logic:
    - Propositional variables
    - Negation, conjunction, disjunction
    - Material conditional and biconditional

Example:
    >>> from parser import parse, decompose
    >>> decompose(parse("P -> Q"))
    [[Not(operand=Atom(name='P'))], [Atom(name='Q')]]
"""

from typing import Optional

from .exceptions import ParseError
from .grammar import _FormulaParser
from .ast_nodes import Formula
from .rules import decompose, branch_count, is_literal, complement
from utils.logger import get_logger


def parse(source: str) -> Formula:
    """Parse formula string into Abstract Syntax Tree representation.

    Uses a fresh parser instance for each invocation so that parsing is
    stateless.

    Args:
        source: Well-formed formula string to parse

    Returns:
        Root AST node representing the parsed formula

    Raises:
        ParseError: Formula syntax is malformed

    Example:
        >>> str(parse("P & (Q | R)"))
        '(P ∧ (Q ∨ R))'
    """
    logger = get_logger()
    logger.debug(f"Parsing formula: {source}")

    parser = _FormulaParser()

    try:
        result = parser.parse(source)
        logger.debug(
            f"Formula parsed successfully into AST with type: {type(result).__name__}"
        )
        return result

    except ParseError:
        logger.debug("ParseError encountered during formula parsing")
        raise

    except Exception as exc:
        logger.debug(f"Unexpected parsing error: {type(exc).__name__}: {exc}")
        raise ParseError(str(exc)) from exc


def try_parse(source: str) -> Optional[Formula]:
    """Parse *source*, returning None instead of raising on malformed text."""
    try:
        return parse(source)
    except ParseError:
        return None


__all__ = [
    "parse",
    "try_parse",
    "decompose",
    "branch_count",
    "is_literal",
    "complement",
    "Formula",
    "ParseError",
]

__version__ = "1.0.0"
__description__ = "Propositional formula parsing and tableau decomposition rules"
