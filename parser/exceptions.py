# parser/exceptions.py
# This file is part of Arbor - A Truth Tree Solver
#
# Custom exceptions for formula parsing

"""Domain-specific exceptions for propositional formula processing."""


class ParseError(RuntimeError):
    """Exception raised when formula parsing fails due to syntax errors.

    Indicates that the input text does not conform to the formula grammar.
    A tree node whose text raises this error is kept in the tree but never
    takes part in decomposition or contradiction matching.
    """

    pass
