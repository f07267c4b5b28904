# parser/ast_nodes.py
# This file is part of Arbor - A Truth Tree Solver
#
# Abstract Syntax Tree node classes for propositional formula representation

"""AST node classes for representing parsed propositional formulas.

This module defines immutable and hashable node classes used to construct tree
representations of the formulas written on truth tree lines. The node set is
closed: every connective the formula language supports has exactly one class
here and one visit method on the Visitor protocol, so any visitor (such as the
decomposition rule table) must handle every variant.

Node Types:
    Atom: Propositional variables
    Not: Negation
    And, Or: Conjunction and disjunction
    Conditional, Biconditional: Material conditional and biconditional

All nodes support the visitor design pattern for traversal and transformation.
The string form of a node is its canonical rendering; two formulas are treated
as the same statement exactly when their renderings are equal.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol


class Visitor(Protocol):
    """Interface for AST visitors implementing the visitor design pattern.

    Concrete visitors must implement visit methods for each AST node type
    to enable type-safe traversal and transformation operations.
    """

    def visit_atom(self, n: Atom): ...

    def visit_not(self, n: Not): ...

    def visit_and(self, n: And): ...

    def visit_or(self, n: Or): ...

    def visit_conditional(self, n: Conditional): ...

    def visit_biconditional(self, n: Biconditional): ...


@dataclass(frozen=True, slots=True)
class Formula:
    """Base class for all formula nodes.

    Provides the foundation for immutable expression trees with visitor pattern
    support. Concrete node types implement accept, __str__ and complexity.
    """

    def accept(self, v: Visitor):
        """Dispatch to the appropriate visitor method.

        Args:
            v: Visitor instance to process this node

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError

    @property
    def complexity(self) -> int:
        """Number of symbol occurrences (atoms plus connectives)."""
        raise NotImplementedError

    def __str__(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Atom(Formula):
    """Atomic proposition.

    Attributes:
        name: The identifier of the proposition (e.g. "P", "raining")
    """

    name: str

    def accept(self, v: Visitor):
        return v.visit_atom(self)

    @property
    def complexity(self) -> int:
        return 1

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Not(Formula):
    """Logical negation.

    Attributes:
        operand: The formula being negated
    """

    operand: Formula

    def accept(self, v: Visitor):
        return v.visit_not(self)

    @property
    def complexity(self) -> int:
        return 1 + self.operand.complexity

    def __str__(self) -> str:
        return f"¬{self.operand}"


@dataclass(frozen=True, slots=True)
class BinaryFormula(Formula):
    """Shared shape of the two-place connectives.

    Attributes:
        left: Left operand
        right: Right operand
    """

    left: Formula
    right: Formula

    symbol = "?"

    @property
    def complexity(self) -> int:
        return 1 + self.left.complexity + self.right.complexity

    def __str__(self) -> str:
        return f"({self.left} {self.symbol} {self.right})"


@dataclass(frozen=True, slots=True)
class And(BinaryFormula):
    """Conjunction: true when both operands are true."""

    symbol = "∧"

    def accept(self, v: Visitor):
        return v.visit_and(self)


@dataclass(frozen=True, slots=True)
class Or(BinaryFormula):
    """Disjunction: true when at least one operand is true."""

    symbol = "∨"

    def accept(self, v: Visitor):
        return v.visit_or(self)


@dataclass(frozen=True, slots=True)
class Conditional(BinaryFormula):
    """Material conditional: left is the antecedent, right the consequent."""

    symbol = "→"

    def accept(self, v: Visitor):
        return v.visit_conditional(self)

    @property
    def antecedent(self) -> Formula:
        return self.left

    @property
    def consequent(self) -> Formula:
        return self.right


@dataclass(frozen=True, slots=True)
class Biconditional(BinaryFormula):
    """Biconditional: true when both operands share a truth value."""

    symbol = "↔"

    def accept(self, v: Visitor):
        return v.visit_biconditional(self)
