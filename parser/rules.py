# parser/rules.py
# This file is part of Arbor - A Truth Tree Solver
#
# Tableau decomposition rules for every connective

"""Decomposition rules mapping a formula to the branches it adds to a tree.

A decomposition is a list of branches, each branch an ordered list of derived
formulas. An empty list marks a literal (an atom or a negated atom): nothing
is left to decompose. One branch is a non-branching (alpha) rule whose formulas
are stacked on the same branch; two branches is a branching (beta) rule.

Rule table:
    ¬¬A        -> [[A]]
    A ∧ B      -> [[A, B]]
    ¬(A ∧ B)   -> [[¬A], [¬B]]
    A ∨ B      -> [[A], [B]]
    ¬(A ∨ B)   -> [[¬A, ¬B]]
    A → B      -> [[¬A], [B]]
    ¬(A → B)   -> [[A, ¬B]]
    A ↔ B      -> [[A, B], [¬A, ¬B]]
    ¬(A ↔ B)   -> [[A, ¬B], [¬A, B]]

Every derived formula has a strictly smaller complexity than its source, so
repeated decomposition always terminates.
"""

from __future__ import annotations
from typing import List, Optional

from . import ast_nodes as ast

Branches = List[List[ast.Formula]]


class DecompositionRules(ast.Visitor):
    """Visitor computing the decomposition of a formula."""

    def decompose(self, formula: ast.Formula) -> Branches:
        return formula.accept(self)

    def visit_atom(self, n: ast.Atom) -> Branches:
        return []

    def visit_not(self, n: ast.Not) -> Branches:
        return n.operand.accept(_NegatedRules())

    def visit_and(self, n: ast.And) -> Branches:
        return [[n.left, n.right]]

    def visit_or(self, n: ast.Or) -> Branches:
        return [[n.left], [n.right]]

    def visit_conditional(self, n: ast.Conditional) -> Branches:
        return [[ast.Not(n.antecedent)], [n.consequent]]

    def visit_biconditional(self, n: ast.Biconditional) -> Branches:
        return [
            [n.left, n.right],
            [ast.Not(n.left), ast.Not(n.right)],
        ]


class _NegatedRules(ast.Visitor):
    """Rules for a negation, dispatched on the negated operand."""

    def visit_atom(self, n: ast.Atom) -> Branches:
        return []

    def visit_not(self, n: ast.Not) -> Branches:
        return [[n.operand]]

    def visit_and(self, n: ast.And) -> Branches:
        return [[ast.Not(n.left)], [ast.Not(n.right)]]

    def visit_or(self, n: ast.Or) -> Branches:
        return [[ast.Not(n.left), ast.Not(n.right)]]

    def visit_conditional(self, n: ast.Conditional) -> Branches:
        return [[n.antecedent, ast.Not(n.consequent)]]

    def visit_biconditional(self, n: ast.Biconditional) -> Branches:
        return [
            [n.left, ast.Not(n.right)],
            [ast.Not(n.left), n.right],
        ]


_RULES = DecompositionRules()


def decompose(formula: Optional[ast.Formula]) -> Branches:
    """Return the branches produced by decomposing *formula*.

    A missing formula (unparsable text) decomposes like a literal, into no
    branches at all.
    """
    if formula is None:
        return []
    return _RULES.decompose(formula)


def branch_count(formula: Optional[ast.Formula]) -> int:
    """Number of alternative branches the rule for *formula* opens."""
    return len(decompose(formula))


def is_literal(formula: Optional[ast.Formula]) -> bool:
    """True for an atom or the negation of an atom."""
    if isinstance(formula, ast.Atom):
        return True
    return isinstance(formula, ast.Not) and isinstance(formula.operand, ast.Atom)


def complement(formula: ast.Formula) -> ast.Formula:
    """Return the contradictory counterpart of a literal.

    Raises:
        ValueError: If *formula* is not a literal
    """
    if isinstance(formula, ast.Atom):
        return ast.Not(formula)
    if is_literal(formula):
        return formula.operand
    raise ValueError(f"Not a literal: {formula}")
