# core/__init__.py
# This file is part of Arbor - A Truth Tree Solver
#
# Core module public API for the expansion engine

"""Expansion engine for propositional truth trees.

The solver repeatedly picks a node whose rule has not yet reached every open
leaf below it, applies that rule, and closes any new branch that holds a pair
of complementary literals. When nothing is left to apply the remaining leaves
are marked open and the tree is terminated: a tree whose branches all close is
a proof that the premises are jointly unsatisfiable, and every open branch
describes a countermodel.

Primary Components:
    TruthTreeSolver: Step-wise and whole-tree solving
    LegalExpansion: A candidate node with the leaves awaiting its rule
    STRATEGIES: Named policies for choosing among candidates

Example:
    >>> from core import TruthTreeSolver
    >>> solver = TruthTreeSolver.from_premises(["P -> Q", "P", "~Q"])
    >>> solver.expand_all()
    2
    >>> solver.is_closed()
    True
"""

from .solver import TruthTreeSolver
from .strategies import (
    LegalExpansion,
    ExpansionStrategy,
    STRATEGIES,
    first_expansion,
    prioritize_less_branch,
    prioritize_more_branch,
    get_strategy,
)

__all__ = [
    "TruthTreeSolver",
    "LegalExpansion",
    "ExpansionStrategy",
    "STRATEGIES",
    "first_expansion",
    "prioritize_less_branch",
    "prioritize_more_branch",
    "get_strategy",
]

__version__ = "1.0.0"
__description__ = "Expansion engine for propositional truth trees"
