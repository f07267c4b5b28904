# core/strategies.py
# This file is part of Arbor - A Truth Tree Solver
#
# Policies choosing which legal expansion the solver applies next

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

from model.tree import TruthTree
from parser import branch_count


@dataclass(frozen=True)
class LegalExpansion:
    """A node whose rule can be applied, with the leaves it applies to.

    Attributes:
        node_id: Node to decompose
        leaves: Open leaves whose branches still lack the decomposition
    """

    node_id: int
    leaves: Tuple[int, ...]


ExpansionStrategy = Callable[[TruthTree, Sequence[LegalExpansion]], Optional[LegalExpansion]]


def first_expansion(tree: TruthTree, expansions: Sequence[LegalExpansion]) -> Optional[LegalExpansion]:
    """Pick the candidate with the smallest node id."""
    return expansions[0] if expansions else None


def prioritize_less_branch(
    tree: TruthTree, expansions: Sequence[LegalExpansion]
) -> Optional[LegalExpansion]:
    """Prefer non-branching rules so that forks happen as late as possible."""
    if not expansions:
        return None
    return min(expansions, key=lambda e: branch_count(tree.nodes[e.node_id].formula))


def prioritize_more_branch(
    tree: TruthTree, expansions: Sequence[LegalExpansion]
) -> Optional[LegalExpansion]:
    """Prefer the rule that opens the most branches."""
    if not expansions:
        return None
    return max(expansions, key=lambda e: branch_count(tree.nodes[e.node_id].formula))


STRATEGIES: Dict[str, ExpansionStrategy] = {
    "first": first_expansion,
    "less-branch": prioritize_less_branch,
    "more-branch": prioritize_more_branch,
}


def get_strategy(name: str) -> ExpansionStrategy:
    """Look up a strategy by its command-line name.

    Raises:
        ValueError: Unknown strategy name
    """
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown expansion strategy '{name}' (choose from {', '.join(STRATEGIES)})"
        ) from None
