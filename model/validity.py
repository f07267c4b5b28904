# model/validity.py
# This file is part of Arbor - A Truth Tree Solver
#
# Tri-state local correctness of truth tree nodes

from __future__ import annotations
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from parser import decompose, is_literal, complement
from utils.logger import get_logger

if TYPE_CHECKING:
    from .node import TruthTreeNode
    from .tree import TruthTree


class Validity(Enum):
    """Three-valued verdict on a single node's local correctness.

    Values:
        VALID: The node's text and its recorded decomposition follow the rules
        INVALID: Something about the node contradicts the rule table
        PENDING: Not decidable yet, e.g. the antecedent has not recorded
            this node among its decomposition targets
    """

    VALID = auto()
    INVALID = auto()
    PENDING = auto()

    def __str__(self) -> str:
        return self.name

    def is_conclusive(self) -> bool:
        """True for VALID and INVALID, the verdicts that may be cached."""
        return self in (Validity.VALID, Validity.INVALID)


ValidityPredicate = Callable[["TruthTree", "TruthTreeNode"], Validity]


def find_complementary_literals(tree: TruthTree, node_id: int) -> Optional[Tuple[int, int]]:
    """Find two complementary literals on the path from *node_id* to the root.

    Returns:
        Ids of the first pair met walking towards the root, the one nearer
        the root first, or None if the branch is free of contradictions
    """
    seen: Dict[str, int] = {}
    for ancestor_id in tree.get_branch(node_id):
        formula = tree.nodes[ancestor_id].formula
        if not is_literal(formula):
            continue
        if str(formula) in seen:
            return ancestor_id, seen[str(formula)]
        seen.setdefault(str(complement(formula)), ancestor_id)
    return None


def local_validity(tree: TruthTree, node: TruthTreeNode) -> Validity:
    """Default validity predicate used by TruthTree.is_valid.

    Checks, in order: terminators against their branch, that the text parses,
    that a derived node is justified by its antecedent, and that every
    decomposition target this node claims was produced by its rule.
    """
    if node.is_open_terminator():
        if find_complementary_literals(tree, node.id) is not None:
            return Validity.INVALID
        return Validity.VALID

    if node.is_closed_terminator():
        return _closed_terminator_validity(tree, node)

    formula = node.formula
    if formula is None:
        return Validity.INVALID

    if not node.premise:
        if node.antecedent is None:
            return Validity.INVALID
        antecedent = tree.nodes.get(node.antecedent)
        if antecedent is None or not tree.is_ancestor_of(antecedent.id, node.id):
            return Validity.INVALID
        produced = {str(f) for branch in decompose(antecedent.formula) for f in branch}
        if str(formula) not in produced:
            return Validity.INVALID
        if node.id not in antecedent.decomposition:
            return Validity.PENDING

    branches = decompose(formula)
    if node.decomposition and not branches:
        return Validity.INVALID

    produced = {str(f) for branch in branches for f in branch}
    for target_id in sorted(node.decomposition):
        target = tree.nodes.get(target_id)
        if (
            target is None
            or target.antecedent != node.id
            or str(target.formula) not in produced
            or not tree.is_ancestor_of(node.id, target_id)
        ):
            get_logger().debug(f"Node {node.id}: decomposition target {target_id} is not justified")
            return Validity.INVALID

    return Validity.VALID


def _closed_terminator_validity(tree: TruthTree, node: TruthTreeNode) -> Validity:
    """A closed terminator must cite two complementary literals above it."""
    references = sorted(node.decomposition)
    if len(references) != 2:
        return Validity.INVALID

    first, second = (tree.nodes.get(ref) for ref in references)
    if first is None or second is None:
        return Validity.INVALID
    if not all(tree.is_ancestor_of(ref, node.id) for ref in references):
        return Validity.INVALID
    if not (is_literal(first.formula) and is_literal(second.formula)):
        return Validity.INVALID
    if str(complement(first.formula)) != str(second.formula):
        return Validity.INVALID
    return Validity.VALID
