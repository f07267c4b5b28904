# core/solver.py
# This file is part of Arbor - A Truth Tree Solver
#
# Expansion engine driving a truth tree to termination

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Set

from model.node import CLOSED_TERMINATOR, OPEN_TERMINATOR
from model.tree import TruthTree
from model.validity import Validity
from parser import decompose, is_literal, complement
from parser.ast_nodes import Atom, Not
from utils.tree_document import deserialize, serialize
from utils.logger import get_logger
from .strategies import ExpansionStrategy, LegalExpansion, first_expansion


class TruthTreeSolver:
    """Mechanical tableau solver working on a single TruthTree.

    Each call to expand() performs one step: it applies the rule of one node
    to every open leaf that still lacks it, then tries to close the new leaves
    by contradiction. Once no rule is left to apply, remaining open leaves get
    an open terminator and expand() reports that the tree is terminated.

    Attributes:
        tree: The tree being solved, owned exclusively by this solver
        strategy: Default policy for picking among legal expansions
    """

    def __init__(
        self,
        tree: TruthTree,
        clean: bool = True,
        strategy: ExpansionStrategy = first_expansion,
    ):
        """Initialize the solver.

        Args:
            tree: Tree to solve
            clean: Strip every non-premise node first, so solving starts from
                the bare premises whatever the tree already recorded
            strategy: Default expansion strategy
        """
        self.tree = tree
        self.strategy = strategy
        if clean:
            self.tree.clean_non_premise()

        get_logger().solve_start(
            (node.text for node in self.tree.premises()), getattr(strategy, "__name__", str(strategy))
        )

    @classmethod
    def from_document(
        cls, text: str, clean: bool = True, strategy: ExpansionStrategy = first_expansion
    ) -> TruthTreeSolver:
        """Build a solver from a serialized tree document."""
        return cls(deserialize(text), clean=clean, strategy=strategy)

    @classmethod
    def from_premises(
        cls, premises: Iterable[str], strategy: ExpansionStrategy = first_expansion
    ) -> TruthTreeSolver:
        """Build a solver whose tree is the given premise chain."""
        tree = TruthTree()
        for text in premises:
            tree.add_premise(text)
        return cls(tree, clean=False, strategy=strategy)

    # Candidate discovery

    def determine_expansion_branches(self, node_id: int) -> List[int]:
        """Open leaves below *node_id* that still need its rule."""
        return self.tree.expansion_branches(node_id)

    def possible_expansions(self) -> List[LegalExpansion]:
        """All nodes with at least one leaf awaiting their rule, in id order."""
        expansions = []
        for node_id in sorted(self.tree.nodes):
            leaves = self.determine_expansion_branches(node_id)
            if leaves:
                expansions.append(LegalExpansion(node_id, tuple(leaves)))
        return expansions

    # Stepping

    def expand(self, strategy: Optional[ExpansionStrategy] = None) -> bool:
        """Perform one expansion step.

        Args:
            strategy: Policy for this step, defaults to the solver's strategy

        Returns:
            True if the tree may need more expansion, False once terminated
        """
        logger = get_logger()
        legal_expansions = self.possible_expansions()

        if not legal_expansions:
            logger.debug("No legal expansions left, terminating open leaves")
            self._terminate_leaves()
            return False

        best = (strategy or self.strategy)(self.tree, legal_expansions)
        if best is None:
            # a strategy that declines still has to make progress
            best = legal_expansions[0]

        node = self.tree.nodes[best.node_id]
        logger.expansion_selected(best.node_id, node.text, best.leaves)

        new_leaves = self.apply_expansion(best.node_id, best.leaves)
        for leaf_id in sorted(new_leaves or ()):
            self.try_closed_terminator(leaf_id)
        return True

    def expand_all(
        self, strategy: Optional[ExpansionStrategy] = None, max_steps: Optional[int] = None
    ) -> int:
        """Expand until the tree is terminated or *max_steps* steps were taken.

        Returns:
            Number of steps performed
        """
        steps = 0
        while max_steps is None or steps < max_steps:
            steps += 1
            if not self.expand(strategy):
                break
        get_logger().debug(f"Solve loop stopped after {steps} steps")
        return steps

    def apply_expansion(self, node_id: int, leaves: Iterable[int]) -> Optional[Set[int]]:
        """Apply the rule of *node_id* below each of *leaves*.

        A single-branch rule stacks its formulas under every leaf; a branching
        rule forks every leaf once per branch. If a node cannot be created the
        step stops where it is, leaving earlier leaves expanded.

        Returns:
            Ids of new nodes that are leaves, or None if nothing was recorded
        """
        logger = get_logger()
        decomposition = decompose(self.tree.nodes[node_id].formula)
        if not decomposition:
            return None

        branching = len(decomposition) > 1
        added: List[int] = []

        for leaf_id in leaves:
            for branch in decomposition:
                trail_id = leaf_id
                for position, formula in enumerate(branch):
                    new_id = self.tree.add_node_after(
                        trail_id, branching and position == 0, str(formula)
                    )
                    if new_id is None:
                        logger.debug(
                            f"Expansion of node {node_id} stopped at leaf {leaf_id}"
                        )
                        return None
                    added.append(new_id)
                    trail_id = new_id

        self.tree.nodes[node_id].add_decomposition(added)
        self.tree.nodes[node_id].invalidate()
        for added_id in added:
            added_node = self.tree.nodes[added_id]
            added_node.antecedent = node_id
            added_node.invalidate()

        return {added_id for added_id in added if added_id in self.tree.leaves}

    # Termination

    def try_closed_terminator(self, leaf_id: int) -> bool:
        """Close the branch ending at *leaf_id* if it holds a contradiction.

        The path is scanned from the leaf to the root. The first literal whose
        complement was already seen fixes the two references; scanning goes on
        because every node on the path must be VALID before the branch may be
        closed.

        Returns:
            True if a closed terminator was added
        """
        logger = get_logger()
        if leaf_id not in self.tree.leaves:
            logger.debug(f"Node {leaf_id} is not a leaf")
            return False

        complements: Dict[str, int] = {}
        refs = None

        for ancestor_id in self.tree.get_branch(leaf_id):
            formula = self.tree.nodes[ancestor_id].formula

            if refs is None and is_literal(formula):
                if str(formula) in complements:
                    refs = (ancestor_id, complements[str(formula)])
                complements.setdefault(str(complement(formula)), ancestor_id)

            validity = self.tree.is_valid(ancestor_id)
            if validity is not Validity.VALID:
                logger.closure_aborted(leaf_id, ancestor_id, str(validity))
                return False

        if refs is None:
            return False
        return self._apply_closed_terminator(leaf_id, *refs)

    def _apply_closed_terminator(self, leaf_id: int, ref1: int, ref2: int) -> bool:
        terminator_id = self.tree.add_node_after(leaf_id, False, CLOSED_TERMINATOR)
        if terminator_id is None:
            get_logger().debug(f"Could not close the branch at leaf {leaf_id}")
            return False
        self.tree.nodes[terminator_id].add_decomposition((ref1, ref2))
        get_logger().branch_closed(leaf_id, ref1, ref2)
        return True

    def _apply_open_terminator(self, leaf_id: int) -> bool:
        terminator_id = self.tree.add_node_after(leaf_id, False, OPEN_TERMINATOR)
        if terminator_id is None:
            get_logger().debug(f"Could not mark the branch at leaf {leaf_id} open")
            return False
        get_logger().branch_opened(leaf_id)
        return True

    def _terminate_leaves(self):
        for leaf_id in sorted(self.tree.leaves):
            if self.tree.nodes[leaf_id].is_terminator():
                continue
            if not self.try_closed_terminator(leaf_id):
                self._apply_open_terminator(leaf_id)

    # Results

    def is_finished(self) -> bool:
        """True if the tree is fully expanded, terminated and correct."""
        finished, message = self.tree.is_correct()
        if not finished:
            get_logger().debug(message)
        return finished

    def is_closed(self) -> bool:
        """True if every branch ends in a closed terminator."""
        return bool(self.tree.leaves) and all(
            self.tree.nodes[leaf_id].is_closed_terminator() for leaf_id in self.tree.leaves
        )

    def open_branches(self) -> List[int]:
        """Leaves of branches marked open."""
        return sorted(
            leaf_id for leaf_id in self.tree.leaves if self.tree.nodes[leaf_id].is_open_terminator()
        )

    def countermodel(self, leaf_id: int) -> Dict[str, bool]:
        """Truth assignment read off the literals of the branch ending at *leaf_id*.

        Atoms that do not occur on the branch are left out; any value for them
        satisfies the branch.
        """
        model: Dict[str, bool] = {}
        for node_id in reversed(self.tree.get_branch(leaf_id)):
            formula = self.tree.nodes[node_id].formula
            if isinstance(formula, Atom):
                model.setdefault(formula.name, True)
            elif isinstance(formula, Not) and isinstance(formula.operand, Atom):
                model.setdefault(formula.operand.name, False)
        return dict(sorted(model.items()))

    def countermodels(self) -> List[Dict[str, bool]]:
        return [self.countermodel(leaf_id) for leaf_id in self.open_branches()]

    def serialize(self) -> str:
        return serialize(self.tree)

    def __str__(self) -> str:
        lines = []
        for node_id in sorted(self.tree.nodes):
            node = self.tree.nodes[node_id]
            targets = ", ".join(str(t) for t in sorted(node.decomposition))
            lines.append(
                f"{node_id}: {node.text} -- decomposed={self.tree.is_decomposed(node_id)} [{targets}]"
            )
        return "\n".join(lines)
