# model/tree.py
# This file is part of Arbor - A Truth Tree Solver
#
# Node store, leaf bookkeeping and correctness queries for truth trees

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Set, Tuple

from parser import decompose
from .exceptions import TreeStructureError
from .node import TruthTreeNode
from .validity import Validity, ValidityPredicate, local_validity
from utils.logger import get_logger


class TruthTree:
    """Arena-style store of truth tree nodes.

    All nodes live in a single id-keyed dictionary and link to each other by
    id. The set of leaves is kept up to date by every insertion and deletion;
    compute_leaves() rebuilds it from scratch and must always agree with it.

    Attributes:
        nodes: Mapping from node id to node
        root: Id of the first node, None for an empty tree
        leaves: Ids of nodes without children
    """

    def __init__(self, validator: ValidityPredicate = local_validity):
        self.nodes: Dict[int, TruthTreeNode] = {}
        self.root: Optional[int] = None
        self.leaves: Set[int] = set()
        self.validator = validator
        self._next_id = 0

    @classmethod
    def from_nodes(
        cls,
        nodes: Iterable[TruthTreeNode],
        root: Optional[int],
        validator: ValidityPredicate = local_validity,
    ) -> TruthTree:
        """Assemble a tree from fully linked nodes, e.g. a loaded document.

        Raises:
            TreeStructureError: Ids collide, links disagree, or some node is
                unreachable from the root
        """
        tree = cls(validator)
        for node in nodes:
            if node.id in tree.nodes:
                raise TreeStructureError(f"Duplicate node id {node.id}")
            tree.nodes[node.id] = node

        if not tree.nodes:
            if root is not None:
                raise TreeStructureError(f"Root {root} is not a node of the tree")
            return tree

        if root not in tree.nodes:
            raise TreeStructureError(f"Root {root} is not a node of the tree")
        if tree.nodes[root].parent is not None:
            raise TreeStructureError(f"Root {root} has a parent")

        for node in tree.nodes.values():
            for child_id in node.children:
                child = tree.nodes.get(child_id)
                if child is None:
                    raise TreeStructureError(f"Node {node.id} lists missing child {child_id}")
                if child.parent != node.id:
                    raise TreeStructureError(
                        f"Node {child_id} is a child of {node.id} but names parent {child.parent}"
                    )
            if node.id != root:
                parent = tree.nodes.get(node.parent)
                if parent is None or node.id not in parent.children:
                    raise TreeStructureError(f"Node {node.id} is not attached to the tree")

        reachable = set(tree.iter_subtree(root))
        if len(reachable) != len(tree.nodes):
            missing = sorted(set(tree.nodes) - reachable)
            raise TreeStructureError(f"Nodes {missing} are unreachable from root {root}")

        tree.root = root
        tree.leaves = tree.compute_leaves()
        tree._next_id = max(tree.nodes) + 1
        return tree

    # Insertion and deletion primitives

    def add_node_after(self, after_id: int, new_branch: bool, text: str = "") -> Optional[int]:
        """Create a node below *after_id*.

        Args:
            after_id: Node the new one is attached to
            new_branch: False continues a branch linearly and needs *after_id*
                to be a leaf; True adds another branch root under *after_id*
            text: Formula text of the new node

        Returns:
            The new node id, or None if the node could not be created
        """
        logger = get_logger()
        after = self.nodes.get(after_id)
        if after is None:
            logger.structural_failure(f"cannot add a node after missing node {after_id}")
            return None
        if not new_branch and after.children:
            logger.structural_failure(
                f"node {after_id} already has children; linear insertion needs a leaf"
            )
            return None

        node_id = self._allocate_id()
        self.nodes[node_id] = TruthTreeNode(node_id, text=text, parent=after_id)
        after.children.append(node_id)
        self.leaves.discard(after_id)
        self.leaves.add(node_id)

        logger.debug(
            f"Added node {node_id} after {after_id} ({'new branch' if new_branch else 'linear'})"
        )
        return node_id

    def add_premise(self, text: str) -> int:
        """Append a premise to the end of the premise chain.

        Raises:
            TreeStructureError: The tree already branches
        """
        if self.root is None:
            node_id = self._allocate_id()
            self.nodes[node_id] = TruthTreeNode(node_id, text=text, premise=True)
            self.root = node_id
            self.leaves.add(node_id)
            return node_id

        last = self.root
        while self.nodes[last].children:
            if len(self.nodes[last].children) > 1:
                raise TreeStructureError("Premises can only be added to an unbranched tree")
            last = self.nodes[last].children[0]

        node_id = self.add_node_after(last, False, text)
        self.nodes[node_id].premise = True
        return node_id

    def delete_node(self, node_id: int) -> bool:
        """Remove a node, moving its children into its place under its parent.

        The id is also dropped from its antecedent's decomposition set.

        Returns:
            False if the node does not exist or is a branching root
        """
        logger = get_logger()
        node = self.nodes.get(node_id)
        if node is None:
            logger.structural_failure(f"cannot delete missing node {node_id}")
            return False
        if node.parent is None and len(node.children) > 1:
            logger.structural_failure(f"cannot delete root {node_id} with several branches")
            return False

        del self.nodes[node_id]
        self.leaves.discard(node_id)

        for child_id in node.children:
            self.nodes[child_id].parent = node.parent

        if node.parent is None:
            self.root = node.children[0] if node.children else None
        else:
            parent = self.nodes[node.parent]
            position = parent.children.index(node_id)
            parent.children[position:position + 1] = node.children
            if not parent.children:
                self.leaves.add(parent.id)

        antecedent = self.nodes.get(node.antecedent) if node.antecedent is not None else None
        if antecedent is not None:
            antecedent.discard_decomposition(node_id)

        logger.debug(f"Deleted node {node_id}")
        return True

    def clean_non_premise(self):
        """Strip every non-premise node, leaving the bare premise chain.

        Premises are expected to form the top of the tree, so whatever a
        document recorded below them (a finished or half-finished expansion)
        is discarded. Nodes are deleted deepest first, iteratively, so chains
        of any length are stripped.
        """
        if self.root is None:
            return
        stripped = [
            node_id for node_id in self.iter_subtree(self.root) if not self.nodes[node_id].premise
        ]
        for node_id in reversed(stripped):
            self.delete_node(node_id)

    def _allocate_id(self) -> int:
        node_id = self._next_id
        self._next_id += 1
        return node_id

    # Structural queries

    def compute_leaves(self) -> Set[int]:
        """Leaf set rebuilt by a full scan of the store."""
        return {node_id for node_id, node in self.nodes.items() if not node.children}

    def iter_subtree(self, node_id: int) -> Iterable[int]:
        """Ids of *node_id* and all its descendants, depth first."""
        stack = [node_id]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self.nodes[current].children))

    def get_branch(self, node_id: int) -> List[int]:
        """Ids on the path from *node_id* up to the root, starting at *node_id*."""
        branch = []
        current: Optional[int] = node_id
        while current is not None:
            branch.append(current)
            current = self.nodes[current].parent
        return branch

    def is_ancestor_of(self, ancestor_id: int, node_id: int) -> bool:
        """True if *ancestor_id* lies strictly above *node_id*."""
        if node_id not in self.nodes:
            return False
        current = self.nodes[node_id].parent
        while current is not None:
            if current == ancestor_id:
                return True
            current = self.nodes[current].parent
        return False

    def expansion_branches(self, node_id: int) -> List[int]:
        """Leaves that still need the rule of *node_id* applied.

        A leaf qualifies when it is the node itself or one of its descendants,
        is not a closed terminator, and its branch holds none of the node's
        decomposition targets. Nodes without a rule (literals, terminators,
        unparsable text) never need expansion.
        """
        node = self.nodes[node_id]
        if node.is_terminator() or not decompose(node.formula):
            return []

        leaves = []
        for leaf_id in sorted(self.leaves):
            if leaf_id != node_id and not self.is_ancestor_of(node_id, leaf_id):
                continue
            if self.nodes[leaf_id].is_closed_terminator():
                continue
            if node.decomposition.intersection(self.get_branch(leaf_id)):
                continue
            leaves.append(leaf_id)
        return leaves

    def is_decomposed(self, node_id: int) -> bool:
        return not self.expansion_branches(node_id)

    def is_valid(self, node_id: int) -> Validity:
        """Cached local validity of a node."""
        node = self.nodes[node_id]
        if node._validity is not None:
            return node._validity

        validity = self.validator(self, node)
        if validity.is_conclusive():
            node._validity = validity
        return validity

    def is_correct(self) -> Tuple[bool, str]:
        """Check that the tree is a complete, correct truth tree.

        Returns:
            (verdict, message) where the message names the first problem found
        """
        for leaf_id in sorted(self.leaves):
            if not self.nodes[leaf_id].is_terminator():
                return False, f"Branch ending at node {leaf_id} is not terminated"

        for node_id in sorted(self.nodes):
            node = self.nodes[node_id]
            validity = self.is_valid(node_id)
            if validity is not Validity.VALID:
                return False, f"Node {node_id} ({node.text}) is {validity}"
            if not node.is_terminator() and not self.is_decomposed(node_id):
                return False, f"Node {node_id} ({node.text}) is not fully decomposed"

        return True, "All branches are terminated and every node is valid"

    def premises(self) -> List[TruthTreeNode]:
        return [self.nodes[node_id] for node_id in sorted(self.nodes) if self.nodes[node_id].premise]

    def __len__(self) -> int:
        return len(self.nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TruthTree):
            return NotImplemented
        return self.root == other.root and self.nodes == other.nodes

    __hash__ = None
