# model/node.py
# This file is part of Arbor - A Truth Tree Solver
#
# A single line of a truth tree

from __future__ import annotations
from typing import FrozenSet, Iterable, List, Optional

from parser import try_parse
from parser.ast_nodes import Formula
from .validity import Validity

CLOSED_TERMINATOR = "×"
OPEN_TERMINATOR = "◯"

_UNPARSED = object()


class TruthTreeNode:
    """One line of a truth tree.

    Nodes are owned by a TruthTree and refer to each other only by id. The
    parent/child links are maintained by the tree's insertion and deletion
    primitives; code outside the tree reads them but never edits them.

    Attributes:
        id: Stable identifier, never reused while the node exists
        parent: Id of the parent node, None for the root
        children: Ordered child ids; more than one child means a fork
        premise: True for nodes of the original input chain
        antecedent: Id of the node whose rule produced this one
    """

    def __init__(
        self,
        node_id: int,
        text: str = "",
        parent: Optional[int] = None,
        children: Optional[List[int]] = None,
        premise: bool = False,
        antecedent: Optional[int] = None,
        decomposition: Iterable[int] = (),
    ):
        self.id = node_id
        self.parent = parent
        self.children: List[int] = list(children or [])
        self.premise = premise
        self.antecedent = antecedent
        self._text = text
        self._decomposition = set(decomposition)
        self._formula = _UNPARSED
        self._validity: Optional[Validity] = None

    @property
    def text(self) -> str:
        """Formula text as authored."""
        return self._text

    @text.setter
    def text(self, value: str):
        self._text = value
        self._formula = _UNPARSED
        self.invalidate()

    @property
    def formula(self) -> Optional[Formula]:
        """Parsed formula, or None for terminators and unparsable text."""
        if self._formula is _UNPARSED:
            self._formula = None if self.is_terminator() else try_parse(self._text)
        return self._formula

    @property
    def decomposition(self) -> FrozenSet[int]:
        """Ids produced by this node's rule; a closed terminator's references."""
        return frozenset(self._decomposition)

    @property
    def references(self) -> FrozenSet[int]:
        """The two contradicting ancestors cited by a closed terminator."""
        return self.decomposition if self.is_closed_terminator() else frozenset()

    def add_decomposition(self, node_ids: Iterable[int]):
        """Merge *node_ids* into the decomposition set."""
        before = len(self._decomposition)
        self._decomposition.update(node_ids)
        if len(self._decomposition) != before:
            self.invalidate()

    def discard_decomposition(self, node_id: int):
        """Forget a decomposition target that no longer exists in the tree."""
        if node_id in self._decomposition:
            self._decomposition.discard(node_id)
            self.invalidate()

    def invalidate(self):
        """Drop the cached validity verdict."""
        self._validity = None

    def is_closed_terminator(self) -> bool:
        return self._text.strip() == CLOSED_TERMINATOR

    def is_open_terminator(self) -> bool:
        return self._text.strip() == OPEN_TERMINATOR

    def is_terminator(self) -> bool:
        return self.is_closed_terminator() or self.is_open_terminator()

    def is_leaf(self) -> bool:
        return not self.children

    def __eq__(self, other) -> bool:
        if not isinstance(other, TruthTreeNode):
            return NotImplemented
        return (
            self.id == other.id
            and self._text == other._text
            and self.parent == other.parent
            and self.children == other.children
            and self.premise == other.premise
            and self.antecedent == other.antecedent
            and self._decomposition == other._decomposition
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"TruthTreeNode(id={self.id}, text={self._text!r}, parent={self.parent}, "
            f"children={self.children}, premise={self.premise}, "
            f"antecedent={self.antecedent}, decomposition={sorted(self._decomposition)})"
        )
