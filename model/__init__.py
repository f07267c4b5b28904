# model/__init__.py

"""
Domain objects for truth trees: the node store with its leaf bookkeeping,
individual tree lines, and the tri-state validity verdict. These types know
the rule table but carry no solving strategy.
"""

from .node import TruthTreeNode, CLOSED_TERMINATOR, OPEN_TERMINATOR
from .tree import TruthTree
from .validity import Validity, local_validity, find_complementary_literals
from .exceptions import TreeStructureError

__all__ = [
    "TruthTree",
    "TruthTreeNode",
    "CLOSED_TERMINATOR",
    "OPEN_TERMINATOR",
    "Validity",
    "local_validity",
    "find_complementary_literals",
    "TreeStructureError",
]
