# model/exceptions.py
# This file is part of Arbor - A Truth Tree Solver
#
# Exceptions raised while assembling truth trees


class TreeStructureError(RuntimeError):
    """Raised when a set of nodes cannot form a single consistent tree.

    Only raised at construction boundaries. Mutations on a live tree report
    failure through their return value instead.
    """

    pass
