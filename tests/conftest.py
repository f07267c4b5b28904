# tests/conftest.py
# This file is part of Arbor - A Truth Tree Solver
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for Arbor truth tree tests.

The configuration handles:
- Python path setup for module imports
- Test environment initialization
- Common premise sets and tree builders
"""

import sys
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify module availability before any test runs.

    Raises:
        pytest.skip: If required modules cannot be imported
    """
    try:
        import core
        import model
        import parser
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


@pytest.fixture
def make_tree():
    """Factory building a bare premise chain from formula strings."""
    from model.tree import TruthTree

    def _make(*premises: str) -> TruthTree:
        tree = TruthTree()
        for text in premises:
            tree.add_premise(text)
        return tree

    return _make


@pytest.fixture
def modus_ponens_premises():
    """Premises of a valid argument: P → Q, P, therefore Q (Q negated)."""
    return ["P -> Q", "P", "~Q"]


@pytest.fixture
def invalid_argument_premises():
    """Premises of an invalid argument: P → Q, Q, therefore P (P negated)."""
    return ["P -> Q", "Q", "~P"]
