# tests/utils_tests/test_tree_document.py
# This file is part of Arbor - A Truth Tree Solver
#
# Test suite for the JSON tree document reader and writer

"""Test suite for tree document serialization.

A tree read back from its own document must match the original in ids, text,
topology, premise flags, antecedents and decomposition sets.
"""

import json
import pytest
from core.solver import TruthTreeSolver
from utils.tree_document import (
    DocumentFormatError,
    deserialize,
    read_document,
    serialize,
    write_document,
)


class TestTreeDocumentRoundTrip:
    """Round-trip fidelity of serialize/deserialize."""

    def test_bare_premises_round_trip(self, make_tree):
        tree = make_tree("P → Q", "P", "¬Q")
        assert deserialize(serialize(tree)) == tree

    @pytest.mark.parametrize(
        "premises",
        [
            ["P -> Q", "P", "~Q"],
            ["P ∨ Q", "¬P"],
            ["(P ↔ Q) ∧ R", "¬(Q ∨ ¬R)"],
        ],
    )
    def test_solved_tree_round_trip(self, premises):
        """Trees built by the solver survive the round trip intact."""
        solver = TruthTreeSolver.from_premises(premises)
        solver.expand_all()

        restored = deserialize(serialize(solver.tree))

        assert restored == solver.tree
        assert restored.leaves == solver.tree.leaves
        for node_id, node in solver.tree.nodes.items():
            assert restored.nodes[node_id].decomposition == node.decomposition
            assert restored.nodes[node_id].antecedent == node.antecedent

    def test_partially_solved_tree_round_trip(self, modus_ponens_premises):
        solver = TruthTreeSolver.from_premises(["A ∧ B"] + modus_ponens_premises)
        solver.expand()

        assert deserialize(serialize(solver.tree)) == solver.tree

    def test_document_layout(self, make_tree):
        """The document is JSON with nodes listed in id order."""
        tree = make_tree("P", "¬P")
        document = json.loads(serialize(tree))

        assert document["version"] == 1
        assert document["root"] == 0
        assert [entry["id"] for entry in document["nodes"]] == [0, 1]
        assert document["nodes"][1] == {
            "id": 1,
            "text": "¬P",
            "parent": 0,
            "children": [],
            "premise": True,
            "antecedent": None,
            "decomposition": [],
        }

    def test_missing_root_is_inferred(self):
        text = json.dumps(
            {
                "nodes": [
                    {"id": 4, "text": "Q", "parent": 2, "children": []},
                    {"id": 2, "text": "P", "children": [4], "premise": True},
                ]
            }
        )
        tree = deserialize(text)
        assert tree.root == 2
        assert tree.leaves == {4}
        assert not tree.nodes[4].premise

    def test_file_round_trip(self, tmp_path, make_tree):
        tree = make_tree("P ∨ Q")
        path = tmp_path / "argument.willow"

        write_document(tree, path)

        assert read_document(path) == tree


class TestTreeDocumentErrors:
    """Malformed documents raise DocumentFormatError."""

    INVALID_DOCUMENTS = [
        "not json",
        "[]",
        '{"nodes": {}}',
        '{"nodes": [1, 2]}',
        '{"nodes": [{"id": 0, "children": []}]}',
        '{"nodes": [{"id": "0", "text": "P", "children": []}]}',
        '{"nodes": [{"id": true, "text": "P", "children": []}]}',
        '{"nodes": [{"id": 0, "text": 3, "children": []}]}',
        '{"nodes": [{"id": 0, "text": "P", "children": [], "premise": "false"}]}',
        '{"root": 0, "nodes": [{"id": 0, "text": "P", "children": [1]}]}',
        '{"nodes": [{"id": 0, "text": "P", "children": []}, {"id": 1, "text": "Q", "children": []}]}',
    ]

    @pytest.mark.parametrize("text", INVALID_DOCUMENTS)
    def test_invalid_documents(self, text):
        with pytest.raises(DocumentFormatError):
            deserialize(text)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentFormatError, match="not found"):
            read_document(tmp_path / "missing.willow")

    def test_premise_flag_must_be_boolean(self):
        text = json.dumps(
            {
                "root": 0,
                "nodes": [
                    {"id": 0, "text": "P", "children": [1], "premise": True},
                    {"id": 1, "text": "Q", "parent": 0, "children": [], "premise": "false"},
                ],
            }
        )
        with pytest.raises(DocumentFormatError, match="'premise' must be a boolean"):
            deserialize(text)
