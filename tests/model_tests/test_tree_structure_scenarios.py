# tests/model_tests/test_tree_structure_scenarios.py
# This file is part of Arbor - A Truth Tree Solver
#
# Test suite for tree insertion, deletion and leaf bookkeeping

import pytest
from model.tree import TruthTree
from model.node import TruthTreeNode, CLOSED_TERMINATOR, OPEN_TERMINATOR
from model.exceptions import TreeStructureError
from core.solver import TruthTreeSolver


def assert_leaves_consistent(tree: TruthTree):
    """The maintained leaf set must equal a full rescan."""
    assert tree.leaves == tree.compute_leaves()


class TestTreeStructureScenarios:
    """
    Test suite for the TruthTree node store: premise chains, linear and
    branching insertion, deletion with splicing, leaf maintenance and the
    branch/ancestor queries the solver builds on.
    """

    def test_01_premises_form_a_linear_chain(self, make_tree):
        """Premises are appended one below the other starting at the root."""
        tree = make_tree("P -> Q", "P", "~Q")

        assert tree.root == 0
        assert tree.nodes[0].children == [1]
        assert tree.nodes[1].children == [2]
        assert tree.nodes[2].parent == 1
        assert all(node.premise for node in tree.nodes.values())
        assert tree.leaves == {2}
        assert_leaves_consistent(tree)

    def test_02_linear_insertion_moves_the_leaf(self, make_tree):
        """Adding after a leaf makes the new node the leaf."""
        tree = make_tree("P")
        new_id = tree.add_node_after(0, False, "Q")

        assert new_id == 1
        assert tree.nodes[0].children == [1]
        assert tree.nodes[1].parent == 0
        assert tree.nodes[1].text == "Q"
        assert not tree.nodes[1].premise
        assert tree.leaves == {1}
        assert_leaves_consistent(tree)

    def test_03_linear_insertion_requires_a_leaf(self, make_tree):
        """Linear chaining after a node with children fails without mutation."""
        tree = make_tree("P", "Q")

        assert tree.add_node_after(0, False, "R") is None
        assert len(tree) == 2
        assert tree.nodes[0].children == [1]
        assert_leaves_consistent(tree)

    def test_04_new_branches_fan_out(self, make_tree):
        """Branch insertion adds sibling branch roots under the same node."""
        tree = make_tree("P ∨ Q")
        left = tree.add_node_after(0, True, "P")
        right = tree.add_node_after(0, True, "Q")

        assert tree.nodes[0].children == [left, right]
        assert tree.leaves == {left, right}
        assert_leaves_consistent(tree)

    def test_05_insertion_after_missing_node_fails(self, make_tree):
        """A missing anchor is a structural failure reported as None."""
        tree = make_tree("P")
        assert tree.add_node_after(42, False, "Q") is None
        assert tree.add_node_after(42, True, "Q") is None
        assert len(tree) == 1

    def test_06_ids_are_never_reused(self, make_tree):
        """Deleting the newest node does not free its id."""
        tree = make_tree("P")
        first = tree.add_node_after(0, False, "Q")
        tree.delete_node(first)
        second = tree.add_node_after(0, False, "R")

        assert second != first
        assert second == 2

    def test_07_deleting_a_middle_node_splices_its_child(self, make_tree):
        """Children of a deleted node take its place under its parent."""
        tree = make_tree("A", "B", "C")

        assert tree.delete_node(1) is True
        assert tree.nodes[0].children == [2]
        assert tree.nodes[2].parent == 0
        assert tree.leaves == {2}
        assert_leaves_consistent(tree)

    def test_08_deleting_the_last_child_restores_the_parent_leaf(self, make_tree):
        """A parent losing its only child becomes a leaf again."""
        tree = make_tree("P ∨ Q")
        left = tree.add_node_after(0, True, "P")
        right = tree.add_node_after(0, True, "Q")

        tree.delete_node(left)
        assert tree.leaves == {right}
        tree.delete_node(right)
        assert tree.leaves == {0}
        assert_leaves_consistent(tree)

    def test_09_deleting_a_forking_node_keeps_branch_order(self, make_tree):
        """A deleted fork point hands all its branches to its parent in order."""
        tree = make_tree("R", "P ∨ Q")
        a = tree.add_node_after(1, True, "P")
        b = tree.add_node_after(1, True, "Q")

        tree.delete_node(1)
        assert tree.nodes[0].children == [a, b]
        assert tree.nodes[a].parent == 0 and tree.nodes[b].parent == 0
        assert_leaves_consistent(tree)

    def test_10_deleting_the_root_promotes_its_child(self, make_tree):
        tree = make_tree("P", "Q")
        tree.delete_node(0)
        assert tree.root == 1
        assert tree.nodes[1].parent is None

    def test_11_deleting_a_branching_root_is_refused(self, make_tree):
        tree = make_tree("P ∨ Q")
        tree.add_node_after(0, True, "P")
        tree.add_node_after(0, True, "Q")

        assert tree.delete_node(0) is False
        assert tree.root == 0

    def test_12_deleting_missing_node_fails(self, make_tree):
        tree = make_tree("P")
        assert tree.delete_node(7) is False

    def test_13_deletion_drops_the_id_from_the_antecedent(self, make_tree):
        """A deleted derived node disappears from its antecedent's targets."""
        tree = make_tree("P ∧ Q")
        p_id = tree.add_node_after(0, False, "P")
        q_id = tree.add_node_after(p_id, False, "Q")
        for node_id in (p_id, q_id):
            tree.nodes[node_id].antecedent = 0
        tree.nodes[0].add_decomposition([p_id, q_id])

        tree.delete_node(q_id)
        assert tree.nodes[0].decomposition == {p_id}

    def test_14_random_mutations_keep_leaf_set_consistent(self, make_tree):
        """Leaf bookkeeping survives an arbitrary mix of inserts and deletes."""
        tree = make_tree("A", "B")
        x = tree.add_node_after(1, True, "X")
        y = tree.add_node_after(1, True, "Y")
        x1 = tree.add_node_after(x, False, "X1")
        y1 = tree.add_node_after(y, True, "Y1")
        y2 = tree.add_node_after(y, True, "Y2")
        assert_leaves_consistent(tree)

        for node_id in (x, y1, y, x1, y2):
            tree.delete_node(node_id)
            assert_leaves_consistent(tree)
        assert tree.leaves == {1}

    def test_15_branch_and_ancestry_queries(self, make_tree):
        """get_branch walks leaf to root; ancestry is strict."""
        tree = make_tree("A", "B ∨ C")
        b = tree.add_node_after(1, True, "B")
        c = tree.add_node_after(1, True, "C")

        assert tree.get_branch(b) == [b, 1, 0]
        assert tree.is_ancestor_of(0, c)
        assert tree.is_ancestor_of(1, b)
        assert not tree.is_ancestor_of(b, c)
        assert not tree.is_ancestor_of(b, b)
        assert list(tree.iter_subtree(1)) == [1, b, c]

    def test_16_premises_cannot_extend_a_branched_tree(self, make_tree):
        tree = make_tree("P ∨ Q")
        tree.add_node_after(0, True, "P")
        tree.add_node_after(0, True, "Q")

        with pytest.raises(TreeStructureError):
            tree.add_premise("R")

    def test_17_terminator_predicates(self):
        """Terminators are recognized by their marker text."""
        closed = TruthTreeNode(0, text=CLOSED_TERMINATOR)
        opened = TruthTreeNode(1, text=f" {OPEN_TERMINATOR} ")
        plain = TruthTreeNode(2, text="P")

        assert closed.is_closed_terminator() and closed.is_terminator()
        assert opened.is_open_terminator() and opened.is_terminator()
        assert not plain.is_terminator()
        assert closed.formula is None and opened.formula is None

    def test_18_text_change_reparses_formula(self):
        node = TruthTreeNode(0, text="P")
        assert str(node.formula) == "P"
        node.text = "P & Q"
        assert str(node.formula) == "(P ∧ Q)"
        node.text = "P &"
        assert node.formula is None


class TestCleanNonPremise:
    """Construction-time cleanup leaves only the premise chain."""

    def _expanded_tree(self, make_tree):
        tree = make_tree("P ∨ Q", "R ∧ S")
        r = tree.add_node_after(1, False, "R")
        s = tree.add_node_after(r, False, "S")
        p = tree.add_node_after(s, True, "P")
        q = tree.add_node_after(s, True, "Q")
        tree.add_node_after(p, False, OPEN_TERMINATOR)
        tree.add_node_after(q, False, OPEN_TERMINATOR)
        for node_id in (r, s):
            tree.nodes[node_id].antecedent = 1
        for node_id in (p, q):
            tree.nodes[node_id].antecedent = 0
        tree.nodes[1].add_decomposition([r, s])
        tree.nodes[0].add_decomposition([p, q])
        return tree

    def test_cleanup_strips_linear_and_branching_expansions(self, make_tree):
        tree = self._expanded_tree(make_tree)

        tree.clean_non_premise()

        assert sorted(tree.nodes) == [0, 1]
        assert tree.nodes[1].children == []
        assert tree.leaves == {1}
        assert_leaves_consistent(tree)

    def test_cleanup_forgets_stale_decompositions(self, make_tree):
        """Premises no longer cite targets that were stripped."""
        tree = self._expanded_tree(make_tree)
        tree.clean_non_premise()

        assert tree.nodes[0].decomposition == frozenset()
        assert tree.nodes[1].decomposition == frozenset()

    def test_cleanup_of_bare_premises_is_a_no_op(self, make_tree):
        tree = make_tree("P", "Q")
        tree.clean_non_premise()
        assert sorted(tree.nodes) == [0, 1]

    def test_cleanup_strips_a_very_long_chain(self, make_tree):
        """A derived chain thousands of lines deep is stripped without recursion."""
        tree = make_tree("P")
        last = 0
        for _ in range(3000):
            last = tree.add_node_after(last, False, "Q")

        TruthTreeSolver(tree)

        assert sorted(tree.nodes) == [0]
        assert tree.leaves == {0}
        assert_leaves_consistent(tree)


class TestFromNodes:
    """Assembling a tree from pre-linked nodes validates the links."""

    def test_valid_nodes_build_a_tree(self):
        nodes = [
            TruthTreeNode(0, "P ∨ Q", parent=None, children=[3, 5], premise=True),
            TruthTreeNode(3, "P", parent=0, antecedent=0),
            TruthTreeNode(5, "Q", parent=0, antecedent=0),
        ]
        tree = TruthTree.from_nodes(nodes, 0)

        assert tree.leaves == {3, 5}
        assert tree.add_node_after(3, False, OPEN_TERMINATOR) == 6

    @pytest.mark.parametrize(
        "nodes, root",
        [
            # duplicate ids
            ([TruthTreeNode(0, "P"), TruthTreeNode(0, "Q")], 0),
            # missing root
            ([TruthTreeNode(0, "P")], 9),
            # child that does not exist
            ([TruthTreeNode(0, "P", children=[1])], 0),
            # child naming another parent
            ([TruthTreeNode(0, "P", children=[1]), TruthTreeNode(1, "Q", parent=5)], 0),
            # detached node
            ([TruthTreeNode(0, "P"), TruthTreeNode(1, "Q")], 0),
        ],
    )
    def test_inconsistent_nodes_are_rejected(self, nodes, root):
        with pytest.raises(TreeStructureError):
            TruthTree.from_nodes(nodes, root)

    def test_empty_tree(self):
        tree = TruthTree.from_nodes([], None)
        assert tree.root is None and tree.leaves == set()
