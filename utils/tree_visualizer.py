# utils/tree_visualizer.py
# This file is part of Arbor - A Truth Tree Solver
#
# Text and Graphviz renderings of truth trees

import os
from typing import List, Optional

from graphviz import Digraph

from model.tree import TruthTree
from model.node import TruthTreeNode
from utils.logger import get_logger

VISUALIZATION_OUTPUT_FOLDER = "tree_visualizations"


def node_label(node: TruthTreeNode) -> Optional[str]:
    """Justification shown next to a line: its antecedent, references or premise."""
    if node.is_closed_terminator() and node.references:
        return "closes " + ", ".join(str(ref) for ref in sorted(node.references))
    if node.antecedent is not None:
        return f"from {node.antecedent}"
    if node.premise:
        return "premise"
    return None


def _format_line(node: TruthTreeNode) -> str:
    label = node_label(node)
    return f"{node.id}. {node.text}" + (f"  [{label}]" if label else "")


def format_tree(tree: TruthTree) -> str:
    """Render the tree as an indented outline.

    Lines of one branch are stacked; a fork lists each branch under a
    connector, the way a truth tree is drawn on paper turned sideways.
    """
    if tree.root is None:
        return "(empty tree)"

    lines: List[str] = []

    def show_branch(node_id: int, prefix: str):
        current: Optional[int] = node_id
        while current is not None:
            node = tree.nodes[current]
            lines.append(prefix + _format_line(node))
            if len(node.children) == 1:
                current = node.children[0]
                continue
            for position, child_id in enumerate(node.children):
                last = position == len(node.children) - 1
                lines.append(prefix + ("└── " if last else "├── ") + "branch")
                show_branch(child_id, prefix + ("    " if last else "│   "))
            current = None

    show_branch(tree.root, "")
    return "\n".join(lines)


def build_digraph(tree: TruthTree, fmt: str = "png") -> Digraph:
    """Build a Graphviz digraph of the tree without rendering it."""
    dot = Digraph(comment="Truth Tree", format=fmt)
    dot.attr(rankdir="TB", nodesep="0.4", ranksep="0.3")
    dot.attr("node", shape="box", style="rounded,filled", fontname="Helvetica")

    for node_id in sorted(tree.nodes):
        node = tree.nodes[node_id]
        label = _format_line(node)
        if node.is_closed_terminator():
            color = "lightcoral"
        elif node.is_open_terminator():
            color = "palegreen"
        elif node.premise:
            color = "lightskyblue"
        else:
            color = "white"
        dot.node(str(node_id), label, fillcolor=color)

    for node_id in sorted(tree.nodes):
        node = tree.nodes[node_id]
        for child_id in node.children:
            # forks are drawn with solid edges, linear continuations dotted
            style = "solid" if len(node.children) > 1 else "dotted"
            dot.edge(str(node_id), str(child_id), style=style, arrowhead="none")

    return dot


def render_tree(tree: TruthTree, base_filename: str, fmt: str = "png") -> Optional[str]:
    """Render the tree to an image inside the visualization folder.

    Args:
        tree: Tree to draw
        base_filename: Base name for the output file
        fmt: Output format (e.g. "png", "svg")

    Returns:
        Path of the rendered file, or None if rendering failed
    """
    logger = get_logger()
    dot = build_digraph(tree, fmt)

    if not os.path.exists(VISUALIZATION_OUTPUT_FOLDER):
        try:
            os.makedirs(VISUALIZATION_OUTPUT_FOLDER)
            logger.info(f"Created directory for tree visualizations: {VISUALIZATION_OUTPUT_FOLDER}")
            output_path = os.path.join(VISUALIZATION_OUTPUT_FOLDER, base_filename)
        except OSError as e:
            logger.error(f"Could not create directory {VISUALIZATION_OUTPUT_FOLDER}: {e}. "
                         f"Saving to current directory instead.")
            output_path = base_filename
    else:
        output_path = os.path.join(VISUALIZATION_OUTPUT_FOLDER, base_filename)

    try:
        rendered = dot.render(output_path, cleanup=True)
        logger.info(f"Tree visualization saved to {rendered}")
        return rendered
    except Exception as e:
        logger.warning(f"Failed to render tree visualization to {output_path}.{fmt}: {e}. "
                       "Ensure Graphviz executables (dot) are in your system's PATH.")
        return None
