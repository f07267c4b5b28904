# utils/tree_document.py
# This file is part of Arbor - A Truth Tree Solver
#
# JSON document reader and writer for truth trees (.willow files)

import json
from pathlib import Path
from typing import Any, Dict, Union

from model.exceptions import TreeStructureError
from model.node import TruthTreeNode
from model.tree import TruthTree
from utils.logger import get_logger

DOCUMENT_VERSION = 1

_REQUIRED_FIELDS = {"id", "text", "children"}


class DocumentFormatError(Exception):
    """Exception raised when a tree document contains invalid format or data."""

    pass


def serialize(tree: TruthTree) -> str:
    """Encode a tree as a JSON document.

    Expected document format:
        {
          "version": 1,
          "root": 0,
          "nodes": [
            {"id": 0, "text": "P → Q", "parent": null, "children": [1],
             "premise": true, "antecedent": null, "decomposition": []},
            ...
          ]
        }

    Args:
        tree: Tree to encode

    Returns:
        JSON text with nodes listed in id order
    """
    nodes = [_node_to_dict(tree.nodes[node_id]) for node_id in sorted(tree.nodes)]
    document = {"version": DOCUMENT_VERSION, "root": tree.root, "nodes": nodes}
    return json.dumps(document, ensure_ascii=False, indent=2)


def deserialize(text: str) -> TruthTree:
    """Decode a JSON document into a tree.

    Args:
        text: Document produced by serialize (or written by hand)

    Returns:
        TruthTree with the recorded ids, links, flags and decompositions

    Raises:
        DocumentFormatError: If the text is not a well-formed tree document
    """
    logger = get_logger()

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"Document is not valid JSON: {e}")

    if not isinstance(document, dict) or not isinstance(document.get("nodes"), list):
        raise DocumentFormatError("Document must be an object with a 'nodes' list")

    nodes = []
    for position, entry in enumerate(document["nodes"]):
        try:
            nodes.append(_node_from_dict(entry))
        except (KeyError, TypeError, ValueError) as e:
            raise DocumentFormatError(f"Error parsing node entry {position}: {e}")

    root = document.get("root")
    if root is None and nodes:
        orphans = [node.id for node in nodes if node.parent is None]
        if len(orphans) != 1:
            raise DocumentFormatError("Document does not name a root and has no single parentless node")
        root = orphans[0]

    try:
        tree = TruthTree.from_nodes(nodes, root)
    except TreeStructureError as e:
        raise DocumentFormatError(f"Inconsistent tree structure: {e}")

    logger.debug(f"Deserialized tree with {len(tree)} nodes and {len(tree.leaves)} leaves")
    return tree


def read_document(filepath: Union[str, Path]) -> TruthTree:
    """Read a tree document from disk.

    Raises:
        DocumentFormatError: If the file is missing or malformed
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise DocumentFormatError(f"Tree document not found: {filepath}")

    logger.debug(f"Reading tree document: {filepath}")

    try:
        with open(path, "r", encoding="utf-8") as file:
            return deserialize(file.read())
    except OSError as e:
        raise DocumentFormatError(f"Cannot open tree document: {e}")


def write_document(tree: TruthTree, filepath: Union[str, Path]) -> None:
    """Write a tree document to disk."""
    logger = get_logger()
    path = Path(filepath)

    with open(path, "w", encoding="utf-8") as file:
        file.write(serialize(tree))

    logger.debug(f"Wrote tree document with {len(tree)} nodes to {path}")


def _node_to_dict(node: TruthTreeNode) -> Dict[str, Any]:
    return {
        "id": node.id,
        "text": node.text,
        "parent": node.parent,
        "children": list(node.children),
        "premise": node.premise,
        "antecedent": node.antecedent,
        "decomposition": sorted(node.decomposition),
    }


def _node_from_dict(entry: Dict[str, Any]) -> TruthTreeNode:
    """Build one node from its document entry.

    Raises:
        KeyError: A required field is missing
        TypeError, ValueError: A field has the wrong type
    """
    if not isinstance(entry, dict):
        raise TypeError("node entry must be an object")

    missing = _REQUIRED_FIELDS - set(entry)
    if missing:
        raise KeyError(f"missing fields {sorted(missing)}")

    if not isinstance(entry["text"], str):
        raise TypeError("'text' must be a string")

    return TruthTreeNode(
        _as_id(entry["id"]),
        text=entry["text"],
        parent=_as_optional_id(entry.get("parent")),
        children=[_as_id(child) for child in entry["children"]],
        premise=_as_flag(entry.get("premise", False), "premise"),
        antecedent=_as_optional_id(entry.get("antecedent")),
        decomposition=[_as_id(target) for target in entry.get("decomposition", [])],
    )


def _as_id(value: Any) -> int:
    # bool is an int subclass but never a node id
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"node id must be an integer, got {value!r}")
    return value


def _as_flag(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"'{field}' must be a boolean, got {value!r}")
    return value


def _as_optional_id(value: Any):
    return None if value is None else _as_id(value)
