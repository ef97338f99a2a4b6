#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/ast/serialization.py
"""JSON serialization and deserialization for syntax trees.

The JSON format mirrors the node fields one-to-one:

    {"type": "root", "children": [{"type": "text", "value": "hi"}]}

Absent fields are omitted, ``position`` is written as
``{"start": {"line", "column", "offset"}, "end": {...}}``, and
``tree -> JSON -> tree`` yields an equal tree.

Examples
--------
    >>> from syntaxflow.ast import u
    >>> from syntaxflow.ast.serialization import tree_to_json, json_to_tree
    >>> text = tree_to_json(u("root", [u("text", "hi")]), indent=None)
    >>> text
    '{"type": "root", "children": [{"type": "text", "value": "hi"}]}'
    >>> json_to_tree(text).children[0].value
    'hi'

"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Optional

from syntaxflow.ast.nodes import Node, Point, Position
from syntaxflow.data import validate_data
from syntaxflow.exceptions import ParsingError, ValidationError

_NODE_KEYS = frozenset({"type", "children", "value", "data", "position"})


def _point_to_dict(point: Point) -> dict[str, Any]:
    result: dict[str, Any] = {"line": point.line, "column": point.column}
    if point.offset is not None:
        result["offset"] = point.offset
    return result


def _dict_to_point(raw: Any, path: str) -> Point:
    if not isinstance(raw, Mapping) or "line" not in raw or "column" not in raw:
        raise ParsingError(f"Invalid point at {path}: expected an object with line and column")
    try:
        return Point(line=int(raw["line"]), column=int(raw["column"]), offset=raw.get("offset"))
    except (TypeError, ValueError, ValidationError) as e:
        raise ParsingError(f"Invalid point at {path}: {e}", original_error=e) from e


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert a tree into plain, JSON-compatible dicts.

    Parameters
    ----------
    node : Node
        Root of the tree

    Returns
    -------
    dict
        Serialized tree

    Raises
    ------
    ValidationError
        If a node's ``data`` holds values outside the data variant

    """
    result: dict[str, Any] = {"type": node.type}
    if node.children is not None:
        result["children"] = [node_to_dict(child) for child in node.children]
    if node.value is not None:
        result["value"] = node.value
    if node.data is not None:
        result["data"] = dict(validate_data(node.data, path=f"{node.type}.data"))
    if node.position is not None:
        result["position"] = {
            "start": _point_to_dict(node.position.start),
            "end": _point_to_dict(node.position.end),
        }
    return result


def dict_to_node(raw: Any, path: str = "tree") -> Node:
    """Rebuild a tree from the output of :func:`node_to_dict`.

    Parameters
    ----------
    raw : Any
        Decoded JSON value
    path : str, default "tree"
        Location used in error messages

    Returns
    -------
    Node
        Rebuilt tree

    Raises
    ------
    ParsingError
        If ``raw`` is not a valid serialized tree

    """
    if not isinstance(raw, Mapping):
        raise ParsingError(f"Invalid node at {path}: expected an object, got {type(raw).__name__}")

    unknown = set(raw) - _NODE_KEYS
    if unknown:
        raise ParsingError(f"Invalid node at {path}: unknown keys {', '.join(sorted(unknown))}")

    children: Optional[list[Node]] = None
    if "children" in raw:
        if not isinstance(raw["children"], list):
            raise ParsingError(f"Invalid node at {path}: children must be a list")
        children = [dict_to_node(child, f"{path}.children[{i}]") for i, child in enumerate(raw["children"])]

    value = raw.get("value")
    if value is not None and not isinstance(value, str):
        raise ParsingError(f"Invalid node at {path}: value must be a string")

    position = None
    if raw.get("position") is not None:
        raw_position = raw["position"]
        if not isinstance(raw_position, Mapping):
            raise ParsingError(f"Invalid position at {path}")
        position = Position(
            start=_dict_to_point(raw_position.get("start"), f"{path}.position.start"),
            end=_dict_to_point(raw_position.get("end"), f"{path}.position.end"),
        )

    data = raw.get("data")
    try:
        if data is not None:
            validate_data(data, path=f"{path}.data")
        return Node(
            raw.get("type", ""),
            children=children,
            value=value,
            data=dict(data) if data is not None else None,
            position=position,
        )
    except ValidationError as e:
        raise ParsingError(f"Invalid node at {path}: {e.message}", original_error=e) from e


def tree_to_json(node: Node, indent: Optional[int] = 2) -> str:
    """Serialize a tree to a JSON string."""
    return json.dumps(node_to_dict(node), indent=indent, ensure_ascii=False)


def json_to_tree(text: str) -> Node:
    """Deserialize a JSON string produced by :func:`tree_to_json`.

    Raises
    ------
    ParsingError
        If ``text`` is not valid JSON or not a valid serialized tree

    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParsingError(f"Invalid JSON tree: {e}", parsing_stage="json", original_error=e) from e
    return dict_to_node(raw)


__all__ = ["node_to_dict", "dict_to_node", "tree_to_json", "json_to_tree"]
