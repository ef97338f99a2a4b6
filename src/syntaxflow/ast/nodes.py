#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/ast/nodes.py
"""Syntax tree node classes.

This module defines the single, grammar-agnostic node type passed between
the parse, run and stringify stages. A node is identified by its ``type``
tag; everything else about its meaning belongs to the grammar that produced
it.

Node Kinds
----------
Parent nodes carry an ordered list of ``children``.
Literal nodes carry a textual ``value``.
A node may be neither (a void node such as a thematic break), but never both.

Tree identity is positional: there are no node IDs. Transformers mutate
nodes in place or hand the pipeline a full replacement tree.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from syntaxflow.data import DataMapping, validate_data
from syntaxflow.exceptions import ValidationError


@dataclass(frozen=True)
class Point:
    """A single place in the source document.

    Parameters
    ----------
    line : int
        1-based line number
    column : int
        1-based column number
    offset : int or None, default = None
        0-based character offset from the start of the document

    """

    line: int
    column: int
    offset: Optional[int] = None

    def __post_init__(self) -> None:
        """Reject points before the start of a document."""
        if self.line < 1 or self.column < 1:
            raise ValidationError(f"Point line and column are 1-based, got {self.line}:{self.column}")
        if self.offset is not None and self.offset < 0:
            raise ValidationError(f"Point offset must be non-negative, got {self.offset}")

    def __str__(self) -> str:
        """Return ``line:column``."""
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Position:
    """Source span of a node: ``start`` inclusive, ``end`` exclusive."""

    start: Point
    end: Point

    def __str__(self) -> str:
        """Return ``line:column-line:column``."""
        return f"{self.start}-{self.end}"


@dataclass
class Node:
    """A syntax tree node.

    Parameters
    ----------
    type : str
        Tag identifying the node kind. Required and never empty.
    children : list of Node or None, default = None
        Child nodes, present only on parent nodes
    value : str or None, default = None
        Textual payload, present only on literal nodes
    data : dict or None, default = None
        Plugin-attached metadata; must hold serializable data values
    position : Position or None, default = None
        Where the node came from in the source document

    Raises
    ------
    ValidationError
        If ``type`` is empty or the node carries both ``children`` and ``value``

    Examples
    --------
    >>> root = Node("root", children=[Node("text", value="hello")])
    >>> root.is_parent, root.children[0].is_literal
    (True, True)

    """

    type: str
    children: Optional[list[Node]] = None
    value: Optional[str] = None
    data: Optional[DataMapping] = None
    position: Optional[Position] = None

    def __post_init__(self) -> None:
        """Check the node kind invariants."""
        if not isinstance(self.type, str) or not self.type:
            raise ValidationError("Node type must be a non-empty string", parameter_name="type", parameter_value=self.type)
        if self.children is not None and self.value is not None:
            raise ValidationError(
                f"Node '{self.type}' cannot carry both children and a value",
                parameter_name="children",
            )

    @property
    def is_parent(self) -> bool:
        """Whether this node carries children."""
        return self.children is not None

    @property
    def is_literal(self) -> bool:
        """Whether this node carries a value."""
        return self.value is not None

    def ensure_data(self) -> DataMapping:
        """Return the node's data mapping, creating it on first use."""
        if self.data is None:
            self.data = {}
        return self.data


def is_parent(node: Node) -> bool:
    """Return True if ``node`` is a parent node."""
    return node.children is not None


def is_literal(node: Node) -> bool:
    """Return True if ``node`` is a literal node."""
    return node.value is not None


def get_node_children(node: Node) -> list[Node]:
    """Return the children of ``node``, or an empty list for non-parents."""
    return node.children if node.children is not None else []


def validate_node(node: object, path: str = "tree") -> Node:
    """Validate a whole tree against the node invariants.

    Dataclass construction already checks each node; this catches trees that
    were mutated afterwards (a transformer setting both ``value`` and
    ``children``, a non-node child, unserializable ``data``).

    Parameters
    ----------
    node : object
        Root of the tree to check
    path : str, default "tree"
        Name used as the root of the path in error messages

    Returns
    -------
    Node
        The validated root, for chaining

    Raises
    ------
    ValidationError
        On the first invariant violation found

    """
    if not isinstance(node, Node):
        raise ValidationError(f"{path} is not a Node: {type(node).__name__}", parameter_name=path, parameter_value=node)
    if not isinstance(node.type, str) or not node.type:
        raise ValidationError(f"{path} has an empty type", parameter_name=f"{path}.type")
    if node.children is not None and node.value is not None:
        raise ValidationError(f"{path} ('{node.type}') carries both children and a value", parameter_name=path)
    if node.value is not None and not isinstance(node.value, str):
        raise ValidationError(
            f"{path} ('{node.type}') value must be a string, got {type(node.value).__name__}",
            parameter_name=f"{path}.value",
            parameter_value=node.value,
        )
    if node.data is not None:
        validate_data(node.data, path=f"{path}.data")
    for index, child in enumerate(get_node_children(node)):
        validate_node(child, path=f"{path}.children[{index}]")
    return node


__all__ = [
    "Point",
    "Position",
    "Node",
    "is_parent",
    "is_literal",
    "get_node_children",
    "validate_node",
]
