#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/ast/__init__.py
"""Syntax tree module.

The syntax tree is the unit every pipeline stage works on: parsers produce
it, transformers inspect and mutate it, compilers consume it. It is opaque to
the engine beyond a type tag and optional children or value.

The module consists of several components:

- nodes: the Node, Point and Position classes and tree validation
- builder: ``u()`` for terse tree construction
- visitors: type-dispatching visitor, ``walk`` and ``visit``
- transforms: rebuilding transformer, cloning, filtering, literal rewriting
- serialization: JSON serialization and deserialization of trees
- utils: text extraction

Examples
--------
    >>> from syntaxflow.ast import u, visit, to_string
    >>> tree = u("root", [u("text", "hello")])
    >>> visit(tree, "text", lambda node, index, parent: setattr(node, "value", node.value.upper()))
    >>> to_string(tree)
    'HELLO'

"""

from __future__ import annotations

from syntaxflow.ast.builder import u
from syntaxflow.ast.nodes import (
    Node,
    Point,
    Position,
    get_node_children,
    is_literal,
    is_parent,
    validate_node,
)
from syntaxflow.ast.serialization import dict_to_node, json_to_tree, node_to_dict, tree_to_json
from syntaxflow.ast.transforms import NodeTransformer, clone_node, filter_nodes, map_literals
from syntaxflow.ast.utils import count_words, to_string
from syntaxflow.ast.visitors import CONTINUE, EXIT, SKIP, NodeVisitor, find_all, visit, walk

__all__ = [
    # Nodes
    "Node",
    "Point",
    "Position",
    "get_node_children",
    "is_literal",
    "is_parent",
    "validate_node",
    # Builder
    "u",
    # Traversal
    "CONTINUE",
    "SKIP",
    "EXIT",
    "NodeVisitor",
    "walk",
    "visit",
    "find_all",
    # Transformation
    "NodeTransformer",
    "clone_node",
    "filter_nodes",
    "map_literals",
    # Serialization
    "node_to_dict",
    "dict_to_node",
    "tree_to_json",
    "json_to_tree",
    # Utilities
    "to_string",
    "count_words",
]
