#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/ast/utils.py
"""Utility functions for working with syntax tree nodes.

Examples
--------
    >>> from syntaxflow.ast import u
    >>> from syntaxflow.ast.utils import to_string
    >>> to_string(u("root", [u("text", "Hello "), u("emphasis", [u("text", "world")])]))
    'Hello world'

"""

from __future__ import annotations

from typing import Union

from syntaxflow.ast.nodes import Node
from syntaxflow.ast.visitors import walk


def to_string(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Concatenate the values of all literal nodes in document order.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String placed between consecutive literal values

    Returns
    -------
    str
        Concatenated literal content

    """
    nodes = node_or_nodes if isinstance(node_or_nodes, list) else [node_or_nodes]
    parts = [node.value for root in nodes for node, _parent, _index in walk(root) if node.value is not None]
    return joiner.join(parts)


def count_words(node: Node) -> int:
    """Count whitespace-separated words across all literal values."""
    return len(to_string(node, joiner=" ").split())


__all__ = ["to_string", "count_words"]
