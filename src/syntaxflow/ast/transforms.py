#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/ast/transforms.py
"""Syntax tree transformation and manipulation utilities.

This module provides a rebuilding transformer and helpers for common tree
edits: cloning, filtering and rewriting literal values.

Examples
--------
Remove every comment node:

    >>> filtered = filter_nodes(tree, lambda n: n.type != "comment")

Replace emphasis with its children's text:

    >>> class Flatten(NodeTransformer):
    ...     def visit_emphasis(self, node):
    ...         return Node("text", value=to_string(node))
    >>>
    >>> flat = Flatten().transform(tree)

"""

from __future__ import annotations

import copy
import re
from typing import Callable, Optional

from syntaxflow.ast.nodes import Node
from syntaxflow.ast.visitors import NodeVisitor, walk

_METHOD_SAFE = re.compile(r"[^0-9a-zA-Z_]")


class NodeTransformer(NodeVisitor):
    """Base class for transformers that build a new tree.

    Subclasses implement ``visit_<type>`` methods returning a replacement
    node, or None to remove the node. Types without a method are copied, and
    their children transformed recursively. The input tree is never modified.

    Examples
    --------
    >>> class Uppercase(NodeTransformer):
    ...     def visit_text(self, node):
    ...         return Node("text", value=node.value.upper())
    >>>
    >>> new_tree = Uppercase().transform(tree)

    """

    def transform(self, node: Node) -> Optional[Node]:
        """Transform a node.

        Parameters
        ----------
        node : Node
            Node to transform

        Returns
        -------
        Node or None
            Transformed node or None to remove

        """
        method = getattr(self, "visit_" + _METHOD_SAFE.sub("_", node.type), None)
        if method is not None:
            return method(node)
        return self.generic_visit(node)

    def visit(self, node: Node) -> Optional[Node]:
        """Alias of :meth:`transform` so visitor-style callers work."""
        return self.transform(node)

    def _transform_children(self, children: list[Node]) -> list[Node]:
        result = []
        for child in children:
            transformed = self.transform(child)
            if transformed is not None:
                result.append(transformed)
        return result

    def generic_visit(self, node: Node) -> Node:
        """Copy ``node``, transforming its children."""
        children = self._transform_children(node.children) if node.children is not None else None
        return Node(
            node.type,
            children=children,
            value=node.value,
            data=copy.deepcopy(node.data),
            position=node.position,
        )


def clone_node(node: Node) -> Node:
    """Create a deep copy of a tree.

    Examples
    --------
    >>> cloned = clone_node(tree)
    >>> cloned is tree
    False

    """
    return copy.deepcopy(node)


def filter_nodes(tree: Node, predicate: Callable[[Node], bool]) -> Node:
    """Return a copy of ``tree`` without the nodes ``predicate`` rejects.

    The root is always kept; a rejected parent is removed with its whole
    subtree.

    Parameters
    ----------
    tree : Node
        Tree to filter
    predicate : callable
        Returns True to keep a node

    Returns
    -------
    Node
        New, filtered tree

    """

    class _Filter(NodeTransformer):
        def transform(self, node: Node) -> Optional[Node]:
            if node is not tree and not predicate(node):
                return None
            return self.generic_visit(node)

    result = _Filter().transform(tree)
    assert result is not None
    return result


def map_literals(tree: Node, fn: Callable[[Node], str], node_type: Optional[str] = None) -> int:
    """Rewrite literal values in place.

    Parameters
    ----------
    tree : Node
        Tree to update
    fn : callable
        Receives a literal node and returns its new value
    node_type : str, optional
        Only rewrite literals of this type

    Returns
    -------
    int
        Number of literals rewritten

    """
    count = 0
    for node, _parent, _index in walk(tree):
        if node.value is None or (node_type is not None and node.type != node_type):
            continue
        node.value = fn(node)
        count += 1
    return count


__all__ = ["NodeTransformer", "clone_node", "filter_nodes", "map_literals"]
