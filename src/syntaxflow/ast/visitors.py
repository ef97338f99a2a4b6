#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/ast/visitors.py
"""Visitor pattern implementation for syntax tree traversal.

Nodes are grammar-agnostic, so dispatch is by the ``type`` tag rather than by
class: a node of type ``list-item`` is handled by ``visit_list_item``.

Besides the class-based visitor this module provides two functional walkers
that plugins use most:

- :func:`walk` yields every node with its parent and index
- :func:`visit` calls a function for matching nodes, with ``SKIP`` and
  ``EXIT`` control over the traversal

Examples
--------
Count text nodes:

    >>> class TextCounter(NodeVisitor):
    ...     def __init__(self):
    ...         self.count = 0
    ...
    ...     def visit_text(self, node):
    ...         self.count += 1
    >>>
    >>> counter = TextCounter()
    >>> counter.visit(tree)

Uppercase every text node, without descending into code:

    >>> def upper(node, index, parent):
    ...     if node.type == "code":
    ...         return SKIP
    ...     if node.type == "text":
    ...         node.value = node.value.upper()
    >>>
    >>> visit(tree, None, upper)

"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterator
from typing import Any, Callable, Optional, Union

from syntaxflow.ast.nodes import Node, get_node_children

CONTINUE = "continue"
SKIP = "skip"
EXIT = "exit"

Test = Union[None, str, Collection[str], Callable[[Node], bool]]
VisitorFunction = Callable[[Node, Optional[int], Optional[Node]], Any]

_METHOD_SAFE = re.compile(r"[^0-9a-zA-Z_]")


class NodeVisitor:
    """Base class for syntax tree visitors.

    Subclasses implement ``visit_<type>`` methods for the node types they
    care about. Types are mapped to method names by replacing every character
    that is not valid in an identifier with ``_``. Nodes without a dedicated
    method go to :meth:`generic_visit`, which visits the children.

    """

    def visit(self, node: Node) -> Any:
        """Dispatch ``node`` to its ``visit_<type>`` method.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of the visit method

        """
        method = getattr(self, "visit_" + _METHOD_SAFE.sub("_", node.type), self.generic_visit)
        return method(node)

    def generic_visit(self, node: Node) -> Any:
        """Visit all children of ``node``."""
        for child in get_node_children(node):
            self.visit(child)
        return None


def _compile_test(test: Test) -> Callable[[Node], bool]:
    if test is None:
        return lambda node: True
    if isinstance(test, str):
        return lambda node: node.type == test
    if callable(test):
        return test
    types = frozenset(test)
    return lambda node: node.type in types


def walk(tree: Node) -> Iterator[tuple[Node, Optional[Node], Optional[int]]]:
    """Yield ``(node, parent, index)`` for every node, depth-first pre-order.

    The root is yielded with ``parent`` and ``index`` set to None. Children are
    read when their parent is reached, so replacing a node's ``children``
    before the walk descends into it is visible to the walk.

    """
    stack: list[tuple[Node, Optional[Node], Optional[int]]] = [(tree, None, None)]
    while stack:
        node, parent, index = stack.pop()
        yield node, parent, index
        children = get_node_children(node)
        for child_index in range(len(children) - 1, -1, -1):
            stack.append((children[child_index], node, child_index))


def visit(tree: Node, test: Test, visitor: VisitorFunction, reverse: bool = False) -> None:
    """Call ``visitor(node, index, parent)`` for every node matching ``test``.

    Parameters
    ----------
    tree : Node
        Root of the tree to traverse
    test : None, str, collection of str, or callable
        Which nodes to report: all, one type, any of several types, or those
        for which the predicate returns True
    visitor : callable
        Called as ``visitor(node, index, parent)``. Return ``SKIP`` to not
        descend into the node, ``EXIT`` to stop the traversal, or anything
        else (typically None) to continue.
    reverse : bool, default False
        Visit siblings last-to-first

    Notes
    -----
    A visitor may replace or remove the node it was given in
    ``parent.children`` as long as it does not change siblings that come
    before it (after it, when ``reverse`` is set).

    """
    matches = _compile_test(test)

    def _one(node: Node, index: Optional[int], parent: Optional[Node]) -> str:
        action = visitor(node, index, parent) if matches(node) else CONTINUE
        if action == EXIT:
            return EXIT
        if action == SKIP or node.children is None:
            return CONTINUE
        position = len(node.children) - 1 if reverse else 0
        while 0 <= position < len(node.children):
            if _one(node.children[position], position, node) == EXIT:
                return EXIT
            position += -1 if reverse else 1
        return CONTINUE

    _one(tree, None, None)


def find_all(tree: Node, test: Test) -> list[Node]:
    """Return every node matching ``test`` in document order."""
    matches = _compile_test(test)
    return [node for node, _parent, _index in walk(tree) if matches(node)]


__all__ = [
    "CONTINUE",
    "SKIP",
    "EXIT",
    "Test",
    "VisitorFunction",
    "NodeVisitor",
    "walk",
    "visit",
    "find_all",
]
