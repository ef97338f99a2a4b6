#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/ast/builder.py
"""Terse construction of syntax trees.

Writing nested :class:`~syntaxflow.ast.nodes.Node` constructors gets noisy in
tests and in plugins that synthesize content. :func:`u` shortens that:

    >>> from syntaxflow.ast.builder import u
    >>> tree = u("root", [
    ...     u("paragraph", [u("text", "Hello")]),
    ...     u("thematic-break"),
    ... ])
    >>> tree.children[0].children[0].value
    'Hello'

"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from syntaxflow.ast.nodes import Node, Position
from syntaxflow.exceptions import ValidationError

ChildrenOrValue = Union[str, Sequence[Node], None]


def u(
    node_type: str,
    props: Union[Mapping[str, Any], ChildrenOrValue] = None,
    children_or_value: ChildrenOrValue = None,
) -> Node:
    """Build a node.

    Parameters
    ----------
    node_type : str
        Node type tag
    props : Mapping, str, or sequence of Node, optional
        Extra properties (``data`` and/or ``position``). When a string or a
        sequence is passed here, it is taken as ``children_or_value`` and no
        properties are set.
    children_or_value : str or sequence of Node, optional
        A string makes a literal node; a sequence makes a parent node.

    Returns
    -------
    Node
        The constructed node

    Raises
    ------
    ValidationError
        If ``props`` holds keys other than ``data`` and ``position``

    """
    if props is not None and not isinstance(props, Mapping):
        children_or_value, props = props, None

    data: Optional[dict[str, Any]] = None
    position: Optional[Position] = None
    if props:
        unknown = set(props) - {"data", "position"}
        if unknown:
            raise ValidationError(
                f"Unknown node properties: {', '.join(sorted(unknown))}",
                parameter_name="props",
                parameter_value=dict(props),
            )
        data = dict(props["data"]) if props.get("data") is not None else None
        position = props.get("position")

    if isinstance(children_or_value, str):
        return Node(node_type, value=children_or_value, data=data, position=position)
    if children_or_value is not None:
        return Node(node_type, children=list(children_or_value), data=data, position=position)
    return Node(node_type, data=data, position=position)


__all__ = ["u"]
