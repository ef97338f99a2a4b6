#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/plugins/remove_nodes.py
"""Remove nodes of specified types from the tree.

The root is always kept; a removed parent takes its whole subtree with it.

Examples
--------
    >>> from syntaxflow import create_text_processor
    >>> processor = create_text_processor().use("remove-nodes", {"types": ["whitespace"]})
    >>> processor.process("One.\\n\\nTwo.")
    'One.Two.'

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from syntaxflow.ast.nodes import Node
from syntaxflow.ast.transforms import filter_nodes
from syntaxflow.transforms.chain import Transformer
from syntaxflow.transforms.metadata import ParameterSpec, PluginMetadata
from syntaxflow.vfile import VFile

if TYPE_CHECKING:
    from syntaxflow.processor import Processor

logger = logging.getLogger(__name__)


def remove_nodes(processor: Processor, options: Optional[Mapping[str, Any]] = None) -> Transformer:
    """Attach a transformer removing every node whose type is in ``options["types"]``."""
    node_types = frozenset(REMOVE_NODES_METADATA.resolve_options(options)["types"])

    def remove_matching_nodes(tree: Node, file: VFile) -> Node:
        logger.debug(f"Removing nodes of type(s): {', '.join(sorted(node_types))}")
        return filter_nodes(tree, lambda node: node.type not in node_types)

    return remove_matching_nodes


REMOVE_NODES_METADATA = PluginMetadata(
    name="remove-nodes",
    description="Remove nodes of specified types from the tree",
    attacher=remove_nodes,
    parameters={
        "types": ParameterSpec(
            type=list,
            element_type=str,
            required=True,
            help="Node types to remove (e.g., 'whitespace', 'yaml')",
        )
    },
    tags=["cleanup"],
    author="syntaxflow",
)

__all__ = ["remove_nodes", "REMOVE_NODES_METADATA"]
