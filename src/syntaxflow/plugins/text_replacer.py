#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/plugins/text_replacer.py
"""Find and replace text in ``text`` literals.

This plugin performs plain substring replacement. For pattern-based
rewriting, write a transformer using :func:`syntaxflow.ast.map_literals`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from syntaxflow.ast.nodes import Node
from syntaxflow.ast.transforms import map_literals
from syntaxflow.constants import TEXT_NODE_TYPE
from syntaxflow.transforms.chain import Transformer
from syntaxflow.transforms.metadata import ParameterSpec, PluginMetadata
from syntaxflow.vfile import VFile

if TYPE_CHECKING:
    from syntaxflow.processor import Processor

logger = logging.getLogger(__name__)


def text_replacer(processor: Processor, options: Optional[Mapping[str, Any]] = None) -> Transformer:
    """Attach a transformer replacing ``options["find"]`` with ``options["replace"]``."""
    resolved = TEXT_REPLACER_METADATA.resolve_options(options)
    find, replace = resolved["find"], resolved["replace"]

    def replace_text(tree: Node, file: VFile) -> None:
        count = map_literals(tree, lambda node: (node.value or "").replace(find, replace), node_type=TEXT_NODE_TYPE)
        logger.debug(f"Applied text replacement to {count} text node(s)")

    return replace_text


TEXT_REPLACER_METADATA = PluginMetadata(
    name="text-replacer",
    description="Find and replace text in text nodes",
    attacher=text_replacer,
    parameters={
        "find": ParameterSpec(type=str, required=True, validator=bool, help="Text to find"),
        "replace": ParameterSpec(type=str, required=True, help="Replacement text"),
    },
    tags=["text", "replace"],
    author="syntaxflow",
)

__all__ = ["text_replacer", "TEXT_REPLACER_METADATA"]
