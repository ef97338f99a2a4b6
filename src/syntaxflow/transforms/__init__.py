#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/transforms/__init__.py
"""Plugin and transformer machinery.

This package holds everything a processor needs to run plugins:

- chain: the transformer chain executing transformers in order
- registry: attachment records and the per-processor plugin registry
- metadata: metadata for named plugins
- catalog: the global catalog of named plugins and entry point discovery

Examples
--------
Attach a built-in plugin by name:

    >>> from syntaxflow import create_text_processor
    >>> processor = create_text_processor().use("word-count")

List the available named plugins:

    >>> from syntaxflow.transforms import plugin_catalog
    >>> plugin_catalog.list_plugins()
    ['frontmatter', 'remove-nodes', 'text-replacer', 'word-count']

"""

from syntaxflow.transforms.catalog import PluginCatalog, plugin_catalog
from syntaxflow.transforms.chain import (
    ChainCallback,
    Completion,
    NextCallback,
    Transformer,
    TransformerChain,
    accepts_next,
    transformer_name,
)
from syntaxflow.transforms.metadata import ParameterSpec, PluginMetadata
from syntaxflow.transforms.registry import Attacher, Attachment, AttachResult, PluginRegistry

__all__ = [
    # Chain
    "Completion",
    "TransformerChain",
    "Transformer",
    "NextCallback",
    "ChainCallback",
    "accepts_next",
    "transformer_name",
    # Registry
    "Attacher",
    "Attachment",
    "AttachResult",
    "PluginRegistry",
    # Named plugins
    "ParameterSpec",
    "PluginMetadata",
    "PluginCatalog",
    "plugin_catalog",
]
