#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/plugins/__init__.py
"""Built-in plugins.

Each plugin is an attacher usable directly (``processor.use(word_count)``)
or by name through the plugin catalog (``processor.use("word-count")``).

Available Plugins
-----------------
- frontmatter: parse leading YAML or TOML front matter into file data
- remove-nodes: remove nodes of given types
- text-replacer: find and replace text in text nodes
- word-count: store the document word count in file data

"""

from syntaxflow.plugins.frontmatter import FRONTMATTER_METADATA, frontmatter
from syntaxflow.plugins.remove_nodes import REMOVE_NODES_METADATA, remove_nodes
from syntaxflow.plugins.text_replacer import TEXT_REPLACER_METADATA, text_replacer
from syntaxflow.plugins.word_count import WORD_COUNT_METADATA, word_count

BUILTIN_PLUGINS = [
    FRONTMATTER_METADATA,
    REMOVE_NODES_METADATA,
    TEXT_REPLACER_METADATA,
    WORD_COUNT_METADATA,
]

__all__ = [
    "BUILTIN_PLUGINS",
    "frontmatter",
    "remove_nodes",
    "text_replacer",
    "word_count",
    "FRONTMATTER_METADATA",
    "REMOVE_NODES_METADATA",
    "TEXT_REPLACER_METADATA",
    "WORD_COUNT_METADATA",
]
