#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the syntaxflow library.

This module centralizes the hardcoded values shared across the processor,
the reference grammars and the built-in plugins.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Processor Defaults - Namespacing and naming
3. Plugin Discovery - Entry point configuration
4. Reference Grammars - Plaintext and JSON tree settings
5. Built-in Plugins - Front matter and word counting
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

# Progress event types emitted by the processor and the transformer chain
ProgressEventType = Literal["started", "item_done", "finished", "error"]

# Pipeline stages as reported in progress metadata
PipelineStage = Literal["parse", "run", "stringify"]

# =============================================================================
# Processor Defaults
# =============================================================================

# Key under which ``parse`` stores the tree in a file namespace
TREE_NAMESPACE_KEY = "tree"

# Name used by the reference plaintext grammar
DEFAULT_PROCESSOR_NAME = "text"

# =============================================================================
# Plugin Discovery
# =============================================================================

PLUGIN_ENTRY_POINT_GROUP = "syntaxflow.plugins"

# =============================================================================
# Reference Grammars
# =============================================================================

ROOT_NODE_TYPE = "root"
PARAGRAPH_NODE_TYPE = "paragraph"
TEXT_NODE_TYPE = "text"
WHITESPACE_NODE_TYPE = "whitespace"

# Paragraphs are separated by a line break, optional blank space, and another line break
PARAGRAPH_SEPARATOR_PATTERN = r"(\r?\n[ \t]*(?:\r?\n[ \t]*)+)"

DEFAULT_JSON_INDENT = 2

# =============================================================================
# Built-in Plugins
# =============================================================================

YAML_FRONTMATTER_FENCE = "---"
TOML_FRONTMATTER_FENCE = "+++"
YAML_NODE_TYPE = "yaml"
TOML_NODE_TYPE = "toml"
FRONTMATTER_DATA_KEY = "matter"
WORD_COUNT_DATA_KEY = "word_count"
