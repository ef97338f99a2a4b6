"""syntaxflow - A pluggable text-transformation pipeline built on syntax trees.

syntaxflow turns raw text into a syntax tree, runs an ordered chain of
independently written plugins over that tree, and compiles the result back
into text. It is the grammar-agnostic engine beneath document compilers,
linters and style checkers: grammars plug in as a parser and a compiler,
behavior plugs in as transformers.

Key Features
------------
- Processor with ``use`` / ``parse`` / ``run`` / ``stringify`` / ``process``
- Transformers may be synchronous, callback-based or ``async``
- First-error short-circuiting with errors forwarded unchanged
- Cloneable processors and explicit processor factories
- Virtual files carrying contents, per-processor results and diagnostics
- Named plugins with entry point discovery
- Reference plaintext and JSON tree grammars

Requirements
------------
- Python 3.10+
- PyYAML (front matter), rich (diagnostic reports)

Examples
--------
Process text through a plugin chain:

    >>> from syntaxflow import create_text_processor
    >>> processor = (
    ...     create_text_processor()
    ...     .use("text-replacer", {"find": "teh", "replace": "the"})
    ...     .use("word-count")
    ... )
    >>> processor.process("teh quick fox")
    'the quick fox'

Write a plugin:

    >>> def no_empty_paragraphs(processor, options):
    ...     def transformer(tree, file):
    ...         for paragraph in find_all(tree, "paragraph"):
    ...             if not to_string(paragraph).strip():
    ...                 file.message("Empty paragraph", paragraph, origin="lint:no-empty")
    ...     return transformer

See Also
--------
syntaxflow.ast : syntax tree nodes and utilities
syntaxflow.transforms : transformer chain, plugin registry and catalog

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "syntaxflow requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from syntaxflow.api import ProcessorFactory, create_text_processor, define_processor
from syntaxflow.ast import Node, Point, Position, find_all, to_string, u, visit, walk
from syntaxflow.exceptions import (
    AsyncTransformerError,
    ConfigurationError,
    InvalidOptionsError,
    MissingCompilerError,
    MissingParserError,
    MissingTreeError,
    ParsingError,
    PluginAttachError,
    RenderingError,
    SyntaxflowError,
    TransformError,
    ValidationError,
)
from syntaxflow.options import ProcessorOptions
from syntaxflow.parsers import AstJsonParser, BaseParser, PlainTextParser
from syntaxflow.processor import Processor
from syntaxflow.progress import ProgressCallback, ProgressEvent
from syntaxflow.renderers import AstJsonCompiler, BaseCompiler, PlainTextCompiler
from syntaxflow.transforms import AttachResult, PluginMetadata, plugin_catalog
from syntaxflow.vfile import VFile, VFileMessage, to_vfile

__all__ = [
    "__version__",
    # Processor
    "Processor",
    "ProcessorOptions",
    "ProcessorFactory",
    "define_processor",
    "create_text_processor",
    "AttachResult",
    # Plugins
    "PluginMetadata",
    "plugin_catalog",
    # Files
    "VFile",
    "VFileMessage",
    "to_vfile",
    # Trees
    "Node",
    "Point",
    "Position",
    "u",
    "visit",
    "walk",
    "find_all",
    "to_string",
    # Grammars
    "BaseParser",
    "BaseCompiler",
    "PlainTextParser",
    "PlainTextCompiler",
    "AstJsonParser",
    "AstJsonCompiler",
    # Progress
    "ProgressEvent",
    "ProgressCallback",
    # Exceptions
    "SyntaxflowError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigurationError",
    "MissingParserError",
    "MissingCompilerError",
    "MissingTreeError",
    "AsyncTransformerError",
    "PluginAttachError",
    "TransformError",
    "ParsingError",
    "RenderingError",
]
