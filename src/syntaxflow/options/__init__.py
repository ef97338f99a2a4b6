#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for syntaxflow processors and grammars.

Processor construction options and the ``settings`` objects accepted by the
bundled parsers and compilers are frozen dataclasses. ``create_updated()``
derives a modified copy without mutating the original.
"""

from __future__ import annotations

from syntaxflow.options.ast_json import AstJsonCompilerOptions, AstJsonParserOptions
from syntaxflow.options.base import (
    BaseCompilerOptions,
    BaseParserOptions,
    CloneFrozenMixin,
    ProcessorOptions,
    coerce_settings,
)
from syntaxflow.options.plaintext import PlainTextCompilerOptions, PlainTextParserOptions

__all__ = [
    "CloneFrozenMixin",
    "coerce_settings",
    "ProcessorOptions",
    "BaseParserOptions",
    "BaseCompilerOptions",
    "PlainTextParserOptions",
    "PlainTextCompilerOptions",
    "AstJsonParserOptions",
    "AstJsonCompilerOptions",
]
