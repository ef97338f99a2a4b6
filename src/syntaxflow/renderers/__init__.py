#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Compilers turning syntax trees into text.

A processor's ``compiler`` endpoint is any factory called with
``(file, settings, processor)`` that returns an object with a
``compile(tree)`` method. :class:`BaseCompiler` is the optional base class
for such compilers.
"""

from syntaxflow.renderers.ast_json import AstJsonCompiler
from syntaxflow.renderers.base import BaseCompiler, Compiler, CompilerFactory
from syntaxflow.renderers.plaintext import PlainTextCompiler

__all__ = ["BaseCompiler", "Compiler", "CompilerFactory", "PlainTextCompiler", "AstJsonCompiler"]
