#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers turning file contents into syntax trees.

A processor's ``parser`` endpoint is any factory called with
``(file, settings, processor)`` that returns an object with a ``parse()``
method. :class:`BaseParser` is the optional base class for such parsers.
"""

from syntaxflow.parsers.ast_json import AstJsonParser
from syntaxflow.parsers.base import BaseParser, Parser, ParserFactory
from syntaxflow.parsers.plaintext import PlainTextParser

__all__ = ["BaseParser", "Parser", "ParserFactory", "PlainTextParser", "AstJsonParser"]
