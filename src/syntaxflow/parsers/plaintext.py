#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/parsers/plaintext.py
"""Plain text to syntax tree parser.

This module provides the reference grammar bundled with syntaxflow. Text is
split on blank lines into ``paragraph`` nodes, each holding one ``text``
literal, with the separators kept as ``whitespace`` literals between them.
Nothing is normalized, so the plaintext compiler reproduces the input
exactly.

Examples
--------
    >>> from syntaxflow.vfile import VFile
    >>> tree = PlainTextParser(VFile("One.\\n\\nTwo.")).parse()
    >>> [child.type for child in tree.children]
    ['paragraph', 'whitespace', 'paragraph']

"""

from __future__ import annotations

import bisect
import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from syntaxflow.ast.nodes import Node, Point, Position
from syntaxflow.constants import (
    PARAGRAPH_NODE_TYPE,
    PARAGRAPH_SEPARATOR_PATTERN,
    ROOT_NODE_TYPE,
    TEXT_NODE_TYPE,
    WHITESPACE_NODE_TYPE,
)
from syntaxflow.options.plaintext import PlainTextParserOptions
from syntaxflow.parsers.base import BaseParser
from syntaxflow.vfile import VFile

if TYPE_CHECKING:
    from syntaxflow.processor import Processor

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(PARAGRAPH_SEPARATOR_PATTERN)


class _Locator:
    """Translate character offsets into line/column points."""

    def __init__(self, text: str):
        self._line_starts = [0] + [match.end() for match in re.finditer(r"\n", text)]

    def point(self, offset: int) -> Point:
        line_index = bisect.bisect_right(self._line_starts, offset) - 1
        return Point(line=line_index + 1, column=offset - self._line_starts[line_index] + 1, offset=offset)

    def position(self, start: int, end: int) -> Position:
        return Position(start=self.point(start), end=self.point(end))


class PlainTextParser(BaseParser):
    """Parse plain text into ``root`` / ``paragraph`` / ``text`` nodes.

    Parameters
    ----------
    file : VFile
        The document being parsed
    settings : PlainTextParserOptions, Mapping, or None
        Parse settings
    processor : Processor or None
        The processor performing the parse

    """

    settings_class = PlainTextParserOptions

    def __init__(
        self,
        file: VFile,
        settings: PlainTextParserOptions | Mapping[str, Any] | None = None,
        processor: Optional[Processor] = None,
    ):
        """Initialize the plain text parser."""
        super().__init__(file, settings, processor)
        self.settings: PlainTextParserOptions

    def parse(self) -> Node:
        """Parse the bound file.

        Returns
        -------
        Node
            A ``root`` node. With ``paragraphs`` disabled its only child is a
            single ``text`` literal; empty input yields an empty root.

        """
        text = self.text
        locator = _Locator(text) if self.settings.positions else None

        def located(start: int, end: int) -> Optional[Position]:
            return locator.position(start, end) if locator else None

        if not self.settings.paragraphs:
            whole = [Node(TEXT_NODE_TYPE, value=text, position=located(0, len(text)))] if text else []
            return Node(ROOT_NODE_TYPE, children=whole, position=located(0, len(text)))

        children: list[Node] = []
        offset = 0
        # re.split with a capture group alternates content and separators
        for index, chunk in enumerate(_SEPARATOR_RE.split(text)):
            start, offset = offset, offset + len(chunk)
            if not chunk:
                continue
            if index % 2:
                children.append(Node(WHITESPACE_NODE_TYPE, value=chunk, position=located(start, offset)))
            else:
                span = located(start, offset)
                children.append(
                    Node(PARAGRAPH_NODE_TYPE, children=[Node(TEXT_NODE_TYPE, value=chunk, position=span)], position=span)
                )

        logger.debug(f"Parsed {len(text)} characters into {len(children)} top-level nodes")
        return Node(ROOT_NODE_TYPE, children=children, position=located(0, len(text)))


__all__ = ["PlainTextParser"]
