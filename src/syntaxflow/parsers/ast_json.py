#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/parsers/ast_json.py
"""JSON tree parser.

Reads a syntax tree serialized by the JSON tree compiler (or by
:func:`syntaxflow.ast.tree_to_json`) back into nodes. Pairing it with a
grammar-specific compiler lets a tree stored on disk be rendered later
without re-parsing the original source.
"""

from __future__ import annotations

from syntaxflow.ast.nodes import Node
from syntaxflow.ast.serialization import json_to_tree
from syntaxflow.ast.visitors import walk
from syntaxflow.options.ast_json import AstJsonParserOptions
from syntaxflow.parsers.base import BaseParser


class AstJsonParser(BaseParser):
    """Parse a JSON document into the syntax tree it describes."""

    settings_class = AstJsonParserOptions

    def parse(self) -> Node:
        """Deserialize the bound file.

        Raises
        ------
        ParsingError
            If the contents are not a valid serialized tree

        """
        tree = json_to_tree(self.text)
        if not self.settings.positions:
            for node, _parent, _index in walk(tree):
                node.position = None
        return tree


__all__ = ["AstJsonParser"]
