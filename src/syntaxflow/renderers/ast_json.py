#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/renderers/ast_json.py
"""JSON tree compiler.

Serializes the syntax tree itself instead of rendering it, which is useful
for debugging plugins and for caching parsed trees.
"""

from __future__ import annotations

from syntaxflow.ast.nodes import Node
from syntaxflow.ast.serialization import tree_to_json
from syntaxflow.ast.transforms import clone_node
from syntaxflow.ast.visitors import walk
from syntaxflow.options.ast_json import AstJsonCompilerOptions
from syntaxflow.renderers.base import BaseCompiler


class AstJsonCompiler(BaseCompiler):
    """Compile a tree into its JSON serialization."""

    settings_class = AstJsonCompilerOptions

    def compile(self, tree: Node) -> str:
        """Return ``tree`` as JSON text."""
        settings: AstJsonCompilerOptions = self.settings  # type: ignore[assignment]
        if not settings.include_positions:
            tree = clone_node(tree)
            for node, _parent, _index in walk(tree):
                node.position = None
        return settings.finalize(tree_to_json(tree, indent=settings.indent))


__all__ = ["AstJsonCompiler"]
