#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/renderers/plaintext.py
"""Plain text compiler.

The inverse of :class:`syntaxflow.parsers.plaintext.PlainTextParser`: the
output is the concatenation of every literal value in document order, so a
tree parsed from some text compiles back to exactly that text.
"""

from __future__ import annotations

from syntaxflow.ast.nodes import Node
from syntaxflow.ast.visitors import walk
from syntaxflow.options.plaintext import PlainTextCompilerOptions
from syntaxflow.renderers.base import BaseCompiler


class PlainTextCompiler(BaseCompiler):
    """Compile a tree to plain text by joining its literal values."""

    settings_class = PlainTextCompilerOptions

    def compile(self, tree: Node) -> str:
        """Return the literal text of ``tree``.

        Literals whose type is listed in ``skip_types`` are left out.

        """
        settings: PlainTextCompilerOptions = self.settings  # type: ignore[assignment]
        skip = set(settings.skip_types)
        parts = [node.value for node, _parent, _index in walk(tree) if node.value is not None and node.type not in skip]
        return settings.finalize("".join(parts))


__all__ = ["PlainTextCompiler"]
