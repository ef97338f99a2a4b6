"""Test utilities for the syntaxflow test suite.

This module provides a minimal grammar (a parser wrapping the whole input in
one ``text`` node and a compiler concatenating ``text`` values), helper
attachers, and a progress event recorder shared across test modules.
"""

from syntaxflow import BaseCompiler, BaseParser, Node, ProgressEvent, VFile, u


class WrapParser(BaseParser):
    """Parse text into ``root > text`` with the whole input as value."""

    def parse(self) -> Node:
        return u("root", [u("text", self.text)])


class ConcatCompiler(BaseCompiler):
    """Concatenate the values of every ``text`` node."""

    compiled: list[str] = []

    def compile(self, tree: Node) -> str:
        result = "".join(node.value or "" for node in _text_nodes(tree))
        ConcatCompiler.compiled.append(result)
        return result


def _text_nodes(tree: Node) -> list[Node]:
    found = []
    stack = [tree]
    while stack:
        node = stack.pop()
        if node.type == "text":
            found.append(node)
        stack.extend(reversed(node.children or []))
    return found


def uppercase_attacher(processor, options):
    """Attacher returning a transformer that uppercases every text node."""

    def uppercase(tree: Node, file: VFile) -> None:
        for node in _text_nodes(tree):
            node.value = (node.value or "").upper()

    return uppercase


def recording_attacher(calls: list, label: str):
    """Build an attacher whose transformer appends ``label`` to ``calls``."""

    def attacher(processor, options):
        def transformer(tree: Node, file: VFile) -> None:
            calls.append(label)

        transformer.__qualname__ = f"record_{label}"
        return transformer

    attacher.__qualname__ = f"attach_{label}"
    return attacher


def text_of(tree: Node) -> str:
    """Return the concatenated ``text`` values of ``tree``."""
    return "".join(node.value or "" for node in _text_nodes(tree))


class ProgressTracker:
    """Helper class to track progress events during testing."""

    def __init__(self):
        self.events: list[ProgressEvent] = []

    def callback(self, event: ProgressEvent) -> None:
        """Record progress event."""
        self.events.append(event)

    def get_events_by_type(self, event_type: str) -> list[ProgressEvent]:
        """Get all events of a specific type."""
        return [e for e in self.events if e.event_type == event_type]

    def has_event_type(self, event_type: str) -> bool:
        """Check if any event of this type was emitted."""
        return any(e.event_type == event_type for e in self.events)
