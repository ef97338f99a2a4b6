#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_plaintext_grammar_parser.py
"""Unit tests for the plaintext and JSON tree parsers."""

from __future__ import annotations

import pytest

from syntaxflow import AstJsonParser, PlainTextParser, VFile, u
from syntaxflow.ast import Point, Position, tree_to_json
from syntaxflow.exceptions import InvalidOptionsError, ParsingError
from syntaxflow.options import PlainTextCompilerOptions, PlainTextParserOptions
from syntaxflow.parsers import BaseParser


class TestBaseParser:
    """Test settings handling shared by all parsers."""

    def test_default_settings(self):
        """Test parser initializes with default settings."""
        parser = PlainTextParser(VFile("x"))
        assert isinstance(parser.settings, PlainTextParserOptions)
        assert parser.processor is None

    def test_mapping_settings(self):
        """Test a mapping is converted into the settings class."""
        parser = PlainTextParser(VFile("x"), {"paragraphs": False})
        assert parser.settings.paragraphs is False

    def test_compiler_settings_give_defaults(self):
        """Test compiler settings handed to a parser select its defaults."""
        parser = PlainTextParser(VFile("x"), PlainTextCompilerOptions(skip_types=("yaml",)))
        assert parser.settings == PlainTextParserOptions()

    def test_invalid_settings(self):
        """Test parser raises error with invalid settings type."""
        with pytest.raises(InvalidOptionsError):
            PlainTextParser(VFile("x"), "invalid")

    def test_text_decodes_bytes(self):
        """Test the text property decodes byte contents."""

        class EchoParser(BaseParser):
            def parse(self):
                return u("root", [u("text", self.text)])

        assert EchoParser(VFile("é".encode())).parse().children[0].value == "é"

    def test_abstract(self):
        """Test BaseParser cannot be instantiated."""
        with pytest.raises(TypeError):
            BaseParser(VFile("x"))  # type: ignore[abstract]


class TestPlainTextParser:
    """Test the plaintext grammar."""

    def test_paragraphs_and_separators(self):
        """Test blank lines split paragraphs."""
        tree = PlainTextParser(VFile("One.\n\nTwo.")).parse()
        assert tree.type == "root"
        assert [child.type for child in tree.children] == ["paragraph", "whitespace", "paragraph"]
        assert tree.children[0].children[0] == u("text", {"position": tree.children[0].position}, "One.")
        assert tree.children[1].value == "\n\n"

    def test_single_line_breaks_stay_in_paragraph(self):
        """Test a single newline does not split paragraphs."""
        tree = PlainTextParser(VFile("line one\nline two")).parse()
        assert len(tree.children) == 1
        assert tree.children[0].children[0].value == "line one\nline two"

    def test_blank_lines_with_spaces(self):
        """Test separators may contain spaces and several blank lines."""
        tree = PlainTextParser(VFile("a\n  \n\t\nb")).parse()
        assert [child.value for child in tree.children[1:2]] == ["\n  \n\t\n"]
        assert tree.children[2].children[0].value == "b"

    def test_leading_and_trailing_separators(self):
        """Test separators at the edges become whitespace nodes."""
        tree = PlainTextParser(VFile("\n\nbody\n\n")).parse()
        assert [child.type for child in tree.children] == ["whitespace", "paragraph", "whitespace"]

    def test_crlf(self):
        """Test Windows line endings."""
        tree = PlainTextParser(VFile("a\r\n\r\nb")).parse()
        assert tree.children[1].value == "\r\n\r\n"

    def test_empty_input(self):
        """Test empty input yields an empty root."""
        tree = PlainTextParser(VFile("")).parse()
        assert tree.children == []
        assert tree.position == Position(Point(1, 1, 0), Point(1, 1, 0))

    def test_positions(self):
        """Test source positions of every node."""
        tree = PlainTextParser(VFile("One.\n\nTwo.")).parse()
        first, separator, second = tree.children
        assert first.position == Position(Point(1, 1, 0), Point(1, 5, 4))
        assert separator.position == Position(Point(1, 5, 4), Point(3, 1, 6))
        assert second.position == Position(Point(3, 1, 6), Point(3, 5, 10))
        assert tree.position == Position(Point(1, 1, 0), Point(3, 5, 10))

    def test_positions_disabled(self):
        """Test positions can be turned off."""
        tree = PlainTextParser(VFile("One.\n\nTwo."), PlainTextParserOptions(positions=False)).parse()
        assert all(child.position is None for child in tree.children)
        assert tree.position is None

    def test_paragraphs_disabled(self):
        """Test the whole input as one text node."""
        tree = PlainTextParser(VFile("a\n\nb"), {"paragraphs": False}).parse()
        assert len(tree.children) == 1
        assert tree.children[0].type == "text"
        assert tree.children[0].value == "a\n\nb"

    def test_paragraphs_disabled_empty(self):
        """Test empty input without paragraphs."""
        assert PlainTextParser(VFile(), {"paragraphs": False}).parse().children == []


class TestAstJsonParser:
    """Test parsing serialized trees."""

    def test_parse(self, sample_tree):
        """Test a serialized tree parses back."""
        assert AstJsonParser(VFile(tree_to_json(sample_tree))).parse() == sample_tree

    def test_positions_dropped(self):
        """Test positions can be dropped while parsing."""
        tree = PlainTextParser(VFile("a\n\nb")).parse()
        parsed = AstJsonParser(VFile(tree_to_json(tree)), {"positions": False}).parse()
        assert all(node.position is None for node in [parsed, *parsed.children])

    def test_invalid_json(self):
        """Test malformed input raises ParsingError."""
        with pytest.raises(ParsingError):
            AstJsonParser(VFile("{")).parse()
