#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_plaintext_grammar_compiler.py
"""Unit tests for the plaintext and JSON tree compilers."""

from __future__ import annotations

import json

import pytest

from syntaxflow import AstJsonCompiler, PlainTextCompiler, PlainTextParser, VFile, u
from syntaxflow.exceptions import InvalidOptionsError
from syntaxflow.options import AstJsonCompilerOptions, PlainTextCompilerOptions, PlainTextParserOptions
from syntaxflow.renderers import BaseCompiler


class TestBaseCompiler:
    """Test settings handling shared by all compilers."""

    def test_default_settings(self):
        """Test compiler initializes with default settings."""
        compiler = PlainTextCompiler(VFile())
        assert isinstance(compiler.settings, PlainTextCompilerOptions)

    def test_parser_settings_give_defaults(self):
        """Test parser settings handed to a compiler select its defaults."""
        compiler = PlainTextCompiler(VFile(), PlainTextParserOptions(paragraphs=False))
        assert compiler.settings == PlainTextCompilerOptions()

    def test_invalid_settings(self):
        """Test compiler raises error with invalid settings type."""
        with pytest.raises(InvalidOptionsError):
            PlainTextCompiler(VFile(), 3)

    def test_abstract(self):
        """Test BaseCompiler cannot be instantiated."""
        with pytest.raises(TypeError):
            BaseCompiler(VFile())  # type: ignore[abstract]


class TestPlainTextCompiler:
    """Test the plaintext compiler."""

    def test_joins_literals(self, sample_tree):
        """Test literal values are concatenated in order."""
        assert PlainTextCompiler(VFile()).compile(sample_tree) == "Hello worldprint('hi')Bye"

    def test_inverse_of_parser(self):
        """Test parsing then compiling reproduces the input."""
        text = "Title\n\n  indented\nline\n\n\n\nend\n"
        tree = PlainTextParser(VFile(text)).parse()
        assert PlainTextCompiler(VFile()).compile(tree) == text

    def test_skip_types(self, sample_tree):
        """Test skipped literal types are left out."""
        compiler = PlainTextCompiler(VFile(), {"skip_types": ("code",)})
        assert compiler.compile(sample_tree) == "Hello worldBye"

    def test_ensure_final_newline(self):
        """Test the trailing newline setting."""
        compiler = PlainTextCompiler(VFile(), PlainTextCompilerOptions(ensure_final_newline=True))
        assert compiler.compile(u("root", [u("text", "x")])) == "x\n"

    def test_does_not_mutate_tree(self, sample_tree):
        """Test compiling leaves the tree untouched."""
        before = repr(sample_tree)
        PlainTextCompiler(VFile(), {"skip_types": ("text",)}).compile(sample_tree)
        assert repr(sample_tree) == before


class TestAstJsonCompiler:
    """Test serializing trees."""

    def test_compile(self, sample_tree):
        """Test the output is the tree as JSON."""
        output = AstJsonCompiler(VFile()).compile(sample_tree)
        assert json.loads(output)["children"][1] == {"type": "code", "value": "print('hi')"}

    def test_compact(self):
        """Test indent None writes one line."""
        output = AstJsonCompiler(VFile(), AstJsonCompilerOptions(indent=None)).compile(u("root", []))
        assert output == '{"type": "root", "children": []}'

    def test_positions_excluded_without_mutation(self):
        """Test positions are stripped from a copy only."""
        tree = PlainTextParser(VFile("a")).parse()
        output = AstJsonCompiler(VFile(), {"include_positions": False}).compile(tree)
        assert "position" not in output
        assert tree.position is not None
