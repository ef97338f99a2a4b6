#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for options classes and settings coercion."""

import logging

import pytest

from syntaxflow.exceptions import InvalidOptionsError, ValidationError
from syntaxflow.options import (
    AstJsonCompilerOptions,
    BaseCompilerOptions,
    BaseParserOptions,
    PlainTextCompilerOptions,
    PlainTextParserOptions,
    ProcessorOptions,
    coerce_settings,
)


@pytest.mark.unit
class TestProcessorOptions:
    """Test processor construction options."""

    def test_defaults(self) -> None:
        """Test only the name is required."""
        options = ProcessorOptions(name="text")
        assert options.parser is None
        assert options.compiler is None
        assert options.data == {}

    def test_empty_name_rejected(self) -> None:
        """Test the name must not be empty."""
        with pytest.raises(ValidationError, match="non-empty"):
            ProcessorOptions(name="")

    def test_non_callable_endpoint_rejected(self) -> None:
        """Test endpoints must be callable."""
        with pytest.raises(ValidationError, match="parser must be callable"):
            ProcessorOptions(name="text", parser="PlainTextParser")  # type: ignore[arg-type]

    def test_invalid_data_rejected(self) -> None:
        """Test data must hold data values."""
        with pytest.raises(ValidationError):
            ProcessorOptions(name="text", data={"bad": {1}})

    def test_create_updated(self) -> None:
        """Test cloning with updated fields keeps the original."""
        options = ProcessorOptions(name="text")
        updated = options.create_updated(name="other")
        assert updated.name == "other"
        assert options.name == "text"

    def test_frozen(self) -> None:
        """Test options are immutable."""
        with pytest.raises(AttributeError):
            ProcessorOptions(name="text").name = "x"  # type: ignore[misc]


@pytest.mark.unit
class TestCompilerOptions:
    """Test compiler option helpers."""

    def test_finalize_default_unchanged(self) -> None:
        """Test output is untouched by default."""
        assert BaseCompilerOptions().finalize("x") == "x"

    def test_finalize_adds_newline(self) -> None:
        """Test ensure_final_newline."""
        options = BaseCompilerOptions(ensure_final_newline=True)
        assert options.finalize("x") == "x\n"
        assert options.finalize("x\n") == "x\n"
        assert options.finalize("") == ""

    def test_negative_indent_rejected(self) -> None:
        """Test JSON indent validation."""
        with pytest.raises(ValueError, match="indent"):
            AstJsonCompilerOptions(indent=-1)

    def test_field_metadata(self) -> None:
        """Test fields carry help metadata."""
        from dataclasses import fields

        metadata = {f.name: f.metadata for f in fields(PlainTextParserOptions)}
        assert metadata["paragraphs"]["help"]
        assert metadata["positions"]["importance"] == "core"


@pytest.mark.unit
class TestCoerceSettings:
    """Test coerce_settings."""

    def test_none_gives_defaults(self) -> None:
        """Test None selects the defaults."""
        assert coerce_settings(None, PlainTextParserOptions, "Parser") == PlainTextParserOptions()

    def test_instance_passthrough(self) -> None:
        """Test an instance is returned as-is."""
        options = PlainTextParserOptions(paragraphs=False)
        assert coerce_settings(options, PlainTextParserOptions, "Parser") is options

    def test_subclass_instance_passthrough(self) -> None:
        """Test subclass instances satisfy a base class."""
        options = PlainTextCompilerOptions(skip_types=("yaml",))
        assert coerce_settings(options, BaseCompilerOptions, "Compiler") is options

    def test_mapping_filtered_to_fields(self, caplog) -> None:
        """Test a mapping keeps only known fields and logs the rest."""
        with caplog.at_level(logging.DEBUG, logger="syntaxflow.options.base"):
            options = coerce_settings(
                {"paragraphs": False, "skip_types": ("yaml",)}, PlainTextParserOptions, "PlainTextParser"
            )
        assert options == PlainTextParserOptions(paragraphs=False)
        assert "ignoring settings it does not define: skip_types" in caplog.text

    def test_mapping_with_bad_value(self) -> None:
        """Test a failing __post_init__ becomes a ValidationError."""
        with pytest.raises(ValidationError, match="Invalid settings for AstJsonCompiler") as exc_info:
            coerce_settings({"indent": -2}, AstJsonCompilerOptions, "AstJsonCompiler")
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_counterpart_gives_defaults(self) -> None:
        """Test options of the other pipeline side select the defaults."""
        result = coerce_settings(
            PlainTextParserOptions(paragraphs=False),
            PlainTextCompilerOptions,
            "PlainTextCompiler",
            counterpart=(BaseParserOptions,),
        )
        assert result == PlainTextCompilerOptions()

    def test_wrong_type_rejected(self) -> None:
        """Test unrelated values raise InvalidOptionsError."""
        with pytest.raises(InvalidOptionsError) as exc_info:
            coerce_settings("invalid", PlainTextParserOptions, "PlainTextParser")
        assert exc_info.value.component_name == "PlainTextParser"
        assert exc_info.value.expected_type is PlainTextParserOptions
        assert exc_info.value.received_type is str

    def test_counterpart_not_given(self) -> None:
        """Test compiler options are rejected without a counterpart."""
        with pytest.raises(InvalidOptionsError):
            coerce_settings(BaseCompilerOptions(), PlainTextParserOptions, "PlainTextParser")
