#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for plugin metadata classes."""

import pytest

from syntaxflow.exceptions import ValidationError
from syntaxflow.transforms import ParameterSpec, PluginMetadata


def dummy_attacher(processor, options):
    """Dummy attacher for testing."""
    return None


class TestParameterSpec:
    """Tests for ParameterSpec class."""

    def test_basic_parameter(self):
        """Test basic parameter specification."""
        param = ParameterSpec(type=int, default=10, help="Threshold value")

        assert param.type is int
        assert param.default == 10
        assert param.help == "Threshold value"
        assert param.required is False
        assert param.choices is None

    def test_validate_returns_value(self):
        """Test validation returns the accepted value."""
        assert ParameterSpec(type=int).validate(20) == 20

    def test_validate_type_failure(self):
        """Test type validation - failure case."""
        param = ParameterSpec(type=int, default=10)

        with pytest.raises(ValueError, match="Expected type int"):
            param.validate("not an int")

    def test_bool_is_not_int(self):
        """Test booleans are rejected for int options."""
        with pytest.raises(ValueError, match="got bool"):
            ParameterSpec(type=int).validate(True)

    def test_tuple_coerced_to_list(self):
        """Test tuples are accepted for list options."""
        assert ParameterSpec(type=list).validate(("a", "b")) == ["a", "b"]

    def test_element_type(self):
        """Test list element validation."""
        param = ParameterSpec(type=list, element_type=str)
        assert param.validate(["a"]) == ["a"]
        with pytest.raises(ValueError, match="index 1 has wrong type"):
            param.validate(["a", 2])

    def test_validate_choices(self):
        """Test choices validation."""
        param = ParameterSpec(type=str, choices=["a", "b", "c"])
        assert param.validate("b") == "b"
        with pytest.raises(ValueError, match="must be one of"):
            param.validate("d")

    def test_custom_validator_failure(self):
        """Test custom validator returning False."""
        param = ParameterSpec(type=int, validator=lambda value: value > 0)

        with pytest.raises(ValueError, match="Validation failed"):
            param.validate(-5)

    def test_custom_validator_raising(self):
        """Test custom validator raising ValueError."""

        def positive(value):
            if value <= 0:
                raise ValueError("Must be positive")
            return True

        with pytest.raises(ValueError, match="Must be positive"):
            ParameterSpec(type=int, validator=positive).validate(-5)


class TestPluginMetadata:
    """Tests for PluginMetadata class."""

    def test_basic_metadata(self):
        """Test basic metadata creation."""
        metadata = PluginMetadata(name="test-plugin", description="Test plugin", attacher=dummy_attacher)

        assert metadata.name == "test-plugin"
        assert metadata.description == "Test plugin"
        assert metadata.parameters == {}
        assert metadata.tags == []
        assert metadata.version == "1.0.0"
        assert metadata.author is None

    def test_empty_name(self):
        """Test name must not be empty."""
        with pytest.raises(ValidationError, match="cannot be empty"):
            PluginMetadata(name="", description="x", attacher=dummy_attacher)

    def test_attacher_must_be_callable(self):
        """Test attacher validation."""
        with pytest.raises(ValidationError, match="attacher must be callable"):
            PluginMetadata(name="x", description="x", attacher="dummy")  # type: ignore[arg-type]


class TestResolveOptions:
    """Tests for PluginMetadata.resolve_options."""

    @pytest.fixture
    def metadata(self):
        return PluginMetadata(
            name="demo",
            description="Demo",
            attacher=dummy_attacher,
            parameters={
                "mode": ParameterSpec(type=str, default="auto", choices=["auto", "manual"]),
                "target": ParameterSpec(type=str, required=True),
                "limit": ParameterSpec(type=int),
            },
        )

    def test_defaults_filled(self, metadata):
        """Test declared defaults are added."""
        assert metadata.resolve_options({"target": "x"}) == {"target": "x", "mode": "auto"}

    def test_defaults_not_shared(self):
        """Test mutable defaults are copied for each resolution."""
        metadata = PluginMetadata(
            name="demo",
            description="Demo",
            attacher=dummy_attacher,
            parameters={"formats": ParameterSpec(type=list, default=["yaml", "toml"])},
        )
        first = metadata.resolve_options(None)
        first["formats"].append("json")

        assert metadata.resolve_options(None) == {"formats": ["yaml", "toml"]}
        assert metadata.parameters["formats"].default == ["yaml", "toml"]

    def test_missing_required(self, metadata):
        """Test missing required options."""
        with pytest.raises(ValidationError, match="Required option 'target'"):
            metadata.resolve_options({})

    def test_invalid_value(self, metadata):
        """Test invalid values raise ValidationError with the cause."""
        with pytest.raises(ValidationError, match="Invalid option 'mode' for plugin 'demo'") as exc_info:
            metadata.resolve_options({"target": "x", "mode": "fast"})
        assert isinstance(exc_info.value.original_error, ValueError)
        assert exc_info.value.parameter_name == "mode"

    def test_undeclared_passed_through(self, metadata):
        """Test undeclared options are kept."""
        assert metadata.resolve_options({"target": "x", "extra": 1})["extra"] == 1

    def test_none_is_empty(self):
        """Test None options for a plugin without parameters."""
        metadata = PluginMetadata(name="x", description="x", attacher=dummy_attacher)
        assert metadata.resolve_options(None) == {}

    def test_non_mapping(self, metadata):
        """Test options must be a mapping."""
        with pytest.raises(ValidationError, match="must be a mapping"):
            metadata.resolve_options(["target"])  # type: ignore[arg-type]

    def test_input_not_mutated(self, metadata):
        """Test the caller's mapping is left alone."""
        options = {"target": "x"}
        metadata.resolve_options(options)
        assert options == {"target": "x"}
