#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/transforms/metadata.py
"""Metadata classes for named plugins.

This module defines the metadata structures used to register plugins in
the plugin catalog, so they can be attached by name
(``processor.use("word-count")``) and discovered through entry points.

Examples
--------
Define a plugin with metadata:

    >>> from syntaxflow.transforms import PluginMetadata, ParameterSpec
    >>>
    >>> def strip_attacher(processor, options):
    ...     def transformer(tree, file):
    ...         ...
    ...     return transformer
    ...
    >>> METADATA = PluginMetadata(
    ...     name="strip",
    ...     description="Strip surrounding whitespace from text nodes",
    ...     attacher=strip_attacher,
    ...     parameters={
    ...         "chars": ParameterSpec(type=str, default=" \\t", help="Characters to strip")
    ...     }
    ... )

"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional, Type

from syntaxflow.exceptions import ValidationError

if TYPE_CHECKING:
    from syntaxflow.transforms.registry import Attacher

logger = logging.getLogger(__name__)


@dataclass
class ParameterSpec:
    """Specification for a plugin option.

    Parameters
    ----------
    type : type
        Python type of the option (e.g., int, str, bool)
    default : Any, optional
        Default value if the option is not provided
    help : str, optional
        Help text describing the option
    required : bool, default = False
        Whether this option is required
    choices : list, optional
        List of valid choices for this option
    validator : callable, optional
        Custom validation function: takes value, returns bool or raises ValueError
    element_type : type, optional
        For list options, the expected type of list elements (e.g., str, int)

    Examples
    --------
    List option with element type validation:
        >>> param = ParameterSpec(
        ...     type=list,
        ...     element_type=str,
        ...     required=True,
        ...     help="Node types to remove"
        ... )

    """

    type: Type
    default: Any = None
    help: str = ""
    required: bool = False
    choices: Optional[list[Any]] = None
    validator: Optional[Callable[[Any], bool]] = None
    element_type: Optional[Type] = None

    def validate(self, value: Any) -> Any:
        """Validate an option value.

        Parameters
        ----------
        value : Any
            Value to validate. For list types, tuples are accepted and
            coerced to lists.

        Returns
        -------
        Any
            The validated (possibly coerced) value

        Raises
        ------
        ValueError
            If value is invalid

        """
        if self.type is list and isinstance(value, tuple):
            value = list(value)

        # bool is an int subclass; an int option must not silently accept True
        if not isinstance(value, self.type) or (self.type is int and isinstance(value, bool)):
            raise ValueError(f"Expected type {self.type.__name__}, got {type(value).__name__}")

        if self.type is list and self.element_type is not None:
            for i, element in enumerate(value):
                if not isinstance(element, self.element_type):
                    raise ValueError(
                        f"List element at index {i} has wrong type: "
                        f"expected {self.element_type.__name__}, got {type(element).__name__}"
                    )

        if self.choices is not None and value not in self.choices:
            raise ValueError(f"Value must be one of {self.choices}, got {value}")

        if self.validator is not None and not self.validator(value):
            raise ValueError(f"Validation failed for value: {value}")

        return value


@dataclass
class PluginMetadata:
    """Metadata for a named plugin.

    Parameters
    ----------
    name : str
        Unique identifier for the plugin (e.g., "remove-nodes")
    description : str
        Human-readable description of what the plugin does
    attacher : callable
        The plugin's attacher, called with ``(processor, options)``
    parameters : dict[str, ParameterSpec], default = empty dict
        Options accepted by the attacher
    tags : list[str], default = empty list
        Tags for categorization (e.g., ["cleanup"])
    version : str, default = "1.0.0"
        Plugin version (semantic versioning)
    author : str, optional
        Plugin author or maintainer

    """

    name: str
    description: str
    attacher: Attacher
    parameters: dict[str, ParameterSpec] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    version: str = "1.0.0"
    author: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate metadata after initialization."""
        if not self.name:
            raise ValidationError("Plugin name cannot be empty", parameter_name="name")
        if not callable(self.attacher):
            raise ValidationError(
                f"Plugin '{self.name}' attacher must be callable, got {type(self.attacher).__name__}",
                parameter_name="attacher",
                parameter_value=self.attacher,
            )

    def resolve_options(self, options: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """Validate ``options`` and fill in declared defaults.

        Options the plugin does not declare are passed through unchanged.

        Parameters
        ----------
        options : Mapping, optional
            Caller-supplied options

        Returns
        -------
        dict
            Options to hand to the attacher

        Raises
        ------
        ValidationError
            If ``options`` is not a mapping, a required option is missing, or
            a value fails its specification

        """
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise ValidationError(
                f"Options for plugin '{self.name}' must be a mapping, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )

        resolved = dict(options)
        for param_name, spec in self.parameters.items():
            if param_name in options:
                try:
                    resolved[param_name] = spec.validate(options[param_name])
                except ValueError as e:
                    raise ValidationError(
                        f"Invalid option '{param_name}' for plugin '{self.name}': {e}",
                        parameter_name=param_name,
                        parameter_value=options[param_name],
                        original_error=e,
                    ) from e
            elif spec.required:
                raise ValidationError(
                    f"Required option '{param_name}' not provided for plugin '{self.name}'",
                    parameter_name=param_name,
                )
            elif spec.default is not None:
                resolved[param_name] = copy.copy(spec.default)

        unknown = set(options) - set(self.parameters)
        if unknown and self.parameters:
            logger.debug(f"Plugin '{self.name}' received undeclared option(s): {', '.join(sorted(unknown))}")
        return resolved


__all__ = ["ParameterSpec", "PluginMetadata"]
