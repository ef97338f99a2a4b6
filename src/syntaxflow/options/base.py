#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/options/base.py
"""Base classes for processor, parser and compiler options.

This module defines the frozen configuration objects used throughout the
syntaxflow pipeline: the processor's construction options and the base
classes for the ``settings`` handed to parsers and compilers.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Optional, TypeVar

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from syntaxflow.data import DataMapping, validate_data
from syntaxflow.exceptions import InvalidOptionsError, ValidationError

if TYPE_CHECKING:
    from syntaxflow.parsers.base import ParserFactory
    from syntaxflow.renderers.base import CompilerFactory

logger = logging.getLogger(__name__)

_OptionsT = TypeVar("_OptionsT", bound="CloneFrozenMixin")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ProcessorOptions(CloneFrozenMixin):
    """Construction options for a processor.

    Parameters
    ----------
    name : str
        Namespace key under which parsed trees are stored in a file
    parser : callable, optional
        Parser factory, constructed with ``(file, settings, processor)``
    compiler : callable, optional
        Compiler factory, constructed with ``(file, settings, processor)``
    data : Mapping, optional
        Shared configuration visible to the parser, the compiler and every plugin

    Raises
    ------
    ValidationError
        If ``name`` is empty, an endpoint is not callable, or ``data`` holds
        values outside the data variant

    """

    name: str
    parser: Optional[ParserFactory] = None
    compiler: Optional[CompilerFactory] = None
    data: DataMapping = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the options."""
        if not isinstance(self.name, str) or not self.name:
            raise ValidationError("Processor name must be a non-empty string", parameter_name="name")
        for label, endpoint in (("parser", self.parser), ("compiler", self.compiler)):
            if endpoint is not None and not callable(endpoint):
                raise ValidationError(
                    f"Processor {label} must be callable, got {type(endpoint).__name__}",
                    parameter_name=label,
                    parameter_value=endpoint,
                )
        validate_data(self.data)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser settings.

    Parameters
    ----------
    positions : bool, default True
        Whether the parser records source positions on nodes

    """

    positions: bool = field(
        default=True,
        metadata={"help": "Record source positions on parsed nodes", "importance": "core"},
    )


@dataclass(frozen=True)
class BaseCompilerOptions(CloneFrozenMixin):
    """Base class for compiler settings.

    Parameters
    ----------
    ensure_final_newline : bool, default False
        Append a trailing newline to non-empty output that lacks one

    """

    ensure_final_newline: bool = field(
        default=False,
        metadata={"help": "End non-empty output with a newline", "importance": "core"},
    )

    def finalize(self, text: str) -> str:
        """Apply output-wide settings to compiled ``text``."""
        if self.ensure_final_newline and text and not text.endswith("\n"):
            return text + "\n"
        return text


def coerce_settings(
    settings: Any,
    settings_class: type[_OptionsT],
    component_name: str,
    counterpart: tuple[type, ...] = (),
) -> _OptionsT:
    """Turn the ``settings`` handed to a parser or compiler into an options object.

    ``process`` hands one settings value to both the parser and the compiler,
    so a mapping may carry fields for either side and options meant for the
    other side are tolerated.

    Parameters
    ----------
    settings : Any
        None, an instance of ``settings_class``, a mapping of field values,
        or an instance of a ``counterpart`` class
    settings_class : type
        Options class expected by the component
    component_name : str
        Name of the component, for messages
    counterpart : tuple of type, default ()
        Options classes of the other pipeline side; they select the defaults

    Returns
    -------
    options
        An instance of ``settings_class``

    Raises
    ------
    InvalidOptionsError
        If ``settings`` is an options object of an unrelated class
    ValidationError
        If a mapping holds invalid values

    """
    if settings is None:
        return settings_class()
    if isinstance(settings, settings_class):
        return settings
    if isinstance(settings, Mapping):
        names = {f.name for f in fields(settings_class)}
        ignored = sorted(set(settings) - names)
        if ignored:
            logger.debug(f"{component_name} ignoring settings it does not define: {', '.join(ignored)}")
        try:
            return settings_class(**{key: value for key, value in settings.items() if key in names})
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Invalid settings for {component_name}: {e}",
                parameter_name="settings",
                parameter_value=dict(settings),
                original_error=e,
            ) from e
    if counterpart and isinstance(settings, counterpart):
        return settings_class()
    raise InvalidOptionsError(component_name, settings_class, type(settings))
