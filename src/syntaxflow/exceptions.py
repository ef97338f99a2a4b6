#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the syntaxflow library.

This module defines specialized exception classes for the error conditions
that can occur while configuring a processor, attaching plugins, and running
the parse / run / stringify pipeline.

Exception Hierarchy
-------------------
- SyntaxflowError (base exception)

  - ValidationError (invalid nodes, data values, options)
    - InvalidOptionsError (wrong settings class for a parser or compiler)

  - ConfigurationError (processor misconfiguration)
    - MissingParserError (parse without a Parser)
    - MissingCompilerError (stringify without a Compiler)
    - MissingTreeError (nothing to run or compile)
    - AsyncTransformerError (pending transformer without a completion callback)

  - PluginAttachError (an attacher raised during ``use``)

  - TransformError (chain protocol violations)

  - ParsingError (parser produced something that is not a tree)

  - RenderingError (compiler produced something that is not text)

Notes
-----
Errors raised by transformers, parsers and compilers themselves are never
wrapped: the pipeline forwards the first one it encounters unchanged.

"""

from __future__ import annotations

from typing import Any


class SyntaxflowError(Exception):
    """Base exception class for all syntaxflow-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(SyntaxflowError):
    """Exception raised for invalid nodes, data values or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name (or dotted path) of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a parser or compiler receives the wrong settings class.

    Parameters
    ----------
    component_name : str
        Name of the parser or compiler that received the settings
    expected_type : type
        The expected settings class
    received_type : type
        The settings class that was received

    """

    def __init__(self, component_name: str, expected_type: type, received_type: type):
        """Initialize with the expected and received settings classes."""
        super().__init__(
            f"{component_name} expects settings of type {expected_type.__name__}, got {received_type.__name__}",
            parameter_name="settings",
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigurationError(SyntaxflowError):
    """Exception raised when a processor is used in a way its configuration cannot satisfy."""


class MissingParserError(ConfigurationError):
    """Exception raised when ``parse`` or ``process`` is called without a Parser.

    Parameters
    ----------
    processor_name : str
        Name of the processor that lacks a parser

    """

    def __init__(self, processor_name: str):
        """Initialize with the offending processor name."""
        super().__init__(f"Cannot parse with processor '{processor_name}': no Parser is configured")
        self.processor_name = processor_name


class MissingCompilerError(ConfigurationError):
    """Exception raised when ``stringify`` or ``process`` is called without a Compiler.

    Parameters
    ----------
    processor_name : str
        Name of the processor that lacks a compiler

    """

    def __init__(self, processor_name: str):
        """Initialize with the offending processor name."""
        super().__init__(f"Cannot stringify with processor '{processor_name}': no Compiler is configured")
        self.processor_name = processor_name


class MissingTreeError(ConfigurationError):
    """Exception raised when no tree was given and none is stored in the file namespace."""


class AsyncTransformerError(ConfigurationError):
    """Exception raised when a transformer resolves asynchronously but no callback can observe it.

    Parameters
    ----------
    message : str
        Description of the problem
    transformer_name : str, optional
        Name of the transformer that did not resolve synchronously

    """

    def __init__(self, message: str, transformer_name: str | None = None):
        """Initialize with the name of the pending transformer."""
        super().__init__(message)
        self.transformer_name = transformer_name


class PluginAttachError(SyntaxflowError):
    """Exception raised when an attacher fails during ``use``.

    Parameters
    ----------
    message : str
        Description of the failure
    plugin_name : str, optional
        Name of the attacher that failed
    original_error : Exception, optional
        The exception raised by the attacher

    """

    def __init__(self, message: str, plugin_name: str | None = None, original_error: Exception | None = None):
        """Initialize the attach error with the plugin name."""
        super().__init__(message, original_error=original_error)
        self.plugin_name = plugin_name


class TransformError(SyntaxflowError):
    """Exception raised when a transformer violates the chain protocol.

    Parameters
    ----------
    message : str
        Description of the violation
    transformer_name : str, optional
        Name of the offending transformer
    original_error : Exception, optional
        The original exception, if any

    """

    def __init__(self, message: str, transformer_name: str | None = None, original_error: Exception | None = None):
        """Initialize the transform error with the transformer name."""
        super().__init__(message, original_error=original_error)
        self.transformer_name = transformer_name


class ParsingError(SyntaxflowError):
    """Exception raised when input cannot be turned into a syntax tree.

    Parameters
    ----------
    message : str
        Description of the parsing error
    parsing_stage : str, optional
        Stage of parsing where the error occurred
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error with stage information."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class RenderingError(SyntaxflowError):
    """Exception raised when a tree cannot be compiled into text.

    Parameters
    ----------
    message : str
        Description of the rendering error
    rendering_stage : str, optional
        Stage of rendering where the error occurred
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error with stage information."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


__all__ = [
    "SyntaxflowError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigurationError",
    "MissingParserError",
    "MissingCompilerError",
    "MissingTreeError",
    "AsyncTransformerError",
    "PluginAttachError",
    "TransformError",
    "ParsingError",
    "RenderingError",
]
