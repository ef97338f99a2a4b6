#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/parsers/base.py
"""Base classes for grammar parsers.

This module defines the abstract base class for parsers used as a
processor's ``parser`` endpoint. The processor constructs a parser with
``(file, settings, processor)`` for every ``parse`` call and invokes its
``parse()`` method, which must return a syntax tree.

Any callable with that construction signature whose result exposes
``parse()`` can serve as a parser; subclassing :class:`BaseParser` only adds
settings coercion.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Optional, Protocol

from syntaxflow.ast.nodes import Node
from syntaxflow.options.base import BaseCompilerOptions, BaseParserOptions, coerce_settings
from syntaxflow.vfile import VFile

if TYPE_CHECKING:
    from syntaxflow.processor import Processor


class Parser(Protocol):
    """Structural type of a constructed parser."""

    def parse(self) -> Node:
        """Return the syntax tree of the bound file."""
        ...


ParserFactory = Callable[[VFile, Any, "Processor"], Parser]
"""Callable constructing a parser from ``(file, settings, processor)``."""


class BaseParser(ABC):
    """Abstract base class for grammar parsers.

    Parameters
    ----------
    file : VFile
        The document being parsed; its contents are the parser input
    settings : BaseParserOptions, Mapping, or None, default = None
        Parse-time settings. A mapping is converted into ``settings_class``
        (keys it does not define are ignored); compiler settings and
        None select the defaults.
    processor : Processor or None, default = None
        The processor performing the parse, for access to shared ``data``

    Examples
    --------
    Creating a custom parser:

        >>> from syntaxflow.ast import u
        >>> from syntaxflow.parsers.base import BaseParser
        >>>
        >>> class LineParser(BaseParser):
        ...     def parse(self):
        ...         return u("root", [u("line", line) for line in self.text.splitlines()])

    """

    settings_class: ClassVar[type[BaseParserOptions]] = BaseParserOptions

    def __init__(
        self,
        file: VFile,
        settings: BaseParserOptions | Mapping[str, Any] | None = None,
        processor: Optional[Processor] = None,
    ):
        """Bind the parser to a file, settings and processor."""
        self.file = file
        self.settings: BaseParserOptions = coerce_settings(
            settings, self.settings_class, type(self).__name__, counterpart=(BaseCompilerOptions,)
        )
        self.processor = processor

    @property
    def text(self) -> str:
        """Contents of the bound file as text."""
        return str(self.file)

    @abstractmethod
    def parse(self) -> Node:
        """Parse the bound file into a syntax tree.

        Returns
        -------
        Node
            Root of the syntax tree

        Raises
        ------
        ParsingError
            If the input is not valid for this grammar

        """
        raise NotImplementedError


__all__ = ["BaseParser", "Parser", "ParserFactory"]
