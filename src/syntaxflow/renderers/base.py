#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/renderers/base.py
"""Base classes for grammar compilers.

This module defines the abstract base class for compilers used as a
processor's ``compiler`` endpoint. The processor constructs a compiler with
``(file, settings, processor)`` for every ``stringify`` call and invokes
``compile(tree)``, which must return text. Compilers never mutate the tree.

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


class Compiler(Protocol):
    """Structural type of a constructed compiler."""

    def compile(self, tree: Node) -> str:
        """Return the text for ``tree``."""
        ...


CompilerFactory = Callable[[VFile, Any, "Processor"], Compiler]
"""Callable constructing a compiler from ``(file, settings, processor)``."""


class BaseCompiler(ABC):
    """Abstract base class for grammar compilers.

    Parameters
    ----------
    file : VFile
        The document the output belongs to
    settings : BaseCompilerOptions, Mapping, or None, default = None
        Compile-time settings. A mapping is converted into ``settings_class``
        (keys it does not define are ignored); parser settings and
        None select the defaults.
    processor : Processor or None, default = None
        The processor performing the compile

    Examples
    --------
    Creating a custom compiler:

        >>> from syntaxflow.ast import to_string
        >>> from syntaxflow.renderers.base import BaseCompiler
        >>>
        >>> class ShoutCompiler(BaseCompiler):
        ...     def compile(self, tree):
        ...         return to_string(tree).upper()

    """

    settings_class: ClassVar[type[BaseCompilerOptions]] = BaseCompilerOptions

    def __init__(
        self,
        file: VFile,
        settings: BaseCompilerOptions | Mapping[str, Any] | None = None,
        processor: Optional[Processor] = None,
    ):
        """Bind the compiler to a file, settings and processor."""
        self.file = file
        self.settings: BaseCompilerOptions = coerce_settings(
            settings, self.settings_class, type(self).__name__, counterpart=(BaseParserOptions,)
        )
        self.processor = processor

    @abstractmethod
    def compile(self, tree: Node) -> str:
        """Compile ``tree`` into text.

        Parameters
        ----------
        tree : Node
            Root of the tree to compile

        Returns
        -------
        str
            Compiled output

        Raises
        ------
        RenderingError
            If the tree cannot be represented in this grammar

        """
        raise NotImplementedError


__all__ = ["BaseCompiler", "Compiler", "CompilerFactory"]
