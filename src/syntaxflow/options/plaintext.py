#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/options/plaintext.py
"""Configuration options for the reference plaintext grammar.

This module defines the settings accepted by the plaintext parser and
compiler.
"""

from dataclasses import dataclass, field

from syntaxflow.options.base import BaseCompilerOptions, BaseParserOptions


@dataclass(frozen=True)
class PlainTextParserOptions(BaseParserOptions):
    """Configuration options for plaintext parsing.

    Parameters
    ----------
    paragraphs : bool, default True
        Split the input into ``paragraph`` nodes separated by ``whitespace``
        literals. When False, the root holds a single ``text`` literal with
        the whole input.

    """

    paragraphs: bool = field(
        default=True,
        metadata={
            "help": "Split input on blank lines into paragraph nodes",
            "type": bool,
            "importance": "core",
        },
    )


@dataclass(frozen=True)
class PlainTextCompilerOptions(BaseCompilerOptions):
    """Configuration options for plaintext compiling.

    Parameters
    ----------
    skip_types : tuple of str, default ()
        Literal node types whose values are left out of the output
        (for example ``("yaml",)`` to drop front matter)

    """

    skip_types: tuple[str, ...] = field(
        default=(),
        metadata={
            "help": "Literal node types omitted from the output",
            "importance": "advanced",
        },
    )
