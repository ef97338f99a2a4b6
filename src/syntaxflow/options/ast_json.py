#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/options/ast_json.py
"""Configuration options for the JSON tree grammar."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from syntaxflow.constants import DEFAULT_JSON_INDENT
from syntaxflow.options.base import BaseCompilerOptions, BaseParserOptions


@dataclass(frozen=True)
class AstJsonParserOptions(BaseParserOptions):
    """Configuration options for parsing serialized trees.

    Parameters
    ----------
    positions : bool, default True
        Keep positions found in the JSON. When False they are dropped.

    """


@dataclass(frozen=True)
class AstJsonCompilerOptions(BaseCompilerOptions):
    """Configuration options for serializing trees to JSON.

    Parameters
    ----------
    indent : int or None, default 2
        JSON indentation; None writes a single line
    include_positions : bool, default True
        Write node positions

    """

    indent: Optional[int] = field(
        default=DEFAULT_JSON_INDENT,
        metadata={"help": "JSON indentation (None for compact output)", "importance": "core"},
    )
    include_positions: bool = field(
        default=True,
        metadata={"help": "Include node positions in the output", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges."""
        if self.indent is not None and self.indent < 0:
            raise ValueError(f"indent must be non-negative, got {self.indent}")
