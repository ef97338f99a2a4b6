#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/plugins/word_count.py
"""Count the words of a document.

Word count is calculated by splitting the literal text of the whole tree on
whitespace, with separate literals joined by spaces so adjacent nodes never
merge into one word.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from syntaxflow.ast.nodes import Node
from syntaxflow.ast.utils import count_words
from syntaxflow.constants import WORD_COUNT_DATA_KEY
from syntaxflow.transforms.chain import Transformer
from syntaxflow.transforms.metadata import ParameterSpec, PluginMetadata
from syntaxflow.vfile import VFile

if TYPE_CHECKING:
    from syntaxflow.processor import Processor


def word_count(processor: Processor, options: Optional[Mapping[str, Any]] = None) -> Transformer:
    """Attach a transformer storing the word count in ``file.data``."""
    field_name = WORD_COUNT_METADATA.resolve_options(options)["field"]

    def count_document_words(tree: Node, file: VFile) -> None:
        file.data[field_name] = count_words(tree)

    return count_document_words


WORD_COUNT_METADATA = PluginMetadata(
    name="word-count",
    description="Store the document word count in file data",
    attacher=word_count,
    parameters={
        "field": ParameterSpec(type=str, default=WORD_COUNT_DATA_KEY, validator=bool, help="file.data key for the count"),
    },
    tags=["metadata", "statistics"],
    author="syntaxflow",
)

__all__ = ["word_count", "WORD_COUNT_METADATA"]
