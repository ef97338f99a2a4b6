#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/plugins/frontmatter.py
"""Front matter plugin.

Reads a fenced metadata block at the very start of the input, either YAML
between ``---`` lines or TOML between ``+++`` lines, and stores the parsed
mapping in ``file.data["matter"]``. When the tree's first top-level node holds
exactly the fenced block (as the plaintext parser produces), it is replaced
by a ``yaml`` or ``toml`` literal node carrying the same text, so compilers
can drop or re-emit it deliberately.

Examples
--------
    >>> from syntaxflow import VFile, create_text_processor
    >>> processor = create_text_processor().use("frontmatter")
    >>> file = VFile("---\\ntitle: Hello\\n---\\n\\nBody")
    >>> _ = processor.process(file)
    >>> file.data["matter"]
    {'title': 'Hello'}

"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import yaml

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

from syntaxflow.ast.nodes import Node
from syntaxflow.ast.utils import to_string
from syntaxflow.constants import (
    FRONTMATTER_DATA_KEY,
    TOML_FRONTMATTER_FENCE,
    TOML_NODE_TYPE,
    YAML_FRONTMATTER_FENCE,
    YAML_NODE_TYPE,
)
from syntaxflow.transforms.chain import Transformer
from syntaxflow.transforms.metadata import ParameterSpec, PluginMetadata
from syntaxflow.vfile import VFile

if TYPE_CHECKING:
    from syntaxflow.processor import Processor

logger = logging.getLogger(__name__)

_FENCES = {"yaml": YAML_FRONTMATTER_FENCE, "toml": TOML_FRONTMATTER_FENCE}
_NODE_TYPES = {"yaml": YAML_NODE_TYPE, "toml": TOML_NODE_TYPE}


@dataclass(frozen=True)
class FrontMatterBlock:
    """A fenced block found at the start of a document.

    Parameters
    ----------
    format : str
        ``"yaml"`` or ``"toml"``
    raw : str
        The text between the fences
    block : str
        The whole block including both fences and the closing line break

    """

    format: str
    raw: str
    block: str


def find_frontmatter(content: str, formats: tuple[str, ...] = ("yaml", "toml")) -> Optional[FrontMatterBlock]:
    """Locate a fenced front matter block at the start of ``content``.

    Returns
    -------
    FrontMatterBlock or None
        The block, or None if ``content`` does not open with a closed fence

    """
    for fmt in formats:
        fence = _FENCES[fmt]
        if not (content.startswith(fence + "\n") or content.startswith(fence + "\r\n")):
            continue

        lines = content.splitlines(keepends=True)
        for end_index in range(1, len(lines)):
            if lines[end_index].strip() == fence:
                return FrontMatterBlock(
                    format=fmt,
                    raw="".join(lines[1:end_index]),
                    block="".join(lines[: end_index + 1]),
                )
        return None
    return None


def parse_frontmatter(block: FrontMatterBlock) -> Any:
    """Parse the text of a front matter block.

    Raises
    ------
    yaml.YAMLError
        If a YAML block is malformed
    tomllib.TOMLDecodeError
        If a TOML block is malformed

    """
    if block.format == "toml":
        return tomllib.loads(block.raw)
    return yaml.safe_load(block.raw)


def frontmatter(processor: Processor, options: Optional[Mapping[str, Any]] = None) -> Transformer:
    """Attach the front matter transformer.

    Parameters
    ----------
    processor : Processor
        Processor being configured
    options : Mapping, optional
        ``formats`` (list of ``"yaml"`` / ``"toml"``), ``strict`` (fail on
        malformed front matter instead of warning) and ``key`` (``file.data``
        key receiving the mapping)

    """
    resolved = FRONTMATTER_METADATA.resolve_options(options)
    formats = tuple(resolved["formats"])
    strict = resolved["strict"]
    key = resolved["key"]

    def parse_front_matter(tree: Node, file: VFile) -> None:
        found = find_frontmatter(str(file), formats)
        if found is None:
            return

        try:
            matter = parse_frontmatter(found)
        except (yaml.YAMLError, tomllib.TOMLDecodeError) as e:
            reason = f"Invalid {found.format.upper()} front matter: {e}"
            if strict:
                file.fail(reason, origin=f"frontmatter:invalid-{found.format}")
            file.message(reason, origin=f"frontmatter:invalid-{found.format}")
            return

        if matter is None:
            matter = {}
        if not isinstance(matter, dict):
            file.message(
                f"Front matter must be a mapping, got {type(matter).__name__}",
                origin="frontmatter:not-a-mapping",
            )
            return

        file.data[key] = matter
        logger.debug(f"Read {found.format} front matter with {len(matter)} key(s)")

        if tree.children:
            first = tree.children[0]
            text = to_string(first)
            if text in (found.block, found.block.rstrip("\r\n")):
                tree.children[0] = Node(_NODE_TYPES[found.format], value=text, position=first.position)

    return parse_front_matter


FRONTMATTER_METADATA = PluginMetadata(
    name="frontmatter",
    description="Parse leading YAML or TOML front matter into file data",
    attacher=frontmatter,
    parameters={
        "formats": ParameterSpec(
            type=list,
            element_type=str,
            default=["yaml", "toml"],
            validator=lambda value: bool(value) and all(fmt in _FENCES for fmt in value),
            help="Front matter formats to recognize ('yaml', 'toml')",
        ),
        "strict": ParameterSpec(type=bool, default=False, help="Fail on malformed front matter"),
        "key": ParameterSpec(type=str, default=FRONTMATTER_DATA_KEY, help="file.data key for the parsed mapping"),
    },
    tags=["metadata"],
    author="syntaxflow",
)

__all__ = ["FrontMatterBlock", "find_frontmatter", "parse_frontmatter", "frontmatter", "FRONTMATTER_METADATA"]
