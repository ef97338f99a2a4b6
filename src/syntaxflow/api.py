#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/api.py
"""Processor factories.

A :class:`ProcessorFactory` remembers how to build a processor (name,
endpoints, data and a plugin list) and builds a fresh, independent one on
every call. Its ``use``, ``parse``, ``run``, ``stringify`` and ``process``
methods forward to a newly built processor, so one-off calls never share
state and there is no hidden global instance.

Examples
--------
Define a reusable processor configuration:

    >>> from syntaxflow import define_processor, PlainTextParser, PlainTextCompiler
    >>> text = define_processor("text", PlainTextParser, PlainTextCompiler, plugins=["word-count"])
    >>> text.process("one two three")
    'one two three'

Each call builds a new processor:

    >>> text() is text()
    False

"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from syntaxflow.ast.nodes import Node
from syntaxflow.constants import DEFAULT_PROCESSOR_NAME
from syntaxflow.options.base import ProcessorOptions
from syntaxflow.parsers.base import ParserFactory
from syntaxflow.parsers.plaintext import PlainTextParser
from syntaxflow.processor import Plugin, ProcessCallback, Processor, RunCallback
from syntaxflow.progress import ProgressCallback
from syntaxflow.renderers.base import CompilerFactory
from syntaxflow.renderers.plaintext import PlainTextCompiler

logger = logging.getLogger(__name__)

PluginEntry = Union[Plugin, tuple[Plugin, Optional[Mapping[str, Any]]]]
"""A plugin, or a ``(plugin, options)`` pair, in a factory's plugin list."""


def _split_entry(entry: PluginEntry) -> tuple[Plugin, Any]:
    if isinstance(entry, tuple) and len(entry) == 2 and (entry[1] is None or isinstance(entry[1], Mapping)):
        return entry[0], entry[1]
    return entry, None  # type: ignore[return-value]


class ProcessorFactory:
    """Builds fresh processors from a fixed configuration.

    Parameters
    ----------
    options : ProcessorOptions
        Name, endpoints and data of the processors to build
    plugins : sequence, optional
        Plugins attached to every built processor, in order. Entries are
        anything ``Processor.use`` accepts, or ``(plugin, options)`` pairs
        whose options are a mapping or None.

    """

    def __init__(self, options: ProcessorOptions, plugins: Sequence[PluginEntry] = ()):
        """Store the configuration."""
        self.options = options
        self.plugins: tuple[tuple[Plugin, Any], ...] = tuple(_split_entry(entry) for entry in plugins)

    def __call__(self) -> Processor:
        """Build a new processor with the configured plugins attached."""
        processor = Processor.from_options(self.options)
        for plugin, plugin_options in self.plugins:
            processor = processor.use(plugin, plugin_options)
        return processor

    def __repr__(self) -> str:
        """Return a short description of the factory."""
        return f"ProcessorFactory(name={self.options.name!r}, plugins={len(self.plugins)})"

    def use(self, plugin: Plugin, options: Any = None) -> Processor:
        """Build a processor and attach ``plugin`` to it."""
        return self().use(plugin, options)

    def parse(self, value: Any = None, settings: Any = None) -> Node:
        """Build a processor and parse ``value`` with it."""
        return self().parse(value, settings)

    def run(
        self,
        tree: Optional[Node] = None,
        file: Any = None,
        callback: Optional[RunCallback] = None,
        *,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Optional[Node]:
        """Build a processor and run its transformers over ``tree``."""
        return self().run(tree, file, callback, progress_callback=progress_callback)

    def stringify(self, tree: Optional[Node] = None, file: Any = None, settings: Any = None) -> str:
        """Build a processor and compile ``tree`` with it."""
        return self().stringify(tree, file, settings)

    def process(
        self,
        value: Any = None,
        settings: Any = None,
        callback: Optional[ProcessCallback] = None,
        *,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Optional[str]:
        """Build a processor and process ``value`` with it."""
        return self().process(value, settings, callback, progress_callback=progress_callback)

    async def run_async(
        self, tree: Optional[Node] = None, file: Any = None, *, progress_callback: Optional[ProgressCallback] = None
    ) -> Node:
        """Build a processor and await a run of its transformers."""
        return await self().run_async(tree, file, progress_callback=progress_callback)

    async def process_async(
        self, value: Any = None, settings: Any = None, *, progress_callback: Optional[ProgressCallback] = None
    ) -> str:
        """Build a processor and await processing of ``value``."""
        return await self().process_async(value, settings, progress_callback=progress_callback)


def define_processor(
    name: str,
    parser: Optional[ParserFactory] = None,
    compiler: Optional[CompilerFactory] = None,
    data: Optional[Mapping[str, Any]] = None,
    plugins: Sequence[PluginEntry] = (),
) -> ProcessorFactory:
    """Define a processor configuration and return its factory.

    Parameters
    ----------
    name : str
        Namespace key of the processors
    parser : callable, optional
        Parser factory
    compiler : callable, optional
        Compiler factory
    data : Mapping, optional
        Shared configuration, copied into every built processor
    plugins : sequence, optional
        Plugins attached to every built processor

    Returns
    -------
    ProcessorFactory
        Factory building a fresh processor per call

    Raises
    ------
    ValidationError
        If the configuration is invalid

    """
    options = ProcessorOptions(name=name, parser=parser, compiler=compiler, data=dict(data or {}))
    logger.debug(f"Defined processor '{name}' with {len(plugins)} plugin(s)")
    return ProcessorFactory(options, plugins)


def create_text_processor(name: str = DEFAULT_PROCESSOR_NAME, data: Optional[Mapping[str, Any]] = None) -> Processor:
    """Create a processor for the bundled plaintext grammar.

    Examples
    --------
    >>> create_text_processor().use("text-replacer", {"find": "cat", "replace": "dog"}).process("The cat.")
    'The dog.'

    """
    return Processor(name, PlainTextParser, PlainTextCompiler, data)


__all__ = ["ProcessorFactory", "PluginEntry", "define_processor", "create_text_processor"]
