#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/processor.py
"""The Processor: plugin registration and the parse / run / stringify pipeline.

A processor binds a parser, a compiler, shared ``data`` and an ordered
plugin registry into one pipeline:

    text --parse--> tree --run (transformers)--> tree --stringify--> text

``process`` composes the three stages with the file threaded through all of
them. When every transformer resolves synchronously it returns the compiled
text directly; when any resolves asynchronously the result is delivered
through the completion callback only. Without a callback, an asynchronous
transformer is a configuration error (:class:`AsyncTransformerError`) rather
than a silently lost result. ``process_async`` and ``run_async`` hide the
callback for asyncio callers.

Examples
--------
Build a processor and process text:

    >>> from syntaxflow import Processor, PlainTextParser, PlainTextCompiler
    >>> def shout(processor, options):
    ...     def transformer(tree, file):
    ...         for paragraph in tree.children:
    ...             for child in paragraph.children or []:
    ...                 child.value = child.value.upper()
    ...     return transformer
    >>> processor = Processor("text", PlainTextParser, PlainTextCompiler).use(shout)
    >>> processor.process("hello")
    'HELLO'

With a completion callback:

    >>> def done(error, file, result):
    ...     print(error or result)
    >>> processor.process("hello", done)
    HELLO
    'HELLO'

"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional, Union, cast

from syntaxflow.ast.nodes import Node
from syntaxflow.constants import TREE_NAMESPACE_KEY, PipelineStage
from syntaxflow.data import DataMapping, copy_data, validate_data
from syntaxflow.exceptions import (
    MissingCompilerError,
    MissingParserError,
    MissingTreeError,
    ParsingError,
    PluginAttachError,
    RenderingError,
    ValidationError,
)
from syntaxflow.options.base import BaseCompilerOptions, BaseParserOptions, ProcessorOptions
from syntaxflow.parsers.base import ParserFactory
from syntaxflow.progress import ProgressCallback, emit_progress
from syntaxflow.renderers.base import CompilerFactory
from syntaxflow.transforms.catalog import plugin_catalog
from syntaxflow.transforms.chain import Transformer, TransformerChain, transformer_name
from syntaxflow.transforms.registry import Attacher, Attachment, AttachResult, PluginRegistry
from syntaxflow.vfile import VFile, to_vfile

logger = logging.getLogger(__name__)

Plugin = Union[Attacher, str, Sequence[Union[Attacher, str]]]
"""What ``use`` accepts: an attacher, a catalog name, or a list of either."""

RunCallback = Callable[[Optional[BaseException], Optional[Node], VFile], None]
"""Completion callback of ``run``: ``(error, tree, file)``."""

ProcessCallback = Callable[[Optional[BaseException], VFile, Optional[str]], None]
"""Completion callback of ``process``: ``(error, file, result)``."""

_STAGES: tuple[PipelineStage, ...] = ("parse", "run", "stringify")


class Processor:
    """A configurable text-transformation pipeline.

    Parameters
    ----------
    name : str
        Namespace key under which parsed trees are stored in a file
    parser : callable, optional
        Parser factory, constructed with ``(file, settings, processor)``
    compiler : callable, optional
        Compiler factory, constructed with ``(file, settings, processor)``
    data : Mapping, optional
        Shared configuration visible to the parser, the compiler and every
        plugin. It is copied, so later changes to the caller's mapping do not
        leak in.

    Attributes
    ----------
    data : dict
        Mutable shared configuration. It must hold data values only
        (strings, numbers, booleans, None, mappings and lists of those).

    Raises
    ------
    ValidationError
        If ``name`` is empty, an endpoint is not callable, or ``data`` holds
        values outside the data variant

    Notes
    -----
    ``name``, ``parser`` and ``compiler`` are fixed for the life of a
    processor. ``data`` and the plugin registry change through ``use``.
    A processor is typically built once and used to process many documents;
    transformers that mutate ``data`` per run make concurrent use unsafe.

    """

    def __init__(
        self,
        name: str,
        parser: Optional[ParserFactory] = None,
        compiler: Optional[CompilerFactory] = None,
        data: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize the processor."""
        options = ProcessorOptions(name=name, parser=parser, compiler=compiler, data=dict(data or {}))
        self._name = options.name
        self._parser = options.parser
        self._compiler = options.compiler
        self.data: DataMapping = copy_data(options.data)
        self._registry = PluginRegistry()

    @classmethod
    def from_options(cls, options: ProcessorOptions) -> Processor:
        """Create a processor from frozen :class:`ProcessorOptions`."""
        return cls(options.name, options.parser, options.compiler, options.data)

    @property
    def name(self) -> str:
        """Namespace key of this processor."""
        return self._name

    @property
    def parser(self) -> Optional[ParserFactory]:
        """Configured parser factory, if any."""
        return self._parser

    @property
    def compiler(self) -> Optional[CompilerFactory]:
        """Configured compiler factory, if any."""
        return self._compiler

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        """Attached plugins in registration order."""
        return self._registry.attachments

    @property
    def transformers(self) -> tuple[Transformer, ...]:
        """Transformers in execution order."""
        return self._registry.transformers

    def clone(self) -> Processor:
        """Return an independent copy of this processor.

        The copy shares the parser and compiler, starts from the same
        attachments and transformers, and holds a deep copy of ``data``.
        Attachers are not re-run.

        """
        clone = Processor(self._name, self._parser, self._compiler, copy_data(self.data))
        clone._registry = self._registry.copy()
        return clone

    def __repr__(self) -> str:
        """Return a short description of the processor."""
        return f"Processor(name={self._name!r}, plugins={len(self._registry)}, transformers={len(self.transformers)})"

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    def use(self, plugin: Plugin, options: Any = None) -> Processor:
        """Attach one or more plugins.

        Each attacher is called once, now, with ``(processor, options)``. Its
        return value decides where chaining continues: ``None`` or a
        transformer keep this processor, a :class:`Processor` (or an
        :class:`AttachResult` naming one) switches to that processor.

        Parameters
        ----------
        plugin : callable, str, or list
            An attacher, the name of a plugin in the catalog, or a list of
            either. List entries share ``options`` and are attached in order,
            each to the processor returned by the previous one.
        options : Any, optional
            Options handed to the attacher, opaque to the processor. Named
            plugins validate them against their declared parameters.

        Returns
        -------
        Processor
            The processor to use for further chaining

        Raises
        ------
        PluginAttachError
            If an attacher raises, returns an unsupported value, leaves
            ``data`` invalid, or a named plugin is unknown. Earlier
            registrations are kept and ``data`` is restored to its state
            before the attempt.
        ValidationError
            If ``plugin`` is neither callable, a string, nor a list

        Examples
        --------
        >>> processor = processor.use([plugin_a, plugin_b], {"strict": True})
        >>> processor = processor.use("remove-nodes", {"types": ["whitespace"]})

        """
        if isinstance(plugin, (list, tuple)):
            processor = self
            for item in plugin:
                processor = processor.use(item, options)
            return processor

        if isinstance(plugin, str):
            return self._use_named(plugin, options)

        if not callable(plugin):
            raise ValidationError(
                f"Plugin must be an attacher, a plugin name or a list of them, got {type(plugin).__name__}",
                parameter_name="plugin",
                parameter_value=plugin,
            )
        return self._attach(plugin, options, transformer_name(plugin))

    def _use_named(self, name: str, options: Any) -> Processor:
        try:
            metadata = plugin_catalog.get_metadata(name)
            options = metadata.resolve_options(options)
        except (KeyError, ValidationError) as e:
            message = e.args[0] if isinstance(e, KeyError) else e.message
            raise PluginAttachError(f"Cannot attach plugin '{name}': {message}", plugin_name=name, original_error=e) from e
        return self._attach(metadata.attacher, options, metadata.name)

    def _attach(self, attacher: Attacher, options: Any, name: str) -> Processor:
        logger.debug(f"Attaching plugin '{name}' to processor '{self._name}'")
        snapshot = copy_data(self.data)
        try:
            outcome = AttachResult.from_return(attacher(self, options), name)
        except Exception as e:
            self._restore_data(snapshot)
            raise PluginAttachError(f"Plugin '{name}' failed to attach: {e}", plugin_name=name, original_error=e) from e

        target = outcome.processor if outcome.processor is not None else self
        try:
            validate_data(target.data)
        except ValidationError as e:
            self._restore_data(snapshot)
            raise PluginAttachError(
                f"Plugin '{name}' left invalid processor data: {e.message}", plugin_name=name, original_error=e
            ) from e

        target._registry.add(Attachment(attacher, options), outcome.transformer)
        if target is not self:
            logger.debug(f"Plugin '{name}' continued chaining on a new processor instance")
        return target

    def _restore_data(self, snapshot: DataMapping) -> None:
        # keeps the dict identity
        self.data.clear()
        self.data.update(snapshot)

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def parse(self, value: Any = None, settings: Any = None) -> Node:
        """Parse ``value`` into a syntax tree.

        The tree is also stored in the file's namespace for this processor,
        where ``run`` and ``stringify`` find it when called without a tree.

        Parameters
        ----------
        value : VFile, str, bytes, Mapping, or None
            Input, coerced with :func:`syntaxflow.vfile.to_vfile`. Pass a
            VFile to keep access to the stored tree and messages.
        settings : Any, optional
            Parse-time settings handed to the parser

        Returns
        -------
        Node
            Root of the parsed tree

        Raises
        ------
        MissingParserError
            If no parser is configured
        ParsingError
            If the parser returned something other than a Node

        """
        return self._parse_file(to_vfile(value), settings)

    def _parse_file(self, file: VFile, settings: Any) -> Node:
        if self._parser is None:
            raise MissingParserError(self._name)

        logger.debug(f"Parsing {file_label(file)} with processor '{self._name}'")
        tree = self._parser(file, settings, self).parse()
        if not isinstance(tree, Node):
            raise ParsingError(
                f"Parser of processor '{self._name}' returned {type(tree).__name__}, expected a Node",
                parsing_stage="parse",
            )
        file.namespace(self._name)[TREE_NAMESPACE_KEY] = tree
        return tree

    def _stored_tree(self, file: VFile) -> Node:
        tree = file.namespace(self._name).get(TREE_NAMESPACE_KEY)
        if not isinstance(tree, Node):
            raise MissingTreeError(
                f"No tree was given and none is stored for processor '{self._name}' in {file_label(file)}"
            )
        return tree

    def run(
        self,
        tree: Optional[Node] = None,
        file: Any = None,
        callback: Optional[RunCallback] = None,
        *,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Optional[Node]:
        """Run every registered transformer over a tree.

        Parameters
        ----------
        tree : Node, optional
            Tree to transform. Defaults to the tree stored in ``file`` by
            ``parse``.
        file : VFile or value accepted by ``to_vfile``, optional
            File handed to every transformer
        callback : callable, optional
            ``callback(error, tree, file)``, called once when the chain
            finishes or fails. Required when a transformer resolves
            asynchronously.
        progress_callback : ProgressCallback, optional
            Receives an ``item_done`` event per transformer

        Returns
        -------
        Node or None
            The final tree when every transformer resolved synchronously and
            nothing failed; otherwise None (with a callback)

        Raises
        ------
        MissingTreeError
            Without a callback, if there is no tree to run
        AsyncTransformerError
            Without a callback, if a transformer resolves asynchronously
        Exception
            Without a callback, the first error of a transformer, unchanged

        """
        vfile = to_vfile(file)
        chain = TransformerChain(self._registry.transformers, progress_callback)

        if callback is None:
            start = tree if tree is not None else self._stored_tree(vfile)
            final = cast(Node, chain.run(start, vfile))
            vfile.namespace(self._name)[TREE_NAMESPACE_KEY] = final
            return final

        try:
            start = tree if tree is not None else self._stored_tree(vfile)
        except MissingTreeError as e:
            callback(e, None, vfile)
            return None

        deliver: RunCallback = callback
        settled: list[Node] = []

        def done(error: Optional[BaseException], final: Optional[Node], done_file: VFile) -> None:
            if error is None and final is not None:
                done_file.namespace(self._name)[TREE_NAMESPACE_KEY] = final
                settled.append(final)
            deliver(error, final, done_file)

        chain.run(start, vfile, done)
        return settled[0] if settled else None

    def stringify(self, tree: Optional[Node] = None, file: Any = None, settings: Any = None) -> str:
        """Compile a tree into text.

        Parameters
        ----------
        tree : Node, optional
            Tree to compile. Defaults to the tree stored in ``file``.
        file : VFile or value accepted by ``to_vfile``, optional
            File the output belongs to
        settings : Any, optional
            Compile-time settings handed to the compiler

        Returns
        -------
        str
            Compiled text. The tree is not modified.

        Raises
        ------
        MissingCompilerError
            If no compiler is configured
        MissingTreeError
            If no tree was given and none is stored in ``file``
        RenderingError
            If the compiler returned something other than text

        """
        if self._compiler is None:
            raise MissingCompilerError(self._name)

        vfile = to_vfile(file)
        if tree is None:
            tree = self._stored_tree(vfile)

        logger.debug(f"Compiling {file_label(vfile)} with processor '{self._name}'")
        result = self._compiler(vfile, settings, self).compile(tree)
        if not isinstance(result, str):
            raise RenderingError(
                f"Compiler of processor '{self._name}' returned {type(result).__name__}, expected str",
                rendering_stage="stringify",
            )
        return result

    def process(
        self,
        value: Any = None,
        settings: Any = None,
        callback: Optional[ProcessCallback] = None,
        *,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Optional[str]:
        """Parse, run and stringify ``value``.

        Parameters
        ----------
        value : VFile, str, bytes, Mapping, or None
            Input document. On success the file's ``contents`` are replaced
            with the compiled text.
        settings : Any, optional
            Settings handed to both the parser and the compiler. A callable
            passed here with no ``callback`` is treated as the callback.
        callback : callable, optional
            ``callback(error, file, result)``, called once. With a callback,
            every stage failure is delivered to it instead of being raised.
        progress_callback : ProgressCallback, optional
            Receives ``started``, ``item_done`` (per stage and transformer),
            ``finished`` and ``error`` events

        Returns
        -------
        str or None
            The compiled text when the whole pipeline finished synchronously
            and successfully; otherwise None (with a callback)

        Raises
        ------
        MissingParserError, MissingCompilerError
            Without a callback, if an endpoint is missing
        AsyncTransformerError
            Without a callback, if a transformer resolves asynchronously
        Exception
            Without a callback, the first error of any stage, unchanged

        """
        if callback is None and callable(settings) and not isinstance(settings, _SETTINGS_TYPES):
            callback, settings = settings, None

        if callback is None:
            file = to_vfile(value)
            self._started(file, progress_callback)
            try:
                self._require_endpoints()
                tree = self._parse_file(file, settings)
                self._stage_done(progress_callback, "parse")
                final = self.run(tree, file, progress_callback=progress_callback)
                self._stage_done(progress_callback, "run")
                result = self.stringify(final, file, settings)
                self._stage_done(progress_callback, "stringify")
            except Exception as e:
                emit_progress(progress_callback, "error", f"Processing failed: {e}", error=str(e))
                raise
            return self._complete(file, result, progress_callback)

        deliver: ProcessCallback = callback
        outcome: list[str] = []
        file = VFile()

        def fail(error: BaseException) -> None:
            logger.debug(f"Processing {file_label(file)} failed: {error!r}")
            emit_progress(progress_callback, "error", f"Processing failed: {error}", error=str(error))
            deliver(error, file, None)

        def compile_stage(error: Optional[BaseException], final: Optional[Node], _file: VFile) -> None:
            if error is not None:
                fail(error)
                return
            self._stage_done(progress_callback, "run")
            try:
                result = self.stringify(final, file, settings)
            except Exception as e:
                fail(e)
                return
            self._stage_done(progress_callback, "stringify")
            outcome.append(self._complete(file, result, progress_callback))
            deliver(None, file, result)

        try:
            file = to_vfile(value)
            self._started(file, progress_callback)
            self._require_endpoints()
            tree = self._parse_file(file, settings)
        except Exception as e:
            fail(e)
            return None
        self._stage_done(progress_callback, "parse")

        self.run(tree, file, compile_stage, progress_callback=progress_callback)
        return outcome[0] if outcome else None

    def _require_endpoints(self) -> None:
        if self._parser is None:
            raise MissingParserError(self._name)
        if self._compiler is None:
            raise MissingCompilerError(self._name)

    @staticmethod
    def _started(file: VFile, progress_callback: Optional[ProgressCallback]) -> None:
        emit_progress(progress_callback, "started", f"Processing {file_label(file)}", total=len(_STAGES))

    @staticmethod
    def _stage_done(progress_callback: Optional[ProgressCallback], stage: PipelineStage) -> None:
        emit_progress(
            progress_callback,
            "item_done",
            f"Stage {stage} complete",
            current=_STAGES.index(stage) + 1,
            total=len(_STAGES),
            item_type="stage",
            stage=stage,
        )

    @staticmethod
    def _complete(file: VFile, result: str, progress_callback: Optional[ProgressCallback]) -> str:
        file.contents = result
        emit_progress(progress_callback, "finished", f"Processed {file_label(file)}", total=len(_STAGES))
        return result

    # ------------------------------------------------------------------
    # asyncio front ends
    # ------------------------------------------------------------------

    async def run_async(
        self,
        tree: Optional[Node] = None,
        file: Any = None,
        *,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Node:
        """Run the transformers, awaiting asynchronous ones.

        Transformers may return coroutines or call ``next`` from other tasks
        or threads. Errors are raised from the ``await``.

        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Node] = loop.create_future()

        def done(error: Optional[BaseException], final: Optional[Node], _file: VFile) -> None:
            loop.call_soon_threadsafe(_settle_future, future, error, final)

        self.run(tree, to_vfile(file), done, progress_callback=progress_callback)
        return await future

    async def process_async(
        self,
        value: Any = None,
        settings: Any = None,
        *,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> str:
        """Parse, run and stringify ``value``, awaiting asynchronous transformers.

        Examples
        --------
        >>> async def fetch_titles(tree, file):
        ...     await asyncio.sleep(0)
        >>> text = await processor.use(lambda p, o: fetch_titles).process_async("hello")

        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def done(error: Optional[BaseException], _file: VFile, result: Optional[str]) -> None:
            loop.call_soon_threadsafe(_settle_future, future, error, result)

        self.process(value, settings, done, progress_callback=progress_callback)
        return await future


_SETTINGS_TYPES = (Mapping, BaseParserOptions, BaseCompilerOptions)


def file_label(file: VFile) -> str:
    """Return the path of ``file`` or a placeholder for logs."""
    return file.path or "<input>"


def _settle_future(future: asyncio.Future[Any], error: Optional[BaseException], result: Any) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)


__all__ = ["Processor", "Plugin", "RunCallback", "ProcessCallback"]
