#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/transforms/chain.py
"""Transformer chain: the engine behind ``Processor.run``.

A chain executes its transformers strictly in order. Each transformer
resolves exactly once, in one of these ways:

- returning synchronously (``None`` keeps the tree, a :class:`Node` replaces
  it, an exception instance fails the chain)
- raising an exception
- calling ``next(error=None, tree=None)``, now or later, when it declares a
  third positional parameter
- returning an awaitable, which is scheduled on the running asyncio loop and
  whose result is interpreted like a synchronous return

Every step feeds a :class:`Completion`, so the driver has a single code path
whichever style a transformer picks. Synchronous steps advance in a loop;
a pending step resumes the loop from its completion callback. The first
error stops the chain and is reported unchanged.

Examples
--------
    >>> from syntaxflow.ast import u
    >>> from syntaxflow.vfile import VFile
    >>> def shout(tree, file):
    ...     tree.children[0].value = tree.children[0].value.upper()
    >>> chain = TransformerChain([shout])
    >>> chain.run(u("root", [u("text", "hi")]), VFile()).children[0].value
    'HI'

"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Sequence
from typing import Any, Callable, Optional, Union

from syntaxflow.ast.nodes import Node
from syntaxflow.exceptions import AsyncTransformerError, TransformError
from syntaxflow.progress import ProgressCallback, emit_progress
from syntaxflow.vfile import VFile

logger = logging.getLogger(__name__)

NextCallback = Callable[..., None]
"""``next(error=None, tree=None)`` handed to callback-style transformers."""

Transformer = Callable[..., Union[None, Node, BaseException, Awaitable[Any]]]
"""A per-run plugin function: ``(tree, file)`` or ``(tree, file, next)``."""

ChainCallback = Callable[[Optional[BaseException], Optional[Node], VFile], None]
"""Completion callback of a chain run: ``(error, tree, file)``."""


def transformer_name(transformer: Callable[..., Any]) -> str:
    """Return a readable name for ``transformer`` for logs and errors."""
    name = getattr(transformer, "__qualname__", None) or getattr(transformer, "__name__", None)
    return name or type(transformer).__name__


def accepts_next(transformer: Callable[..., Any]) -> bool:
    """Return True if ``transformer`` takes a third positional ``next`` parameter.

    ``*args`` does not count: only explicitly declared positional
    parameters opt a transformer into the callback style.

    """
    try:
        signature = inspect.signature(transformer)
    except (TypeError, ValueError):
        return False
    positional = [
        p
        for p in signature.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    return len(positional) >= 3


class Completion:
    """Single-assignment result slot for one transformer step.

    A completion starts pending and is resolved exactly once with
    ``(error, tree)``. Callbacks added before resolution run when it resolves;
    callbacks added afterwards run immediately. Exceptions raised by callbacks
    propagate to whoever resolved the completion.

    Parameters
    ----------
    label : str
        Name of the transformer this step belongs to

    """

    def __init__(self, label: str):
        """Create a pending completion."""
        self.label = label
        self.error: Optional[BaseException] = None
        self.tree: Optional[Node] = None
        self._done = False
        self._abandoned = False
        self._callbacks: list[Callable[[Completion], None]] = []
        self._abandon_callbacks: list[Callable[[], Any]] = []

    @property
    def done(self) -> bool:
        """Whether the step has resolved."""
        return self._done

    @property
    def abandoned(self) -> bool:
        """Whether the chain stopped waiting for this step."""
        return self._abandoned

    def resolve(self, error: Optional[BaseException] = None, tree: Optional[Node] = None) -> None:
        """Resolve the step with an error or an optional replacement tree.

        Raises
        ------
        TransformError
            If the step was already resolved

        """
        if self._abandoned:
            logger.warning(f"Ignoring late resolution of abandoned transformer '{self.label}'")
            return
        if self._done:
            raise TransformError(f"Transformer '{self.label}' resolved more than once", transformer_name=self.label)

        self.error = error
        self.tree = tree
        self._done = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(self)

    def add_done_callback(self, callback: Callable[[Completion], None]) -> None:
        """Call ``callback(completion)`` once the step resolves."""
        if self._done:
            callback(self)
        else:
            self._callbacks.append(callback)

    def add_abandon_callback(self, callback: Callable[[], Any]) -> None:
        """Call ``callback()`` if the step is abandoned while pending."""
        self._abandon_callbacks.append(callback)

    def abandon(self) -> None:
        """Stop waiting for a pending step; later resolutions are ignored."""
        if self._done or self._abandoned:
            return
        self._abandoned = True
        self._callbacks.clear()
        for callback in self._abandon_callbacks:
            callback()


class TransformerChain:
    """Run an ordered sequence of transformers over a tree and file.

    Parameters
    ----------
    transformers : sequence of callable
        Transformers in execution order
    progress_callback : ProgressCallback, optional
        Receives an ``item_done`` event after each transformer succeeds

    """

    def __init__(self, transformers: Sequence[Transformer], progress_callback: Optional[ProgressCallback] = None):
        """Snapshot the transformers and their calling conventions."""
        self._steps = [(t, transformer_name(t), accepts_next(t)) for t in transformers]
        self.progress_callback = progress_callback
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def __len__(self) -> int:
        """Return the number of transformers."""
        return len(self._steps)

    def run(self, tree: Node, file: VFile, done: Optional[ChainCallback] = None) -> Optional[Node]:
        """Run every transformer over ``tree``.

        Parameters
        ----------
        tree : Node
            Tree handed to the first transformer
        file : VFile
            File handed to every transformer
        done : callable, optional
            ``done(error, tree, file)``, called exactly once when the chain
            finishes. On failure ``tree`` is the tree as it stood when the
            failing transformer ran.

        Returns
        -------
        Node or None
            Without ``done``, the final tree. With ``done``, None; the result
            is only delivered through the callback.

        Raises
        ------
        Exception
            Without ``done``, the first error raised or reported by a
            transformer, unchanged
        AsyncTransformerError
            Without ``done``, if a transformer does not resolve synchronously

        """
        logger.debug(f"Running {len(self._steps)} transformer(s)")
        self._loop = _running_loop()
        if done is not None:
            self._drive(0, tree, file, done, require_sync=False)
            return None

        outcome: list[tuple[Optional[BaseException], Optional[Node]]] = []
        self._drive(0, tree, file, lambda error, result, _file: outcome.append((error, result)), require_sync=True)
        error, result = outcome[0]
        if error is not None:
            raise error
        return result

    def _drive(self, index: int, tree: Node, file: VFile, done: ChainCallback, require_sync: bool) -> None:
        while index < len(self._steps):
            name = self._steps[index][1]
            completion = self._invoke(index, tree, file)

            if not completion.done:
                if require_sync:
                    completion.abandon()
                    logger.debug(f"Transformer '{name}' did not resolve synchronously; abandoning run")
                    done(
                        AsyncTransformerError(
                            f"Transformer '{name}' resolved asynchronously but no completion callback was given; "
                            "pass a callback or use the async API",
                            transformer_name=name,
                        ),
                        tree,
                        file,
                    )
                    return
                logger.debug(f"Transformer '{name}' is pending")
                completion.add_done_callback(
                    lambda c, i=index, t=tree: self._on_loop(self._resume, c, i, t, file, done)  # type: ignore[misc]
                )
                return

            if completion.error is not None:
                self._fail(name, completion.error, tree, file, done)
                return
            tree = self._advance(index, completion, tree)
            index += 1

        logger.debug("Transformer chain complete")
        done(None, tree, file)

    def _on_loop(self, callback: Callable[..., None], *args: Any) -> None:
        """Call ``callback`` on the event loop the run started on.

        ``next`` may be called from a worker thread. Later steps still have to
        run on the starting loop so awaitable transformers can be scheduled.
        Runs started outside a loop continue on the calling thread.

        """
        loop = self._loop
        if loop is None or loop.is_closed() or _running_loop() is loop:
            callback(*args)
            return
        logger.debug("Resuming transformer chain on its event loop")
        loop.call_soon_threadsafe(callback, *args)

    def _resume(self, completion: Completion, index: int, tree: Node, file: VFile, done: ChainCallback) -> None:
        if completion.error is not None:
            self._fail(self._steps[index][1], completion.error, tree, file, done)
            return
        self._drive(index + 1, self._advance(index, completion, tree), file, done, require_sync=False)

    def _advance(self, index: int, completion: Completion, tree: Node) -> Node:
        name = self._steps[index][1]
        emit_progress(
            self.progress_callback,
            "item_done",
            f"Transformer {name} complete",
            current=index + 1,
            total=len(self._steps),
            item_type="transformer",
            transformer=name,
        )
        return completion.tree if completion.tree is not None else tree

    @staticmethod
    def _fail(name: str, error: BaseException, tree: Node, file: VFile, done: ChainCallback) -> None:
        logger.debug(f"Transformer '{name}' failed: {error!r}")
        done(error, tree, file)

    def _invoke(self, index: int, tree: Node, file: VFile) -> Completion:
        transformer, name, takes_next = self._steps[index]
        completion = Completion(name)
        logger.debug(f"Applying transformer {index + 1}/{len(self._steps)}: {name}")

        if takes_next:

            def next_(error: Any = None, new_tree: Any = None) -> None:
                completion.resolve(*_check_resolution(name, error, new_tree))

            try:
                transformer(tree, file, next_)
            except Exception as e:
                if completion.done or completion.abandoned:
                    raise
                completion.resolve(e)
            return completion

        try:
            result = transformer(tree, file)
        except Exception as e:
            completion.resolve(e)
            return completion

        if inspect.isawaitable(result):
            _schedule(completion, name, result)
        else:
            completion.resolve(*_interpret(name, result))
        return completion


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _check_resolution(name: str, error: Any, tree: Any) -> tuple[Optional[BaseException], Optional[Node]]:
    """Validate the arguments a transformer passed to ``next``."""
    if error is not None and not isinstance(error, BaseException):
        return TransformError(str(error), transformer_name=name), None
    if tree is not None and not isinstance(tree, Node):
        return (
            TransformError(
                f"Transformer '{name}' passed a {type(tree).__name__} to next() instead of a Node",
                transformer_name=name,
            ),
            None,
        )
    return error, tree


def _interpret(name: str, result: Any) -> tuple[Optional[BaseException], Optional[Node]]:
    """Interpret a transformer's (or awaited coroutine's) return value."""
    if result is None:
        return None, None
    if isinstance(result, Node):
        return None, result
    if isinstance(result, BaseException):
        return result, None
    return (
        TransformError(
            f"Transformer '{name}' returned unsupported value of type {type(result).__name__}",
            transformer_name=name,
        ),
        None,
    )


def _schedule(completion: Completion, name: str, awaitable: Awaitable[Any]) -> None:
    """Run an awaitable transformer result on the running loop."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        completion.resolve(
            AsyncTransformerError(
                f"Transformer '{name}' returned an awaitable but no asyncio event loop is running; "
                "use run_async() or process_async()",
                transformer_name=name,
            )
        )
        return

    task = asyncio.ensure_future(awaitable, loop=loop)

    def settle(finished: asyncio.Future[Any]) -> None:
        if completion.abandoned:
            return
        if finished.cancelled():
            completion.resolve(TransformError(f"Transformer '{name}' was cancelled", transformer_name=name))
            return
        error = finished.exception()
        if error is not None:
            completion.resolve(error)
            return
        result = finished.result()
        if inspect.isawaitable(result):
            completion.resolve(
                TransformError(f"Transformer '{name}' resolved to another awaitable", transformer_name=name)
            )
            return
        completion.resolve(*_interpret(name, result))

    task.add_done_callback(settle)
    completion.add_abandon_callback(task.cancel)


__all__ = [
    "Completion",
    "TransformerChain",
    "Transformer",
    "NextCallback",
    "ChainCallback",
    "accepts_next",
    "transformer_name",
]
