#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the transformer chain and its completion primitive."""

import asyncio
import logging
import sys

import pytest
from utils import ProgressTracker, recording_attacher, text_of

from syntaxflow import VFile, u
from syntaxflow.exceptions import AsyncTransformerError, TransformError
from syntaxflow.transforms import Completion, TransformerChain, accepts_next, transformer_name


def make_tree():
    return u("root", [u("text", "hello")])


@pytest.mark.unit
class TestCompletion:
    """Tests for the single-assignment result slot."""

    def test_resolve_runs_callbacks(self):
        """Test callbacks added before resolution run once resolved."""
        completion = Completion("step")
        seen = []
        completion.add_done_callback(lambda c: seen.append((c.error, c.tree)))
        assert not completion.done
        tree = make_tree()
        completion.resolve(None, tree)
        assert completion.done
        assert seen == [(None, tree)]

    def test_callback_after_resolution_runs_immediately(self):
        """Test late callbacks run right away."""
        completion = Completion("step")
        error = ValueError("x")
        completion.resolve(error)
        seen = []
        completion.add_done_callback(lambda c: seen.append(c.error))
        assert seen == [error]

    def test_double_resolution_rejected(self):
        """Test a second resolution raises TransformError."""
        completion = Completion("step")
        completion.resolve()
        with pytest.raises(TransformError, match="'step' resolved more than once"):
            completion.resolve()

    def test_abandon(self, caplog):
        """Test an abandoned completion ignores later resolutions."""
        completion = Completion("slow")
        cancelled = []
        seen = []
        completion.add_done_callback(lambda c: seen.append(c))
        completion.add_abandon_callback(lambda: cancelled.append(True))
        completion.abandon()
        assert completion.abandoned
        assert cancelled == [True]

        with caplog.at_level(logging.WARNING, logger="syntaxflow.transforms.chain"):
            completion.resolve(None, make_tree())
        assert seen == []
        assert not completion.done
        assert "late resolution of abandoned transformer 'slow'" in caplog.text

    def test_abandon_after_resolution_is_noop(self):
        """Test abandoning a resolved completion does nothing."""
        completion = Completion("step")
        completion.resolve()
        completion.add_abandon_callback(lambda: pytest.fail("should not run"))
        completion.abandon()
        assert not completion.abandoned


@pytest.mark.unit
class TestCallingConvention:
    """Tests for transformer signature detection."""

    def test_two_parameters(self):
        """Test (tree, file) transformers do not get next."""
        assert not accepts_next(lambda tree, file: None)

    def test_three_parameters(self):
        """Test (tree, file, next) transformers get next."""
        assert accepts_next(lambda tree, file, next: None)

    def test_var_args_do_not_count(self):
        """Test *args does not opt into the callback style."""
        assert not accepts_next(lambda tree, *args: None)

    def test_keyword_only_does_not_count(self):
        """Test keyword-only parameters do not opt in."""
        assert not accepts_next(lambda tree, file, *, next=None: None)

    def test_callable_object(self):
        """Test callable instances are inspected through __call__."""

        class Step:
            def __call__(self, tree, file, done):
                done()

        assert accepts_next(Step())

    def test_uninspectable_builtin(self):
        """Test builtins without a signature use the plain style."""
        assert accepts_next(print) is False

    def test_transformer_name(self):
        """Test readable names for logs."""

        def my_step(tree, file):
            pass

        class Step:
            def __call__(self, tree, file):
                pass

        assert transformer_name(my_step).endswith("my_step")
        assert transformer_name(Step()) == "Step"


@pytest.mark.unit
class TestSynchronousChain:
    """Tests for chains whose transformers resolve synchronously."""

    def test_empty_chain(self):
        """Test an empty chain returns the same tree."""
        tree = make_tree()
        assert TransformerChain([]).run(tree, VFile()) is tree
        assert len(TransformerChain([])) == 0

    def test_mutation_in_place(self):
        """Test returning None keeps the mutated tree."""

        def shout(tree, file):
            tree.children[0].value = tree.children[0].value.upper()

        tree = make_tree()
        result = TransformerChain([shout]).run(tree, VFile())
        assert result is tree
        assert text_of(result) == "HELLO"

    def test_replacement_tree(self):
        """Test returning a node replaces the tree for later steps."""
        replacement = u("root", [u("text", "bye")])
        seen = []
        chain = TransformerChain([lambda tree, file: replacement, lambda tree, file: seen.append(tree)])
        assert chain.run(make_tree(), VFile()) is replacement
        assert seen == [replacement]

    def test_order(self):
        """Test transformers run in the given order."""
        calls = []
        chain = TransformerChain([recording_attacher(calls, label)(None, None) for label in "abc"])
        chain.run(make_tree(), VFile())
        assert calls == ["a", "b", "c"]

    def test_raise_stops_chain(self):
        """Test a raising transformer halts the chain with its own error."""
        error = ValueError("boom")
        calls = []

        def fail(tree, file):
            raise error

        chain = TransformerChain([lambda t, f: calls.append(1), fail, lambda t, f: calls.append(3)])
        with pytest.raises(ValueError) as exc_info:
            chain.run(make_tree(), VFile())
        assert exc_info.value is error
        assert calls == [1]

    def test_returned_exception_fails(self):
        """Test returning an exception instance fails the chain."""
        error = RuntimeError("returned")
        with pytest.raises(RuntimeError) as exc_info:
            TransformerChain([lambda t, f: error]).run(make_tree(), VFile())
        assert exc_info.value is error

    def test_unsupported_return_value(self):
        """Test returning something else is a protocol violation."""

        def bad(tree, file):
            return "text"

        with pytest.raises(TransformError, match="unsupported value of type str") as exc_info:
            TransformerChain([bad]).run(make_tree(), VFile())
        assert exc_info.value.transformer_name.endswith("bad")

    def test_file_messages_visible(self):
        """Test transformers share the file."""
        file = VFile()

        def note(tree, file):
            file.message("note")

        TransformerChain([note, lambda t, f: f.data.update(n=len(f.messages))]).run(make_tree(), file)
        assert file.data["n"] == 1

    def test_returned_message_fails(self):
        """Test a returned file message counts as a returned exception."""
        file = VFile()
        with pytest.raises(Exception) as exc_info:
            TransformerChain([lambda t, f: f.message("lint")]).run(make_tree(), file)
        assert exc_info.value is file.messages[0]

    def test_long_chain_does_not_recurse(self):
        """Test a chain longer than the recursion limit runs."""
        count = sys.getrecursionlimit() + 100
        calls = []
        TransformerChain([lambda t, f: calls.append(1)] * count).run(make_tree(), VFile())
        assert len(calls) == count

    def test_long_next_chain_does_not_recurse(self):
        """Test synchronous next() calls do not grow the stack."""
        count = sys.getrecursionlimit() + 100
        TransformerChain([lambda t, f, next: next()] * count).run(make_tree(), VFile())

    def test_progress_events(self):
        """Test an item_done event per transformer."""
        tracker = ProgressTracker()

        def first(tree, file):
            pass

        def second(tree, file):
            pass

        TransformerChain([first, second], tracker.callback).run(make_tree(), VFile())
        events = tracker.get_events_by_type("item_done")
        assert [(e.current, e.total) for e in events] == [(1, 2), (2, 2)]
        assert events[0].metadata["item_type"] == "transformer"
        assert events[1].metadata["transformer"].endswith("second")


@pytest.mark.unit
class TestNextCallback:
    """Tests for callback-style transformers."""

    def test_next_without_arguments(self):
        """Test next() advances with the same tree."""
        tree = make_tree()
        assert TransformerChain([lambda t, f, next: next()]).run(tree, VFile()) is tree

    def test_next_with_tree(self):
        """Test next(None, tree) replaces the tree."""
        replacement = u("root", [])
        result = TransformerChain([lambda t, f, next: next(None, replacement)]).run(make_tree(), VFile())
        assert result is replacement

    def test_next_with_error(self):
        """Test next(error) fails with that error."""
        error = KeyError("missing")
        calls = []
        chain = TransformerChain([lambda t, f, next: next(error), lambda t, f: calls.append(1)])
        with pytest.raises(KeyError) as exc_info:
            chain.run(make_tree(), VFile())
        assert exc_info.value is error
        assert calls == []

    def test_next_with_message_string(self):
        """Test a non-exception error is turned into a TransformError."""
        with pytest.raises(TransformError, match="^boom$"):
            TransformerChain([lambda t, f, next: next("boom")]).run(make_tree(), VFile())

    def test_next_with_non_node_tree(self):
        """Test a tree that is not a node is rejected."""
        with pytest.raises(TransformError, match="passed a dict to next"):
            TransformerChain([lambda t, f, next: next(None, {"type": "root"})]).run(make_tree(), VFile())

    def test_raise_before_next(self):
        """Test raising without calling next fails the chain."""

        def fail(tree, file, next):
            raise ValueError("early")

        with pytest.raises(ValueError, match="early"):
            TransformerChain([fail]).run(make_tree(), VFile())

    def test_next_called_twice(self):
        """Test a second next() raises at the caller."""

        def twice(tree, file, next):
            next()
            next()

        with pytest.raises(TransformError, match="resolved more than once"):
            TransformerChain([twice]).run(make_tree(), VFile())

    def test_return_value_ignored_with_next(self):
        """Test callback-style transformers resolve only through next."""
        tree = make_tree()

        def step(t, f, next):
            next()
            return "ignored"

        assert TransformerChain([step]).run(tree, VFile()) is tree


@pytest.mark.unit
class TestPendingTransformers:
    """Tests for transformers that resolve later."""

    def test_pending_without_callback_fails_fast(self):
        """Test a pending transformer without a done callback is a configuration error."""
        calls = []
        chain = TransformerChain([lambda t, f, next: None, lambda t, f: calls.append(1)])
        with pytest.raises(AsyncTransformerError, match="no completion callback") as exc_info:
            chain.run(make_tree(), VFile())
        assert exc_info.value.transformer_name.endswith("<lambda>")
        assert calls == []

    def test_late_next_after_abandon_is_ignored(self):
        """Test calling a saved next after the chain gave up does nothing."""
        saved = []
        chain = TransformerChain([lambda t, f, next: saved.append(next)])
        with pytest.raises(AsyncTransformerError):
            chain.run(make_tree(), VFile())
        saved[0]()

    def test_deferred_next_with_callback(self):
        """Test the chain resumes when next is called later."""
        saved = []
        results = []
        calls = []
        chain = TransformerChain(
            [
                lambda t, f, next: saved.append(next),
                lambda t, f: calls.append("after"),
            ]
        )
        tree = make_tree()
        assert chain.run(tree, VFile(), lambda error, result, file: results.append((error, result))) is None
        assert results == [] and calls == []

        saved[0]()
        assert calls == ["after"]
        assert results == [(None, tree)]

    def test_deferred_error_reports_tree_at_failure(self):
        """Test the done callback gets the tree as it stood when the step failed."""
        saved = []
        results = []
        replacement = u("root", [u("text", "replaced")])
        chain = TransformerChain([lambda t, f: replacement, lambda t, f, next: saved.append(next)])
        chain.run(make_tree(), VFile(), lambda error, result, file: results.append((error, result)))
        error = ValueError("boom")
        saved[0](error)
        assert results == [(error, replacement)]

    def test_awaitable_without_loop(self):
        """Test returning a coroutine outside a running loop."""

        async def step(tree, file):
            return None

        with pytest.raises(AsyncTransformerError, match="no asyncio event loop is running"):
            TransformerChain([step]).run(make_tree(), VFile())

    def test_coroutine_transformer_in_loop(self):
        """Test coroutine transformers run on the running loop."""
        replacement = u("root", [u("text", "async")])

        async def step(tree, file):
            await asyncio.sleep(0)
            return replacement

        async def main():
            loop = asyncio.get_running_loop()
            future = loop.create_future()
            TransformerChain([step]).run(
                make_tree(), VFile(), lambda error, result, file: future.set_result((error, result))
            )
            return await future

        assert asyncio.run(main()) == (None, replacement)

    def test_coroutine_error_in_loop(self):
        """Test errors raised by coroutine transformers fail the chain."""
        error = ValueError("async boom")

        async def step(tree, file):
            await asyncio.sleep(0)
            raise error

        async def main():
            loop = asyncio.get_running_loop()
            future = loop.create_future()
            TransformerChain([step, lambda t, f: pytest.fail("must not run")]).run(
                make_tree(), VFile(), lambda e, result, file: future.set_result(e)
            )
            return await future

        assert asyncio.run(main()) is error

    def test_pending_coroutine_without_callback_is_cancelled(self):
        """Test a scheduled coroutine is cancelled when the chain cannot wait."""
        started = []

        async def step(tree, file):
            started.append(True)
            await asyncio.sleep(10)

        async def main():
            with pytest.raises(AsyncTransformerError):
                TransformerChain([step]).run(make_tree(), VFile())
            await asyncio.sleep(0)
            assert started == []

        asyncio.run(main())
