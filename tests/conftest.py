"""Pytest configuration and shared fixtures for syntaxflow test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os

import pytest
from utils import ConcatCompiler, ProgressTracker, WrapParser

from syntaxflow import Processor, VFile, u
from syntaxflow.transforms import plugin_catalog

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "property: Property-based tests using Hypothesis")


@pytest.fixture(autouse=True)
def reset_plugin_catalog():
    """Give every test a catalog holding only the built-in plugins."""
    plugin_catalog.clear()
    yield
    plugin_catalog.clear()


@pytest.fixture(autouse=True)
def reset_compiled_log():
    """Forget outputs recorded by the test compiler."""
    ConcatCompiler.compiled.clear()
    yield
    ConcatCompiler.compiled.clear()


@pytest.fixture
def restore_package_logger():
    """Undo handler changes made to the ``syntaxflow`` logger."""
    package_logger = logging.getLogger("syntaxflow")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield package_logger
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def processor() -> Processor:
    """Provide a processor with the minimal wrap/concat grammar.

    Returns
    -------
    Processor
        Processor named ``test`` with no plugins attached.

    """
    return Processor("test", WrapParser, ConcatCompiler)


@pytest.fixture
def tracker() -> ProgressTracker:
    """Provide a fresh progress event recorder."""
    return ProgressTracker()


@pytest.fixture
def sample_tree():
    """Provide a small tree with nested parents, literals and a void node.

    Returns
    -------
    Node
        ``root`` holding two paragraphs, a code literal and a break.

    """
    return u(
        "root",
        [
            u("paragraph", [u("text", "Hello "), u("emphasis", [u("text", "world")])]),
            u("code", "print('hi')"),
            u("thematic-break"),
            u("paragraph", [u("text", "Bye")]),
        ],
    )


@pytest.fixture
def sample_text() -> str:
    """Provide sample plain text with front matter and several paragraphs.

    Returns
    -------
    str
        Standard sample text used across multiple tests.

    """
    return """---
title: Sample Document
tags:
  - demo
  - test
---

The first paragraph has a few words.

The second paragraph
spans two lines.

Last one.
"""


@pytest.fixture
def vfile(sample_text) -> VFile:
    """Provide a file holding ``sample_text``."""
    return VFile(sample_text, path="docs/sample.txt")
