#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/reporter.py
"""Render file diagnostics for a terminal.

Transformers report problems as messages on the file they process. This
module renders those messages with ``rich``: one table per file plus a
summary line, in the style of a linter report.

Examples
--------
    >>> from syntaxflow import VFile
    >>> from syntaxflow.reporter import format_report
    >>> file = VFile("hello", path="notes.txt")
    >>> _ = file.message("Greeting is too short", origin="style:min-length")
    >>> print(format_report([file], width=80))  # doctest: +SKIP

"""

from __future__ import annotations

import io
from collections.abc import Iterable
from typing import Optional, Union

from rich.console import Console
from rich.table import Table

from syntaxflow.vfile import VFile, VFileMessage

_SEVERITY_STYLES = {"error": "bold red", "warning": "yellow", "info": "blue"}


def summarize(files: Iterable[VFile]) -> dict[str, int]:
    """Count messages per severity across ``files``."""
    counts = {"error": 0, "warning": 0, "info": 0}
    for file in files:
        for message in file.messages:
            counts[message.severity] += 1
    return counts


def _location(message: VFileMessage) -> str:
    if message.position is not None:
        return str(message.position)
    return f"{message.line or 1}:{message.column or 1}"


def _rule(message: VFileMessage) -> str:
    if message.source and message.rule_id:
        return f"{message.source}:{message.rule_id}"
    return message.source or message.rule_id or ""


def build_table(file: VFile) -> Table:
    """Build the message table for one file."""
    table = Table(title=file.path or "<input>", title_justify="left", show_edge=False)
    table.add_column("Location", style="dim", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Message")
    table.add_column("Rule", style="cyan", no_wrap=True)

    for message in file.messages:
        severity = message.severity
        table.add_row(
            _location(message),
            f"[{_SEVERITY_STYLES[severity]}]{severity}[/]",
            message.reason,
            _rule(message),
        )
    return table


def summary_line(counts: dict[str, int]) -> str:
    """Return e.g. ``"1 error, 2 warnings"``, or ``"no issues found"``."""
    parts = []
    for severity in ("error", "warning", "info"):
        count = counts[severity]
        if count:
            label = severity if count == 1 or severity == "info" else f"{severity}s"
            parts.append(f"{count} {label}")
    return ", ".join(parts) if parts else "no issues found"


def report(files: Union[VFile, Iterable[VFile]], console: Optional[Console] = None) -> dict[str, int]:
    """Print the messages of ``files`` to ``console``.

    Files without messages are skipped.

    Parameters
    ----------
    files : VFile or iterable of VFile
        Files to report on
    console : rich.console.Console, optional
        Target console; defaults to a new console on stderr

    Returns
    -------
    dict
        Message counts per severity

    """
    file_list = [files] if isinstance(files, VFile) else list(files)
    console = console or Console(stderr=True)

    for file in file_list:
        if file.messages:
            console.print(build_table(file))
            console.print()

    counts = summarize(file_list)
    style = "bold red" if counts["error"] else ("yellow" if counts["warning"] else "green")
    console.print(f"[{style}]{summary_line(counts)}[/]")
    return counts


def format_report(files: Union[VFile, Iterable[VFile]], width: int = 100, color: bool = False) -> str:
    """Return the report of ``files`` as a string.

    Parameters
    ----------
    files : VFile or iterable of VFile
        Files to report on
    width : int, default 100
        Console width used for the table layout
    color : bool, default False
        Keep ANSI color codes in the output

    """
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, force_terminal=color, color_system="standard" if color else None)
    report(files, console=console)
    return buffer.getvalue()


__all__ = ["report", "format_report", "build_table", "summarize", "summary_line"]
