"""Logging setup for applications embedding syntaxflow.

Library modules only create ``logging.getLogger(__name__)`` loggers under the
``syntaxflow`` namespace and never install handlers. Hosts that want to see
registration, pipeline and chain diagnostics call :func:`configure_logging`
once.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "syntaxflow"


def resolve_level(log_level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value.

    Unknown names fall back to ``logging.INFO``.
    """
    if isinstance(log_level, int):
        return log_level
    resolved = logging.getLevelName(str(log_level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    rich_output: bool = False,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """Attach handlers to the syntaxflow logger.

    Calling this again replaces the handlers installed by the previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO")
    log_file : str, optional
        Path of a file that receives a copy of every record
    trace_mode : bool, default False
        Include timestamps and logger names, for following a chain run
    rich_output : bool, default False
        Render console records with ``rich`` instead of plain text
    logger_name : str, default "syntaxflow"
        Logger to configure; pass ``""`` for the root logger

    Returns
    -------
    logging.Logger
        The configured logger

    """
    level = resolve_level(log_level)

    target = logging.getLogger(logger_name)
    target.setLevel(level)
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    formatter = logging.Formatter(format_str, datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None)

    console_handler: logging.Handler
    if rich_output:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=trace_mode,
            show_path=trace_mode,
            markup=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    target.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            target.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            target.addHandler(file_handler)
            target.info("Logging to file: %s", log_file)

    # handlers on the package logger; records should not repeat on the root
    target.propagate = logger_name == ""
    return target


__all__ = ["configure_logging", "resolve_level", "PACKAGE_LOGGER"]
