#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/progress.py
"""Progress callback system for pipeline execution.

This module provides a standardized way to report pipeline progress to
embedders, for example to drive a progress bar while a long chain of
transformers runs over a large document.

Examples
--------
Basic progress tracking:

    >>> from syntaxflow.progress import ProgressEvent
    >>>
    >>> def my_progress_handler(event: ProgressEvent):
    ...     print(f"{event.event_type}: {event.message} ({event.current}/{event.total})")
    >>>
    >>> processor.process("hello", progress_callback=my_progress_handler)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from syntaxflow.constants import ProgressEventType

logger = logging.getLogger(__name__)


@dataclass
class ProgressEvent:
    """Progress event emitted while a processor runs.

    Parameters
    ----------
    event_type : ProgressEventType
        Type of progress event:

        - "started": ``process`` has begun. ``total`` is the number of stages.
        - "item_done": A stage or a single transformer has completed.
          ``metadata["item_type"]`` is ``"stage"`` or ``"transformer"``.
        - "finished": The pipeline completed successfully.
        - "error": A stage failed. ``metadata["error"]`` holds the message and
          ``metadata["stage"]`` the failing stage.

    message : str
        Human-readable description of the event
    current : int, default 0
        Current progress position
    total : int, default 0
        Total items to process. Set to 0 if unknown.
    metadata : dict, default empty
        Additional event-specific information

    Examples
    --------
    Transformer completed:
        >>> event = ProgressEvent(
        ...     "item_done",
        ...     "Transformer uppercase complete",
        ...     current=1,
        ...     total=3,
        ...     metadata={"item_type": "transformer", "transformer": "uppercase"}
        ... )

    """

    event_type: ProgressEventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation.

        Returns
        -------
        str
            Formatted event description

        """
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


# Type alias for progress callback functions
ProgressCallback = Callable[[ProgressEvent], None]
"""Type alias for progress callback functions.

A progress callback is any callable that accepts a ProgressEvent and returns None.
Callbacks should not raise exceptions as this may interrupt the pipeline.
"""


def emit_progress(
    callback: Optional[ProgressCallback],
    event_type: ProgressEventType,
    message: str,
    current: int = 0,
    total: int = 0,
    **metadata: Any,
) -> None:
    """Emit a progress event to ``callback`` if one is registered.

    Parameters
    ----------
    callback : ProgressCallback or None
        Receiver of the event; nothing happens when None
    event_type : ProgressEventType
        Type of progress event
    message : str
        Human-readable description of the event
    current : int, default 0
        Current progress position
    total : int, default 0
        Total items to process
    **metadata
        Additional event-specific information

    Notes
    -----
    If the callback raises an exception, it is logged and the pipeline
    continues.

    """
    if callback is None:
        return

    try:
        callback(ProgressEvent(event_type, message, current=current, total=total, metadata=metadata))
    except Exception as e:
        logger.warning(f"Progress callback failed: {e}", exc_info=True)


__all__ = ["ProgressEvent", "ProgressCallback", "emit_progress"]
