#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/vfile.py
"""Virtual file: the document value threaded through a pipeline run.

A :class:`VFile` carries the raw input, per-processor results and an
accumulating list of diagnostics. It is created once per processing
operation and passed by reference through parse, run and stringify; it is
never copied mid-pipeline.

Several processors can share one file: each stores its results under its own
namespace, keyed by processor name.

Examples
--------
    >>> file = VFile("hello", path="docs/greeting.txt")
    >>> file.stem, file.extname
    ('greeting', '.txt')
    >>> msg = file.message("Greeting is too short", origin="style:min-length")
    >>> str(msg)
    'docs/greeting.txt:1:1: Greeting is too short'
    >>> msg.rule_id
    'min-length'

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Any, NoReturn, Optional, Union

from syntaxflow.ast.nodes import Node, Point, Position
from syntaxflow.exceptions import SyntaxflowError, ValidationError

logger = logging.getLogger(__name__)

Place = Union[Point, Position, Node, None]
Contents = Union[str, bytes, None]


class VFileMessage(SyntaxflowError):
    """A diagnostic attached to a file.

    Messages are exceptions so that :meth:`VFile.fail` can raise them; a
    transformer that fails this way halts the chain like any other error.

    Parameters
    ----------
    reason : str
        Human-readable description of the problem
    place : Point, Position, or Node, optional
        Where the problem is. A node contributes its ``position``.
    origin : str, optional
        ``"source:rule-id"`` or just a source name (typically a plugin name)
    fatal : bool or None, default False
        ``True`` for errors, ``False`` for warnings, ``None`` for info
    file : str, optional
        Path of the file the message belongs to

    Attributes
    ----------
    line, column : int or None
        Start of the place, when known
    position : Position or None
        Full span, when known
    source, rule_id : str or None
        Parsed from ``origin``

    """

    def __init__(
        self,
        reason: str,
        place: Place = None,
        origin: Optional[str] = None,
        fatal: Optional[bool] = False,
        file: Optional[str] = None,
    ):
        """Initialize the message and resolve its place and origin."""
        super().__init__(reason)
        self.reason = reason
        self.fatal = fatal
        self.file = file

        if isinstance(place, Node):
            place = place.position
        self.position: Optional[Position] = place if isinstance(place, Position) else None
        start = place.start if isinstance(place, Position) else place
        self.line: Optional[int] = start.line if start is not None else None
        self.column: Optional[int] = start.column if start is not None else None

        self.source: Optional[str] = None
        self.rule_id: Optional[str] = None
        if origin:
            if ":" in origin:
                self.source, self.rule_id = origin.split(":", 1)
            else:
                self.source = origin

    @property
    def severity(self) -> str:
        """Return ``error``, ``warning`` or ``info``."""
        if self.fatal:
            return "error"
        if self.fatal is None:
            return "info"
        return "warning"

    def __str__(self) -> str:
        """Return ``path:line:column: reason``."""
        return f"{self.file or '<input>'}:{self.line or 1}:{self.column or 1}: {self.reason}"


class VFile:
    """In-memory file with contents, namespaced results and diagnostics.

    Parameters
    ----------
    contents : str or bytes, optional
        Raw document content
    path : str, optional
        Path of the document, used in messages
    data : Mapping, optional
        Free-form plugin data (e.g. parsed front matter)

    Attributes
    ----------
    contents : str or bytes or None
        Raw input before processing; compiled output after ``process``
    data : dict
        Free-form plugin data
    messages : list of VFileMessage
        Diagnostics in the order they were reported
    history : list of str
        Every path the file has had, oldest first

    """

    def __init__(
        self,
        contents: Contents = None,
        path: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize the file."""
        self.contents: Contents = contents
        self.data: dict[str, Any] = dict(data) if data else {}
        self.messages: list[VFileMessage] = []
        self.history: list[str] = []
        self._namespaces: dict[str, dict[str, Any]] = {}
        if path is not None:
            self.path = path

    @property
    def path(self) -> Optional[str]:
        """Current path of the file, or None."""
        return self.history[-1] if self.history else None

    @path.setter
    def path(self, value: str) -> None:
        if not value:
            raise ValidationError("VFile path cannot be empty", parameter_name="path")
        if value != self.path:
            self.history.append(value)

    @property
    def basename(self) -> Optional[str]:
        """File name including extension."""
        return PurePosixPath(self.path).name if self.path else None

    @property
    def stem(self) -> Optional[str]:
        """File name without extension."""
        return PurePosixPath(self.path).stem if self.path else None

    @property
    def extname(self) -> Optional[str]:
        """Extension including the leading dot, or an empty string."""
        return PurePosixPath(self.path).suffix if self.path else None

    @property
    def dirname(self) -> Optional[str]:
        """Parent directory of the path."""
        return str(PurePosixPath(self.path).parent) if self.path else None

    def namespace(self, name: str) -> dict[str, Any]:
        """Return the result namespace of processor ``name``, creating it on demand."""
        if not name:
            raise ValidationError("Namespace name cannot be empty", parameter_name="name")
        return self._namespaces.setdefault(name, {})

    def message(self, reason: str, place: Place = None, origin: Optional[str] = None) -> VFileMessage:
        """Record a warning and return it."""
        msg = VFileMessage(reason, place, origin, fatal=False, file=self.path)
        self.messages.append(msg)
        return msg

    def info(self, reason: str, place: Place = None, origin: Optional[str] = None) -> VFileMessage:
        """Record an informational message and return it."""
        msg = VFileMessage(reason, place, origin, fatal=None, file=self.path)
        self.messages.append(msg)
        return msg

    def fail(self, reason: str, place: Place = None, origin: Optional[str] = None) -> NoReturn:
        """Record a fatal message and raise it."""
        msg = VFileMessage(reason, place, origin, fatal=True, file=self.path)
        self.messages.append(msg)
        logger.debug(f"Fatal message on {self.path or '<input>'}: {reason}")
        raise msg

    @property
    def has_failed(self) -> bool:
        """Whether any fatal message was recorded."""
        return any(msg.fatal for msg in self.messages)

    def __str__(self) -> str:
        """Return the contents as text (bytes are decoded as UTF-8)."""
        if self.contents is None:
            return ""
        if isinstance(self.contents, bytes):
            return self.contents.decode("utf-8")
        return self.contents

    def __repr__(self) -> str:
        """Return a short description of the file."""
        return f"VFile(path={self.path!r}, messages={len(self.messages)})"


def to_vfile(value: Union[VFile, Contents, Mapping[str, Any]]) -> VFile:
    """Coerce a value into a VFile.

    Parameters
    ----------
    value : VFile, str, bytes, Mapping, or None
        A VFile is returned unchanged. Strings and bytes become its contents.
        A mapping supplies ``contents``, ``path`` and ``data`` keyword arguments.

    Returns
    -------
    VFile
        The coerced file

    Raises
    ------
    ValidationError
        If the value cannot be turned into a file

    """
    if isinstance(value, VFile):
        return value
    if value is None or isinstance(value, (str, bytes)):
        return VFile(value)
    if isinstance(value, Mapping):
        unknown = set(value) - {"contents", "path", "data"}
        if unknown:
            raise ValidationError(f"Unknown VFile fields: {', '.join(sorted(unknown))}", parameter_name="value")
        return VFile(**value)
    raise ValidationError(
        f"Cannot create a VFile from {type(value).__name__}",
        parameter_name="value",
        parameter_value=value,
    )


__all__ = ["VFile", "VFileMessage", "to_vfile", "Place", "Contents"]
