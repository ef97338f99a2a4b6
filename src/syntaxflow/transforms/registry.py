#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/transforms/registry.py
"""Plugin registry: the ordered record of a processor's attached plugins.

Each ``Processor.use`` call appends an :class:`Attachment` (the attacher and
the options it was given) and, when the attacher produced one, a transformer.
Registration order is execution order; nothing is ever removed or reordered.

An attacher's return value is read as an :class:`AttachResult`, which says
whether subsequent chaining continues on the same processor or on a new one:

- ``None``: same processor, no transformer
- a callable: same processor, that callable is the transformer
- a ``Processor``: continue on that processor, no transformer
- an ``AttachResult``: exactly what it states

"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from syntaxflow.exceptions import ValidationError
from syntaxflow.transforms.chain import Transformer, transformer_name

if TYPE_CHECKING:
    from syntaxflow.processor import Processor

logger = logging.getLogger(__name__)

Attacher = Callable[["Processor", Any], Any]
"""A plugin's registration-time function: ``(processor, options)``."""


@dataclass(frozen=True)
class Attachment:
    """Record of one attacher registration.

    Parameters
    ----------
    attacher : callable
        The attacher that was invoked
    options : Any
        The options it was invoked with, opaque to the engine

    """

    attacher: Attacher
    options: Any = None

    @property
    def name(self) -> str:
        """Readable name of the attacher."""
        return transformer_name(self.attacher)


@dataclass(frozen=True)
class AttachResult:
    """Tagged outcome of running an attacher.

    Parameters
    ----------
    processor : Processor, optional
        The processor subsequent chaining continues on. None means the
        processor the attacher was called with.
    transformer : callable, optional
        Transformer to append to the continuing processor's chain

    Examples
    --------
    An attacher that isolates its configuration in a clone:

        >>> def isolated(processor, options):
        ...     clone = processor.clone()
        ...     clone.data["isolated"] = True
        ...     return AttachResult.new_instance(clone, transformer=lambda tree, file: None)

    """

    processor: Optional[Processor] = None
    transformer: Optional[Transformer] = None

    @classmethod
    def same_instance(cls, transformer: Optional[Transformer] = None) -> AttachResult:
        """Continue on the same processor, optionally adding ``transformer``."""
        return cls(processor=None, transformer=transformer)

    @classmethod
    def new_instance(cls, processor: Processor, transformer: Optional[Transformer] = None) -> AttachResult:
        """Continue on ``processor``, optionally adding ``transformer`` to it."""
        return cls(processor=processor, transformer=transformer)

    @property
    def is_new_instance(self) -> bool:
        """Whether chaining continues on a different processor."""
        return self.processor is not None

    @classmethod
    def from_return(cls, value: Any, attacher_name: str = "attacher") -> AttachResult:
        """Interpret an attacher's return value.

        Raises
        ------
        ValidationError
            If the value is none of the supported outcomes

        """
        from syntaxflow.processor import Processor

        if value is None:
            return cls.same_instance()
        if isinstance(value, AttachResult):
            if value.processor is not None and not isinstance(value.processor, Processor):
                raise ValidationError(
                    f"Attacher '{attacher_name}' returned an AttachResult whose processor is a "
                    f"{type(value.processor).__name__}",
                    parameter_name="processor",
                    parameter_value=value.processor,
                )
            if value.transformer is not None and not callable(value.transformer):
                raise ValidationError(
                    f"Attacher '{attacher_name}' returned an AttachResult with a non-callable transformer",
                    parameter_name="transformer",
                    parameter_value=value.transformer,
                )
            return value
        if isinstance(value, Processor):
            return cls.new_instance(value)
        if callable(value):
            return cls.same_instance(value)
        raise ValidationError(
            f"Attacher '{attacher_name}' returned unsupported value of type {type(value).__name__}; "
            "expected None, a transformer, a Processor or an AttachResult",
            parameter_name="attacher",
            parameter_value=value,
        )


class PluginRegistry:
    """Append-only, ordered record of attachments and transformers.

    Parameters
    ----------
    attachments : iterable of Attachment, optional
        Initial attachments, in order
    transformers : iterable of callable, optional
        Initial transformers, in order

    """

    def __init__(self, attachments: Iterable[Attachment] = (), transformers: Iterable[Transformer] = ()):
        """Initialize the registry."""
        self._attachments: list[Attachment] = list(attachments)
        self._transformers: list[Transformer] = list(transformers)

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        """Attachments in registration order."""
        return tuple(self._attachments)

    @property
    def transformers(self) -> tuple[Transformer, ...]:
        """Transformers in execution order."""
        return tuple(self._transformers)

    def add(self, attachment: Attachment, transformer: Optional[Transformer] = None) -> None:
        """Append an attachment and, if given, its transformer."""
        self._attachments.append(attachment)
        if transformer is not None:
            self._transformers.append(transformer)
            logger.debug(f"Registered transformer from '{attachment.name}' at position {len(self._transformers)}")
        else:
            logger.debug(f"Registered attach-only plugin '{attachment.name}'")

    def copy(self) -> PluginRegistry:
        """Return an independent registry with the same entries."""
        return PluginRegistry(self._attachments, self._transformers)

    def __len__(self) -> int:
        """Return the number of attachments."""
        return len(self._attachments)


__all__ = ["Attacher", "Attachment", "AttachResult", "PluginRegistry"]
