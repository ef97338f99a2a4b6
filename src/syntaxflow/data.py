#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/data.py
"""Closed-variant configuration values.

Processor ``data`` and node ``data`` hold arbitrary *serializable*
configuration. Instead of an open ``Any`` bag, values are restricted to a
closed variant of JSON-compatible types, checked by :func:`validate_data`.

Examples
--------
    >>> validate_data({"settings": {"depth": 2, "tags": ["a", "b"]}})
    {'settings': {'depth': 2, 'tags': ['a', 'b']}}
    >>> validate_data({"bad": {1, 2}})
    Traceback (most recent call last):
    ...
    syntaxflow.exceptions.ValidationError: Unsupported data value at data.bad: set

"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Union

from syntaxflow.exceptions import ValidationError

DataScalar = Union[str, int, float, bool, None]
DataValue = Union[DataScalar, Mapping[str, "DataValue"], Sequence["DataValue"]]
DataMapping = dict[str, DataValue]

_SCALAR_TYPES = (str, int, float, bool, type(None))


def _validate_value(value: object, path: str) -> None:
    if isinstance(value, _SCALAR_TYPES):
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValidationError(
                    f"Data keys must be strings, got {type(key).__name__} at {path}",
                    parameter_name=path,
                    parameter_value=key,
                )
            _validate_value(item, f"{path}.{key}")
        return
    # bytes and bytearray are Sequences but not serializable configuration
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        for index, item in enumerate(value):
            _validate_value(item, f"{path}[{index}]")
        return
    raise ValidationError(
        f"Unsupported data value at {path}: {type(value).__name__}",
        parameter_name=path,
        parameter_value=value,
    )


def validate_data(data: Mapping[str, DataValue], path: str = "data") -> Mapping[str, DataValue]:
    """Validate that a mapping only contains closed-variant data values.

    Parameters
    ----------
    data : Mapping[str, DataValue]
        Mapping to validate
    path : str, default "data"
        Name used as the root of the dotted path in error messages

    Returns
    -------
    Mapping[str, DataValue]
        The same mapping, for chaining

    Raises
    ------
    ValidationError
        If ``data`` is not a mapping, has a non-string key, or holds a value
        outside the variant (sets, bytes, arbitrary objects)

    """
    if not isinstance(data, Mapping):
        raise ValidationError(
            f"{path} must be a mapping, got {type(data).__name__}",
            parameter_name=path,
            parameter_value=data,
        )
    _validate_value(data, path)
    return data


def copy_data(data: Mapping[str, DataValue]) -> DataMapping:
    """Deep-copy a data mapping into a plain dict."""
    return copy.deepcopy(dict(data))


__all__ = ["DataScalar", "DataValue", "DataMapping", "validate_data", "copy_data"]
