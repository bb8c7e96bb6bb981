"""Encoding of typed INFO annotations on variants and calls.

Every INFO entry is stored as a :class:`~genomicutils.models.ListValue`; a scalar is a
one-element list. Each element is a tagged :class:`~genomicutils.models.Value` so that
decoding with the wrong type fails loudly instead of silently converting.
"""

from __future__ import annotations

import dataclasses
import numbers
from collections.abc import Sequence
from typing import Dict, List, Type, TypeVar, Union

from .errors import InfoValueTypeError
from .models import ListValue, ScalarType, Value, ValueKind, Variant, VariantCall

T = TypeVar("T", int, float, str)
R = TypeVar("R", Variant, VariantCall)

_KIND_BY_TYPE: Dict[type, ValueKind] = {
    int: ValueKind.INT,
    float: ValueKind.NUMBER,
    str: ValueKind.STRING,
}


def set_values_value(x: ScalarType) -> Value:
    """Wrap a scalar in a :class:`Value` of the matching kind.

    Integral numbers (including numpy integers) become INT, other reals NUMBER, and
    strings STRING. Booleans are rejected: they are not a supported annotation type.
    """
    if isinstance(x, bool):
        raise InfoValueTypeError("bool is not a supported info value type")
    if isinstance(x, str):
        return Value(kind=ValueKind.STRING, data=x)
    if isinstance(x, numbers.Integral):
        return Value(kind=ValueKind.INT, data=int(x))
    if isinstance(x, numbers.Real):
        return Value(kind=ValueKind.NUMBER, data=float(x))
    raise InfoValueTypeError(f"Unsupported info value type: {type(x).__name__}")


def make_list_value(values: Union[ScalarType, Sequence[ScalarType]]) -> ListValue:
    """Encode a scalar or a sequence of scalars, preserving order and duplicates.

    Only lists, tuples and other non-bytes sequences are treated as containers; bytes,
    mappings, sets and None raise :class:`InfoValueTypeError`.
    """
    if isinstance(values, (str, numbers.Number)):
        return ListValue(values=(set_values_value(values),))
    if isinstance(values, (bytes, bytearray)) or not isinstance(values, Sequence):
        raise InfoValueTypeError(f"Unsupported info value type: {type(values).__name__}")
    return ListValue(values=tuple(set_values_value(v) for v in values))


def set_info_field(key: str, values: Union[ScalarType, Sequence[ScalarType]], record: R) -> R:
    """Return a copy of ``record`` with ``info[key]`` set to the encoded ``values``.

    An existing entry under ``key`` is replaced, not merged. ``record`` is not modified.
    """
    info = dict(record.info)
    info[key] = make_list_value(values)
    return dataclasses.replace(record, info=info)


def list_values(list_value: ListValue, python_type: Type[T]) -> List[T]:
    """Decode ``list_value`` into a list of ``python_type`` (int, float or str).

    Raises
    ------
    InfoValueTypeError
        If ``python_type`` is unsupported or any element was encoded as another kind.
    """
    kind = _KIND_BY_TYPE.get(python_type)
    if kind is None:
        raise InfoValueTypeError(f"Unsupported info value type: {python_type!r}")
    out: List[T] = []
    for i, v in enumerate(list_value.values):
        if v.kind is not kind:
            raise InfoValueTypeError(
                f"Info element {i} holds a {v.kind.value} value, not {kind.value}"
            )
        out.append(v.data)  # type: ignore[arg-type]
    return out


def info_values(record: Union[Variant, VariantCall], key: str, python_type: Type[T]) -> List[T]:
    """Shorthand for ``list_values(record.info[key], python_type)``."""
    return list_values(record.info[key], python_type)
