# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Attribute values - the typed payload of every resource attribute.

An :class:`AttributeValue` is a closed tagged union over the kinds a
telemetry attribute may hold:

- scalars: bool, int64, double, string, bytes
- containers: slice (ordered sequence of values) and map (string keys)
- empty (no value)

Values are immutable.  Slices are stored as tuples and maps as read-only
mappings, so a value can be shared between resources without copying.

For logging and inspection, :func:`unwrap_attribute` converts a value into
plain Python (``bool``/``int``/``float``/``str``/``list``/``dict``/``None``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueType(str, Enum):
    """Kind of value held by an :class:`AttributeValue`."""

    EMPTY = "empty"
    BOOL = "bool"
    INT = "int"
    DOUBLE = "double"
    STR = "str"
    BYTES = "bytes"
    SLICE = "slice"
    MAP = "map"


@dataclass(frozen=True)
class AttributeValue:
    """A single typed attribute value.

    Build values through the ``of_*`` constructors or :meth:`from_python`
    rather than the raw dataclass constructor; they enforce the invariants
    of each variant (int64 range, immutable containers).
    """

    type: ValueType
    value: Any = None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> AttributeValue:
        return cls(ValueType.EMPTY, None)

    @classmethod
    def of_bool(cls, value: bool) -> AttributeValue:
        return cls(ValueType.BOOL, bool(value))

    @classmethod
    def of_int(cls, value: int) -> AttributeValue:
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"integer attribute out of int64 range: {value}")
        return cls(ValueType.INT, int(value))

    @classmethod
    def of_double(cls, value: float) -> AttributeValue:
        return cls(ValueType.DOUBLE, float(value))

    @classmethod
    def of_str(cls, value: str) -> AttributeValue:
        return cls(ValueType.STR, str(value))

    @classmethod
    def of_bytes(cls, value: bytes) -> AttributeValue:
        return cls(ValueType.BYTES, bytes(value))

    @classmethod
    def of_slice(cls, values: Iterable[Any]) -> AttributeValue:
        items: Tuple[AttributeValue, ...] = tuple(cls.from_python(v) for v in values)
        return cls(ValueType.SLICE, items)

    @classmethod
    def of_map(cls, values: Mapping[str, Any]) -> AttributeValue:
        items: Dict[str, AttributeValue] = {}
        for key, val in values.items():
            if not isinstance(key, str):
                raise TypeError(f"map attribute keys must be str, got {type(key).__name__}")
            items[key] = cls.from_python(val)
        return cls(ValueType.MAP, MappingProxyType(items))

    @classmethod
    def from_python(cls, obj: Any) -> AttributeValue:
        """Wrap a plain Python value.

        ``bool`` is checked before ``int`` since it is an ``int`` subclass.

        Raises:
            TypeError: If *obj* has no attribute representation.
            ValueError: If an integer does not fit in int64.
        """
        if isinstance(obj, AttributeValue):
            return obj
        if obj is None:
            return cls.empty()
        if isinstance(obj, bool):
            return cls.of_bool(obj)
        if isinstance(obj, int):
            return cls.of_int(obj)
        if isinstance(obj, float):
            return cls.of_double(obj)
        if isinstance(obj, str):
            return cls.of_str(obj)
        if isinstance(obj, (bytes, bytearray)):
            return cls.of_bytes(obj)
        if isinstance(obj, (list, tuple)):
            return cls.of_slice(obj)
        if isinstance(obj, Mapping):
            return cls.of_map(obj)
        raise TypeError(f"unsupported attribute value type: {type(obj).__name__}")

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def to_inspectable(self) -> Any:
        return unwrap_attribute(self)

    def __repr__(self) -> str:
        return f"AttributeValue({self.type.value}, {self.value!r})"


def unwrap_attribute(value: AttributeValue) -> Any:
    """Convert *value* into plain Python, recursing into slices and maps.

    Empty and opaque (bytes) values become ``None``.
    """
    kind = value.type
    if kind is ValueType.BOOL:
        return value.value
    if kind is ValueType.INT:
        return value.value
    if kind is ValueType.DOUBLE:
        return value.value
    if kind is ValueType.STR:
        return value.value
    if kind is ValueType.SLICE:
        return _unwrap_slice(value.value)
    if kind is ValueType.MAP:
        return attributes_to_map(value.value)
    # EMPTY, BYTES
    return None


def _unwrap_slice(values: Iterable[AttributeValue]) -> List[Any]:
    return [unwrap_attribute(v) for v in values]


def attributes_to_map(attributes: Mapping[str, AttributeValue]) -> Dict[str, Any]:
    """Unwrap every value of an attribute mapping, preserving key order."""
    return {key: unwrap_attribute(val) for key, val in attributes.items()}


__all__ = [
    "AttributeValue",
    "ValueType",
    "attributes_to_map",
    "unwrap_attribute",
]
