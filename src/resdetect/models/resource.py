# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Resource - the set of attributes describing the entity emitting telemetry.

A :class:`Resource` pairs an ordered, key-unique :class:`AttributeMap` with
the schema URL the attribute names conform to.  Detectors each produce one,
and the provider merges them into a single accumulator.

Invariant: an :class:`AttributeMap` never holds the same key twice.  Writing
an existing key replaces the value in place and keeps the key's position, so
iteration order is deterministic for logging.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from resdetect.models.attribute_value import AttributeValue, ValueType, attributes_to_map

if TYPE_CHECKING:
    from opentelemetry.sdk.resources import Resource as OTelResource

logger = logging.getLogger(__name__)

_OTEL_SCALARS = (ValueType.BOOL, ValueType.INT, ValueType.DOUBLE, ValueType.STR)


class AttributeMap:
    """Ordered ``str -> AttributeValue`` mapping with unique keys."""

    __slots__ = ("_items",)

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None) -> None:
        self._items: Dict[str, AttributeValue] = {}
        if attributes:
            for key, value in attributes.items():
                self.put(key, value)

    def put(self, key: str, value: Union[AttributeValue, Any]) -> None:
        """Insert or replace *key*; plain Python values are wrapped."""
        if not isinstance(key, str):
            raise TypeError(f"attribute keys must be str, got {type(key).__name__}")
        self._items[key] = AttributeValue.from_python(value)

    def get(self, key: str) -> Optional[AttributeValue]:
        return self._items.get(key)

    def remove(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    def remove_if(self, predicate: Callable[[str, AttributeValue], bool]) -> List[str]:
        """Remove every entry for which *predicate* is true.

        Returns:
            The removed keys, in iteration order.
        """
        removed = [key for key, value in self._items.items() if predicate(key, value)]
        for key in removed:
            del self._items[key]
        return removed

    def items(self) -> Iterator[Tuple[str, AttributeValue]]:
        return iter(list(self._items.items()))

    def keys(self) -> List[str]:
        return list(self._items)

    def copy(self) -> AttributeMap:
        clone = AttributeMap()
        clone._items = dict(self._items)
        return clone

    def to_dict(self) -> Dict[str, Any]:
        """Inspectable plain-Python form, for logging."""
        return attributes_to_map(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeMap):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"AttributeMap({self.to_dict()!r})"


class Resource:
    """Attributes plus schema URL.

    Example::

        >>> res = Resource({"host.name": "web-1"}, schema_url="https://opentelemetry.io/schemas/1.21.0")
        >>> res.attributes.get("host.name").to_inspectable()
        'web-1'
    """

    __slots__ = ("attributes", "schema_url")

    def __init__(
        self,
        attributes: Optional[Union[AttributeMap, Mapping[str, Any]]] = None,
        schema_url: str = "",
    ) -> None:
        if isinstance(attributes, AttributeMap):
            self.attributes = attributes
        else:
            self.attributes = AttributeMap(attributes)
        self.schema_url = schema_url or ""

    def copy(self) -> Resource:
        return Resource(self.attributes.copy(), self.schema_url)

    def to_dict(self) -> Dict[str, Any]:
        return self.attributes.to_dict()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self.schema_url == other.schema_url and self.attributes == other.attributes

    def __repr__(self) -> str:
        return f"Resource({self.attributes.to_dict()!r}, schema_url={self.schema_url!r})"

    # ------------------------------------------------------------------
    # OpenTelemetry SDK interop
    # ------------------------------------------------------------------

    def to_otel(self) -> OTelResource:
        """Convert to an ``opentelemetry.sdk.resources.Resource``.

        OTel attributes only carry scalars and homogeneous scalar sequences,
        so maps are flattened into dotted keys and values that cannot be
        represented (empty, bytes, nested slices) are dropped.
        """
        from opentelemetry.sdk.resources import Resource as OTelResource

        flat: Dict[str, Any] = {}
        for key, value in self.attributes.items():
            _flatten_for_otel(key, value, flat)
        return OTelResource(flat, self.schema_url or None)

    @classmethod
    def from_otel(cls, otel_resource: OTelResource) -> Resource:
        attrs = AttributeMap()
        for key, value in otel_resource.attributes.items():
            attrs.put(key, value)
        return cls(attrs, otel_resource.schema_url)


def _flatten_for_otel(key: str, value: AttributeValue, out: Dict[str, Any]) -> None:
    kind = value.type
    if kind in _OTEL_SCALARS:
        out[key] = value.value
    elif kind is ValueType.MAP:
        for sub_key, sub_value in value.value.items():
            _flatten_for_otel(f"{key}.{sub_key}", sub_value, out)
    elif kind is ValueType.SLICE:
        kinds = {item.type for item in value.value}
        if len(kinds) <= 1 and kinds <= set(_OTEL_SCALARS):
            out[key] = tuple(item.value for item in value.value)
        else:
            logger.debug("Dropping attribute %s: mixed or nested slice not representable in OTel", key)
    else:
        logger.debug("Dropping attribute %s: %s value not representable in OTel", key, kind.value)


__all__ = ["AttributeMap", "Resource"]
