# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the attribute value model."""

from __future__ import annotations

import pytest

from resdetect.models.attribute_value import (
    AttributeValue,
    ValueType,
    attributes_to_map,
    unwrap_attribute,
)


class TestFromPython:
    """Tests for AttributeValue.from_python dispatch."""

    def test_bool_is_not_int(self):
        assert AttributeValue.from_python(True).type is ValueType.BOOL
        assert AttributeValue.from_python(1).type is ValueType.INT

    def test_scalars(self):
        assert AttributeValue.from_python(1.5).type is ValueType.DOUBLE
        assert AttributeValue.from_python("x").type is ValueType.STR
        assert AttributeValue.from_python(b"\x00").type is ValueType.BYTES
        assert AttributeValue.from_python(None).type is ValueType.EMPTY

    def test_containers(self):
        assert AttributeValue.from_python([1, 2]).type is ValueType.SLICE
        assert AttributeValue.from_python((1, 2)).type is ValueType.SLICE
        assert AttributeValue.from_python({"a": 1}).type is ValueType.MAP

    def test_passthrough(self):
        value = AttributeValue.of_str("x")
        assert AttributeValue.from_python(value) is value

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            AttributeValue.from_python(object())

    def test_int64_range_enforced(self):
        AttributeValue.of_int(2**63 - 1)
        AttributeValue.of_int(-(2**63))
        with pytest.raises(ValueError):
            AttributeValue.of_int(2**63)

    def test_map_keys_must_be_str(self):
        with pytest.raises(TypeError):
            AttributeValue.of_map({1: "a"})

    def test_values_are_immutable(self):
        slice_value = AttributeValue.of_slice([1, 2])
        map_value = AttributeValue.of_map({"a": 1})
        assert isinstance(slice_value.value, tuple)
        with pytest.raises(TypeError):
            map_value.value["b"] = AttributeValue.of_int(2)

    def test_equality(self):
        assert AttributeValue.from_python({"a": [1, "x"]}) == AttributeValue.from_python({"a": [1, "x"]})
        assert AttributeValue.of_int(1) != AttributeValue.of_double(1.0)


class TestUnwrapAttribute:
    """Tests for conversion to plain inspectable Python."""

    def test_scalars_unchanged(self):
        assert unwrap_attribute(AttributeValue.of_bool(False)) is False
        assert unwrap_attribute(AttributeValue.of_int(2**63 - 1)) == 2**63 - 1
        assert unwrap_attribute(AttributeValue.of_double(0.1)) == 0.1
        assert unwrap_attribute(AttributeValue.of_str("web-1")) == "web-1"

    def test_empty_and_bytes_become_none(self):
        assert unwrap_attribute(AttributeValue.empty()) is None
        assert unwrap_attribute(AttributeValue.of_bytes(b"abc")) is None

    def test_nested_structures(self):
        original = {
            "ports": [80, 443],
            "labels": {"team": "core", "tier": {"level": 1, "tags": ["a", True, 2.5]}},
            "empty": [],
        }
        value = AttributeValue.from_python(original)
        assert value.to_inspectable() == original

    def test_slice_becomes_list(self):
        assert unwrap_attribute(AttributeValue.of_slice((1, 2))) == [1, 2]

    def test_map_key_order_preserved(self):
        value = AttributeValue.of_map({"z": 1, "a": 2, "m": 3})
        assert list(unwrap_attribute(value)) == ["z", "a", "m"]

    def test_deep_nesting(self):
        obj = "leaf"
        for _ in range(200):
            obj = [obj]
        assert AttributeValue.from_python(obj).to_inspectable() == obj

    def test_attributes_to_map(self):
        attrs = {"a": AttributeValue.of_int(1), "b": AttributeValue.of_bytes(b"x")}
        assert attributes_to_map(attrs) == {"a": 1, "b": None}
