# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Resdetect data models."""

from __future__ import annotations

from resdetect.models.attribute_value import AttributeValue, ValueType, attributes_to_map, unwrap_attribute
from resdetect.models.resource import AttributeMap, Resource

__all__ = [
    "AttributeMap",
    "AttributeValue",
    "Resource",
    "ValueType",
    "attributes_to_map",
    "unwrap_attribute",
]
