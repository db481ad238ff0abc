# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Merge primitives for detected resources.

The provider folds detector outputs into one accumulator with
``override_existing=False``, so the detector configured first wins for any
key several detectors produce.
"""

from __future__ import annotations

from typing import AbstractSet, List

from resdetect.models.resource import AttributeMap, Resource


def merge_schema_url(current: str, incoming: str) -> str:
    """Reconcile two schema URLs.

    The first non-empty URL is sticky.  Differing non-empty URLs keep
    *current*: attributes are not translated between schema versions.
    """
    if not current:
        return incoming
    if not incoming:
        return current
    if current == incoming:
        return current
    return current


def is_empty_resource(resource: Resource) -> bool:
    return len(resource.attributes) == 0


def merge_resource(into: Resource, from_: Resource, override_existing: bool = False) -> None:
    """Copy attributes of *from_* into *into*.

    With ``override_existing`` every key of *from_* is written; otherwise only
    keys absent from *into* are.  Schema URLs are left alone, see
    :func:`merge_schema_url`.
    """
    if is_empty_resource(from_):
        return

    target = into.attributes
    for key, value in from_.attributes.items():
        if override_existing or key not in target:
            target.put(key, value)


def filter_attributes(attributes: AttributeMap, attributes_to_keep: AbstractSet[str]) -> List[str]:
    """Drop every attribute not in *attributes_to_keep*.

    An empty allow-list keeps everything.

    Returns:
        Dropped keys in iteration order.
    """
    if not attributes_to_keep:
        return []
    return attributes.remove_if(lambda key, _value: key not in attributes_to_keep)


__all__ = [
    "filter_attributes",
    "is_empty_resource",
    "merge_resource",
    "merge_schema_url",
]
