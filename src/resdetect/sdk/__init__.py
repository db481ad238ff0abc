# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Resdetect engine: context, merge, provider and configuration."""

from __future__ import annotations

from resdetect.sdk.bootstrap import detect_resource, get_config, get_provider, reset
from resdetect.sdk.config import ResourceDetectionConfig
from resdetect.sdk.context import DetectContext
from resdetect.sdk.merge import filter_attributes, is_empty_resource, merge_resource, merge_schema_url
from resdetect.sdk.once import OnceResult
from resdetect.sdk.provider import DetectionResult, ResourceProvider, ResourceProviderFactory

__all__ = [
    "DetectContext",
    "DetectionResult",
    "OnceResult",
    "ResourceDetectionConfig",
    "ResourceProvider",
    "ResourceProviderFactory",
    "detect_resource",
    "filter_attributes",
    "get_config",
    "get_provider",
    "is_empty_resource",
    "merge_resource",
    "merge_schema_url",
    "reset",
]
