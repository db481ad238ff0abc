# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Resdetect - detect, merge and cache the resource describing a process.

Quick Start::

    from resdetect import ResourceDetectionConfig, detect_resource

    result = detect_resource(ResourceDetectionConfig(detectors=["env", "system", "k8s"]))
    print(result.resource.to_dict(), result.schema_url)

Detectors run once, in configured order; the first detector to report a key
wins.  Failing detectors are logged and skipped.
"""

from __future__ import annotations

from resdetect._version import __version__

# Errors
from resdetect.errors import (
    ConfigError,
    DetectorConstructionError,
    DetectorRuntimeError,
    ResourceDetectionError,
    UnknownDetectorTypeError,
)

# Data model
from resdetect.models import AttributeMap, AttributeValue, Resource, ValueType, attributes_to_map, unwrap_attribute

# Enrichment
from resdetect.processors import ResourceEnricher

# Detectors
from resdetect.resources import CreateSettings, Detector, OTelDetectorAdapter, default_detector_factories

# Engine
from resdetect.sdk import (
    DetectContext,
    DetectionResult,
    ResourceDetectionConfig,
    ResourceProvider,
    ResourceProviderFactory,
    detect_resource,
    merge_resource,
    merge_schema_url,
)

__all__ = [
    "__version__",
    # Data model
    "AttributeMap",
    "AttributeValue",
    "Resource",
    "ValueType",
    "attributes_to_map",
    "unwrap_attribute",
    # Detectors
    "CreateSettings",
    "Detector",
    "OTelDetectorAdapter",
    "default_detector_factories",
    # Engine
    "DetectContext",
    "DetectionResult",
    "ResourceDetectionConfig",
    "ResourceProvider",
    "ResourceProviderFactory",
    "detect_resource",
    "merge_resource",
    "merge_schema_url",
    # Enrichment
    "ResourceEnricher",
    # Errors
    "ConfigError",
    "DetectorConstructionError",
    "DetectorRuntimeError",
    "ResourceDetectionError",
    "UnknownDetectorTypeError",
]
