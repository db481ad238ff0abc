# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Detectors and the default detector registry.

Built-in detectors (``env``, ``system``, ``process``, ``container``, ``k8s``)
need nothing beyond the standard library.  OpenTelemetry community detectors
(``aws_ec2``, ``gcp``, ``azure_vm``, ...) are registered too but only import
their package when requested; see :mod:`resdetect.resources.otel`.
"""

from __future__ import annotations

from typing import Dict

from resdetect.resources.base import (
    CreateSettings,
    Detector,
    DetectorConfig,
    DetectorFactory,
    DetectorType,
    ResourceDetectorConfig,
)
from resdetect.resources.detector import (
    create_container_detector,
    create_env_detector,
    create_k8s_detector,
    create_process_detector,
    create_system_detector,
)
from resdetect.resources.otel import OTelDetectorAdapter, community_detector_factories

BUILTIN_DETECTORS: Dict[DetectorType, DetectorFactory] = {
    "env": create_env_detector,
    "system": create_system_detector,
    "process": create_process_detector,
    "container": create_container_detector,
    "k8s": create_k8s_detector,
}


def default_detector_factories() -> Dict[DetectorType, DetectorFactory]:
    """Return a fresh registry of every known detector type."""
    factories: Dict[DetectorType, DetectorFactory] = dict(community_detector_factories())
    factories.update(BUILTIN_DETECTORS)
    return factories


__all__ = [
    "BUILTIN_DETECTORS",
    "CreateSettings",
    "Detector",
    "DetectorConfig",
    "DetectorFactory",
    "DetectorType",
    "OTelDetectorAdapter",
    "ResourceDetectorConfig",
    "default_detector_factories",
]
