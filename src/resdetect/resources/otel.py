# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Run OpenTelemetry SDK resource detectors inside the engine.

Any ``opentelemetry.sdk.resources.ResourceDetector`` can be wrapped in an
:class:`OTelDetectorAdapter`.  The community detector packages from
opentelemetry-python-contrib are registered by detector type and imported
lazily, so a missing package only fails when that type is requested::

    pip install opentelemetry-resource-detector-aws       # aws_ec2, aws_ecs, aws_eks, aws_lambda
    pip install opentelemetry-resourcedetector-gcp        # gcp
    pip install opentelemetry-resource-detector-azure     # azure_vm, azure_app_service
    pip install opentelemetry-resource-detector-container # otel_container
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Dict, Tuple

from resdetect.models.resource import Resource
from resdetect.resources.base import CreateSettings, Detector, DetectorConfig, DetectorFactory
from resdetect.sdk.context import DetectContext

if TYPE_CHECKING:
    from opentelemetry.sdk.resources import ResourceDetector

# detector type -> (module_path, class_name)
COMMUNITY_DETECTORS: Dict[str, Tuple[str, str]] = {
    # opentelemetry-sdk (always available)
    "otel_env": ("opentelemetry.sdk.resources", "OTELResourceDetector"),
    "otel_process": ("opentelemetry.sdk.resources", "ProcessResourceDetector"),
    # opentelemetry-resource-detector-aws
    "aws_ec2": ("opentelemetry.resource.detector.aws.ec2", "AwsEc2ResourceDetector"),
    "aws_ecs": ("opentelemetry.resource.detector.aws.ecs", "AwsEcsResourceDetector"),
    "aws_eks": ("opentelemetry.resource.detector.aws.eks", "AwsEksResourceDetector"),
    "aws_lambda": ("opentelemetry.resource.detector.aws.lambda_", "AwsLambdaResourceDetector"),
    # opentelemetry-resourcedetector-gcp
    "gcp": ("opentelemetry.resourcedetector.gcp_resource_detector", "GoogleCloudResourceDetector"),
    # opentelemetry-resource-detector-azure
    "azure_vm": ("opentelemetry.resource.detector.azure.vm", "AzureVMResourceDetector"),
    "azure_app_service": ("opentelemetry.resource.detector.azure.app_service", "AzureAppServiceResourceDetector"),
    # opentelemetry-resource-detector-container
    "otel_container": ("opentelemetry.resource.detector.container", "ContainerResourceDetector"),
}


class OTelDetectorAdapter(Detector):
    """Expose an OTel ``ResourceDetector`` as a :class:`Detector`.

    The wrapped detector is switched to ``raise_on_error`` so its failures
    reach the provider and are logged like any other detector failure.
    """

    def __init__(self, detector: ResourceDetector) -> None:
        self._detector = detector
        self._detector.raise_on_error = True

    @property
    def name(self) -> str:
        return type(self._detector).__name__

    def detect(self, ctx: DetectContext) -> Tuple[Resource, str]:
        ctx.raise_if_done()
        otel_resource = self._detector.detect()
        return Resource.from_otel(otel_resource), otel_resource.schema_url or ""


def community_detector_factory(module_path: str, class_name: str) -> DetectorFactory:
    """Factory that imports ``module_path.class_name`` when invoked.

    Raises ``ImportError`` / ``AttributeError`` at construction time when the
    detector package is not installed.
    """

    def _create(settings: CreateSettings, config: DetectorConfig) -> Detector:
        mod = importlib.import_module(module_path)
        cls = getattr(mod, class_name)
        settings.logger.debug("Loaded OTel resource detector %s.%s", module_path, class_name)
        return OTelDetectorAdapter(cls())

    return _create


def community_detector_factories() -> Dict[str, DetectorFactory]:
    return {
        detector_type: community_detector_factory(module_path, class_name)
        for detector_type, (module_path, class_name) in COMMUNITY_DETECTORS.items()
    }


__all__ = [
    "COMMUNITY_DETECTORS",
    "OTelDetectorAdapter",
    "community_detector_factories",
    "community_detector_factory",
]
