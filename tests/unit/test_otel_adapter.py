# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the OpenTelemetry detector adapter."""

from __future__ import annotations

import os
from unittest import mock

import pytest
from opentelemetry.sdk.resources import Resource as OTelResource
from opentelemetry.sdk.resources import ResourceDetector

from resdetect.errors import DetectorConstructionError
from resdetect.resources import CreateSettings
from resdetect.resources.otel import OTelDetectorAdapter, community_detector_factory
from resdetect.sdk.context import DetectContext
from resdetect.sdk.provider import ResourceProvider, ResourceProviderFactory


class FixedOTelDetector(ResourceDetector):
    def detect(self) -> OTelResource:
        return OTelResource({"cloud.provider": "aws", "cloud.region": "us-east-1"}, "https://example.com/v1")


class BrokenOTelDetector(ResourceDetector):
    def detect(self) -> OTelResource:
        raise ConnectionError("metadata endpoint timed out")


class TestOTelDetectorAdapter:
    """Tests for OTelDetectorAdapter."""

    def test_converts_resource(self):
        adapter = OTelDetectorAdapter(FixedOTelDetector())
        res, schema_url = adapter.detect(DetectContext.background())
        assert res.to_dict() == {"cloud.provider": "aws", "cloud.region": "us-east-1"}
        assert schema_url == "https://example.com/v1"

    def test_name_is_wrapped_class(self):
        assert OTelDetectorAdapter(FixedOTelDetector()).name == "FixedOTelDetector"

    def test_enables_raise_on_error(self):
        detector = BrokenOTelDetector()
        OTelDetectorAdapter(detector)
        assert detector.raise_on_error is True

    def test_failure_is_logged_and_skipped(self, static_detector):
        provider = ResourceProvider(
            None,
            5.0,
            frozenset(),
            OTelDetectorAdapter(BrokenOTelDetector()),
            static_detector({"host.name": "web-1"}),
        )
        result = provider.get()
        assert result.resource.to_dict() == {"host.name": "web-1"}
        assert result.error is None


class TestCommunityDetectors:
    """Tests for lazily imported community detectors."""

    def test_sdk_env_detector(self):
        factory = community_detector_factory("opentelemetry.sdk.resources", "OTELResourceDetector")
        detector = factory(CreateSettings(), None)
        with mock.patch.dict(os.environ, {"OTEL_RESOURCE_ATTRIBUTES": "team=core"}):
            res, _ = detector.detect(DetectContext.background())
        assert res.to_dict()["team"] == "core"

    def test_missing_package_fails_construction(self, static_config):
        factory = ResourceProviderFactory(
            {"ghost": community_detector_factory("opentelemetry.resource.detector.ghost", "GhostDetector")}
        )
        with pytest.raises(DetectorConstructionError) as exc_info:
            factory.create_resource_provider(CreateSettings(), 5.0, [], static_config(), "ghost")
        assert isinstance(exc_info.value.cause, ImportError)
