# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Shared test fixtures for resdetect tests."""

from __future__ import annotations

import threading
from typing import Any, Mapping, Optional

import pytest

from resdetect.models.resource import Resource
from resdetect.resources.base import Detector
from resdetect.sdk import bootstrap


class StaticDetector(Detector):
    """Returns a fixed resource and counts calls."""

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None, schema_url: str = "") -> None:
        self.attributes = dict(attributes or {})
        self.schema_url = schema_url
        self.calls = 0
        self._lock = threading.Lock()

    def detect(self, ctx):
        with self._lock:
            self.calls += 1
        return Resource(self.attributes, self.schema_url), self.schema_url


class FailingDetector(Detector):
    """Always raises."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error or RuntimeError("metadata endpoint unreachable")
        self.calls = 0

    def detect(self, ctx):
        self.calls += 1
        raise self.error


class StaticConfig:
    """ResourceDetectorConfig backed by a dict."""

    def __init__(self, configs: Optional[Mapping[str, Any]] = None) -> None:
        self.configs = dict(configs or {})

    def get_config_from_type(self, detector_type):
        return self.configs.get(detector_type)


@pytest.fixture(autouse=True)
def reset_bootstrap():
    """Drop the process-wide provider around each test."""
    bootstrap.reset()
    yield
    bootstrap.reset()


@pytest.fixture
def static_detector():
    """Factory for :class:`StaticDetector`."""
    return StaticDetector


@pytest.fixture
def failing_detector():
    """Factory for :class:`FailingDetector`."""
    return FailingDetector


@pytest.fixture
def static_config():
    """Factory for :class:`StaticConfig`."""
    return StaticConfig
