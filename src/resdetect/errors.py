# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised by resdetect.

Construction-time errors (unknown detector type, failing detector factory)
propagate to the caller and abort provider creation.  Run-time detector
failures are wrapped in :class:`DetectorRuntimeError` for logging only; they
never escape :meth:`ResourceProvider.get`.
"""

from __future__ import annotations

from typing import Optional


class ResourceDetectionError(Exception):
    """Base class for every resdetect error."""


class UnknownDetectorTypeError(ResourceDetectionError):
    """Requested detector type has no registered factory."""

    def __init__(self, detector_type: str) -> None:
        self.detector_type = detector_type
        super().__init__(f"invalid detector key: {detector_type}")


class DetectorConstructionError(ResourceDetectionError):
    """A detector factory raised while building its detector."""

    def __init__(self, detector_type: str, cause: BaseException) -> None:
        self.detector_type = detector_type
        self.cause = cause
        super().__init__(f"failed creating detector type {detector_type!r}: {cause}")


class DetectorRuntimeError(ResourceDetectionError):
    """A detector failed while probing its environment."""

    def __init__(self, detector_name: str, cause: Optional[BaseException] = None) -> None:
        self.detector_name = detector_name
        self.cause = cause
        message = f"detector {detector_name} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ContextError(ResourceDetectionError):
    """The detection context is done."""


class DeadlineExceededError(ContextError):
    def __init__(self) -> None:
        super().__init__("context deadline exceeded")


class ContextCancelledError(ContextError):
    def __init__(self) -> None:
        super().__init__("context canceled")


class ConfigError(ResourceDetectionError, ValueError):
    """Invalid resource detection configuration."""


__all__ = [
    "ConfigError",
    "ContextCancelledError",
    "ContextError",
    "DeadlineExceededError",
    "DetectorConstructionError",
    "DetectorRuntimeError",
    "ResourceDetectionError",
    "UnknownDetectorTypeError",
]
