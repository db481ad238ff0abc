# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""The detector capability and the types a detector factory receives."""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Protocol, Tuple

if TYPE_CHECKING:
    from resdetect.models.resource import Resource
    from resdetect.sdk.context import DetectContext

DetectorType = str
DetectorConfig = Any


class Detector(abc.ABC):
    """Probes one aspect of the environment.

    Implementations return the detected :class:`Resource` and the schema URL
    its attribute names follow (``""`` when unknown), or raise.  A raising
    detector is logged and skipped by the provider; it never aborts
    detection as a whole.
    """

    @abc.abstractmethod
    def detect(self, ctx: DetectContext) -> Tuple[Resource, str]:
        ...

    @property
    def name(self) -> str:
        return type(self).__name__


class ResourceDetectorConfig(Protocol):
    """Resolves the configuration of each detector type."""

    def get_config_from_type(self, detector_type: DetectorType) -> DetectorConfig:
        ...


@dataclass
class CreateSettings:
    """Settings handed to every detector factory."""

    name: str = "resdetect"
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("resdetect"))


DetectorFactory = Callable[[CreateSettings, DetectorConfig], Detector]


__all__ = [
    "CreateSettings",
    "Detector",
    "DetectorConfig",
    "DetectorFactory",
    "DetectorType",
    "ResourceDetectorConfig",
]
