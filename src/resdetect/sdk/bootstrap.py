# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Process-wide resource detection.

Builds one :class:`~resdetect.sdk.provider.ResourceProvider` per process from
configuration and the default detector registry, so every caller shares the
same detected resource.

Usage::

    from resdetect import detect_resource

    result = detect_resource()  # reads RESDETECT_* env vars or resdetect.yaml
    tracer_provider = TracerProvider(resource=result.resource.to_otel())
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Mapping, Optional

if TYPE_CHECKING:
    from resdetect.resources.base import DetectorFactory
    from resdetect.sdk.config import ResourceDetectionConfig
    from resdetect.sdk.context import DetectContext
    from resdetect.sdk.provider import DetectionResult, ResourceProvider

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_provider: Optional[ResourceProvider] = None
_current_config: Optional[ResourceDetectionConfig] = None


def detect_resource(
    config: Optional[ResourceDetectionConfig] = None,
    config_file: Optional[str] = None,
    factories: Optional[Mapping[str, DetectorFactory]] = None,
    log_level: Optional[str] = None,
    ctx: Optional[DetectContext] = None,
) -> DetectionResult:
    """Detect the process resource, building the shared provider on first use.

    Args:
        config: Full :class:`ResourceDetectionConfig`.
        config_file: Path to YAML config file (ignored when *config* is given).
        factories: Detector registry (default: every built-in and community
            detector type).
        log_level: Configure root logging at this level (default: leave
            logging alone).
        ctx: Parent context for the detection pass.

    Raises:
        UnknownDetectorTypeError: A configured detector type is not registered.
        DetectorConstructionError: A detector could not be built.
    """
    provider = _get_or_create_provider(config, config_file, factories, log_level)
    return provider.get(ctx)


def _get_or_create_provider(
    config: Optional[ResourceDetectionConfig],
    config_file: Optional[str],
    factories: Optional[Mapping[str, DetectorFactory]],
    log_level: Optional[str],
) -> ResourceProvider:
    global _provider, _current_config

    with _lock:
        if _provider is not None:
            if config is not None or config_file is not None:
                logger.warning("Resource provider already initialized; ignoring new configuration")
            return _provider

        if log_level:
            logging.basicConfig(level=getattr(logging, log_level.upper()))

        from resdetect.resources import CreateSettings, default_detector_factories
        from resdetect.sdk.config import ResourceDetectionConfig as ConfigClass
        from resdetect.sdk.provider import ResourceProviderFactory

        if config is not None:
            cfg = config
        elif config_file is not None:
            cfg = ConfigClass.from_yaml(config_file)
        else:
            cfg = ConfigClass.from_file_or_env()

        logger.info(
            "Initializing resource detection: detectors=%s, timeout=%ss",
            cfg.detectors,
            cfg.timeout,
        )

        factory = ResourceProviderFactory(factories if factories is not None else default_detector_factories())
        _provider = factory.create_resource_provider(
            CreateSettings(logger=logging.getLogger("resdetect.provider")),
            cfg.timeout,
            cfg.attributes or [],
            cfg,
            *(cfg.detectors or []),
        )
        _current_config = cfg
        return _provider


def get_provider() -> Optional[ResourceProvider]:
    """Get the shared provider, if built."""
    return _provider


def get_config() -> Optional[ResourceDetectionConfig]:
    """Get the configuration the shared provider was built from."""
    return _current_config


def reset() -> None:
    """Drop the shared provider so the next call detects again."""
    global _provider, _current_config

    with _lock:
        _provider = None
        _current_config = None


__all__ = ["detect_resource", "get_config", "get_provider", "reset"]
