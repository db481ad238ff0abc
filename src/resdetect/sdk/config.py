# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for resource detection.

Configuration precedence (highest to lowest):
1. Code arguments (explicit values passed to ResourceDetectionConfig)
2. Environment variables (RESDETECT_*)
3. YAML config file (resdetect.yaml or specified path)
4. Built-in defaults

Example YAML::

    detectors: [env, system, k8s]
    timeout: 2.5
    attributes: [host.name, k8s.pod.name]
    override: false
    detector_configs:
      system:
        hostname_sources: [os]
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from resdetect.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_DETECTORS = ["env", "system"]
DEFAULT_TIMEOUT = 5.0


@dataclass
class ResourceDetectionConfig:
    """Which detectors run, for how long, and which attributes survive.

    Also resolves per-detector configuration for
    :class:`~resdetect.sdk.provider.ResourceProviderFactory`.

    Example::

        >>> config = ResourceDetectionConfig(detectors=["env", "system"], timeout=2.0)

        >>> # Or load from YAML
        >>> config = ResourceDetectionConfig.from_yaml("config/resdetect.yaml")
    """

    # Detector types, in precedence order (first wins on conflicting keys)
    detectors: Optional[List[str]] = None

    # Seconds allowed for the whole detection pass
    timeout: Optional[float] = None

    # Attribute allow-list (empty = keep all)
    attributes: Optional[List[str]] = None

    # Whether detected attributes replace existing ones on enriched resources
    override: Optional[bool] = None

    # Per-detector settings, keyed by detector type
    detector_configs: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    # Config file path (for tracking where config was loaded from)
    _config_file: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Apply environment variable defaults, then validate."""
        if self.detectors is None:
            env_detectors = os.getenv("RESDETECT_DETECTORS")
            self.detectors = _split_list(env_detectors) if env_detectors is not None else list(DEFAULT_DETECTORS)

        if self.timeout is None:
            env_timeout = os.getenv("RESDETECT_TIMEOUT")
            if env_timeout:
                try:
                    self.timeout = float(env_timeout)
                except ValueError as exc:
                    raise ConfigError(f"RESDETECT_TIMEOUT must be a number, got {env_timeout!r}") from exc
            else:
                self.timeout = DEFAULT_TIMEOUT

        if self.attributes is None:
            self.attributes = _split_list(os.getenv("RESDETECT_ATTRIBUTES", ""))

        if self.override is None:
            env_override = os.getenv("RESDETECT_OVERRIDE")
            self.override = True if env_override is None else env_override.lower() in ("true", "1", "yes")

        self.validate()

    def validate(self) -> None:
        """Raise :class:`ConfigError` on invalid values."""
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if len(set(self.detectors or [])) != len(self.detectors or []):
            raise ConfigError(f"duplicate detector types: {self.detectors}")
        if not isinstance(self.detector_configs, dict):
            raise ConfigError("detector_configs must be a mapping of detector type to settings")

    def get_config_from_type(self, detector_type: str) -> Optional[Dict[str, Any]]:
        return self.detector_configs.get(detector_type)

    # ------------------------------------------------------------------
    # YAML loading
    # ------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, path: Optional[str] = None) -> ResourceDetectionConfig:
        """Load configuration from a YAML file.

        Supports environment variable interpolation using ``${VAR_NAME}`` syntax.

        Args:
            path: Path to YAML config file.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ConfigError: If YAML is malformed.
        """
        if path is None:
            raise FileNotFoundError("No config file path provided")

        resolved = Path(path)
        if not resolved.exists():
            raise FileNotFoundError(f"Config file not found: {resolved}")

        import yaml

        with open(resolved) as fh:
            raw_content = fh.read()

        content = _interpolate_env_vars(raw_content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {resolved}: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top of {resolved}")

        return cls._from_dict(data, config_file=str(resolved))

    @classmethod
    def from_file_or_env(cls, path: Optional[str] = None) -> ResourceDetectionConfig:
        """Load config from file if exists, otherwise use environment variables.

        Search order:
        1. Explicit *path* argument
        2. ``RESDETECT_CONFIG_FILE`` env var
        3. ``./resdetect.yaml``
        4. ``./config/resdetect.yaml``
        5. Falls back to env-only config
        """
        search_paths: List[Path] = []

        if path:
            search_paths.append(Path(path))

        env_path = os.getenv("RESDETECT_CONFIG_FILE")
        if env_path:
            search_paths.append(Path(env_path))

        search_paths.extend(
            [
                Path("resdetect.yaml"),
                Path("resdetect.yml"),
                Path("config/resdetect.yaml"),
                Path("config/resdetect.yml"),
            ]
        )

        for candidate in search_paths:
            if candidate.exists():
                logger.info("Loading config from: %s", candidate)
                return cls.from_yaml(str(candidate))

        logger.debug("No config file found, using environment variables only")
        return cls()

    @classmethod
    def _from_dict(
        cls,
        data: Dict[str, Any],
        config_file: Optional[str] = None,
    ) -> ResourceDetectionConfig:
        """Create config from dictionary (parsed YAML)."""
        detectors = data.get("detectors")
        attributes = data.get("attributes")
        timeout = data.get("timeout")

        return cls(
            detectors=list(detectors) if detectors is not None else None,
            timeout=float(timeout) if timeout is not None else None,
            attributes=list(attributes) if attributes is not None else None,
            override=data.get("override"),
            detector_configs=data.get("detector_configs") or {},
            _config_file=config_file,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "detectors": list(self.detectors or []),
            "timeout": self.timeout,
            "attributes": list(self.attributes or []),
            "override": self.override,
            "detector_configs": dict(self.detector_configs),
        }


def _split_list(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _interpolate_env_vars(content: str) -> str:
    """Interpolate ``${VAR_NAME}`` and ``${VAR_NAME:-default}`` in *content*."""
    pattern = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

    def _replace(match: re.Match) -> str:  # type: ignore[type-arg]
        var_name = match.group(1)
        default = match.group(2)
        value = os.getenv(var_name)
        if value is not None:
            return value
        if default is not None:
            return default
        return match.group(0)

    return pattern.sub(_replace, content)


__all__ = ["DEFAULT_DETECTORS", "DEFAULT_TIMEOUT", "ResourceDetectionConfig"]
