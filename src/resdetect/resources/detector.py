# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Built-in detectors - probe the local environment without network access.

Detector types:

- ``env``       -- ``OTEL_RESOURCE_ATTRIBUTES``
- ``system``    -- host (``host.*``, ``os.*``)
- ``process``   -- current process (``process.*``)
- ``container`` -- container runtime (``container.*``)
- ``k8s``       -- Kubernetes downward API (``k8s.*``)

A detector that finds nothing to report for its environment (no container,
no cluster) raises, so the provider logs why it was skipped.
"""

from __future__ import annotations

import os
import platform
import socket
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import unquote

from resdetect.errors import DetectorRuntimeError
from resdetect.models.resource import Resource
from resdetect.resources.base import CreateSettings, Detector, DetectorConfig
from resdetect.sdk.context import DetectContext

SCHEMA_URL = "https://opentelemetry.io/schemas/1.21.0"

OTEL_RESOURCE_ATTRIBUTES = "OTEL_RESOURCE_ATTRIBUTES"

K8S_ENV_MAPPINGS: Dict[str, str] = {
    "K8S_POD_NAME": "k8s.pod.name",
    "K8S_POD_UID": "k8s.pod.uid",
    "K8S_NAMESPACE": "k8s.namespace.name",
    "K8S_NODE_NAME": "k8s.node.name",
    "K8S_CLUSTER_NAME": "k8s.cluster.name",
    "K8S_DEPLOYMENT_NAME": "k8s.deployment.name",
    "K8S_STATEFULSET_NAME": "k8s.statefulset.name",
    "K8S_CONTAINER_NAME": "k8s.container.name",
}

_NAMESPACE_FILE = "/var/run/secrets/kubernetes.io/serviceaccount/namespace"
_CGROUP_FILE = "/proc/self/cgroup"

HOSTNAME_SOURCES = ("dns", "os")


# =========================================================================
# Environment
# =========================================================================


class EnvDetector(Detector):
    """Reads ``key=value`` pairs from ``OTEL_RESOURCE_ATTRIBUTES``."""

    def detect(self, ctx: DetectContext) -> Tuple[Resource, str]:
        ctx.raise_if_done()
        raw = os.environ.get(OTEL_RESOURCE_ATTRIBUTES, "").strip()
        if not raw:
            return Resource(), ""
        return Resource(parse_resource_attributes(raw)), ""


def parse_resource_attributes(raw: str) -> Dict[str, str]:
    """Parse ``k1=v1,k2=v2``; values are percent-decoded.

    Raises:
        ValueError: On an entry without ``=`` or with an empty key.
    """
    attrs: Dict[str, str] = {}
    for pair in raw.split(","):
        if not pair.strip():
            continue
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"invalid resource format: {pair.strip()!r}")
        attrs[key] = unquote(value.strip())
    return attrs


# =========================================================================
# Host
# =========================================================================


class SystemDetector(Detector):
    """Host name, id, OS and architecture.

    ``hostname_sources`` are tried in order; the first one that yields a
    name wins.  ``dns`` resolves the canonical (FQDN) name, ``os`` uses the
    kernel hostname.
    """

    def __init__(self, hostname_sources: Sequence[str] = HOSTNAME_SOURCES) -> None:
        unknown = [s for s in hostname_sources if s not in HOSTNAME_SOURCES]
        if unknown:
            raise ValueError(f"unknown hostname sources: {unknown}")
        if not hostname_sources:
            raise ValueError("at least one hostname source is required")
        self.hostname_sources: List[str] = list(hostname_sources)

    def detect(self, ctx: DetectContext) -> Tuple[Resource, str]:
        ctx.raise_if_done()
        hostname = self._hostname()

        res = Resource(schema_url=SCHEMA_URL)
        res.attributes.put("host.name", hostname)
        host_id = os.environ.get("HOST_ID") or os.environ.get("INSTANCE_ID")
        if host_id:
            res.attributes.put("host.id", host_id)
        res.attributes.put("os.type", _os_type())
        arch = platform.machine()
        if arch:
            res.attributes.put("host.arch", arch)
        return res, SCHEMA_URL

    def _hostname(self) -> str:
        errors: List[str] = []
        for source in self.hostname_sources:
            try:
                name = _fqdn() if source == "dns" else socket.gethostname()
            except OSError as exc:
                errors.append(f"{source}: {exc}")
                continue
            if name:
                return name
            errors.append(f"{source}: empty hostname")
        raise DetectorRuntimeError("system", OSError("; ".join(errors)))


def _fqdn() -> str:
    hostname = socket.gethostname()
    infos = socket.getaddrinfo(hostname, None, 0, 0, 0, socket.AI_CANONNAME)
    for info in infos:
        if info[3]:
            return info[3]
    return ""


def _os_type() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform in ("win32", "cygwin"):
        return "windows"
    return sys.platform


# =========================================================================
# Process
# =========================================================================


class ProcessDetector(Detector):
    def detect(self, ctx: DetectContext) -> Tuple[Resource, str]:
        ctx.raise_if_done()
        res = Resource(schema_url=SCHEMA_URL)
        attrs = res.attributes
        attrs.put("process.pid", os.getpid())
        if sys.executable:
            attrs.put("process.executable.name", os.path.basename(sys.executable))
            attrs.put("process.executable.path", sys.executable)
        if sys.argv:
            attrs.put("process.command", sys.argv[0][:200])
            attrs.put("process.command_args", list(sys.argv))
        attrs.put("process.runtime.name", platform.python_implementation().lower())
        attrs.put("process.runtime.version", platform.python_version())
        return res, SCHEMA_URL


# =========================================================================
# Container
# =========================================================================


class ContainerDetector(Detector):
    """Container id from cgroups (or ``CONTAINER_ID``) and runtime."""

    def __init__(self, cgroup_path: str = _CGROUP_FILE) -> None:
        self.cgroup_path = cgroup_path

    def detect(self, ctx: DetectContext) -> Tuple[Resource, str]:
        ctx.raise_if_done()
        container_id = self._container_id()
        if not container_id:
            raise DetectorRuntimeError("container", RuntimeError("not running in a container"))

        res = Resource(schema_url=SCHEMA_URL)
        res.attributes.put("container.id", container_id)
        runtime = _container_runtime()
        if runtime:
            res.attributes.put("container.runtime", runtime)
        return res, SCHEMA_URL

    def _container_id(self) -> Optional[str]:
        if os.path.exists(self.cgroup_path):
            try:
                with open(self.cgroup_path) as fh:
                    for line in fh:
                        found = _container_id_from_cgroup_line(line)
                        if found:
                            return found
            except OSError:
                pass

        container_id = os.environ.get("CONTAINER_ID")
        return container_id if container_id and len(container_id) >= 12 else None


def _container_id_from_cgroup_line(line: str) -> Optional[str]:
    if "docker" not in line and "kubepods" not in line:
        return None
    last = line.strip().split("/")[-1]
    for prefix in ("cri-containerd-", "docker-"):
        if last.startswith(prefix):
            last = last[len(prefix):]
    if last.endswith(".scope"):
        last = last[: -len(".scope")]
    return last[:64] if len(last) >= 12 else None


def _container_runtime() -> Optional[str]:
    if os.path.exists("/.dockerenv"):
        return "docker"
    if os.environ.get("KUBERNETES_SERVICE_HOST"):
        return "containerd"
    return None


# =========================================================================
# Kubernetes
# =========================================================================


class K8sDetector(Detector):
    """Pod metadata exposed through downward-API environment variables."""

    def __init__(self, namespace_file: str = _NAMESPACE_FILE) -> None:
        self.namespace_file = namespace_file

    def detect(self, ctx: DetectContext) -> Tuple[Resource, str]:
        ctx.raise_if_done()
        if not os.environ.get("KUBERNETES_SERVICE_HOST"):
            raise DetectorRuntimeError("k8s", RuntimeError("KUBERNETES_SERVICE_HOST is not set"))

        res = Resource(schema_url=SCHEMA_URL)
        attrs = res.attributes
        for env_var, attr_name in K8S_ENV_MAPPINGS.items():
            value = os.environ.get(env_var)
            if value:
                attrs.put(attr_name, value)

        if "k8s.pod.name" not in attrs:
            hostname = os.environ.get("HOSTNAME") or socket.gethostname()
            if hostname:
                attrs.put("k8s.pod.name", hostname)

        if "k8s.namespace.name" not in attrs and os.path.exists(self.namespace_file):
            try:
                with open(self.namespace_file) as fh:
                    namespace = fh.read().strip()
                if namespace:
                    attrs.put("k8s.namespace.name", namespace)
            except OSError:
                pass

        return res, SCHEMA_URL


# =========================================================================
# Factories
# =========================================================================


def _config_dict(config: DetectorConfig) -> Dict[str, Any]:
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise TypeError(f"detector config must be a mapping, got {type(config).__name__}")
    return config


def create_env_detector(settings: CreateSettings, config: DetectorConfig) -> Detector:
    return EnvDetector()


def create_system_detector(settings: CreateSettings, config: DetectorConfig) -> Detector:
    cfg = _config_dict(config)
    return SystemDetector(hostname_sources=cfg.get("hostname_sources", HOSTNAME_SOURCES))


def create_process_detector(settings: CreateSettings, config: DetectorConfig) -> Detector:
    return ProcessDetector()


def create_container_detector(settings: CreateSettings, config: DetectorConfig) -> Detector:
    cfg = _config_dict(config)
    return ContainerDetector(cgroup_path=cfg.get("cgroup_path", _CGROUP_FILE))


def create_k8s_detector(settings: CreateSettings, config: DetectorConfig) -> Detector:
    cfg = _config_dict(config)
    return K8sDetector(namespace_file=cfg.get("namespace_file", _NAMESPACE_FILE))


__all__ = [
    "ContainerDetector",
    "EnvDetector",
    "K8sDetector",
    "ProcessDetector",
    "SCHEMA_URL",
    "SystemDetector",
    "create_container_detector",
    "create_env_detector",
    "create_k8s_detector",
    "create_process_detector",
    "create_system_detector",
    "parse_resource_attributes",
]
