# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the built-in detectors."""

from __future__ import annotations

import os
import socket
import sys
from unittest import mock

import pytest

from resdetect.errors import ContextCancelledError, DetectorRuntimeError
from resdetect.resources import BUILTIN_DETECTORS, CreateSettings, default_detector_factories
from resdetect.resources.detector import (
    SCHEMA_URL,
    ContainerDetector,
    EnvDetector,
    K8sDetector,
    ProcessDetector,
    SystemDetector,
    create_system_detector,
    parse_resource_attributes,
)
from resdetect.sdk.context import DetectContext


@pytest.fixture
def ctx():
    return DetectContext.background()


class TestEnvDetector:
    """Tests for OTEL_RESOURCE_ATTRIBUTES parsing."""

    def test_parses_pairs(self, ctx):
        with mock.patch.dict(os.environ, {"OTEL_RESOURCE_ATTRIBUTES": "service.name=api, team = core"}):
            res, schema_url = EnvDetector().detect(ctx)
        assert res.to_dict() == {"service.name": "api", "team": "core"}
        assert schema_url == ""

    def test_percent_decoding(self):
        assert parse_resource_attributes("k=a%2Cb%3Dc") == {"k": "a,b=c"}

    def test_unset_yields_empty(self, ctx):
        with mock.patch.dict(os.environ, {}, clear=True):
            res, _ = EnvDetector().detect(ctx)
        assert len(res.attributes) == 0

    def test_malformed_raises(self, ctx):
        with mock.patch.dict(os.environ, {"OTEL_RESOURCE_ATTRIBUTES": "ok=1,broken"}):
            with pytest.raises(ValueError):
                EnvDetector().detect(ctx)

    def test_empty_key_raises(self):
        with pytest.raises(ValueError):
            parse_resource_attributes("=value")

    def test_respects_cancelled_context(self):
        ctx = DetectContext.background().with_cancel()
        ctx.cancel()
        with pytest.raises(ContextCancelledError):
            EnvDetector().detect(ctx)


class TestSystemDetector:
    """Tests for host detection."""

    def test_detects_hostname(self, ctx):
        res, schema_url = SystemDetector(hostname_sources=["os"]).detect(ctx)
        assert res.to_dict()["host.name"] == socket.gethostname()
        assert schema_url == SCHEMA_URL
        assert res.schema_url == SCHEMA_URL

    def test_detects_os_type_and_arch(self, ctx):
        attrs = SystemDetector(hostname_sources=["os"]).detect(ctx)[0].to_dict()
        assert attrs["os.type"] in ("linux", "darwin", "windows", sys.platform)
        assert "host.arch" in attrs

    def test_host_id_from_env(self, ctx):
        with mock.patch.dict(os.environ, {"HOST_ID": "i-123"}):
            attrs = SystemDetector(hostname_sources=["os"]).detect(ctx)[0].to_dict()
        assert attrs["host.id"] == "i-123"

    def test_falls_back_to_next_source(self, ctx):
        with mock.patch("resdetect.resources.detector._fqdn", side_effect=OSError("no dns")):
            res, _ = SystemDetector(hostname_sources=["dns", "os"]).detect(ctx)
        assert res.to_dict()["host.name"] == socket.gethostname()

    def test_all_sources_fail(self, ctx):
        with mock.patch("resdetect.resources.detector._fqdn", side_effect=OSError("no dns")):
            with pytest.raises(DetectorRuntimeError):
                SystemDetector(hostname_sources=["dns"]).detect(ctx)

    def test_unknown_source_rejected(self):
        with pytest.raises(ValueError):
            SystemDetector(hostname_sources=["carrier-pigeon"])

    def test_factory_reads_config(self):
        detector = create_system_detector(CreateSettings(), {"hostname_sources": ["os"]})
        assert detector.hostname_sources == ["os"]

    def test_factory_rejects_non_mapping_config(self):
        with pytest.raises(TypeError):
            create_system_detector(CreateSettings(), ["os"])


class TestProcessDetector:
    """Tests for process detection."""

    def test_detects_pid_and_runtime(self, ctx):
        attrs = ProcessDetector().detect(ctx)[0].to_dict()
        assert attrs["process.pid"] == os.getpid()
        assert "process.runtime.name" in attrs
        assert "process.runtime.version" in attrs


class TestContainerDetector:
    """Tests for container detection."""

    def test_detects_id_from_cgroup(self, ctx, tmp_path):
        cid = "a" * 64
        cgroup = tmp_path / "cgroup"
        cgroup.write_text(f"0::/system.slice/docker-{cid}.scope\n")
        res, _ = ContainerDetector(cgroup_path=str(cgroup)).detect(ctx)
        assert res.to_dict()["container.id"] == cid

    def test_detects_cri_containerd(self, ctx, tmp_path):
        cid = "b" * 64
        cgroup = tmp_path / "cgroup"
        cgroup.write_text(f"0::/kubepods/besteffort/pod1/cri-containerd-{cid}\n")
        res, _ = ContainerDetector(cgroup_path=str(cgroup)).detect(ctx)
        assert res.to_dict()["container.id"] == cid

    def test_falls_back_to_env(self, ctx, tmp_path):
        with mock.patch.dict(os.environ, {"CONTAINER_ID": "abc123def456"}):
            res, _ = ContainerDetector(cgroup_path=str(tmp_path / "missing")).detect(ctx)
        assert res.to_dict()["container.id"] == "abc123def456"

    def test_not_in_container_raises(self, ctx, tmp_path):
        cgroup = tmp_path / "cgroup"
        cgroup.write_text("0::/user.slice\n")
        with mock.patch.dict(os.environ, {}, clear=True):
            with pytest.raises(DetectorRuntimeError):
                ContainerDetector(cgroup_path=str(cgroup)).detect(ctx)


class TestK8sDetector:
    """Tests for Kubernetes detection."""

    def test_not_in_cluster_raises(self, ctx):
        with mock.patch.dict(os.environ, {}, clear=True):
            with pytest.raises(DetectorRuntimeError):
                K8sDetector().detect(ctx)

    def test_detects_from_env(self, ctx, tmp_path):
        with mock.patch.dict(
            os.environ,
            {
                "KUBERNETES_SERVICE_HOST": "10.0.0.1",
                "K8S_POD_NAME": "explicit-pod",
                "K8S_POD_UID": "uid-12345",
                "K8S_CLUSTER_NAME": "prod-cluster",
            },
        ):
            attrs = K8sDetector(namespace_file=str(tmp_path / "missing")).detect(ctx)[0].to_dict()
        assert attrs["k8s.pod.name"] == "explicit-pod"
        assert attrs["k8s.pod.uid"] == "uid-12345"
        assert attrs["k8s.cluster.name"] == "prod-cluster"

    def test_pod_name_and_namespace_fallbacks(self, ctx, tmp_path):
        ns = tmp_path / "namespace"
        ns.write_text("payments\n")
        with mock.patch.dict(
            os.environ,
            {"KUBERNETES_SERVICE_HOST": "10.0.0.1", "HOSTNAME": "my-pod-abc123"},
            clear=True,
        ):
            attrs = K8sDetector(namespace_file=str(ns)).detect(ctx)[0].to_dict()
        assert attrs["k8s.pod.name"] == "my-pod-abc123"
        assert attrs["k8s.namespace.name"] == "payments"


class TestDefaultRegistry:
    """Tests for the default detector registry."""

    def test_contains_builtins_and_community(self):
        factories = default_detector_factories()
        for detector_type in BUILTIN_DETECTORS:
            assert detector_type in factories
        assert "aws_ec2" in factories
        assert "otel_env" in factories

    def test_fresh_copy(self):
        factories = default_detector_factories()
        factories.pop("env")
        assert "env" in default_detector_factories()
