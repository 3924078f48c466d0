"""Tests for the Kubernetes cluster bridge, using stand-in API clients."""

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
import urllib3
from kubernetes.client.rest import ApiException

from fndeploy.core import cluster as cluster_module
from fndeploy.core.cluster import (
    ClusterApi,
    ClusterApiError,
    KubernetesCluster,
    default_namespace,
)


class FakeCustomObjectsApi:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create_namespaced_custom_object(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return kwargs["body"]


class FakeCoreV1Api:
    def __init__(self, items: list[Any] | None = None, error: Exception | None = None) -> None:
        self.items = items or []
        self.error = error
        self.namespaces: list[str] = []

    def list_namespaced_pod(self, namespace: str) -> Any:
        self.namespaces.append(namespace)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(items=self.items)


def _pod(name: str, labels: dict[str, str] | None, namespace: str = "default") -> Any:
    return SimpleNamespace(
        metadata=SimpleNamespace(name=name, labels=labels, namespace=namespace)
    )


def _api_exception(status: int, reason: str, message: str | None = None) -> ApiException:
    exc = ApiException(status=status, reason=reason)
    if message is not None:
        exc.body = json.dumps({"kind": "Status", "message": message})
    return exc


def _cluster(custom: Any = None, core: Any = None, **kwargs: Any) -> KubernetesCluster:
    return KubernetesCluster(
        custom_api=custom or FakeCustomObjectsApi(),
        core_api=core or FakeCoreV1Api(),
        namespace=kwargs.pop("namespace", "default"),
        **kwargs,
    )


class TestCreateResource:
    def test_splits_api_version(self):
        custom = FakeCustomObjectsApi()
        _cluster(custom).create_resource("functions", "ns", {"metadata": {"name": "f"}})
        call = custom.calls[0]
        assert call["group"] == "k8s.io"
        assert call["version"] == "v1"
        assert call["plural"] == "functions"
        assert call["namespace"] == "ns"

    def test_custom_api_version(self):
        custom = FakeCustomObjectsApi()
        _cluster(custom, api_version="kubeless.io/v1beta1").create_resource("functions", "ns", {})
        assert custom.calls[0]["group"] == "kubeless.io"
        assert custom.calls[0]["version"] == "v1beta1"

    def test_conflict_maps_to_409(self):
        custom = FakeCustomObjectsApi(_api_exception(409, "Conflict", "functions \"f\" already exists"))
        with pytest.raises(ClusterApiError) as excinfo:
            _cluster(custom).create_resource("functions", "ns", {})
        assert excinfo.value.is_conflict
        assert excinfo.value.message == 'functions "f" already exists'

    def test_reason_used_without_body(self):
        custom = FakeCustomObjectsApi(_api_exception(500, "Internal Server Error"))
        with pytest.raises(ClusterApiError) as excinfo:
            _cluster(custom).create_resource("functions", "ns", {})
        assert excinfo.value.code == 500
        assert excinfo.value.message == "Internal Server Error"

    def test_transport_error_has_no_code(self):
        custom = FakeCustomObjectsApi(urllib3.exceptions.ProtocolError("connection refused"))
        with pytest.raises(ClusterApiError) as excinfo:
            _cluster(custom).create_resource("functions", "ns", {})
        assert excinfo.value.code is None
        assert not excinfo.value.is_conflict


class TestListPods:
    def test_maps_items_to_pod_identities(self):
        core = FakeCoreV1Api([_pod("a", {"function": "hello"}), _pod("b", None)])
        pods = _cluster(core=core, namespace="fn").list_pods()
        assert [p.name for p in pods] == ["a", "b"]
        assert pods[0].labels == {"function": "hello"}
        assert pods[1].labels == {}
        assert core.namespaces == ["fn"]

    def test_explicit_namespace(self):
        core = FakeCoreV1Api()
        _cluster(core=core).list_pods("other")
        assert core.namespaces == ["other"]

    def test_api_error(self):
        core = FakeCoreV1Api(error=_api_exception(403, "Forbidden"))
        with pytest.raises(ClusterApiError) as excinfo:
            _cluster(core=core).list_pods()
        assert excinfo.value.code == 403


class TestNamespace:
    def test_explicit_namespace_wins(self):
        assert _cluster(namespace="mine").namespace == "mine"

    def test_satisfies_protocol(self):
        assert isinstance(_cluster(), ClusterApi)

    def test_kubeconfig_context_namespace(self, monkeypatch: pytest.MonkeyPatch):
        contexts = [
            {"name": "dev", "context": {"namespace": "dev-ns"}},
            {"name": "prod", "context": {}},
        ]
        monkeypatch.setattr(
            cluster_module.kube_config,
            "list_kube_config_contexts",
            lambda config_file=None: (contexts, contexts[0]),
        )
        assert default_namespace() == "dev-ns"
        assert default_namespace(context="prod") == "default"

    def test_in_cluster_reads_service_account(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        ns_file = tmp_path / "namespace"
        ns_file.write_text("functions\n")
        monkeypatch.setattr(cluster_module, "SERVICE_ACCOUNT_NAMESPACE", ns_file)
        assert default_namespace(in_cluster=True) == "functions"

    def test_in_cluster_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(cluster_module, "SERVICE_ACCOUNT_NAMESPACE", tmp_path / "missing")
        assert default_namespace(in_cluster=True) == "default"
