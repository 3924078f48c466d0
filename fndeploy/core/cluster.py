"""Cluster API bridge — the two calls a function deployment makes.

Bridge boundary
---------------
Orchestration code depends only on the ``ClusterApi`` protocol:

- ``create_resource(plural, namespace, body)`` creates a custom resource.
- ``list_pods(namespace)`` returns a snapshot of the namespace's pods.

Both raise ``ClusterApiError`` on any failure. ``code == 409`` is the
cluster's way of saying the resource already exists.

``KubernetesCluster`` implements the protocol on top of the official
``kubernetes`` client, loading credentials from a kubeconfig file or the
in-cluster service account.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import urllib3
from kubernetes import client
from kubernetes import config as kube_config
from kubernetes.client.rest import ApiException

from fndeploy.models.descriptor import FUNCTION_API_VERSION
from fndeploy.models.outcomes import PodIdentity

logger = logging.getLogger(__name__)

CONFLICT = 409
DEFAULT_NAMESPACE = "default"
SERVICE_ACCOUNT_NAMESPACE = Path("/var/run/secrets/kubernetes.io/serviceaccount/namespace")


class ClusterApiError(RuntimeError):
    """Raised when a cluster call fails.

    ``code`` is the HTTP status reported by the API server, or None when
    the request never got an answer.
    """

    def __init__(self, code: int | None, message: str) -> None:
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message

    @property
    def is_conflict(self) -> bool:
        return self.code == CONFLICT


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class ClusterApi(Protocol):
    """What the deployer needs from a cluster."""

    @property
    def namespace(self) -> str:
        """The namespace resources go to when none is given explicitly."""
        ...

    def create_resource(self, plural: str, namespace: str, body: dict[str, Any]) -> None:
        ...

    def list_pods(self, namespace: str | None = None) -> list[PodIdentity]:
        ...


# ---------------------------------------------------------------------------
# Kubernetes implementation
# ---------------------------------------------------------------------------


def _split_api_version(api_version: str) -> tuple[str, str]:
    """``"k8s.io/v1"`` -> ``("k8s.io", "v1")``."""
    group, _, version = api_version.rpartition("/")
    return group, version


def _error_message(exc: ApiException) -> str:
    """Prefer the API server's ``message`` field over the HTTP reason."""
    if exc.body:
        try:
            body = json.loads(exc.body)
        except (TypeError, ValueError):
            return str(exc.body)
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return exc.reason or ""


def default_namespace(
    kubeconfig: Path | str | None = None,
    context: str | None = None,
    in_cluster: bool = False,
) -> str:
    """Namespace of the active kubeconfig context, or the pod's own namespace."""
    if in_cluster:
        try:
            return SERVICE_ACCOUNT_NAMESPACE.read_text().strip() or DEFAULT_NAMESPACE
        except OSError:
            return DEFAULT_NAMESPACE
    contexts, active = kube_config.list_kube_config_contexts(
        config_file=str(kubeconfig) if kubeconfig else None
    )
    selected = active
    if context:
        selected = next((c for c in contexts if c.get("name") == context), active)
    return (selected or {}).get("context", {}).get("namespace") or DEFAULT_NAMESPACE


class KubernetesCluster:
    """``ClusterApi`` backed by the Kubernetes API server.

    Parameters
    ----------
    custom_api / core_api:
        Pre-built API clients. When omitted, credentials are loaded and
        fresh clients are created.
    namespace:
        Default namespace. Resolved from the kubeconfig when omitted.
    kubeconfig / context / in_cluster:
        Where credentials come from.
    api_version:
        ``group/version`` of the Function custom resource.
    """

    def __init__(
        self,
        *,
        custom_api: Any | None = None,
        core_api: Any | None = None,
        namespace: str | None = None,
        kubeconfig: Path | str | None = None,
        context: str | None = None,
        in_cluster: bool = False,
        api_version: str = FUNCTION_API_VERSION,
    ) -> None:
        if custom_api is None or core_api is None:
            if in_cluster:
                kube_config.load_incluster_config()
            else:
                kube_config.load_kube_config(
                    config_file=str(kubeconfig) if kubeconfig else None,
                    context=context,
                )
        self._custom = custom_api or client.CustomObjectsApi()
        self._core = core_api or client.CoreV1Api()
        self._namespace = namespace or default_namespace(kubeconfig, context, in_cluster)
        self._group, self._version = _split_api_version(api_version)
        logger.debug(
            "KubernetesCluster: namespace=%s resource=%s/%s",
            self._namespace,
            self._group,
            self._version,
        )

    @property
    def namespace(self) -> str:
        return self._namespace

    def create_resource(self, plural: str, namespace: str, body: dict[str, Any]) -> None:
        try:
            self._custom.create_namespaced_custom_object(
                group=self._group,
                version=self._version,
                namespace=namespace,
                plural=plural,
                body=body,
            )
        except ApiException as exc:
            raise ClusterApiError(exc.status, _error_message(exc)) from exc
        except (urllib3.exceptions.HTTPError, OSError) as exc:
            raise ClusterApiError(None, str(exc)) from exc

    def list_pods(self, namespace: str | None = None) -> list[PodIdentity]:
        ns = namespace or self._namespace
        try:
            pod_list = self._core.list_namespaced_pod(namespace=ns)
        except ApiException as exc:
            raise ClusterApiError(exc.status, _error_message(exc)) from exc
        except (urllib3.exceptions.HTTPError, OSError) as exc:
            raise ClusterApiError(None, str(exc)) from exc

        pods: list[PodIdentity] = []
        for item in pod_list.items or []:
            meta = item.metadata
            pods.append(
                PodIdentity(
                    name=meta.name,
                    namespace=meta.namespace or ns,
                    labels=dict(meta.labels or {}),
                )
            )
        return pods
