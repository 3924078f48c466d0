"""Shared test fixtures for fndeploy."""

from __future__ import annotations

import io
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from fndeploy.core.cluster import ClusterApiError
from fndeploy.models.functions import FunctionConfig
from fndeploy.models.outcomes import PodIdentity


# ---------------------------------------------------------------------------
# Fake cluster
# ---------------------------------------------------------------------------


class RecordingCluster:
    """In-memory ClusterApi that records every call.

    ``create_errors`` maps a resource name to the ClusterApiError its create
    call should raise. ``pods`` is the snapshot returned by ``list_pods``;
    ``list_error`` makes ``list_pods`` fail instead.
    """

    def __init__(
        self,
        namespace: str = "default",
        *,
        create_errors: dict[str, ClusterApiError] | None = None,
        pods: list[PodIdentity] | None = None,
        list_error: ClusterApiError | None = None,
    ) -> None:
        self._namespace = namespace
        self.create_errors = create_errors or {}
        self.pods = pods or []
        self.list_error = list_error
        self.created: list[tuple[str, str, dict[str, Any]]] = []
        self.pod_queries: list[str | None] = []

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def call_count(self) -> int:
        return len(self.created) + len(self.pod_queries)

    def create_resource(self, plural: str, namespace: str, body: dict[str, Any]) -> None:
        self.created.append((plural, namespace, body))
        error = self.create_errors.get(body["metadata"]["name"])
        if error is not None:
            raise error

    def list_pods(self, namespace: str | None = None) -> list[PodIdentity]:
        self.pod_queries.append(namespace)
        if self.list_error is not None:
            raise self.list_error
        return list(self.pods)


@pytest.fixture
def cluster() -> RecordingCluster:
    """Provide an empty recording cluster in the ``default`` namespace."""
    return RecordingCluster()


@pytest.fixture
def make_cluster() -> Callable[..., RecordingCluster]:
    """Factory fixture: build a RecordingCluster with custom behaviour."""
    return RecordingCluster


# ---------------------------------------------------------------------------
# Artifacts
# ---------------------------------------------------------------------------


def zip_bytes(entries: dict[str, str]) -> bytes:
    """Build an in-memory zip archive from ``{path: text}``."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, text in entries.items():
            zf.writestr(name, text)
    return buffer.getvalue()


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: write a zip archive under tmp_path and return its path."""

    def _factory(entries: dict[str, str], name: str = "service.zip") -> Path:
        path = tmp_path / name
        path.write_bytes(zip_bytes(entries))
        return path

    return _factory


@pytest.fixture
def make_corrupt_archive(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: like make_archive, but one entry fails its CRC check.

    Entries are stored uncompressed, so flipping a bit in the stored text
    leaves the archive parseable while the named entry no longer verifies.
    """

    def _factory(
        entries: dict[str, str], corrupt: str, name: str = "corrupt.zip"
    ) -> Path:
        data = zip_bytes(entries)
        stored = entries[corrupt].encode("utf-8")
        assert data.count(stored) == 1, "corrupted entry text must be unique"
        flipped = bytes([stored[0] ^ 0x01]) + stored[1:]
        path = tmp_path / name
        path.write_bytes(data.replace(stored, flipped))
        return path

    return _factory


@pytest.fixture
def service_dir(tmp_path: Path) -> Path:
    """A plain service tree with a handler and a requirements file."""
    root = tmp_path / "service"
    root.mkdir()
    (root / "handler.py").write_text("def hello(event, context):\n    return 'hi'\n")
    (root / "requirements.txt").write_text("requests==2.31.0\n")
    return root


@pytest.fixture
def make_function() -> Callable[..., FunctionConfig]:
    """Factory fixture: build a FunctionConfig with sensible defaults."""

    def _factory(
        name: str = "hello",
        handler: str = "handler.hello",
        runtime: str = "python3.6",
    ) -> FunctionConfig:
        return FunctionConfig(name=name, handler=handler, runtime=runtime)

    return _factory
