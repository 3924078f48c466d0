"""Artifact Source Resolver — reads a function's handler and manifest text.

Two interchangeable sources sit behind the ``ArtifactSource`` protocol:

1. **Archive** (a package path is given): entries are read from a zip
   archive, parsed once per run through an ``ArchiveCache``.
2. **Filesystem** (no package path): files are read relative to the
   service root, ``.`` when unset.

The source is chosen once per run by ``select_source``; resolution never
mixes the two.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from fndeploy.core.archive import (
    ArchiveEntryNotFoundError,
    ArchiveEntryUnreadableError,
    ZipArchive,
    load_archive,
)
from fndeploy.core.hasher import sha256_hex
from fndeploy.core.runtimes import artifact_pair_for
from fndeploy.models.functions import FunctionConfig, ResolvedArtifacts

logger = logging.getLogger(__name__)


class ArtifactNotFoundError(RuntimeError):
    """Raised when an artifact cannot be read from its source."""

    def __init__(self, path: str, location: str) -> None:
        super().__init__(f"Unable to read {path} from {location}")
        self.path = path
        self.location = location


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class ArtifactSource(Protocol):
    """Anything that can return the text stored at a relative path."""

    def read_text(self, relative_path: str) -> str:
        """Return the text at *relative_path* or raise ArtifactNotFoundError."""
        ...


# ---------------------------------------------------------------------------
# Archive memoization
# ---------------------------------------------------------------------------


class ArchiveCache:
    """Per-run memo of parsed archives, keyed by content identity.

    One instance lives for exactly one deployment run. Looking up the same
    archive bytes twice returns the same parsed handle.

    Parameters
    ----------
    loader:
        Parses archive bytes into a handle. Defaults to ``load_archive``.
    """

    def __init__(self, loader: Callable[[bytes], ZipArchive] = load_archive) -> None:
        self._loader = loader
        self._archives: dict[str, ZipArchive] = {}
        self.parse_count = 0

    def get(self, data: bytes) -> ZipArchive:
        digest = sha256_hex(data)
        archive = self._archives.get(digest)
        if archive is None:
            archive = self._loader(data)
            self.parse_count += 1
            self._archives[digest] = archive
            logger.debug("Parsed archive sha256:%s", digest[:16])
        return archive

    def __len__(self) -> int:
        return len(self._archives)


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


class FilesystemArtifactSource:
    """Reads artifacts from a plain directory tree."""

    def __init__(self, root: Path | str = ".") -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def read_text(self, relative_path: str) -> str:
        path = self._root / relative_path
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ArtifactNotFoundError(relative_path, str(self._root)) from exc


class ArchiveArtifactSource:
    """Reads artifacts from entries of a zip archive.

    The archive file is read on first lookup, not at construction.
    """

    def __init__(self, archive_path: Path | str, cache: ArchiveCache) -> None:
        self._archive_path = Path(archive_path)
        self._cache = cache

    @property
    def archive_path(self) -> Path:
        return self._archive_path

    def _archive(self) -> ZipArchive:
        try:
            data = self._archive_path.read_bytes()
            return self._cache.get(data)
        except (OSError, zipfile.BadZipFile) as exc:
            raise ArtifactNotFoundError(
                str(self._archive_path), "the filesystem"
            ) from exc

    def read_text(self, relative_path: str) -> str:
        archive = self._archive()
        try:
            return archive.read_text(relative_path)
        except (
            ArchiveEntryNotFoundError,
            ArchiveEntryUnreadableError,
            UnicodeDecodeError,
        ) as exc:
            raise ArtifactNotFoundError(
                relative_path, str(self._archive_path)
            ) from exc


def select_source(
    package_path: Path | str | None,
    service_root: Path | str | None = None,
    cache: ArchiveCache | None = None,
) -> ArtifactSource:
    """Pick the archive source when a package is given, else the filesystem."""
    if package_path:
        return ArchiveArtifactSource(package_path, cache or ArchiveCache())
    return FilesystemArtifactSource(service_root or ".")


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_artifacts(function: FunctionConfig, source: ArtifactSource) -> ResolvedArtifacts:
    """Read the handler source and dependency manifest for *function*.

    Raises
    ------
    UnsupportedRuntimeError
        Before any read, if the runtime has no registered family.
    ArtifactNotFoundError
        If the handler source cannot be read. A missing manifest is
        tolerated and resolves to empty content.
    """
    pair = artifact_pair_for(function)
    handler_content = source.read_text(pair.handler_path)
    try:
        deps_content = source.read_text(pair.deps_path)
    except ArtifactNotFoundError:
        logger.debug(
            "No %s found for function %s; deploying without dependencies.",
            pair.deps_path,
            function.name,
        )
        deps_content = ""
    return ResolvedArtifacts(handler_content=handler_content, deps_content=deps_content)
