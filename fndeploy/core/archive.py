"""Zip archive access: the packaged form of a function service.

``load_archive`` parses archive bytes once; the resulting handle serves any
number of entry lookups.
"""

from __future__ import annotations

import io
import zipfile


class ArchiveEntryNotFoundError(KeyError):
    """Raised when a requested entry is not stored in the archive."""


class ArchiveEntryUnreadableError(ValueError):
    """Raised when an entry is stored but its data cannot be extracted."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot extract {path}: {reason}")
        self.path = path


class ZipArchive:
    """Read-only view over a parsed zip archive held in memory.

    Parameters
    ----------
    data:
        The raw archive bytes.
    """

    def __init__(self, data: bytes) -> None:
        self._zip = zipfile.ZipFile(io.BytesIO(data))
        self._names = set(self._zip.namelist())

    def names(self) -> list[str]:
        return sorted(self._names)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Return the text of the entry stored at *path*.

        Raises ``ArchiveEntryNotFoundError`` for an absent entry and
        ``ArchiveEntryUnreadableError`` for one that fails its CRC check, is
        encrypted, or uses an unsupported compression method.
        """
        if path not in self._names:
            raise ArchiveEntryNotFoundError(path)
        try:
            data = self._zip.read(path)
        except (zipfile.BadZipFile, NotImplementedError, RuntimeError) as exc:
            raise ArchiveEntryUnreadableError(path, str(exc)) from exc
        return data.decode(encoding)


def load_archive(data: bytes) -> ZipArchive:
    """Parse *data* as a zip archive.

    Raises ``zipfile.BadZipFile`` if the bytes are not a zip archive.
    """
    return ZipArchive(data)
