"""LocalDiskBackend — read-only access to the host filesystem."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from ..types import FileStat
from ..utils import normalize_path


class LocalDiskBackend:
    """Native filesystem backend.

    Implements every blocking and ``async`` read operation.  Paths are
    taken relative to ``root`` (``/`` by default, i.e. the real
    filesystem), so ``LocalDiskBackend("/srv")`` serves ``/a.txt`` from
    ``/srv/a.txt``.  Unlike an alias, the backend does not check that
    ``..`` stays under ``root``.

    Failures are the native ``OSError`` subclasses
    (``FileNotFoundError``, ``NotADirectoryError``, ...), so they fall
    through to the next candidate like any other backend error.

    The ``async`` forms run the blocking call in a worker thread.
    """

    def __init__(self, root: Path | str = "/") -> None:
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"LocalDiskBackend(root={str(self.root)!r})"

    # =========================================================================
    # Path Resolution
    # =========================================================================

    def _resolve_path(self, virtual_path: str) -> Path:
        """Map a virtual path onto the host filesystem under ``root``."""
        rel = normalize_path(virtual_path).lstrip("/")
        if not rel:
            return self.root
        return self.root / rel

    # =========================================================================
    # Blocking Operations
    # =========================================================================

    def stat(self, path: str) -> FileStat:
        """Stat *path*, following symlinks."""
        resolved = self._resolve_path(path)
        return FileStat.from_stat_result(normalize_path(path), os.stat(resolved))

    def readdir(self, path: str) -> list[str]:
        return os.listdir(self._resolve_path(path))

    def read_file(self, path: str) -> bytes:
        return self._resolve_path(path).read_bytes()

    def readlink(self, path: str) -> str:
        return os.readlink(self._resolve_path(path))

    # =========================================================================
    # Async Operations
    # =========================================================================

    async def astat(self, path: str) -> FileStat:
        return await asyncio.to_thread(self.stat, path)

    async def areaddir(self, path: str) -> list[str]:
        return await asyncio.to_thread(self.readdir, path)

    async def aread_file(self, path: str) -> bytes:
        return await asyncio.to_thread(self.read_file, path)

    async def areadlink(self, path: str) -> str:
        return await asyncio.to_thread(self.readlink, path)
