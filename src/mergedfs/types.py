"""Value types: FileStat, AliasDescriptor, Candidate."""

from __future__ import annotations

import stat as stat_module
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import os


@dataclass
class FileStat:
    """File/directory metadata returned by the bundled backends."""

    path: str
    name: str
    is_directory: bool
    is_symlink: bool = False
    size_bytes: int = 0
    mode: int | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None

    def is_file(self) -> bool:
        return not self.is_directory and not self.is_symlink

    def is_dir(self) -> bool:
        return self.is_directory

    def is_symbolic_link(self) -> bool:
        return self.is_symlink

    @classmethod
    def from_stat_result(cls, path: str, result: os.stat_result) -> FileStat:
        """Build a ``FileStat`` from an ``os.stat`` / ``os.lstat`` result."""
        return cls(
            path=path,
            name=path.rstrip("/").rsplit("/", 1)[-1],
            is_directory=stat_module.S_ISDIR(result.st_mode),
            is_symlink=stat_module.S_ISLNK(result.st_mode),
            size_bytes=result.st_size,
            mode=result.st_mode,
            created_at=datetime.fromtimestamp(result.st_ctime, tz=UTC),
            modified_at=datetime.fromtimestamp(result.st_mtime, tz=UTC),
        )


@dataclass(frozen=True)
class AliasDescriptor:
    """Redirects a subpath under *alias* before dispatch.

    ``backend`` of ``None`` means the registry's default root backend.
    """

    alias: str
    backend: Any = None


@dataclass(frozen=True)
class Candidate:
    """One concrete dispatch target for a request path."""

    mount_path: str
    backend: Any
    subpath: str
    alias: str | None = None
    """Alias target the subpath was rewritten with, if any."""
