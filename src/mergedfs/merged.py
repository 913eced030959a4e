"""MergedFileSystem — one namespace over many read-only backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .dispatch import READ_FILE, READDIR, READLINK, STAT, Dispatcher
from .exceptions import MergedFSError
from .mounts import MountRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .types import Candidate


class MergedFileSystem:
    """Routes read operations to every backend mounted over a path.

    Mounts map a path prefix to a backend, an alias string, an alias
    descriptor, or a list of those in fallback order::

        fs = MergedFileSystem({
            "/": LocalDiskBackend(),                  # fall through to disk
            "/mount-point-1": custom_backend,
            "/an-alias": "/some/path",                # /an-alias/x -> /some/path/x
            "/another": [backend_2, backend_3, "/some/fs/path"],
        })

    ``stat``, ``read_file`` and ``readlink`` return the first usable
    result.  ``readdir`` merges the listings of every backend.  Each
    has an ``async`` twin (``astat``, ``aread_file``, ...) that awaits
    the backends one after another.
    """

    def __init__(
        self,
        mounts: Mapping[str, Any] | None = None,
        default_backend: Any = None,
        *,
        aggregate_errors: bool = False,
        registry: MountRegistry | None = None,
    ) -> None:
        if registry is None:
            registry = MountRegistry(mounts, default_backend)
        elif mounts:
            registry.merge(mounts)
        self._registry = registry
        self._dispatcher = Dispatcher(registry, aggregate_errors=aggregate_errors)

    @property
    def registry(self) -> MountRegistry:
        return self._registry

    @property
    def aggregate_errors(self) -> bool:
        return self._dispatcher.aggregate_errors

    # ------------------------------------------------------------------
    # Mounts
    # ------------------------------------------------------------------

    def add_mounts(self, mounts: Mapping[str, Any]) -> None:
        """Merge mount points; new backends take priority at shared paths."""
        self._registry.merge(mounts)

    def add_mount(self, mount_path: str, backend_or_list: Any) -> None:
        """Merge a single mount point."""
        self._registry.merge_one(mount_path, backend_or_list)

    def clone(self) -> MergedFileSystem:
        """Copy with an independent mount table; backends are shared."""
        return MergedFileSystem(
            registry=self._registry.clone(),
            aggregate_errors=self.aggregate_errors,
        )

    def candidates(self, path: str) -> list[Candidate]:
        """The dispatch targets for *path*, in priority order."""
        return self._registry.resolve(path)

    # ------------------------------------------------------------------
    # Blocking operations
    # ------------------------------------------------------------------

    def stat(self, path: str) -> Any:
        return self._dispatcher.call(STAT, path)

    def readdir(self, path: str) -> list[str]:
        """Union of every backend's listing, deduplicated and sorted."""
        return self._dispatcher.call(READDIR, path)

    def read_file(self, path: str) -> bytes:
        return self._dispatcher.call(READ_FILE, path)

    def readlink(self, path: str) -> str:
        return self._dispatcher.call(READLINK, path)

    def exists(self, path: str) -> bool:
        """True when any backend can stat *path*."""
        try:
            self.stat(path)
        except (MergedFSError, OSError):
            return False
        return True

    # ------------------------------------------------------------------
    # Async operations
    # ------------------------------------------------------------------

    async def astat(self, path: str) -> Any:
        return await self._dispatcher.acall(STAT, path)

    async def areaddir(self, path: str) -> list[str]:
        """Union of every backend's listing, deduplicated and sorted."""
        return await self._dispatcher.acall(READDIR, path)

    async def aread_file(self, path: str) -> bytes:
        return await self._dispatcher.acall(READ_FILE, path)

    async def areadlink(self, path: str) -> str:
        return await self._dispatcher.acall(READLINK, path)

    async def aexists(self, path: str) -> bool:
        try:
            await self.astat(path)
        except (MergedFSError, OSError):
            return False
        return True


def create_merged_filesystem(
    mounts: Mapping[str, Any] | None = None,
    default_backend: Any = None,
    *,
    aggregate_errors: bool = False,
) -> MergedFileSystem:
    """Create a ``MergedFileSystem`` over *mounts*."""
    return MergedFileSystem(mounts, default_backend, aggregate_errors=aggregate_errors)
