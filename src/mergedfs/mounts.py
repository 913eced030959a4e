"""MountRegistry — mount table, candidate resolution, alias rewriting."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .exceptions import NoMountMatchError
from .types import AliasDescriptor, Candidate
from .utils import ensure_list, join_alias, normalize_path

logger = logging.getLogger(__name__)


def _coerce_descriptor(descriptor: Any) -> Any:
    """Turn string and mapping aliases into ``AliasDescriptor``.

    Concrete backends are returned unchanged.
    """
    if isinstance(descriptor, str):
        return AliasDescriptor(alias=normalize_path(descriptor))
    if isinstance(descriptor, AliasDescriptor):
        return AliasDescriptor(
            alias=normalize_path(descriptor.alias), backend=descriptor.backend
        )
    if isinstance(descriptor, Mapping) and "alias" in descriptor:
        backend = descriptor.get("backend", descriptor.get("filesystem"))
        return AliasDescriptor(alias=normalize_path(descriptor["alias"]), backend=backend)
    return descriptor


def _normalize_mounts(mounts: Mapping[str, Any]) -> dict[str, list[Any]]:
    """Normalize keys and descriptors of a registration mapping.

    Keys that normalize to the same mount path are concatenated in
    mapping order.
    """
    normalized: dict[str, list[Any]] = {}
    for mount_path, descriptors in mounts.items():
        key = normalize_path(mount_path)
        coerced = [_coerce_descriptor(d) for d in ensure_list(descriptors)]
        normalized.setdefault(key, []).extend(coerced)
    return normalized


class MountRegistry:
    """Ordered table of mount paths to backend descriptor lists.

    The table is kept in descending lexicographic order of mount path,
    which puts ``/a/b`` before ``/a`` before ``/``.  This is not a
    longest-prefix guarantee: ``/b`` sorts before ``/ab``.

    Registrations only ever accumulate.  ``merge`` puts new descriptors
    ahead of existing ones at the same mount path, so a later
    registration takes priority without hiding the earlier ones.
    """

    def __init__(
        self,
        mounts: Mapping[str, Any] | None = None,
        default_backend: Any = None,
    ) -> None:
        if default_backend is None:
            from .backends.local_disk import LocalDiskBackend

            default_backend = LocalDiskBackend()
        self.default_backend = default_backend
        self._table: dict[str, list[Any]] = {}
        if mounts:
            self._table = self._sorted(_normalize_mounts(mounts))

    @staticmethod
    def _sorted(table: Mapping[str, list[Any]]) -> dict[str, list[Any]]:
        return {path: table[path] for path in sorted(table, reverse=True)}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def merge(self, mounts: Mapping[str, Any]) -> None:
        """Merge new mount points into the table.

        For a mount path that already exists, the new descriptors are
        placed before the existing ones.  The table is rebuilt rather
        than mutated so per-path lists are never shared with a clone.
        """
        merged = {path: list(descriptors) for path, descriptors in self._table.items()}
        for mount_path, descriptors in _normalize_mounts(mounts).items():
            merged[mount_path] = descriptors + merged.get(mount_path, [])
            logger.debug(
                "Merged %d descriptor(s) at %s (%d total)",
                len(descriptors),
                mount_path,
                len(merged[mount_path]),
            )
        self._table = self._sorted(merged)

    def merge_one(self, mount_path: str, backend_or_list: Any) -> None:
        """Merge a single mount point."""
        self.merge({mount_path: backend_or_list})

    def clone(self) -> MountRegistry:
        """Return a registry with an independent table sharing the backends."""
        other = MountRegistry.__new__(MountRegistry)
        other.default_backend = self.default_backend
        other._table = {path: list(descriptors) for path, descriptors in self._table.items()}
        return other

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def mount_paths(self) -> list[str]:
        """Registered mount paths in dispatch order."""
        return list(self._table)

    def descriptors(self, mount_path: str) -> list[Any]:
        """Copy of the descriptor list registered at *mount_path*."""
        return list(self._table.get(normalize_path(mount_path), []))

    def has_mount(self, mount_path: str) -> bool:
        return normalize_path(mount_path) in self._table

    def __contains__(self, mount_path: object) -> bool:
        return isinstance(mount_path, str) and self.has_mount(mount_path)

    def __len__(self) -> int:
        return len(self._table)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> list[Candidate]:
        """Resolve *path* to every candidate in dispatch order.

        Candidates from all matching mount paths are returned, not only
        the first, so a broader mount such as ``/`` stays reachable when
        a narrower one fails.
        """
        path = normalize_path(path)
        candidates: list[Candidate] = []

        for mount_path, descriptors in self._table.items():
            if not path.startswith(mount_path):
                continue

            subpath = path if mount_path == "/" else path[len(mount_path):]

            for descriptor in descriptors:
                if isinstance(descriptor, AliasDescriptor):
                    backend = descriptor.backend
                    if backend is None:
                        backend = self.default_backend
                    candidates.append(
                        Candidate(
                            mount_path=mount_path,
                            backend=backend,
                            subpath=join_alias(descriptor.alias, subpath),
                            alias=descriptor.alias,
                        )
                    )
                else:
                    candidates.append(
                        Candidate(mount_path=mount_path, backend=descriptor, subpath=subpath)
                    )

        if not candidates:
            logger.debug("No mount points match: %s", path)
            raise NoMountMatchError(f"No mount points match: {path}")

        return candidates
