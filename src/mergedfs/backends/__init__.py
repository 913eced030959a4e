"""Bundled backends — native disk and SQL table."""

from mergedfs.backends.database import DatabaseBackend
from mergedfs.backends.local_disk import LocalDiskBackend

__all__ = [
    "DatabaseBackend",
    "LocalDiskBackend",
]
