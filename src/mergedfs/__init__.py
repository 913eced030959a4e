"""mergedfs: one read-only filesystem namespace over many backends.

Mount backends, path aliases and fallbacks under path prefixes, then
stat, list, read and readlink through a single interface, blocking or
``async``.
"""

__version__ = "0.1.0"

from mergedfs.backends import DatabaseBackend, LocalDiskBackend
from mergedfs.dispatch import OPERATIONS, Dispatcher, Operation, merge_listings
from mergedfs.exceptions import (
    AggregateBackendError,
    BackendOperationError,
    CapabilityNotSupportedError,
    MergedFSError,
    NoMountMatchError,
    PathNotFoundError,
)
from mergedfs.merged import MergedFileSystem, create_merged_filesystem
from mergedfs.models import FileRecord, FileRecordBase, new_file_record
from mergedfs.mounts import MountRegistry
from mergedfs.protocol import (
    StorageBackend,
    SupportsAsyncReadDir,
    SupportsAsyncReadFile,
    SupportsAsyncReadLink,
    SupportsAsyncStat,
    SupportsReadDir,
    SupportsReadFile,
    SupportsReadLink,
    SupportsStat,
)
from mergedfs.types import AliasDescriptor, Candidate, FileStat
from mergedfs.utils import normalize_path

__all__ = [
    "OPERATIONS",
    "AggregateBackendError",
    "AliasDescriptor",
    "BackendOperationError",
    "Candidate",
    "CapabilityNotSupportedError",
    "DatabaseBackend",
    "Dispatcher",
    "FileRecord",
    "FileRecordBase",
    "FileStat",
    "LocalDiskBackend",
    "MergedFSError",
    "MergedFileSystem",
    "MountRegistry",
    "NoMountMatchError",
    "Operation",
    "PathNotFoundError",
    "StorageBackend",
    "SupportsAsyncReadDir",
    "SupportsAsyncReadFile",
    "SupportsAsyncReadLink",
    "SupportsAsyncStat",
    "SupportsReadDir",
    "SupportsReadFile",
    "SupportsReadLink",
    "SupportsStat",
    "__version__",
    "create_merged_filesystem",
    "merge_listings",
    "new_file_record",
    "normalize_path",
]
