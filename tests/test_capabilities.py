"""Tests for the capability protocols and how dispatch gates on them."""

from __future__ import annotations

import pytest

from mergedfs.backends.database import DatabaseBackend
from mergedfs.backends.local_disk import LocalDiskBackend
from mergedfs.dispatch import READ_FILE, READDIR, READLINK, STAT
from mergedfs.merged import MergedFileSystem
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

ALL_PROTOCOLS = [
    SupportsStat,
    SupportsReadDir,
    SupportsReadFile,
    SupportsReadLink,
    SupportsAsyncStat,
    SupportsAsyncReadDir,
    SupportsAsyncReadFile,
    SupportsAsyncReadLink,
]


class MinimalBackend:
    """Only serves file content, synchronously."""

    def read_file(self, path: str) -> bytes:
        return b"minimal"


class AsyncLinkBackend:
    """Only resolves symlinks, asynchronously."""

    async def areadlink(self, path: str) -> str:
        return "/target"


# =========================================================================
# Protocol membership
# =========================================================================


class TestProtocols:
    @pytest.mark.parametrize("protocol", [*ALL_PROTOCOLS, StorageBackend])
    def test_local_disk_full(self, protocol):
        assert isinstance(LocalDiskBackend(), protocol)

    @pytest.mark.parametrize("protocol", [*ALL_PROTOCOLS, StorageBackend])
    def test_database_full(self, engine, protocol):
        assert isinstance(DatabaseBackend(engine), protocol)

    def test_merged_filesystem_is_backend(self):
        assert isinstance(MergedFileSystem({}), StorageBackend)

    def test_minimal(self):
        backend = MinimalBackend()
        assert isinstance(backend, SupportsReadFile)
        assert not isinstance(backend, SupportsAsyncReadFile)
        assert not isinstance(backend, SupportsStat)
        assert not isinstance(backend, StorageBackend)

    def test_async_only(self):
        backend = AsyncLinkBackend()
        assert isinstance(backend, SupportsAsyncReadLink)
        assert not isinstance(backend, SupportsReadLink)

    def test_plain_object(self):
        assert not any(isinstance(object(), p) for p in ALL_PROTOCOLS)


# =========================================================================
# Gating
# =========================================================================


class TestGating:
    def test_method_for(self):
        backend = MinimalBackend()
        assert READ_FILE.method_for(backend) is not None
        assert READ_FILE.method_for(backend, asynchronous=True) is None
        for op in (STAT, READDIR, READLINK):
            assert op.method_for(backend) is None

    def test_blocking_call_skips_async_only(self):
        fs = MergedFileSystem({"/": [AsyncLinkBackend(), LocalDiskBackend()]})
        with pytest.raises(OSError):
            fs.readlink("/definitely/not/a/link")

    async def test_async_call_uses_async_only(self):
        fs = MergedFileSystem({"/": [MinimalBackend(), AsyncLinkBackend()]})
        assert await fs.areadlink("/x") == "/target"

    def test_capabilities_mix(self):
        fs = MergedFileSystem({"/": [AsyncLinkBackend(), MinimalBackend()]})
        assert fs.read_file("/x") == b"minimal"
