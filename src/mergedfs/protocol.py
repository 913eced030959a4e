"""Backend capability protocols — runtime-checkable interfaces.

A backend implements any subset of four read operations, each in a
blocking form and an ``async`` form.  Every form is its own opt-in
protocol so a backend can, for example, list directories synchronously
only.  The dispatcher checks membership once per candidate and treats a
missing form as an absent result.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# ------------------------------------------------------------------
# Blocking forms
# ------------------------------------------------------------------


@runtime_checkable
class SupportsStat(Protocol):
    def stat(self, path: str) -> Any: ...


@runtime_checkable
class SupportsReadDir(Protocol):
    def readdir(self, path: str) -> list[str]: ...


@runtime_checkable
class SupportsReadFile(Protocol):
    def read_file(self, path: str) -> bytes: ...


@runtime_checkable
class SupportsReadLink(Protocol):
    def readlink(self, path: str) -> str: ...


# ------------------------------------------------------------------
# Async forms
# ------------------------------------------------------------------


@runtime_checkable
class SupportsAsyncStat(Protocol):
    async def astat(self, path: str) -> Any: ...


@runtime_checkable
class SupportsAsyncReadDir(Protocol):
    async def areaddir(self, path: str) -> list[str]: ...


@runtime_checkable
class SupportsAsyncReadFile(Protocol):
    async def aread_file(self, path: str) -> bytes: ...


@runtime_checkable
class SupportsAsyncReadLink(Protocol):
    async def areadlink(self, path: str) -> str: ...


@runtime_checkable
class StorageBackend(
    SupportsStat,
    SupportsReadDir,
    SupportsReadFile,
    SupportsReadLink,
    SupportsAsyncStat,
    SupportsAsyncReadDir,
    SupportsAsyncReadFile,
    SupportsAsyncReadLink,
    Protocol,
):
    """A backend implementing every operation in both forms."""
