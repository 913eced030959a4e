"""Custom exception hierarchy for the merged filesystem layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Candidate


class MergedFSError(Exception):
    """Base exception for all mergedfs errors."""


class NoMountMatchError(MergedFSError):
    """Raised when no mount point matches the given virtual path."""


class CapabilityNotSupportedError(MergedFSError):
    """Raised when no candidate backend implements a requested operation."""


class PathNotFoundError(MergedFSError, FileNotFoundError):
    """Raised when a file or directory path does not exist."""


class BackendOperationError(MergedFSError):
    """One candidate backend failed while running an operation.

    The original exception is kept on ``error`` and chained as
    ``__cause__``.
    """

    def __init__(self, operation: str, candidate: Candidate, error: BaseException) -> None:
        super().__init__(
            f"{operation} failed on mount {candidate.mount_path!r} "
            f"for {candidate.subpath!r}: {error}"
        )
        self.operation = operation
        self.candidate = candidate
        self.error = error
        self.__cause__ = error


class AggregateBackendError(MergedFSError):
    """Every candidate backend failed; ``errors`` keeps them in candidate order."""

    def __init__(self, path: str, errors: list[BackendOperationError]) -> None:
        super().__init__(f"All {len(errors)} backend(s) failed for {path}")
        self.path = path
        self.errors = errors

    @property
    def first(self) -> BackendOperationError:
        return self.errors[0]
