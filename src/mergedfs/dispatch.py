"""Dispatch — run one operation across candidate backends.

Each operation is described by an :class:`Operation`: the capability
protocols for its blocking and ``async`` forms, and an optional merge
function.  Operations without a merge function use the first-success
policy: the first candidate returning a non-``None`` value wins and the
remaining candidates are never called.  Operations with a merge
function call every candidate and combine the usable results.

Both calling styles drive the same :class:`_Run` state machine, one
``advance`` per candidate completion, so for identical inputs they stop
at the same candidate and merge the same results in the same order.
The ``async`` style awaits candidates strictly one after another.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .exceptions import (
    AggregateBackendError,
    BackendOperationError,
    CapabilityNotSupportedError,
    PathNotFoundError,
)
from .protocol import (
    SupportsAsyncReadDir,
    SupportsAsyncReadFile,
    SupportsAsyncReadLink,
    SupportsAsyncStat,
    SupportsReadDir,
    SupportsReadFile,
    SupportsReadLink,
    SupportsStat,
)
from .utils import normalize_path

if TYPE_CHECKING:
    from collections.abc import Callable

    from .mounts import MountRegistry
    from .types import Candidate

logger = logging.getLogger(__name__)


# =============================================================================
# Operations and merge policies
# =============================================================================


def merge_listings(results: list[Any]) -> list[str]:
    """Flatten directory listings, drop duplicates, and sort."""
    entries: set[str] = set()
    for listing in results:
        if listing is not None:
            entries.update(listing)
    return sorted(entries)


@dataclass(frozen=True)
class Operation:
    """A dispatchable read operation."""

    name: str
    async_name: str
    protocol: type
    async_protocol: type
    merge: Callable[[list[Any]], Any] | None = None
    """Combines every candidate's result; ``None`` means first success wins."""

    @property
    def returns_first(self) -> bool:
        return self.merge is None

    def method_for(self, backend: Any, *, asynchronous: bool = False) -> Callable[..., Any] | None:
        """Return the backend's bound method for this operation, or ``None``."""
        if asynchronous:
            if isinstance(backend, self.async_protocol):
                return getattr(backend, self.async_name)
            return None
        if isinstance(backend, self.protocol):
            return getattr(backend, self.name)
        return None


STAT = Operation("stat", "astat", SupportsStat, SupportsAsyncStat)
READ_FILE = Operation("read_file", "aread_file", SupportsReadFile, SupportsAsyncReadFile)
READLINK = Operation("readlink", "areadlink", SupportsReadLink, SupportsAsyncReadLink)
READDIR = Operation(
    "readdir", "areaddir", SupportsReadDir, SupportsAsyncReadDir, merge=merge_listings
)

OPERATIONS: dict[str, Operation] = {op.name: op for op in (STAT, READDIR, READ_FILE, READLINK)}


# =============================================================================
# Run state
# =============================================================================


class _Run:
    """Per-call state: candidate index, ordered accumulators, stop flag.

    Never shared between calls.
    """

    def __init__(
        self,
        operation: Operation,
        path: str,
        candidates: list[Candidate],
        aggregate_errors: bool,
    ) -> None:
        self.operation = operation
        self.path = path
        self.candidates = candidates
        self.aggregate_errors = aggregate_errors
        self.index = 0
        self.errors: list[BackendOperationError | None] = []
        self.results: list[Any] = []
        self.stopped = False
        self.implemented = False

    @property
    def done(self) -> bool:
        return self.stopped or self.index >= len(self.candidates)

    @property
    def current(self) -> Candidate:
        return self.candidates[self.index]

    def advance(
        self,
        result: Any = None,
        error: Exception | None = None,
        *,
        implemented: bool = True,
    ) -> None:
        """Record the current candidate's completion and move to the next."""
        candidate = self.current
        failure: BackendOperationError | None = None
        if error is not None:
            failure = BackendOperationError(self.operation.name, candidate, error)
            logger.debug(
                "%s failed on %s (%s): %r",
                self.operation.name,
                candidate.mount_path,
                candidate.subpath,
                error,
            )
            result = None

        self.errors.append(failure)
        self.results.append(result)
        self.implemented = self.implemented or implemented
        self.index += 1

        if self.operation.returns_first and result is not None:
            self.stopped = True
            logger.debug(
                "%s %s answered by %s (%s)",
                self.operation.name,
                self.path,
                candidate.mount_path,
                candidate.subpath,
            )

    def outcome(self) -> Any:
        """Return the call's result or raise its single failure."""
        if self.stopped:
            return self.results[-1]

        if self.operation.merge is not None and any(r is not None for r in self.results):
            return self.operation.merge(self.results)

        failures = [f for f in self.errors if f is not None]
        if failures:
            if self.aggregate_errors:
                raise AggregateBackendError(self.path, failures) from failures[0].error
            raise failures[0].error

        if not self.implemented:
            raise CapabilityNotSupportedError(
                f"No backend mounted for {self.path} supports {self.operation.name}"
            )
        raise PathNotFoundError(f"No backend returned a result for {self.operation.name}: {self.path}")


# =============================================================================
# Dispatcher
# =============================================================================


class Dispatcher:
    """Runs operations over the candidates a registry resolves.

    ``call`` is the blocking dispatcher, ``acall`` the ``async`` one.
    With ``aggregate_errors`` a complete failure raises
    ``AggregateBackendError``; otherwise the first recorded backend
    exception is raised unchanged.
    """

    def __init__(self, registry: MountRegistry, *, aggregate_errors: bool = False) -> None:
        self.registry = registry
        self.aggregate_errors = aggregate_errors

    def _start(self, operation: Operation, path: str) -> _Run:
        path = normalize_path(path)
        candidates = self.registry.resolve(path)
        return _Run(operation, path, candidates, self.aggregate_errors)

    def call(self, operation: Operation, path: str) -> Any:
        """Run the blocking form of *operation* for *path*."""
        run = self._start(operation, path)

        while not run.done:
            candidate = run.current
            method = operation.method_for(candidate.backend)
            if method is None:
                run.advance(implemented=False)
                continue
            try:
                result = method(candidate.subpath)
            except Exception as exc:
                run.advance(error=exc)
                continue
            run.advance(result)

        return run.outcome()

    async def acall(self, operation: Operation, path: str) -> Any:
        """Run the ``async`` form of *operation* for *path*, one candidate at a time."""
        run = self._start(operation, path)

        while not run.done:
            candidate = run.current
            method = operation.method_for(candidate.backend, asynchronous=True)
            if method is None:
                run.advance(implemented=False)
                continue
            try:
                result = method(candidate.subpath)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                run.advance(error=exc)
                continue
            run.advance(result)

        return run.outcome()
