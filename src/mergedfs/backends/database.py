"""DatabaseBackend — read-only files served from a SQL table."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import Session, SQLModel, select

from ..exceptions import PathNotFoundError
from ..types import FileStat
from ..utils import collapse_path

if TYPE_CHECKING:
    from sqlalchemy import Engine
    from sqlalchemy.ext.asyncio import AsyncEngine

    from mergedfs.models.files import FileRecordBase


class DatabaseBackend:
    """Database-backed backend — one row per file, directory or symlink.

    Rows are looked up by their collapsed absolute ``path``; a directory
    lists the ``name`` of every row whose ``parent_path`` is the
    directory.  The root ``/`` is a directory even without a row.

    Symlinks are stored, not followed: ``stat`` describes the link
    itself and ``read_file`` on a link raises ``OSError``.

    The blocking forms use a SQLModel ``Session`` on *engine*.  The
    ``async`` forms use an ``AsyncSession`` on *async_engine* when one
    is given, otherwise they run the blocking form in a worker thread.
    Works with any dialect SQLAlchemy supports.
    """

    def __init__(
        self,
        engine: Engine,
        async_engine: AsyncEngine | None = None,
        file_model: type[FileRecordBase] | None = None,
    ) -> None:
        from mergedfs.models.files import FileRecord

        self._engine = engine
        self._async_engine = async_engine
        self._file_model: type[FileRecordBase] = file_model or FileRecord  # type: ignore[assignment]
        self._async_session_factory: async_sessionmaker[AsyncSession] | None = None
        if async_engine is not None:
            self._async_session_factory = async_sessionmaker(
                async_engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )

    @property
    def file_model(self) -> type[FileRecordBase]:
        return self._file_model

    def create_tables(self) -> None:
        """Create the file table on the blocking engine if missing."""
        SQLModel.metadata.create_all(self._engine, tables=[self._file_model.__table__])  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _lookup(self, path: str) -> Any:
        model = self._file_model
        return select(model).where(model.path == path)

    def _children(self, path: str) -> Any:
        model = self._file_model
        return select(model.name).where(model.parent_path == path).order_by(model.name)

    # ------------------------------------------------------------------
    # Record interpretation (shared by both forms)
    # ------------------------------------------------------------------

    def _require(self, path: str, record: FileRecordBase | None) -> FileRecordBase:
        if record is None:
            raise PathNotFoundError(f"No such file or directory: {path}")
        return record

    def _to_stat(self, path: str, record: FileRecordBase | None) -> FileStat:
        if record is None and path == "/":
            return FileStat(path="/", name="", is_directory=True)
        record = self._require(path, record)
        return FileStat(
            path=record.path,
            name=record.name,
            is_directory=record.is_directory,
            is_symlink=record.link_target is not None,
            size_bytes=record.size_bytes,
            created_at=record.created_at,
            modified_at=record.updated_at,
        )

    def _check_listable(self, path: str, record: FileRecordBase | None) -> None:
        if record is None and path == "/":
            return
        record = self._require(path, record)
        if not record.is_directory:
            raise NotADirectoryError(f"Not a directory: {path}")

    def _to_content(self, path: str, record: FileRecordBase | None) -> bytes:
        record = self._require(path, record)
        if record.is_directory:
            raise IsADirectoryError(f"Is a directory: {path}")
        if record.link_target is not None:
            raise OSError(f"Is a symbolic link: {path}")
        return record.content or b""

    def _to_link(self, path: str, record: FileRecordBase | None) -> str:
        record = self._require(path, record)
        if record.link_target is None:
            raise OSError(f"Not a symbolic link: {path}")
        return record.link_target

    # ------------------------------------------------------------------
    # Blocking operations
    # ------------------------------------------------------------------

    def _get(self, path: str) -> FileRecordBase | None:
        with Session(self._engine) as session:
            return session.exec(self._lookup(path)).first()

    def stat(self, path: str) -> FileStat:
        path = collapse_path(path)
        return self._to_stat(path, self._get(path))

    def readdir(self, path: str) -> list[str]:
        path = collapse_path(path)
        with Session(self._engine) as session:
            self._check_listable(path, session.exec(self._lookup(path)).first())
            return list(session.exec(self._children(path)).all())

    def read_file(self, path: str) -> bytes:
        path = collapse_path(path)
        return self._to_content(path, self._get(path))

    def readlink(self, path: str) -> str:
        path = collapse_path(path)
        return self._to_link(path, self._get(path))

    # ------------------------------------------------------------------
    # Async operations
    # ------------------------------------------------------------------

    async def _aget(self, path: str) -> FileRecordBase | None:
        assert self._async_session_factory is not None
        async with self._async_session_factory() as session:
            result = await session.execute(self._lookup(path))
            return result.scalar_one_or_none()

    async def astat(self, path: str) -> FileStat:
        if self._async_session_factory is None:
            return await asyncio.to_thread(self.stat, path)
        path = collapse_path(path)
        return self._to_stat(path, await self._aget(path))

    async def areaddir(self, path: str) -> list[str]:
        if self._async_session_factory is None:
            return await asyncio.to_thread(self.readdir, path)
        path = collapse_path(path)
        async with self._async_session_factory() as session:
            result = await session.execute(self._lookup(path))
            self._check_listable(path, result.scalar_one_or_none())
            children = await session.execute(self._children(path))
            return list(children.scalars().all())

    async def aread_file(self, path: str) -> bytes:
        if self._async_session_factory is None:
            return await asyncio.to_thread(self.read_file, path)
        path = collapse_path(path)
        return self._to_content(path, await self._aget(path))

    async def areadlink(self, path: str) -> str:
        if self._async_session_factory is None:
            return await asyncio.to_thread(self.readlink, path)
        path = collapse_path(path)
        return self._to_link(path, await self._aget(path))
