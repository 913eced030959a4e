"""FileRecord model for the database backend.

Provides ``FileRecordBase``, a non-table base class.  Subclass it with
``table=True`` and a custom ``__tablename__`` to serve files from a
different table.
"""

from __future__ import annotations

import posixpath
import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, LargeBinary
from sqlmodel import Field, SQLModel

from mergedfs.utils import collapse_path


class FileRecordBase(SQLModel):
    """Base fields for a stored file, directory or symlink."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    path: str = Field(index=True, unique=True)
    parent_path: str = Field(default="", index=True)
    name: str = Field(default="")
    is_directory: bool = Field(default=False)
    link_target: str | None = Field(default=None)
    content: bytes | None = Field(default=None, sa_type=LargeBinary)
    size_bytes: int = Field(default=0)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
    )

    @property
    def is_symlink(self) -> bool:
        return self.link_target is not None


class FileRecord(FileRecordBase, table=True):
    """Default file table — ``mergedfs_files``."""

    __tablename__ = "mergedfs_files"


def new_file_record(
    path: str,
    content: bytes | str | None = None,
    *,
    is_directory: bool = False,
    link_target: str | None = None,
    model: type[FileRecordBase] = FileRecord,
) -> FileRecordBase:
    """Build a record with ``parent_path``, ``name`` and ``size_bytes`` filled in."""
    path = collapse_path(path)
    if isinstance(content, str):
        content = content.encode()
    parent_path = "" if path == "/" else posixpath.dirname(path)
    return model(
        path=path,
        parent_path=parent_path,
        name=posixpath.basename(path),
        is_directory=is_directory,
        link_target=link_target,
        content=content,
        size_bytes=len(content) if content is not None else 0,
    )
