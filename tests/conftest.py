"""Shared fixtures for mergedfs tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel, create_engine

import mergedfs.models  # noqa: F401  (registers the file table)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator
    from pathlib import Path

    from sqlalchemy import Engine
    from sqlalchemy.ext.asyncio import AsyncEngine

TEMP_FILENAME = "test-file.txt"
TEMP_CONTENT = b"foobar"


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """A directory holding a single ``test-file.txt`` containing ``foobar``."""
    d = tmp_path / "temp-MergedFS"
    d.mkdir()
    (d / TEMP_FILENAME).write_bytes(TEMP_CONTENT)
    return d


@pytest.fixture
def temp_file(temp_dir: Path) -> Path:
    return temp_dir / TEMP_FILENAME


@pytest.fixture
def engine(tmp_path: Path) -> Iterator[Engine]:
    """File-backed SQLite engine with all tables created.

    A file rather than ``sqlite://`` so ``async_engine`` sees the same data.
    """
    eng = create_engine(
        f"sqlite:///{tmp_path / 'files.db'}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
async def async_engine(tmp_path: Path, engine: Engine) -> AsyncIterator[AsyncEngine]:
    """aiosqlite engine over the same database file as ``engine``."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'files.db'}", echo=False)
    yield eng
    await eng.dispose()
