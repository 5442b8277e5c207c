"""Shared fixtures for tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from quire.config import AppConfig
from quire.library.models import Chapter, Novel
from quire.library.storage import MemoryStorage, SqliteStorage
from quire.library.store import NovelStore
from quire.reading.session import ReadingSession


@pytest.fixture
def make_novel() -> Callable[..., Novel]:
    """Build a novel whose chapters get ids 1..n from the given bodies."""

    def _make(*contents: str, title: str = "Test Novel") -> Novel:
        return Novel(
            title=title,
            chapters=[
                Chapter(id=i, title=f"Chapter {i}", content=content)
                for i, content in enumerate(contents, start=1)
            ],
        )

    return _make


@pytest.fixture
def confirm_yes() -> Callable[[Chapter], bool]:
    return lambda chapter: True


@pytest.fixture
def confirm_no() -> Callable[[Chapter], bool]:
    return lambda chapter: False


@pytest.fixture
def novel(make_novel) -> Novel:
    return make_novel(
        "<p>The fox ran.</p><p>It was quick.</p>",
        "<p>A second fox appeared by the river.</p>",
        "<p>Night fell over the valley and the river.</p>",
        "<p>Morning came.</p>",
    )


@pytest.fixture
def storage(novel: Novel) -> MemoryStorage:
    mem = MemoryStorage()
    mem.save_novel(novel)
    return mem


@pytest.fixture
def store(storage: MemoryStorage) -> NovelStore:
    return NovelStore(storage)


@pytest.fixture
def session(store: NovelStore) -> ReadingSession:
    return ReadingSession(store)


@pytest.fixture
def sqlite_storage(tmp_path: Path) -> SqliteStorage:
    db = SqliteStorage(tmp_path / "test.db")
    yield db
    db.close()


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        data_dir=tmp_path / "data",
        config_dir=tmp_path / "config",
    )
