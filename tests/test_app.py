"""Smoke tests driving the textual front end."""

from __future__ import annotations

from pathlib import Path

import pytest

from quire.app import QuireApp
from quire.config import AppConfig
from quire.library.models import Novel
from quire.library.storage import MemoryStorage
from quire.ui.screens.dialogs import ConfirmDeleteScreen


@pytest.mark.asyncio
async def test_imports_file_on_start(config: AppConfig, tmp_path: Path):
    f = tmp_path / "story.md"
    f.write_text("# One\n\nHello fox.\n\n# Two\n\nGoodbye fox.")
    storage = MemoryStorage()
    app = QuireApp(config=config, open_file=str(f), storage=storage)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.store.title == "story"
        assert [ch.title for ch in app.store.chapters] == ["One", "Two"]
    assert storage.load_novel().title == "story"


@pytest.mark.asyncio
async def test_unsupported_file_keeps_novel(
    config: AppConfig, tmp_path: Path, storage: MemoryStorage, novel: Novel
):
    f = tmp_path / "scan.pdf"
    f.write_bytes(b"%PDF-1.4")
    app = QuireApp(config=config, open_file=str(f), storage=storage)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.store.title == novel.title


@pytest.mark.asyncio
async def test_keys_navigate_and_bookmark(config: AppConfig, storage: MemoryStorage):
    app = QuireApp(config=config, storage=storage)
    async with app.run_test() as pilot:
        await pilot.press("full_stop")
        await pilot.pause()
        assert app.session.current_index == 1
        await pilot.press("m")
        await pilot.pause()
        assert app.store.get_chapter(2).bookmarked is True
        await pilot.press("comma")
        await pilot.pause()
        assert app.session.current_index == 0
    assert storage.load_novel().chapters[1].bookmarked is True


@pytest.mark.asyncio
async def test_delete_without_confirmation_prompt(tmp_path: Path, storage: MemoryStorage):
    config = AppConfig(
        data_dir=tmp_path / "data", config_dir=tmp_path / "config", confirm_delete=False
    )
    app = QuireApp(config=config, storage=storage)
    async with app.run_test() as pilot:
        await pilot.press("D")
        await pilot.pause()
        assert [ch.id for ch in app.store.chapters] == [2, 3, 4]


@pytest.mark.asyncio
async def test_delete_dialog_keep_and_confirm(config: AppConfig, storage: MemoryStorage):
    app = QuireApp(config=config, storage=storage)
    async with app.run_test() as pilot:
        await pilot.press("D")
        await pilot.pause()
        assert isinstance(app.screen, ConfirmDeleteScreen)
        assert len(app.screen.query("#chapter-delete-loss")) == 0
        await pilot.press("n")
        await pilot.pause()
        assert [ch.id for ch in app.store.chapters] == [1, 2, 3, 4]

        await pilot.press("D")
        await pilot.pause()
        await pilot.press("y")
        await pilot.pause()
        assert [ch.id for ch in app.store.chapters] == [2, 3, 4]


@pytest.mark.asyncio
async def test_delete_dialog_warns_about_bookmark_and_notes(
    config: AppConfig, storage: MemoryStorage
):
    app = QuireApp(config=config, storage=storage)
    async with app.run_test() as pilot:
        app.session.toggle_bookmark(1)
        app.session.update_note(1, "remember")
        await pilot.press("D")
        await pilot.pause()
        assert len(app.screen.query("#chapter-delete-loss")) == 1
