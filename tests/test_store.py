"""Tests for the novel store."""

from __future__ import annotations

import json

import pytest

from quire.library.models import Chapter, ChapterDraft, Novel
from quire.library.seed import SEED_TITLE
from quire.library.storage import INDEX_KEY, NOVEL_KEY, MemoryStorage
from quire.library.store import NovelStore


def _store_at(storage: MemoryStorage, index: int) -> NovelStore:
    store = NovelStore(storage)
    store.set_current_index(index)
    return store


class TestLoad:
    def test_loads_stored_novel(self, store: NovelStore, novel: Novel):
        assert store.title == novel.title
        assert [ch.id for ch in store.chapters] == [1, 2, 3, 4]
        assert store.current_index == 0

    def test_missing_novel_uses_seed(self):
        store = NovelStore(MemoryStorage())
        assert store.title == SEED_TITLE
        assert len(store.chapters) == 3

    def test_corrupt_novel_uses_seed(self):
        storage = MemoryStorage()
        storage.values[NOVEL_KEY] = "{not json"
        store = NovelStore(storage)
        assert store.title == SEED_TITLE

    def test_deeply_nested_novel_uses_seed(self):
        storage = MemoryStorage()
        storage.values[NOVEL_KEY] = "[" * 100000 + "]" * 100000
        assert NovelStore(storage).title == SEED_TITLE

    def test_deeply_nested_index_falls_back_to_zero(self, storage: MemoryStorage):
        storage.values[INDEX_KEY] = "[" * 100000 + "]" * 100000
        assert NovelStore(storage).current_index == 0

    def test_wrong_shape_uses_seed(self):
        storage = MemoryStorage()
        storage.values[NOVEL_KEY] = json.dumps({"title": "x", "chapters": [{"title": "no id"}]})
        assert NovelStore(storage).title == SEED_TITLE

    def test_restores_index(self, storage: MemoryStorage):
        storage.save_current_index(2)
        assert NovelStore(storage).current_index == 2

    @pytest.mark.parametrize("raw", ["7", "-1", '"two"', "oops", "1.5", "true"])
    def test_bad_index_falls_back_to_zero(self, storage: MemoryStorage, raw: str):
        storage.values[INDEX_KEY] = raw
        assert NovelStore(storage).current_index == 0


class TestSelect:
    def test_select_by_id(self, store: NovelStore, storage: MemoryStorage):
        assert store.select_chapter(3)
        assert store.current_index == 2
        assert store.current_chapter is not None
        assert store.current_chapter.id == 3
        assert storage.load_current_index() == 2

    def test_select_missing_is_noop(self, store: NovelStore):
        store.select_chapter(2)
        assert store.select_chapter(99) is False
        assert store.current_index == 1

    def test_set_current_index_clamps(self, store: NovelStore):
        assert store.set_current_index(10) == 3
        assert store.set_current_index(-4) == 0


class TestBookmarksAndNotes:
    def test_toggle_bookmark_only_target(self, store: NovelStore):
        store.toggle_bookmark(2)
        assert [ch.bookmarked for ch in store.chapters] == [False, True, False, False]
        store.toggle_bookmark(2)
        assert not any(ch.bookmarked for ch in store.chapters)

    def test_toggle_bookmark_missing(self, store: NovelStore, storage: MemoryStorage):
        writes = storage.writes
        assert store.toggle_bookmark(42) is False
        assert storage.writes == writes

    def test_toggle_bookmark_persists(self, store: NovelStore, storage: MemoryStorage):
        store.toggle_bookmark(1)
        reloaded = storage.load_novel()
        assert reloaded is not None
        assert reloaded.chapters[0].bookmarked is True

    def test_update_note_verbatim(self, store: NovelStore, storage: MemoryStorage):
        store.update_note(3, "  remember this \n")
        assert store.get_chapter(3).notes == "  remember this \n"
        assert storage.load_novel().chapters[2].notes == "  remember this \n"

    def test_update_note_missing(self, store: NovelStore):
        assert store.update_note(99, "x") is False

    def test_bookmarked_chapters(self, store: NovelStore):
        store.toggle_bookmark(4)
        store.toggle_bookmark(1)
        assert [ch.id for ch in store.bookmarked_chapters()] == [1, 4]


class TestSaveChapter:
    def test_append_new(self, store: NovelStore):
        chapter = store.save_chapter(ChapterDraft(title="Five", content="<p>new</p>"))
        assert chapter is not None
        assert chapter.id == 5
        assert store.chapters[-1] is chapter
        assert chapter.bookmarked is False
        assert chapter.notes == ""

    def test_append_uses_max_id_not_length(self):
        storage = MemoryStorage()
        storage.save_novel(
            Novel(title="N", chapters=[Chapter(id=10, title="a"), Chapter(id=3, title="b")])
        )
        store = NovelStore(storage)
        assert store.save_chapter(ChapterDraft(title="c", content="")).id == 11

    def test_append_to_empty(self):
        storage = MemoryStorage()
        storage.save_novel(Novel(title="Empty"))
        store = NovelStore(storage)
        assert store.save_chapter(ChapterDraft(title="First", content="x")).id == 1

    def test_append_after_middle_delete_uses_max_id(self, store: NovelStore, confirm_yes):
        store.delete_chapter(2, confirm_yes)
        assert store.save_chapter(ChapterDraft(title="n", content="")).id == 5

    def test_append_after_deleting_highest_takes_max_plus_one(
        self, store: NovelStore, confirm_yes
    ):
        store.delete_chapter(4, confirm_yes)
        assert store.save_chapter(ChapterDraft(title="n", content="")).id == 4

    def test_edit_preserves_bookmark_notes_position(self, store: NovelStore):
        store.toggle_bookmark(2)
        store.update_note(2, "note")
        edited = store.save_chapter(ChapterDraft(id=2, title="Renamed", content="<p>x</p>"))
        assert edited is not None
        assert store.index_of(2) == 1
        assert edited.title == "Renamed"
        assert edited.content == "<p>x</p>"
        assert edited.bookmarked is True
        assert edited.notes == "note"
        assert len(store.chapters) == 4

    def test_edit_unknown_id_is_noop(self, store: NovelStore):
        assert store.save_chapter(ChapterDraft(id=77, title="x", content="y")) is None
        assert len(store.chapters) == 4

    def test_save_persists(self, store: NovelStore, storage: MemoryStorage):
        store.save_chapter(ChapterDraft(title="Five", content="c"))
        assert [ch.id for ch in storage.load_novel().chapters] == [1, 2, 3, 4, 5]


class TestDeleteChapter:
    def test_declined_is_noop(self, store: NovelStore, confirm_no):
        assert store.delete_chapter(2, confirm_no) is False
        assert len(store.chapters) == 4

    def test_confirm_receives_chapter(self, store: NovelStore):
        seen: list[int] = []
        store.delete_chapter(3, lambda ch: seen.append(ch.id) or False)
        assert seen == [3]

    def test_missing_id_never_asks(self, store: NovelStore):
        asked: list[Chapter] = []
        assert store.delete_chapter(99, lambda ch: asked.append(ch) or True) is False
        assert asked == []

    def test_delete_current_moves_back(self, storage: MemoryStorage, confirm_yes):
        store = _store_at(storage, 2)
        store.delete_chapter(3, confirm_yes)
        assert store.current_index == 1
        assert store.current_chapter.id == 2
        assert storage.load_current_index() == 1

    def test_delete_current_first_stays_zero(self, storage: MemoryStorage, confirm_yes):
        store = _store_at(storage, 0)
        store.delete_chapter(1, confirm_yes)
        assert store.current_index == 0
        assert store.current_chapter.id == 2

    def test_delete_before_current_keeps_chapter(self, storage: MemoryStorage, confirm_yes):
        store = _store_at(storage, 2)
        store.delete_chapter(1, confirm_yes)
        assert store.current_index == 1
        assert store.current_chapter.id == 3

    def test_delete_after_current_unchanged(self, storage: MemoryStorage, confirm_yes):
        store = _store_at(storage, 1)
        store.delete_chapter(4, confirm_yes)
        assert store.current_index == 1
        assert store.current_chapter.id == 2

    def test_delete_last_remaining(self, make_novel, confirm_yes):
        storage = MemoryStorage()
        storage.save_novel(make_novel("<p>only</p>"))
        store = NovelStore(storage)
        assert store.delete_chapter(1, confirm_yes)
        assert store.chapters == ()
        assert store.current_index == 0
        assert store.current_chapter is None
        assert storage.load_novel().chapters == []

    def test_arbitrary_delete_order_keeps_pointer_valid(
        self, storage: MemoryStorage, confirm_yes
    ):
        store = _store_at(storage, 2)  # chapter 3
        for chapter_id in (4, 1, 3, 2):
            store.delete_chapter(chapter_id, confirm_yes)
            if store.chapters:
                assert 0 <= store.current_index < len(store.chapters)
        assert store.current_index == 0
        assert store.chapters == ()


class TestPersistenceFailures:
    def test_write_failure_keeps_memory_state(self, storage: MemoryStorage):
        store = NovelStore(storage)
        storage.fail_writes = True
        assert store.toggle_bookmark(1)
        assert store.get_chapter(1).bookmarked is True
        added = store.save_chapter(ChapterDraft(title="x", content="y"))
        assert added is not None and added.id == 5
        assert store.select_chapter(5)
        assert store.current_index == 4

    def test_write_failure_is_logged(self, storage: MemoryStorage, caplog):
        store = NovelStore(storage)
        storage.fail_writes = True
        with caplog.at_level("ERROR", logger="quire.library.store"):
            store.update_note(1, "lost")
        assert "Failed to save novel" in caplog.text

    def test_replace_novel(self, store: NovelStore, storage: MemoryStorage, make_novel):
        store.select_chapter(3)
        store.replace_novel(make_novel("<p>a</p>", title="Imported"))
        assert store.title == "Imported"
        assert store.current_index == 0
        assert storage.load_novel().title == "Imported"
        assert storage.load_current_index() == 0
