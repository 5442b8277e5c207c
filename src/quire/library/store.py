"""The novel store: single owner and writer of the novel aggregate."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .models import Chapter, ChapterDraft, Novel
from .seed import seed_novel
from .storage import NovelStorage, StorageError

log = logging.getLogger(__name__)

ConfirmDelete = Callable[[Chapter], bool]


class NovelStore:
    """Holds the novel and the current chapter index.

    Every successful mutation re-serializes the whole novel. The current
    index is written under its own key whenever it changes. Write failures
    are logged and never undo the in-memory change.
    """

    def __init__(self, storage: NovelStorage) -> None:
        self._storage = storage
        self._novel = self._load_novel()
        self._current_index = self._load_index()

    def _load_novel(self) -> Novel:
        novel = self._storage.load_novel()
        if novel is None:
            log.info("No usable stored novel, starting from the seed novel")
            return seed_novel()
        return novel

    def _load_index(self) -> int:
        index = self._storage.load_current_index()
        if index is None:
            return 0
        if not 0 <= index < len(self._novel.chapters):
            log.warning(
                "Stored chapter index %d out of range for %d chapters",
                index,
                len(self._novel.chapters),
            )
            return 0
        return index

    # ── Read access ────────────────────────────────────────

    @property
    def novel(self) -> Novel:
        return self._novel

    @property
    def title(self) -> str:
        return self._novel.title

    @property
    def chapters(self) -> tuple[Chapter, ...]:
        return tuple(self._novel.chapters)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_chapter(self) -> Optional[Chapter]:
        if 0 <= self._current_index < len(self._novel.chapters):
            return self._novel.chapters[self._current_index]
        return None

    def index_of(self, chapter_id: int) -> Optional[int]:
        for i, ch in enumerate(self._novel.chapters):
            if ch.id == chapter_id:
                return i
        return None

    def get_chapter(self, chapter_id: int) -> Optional[Chapter]:
        index = self.index_of(chapter_id)
        return self._novel.chapters[index] if index is not None else None

    def bookmarked_chapters(self) -> list[Chapter]:
        return [ch for ch in self._novel.chapters if ch.bookmarked]

    # ── Persistence ────────────────────────────────────────

    def _persist_novel(self) -> None:
        try:
            self._storage.save_novel(self._novel)
        except StorageError:
            log.exception("Failed to save novel %r", self._novel.title)

    def _persist_index(self) -> None:
        try:
            self._storage.save_current_index(self._current_index)
        except StorageError:
            log.exception("Failed to save chapter index %d", self._current_index)

    def _set_index(self, index: int) -> None:
        if index != self._current_index:
            self._current_index = index
            self._persist_index()

    # ── Mutations ──────────────────────────────────────────

    def select_chapter(self, chapter_id: int) -> bool:
        index = self.index_of(chapter_id)
        if index is None:
            log.debug("select_chapter: no chapter with id %s", chapter_id)
            return False
        self._set_index(index)
        return True

    def set_current_index(self, index: int) -> int:
        """Move to a position, clamped to the chapter range."""
        last = max(0, len(self._novel.chapters) - 1)
        self._set_index(max(0, min(index, last)))
        return self._current_index

    def toggle_bookmark(self, chapter_id: int) -> bool:
        chapter = self.get_chapter(chapter_id)
        if chapter is None:
            log.debug("toggle_bookmark: no chapter with id %s", chapter_id)
            return False
        chapter.bookmarked = not chapter.bookmarked
        self._persist_novel()
        return True

    def update_note(self, chapter_id: int, text: str) -> bool:
        chapter = self.get_chapter(chapter_id)
        if chapter is None:
            log.debug("update_note: no chapter with id %s", chapter_id)
            return False
        chapter.notes = text
        self._persist_novel()
        return True

    def save_chapter(self, draft: ChapterDraft) -> Optional[Chapter]:
        """Edit an existing chapter in place, or append a new one."""
        if draft.id is not None:
            chapter = self.get_chapter(draft.id)
            if chapter is None:
                log.debug("save_chapter: no chapter with id %s", draft.id)
                return None
            chapter.title = draft.title
            chapter.content = draft.content
        else:
            chapter = Chapter(
                id=self._novel.next_chapter_id(),
                title=draft.title,
                content=draft.content,
            )
            self._novel.chapters.append(chapter)
        self._persist_novel()
        return chapter

    def delete_chapter(self, chapter_id: int, confirm: ConfirmDelete) -> bool:
        """Remove a chapter once confirm(chapter) approves it."""
        deleted = self.index_of(chapter_id)
        if deleted is None:
            log.debug("delete_chapter: no chapter with id %s", chapter_id)
            return False
        if not confirm(self._novel.chapters[deleted]):
            return False

        del self._novel.chapters[deleted]
        current = self._current_index
        if not self._novel.chapters:
            new_index = 0
        elif deleted == current:
            new_index = max(0, deleted - 1)
        elif deleted < current:
            new_index = current - 1
        else:
            new_index = current

        self._persist_novel()
        self._set_index(new_index)
        return True

    def replace_novel(self, novel: Novel) -> None:
        """Install a freshly imported novel and rewind to its first chapter."""
        self._novel = novel
        self._current_index = 0
        self._persist_novel()
        self._persist_index()
