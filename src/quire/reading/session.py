"""Reading session: active chapter, view mode, pending highlight and scroll."""

from __future__ import annotations

import logging
from typing import Optional

from quire.library.models import (
    Chapter,
    ChapterDraft,
    HighlightRequest,
    Novel,
    Panel,
    ProgressSnapshot,
    SearchResult,
    ViewMode,
)
from quire.library.store import ConfirmDelete, NovelStore

from .progress import calculate_progress, clamp_scroll
from .search import DEFAULT_CONTEXT, search

log = logging.getLogger(__name__)


class ReadingSession:
    """Coordinates navigation on top of a NovelStore.

    The presentation layer talks only to this object. Derived values
    (progress, search results, bookmarks) are recomputed on every access.
    The highlight is either None or a pending HighlightRequest; it is
    cleared when acknowledged, superseded by another selection, or when
    next/previous moves away from its chapter.
    """

    def __init__(
        self, store: NovelStore, snippet_context: int = DEFAULT_CONTEXT
    ) -> None:
        self._store = store
        self._snippet_context = snippet_context
        self.view_mode = ViewMode.CHAPTER
        self.open_panels: set[Panel] = set()
        self._highlight: Optional[HighlightRequest] = None
        self._scroll = 0.0
        self.query = ""

    @property
    def store(self) -> NovelStore:
        return self._store

    # ── Derived state ──────────────────────────────────────

    @property
    def chapters(self) -> tuple[Chapter, ...]:
        return self._store.chapters

    @property
    def current_chapter(self) -> Optional[Chapter]:
        return self._store.current_chapter

    @property
    def current_index(self) -> int:
        return self._store.current_index

    @property
    def scroll_fraction(self) -> float:
        return self._scroll

    @property
    def highlight(self) -> Optional[HighlightRequest]:
        return self._highlight

    @property
    def progress(self) -> ProgressSnapshot:
        return calculate_progress(
            self._store.chapters, self._store.current_index, self._scroll
        )

    @property
    def bookmarks(self) -> list[Chapter]:
        return self._store.bookmarked_chapters()

    @property
    def results(self) -> list[SearchResult]:
        return search(self._store.chapters, self.query, self._snippet_context)

    @property
    def is_first_chapter(self) -> bool:
        return self._store.current_index <= 0

    @property
    def is_last_chapter(self) -> bool:
        return self._store.current_index >= len(self._store.chapters) - 1

    @property
    def in_overview(self) -> bool:
        return self.view_mode is ViewMode.OVERVIEW

    # ── Search & selection ─────────────────────────────────

    def search(self, query: str) -> list[SearchResult]:
        self.query = query
        return self.results

    def select_chapter(self, chapter_id: int) -> bool:
        if not self._store.select_chapter(chapter_id):
            return False
        self._highlight = None
        self._scroll = 0.0
        self.exit_overview()
        return True

    def select_search_result(self, result: SearchResult) -> bool:
        if not self._store.select_chapter(result.chapter_id):
            return False
        self._highlight = HighlightRequest(
            chapter_id=result.chapter_id,
            result_index=result.result_index,
            search_term=result.search_term,
        )
        self._scroll = 0.0
        self.exit_overview()
        return True

    def acknowledge_highlight(self) -> Optional[HighlightRequest]:
        """Consume the pending highlight; later calls return None."""
        request, self._highlight = self._highlight, None
        return request

    # ── Next / previous ────────────────────────────────────

    def _move_to(self, index: int) -> bool:
        before = self._store.current_index
        if self._store.set_current_index(index) == before:
            return False
        self._highlight = None
        self._scroll = 0.0
        return True

    def next_chapter(self) -> bool:
        if self.is_last_chapter:
            return False
        return self._move_to(self._store.current_index + 1)

    def previous_chapter(self) -> bool:
        if self.is_first_chapter:
            return False
        return self._move_to(self._store.current_index - 1)

    # ── View mode & panels ─────────────────────────────────

    def enter_overview(self) -> None:
        self.view_mode = ViewMode.OVERVIEW
        self.open_panels.clear()

    def exit_overview(self) -> None:
        self.view_mode = ViewMode.CHAPTER

    def toggle_overview(self) -> ViewMode:
        if self.in_overview:
            self.exit_overview()
        else:
            self.enter_overview()
        return self.view_mode

    def toggle_panel(self, panel: Panel) -> bool:
        """Open or close a chapter panel; returns whether it is now open."""
        if self.in_overview:
            return False
        if panel in self.open_panels:
            self.open_panels.discard(panel)
            return False
        self.open_panels.add(panel)
        return True

    # ── Scroll ─────────────────────────────────────────────

    def update_scroll(self, fraction: float) -> None:
        self._scroll = clamp_scroll(fraction)

    # ── Mutations ──────────────────────────────────────────

    def toggle_bookmark(self, chapter_id: int) -> bool:
        return self._store.toggle_bookmark(chapter_id)

    def update_note(self, chapter_id: int, text: str) -> bool:
        return self._store.update_note(chapter_id, text)

    def save_chapter(self, draft: ChapterDraft) -> Optional[Chapter]:
        return self._store.save_chapter(draft)

    def delete_chapter(self, chapter_id: int, confirm: ConfirmDelete) -> bool:
        current = self.current_chapter
        was_current = current is not None and current.id == chapter_id
        if not self._store.delete_chapter(chapter_id, confirm):
            return False
        if self._highlight is not None and self._highlight.chapter_id == chapter_id:
            self._highlight = None
        if was_current:
            self._scroll = 0.0
        log.info("Deleted chapter %d", chapter_id)
        return True

    def replace_novel(self, novel: Novel) -> None:
        self._store.replace_novel(novel)
        self._highlight = None
        self._scroll = 0.0
        self.query = ""
        self.exit_overview()
