from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Input, ListItem, ListView, Static

from quire.library.models import ChapterDraft, Panel, SearchResult
from quire.reading.search import locate_occurrence
from quire.reading.session import ReadingSession
from quire.reading.text import display_text

from .dialogs import ChapterEditorScreen, ConfirmDeleteScreen, NoteEditorScreen

if TYPE_CHECKING:
    from quire.app import QuireApp

_PANEL_WIDGETS = {
    Panel.SIDEBAR: "#toc-sidebar",
    Panel.BOOKMARKS: "#bookmark-sidebar",
    Panel.STATUS: "#status-panel",
}


class ReaderScreen(Screen):
    BINDINGS = [
        Binding("q", "quit_app", "Quit"),
        Binding("comma", "prev_chapter", "<Ch"),
        Binding("full_stop", "next_chapter", "Ch>"),
        Binding("j", "scroll_down", "Down", show=False),
        Binding("k", "scroll_up", "Up", show=False),
        Binding("t", "toggle_toc", "TOC"),
        Binding("B", "toggle_bookmarks", "Marks"),
        Binding("i", "toggle_status", "Status"),
        Binding("m", "toggle_bookmark", "Mark"),
        Binding("N", "edit_note", "Note"),
        Binding("slash", "toggle_search", "Search"),
        Binding("o", "toggle_overview", "Overview"),
        Binding("n", "new_chapter", "New"),
        Binding("e", "edit_chapter", "Edit"),
        Binding("D", "delete_chapter", "Delete"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._searching = False

    @property
    def qa(self) -> QuireApp:
        return self.app  # type: ignore[return-value]

    @property
    def session(self) -> ReadingSession:
        return self.qa.session

    def compose(self) -> ComposeResult:
        yield Static("", id="reader-header")
        with Horizontal(id="reader-body"):
            with Vertical(id="toc-sidebar"):
                yield Static("Chapters", id="toc-title")
                yield ListView(id="toc-list")
            with VerticalScroll(id="content-scroll"):
                yield Static("", id="content-text")
            with Vertical(id="bookmark-sidebar"):
                yield Static("Bookmarks", id="bookmark-title")
                yield ListView(id="bookmark-list")
        with Vertical(id="search-panel"):
            yield Input(placeholder="Search chapters... (Esc to close)", id="search-input")
            yield ListView(id="search-results")
        yield Static("", id="status-panel")
        yield Footer()

    def on_mount(self) -> None:
        scroll = self.query_one("#content-scroll", VerticalScroll)
        self.watch(scroll, "scroll_y", self._on_scroll, init=False)
        self._refresh_all()
        scroll.focus()

    # ── Rendering ──────────────────────────────────

    def _refresh_all(self) -> None:
        self._render_content()
        self._populate_toc()
        self._refresh_bookmarks()
        self._sync_panels()
        self._update_header()

    def _render_content(self) -> None:
        session = self.session
        text_widget = self.query_one("#content-text", Static)
        scroll = self.query_one("#content-scroll", VerticalScroll)

        if session.in_overview:
            text_widget.update(self._overview_text())
            scroll.scroll_home(animate=False)
            return

        chapter = session.current_chapter
        if chapter is None:
            text_widget.update("(No chapters. Press n to write one.)")
            scroll.scroll_home(animate=False)
            return

        rendered = Text(chapter.title, style="bold")
        rendered.append("\n\n")
        body_start = len(rendered)
        body = display_text(chapter.content)
        rendered.append(body)

        target: Optional[float] = None
        highlight = session.highlight
        if highlight is not None and highlight.chapter_id == chapter.id:
            span = locate_occurrence(
                body, highlight.search_term, highlight.result_index
            )
            if span is not None:
                start, end = body_start + span[0], body_start + span[1]
                rendered.stylize("reverse bold", start, end)
                target = start / max(1, len(rendered))

        text_widget.update(rendered)
        if highlight is not None:
            self.call_after_refresh(self._apply_highlight, target)
        else:
            scroll.scroll_home(animate=False)
            self.call_after_refresh(self._sync_scroll)

    def _apply_highlight(self, target: Optional[float]) -> None:
        scroll = self.query_one("#content-scroll", VerticalScroll)
        if target is not None:
            scroll.scroll_to(y=scroll.max_scroll_y * target, animate=False)
        self.session.acknowledge_highlight()
        self._sync_scroll()

    def _overview_text(self) -> Text:
        text = Text()
        for chapter in self.session.chapters:
            marker = " ★" if chapter.bookmarked else ""
            text.append(f"{chapter.title}{marker}\n\n", style="bold underline")
            text.append(display_text(chapter.content))
            text.append("\n\n\n")
        return text

    def _update_header(self) -> None:
        session = self.session
        progress = session.progress
        parts = [f" {session.store.title}"]

        if session.in_overview:
            parts.append(f"Overview of {progress.chapter_count} chapters")
        else:
            chapter = session.current_chapter
            if chapter is not None:
                marker = " ★" if chapter.bookmarked else ""
                parts.append(
                    f"Ch {session.current_index + 1}/{progress.chapter_count}: "
                    f"{chapter.title}{marker}"
                )
                parts.append(f"Chapter {progress.chapter_progress}%")
        parts.append(f"Overall {progress.overall_progress}%")

        self.query_one("#reader-header", Static).update(Text("  │  ".join(parts)))
        self._update_status()

    def _update_status(self) -> None:
        session = self.session
        progress = session.progress
        chapter = session.current_chapter
        notes = chapter.notes.strip() if chapter else ""
        position = []
        if session.is_first_chapter:
            position.append("first chapter")
        if session.is_last_chapter:
            position.append("last chapter")
        lines = [
            f"Words read {progress.total_words_read}/{progress.total_novel_words}"
            f"  ·  Bookmarks {progress.bookmarked_count}"
            f"  ·  {', '.join(position) or 'middle'}",
            f"Notes: {notes.splitlines()[0] if notes else '(none)'}",
        ]
        self.query_one("#status-panel", Static).update(Text("\n".join(lines)))

    def _populate_toc(self) -> None:
        toc_list = self.query_one("#toc-list", ListView)
        toc_list.clear()
        for i, chapter in enumerate(self.session.chapters):
            prefix = "▸ " if i == self.session.current_index else "  "
            item = ListItem(Static(Text(prefix + chapter.title)), classes="toc-item")
            item.data = chapter.id  # type: ignore[attr-defined]
            toc_list.append(item)

    def _refresh_bookmarks(self) -> None:
        bm_list = self.query_one("#bookmark-list", ListView)
        bm_list.clear()
        for chapter in self.session.bookmarks:
            label = chapter.title
            if chapter.notes:
                label += f"\n  {chapter.notes.splitlines()[0]}"
            item = ListItem(Static(Text(label)), classes="bookmark-item")
            item.data = chapter.id  # type: ignore[attr-defined]
            bm_list.append(item)

    def _sync_panels(self) -> None:
        for panel, selector in _PANEL_WIDGETS.items():
            self.query_one(selector).set_class(
                panel in self.session.open_panels, "visible"
            )

    # ── Scroll ─────────────────────────────────────

    def _on_scroll(self, scroll_y: float) -> None:
        self._sync_scroll()

    def _sync_scroll(self) -> None:
        if self.session.in_overview:
            return
        scroll = self.query_one("#content-scroll", VerticalScroll)
        max_y = scroll.max_scroll_y
        fraction = 100.0 if max_y <= 0 else scroll.scroll_y / max_y * 100
        self.session.update_scroll(fraction)
        self._update_header()

    def _scroll_by(self, direction: int) -> None:
        scroll = self.query_one("#content-scroll", VerticalScroll)
        step = scroll.max_scroll_y * self.qa.config.scroll_step / 100
        scroll.scroll_to(y=scroll.scroll_y + direction * max(1, step), animate=False)

    def action_scroll_down(self) -> None:
        self._scroll_by(1)

    def action_scroll_up(self) -> None:
        self._scroll_by(-1)

    # ── Navigation ─────────────────────────────────

    def action_next_chapter(self) -> None:
        if self.session.next_chapter():
            self._refresh_all()

    def action_prev_chapter(self) -> None:
        if self.session.previous_chapter():
            self._refresh_all()

    def action_toggle_overview(self) -> None:
        self.session.toggle_overview()
        self._refresh_all()

    def _toggle_panel(self, panel: Panel) -> None:
        if self.session.in_overview:
            self.notify("Leave overview (o) to open chapter panels")
            return
        self.session.toggle_panel(panel)
        self._sync_panels()

    def action_toggle_toc(self) -> None:
        self._toggle_panel(Panel.SIDEBAR)

    def action_toggle_bookmarks(self) -> None:
        self._toggle_panel(Panel.BOOKMARKS)

    def action_toggle_status(self) -> None:
        self._toggle_panel(Panel.STATUS)

    @on(ListView.Selected, "#toc-list")
    def on_toc_selected(self, event: ListView.Selected) -> None:
        chapter_id = getattr(event.item, "data", None)
        if chapter_id is not None and self.session.select_chapter(chapter_id):
            self._refresh_all()

    @on(ListView.Selected, "#bookmark-list")
    def on_bookmark_selected(self, event: ListView.Selected) -> None:
        chapter_id = getattr(event.item, "data", None)
        if chapter_id is not None and self.session.select_chapter(chapter_id):
            self._refresh_all()

    # ── Search ─────────────────────────────────────

    def action_toggle_search(self) -> None:
        if self._searching:
            self._hide_search()
            return
        self._searching = True
        self.query_one("#search-panel").set_class(True, "visible")
        inp = self.query_one("#search-input", Input)
        inp.value = self.session.query
        inp.focus()

    def _hide_search(self) -> None:
        self._searching = False
        self.query_one("#search-panel").set_class(False, "visible")
        self.query_one("#content-scroll", VerticalScroll).focus()

    def _refresh_search(self, query: str) -> None:
        results_list = self.query_one("#search-results", ListView)
        results_list.clear()
        for result in self.session.search(query):
            label = f"{result.chapter_title} #{result.result_index + 1}\n  {result.snippet}"
            item = ListItem(Static(Text(label)), classes="search-item")
            item.data = result  # type: ignore[attr-defined]
            results_list.append(item)

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        self._refresh_search(event.value)

    @on(Input.Submitted, "#search-input")
    def on_search_submitted(self, event: Input.Submitted) -> None:
        self.query_one("#search-results", ListView).focus()

    @on(ListView.Selected, "#search-results")
    def on_search_result_selected(self, event: ListView.Selected) -> None:
        result: SearchResult | None = getattr(event.item, "data", None)
        if result is not None and self.session.select_search_result(result):
            self._hide_search()
            self._refresh_all()

    def on_key(self, event) -> None:
        if self._searching and event.key == "escape":
            self._hide_search()
            event.stop()
            event.prevent_default()

    # ── Bookmarks & notes ──────────────────────────

    def action_toggle_bookmark(self) -> None:
        chapter = self.session.current_chapter
        if chapter is None:
            return
        self.session.toggle_bookmark(chapter.id)
        self._refresh_bookmarks()
        self._update_header()
        state = "Bookmarked" if chapter.bookmarked else "Removed bookmark"
        self.notify(f"{state}: {chapter.title}")

    def action_edit_note(self) -> None:
        chapter = self.session.current_chapter
        if chapter is None:
            return
        chapter_id = chapter.id
        self.app.push_screen(
            NoteEditorScreen(chapter),
            callback=lambda text: self._on_note_saved(chapter_id, text),
        )

    def _on_note_saved(self, chapter_id: int, text: str | None) -> None:
        if text is None:
            return
        if self.session.update_note(chapter_id, text):
            self._refresh_bookmarks()
            self._update_status()
            self.notify("Note saved")

    # ── Chapter editing ────────────────────────────

    def action_new_chapter(self) -> None:
        self.app.push_screen(ChapterEditorScreen(), callback=self._on_chapter_saved)

    def action_edit_chapter(self) -> None:
        chapter = self.session.current_chapter
        if chapter is None:
            return
        self.app.push_screen(
            ChapterEditorScreen(chapter), callback=self._on_chapter_saved
        )

    def _on_chapter_saved(self, draft: ChapterDraft | None) -> None:
        if draft is None:
            return
        saved = self.session.save_chapter(draft)
        if saved is None:
            self.notify("Chapter no longer exists", severity="warning")
            return
        if draft.id is None:
            self.session.select_chapter(saved.id)
        self._refresh_all()
        self.notify(f"Saved: {saved.title}")

    def action_delete_chapter(self) -> None:
        chapter = self.session.current_chapter
        if chapter is None:
            return
        chapter_id = chapter.id
        if not self.qa.config.confirm_delete:
            self._on_delete_confirmed(True, chapter_id)
            return
        self.app.push_screen(
            ConfirmDeleteScreen(chapter),
            callback=lambda confirmed: self._on_delete_confirmed(confirmed, chapter_id),
        )

    def _on_delete_confirmed(self, confirmed: bool | None, chapter_id: int) -> None:
        chapter = self.session.store.get_chapter(chapter_id)
        title = chapter.title if chapter else str(chapter_id)
        if self.session.delete_chapter(chapter_id, lambda _chapter: bool(confirmed)):
            self._refresh_all()
            self.notify(f"Deleted: {title}")

    def action_quit_app(self) -> None:
        self.qa.action_quit()
