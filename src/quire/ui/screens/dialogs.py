from __future__ import annotations

from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, TextArea

from quire.library.models import Chapter, ChapterDraft
from quire.reading.text import count_words


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Ask before a chapter is removed; dismisses with True to delete."""

    BINDINGS = [
        Binding("escape", "keep", "Keep"),
        Binding("y", "delete", "Delete"),
        Binding("n", "keep", "Keep"),
    ]

    DEFAULT_CSS = """
    ConfirmDeleteScreen {
        align: center middle;
    }
    #chapter-delete {
        width: 64;
        height: auto;
        background: $surface;
        border: heavy $error;
        padding: 1 2;
    }
    #chapter-delete-title {
        text-style: bold;
    }
    #chapter-delete-loss {
        color: $warning;
        margin-top: 1;
    }
    #chapter-delete-actions {
        align: right middle;
        height: 3;
        margin-top: 1;
    }
    """

    def __init__(self, chapter: Chapter) -> None:
        super().__init__()
        self._chapter = chapter

    def compose(self) -> ComposeResult:
        chapter = self._chapter
        lost = [
            label
            for label, present in (("bookmark", chapter.bookmarked), ("notes", chapter.notes))
            if present
        ]
        with Vertical(id="chapter-delete"):
            yield Label(f"Delete {chapter.title!r}?", id="chapter-delete-title")
            yield Label(f"{count_words(chapter.content)} words. This cannot be undone.")
            if lost:
                yield Label(f"Its {' and '.join(lost)} will be lost.", id="chapter-delete-loss")
            with Horizontal(id="chapter-delete-actions"):
                yield Button("Keep (n)", id="delete-keep")
                yield Button("Delete (y)", variant="error", id="delete-go")

    def on_mount(self) -> None:
        self.query_one("#delete-keep", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete-go")

    def action_delete(self) -> None:
        self.dismiss(True)

    def action_keep(self) -> None:
        self.dismiss(False)


class ChapterEditorScreen(ModalScreen[Optional[ChapterDraft]]):
    """Edit an existing chapter, or write a new one when chapter is None."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save", priority=True),
    ]

    DEFAULT_CSS = """
    ChapterEditorScreen {
        align: center middle;
    }
    #editor-dialog {
        width: 90%;
        height: 90%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    #editor-content {
        height: 1fr;
        margin: 1 0;
    }
    #editor-buttons {
        align: center middle;
        height: 3;
    }
    #editor-buttons Button {
        margin: 0 2;
    }
    """

    def __init__(self, chapter: Chapter | None = None) -> None:
        super().__init__()
        self._chapter = chapter

    def compose(self) -> ComposeResult:
        title = self._chapter.title if self._chapter else ""
        content = self._chapter.content if self._chapter else ""
        with Vertical(id="editor-dialog"):
            yield Label("Edit chapter" if self._chapter else "New chapter")
            yield Input(value=title, placeholder="Chapter title", id="editor-title")
            yield TextArea(content, id="editor-content")
            with Horizontal(id="editor-buttons"):
                yield Button("Save (ctrl+s)", variant="primary", id="ed-save")
                yield Button("Cancel [Esc]", variant="default", id="ed-cancel")

    def on_mount(self) -> None:
        self.query_one("#editor-title", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "ed-save":
            self.action_save()
        else:
            self.action_cancel()

    def action_save(self) -> None:
        title = self.query_one("#editor-title", Input).value.strip()
        content = self.query_one("#editor-content", TextArea).text
        if not title:
            self.notify("Chapter title is required", severity="warning")
            return
        self.dismiss(
            ChapterDraft(
                id=self._chapter.id if self._chapter else None,
                title=title,
                content=content,
            )
        )

    def action_cancel(self) -> None:
        self.dismiss(None)


class NoteEditorScreen(ModalScreen[Optional[str]]):
    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save", priority=True),
    ]

    DEFAULT_CSS = """
    NoteEditorScreen {
        align: center middle;
    }
    #note-dialog {
        width: 70;
        height: 20;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    #note-text {
        height: 1fr;
        margin: 1 0;
    }
    """

    def __init__(self, chapter: Chapter) -> None:
        super().__init__()
        self._chapter = chapter

    def compose(self) -> ComposeResult:
        with Vertical(id="note-dialog"):
            yield Label(f"Notes: {self._chapter.title}")
            yield TextArea(self._chapter.notes, id="note-text")
            yield Label("ctrl+s save  ·  esc cancel")

    def on_mount(self) -> None:
        self.query_one("#note-text", TextArea).focus()

    def action_save(self) -> None:
        self.dismiss(self.query_one("#note-text", TextArea).text)

    def action_cancel(self) -> None:
        self.dismiss(None)
