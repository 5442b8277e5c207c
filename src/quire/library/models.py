"""Data models for the novel and the derived reading state."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass
class Chapter:
    id: int  # stable identity, independent of position
    title: str
    content: str = ""  # markup-bearing body
    bookmarked: bool = False
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Chapter:
        chapter_id = data["id"]
        if isinstance(chapter_id, bool) or not isinstance(chapter_id, int):
            raise ValueError(f"Chapter id must be an integer, got {chapter_id!r}")
        bookmarked = data.get("bookmarked", False)
        return cls(
            id=chapter_id,
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            bookmarked=bookmarked if isinstance(bookmarked, bool) else False,
            notes=str(data.get("notes", "")),
        )


@dataclass
class Novel:
    title: str
    chapters: list[Chapter] = field(default_factory=list)  # reading order

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "chapters": [ch.to_dict() for ch in self.chapters],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Novel:
        """Build a novel from its serialized form.

        Unknown keys are ignored and missing optional fields take their
        defaults. Raises ValueError, TypeError or KeyError on a payload that
        cannot describe a novel.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Novel payload must be an object, got {type(data).__name__}")
        raw_chapters = data.get("chapters", [])
        if not isinstance(raw_chapters, list):
            raise TypeError("Novel chapters must be a list")

        chapters = [Chapter.from_dict(item) for item in raw_chapters]
        ids = [ch.id for ch in chapters]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate chapter ids in novel payload")
        return cls(title=str(data.get("title", "")), chapters=chapters)

    def next_chapter_id(self) -> int:
        return max((ch.id for ch in self.chapters), default=0) + 1


@dataclass
class ChapterDraft:
    """Editor output: a new chapter when id is None, else an edit."""

    title: str
    content: str
    id: Optional[int] = None


@dataclass(frozen=True)
class HighlightRequest:
    """Scroll to and mark occurrence result_index of search_term once
    chapter_id is rendered. Consumed once."""

    chapter_id: int
    result_index: int
    search_term: str


@dataclass(frozen=True)
class SearchResult:
    chapter_id: int
    chapter_title: str
    result_index: int  # 0-based occurrence within the chapter
    position: int  # offset into the chapter's plain text
    snippet: str
    search_term: str  # normalized query that produced the match


@dataclass(frozen=True)
class ProgressSnapshot:
    total_novel_words: int = 0
    words_before: int = 0
    words_scrolled_in_current: int = 0
    total_words_read: int = 0
    overall_progress: int = 0  # 0 - 100
    chapter_progress: int = 0  # 0 - 100
    bookmarked_count: int = 0
    chapter_count: int = 0


class ViewMode(Enum):
    CHAPTER = "chapter"
    OVERVIEW = "overview"


class Panel(Enum):
    """Chapter-scoped panels, closed when entering overview."""

    SIDEBAR = "sidebar"
    STATUS = "status"
    BOOKMARKS = "bookmarks"
