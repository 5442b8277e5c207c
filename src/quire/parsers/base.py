"""Base parser interface for importing a novel from a file."""

from __future__ import annotations

import html
from abc import ABC, abstractmethod
from pathlib import Path

from quire.library.models import Chapter, Novel


class BaseParser(ABC):
    """Abstract base for format-specific parsers."""

    SUPPORTED_EXTENSIONS: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, file_path: Path) -> Novel:
        """Parse a file and return a novel with chapter ids 1..n."""

    @classmethod
    def can_handle(cls, file_path: Path) -> bool:
        return file_path.suffix.lower() in cls.SUPPORTED_EXTENSIONS


def paragraphs_to_markup(paragraphs: list[str]) -> str:
    return "".join(f"<p>{html.escape(p, quote=False)}</p>" for p in paragraphs)


def build_novel(title: str, sections: list[tuple[str, list[str]]]) -> Novel:
    """Turn (chapter title, paragraphs) pairs into a novel, skipping empty ones."""
    chapters: list[Chapter] = []
    for ch_title, paragraphs in sections:
        if not paragraphs:
            continue
        chapters.append(
            Chapter(
                id=len(chapters) + 1,
                title=ch_title,
                content=paragraphs_to_markup(paragraphs),
            )
        )
    return Novel(title=title, chapters=chapters)


def get_parser(file_path: Path) -> BaseParser:
    """Return the appropriate parser for a file."""
    from quire.parsers.docx_parser import DocxParser
    from quire.parsers.epub_parser import EpubParser
    from quire.parsers.markdown_parser import MarkdownParser
    from quire.parsers.txt_parser import TxtParser

    parsers: list[type[BaseParser]] = [
        EpubParser,
        DocxParser,
        MarkdownParser,
        TxtParser,
    ]
    for parser_cls in parsers:
        if parser_cls.can_handle(file_path):
            return parser_cls()

    supported = []
    for p in parsers:
        supported.extend(p.SUPPORTED_EXTENSIONS)
    raise ValueError(
        f"Unsupported format: {file_path.suffix}. Supported: {', '.join(supported)}"
    )
