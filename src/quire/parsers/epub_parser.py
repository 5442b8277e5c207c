"""EPUB parser using ebooklib."""

from __future__ import annotations

from pathlib import Path

import ebooklib
from bs4 import BeautifulSoup
from ebooklib import epub

from quire.library.models import Novel

from .base import BaseParser, build_novel
from .markup import soup_to_paragraphs


class EpubParser(BaseParser):
    SUPPORTED_EXTENSIONS = (".epub",)

    _HEADING_TAGS = ("h1", "h2", "h3", "title")

    def parse(self, file_path: Path) -> Novel:
        book = epub.read_epub(str(file_path), options={"ignore_ncx": False})
        title = self._get_meta(book, "title") or file_path.stem

        # Spine order, falling back to every document item
        documents = list(book.get_items_of_type(ebooklib.ITEM_DOCUMENT))
        by_id = {item.get_id(): item for item in documents}
        ordered = [by_id[sid] for sid, _ in book.spine if sid in by_id] or documents

        sections: list[tuple[str, list[str]]] = []
        for item in ordered:
            soup = BeautifulSoup(
                item.get_content().decode("utf-8", errors="replace"), "lxml"
            )
            ch_title = self._extract_title(soup) or f"Chapter {len(sections) + 1}"
            paragraphs = soup_to_paragraphs(soup)
            if paragraphs and paragraphs[0] == ch_title:
                paragraphs = paragraphs[1:]
            if paragraphs:
                sections.append((ch_title, paragraphs))

        return build_novel(title, sections)

    def _extract_title(self, soup: BeautifulSoup) -> str:
        """Try to extract a title from heading tags."""
        for level in self._HEADING_TAGS:
            tag = soup.find(level)
            if tag:
                text = tag.get_text(strip=True)
                if text and len(text) < 200:
                    return text
        return ""

    @staticmethod
    def _get_meta(book: epub.EpubBook, field: str) -> str:
        values = book.get_metadata("DC", field)
        if values:
            val = values[0]
            if isinstance(val, tuple):
                return str(val[0]) if val[0] else ""
            return str(val)
        return ""
