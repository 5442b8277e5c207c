"""Markdown parser."""

from __future__ import annotations

import re
from pathlib import Path

from quire.library.models import Novel

from .base import BaseParser, build_novel


class MarkdownParser(BaseParser):
    SUPPORTED_EXTENSIONS = (".md", ".markdown")

    def parse(self, file_path: Path) -> Novel:
        text = file_path.read_text(encoding="utf-8", errors="replace")

        # Split on H1 or H2
        pieces = re.split(r"(?m)^(#{1,2}\s+.+)$", text)

        sections: list[tuple[str, list[str]]] = []
        current_title = file_path.stem
        current_paras: list[str] = []

        for piece in pieces:
            piece = piece.strip()
            if not piece:
                continue
            heading = re.match(r"^#{1,2}\s+(.+)$", piece)
            if heading:
                sections.append((current_title, current_paras))
                current_title = heading.group(1).strip()
                current_paras = []
            else:
                current_paras.extend(self._md_to_paragraphs(piece))
        sections.append((current_title, current_paras))

        return build_novel(file_path.stem, sections)

    def _md_to_paragraphs(self, text: str) -> list[str]:
        """Convert markdown text to plain paragraphs."""
        text = re.sub(r"!\[.*?\]\(.*?\)", "", text)  # images
        text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)  # links
        text = re.sub(r"`{3}[\s\S]*?`{3}", "", text)  # code blocks
        text = re.sub(r"`([^`]+)`", r"\1", text)  # inline code
        text = re.sub(r"\*\*(.+?)\*\*", r"\1", text)  # bold
        text = re.sub(r"\*(.+?)\*", r"\1", text)  # italic
        text = re.sub(r"^[-*+]\s+", "", text, flags=re.MULTILINE)  # list markers
        text = re.sub(r"^\d+\.\s+", "", text, flags=re.MULTILINE)  # numbered lists
        text = re.sub(r"^>\s*", "", text, flags=re.MULTILINE)  # blockquotes
        text = re.sub(r"^#{3,6}\s+", "", text, flags=re.MULTILINE)  # sub-headings
        text = re.sub(r"^[-=]{3,}\s*$", "", text, flags=re.MULTILINE)  # hr

        paragraphs: list[str] = []
        for para in re.split(r"\n\s*\n", text):
            cleaned = re.sub(r"\s+", " ", para).strip()
            if cleaned:
                paragraphs.append(cleaned)
        return paragraphs
