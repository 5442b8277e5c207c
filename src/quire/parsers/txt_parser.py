"""Plain text parser."""

from __future__ import annotations

import re
from pathlib import Path

from quire.library.models import Novel

from .base import BaseParser, build_novel

SECTION_SIZE = 50  # paragraphs per chapter when no headings are found

_CHAPTER_RE = re.compile(
    r"(?m)^(?:Chapter|CHAPTER|第.{1,10}[章节回]|Part|PART)\s*.{0,100}$"
)


class TxtParser(BaseParser):
    SUPPORTED_EXTENSIONS = (".txt", ".text")

    def parse(self, file_path: Path) -> Novel:
        text = file_path.read_text(encoding="utf-8", errors="replace")
        sections: list[tuple[str, list[str]]] = []

        parts = _CHAPTER_RE.split(text)
        titles = _CHAPTER_RE.findall(text)

        if len(titles) >= 2:
            # Text before the first heading
            sections.append(("Preamble", self._text_to_paragraphs(parts[0])))
            for title, body in zip(titles, parts[1:]):
                sections.append((title.strip(), self._text_to_paragraphs(body)))
        else:
            all_paras = self._text_to_paragraphs(text)
            for i in range(0, len(all_paras), SECTION_SIZE):
                sections.append(
                    (f"Section {i // SECTION_SIZE + 1}", all_paras[i : i + SECTION_SIZE])
                )

        return build_novel(file_path.stem, sections)

    def _text_to_paragraphs(self, text: str) -> list[str]:
        paragraphs: list[str] = []
        for para in re.split(r"\n\s*\n", text):
            cleaned = re.sub(r"\s+", " ", para).strip()
            if cleaned:
                paragraphs.append(cleaned)
        return paragraphs
