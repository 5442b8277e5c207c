"""DOCX parser using python-docx."""

from __future__ import annotations

import re
from pathlib import Path

from docx import Document

from quire.library.models import Novel

from .base import BaseParser, build_novel


class DocxParser(BaseParser):
    SUPPORTED_EXTENSIONS = (".docx",)

    def parse(self, file_path: Path) -> Novel:
        doc = Document(str(file_path))
        title = doc.core_properties.title or file_path.stem

        # Heading styles start a new chapter
        sections: list[tuple[str, list[str]]] = []
        current_title = title
        current_paras: list[str] = []

        for para in doc.paragraphs:
            style_name = para.style.name if para.style else ""
            text = para.text.strip()
            if not text:
                continue
            if style_name.startswith("Heading") or style_name == "Title":
                sections.append((current_title, current_paras))
                current_title = text
                current_paras = []
            else:
                current_paras.append(re.sub(r"\s+", " ", text))
        sections.append((current_title, current_paras))

        return build_novel(title, sections)
