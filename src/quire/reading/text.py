"""Markup stripping and word counting."""

from __future__ import annotations

import html
import re

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")
_BLOCK_TAG_RE = re.compile(
    r"</?(?:p|div|br|h[1-6]|li|ul|ol|blockquote|pre|section|article|tr)\b[^>]*>",
    re.IGNORECASE,
)


def strip_markup(content: str) -> str:
    # Each tag becomes a space so "</p><p>" never glues words together.
    return _TAG_RE.sub(" ", content)


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", html.unescape(text)).strip()


def plain_text(content: str) -> str:
    """Markup-free text with entities decoded and whitespace collapsed."""
    return _collapse(strip_markup(content))


def display_text(content: str) -> str:
    """Readable body: the words of plain_text, one blank line between blocks.

    Only the whitespace between words differs from plain_text, so a search
    hit in one is the same hit in the other.
    """
    blocks: list[str] = []
    current: list[str] = []
    pos = 0
    for tag in _TAG_RE.finditer(content):
        current.append(content[pos : tag.start()])
        if _BLOCK_TAG_RE.fullmatch(tag.group()):
            blocks.append(_collapse("".join(current)))
            current = []
        else:
            current.append(" ")
        pos = tag.end()
    current.append(content[pos:])
    blocks.append(_collapse("".join(current)))
    return "\n\n".join(block for block in blocks if block)


def count_words(content: str) -> int:
    return len(strip_markup(content).split())
