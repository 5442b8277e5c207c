"""Full-text search over chapter content.

Matching runs against the markup-stripped text of each chapter, so a query
never hits tag names or attributes. Results are rebuilt on every call.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from quire.library.models import Chapter, SearchResult

from .text import plain_text

log = logging.getLogger(__name__)

DEFAULT_CONTEXT = 40
ELLIPSIS = "…"


def make_snippet(text: str, start: int, length: int, context: int) -> str:
    lo = max(0, start - context)
    hi = min(len(text), start + length + context)
    snippet = text[lo:hi]
    if lo > 0:
        snippet = ELLIPSIS + snippet.lstrip()
    if hi < len(text):
        snippet = snippet.rstrip() + ELLIPSIS
    return snippet


def normalize_query(query: str) -> str:
    return " ".join(query.split())


def _query_pattern(query: str) -> re.Pattern[str]:
    # Any whitespace run in the text matches a single space in the query.
    words = normalize_query(query).split(" ")
    return re.compile(r"\s+".join(re.escape(w) for w in words), re.IGNORECASE)


def find_occurrences(text: str, query: str) -> list[int]:
    """Offsets of non-overlapping, case-insensitive matches of query in text."""
    return [m.start() for m in _query_pattern(query).finditer(text)]


def locate_occurrence(
    text: str, query: str, occurrence: int
) -> Optional[tuple[int, int]]:
    """Span of the occurrence-th match of query in text, if there is one."""
    if not normalize_query(query) or occurrence < 0:
        return None
    for i, match in enumerate(_query_pattern(query).finditer(text)):
        if i == occurrence:
            return match.span()
    return None


def search(
    chapters: Sequence[Chapter], query: str, context: int = DEFAULT_CONTEXT
) -> list[SearchResult]:
    """Return every match of query, in chapter display order then document order."""
    query = normalize_query(query)
    if not query:
        return []

    results: list[SearchResult] = []
    for chapter in chapters:
        text = plain_text(chapter.content)
        for i, offset in enumerate(find_occurrences(text, query)):
            results.append(
                SearchResult(
                    chapter_id=chapter.id,
                    chapter_title=chapter.title,
                    result_index=i,
                    position=offset,
                    snippet=make_snippet(text, offset, len(query), context),
                    search_term=query,
                )
            )
    log.debug("search %r: %d results", query, len(results))
    return results
