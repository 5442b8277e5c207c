"""Reading progress derived from chapter word counts and scroll position."""

from __future__ import annotations

import math
from typing import Sequence

from quire.library.models import Chapter, ProgressSnapshot

from .text import count_words


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def clamp_scroll(fraction: float) -> float:
    return max(0.0, min(100.0, float(fraction)))


def calculate_progress(
    chapters: Sequence[Chapter], current_index: int, scroll_fraction: float
) -> ProgressSnapshot:
    """Compute the progress snapshot for a reading position.

    scroll_fraction is the 0-100 position inside the current chapter.
    Overall progress is words read over total words, where words read are
    all words of earlier chapters plus the scrolled share of the current one.
    """
    scroll = clamp_scroll(scroll_fraction)
    counts = [count_words(ch.content) for ch in chapters]
    total = sum(counts)

    words_before = sum(counts[: max(0, current_index)])
    if 0 <= current_index < len(counts):
        scrolled = round_half_away(scroll / 100 * counts[current_index])
    else:
        scrolled = 0
    words_read = words_before + scrolled

    overall = round_half_away(words_read / total * 100) if total > 0 else 0

    return ProgressSnapshot(
        total_novel_words=total,
        words_before=words_before,
        words_scrolled_in_current=scrolled,
        total_words_read=words_read,
        overall_progress=overall,
        chapter_progress=round_half_away(scroll),
        bookmarked_count=sum(1 for ch in chapters if ch.bookmarked),
        chapter_count=len(chapters),
    )
