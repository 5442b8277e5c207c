"""Built-in novel used on first launch or when stored data is unreadable."""

from __future__ import annotations

from .models import Chapter, Novel

SEED_TITLE = "The Lighthouse Keeper"

_SEED_CHAPTERS = [
    (
        "The Arrival",
        "<p>The ferry left Mara on the jetty with one trunk and a letter of "
        "appointment.</p><p>Above her the lighthouse stood white against the "
        "weather, its lamp dark until dusk.</p>",
    ),
    (
        "The Logbook",
        "<p>The previous keeper had written in the logbook every night for "
        "eleven years.</p><p>The last entry said only: <em>the light is "
        "watching the sea, and the sea is watching back</em>.</p>",
    ),
    (
        "The Storm",
        "<p>On the ninth night the storm came in from the west.</p><p>Mara "
        "climbed the stairs with the lamp oil and did not look at the "
        "window until the light was burning.</p>",
    ),
]


def seed_novel() -> Novel:
    """Return a fresh copy of the built-in novel."""
    return Novel(
        title=SEED_TITLE,
        chapters=[
            Chapter(id=i, title=title, content=content)
            for i, (title, content) in enumerate(_SEED_CHAPTERS, start=1)
        ],
    )
