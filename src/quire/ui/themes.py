"""Textual CSS themes for quire."""

APP_CSS = """
/* ── Global ────────────────────────────────── */
Screen {
    background: $surface;
}

/* ── Reader Screen ─────────────────────────── */
#reader-header {
    dock: top;
    height: 1;
    background: $primary;
    color: $text;
    padding: 0 2;
    text-style: bold;
}

#reader-body {
    height: 1fr;
}

#toc-sidebar {
    width: 30;
    dock: left;
    display: none;
    background: $surface-darken-1;
    border-right: solid $primary;
}

#toc-sidebar.visible {
    display: block;
}

#toc-list {
    height: 1fr;
}

#toc-title, #bookmark-title {
    padding: 1 1;
    text-style: bold;
    background: $primary-darken-1;
    color: $text;
    text-align: center;
    height: 3;
}

#bookmark-sidebar {
    width: 32;
    dock: right;
    display: none;
    background: $surface-darken-1;
    border-left: solid $primary;
}

#bookmark-sidebar.visible {
    display: block;
}

#bookmark-list {
    height: 1fr;
}

#content-scroll {
    height: 1fr;
}

#content-text {
    padding: 1 4;
}

#status-panel {
    dock: bottom;
    height: 4;
    padding: 0 2;
    display: none;
    background: $surface-darken-1;
    border-top: solid $primary;
}

#status-panel.visible {
    display: block;
}

/* ── Search ────────────────────────────────── */
#search-panel {
    dock: bottom;
    height: 14;
    display: none;
    background: $surface-darken-1;
    border-top: solid $primary;
}

#search-panel.visible {
    display: block;
}

#search-input {
    width: 100%;
}

#search-results {
    height: 1fr;
}

/* ── List items ────────────────────────────── */
.toc-item {
    padding: 0 1;
    height: 1;
}

.toc-item:hover, .bookmark-item:hover, .search-item:hover {
    background: $primary-darken-1;
}

.bookmark-item, .search-item {
    padding: 0 1;
    height: 2;
}
"""
