"""Quire - terminal reader for a single novel."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from textual.app import App

from quire.config import AppConfig, load_config
from quire.library.storage import NovelStorage, SqliteStorage
from quire.library.store import NovelStore
from quire.reading.session import ReadingSession
from quire.ui.screens.reader_screen import ReaderScreen
from quire.ui.themes import APP_CSS

log = logging.getLogger(__name__)


class QuireApp(App):
    """Reads, searches and annotates one chaptered novel."""

    TITLE = "Quire"
    CSS = APP_CSS

    def __init__(
        self,
        config: AppConfig | None = None,
        open_file: str | None = None,
        storage: NovelStorage | None = None,
    ) -> None:
        super().__init__()
        self.config = config or load_config()
        self.storage = storage or SqliteStorage(self.config.db_path)
        self.store = NovelStore(self.storage)
        self.session = ReadingSession(
            self.store, snippet_context=self.config.snippet_context
        )
        self._open_file = open_file

    def on_mount(self) -> None:
        if self._open_file:
            self._import_file(self._open_file)
        self.push_screen(ReaderScreen())

    def _import_file(self, file_path_str: str) -> None:
        from quire.parsers.base import get_parser

        file_path = Path(file_path_str).expanduser().resolve()
        if not file_path.exists():
            self.notify(f"File not found: {file_path}", severity="error")
            return

        try:
            novel = get_parser(file_path).parse(file_path)
        except Exception as e:
            log.exception("Import of %s failed", file_path)
            self.notify(f"Error importing: {e}", severity="error")
            return

        if not novel.chapters:
            self.notify(f"No chapters found in {file_path.name}", severity="warning")
            return
        self.session.replace_novel(novel)
        log.info("Imported %s with %d chapters", file_path, len(novel.chapters))
        self.notify(f"Imported: {novel.title}")

    def action_quit(self) -> None:
        self.storage.close()
        self.exit()


def _setup_logging(config: AppConfig) -> None:
    handler = logging.FileHandler(config.log_path, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root = logging.getLogger("quire")
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)


def main() -> None:
    config = load_config()
    _setup_logging(config)

    open_file: str | None = None
    if len(sys.argv) > 1:
        open_file = sys.argv[1]

    app = QuireApp(config=config, open_file=open_file)
    app.run()


if __name__ == "__main__":
    main()
