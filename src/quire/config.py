"""Configuration management via .env file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

log = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

DEFAULT_SNIPPET_CONTEXT = 40
DEFAULT_SCROLL_STEP = 10


def _xdg_data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r: not an integer", name, raw)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    log.warning("Ignoring %s=%r: not a boolean", name, raw)
    return default


@dataclass
class AppConfig:
    # Paths
    data_dir: Path = field(default_factory=lambda: _xdg_data_home() / "quire")
    config_dir: Path = field(default_factory=lambda: _xdg_config_home() / "quire")
    db_path: Path = field(init=False)

    # Reading
    snippet_context: int = DEFAULT_SNIPPET_CONTEXT  # chars either side of a hit
    scroll_step: int = DEFAULT_SCROLL_STEP  # percent per keypress
    confirm_delete: bool = True

    log_path: Path = field(init=False)

    def __post_init__(self) -> None:
        self.db_path = self.data_dir / "quire.db"
        self.log_path = self.data_dir / "quire.log"
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)


def load_config(env_path: Optional[Path] = None) -> AppConfig:
    """Load config from .env file. Searches CWD then config dir."""
    search_paths = [
        env_path,
        Path.cwd() / ".env",
        _xdg_config_home() / "quire" / ".env",
        Path.home() / ".env",
    ]
    for p in search_paths:
        if p and p.exists():
            load_dotenv(p)
            break

    return AppConfig(
        snippet_context=max(
            0, _env_int("QUIRE_SNIPPET_CONTEXT", DEFAULT_SNIPPET_CONTEXT)
        ),
        scroll_step=max(1, _env_int("QUIRE_SCROLL_STEP", DEFAULT_SCROLL_STEP)),
        confirm_delete=_env_bool("QUIRE_CONFIRM_DELETE", True),
    )
