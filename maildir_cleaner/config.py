"""Application configuration — paths, defaults, settings.json."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path

APP_NAME = "maildir-cleaner"
APP_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

# ── Directories ───────────────────────────────────────────────────────────────

_XDG_DATA = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
_XDG_CONFIG = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

DATA_DIR: Path = _XDG_DATA / "maildir-cleaner"
CONFIG_DIR: Path = _XDG_CONFIG / "maildir-cleaner"
LOG_PATH: Path = DATA_DIR / "maildir-cleaner.log"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.json"

# ── Maildir layout ────────────────────────────────────────────────────────────

SCAN_SUBDIRS: tuple[str, ...] = ("new", "cur")          # tmp holds in-flight deliveries
MAILDIR_SUBDIRS: tuple[str, ...] = ("new", "cur", "tmp")
SUBSCRIPTIONS_FILE_NAME: str = "subscriptions"

# ── Archive defaults ──────────────────────────────────────────────────────────

DEFAULT_ARCHIVE_FOLDER: str = "Archived"
DEFAULT_ARCHIVE_PATTERN: str = "keep"    # keep | year | month
DEFAULT_EXCLUDE_FOLDERS: list[str] = []


# ── Settings file ─────────────────────────────────────────────────────────────

def load_settings(path: Path | None = None) -> None:
    """Load persisted settings from disk, falling back to defaults."""
    global DEFAULT_ARCHIVE_FOLDER, DEFAULT_ARCHIVE_PATTERN, DEFAULT_EXCLUDE_FOLDERS
    path = path or SETTINGS_PATH
    if not path.exists():
        return
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        folder = data.get("archive_folder", DEFAULT_ARCHIVE_FOLDER)
        if isinstance(folder, str) and folder:
            DEFAULT_ARCHIVE_FOLDER = folder
        pattern = data.get("archive_pattern", DEFAULT_ARCHIVE_PATTERN)
        if pattern in ("keep", "year", "month"):
            DEFAULT_ARCHIVE_PATTERN = pattern
        excludes = data.get("exclude_folders", DEFAULT_EXCLUDE_FOLDERS)
        if isinstance(excludes, list):
            DEFAULT_EXCLUDE_FOLDERS = [str(name) for name in excludes if name]
    except (OSError, ValueError, AttributeError) as exc:
        logger.warning("Could not load settings: %s", exc)


# Load on import so settings are available immediately
load_settings()
