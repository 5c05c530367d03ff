"""maildir-cleaner — console entry point."""
from __future__ import annotations

import logging
import sys

from maildir_cleaner.config import LOG_PATH


def _setup_logging() -> None:
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(LOG_PATH, encoding="utf-8"))
    except OSError as exc:
        print(f"Cannot open log file {LOG_PATH}: {exc}", file=sys.stderr)
    logging.basicConfig(level=logging.WARNING, format=fmt, handlers=handlers)


def main() -> None:
    _setup_logging()
    from maildir_cleaner.cli import main as cli_main

    sys.exit(cli_main())


if __name__ == "__main__":
    main()
