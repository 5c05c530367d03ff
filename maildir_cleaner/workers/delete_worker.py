"""DeleteWorker — permanently remove collected message files."""
from __future__ import annotations

import logging
import os
from typing import Callable

from maildir_cleaner.models.message import Message

logger = logging.getLogger(__name__)


class DeleteWorker:
    """Removes each message file in order; the first failure aborts the run."""

    def __init__(self, on_progress: Callable[[int, int], None] | None = None) -> None:
        self._on_progress = on_progress or (lambda done, total: None)

    def run(self, messages: list[Message]) -> int:
        total = len(messages)
        for done, message in enumerate(messages, start=1):
            os.remove(message.full_path)
            logger.debug("Deleted %s", message.full_path)
            self._on_progress(done, total)

        logger.info("Deleted %d message(s)", total)
        return total


def delete(
    root_path: str,
    messages: list[Message],
    on_progress: Callable[[int, int], None] | None = None,
) -> int:
    """Delete *messages* found under *root_path*; returns the count removed."""
    logger.info("Deleting %d message(s) under %s", len(messages), root_path)
    return DeleteWorker(on_progress).run(messages)
