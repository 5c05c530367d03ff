"""ArchiveWorker — move collected messages into archive folders.

For each message, in order:
  1. derive the destination folder name from the generator
  2. create + subscribe the folder (and its ancestors) if needed
  3. rename the file into ``<folder>/<new|cur>/<file name>``

The first failure stops the run.  Messages moved before it stay moved; a
re-run picks up the rest because archived messages are excluded from scans.
"""
from __future__ import annotations

import dataclasses
import logging
import os
from typing import Callable

from maildir_cleaner.maildir.provision import setup_folder
from maildir_cleaner.models.archive_pattern import ArchiveFolderNameGenerator
from maildir_cleaner.models.message import Message

logger = logging.getLogger(__name__)


class ArchiveWorker:
    def __init__(
        self,
        root_path: str,
        generator: ArchiveFolderNameGenerator,
        on_progress: Callable[[int, int], None] | None = None,
    ) -> None:
        self._root_path = root_path
        self._generator = generator
        self._on_progress = on_progress or (lambda done, total: None)

    def run(self, messages: list[Message]) -> list[Message]:
        """Archive *messages* and return them as they are after the move."""
        archived: list[Message] = []
        total = len(messages)
        for message in messages:
            archived.append(self.archive_message(message))
            self._on_progress(len(archived), total)

        logger.info("Archived %d message(s) under %s", len(archived), self._generator.base_name)
        return archived

    def archive_message(self, message: Message) -> Message:
        folder_name = self._generator.generate(message)
        folder_path = setup_folder(self._root_path, folder_name)

        dest_path = os.path.join(folder_path, message.sub_dir_name, message.file_name)
        os.rename(message.full_path, dest_path)
        logger.info("Moved %s → %s", message.full_path, dest_path)

        return dataclasses.replace(message, full_path=dest_path, folder_name=folder_name)


def archive(
    root_path: str,
    messages: list[Message],
    generator: ArchiveFolderNameGenerator,
    on_progress: Callable[[int, int], None] | None = None,
) -> list[Message]:
    return ArchiveWorker(root_path, generator, on_progress).run(messages)
