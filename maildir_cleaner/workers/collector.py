"""Collector — walks a Maildir tree and picks out messages older than N days."""
from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Iterable

from maildir_cleaner import config
from maildir_cleaner.maildir.folder_name import HIERARCHY_SEPARATOR, decode_folder_name
from maildir_cleaner.maildir.timestamp import is_known, parse_delivery_time
from maildir_cleaner.models.message import Message

logger = logging.getLogger(__name__)


class Collector:
    """
    Collects the messages of one mailbox that:
      * are not in an excluded folder (or any of its subfolders), and
      * were delivered strictly before ``now - age_of_days``.

    Messages whose delivery time cannot be read from the file name are never
    collected.
    """

    def __init__(
        self,
        age_of_days: int,
        exclude_folder_names: Iterable[str] = (),
        now: datetime | None = None,
    ) -> None:
        if age_of_days < 0:
            raise ValueError(f"age_of_days must be >= 0, got {age_of_days}")
        self._now = now or datetime.now(timezone.utc)
        self._max_time = self._now - timedelta(days=age_of_days)
        self._excluded = tuple(name for name in exclude_folder_names if name)

    @property
    def max_time(self) -> datetime:
        return self._max_time

    def is_excluded(self, folder_name: str) -> bool:
        for name in self._excluded:
            if folder_name == name or folder_name.startswith(name + HIERARCHY_SEPARATOR):
                return True
        return False

    def target(self, message: Message) -> bool:
        if self.is_excluded(message.folder_name):
            return False
        return is_known(message.delivery_time) and message.delivery_time < self._max_time

    def collect(self, root_path: str) -> list[Message]:
        """Return the matching messages sorted by (folder name, file name).

        Raises OSError for filesystem failures and InvalidFolderNameError for
        an undecodable folder directory; nothing is returned in that case.
        """
        root_path = os.path.abspath(root_path)
        collected = self._collect_folder("", root_path, skip_missing=False)

        with os.scandir(root_path) as it:
            entries = sorted(it, key=lambda e: e.name)

        for entry in entries:
            if not entry.name.startswith(".") or not entry.is_dir(follow_symlinks=False):
                continue
            folder_name = decode_folder_name(entry.name[1:])
            # Freshly created folders may not have new/cur yet
            collected.extend(self._collect_folder(folder_name, entry.path, skip_missing=True))

        collected.sort(key=lambda m: m.sort_key)
        logger.info("Collected %d message(s) from %s", len(collected), root_path)
        return collected

    def _collect_folder(self, folder_name: str, folder_path: str, skip_missing: bool) -> list[Message]:
        messages: list[Message] = []
        for sub_name in config.SCAN_SUBDIRS:
            sub_path = os.path.join(folder_path, sub_name)
            if skip_missing and not os.path.exists(sub_path):
                continue
            messages.extend(self._collect_messages(folder_name, sub_name, sub_path))

        logger.debug("Folder %r: %d target message(s)", folder_name, len(messages))
        return messages

    def _collect_messages(self, folder_name: str, sub_name: str, dir_path: str) -> list[Message]:
        messages: list[Message] = []
        with os.scandir(dir_path) as it:
            for entry in it:
                if entry.is_dir(follow_symlinks=False):
                    continue
                message = Message(
                    full_path=entry.path,
                    folder_name=folder_name,
                    sub_dir_name=sub_name,
                    file_name=entry.name,
                    size=entry.stat(follow_symlinks=False).st_size,
                    delivery_time=parse_delivery_time(entry.name),
                )
                if self.target(message):
                    messages.append(message)
        return messages
