"""Archive folder naming — where an archived message ends up."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone
from enum import Enum

from maildir_cleaner.errors import InvalidArchivePatternError
from maildir_cleaner.maildir.folder_name import HIERARCHY_SEPARATOR
from maildir_cleaner.models.message import Message


class ArchivePattern(str, Enum):
    KEEP = "keep"     # Archived.<original folder>
    YEAR = "year"     # Archived.2021
    MONTH = "month"   # Archived.2021.01


@dataclass(frozen=True)
class ArchiveFolderNameGenerator:
    base_name: str
    pattern: ArchivePattern = ArchivePattern.KEEP

    def generate(self, message: Message) -> str:
        """Return the decoded destination folder name for *message*."""
        if self.pattern is ArchivePattern.KEEP:
            if message.folder_name == "":
                return self.base_name
            return self._join(message.folder_name)

        delivered = message.delivery_time.astimezone(timezone.utc)
        if self.pattern is ArchivePattern.YEAR:
            return self._join(f"{delivered.year:04d}")
        return self._join(f"{delivered.year:04d}", f"{delivered.month:02d}")

    def _join(self, *parts: str) -> str:
        return HIERARCHY_SEPARATOR.join((self.base_name, *parts))


def create_generator(pattern: str, base_name: str) -> ArchiveFolderNameGenerator:
    """Build the generator for a pattern name given on the command line."""
    try:
        archive_pattern = ArchivePattern(pattern)
    except ValueError:
        raise InvalidArchivePatternError(pattern) from None
    return ArchiveFolderNameGenerator(base_name=base_name, pattern=archive_pattern)
