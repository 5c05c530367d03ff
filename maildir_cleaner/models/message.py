"""Message dataclass — one mail file found in a Maildir."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Message:
    full_path: str
    folder_name: str         # decoded name, "" for the inbox
    sub_dir_name: str        # new | cur
    file_name: str
    size: int
    delivery_time: datetime

    @property
    def sort_key(self) -> tuple[bytes, bytes]:
        """Byte-wise (folder, file) ordering, stable across runs."""
        return (
            self.folder_name.encode("utf-8", "surrogateescape"),
            self.file_name.encode("utf-8", "surrogateescape"),
        )
