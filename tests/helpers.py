"""Maildir builders shared by the test modules."""
from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from pathlib import Path

from maildir_cleaner.maildir.folder_name import encode_folder_name
from maildir_cleaner.maildir.timestamp import parse_delivery_time
from maildir_cleaner.models.message import Message

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

_seq = itertools.count(1)


def folder_dir(root: Path, folder_name: str = "") -> Path:
    """Directory of a decoded folder name ('' is the inbox)."""
    if folder_name == "":
        return root
    return root / ("." + encode_folder_name(folder_name))


def make_mail_folder(root: Path, folder_name: str = "", subdirs=("new", "cur", "tmp")) -> Path:
    path = folder_dir(root, folder_name)
    path.mkdir(exist_ok=True)
    for sub in subdirs:
        (path / sub).mkdir(exist_ok=True)
    return path


def make_mail_by_name(root: Path, folder_name: str, sub: str, file_name: str, size: int = 10) -> Message:
    path = folder_dir(root, folder_name) / sub / file_name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return Message(
        full_path=str(path),
        folder_name=folder_name,
        sub_dir_name=sub,
        file_name=file_name,
        size=size,
        delivery_time=parse_delivery_time(file_name),
    )


def make_mail(
    root: Path,
    folder_name: str,
    sub: str,
    age_days: int,
    size: int | None = None,
    now: datetime = NOW,
) -> Message:
    """Create a mail delivered *age_days* before *now* (size defaults to age)."""
    ts = int((now - timedelta(days=age_days)).timestamp())
    file_name = f"{ts}.M{next(_seq)}P4242.localhost,S={size or age_days}:2,S"
    return make_mail_by_name(root, folder_name, sub, file_name, size if size is not None else age_days)


def make_subscriptions(root: Path, content: str = "") -> Path:
    path = root / "subscriptions"
    path.write_text(content, encoding="ascii")
    return path


def archived_path(root: Path, folder_name: str, msg: Message) -> Path:
    return folder_dir(root, folder_name) / msg.sub_dir_name / msg.file_name
