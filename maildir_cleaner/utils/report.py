"""Per-folder summary tables for the CLI."""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import TextIO

from maildir_cleaner.models.message import Message

HEADERS = ("Name", "Number of mails", "Total size(byte)")


def comma(value: int) -> str:
    """1089 → '1,089'."""
    return f"{value:,}"


@dataclass
class FolderSummary:
    folder_name: str
    count: int = 0
    total_size: int = 0


def summarize(messages: list[Message]) -> list[FolderSummary]:
    """Aggregate messages per folder, sorted by folder name."""
    by_folder: dict[str, FolderSummary] = {}
    for msg in messages:
        summary = by_folder.setdefault(msg.folder_name, FolderSummary(msg.folder_name))
        summary.count += 1
        summary.total_size += msg.size
    return [by_folder[name] for name in sorted(by_folder)]


def display_width(text: str) -> int:
    """Terminal column width — East Asian wide/fullwidth characters count as 2."""
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def _pad(text: str, width: int, right: bool) -> str:
    fill = " " * (width - display_width(text))
    return fill + text if right else text + fill


def render_summary(messages: list[Message], out: TextIO) -> None:
    """Write a box table of message count and total size per folder."""
    summaries = summarize(messages)
    rows = [(s.folder_name, comma(s.count), comma(s.total_size)) for s in summaries]
    footer = (
        "Total",
        comma(sum(s.count for s in summaries)),
        comma(sum(s.total_size for s in summaries)),
    )

    widths = [
        max(display_width(row[i]) for row in (HEADERS, footer, *rows))
        for i in range(len(HEADERS))
    ]
    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(cells: tuple[str, ...], align_right: tuple[bool, ...]) -> str:
        padded = (_pad(c, w, r) for c, w, r in zip(cells, widths, align_right))
        return "| " + " | ".join(padded) + " |"

    out.write(border + "\n")
    out.write(line(HEADERS, (False, False, False)) + "\n")
    out.write(border + "\n")
    for row in rows:
        out.write(line(row, (False, True, True)) + "\n")
    out.write(border + "\n")
    out.write(line(footer, (True, True, True)) + "\n")
    out.write(border + "\n")
