"""Folder name codec — IMAP modified UTF-7 (RFC 3501 §5.1.3).

Dovecot stores a folder ``A.B`` as the directory ``.A.B`` and non-ASCII
names in their modified UTF-7 form, e.g. ``テスト`` → ``&MMYwuTDI-``.
The base64/UTF-16 transform is imapclient's; this module adds the strict
validation the mailbox-name variant requires.
"""
from __future__ import annotations

import logging

from imapclient import imap_utf7

from maildir_cleaner.errors import InvalidFolderNameError

logger = logging.getLogger(__name__)

HIERARCHY_SEPARATOR = "."

_SHIFT_START = ord("&")
_B64_ALPHABET = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+,"
)


def encode_folder_name(decoded: str) -> str:
    """Return the on-disk (modified UTF-7) form of a decoded folder name."""
    try:
        return imap_utf7.encode(decoded).decode("ascii")
    except UnicodeError as exc:
        raise InvalidFolderNameError(decoded, str(exc)) from exc


def decode_folder_name(encoded: str) -> str:
    """Return the human-readable form of an on-disk folder name.

    Raises InvalidFolderNameError for anything that is not canonical modified
    UTF-7: bytes outside printable ASCII, an unterminated ``&`` sequence, bad
    base64 characters or bits, and shifted text that a conforming encoder
    would have written directly.
    """
    try:
        raw = encoded.encode("ascii")
    except UnicodeEncodeError:
        raise InvalidFolderNameError(encoded, "contains non-ASCII characters") from None

    _check_syntax(encoded, raw)

    try:
        decoded = imap_utf7.decode(raw)
        canonical = imap_utf7.encode(decoded)
    except UnicodeError as exc:
        raise InvalidFolderNameError(encoded, str(exc)) from exc

    if canonical != raw:
        raise InvalidFolderNameError(encoded, "not in canonical modified UTF-7 form")
    return decoded


def _check_syntax(encoded: str, raw: bytes) -> None:
    pos = 0
    length = len(raw)
    while pos < length:
        octet = raw[pos]
        if not 0x20 <= octet <= 0x7E:
            raise InvalidFolderNameError(
                encoded, f"non-printable character at offset {pos}"
            )
        if octet != _SHIFT_START:
            pos += 1
            continue

        end = raw.find(b"-", pos + 1)
        if end < 0:
            raise InvalidFolderNameError(
                encoded, f"unterminated shift sequence at offset {pos}"
            )
        for offset in range(pos + 1, end):
            if raw[offset] not in _B64_ALPHABET:
                raise InvalidFolderNameError(
                    encoded, f"illegal base64 character at offset {offset}"
                )
        pos = end + 1


def folder_ancestors(folder_name: str) -> list[str]:
    """``"X.Y.Z"`` → ``["X", "X.Y", "X.Y.Z"]`` (shallowest first)."""
    parts = folder_name.split(HIERARCHY_SEPARATOR)
    return [HIERARCHY_SEPARATOR.join(parts[: i + 1]) for i in range(len(parts))]
