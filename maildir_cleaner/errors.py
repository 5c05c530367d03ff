"""Exception types raised by maildir-cleaner.

Filesystem failures are not wrapped: they surface as the builtin ``OSError``
subclasses, whose messages already carry the failing path.
"""
from __future__ import annotations


class MaildirCleanerError(Exception):
    """Base class for every error the CLI reports as fatal."""


class InvalidFolderNameError(MaildirCleanerError):
    """A folder name cannot be decoded from / encoded to modified UTF-7."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"{raw} is invalid folder name: {reason}")
        self.raw = raw
        self.reason = reason


class SubscriptionsUnsupportedError(MaildirCleanerError):
    """The mailbox root has no line-oriented ``subscriptions`` file."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"subscriptions file not found: {path} "
            "(currently only dovecot is supported)"
        )
        self.path = path


class InvalidArchivePatternError(MaildirCleanerError):
    def __init__(self, pattern: str) -> None:
        super().__init__(f"invalid archive-pattern '{pattern}'")
        self.pattern = pattern
