"""Folder provisioning — create Maildir folders and subscribe them.

Dovecot keeps the list of visible folders in a ``subscriptions`` file at the
mailbox root, one encoded folder name per line.  The file is read and
appended to without locking: runs against the same mailbox must not overlap.
"""
from __future__ import annotations

import logging
import os

from maildir_cleaner import config
from maildir_cleaner.errors import InvalidFolderNameError, SubscriptionsUnsupportedError
from maildir_cleaner.maildir.folder_name import HIERARCHY_SEPARATOR, encode_folder_name, folder_ancestors

logger = logging.getLogger(__name__)


def folder_path(root_path: str, encoded_name: str) -> str:
    return os.path.join(root_path, "." + encoded_name)


def setup_folder(root_path: str, folder_name: str) -> str:
    """Make sure *folder_name* and all its ancestors exist and are subscribed.

    Returns the absolute path of the (deepest) folder directory.
    """
    if any(part == "" for part in folder_name.split(HIERARCHY_SEPARATOR)):
        raise InvalidFolderNameError(folder_name, "empty folder name component")
    encoded_chain = [encode_folder_name(name) for name in folder_ancestors(folder_name)]

    subscriptions_path = os.path.join(root_path, config.SUBSCRIPTIONS_FILE_NAME)
    if not os.path.exists(subscriptions_path):
        raise SubscriptionsUnsupportedError(subscriptions_path)

    for encoded in encoded_chain:
        path = folder_path(root_path, encoded)
        _ensure_dir(path)
        for sub_name in config.MAILDIR_SUBDIRS:
            _ensure_dir(os.path.join(path, sub_name))

    for encoded in encoded_chain:
        subscribe(subscriptions_path, encoded)

    return os.path.abspath(folder_path(root_path, encoded_chain[-1]))


def subscribe(subscriptions_path: str, encoded_name: str) -> bool:
    """Append *encoded_name* to the subscriptions file unless already listed.

    Returns True when a line was written.
    """
    with open(subscriptions_path, "r+b") as fh:
        content = fh.read()
        target = encoded_name.encode("ascii")
        if target in content.splitlines():
            return False

        if content and not content.endswith(b"\n"):
            fh.write(b"\n")
        fh.write(target + b"\n")

    logger.info("Subscribed folder %s", encoded_name)
    return True


def _ensure_dir(path: str) -> None:
    if os.path.isdir(path):
        return
    os.mkdir(path)
    chown_inherited(path)
    logger.info("Created directory %s", path)


def chown_inherited(path: str) -> None:
    """Give *path* the owner and group of its parent directory.

    Keeps folders created by root owned by the mailbox user.  Only root may
    give files away, so this is a no-op for other users and on platforms
    without ``os.chown``.
    """
    if not hasattr(os, "chown") or os.geteuid() != 0:
        return
    parent = os.stat(os.path.dirname(os.path.abspath(path)))
    own = os.stat(path)
    if (own.st_uid, own.st_gid) == (parent.st_uid, parent.st_gid):
        return
    os.chown(path, parent.st_uid, parent.st_gid)
    logger.debug("Changed owner of %s to %d:%d", path, parent.st_uid, parent.st_gid)
