"""Delivery time of a Maildir message, taken from its file name.

Maildir file names start with the Unix time of delivery, e.g.
``1674617693.M958571P8888.localhost.localdomain,S=545,W=562:2,S``.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone

UNKNOWN_TIME = datetime.fromtimestamp(0, tz=timezone.utc)

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_delivery_time(file_name: str) -> datetime:
    """Return the delivery time encoded in *file_name*, or UNKNOWN_TIME."""
    token = file_name.split(".", 1)[0]
    if not _INT_RE.fullmatch(token):
        return UNKNOWN_TIME
    try:
        return datetime.fromtimestamp(int(token), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return UNKNOWN_TIME


def is_known(delivery_time: datetime) -> bool:
    return delivery_time != UNKNOWN_TIME
