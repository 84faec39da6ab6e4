"""Timestamps and append-only log files."""

from __future__ import annotations

from datetime import datetime
from os import PathLike

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def timestamp() -> str:
    """Return the current local date and time as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def append_log(message: str, path: str | PathLike) -> None:
    """Append ``message`` verbatim to the log file at ``path``."""
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(message)