"""Filesystem-safe names for transcripts and their assets."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

UNKNOWN_TIME = "unknown"


def sanitize_filename(name: str) -> str:
    """Replace every character that is not alphanumeric or ``_`` with ``_``."""
    return "".join(c if c.isalnum() or c == "_" else "_" for c in name)


def format_created(ts: float) -> str:
    """Render a Unix timestamp as ``2023-11-14 22:13:20 UTC``.

    Sub-second precision is shown only when present: three digits when
    the value is a whole number of milliseconds, six otherwise.

    Raises ``OverflowError``, ``ValueError`` or ``OSError`` when *ts* is
    outside the range the platform can represent.
    """
    dt = datetime.fromtimestamp(ts, tz=UTC)
    text = dt.strftime("%Y-%m-%d %H:%M:%S")
    if dt.microsecond:
        if dt.microsecond % 1000 == 0:
            text += f".{dt.microsecond // 1000:03d}"
        else:
            text += f".{dt.microsecond:06d}"
    return f"{text} UTC"


def created_label(create_time: float | None) -> str | None:
    """Formatted creation time, or ``None`` if it is missing or unrepresentable."""
    if create_time is None:
        return None
    try:
        return format_created(create_time)
    except (OverflowError, ValueError, OSError) as exc:
        logger.warning("Ignoring creation time %r: %s", create_time, exc)
        return None


def document_base_name(title: str, created: str | None) -> str:
    """Deterministic base name shared by a transcript and its copied assets.

    *created* is the output of :func:`created_label`.
    """
    time = created or UNKNOWN_TIME
    return f"conversation_{sanitize_filename(time)}_{sanitize_filename(title)}"
