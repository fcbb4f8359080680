"""Filenames for persisted export artifacts."""

import re
from datetime import datetime, timezone

# Characters that are unsafe in filenames on common filesystems
_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')
_WHITESPACE = re.compile(r"\s+")


def sanitize_title(title: str) -> str:
    """Make a note title safe to use as a filename stem."""
    stem = _WHITESPACE.sub("_", title.strip())
    stem = _UNSAFE_CHARS.sub("", stem).strip("._")
    return stem or "untitled"


def export_timestamp(now: datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with colons replaced by hyphens.

    Example: ``2024-05-01T12-30-45.123Z``
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z").replace(":", "-")


def export_filename(title: str, ext: str, now: datetime | None = None) -> str:
    """Build ``{sanitized title}_{timestamp}.{ext}`` for an export."""
    return f"{sanitize_title(title)}_{export_timestamp(now)}.{ext.lstrip('.')}"
