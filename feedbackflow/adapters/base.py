"""Helpers shared by the platform adapters."""

import hashlib
from typing import Any

from ..config import settings


def author_or_unknown(*candidates: str | None) -> str:
    """Return the first non-blank candidate, or the unknown-author sentinel."""
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate
    return settings.unknown_author


def stable_id(*parts: str | None) -> str:
    """Create a deterministic identifier for sources that do not provide one."""
    key = "\x1f".join(part or "" for part in parts)
    return hashlib.md5(key.encode("utf-8")).hexdigest()


def build_metadata(for_analysis: bool, values: dict[str, Any]) -> dict[str, Any] | None:
    """
    Assemble a metadata dictionary honoring for-analysis mode.

    Entries whose value is None or an empty string are skipped. In
    for-analysis mode, or when nothing is left, the metadata is omitted.
    """
    if for_analysis:
        return None
    metadata = {key: value for key, value in values.items() if value is not None and value != ""}
    return metadata or None


def truncate_for_title(content: str | None, max_length: int | None = None) -> str:
    """Derive a thread title from a post body."""
    max_length = max_length or settings.title_max_length
    if not content:
        return "Untitled Post"
    if len(content) <= max_length:
        return content
    return content[:max_length] + "..."
