"""Cancellation detection for raw occurrences."""

from __future__ import annotations

from collections.abc import Iterable

from slotbill.config import DEFAULT_CANCEL_KEYWORDS
from slotbill.models.occurrence import RawOccurrence


def _normalize(value: str | None) -> str | None:
    return value.strip().upper() if value is not None else None


def detect_cancellation(
    raw: RawOccurrence,
    keywords: Iterable[str] = DEFAULT_CANCEL_KEYWORDS,
) -> bool:
    """Decide whether *raw* is a cancelled occurrence.

    A ``STATUS`` of ``CANCELLED`` is authoritative.  Otherwise a
    cancellation keyword in the title, description or location only
    counts when the free/busy status is ``FREE``: an event can mention
    "cancelled" in its text while still occupying the resource.

    Args:
        raw: The occurrence to inspect.
        keywords: Cancellation words, matched case-insensitively as
            substrings.

    Returns:
        ``True`` if the occurrence is cancelled.
    """
    if _normalize(raw.status) == "CANCELLED":
        return True

    haystack = " ".join(
        value.lower()
        for value in (raw.summary, raw.description, raw.location)
        if value
    )
    if not any(word.lower() in haystack for word in keywords):
        return False

    return _normalize(raw.busy_status) == "FREE"
