"""Organizer string normalization.

Calendar exports carry organizers in several shapes: ``mailto:`` URIs,
``Name <addr>`` display forms, or bare addresses.  The aggregator only
needs the lowercase email address.
"""

from __future__ import annotations

import re

_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
_ANGLE_RE = re.compile(r"<([^>]+)>")
_MAILTO_RE = re.compile(r"mailto:", re.IGNORECASE)


def normalize_organizer_email(raw: str | None) -> str | None:
    """Extract a lowercase email address from an organizer string.

    Examples:
        ``"mailto:Alpha@libc.org"`` -> ``"alpha@libc.org"``
        ``"Jane Doe <jane.doe@libc.org>"`` -> ``"jane.doe@libc.org"``
        ``"No Email Provided"`` -> ``None``
    """
    if not raw:
        return None
    candidate = raw.strip()
    if not candidate:
        return None

    angle = _ANGLE_RE.search(candidate)
    if angle:
        candidate = angle.group(1)

    if _MAILTO_RE.search(candidate):
        candidate = _MAILTO_RE.split(candidate)[-1]
    elif ":" in candidate:
        candidate = candidate.split(":")[-1]

    email = _EMAIL_RE.search(candidate)
    if email:
        return email.group(0).lower()

    if "@" in candidate:
        return candidate.lower()

    return None
