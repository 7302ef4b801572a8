"""Project code extraction from occurrence titles.

A project code is a bracketed alphanumeric tag such as ``[ALPHA]``
anywhere in the title.  Occurrences without one are grouped under
:data:`~slotbill.config.UNKNOWN_PROJECT_LABEL`.
"""

from __future__ import annotations

import re

from slotbill.config import DEFAULT_CONFIG, UNKNOWN_PROJECT_LABEL


def extract_project_code(
    title: str | None,
    pattern: re.Pattern[str] | None = None,
) -> str | None:
    """Return the uppercased project code found in *title*.

    Only the first capture group of the first match is used, so
    ``"[a] [b]"`` yields ``"A"``.

    Args:
        title: Occurrence title, possibly ``None``.
        pattern: Compiled pattern with one capture group.  Defaults to
            the configured bracket pattern.

    Returns:
        The uppercased code, or ``None`` when *title* is empty or has
        no match.
    """
    if not title:
        return None
    regex = pattern if pattern is not None else DEFAULT_CONFIG.project_code_regex
    match = regex.search(title)
    if not match or not match.group(1):
        return None
    return match.group(1).upper()


def project_label(code: str | None) -> str:
    """Return *code*, or the UNKNOWN label when there is none."""
    return code if code is not None else UNKNOWN_PROJECT_LABEL
