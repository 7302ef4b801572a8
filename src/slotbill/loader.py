"""Loader for normalized raw-occurrence records.

Reads the JSON handed over by the calendar-expansion collaborator: a
top-level array of objects, one per concrete occurrence, with camelCase or
snake_case keys and ISO 8601 datetimes.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from slotbill.exceptions import InputFormatError
from slotbill.models.occurrence import RawOccurrence


def load_raw_occurrences(text: str, source: str = "<string>") -> list[RawOccurrence]:
    """Parse a JSON document into raw occurrences.

    Args:
        text: JSON text holding an array of occurrence objects.  Empty or
            whitespace-only text yields an empty list.
        source: Label for the input origin, used in error messages.

    Returns:
        The validated records, in document order.

    Raises:
        InputFormatError: If the text is not valid JSON, the top-level
            value is not an array, or a record fails validation.
    """
    if not text or not text.strip():
        return []

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputFormatError(f"{source}: invalid JSON: {exc}", source=source) from exc

    if not isinstance(payload, list):
        raise InputFormatError(
            f"{source}: expected a JSON array of occurrences, got {type(payload).__name__}",
            source=source,
        )

    records: list[RawOccurrence] = []
    for index, item in enumerate(payload):
        try:
            records.append(RawOccurrence.model_validate(item))
        except ValidationError as exc:
            raise InputFormatError(
                f"{source}: record {index} is invalid: {exc}",
                source=source,
                index=index,
            ) from exc
    return records


def load_raw_occurrences_file(file_path: str | Path) -> list[RawOccurrence]:
    """Read and parse a raw-occurrence JSON file.

    Args:
        file_path: Path to the file.  Accepts both :class:`str` and
            :class:`~pathlib.Path`.

    Returns:
        The validated records.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        InputFormatError: If the content is not UTF-8 or is malformed.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Occurrence file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InputFormatError(f"{path}: not valid UTF-8", source=str(path)) from exc
    return load_raw_occurrences(text, source=str(path))
