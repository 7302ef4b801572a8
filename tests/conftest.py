"""Shared fixtures for slotbill tests."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from slotbill.models.occurrence import Classification, Occurrence, RawOccurrence

DEFAULT_START = datetime(2025, 5, 1, 10, 0, tzinfo=timezone.utc)
DEFAULT_END = datetime(2025, 5, 1, 11, 0, tzinfo=timezone.utc)

_ENV_VARS = (
    "SLOTBILL_LATE_CANCELLATION_DAYS",
    "SLOTBILL_UNBILLABLE_CODES",
    "SLOTBILL_PROJECT_CODE_PATTERN",
    "SLOTBILL_CANCEL_KEYWORDS",
    "LOG_LEVEL",
)


def _raw_fields(counter: itertools.count, overrides: dict[str, Any]) -> dict[str, Any]:
    start = overrides.get("start", DEFAULT_START)
    # Mirrors a calendar export: the sequence time tracks last-modified
    # unless a test sets it explicitly.
    last_modified = overrides.get("last_modified", start - timedelta(days=7))
    fields: dict[str, Any] = {
        "uid": f"raw-{next(counter)}",
        "summary": "[ALPHA] Test session",
        "description": None,
        "location": None,
        "status": None,
        "organizer": "alpha@libc.org",
        "sequence": 0,
        "start": start,
        "end": DEFAULT_END,
        "all_day": False,
        "tzid": "UTC",
        "appointment_sequence_time": last_modified,
        "created": DEFAULT_START,
        "last_modified": last_modified,
        "dtstamp": DEFAULT_START,
        "busy_status": None,
        "recurrence_id": None,
        "source_type": "single",
    }
    fields.update(overrides)
    return fields


@pytest.fixture()
def make_raw() -> Callable[..., RawOccurrence]:
    """Factory for :class:`RawOccurrence` with sensible defaults.

    Defaults describe a one-hour ``[ALPHA]`` session on 2025-05-01 last
    modified a week before it starts.
    """
    counter = itertools.count(1)

    def _make(**overrides: Any) -> RawOccurrence:
        return RawOccurrence(**_raw_fields(counter, overrides))

    return _make


@pytest.fixture()
def make_occurrence() -> Callable[..., Occurrence]:
    """Factory for already-classified :class:`Occurrence` records.

    Duration and billable minutes default to the start/end span; the
    project code defaults to ``ALPHA`` and the classification to ACTIVE.
    """
    raw_counter = itertools.count(1)
    id_counter = itertools.count(1)

    def _make(**overrides: Any) -> Occurrence:
        engine_fields = {
            key: overrides.pop(key)
            for key in (
                "id",
                "project_code",
                "is_cancelled",
                "classification",
                "duration_minutes",
                "billable_minutes",
            )
            if key in overrides
        }
        fields = _raw_fields(raw_counter, overrides)
        span = max(0, round((fields["end"] - fields["start"]).total_seconds() / 60))
        duration = engine_fields.get("duration_minutes", span)
        return Occurrence(
            **fields,
            id=engine_fields.get("id", f"occ-{next(id_counter)}"),
            project_code=engine_fields.get("project_code", "ALPHA"),
            is_cancelled=engine_fields.get("is_cancelled", False),
            classification=engine_fields.get("classification", Classification.ACTIVE),
            duration_minutes=duration,
            billable_minutes=engine_fields.get("billable_minutes", span),
        )

    return _make


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all slotbill-related environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("slotbill.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
