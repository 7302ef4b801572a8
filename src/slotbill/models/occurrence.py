"""Pydantic models for calendar occurrences.

Defines the records flowing through the classification engine:

- :class:`RawOccurrence` -- one concrete booking slot as handed over by the
  calendar-expansion collaborator.  Accepts camelCase or snake_case keys.
- :class:`Occurrence` -- a raw occurrence enriched with its project code,
  cancellation flag, classification and billable minutes.
- :class:`Classification` -- the three mutually exclusive outcomes.

Both record models are frozen.  The billable-minutes pass replaces
occurrences with updated copies instead of mutating them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class Classification(str, Enum):
    """Outcome assigned to every occurrence."""

    ACTIVE = "ACTIVE"
    CANCELLED_ON_TIME = "CANCELLED_ON_TIME"
    CANCELLED_LATE = "CANCELLED_LATE"


SourceType = Literal["single", "occurrence", "exception"]


class RawOccurrence(BaseModel):
    """A single concrete booking slot, after recurrence expansion.

    Naive datetimes are interpreted as UTC so that every instant in the
    engine is comparable.

    Attributes:
        uid: Calendar UID of the originating event.
        recurrence_id: Recurrence identifier of this slot, or ``None``
            for non-recurring events.
        summary: Event title.
        description: Event body, or ``None``.
        location: Event location, or ``None``.
        status: Raw ``STATUS`` value, or ``None``.
        organizer: Unnormalized organizer string, or ``None``.
        sequence: ``SEQUENCE`` number, or ``None``.
        start: Start instant.
        end: End instant.
        all_day: Whether the slot is an all-day booking.
        tzid: Source timezone identifier, or ``None``.
        appointment_sequence_time: Outlook appointment sequence time,
            the most reliable cancellation timestamp when present.
        created: ``CREATED`` timestamp, or ``None``.
        last_modified: ``LAST-MODIFIED`` timestamp, or ``None``.
        dtstamp: ``DTSTAMP`` timestamp, or ``None``.
        busy_status: Free/busy status (e.g. ``FREE`` or ``BUSY``), or ``None``.
        source_type: ``"single"``, ``"occurrence"`` or ``"exception"``.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    uid: str
    recurrence_id: str | None = None
    summary: str = ""
    description: str | None = None
    location: str | None = None
    status: str | None = None
    organizer: str | None = None
    sequence: int | None = None
    start: datetime
    end: datetime
    all_day: bool = False
    tzid: str | None = None
    appointment_sequence_time: datetime | None = None
    created: datetime | None = None
    last_modified: datetime | None = None
    dtstamp: datetime | None = None
    busy_status: str | None = None
    source_type: SourceType = "single"

    @field_validator(
        "start",
        "end",
        "appointment_sequence_time",
        "created",
        "last_modified",
        "dtstamp",
    )
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        """Attach UTC to naive datetimes."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Occurrence(RawOccurrence):
    """A classified occurrence produced by the engine.

    Attributes:
        id: ``uid`` joined with the recurrence id, or with the ISO start
            instant when there is none.  Unique per concrete time slot.
        project_code: Uppercased bracketed project tag, or ``None``.
        is_cancelled: Result of cancellation detection.
        classification: Exactly one of the :class:`Classification` values.
        duration_minutes: Rounded, non-negative slot length.
        billable_minutes: Billable part of the slot, never above
            ``duration_minutes``.
    """

    id: str
    project_code: str | None = None
    is_cancelled: bool = False
    classification: Classification = Classification.ACTIVE
    duration_minutes: int = 0
    billable_minutes: int = 0
