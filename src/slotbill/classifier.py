"""Occurrence classification.

Turns :class:`~slotbill.models.occurrence.RawOccurrence` records into
classified :class:`~slotbill.models.occurrence.Occurrence` records:

1. extract the project code and the rounded duration;
2. detect cancellation;
3. classify as ACTIVE, CANCELLED_ON_TIME or CANCELLED_LATE by comparing
   the cancellation timestamp with the occurrence start;
4. hand the whole list to :func:`~slotbill.billing.adjust_billable_minutes`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from slotbill.billing import adjust_billable_minutes
from slotbill.cancellation import detect_cancellation
from slotbill.config import DEFAULT_CONFIG, EngineConfig
from slotbill.intervals import round_minutes
from slotbill.models.occurrence import Classification, Occurrence, RawOccurrence
from slotbill.project_code import extract_project_code

logger = logging.getLogger(__name__)

_DAY = timedelta(days=1)


def classification_timestamp(raw: RawOccurrence) -> datetime | None:
    """Cancellation instant used for the late/on-time decision.

    Priority is appointment sequence time, then dtstamp, then
    last-modified.  The backfill ordering in :mod:`slotbill.billing` uses
    a different priority on purpose.
    """
    return raw.appointment_sequence_time or raw.dtstamp or raw.last_modified


def build_occurrence_id(raw: RawOccurrence) -> str:
    """Build an identifier unique per concrete time slot."""
    if raw.recurrence_id:
        return f"{raw.uid}_{raw.recurrence_id}"
    start = raw.start.astimezone(timezone.utc).isoformat()
    return f"{raw.uid}_{start}"


def duration_minutes(raw: RawOccurrence) -> int:
    """Rounded slot length in minutes, clamped at zero."""
    return max(0, round_minutes(raw.end - raw.start))


def classify(
    raw: RawOccurrence,
    is_cancelled: bool,
    late_cancellation_days: int = DEFAULT_CONFIG.late_cancellation_days,
) -> Classification:
    """Classify a single occurrence.

    A cancelled occurrence without any cancellation timestamp cannot be
    proven late and is treated as cancelled on time.
    """
    if not is_cancelled:
        return Classification.ACTIVE

    cancelled_at = classification_timestamp(raw)
    if cancelled_at is None:
        return Classification.CANCELLED_ON_TIME

    delta_days = (raw.start - cancelled_at) / _DAY
    if delta_days < late_cancellation_days:
        return Classification.CANCELLED_LATE
    return Classification.CANCELLED_ON_TIME


def to_occurrence(raw: RawOccurrence, config: EngineConfig = DEFAULT_CONFIG) -> Occurrence:
    """Classify one record without billable-minute adjustment.

    ``billable_minutes`` is left at 0; it is set by
    :func:`~slotbill.billing.adjust_billable_minutes`.
    """
    is_cancelled = detect_cancellation(raw, config.cancel_keywords)
    return Occurrence(
        **raw.model_dump(include=set(RawOccurrence.model_fields)),
        id=build_occurrence_id(raw),
        project_code=extract_project_code(raw.summary, config.project_code_regex),
        is_cancelled=is_cancelled,
        classification=classify(raw, is_cancelled, config.late_cancellation_days),
        duration_minutes=duration_minutes(raw),
        billable_minutes=0,
    )


def classify_occurrences(
    raws: Iterable[RawOccurrence],
    config: EngineConfig | None = None,
) -> list[Occurrence]:
    """Classify every raw occurrence and finalize billable minutes.

    Args:
        raws: Raw occurrences in any order.
        config: Engine tunables.  Defaults to :data:`DEFAULT_CONFIG`.

    Returns:
        Classified occurrences in input order.
    """
    config = config or DEFAULT_CONFIG
    occurrences = [to_occurrence(raw, config) for raw in raws]
    if not occurrences:
        return []

    logger.debug("Classified %d occurrence(s)", len(occurrences))
    return adjust_billable_minutes(occurrences, config)
