"""Billable-minute adjustment for late cancellations.

A late cancellation whose slot gets backfilled by another billable booking
is not billed for the overlapping part: the resource was reused.  Two kinds
of occurrence grant that credit to a late-cancelled target:

- billable ACTIVE occurrences;
- billable late cancellations that were cancelled *after* the target
  (ties broken by occurrence id), so that in a chain of overlapping late
  cancellations the overlap is always billed to the last one cancelled.

All reductions are computed from a snapshot of the initial billable
minutes, so the order of the input list never changes the result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from slotbill.config import DEFAULT_CONFIG, EngineConfig
from slotbill.intervals import collect_overlaps, merge_intervals, total_minutes
from slotbill.models.occurrence import Classification, Occurrence
from slotbill.project_code import project_label

logger = logging.getLogger(__name__)


def initial_billable_minutes(occurrence: Occurrence) -> int:
    """Billable minutes before any backfill credit."""
    if occurrence.classification is Classification.CANCELLED_ON_TIME:
        return 0
    return occurrence.duration_minutes


def is_default_billable(occurrence: Occurrence, config: EngineConfig = DEFAULT_CONFIG) -> bool:
    """Whether the occurrence's project label is billable by default."""
    return config.is_billable_label(project_label(occurrence.project_code))


def backfill_cancellation_timestamp(occurrence: Occurrence) -> datetime | None:
    """Cancellation instant used to order overlapping late cancellations.

    Priority is appointment sequence time, then last-modified, then
    dtstamp.  This differs from the order used for late/on-time
    classification and must stay that way.
    """
    if not occurrence.is_cancelled:
        return None
    return (
        occurrence.appointment_sequence_time
        or occurrence.last_modified
        or occurrence.dtstamp
    )


def is_later_billable_cancellation(
    candidate: Occurrence,
    target: Occurrence,
    config: EngineConfig = DEFAULT_CONFIG,
) -> bool:
    """Whether *candidate* takes the overlap credit away from *target*.

    The candidate must be a billable late cancellation with a resolvable
    cancellation timestamp strictly later than the target's.  On an exact
    tie the lexicographically greater id wins, so of two simultaneous
    cancellations exactly one is credited.
    """
    if candidate is target:
        return False
    if candidate.classification is not Classification.CANCELLED_LATE:
        return False
    if not is_default_billable(candidate, config):
        return False

    candidate_ts = backfill_cancellation_timestamp(candidate)
    target_ts = backfill_cancellation_timestamp(target)
    if candidate_ts is None or target_ts is None:
        return False

    if candidate_ts == target_ts:
        return candidate.id > target.id
    return candidate_ts > target_ts


def adjust_billable_minutes(
    occurrences: Sequence[Occurrence],
    config: EngineConfig | None = None,
) -> list[Occurrence]:
    """Initialize and adjust billable minutes for every occurrence.

    Billable minutes start at 0 for on-time cancellations and at the full
    duration otherwise.  Each late cancellation with billable minutes then
    loses the minutes covered by the merged overlaps with billable active
    occurrences and with later billable late cancellations.

    Args:
        occurrences: Classified occurrences.  Their current
            ``billable_minutes`` values are ignored.
        config: Engine tunables.  Defaults to :data:`DEFAULT_CONFIG`.

    Returns:
        A new list, in input order, with ``billable_minutes`` finalized.
        The input occurrences are not modified.
    """
    config = config or DEFAULT_CONFIG

    snapshot = [
        occurrence.model_copy(update={"billable_minutes": initial_billable_minutes(occurrence)})
        for occurrence in occurrences
    ]

    billable_active = [
        occurrence
        for occurrence in snapshot
        if occurrence.classification is Classification.ACTIVE
        and is_default_billable(occurrence, config)
    ]
    late_cancellations = [
        occurrence
        for occurrence in snapshot
        if occurrence.classification is Classification.CANCELLED_LATE
    ]

    adjusted: list[Occurrence] = []
    for target in snapshot:
        if (
            target.classification is not Classification.CANCELLED_LATE
            or not target.billable_minutes
        ):
            adjusted.append(target)
            continue

        later = [
            candidate
            for candidate in late_cancellations
            if is_later_billable_cancellation(candidate, target, config)
        ]
        overlaps = collect_overlaps(target, billable_active) + collect_overlaps(target, later)
        if not overlaps:
            adjusted.append(target)
            continue

        credited = total_minutes(merge_intervals(overlaps))
        remaining = max(0, target.billable_minutes - credited)
        logger.debug(
            "Late cancellation %s credited %d minute(s): %d -> %d billable",
            target.id,
            credited,
            target.billable_minutes,
            remaining,
        )
        adjusted.append(target.model_copy(update={"billable_minutes": remaining}))

    return adjusted
