"""Roll-up of classified occurrences.

Two pure reductions:

- :func:`build_project_summaries` -- per project label totals.
- :func:`build_dataset_stats` -- counters across the whole list.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from slotbill.models.occurrence import Classification, Occurrence
from slotbill.models.summary import DatasetStats, ProjectSummary
from slotbill.organizers import normalize_organizer_email
from slotbill.project_code import project_label


def round_half_up(value: float) -> float:
    """Round *value* to 2 decimals, exact halves away from zero.

    Works on the exact binary value, so 3.125 becomes 3.13 while 1.005
    (stored as 1.00499...) becomes 1.0.
    """
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def minutes_to_hours(minutes: int) -> float:
    """Convert minutes to hours rounded to 2 decimals."""
    return round_half_up(minutes / 60)


@dataclass
class _Accumulator:
    project_code: str
    total_minutes: int = 0
    total_duration_minutes: int = 0
    active_count: int = 0
    cancelled_on_time_count: int = 0
    cancelled_late_count: int = 0
    cancelled_on_time_minutes: int = 0
    cancelled_late_minutes: int = 0
    cancelled_late_billable_minutes: int = 0
    organizers: set[str] = field(default_factory=set)

    def add(self, occurrence: Occurrence) -> None:
        self.total_duration_minutes += occurrence.duration_minutes
        email = normalize_organizer_email(occurrence.organizer)
        if email:
            self.organizers.add(email)

        if occurrence.classification is Classification.ACTIVE:
            self.active_count += 1
            self.total_minutes += occurrence.billable_minutes
        elif occurrence.classification is Classification.CANCELLED_LATE:
            self.cancelled_late_count += 1
            self.cancelled_late_minutes += occurrence.duration_minutes
            self.cancelled_late_billable_minutes += occurrence.billable_minutes
            self.total_minutes += occurrence.billable_minutes
        else:
            self.cancelled_on_time_count += 1
            self.cancelled_on_time_minutes += occurrence.duration_minutes

    def to_summary(self) -> ProjectSummary:
        return ProjectSummary(
            project_code=self.project_code,
            total_minutes=self.total_minutes,
            total_hours=minutes_to_hours(self.total_minutes),
            total_duration_minutes=self.total_duration_minutes,
            total_duration_hours=minutes_to_hours(self.total_duration_minutes),
            active_count=self.active_count,
            cancelled_on_time_count=self.cancelled_on_time_count,
            cancelled_late_count=self.cancelled_late_count,
            cancelled_on_time_minutes=self.cancelled_on_time_minutes,
            cancelled_late_minutes=self.cancelled_late_minutes,
            cancelled_late_billable_minutes=self.cancelled_late_billable_minutes,
            organizers=sorted(self.organizers),
        )


def build_project_summaries(occurrences: Sequence[Occurrence]) -> list[ProjectSummary]:
    """Group occurrences by project label and total them.

    ACTIVE and CANCELLED_LATE occurrences contribute their billable
    minutes; CANCELLED_ON_TIME ones only contribute duration.

    Args:
        occurrences: Finalized occurrences.

    Returns:
        One summary per label, sorted by label.
    """
    groups: dict[str, _Accumulator] = {}
    for occurrence in occurrences:
        label = project_label(occurrence.project_code)
        if label not in groups:
            groups[label] = _Accumulator(project_code=label)
        groups[label].add(occurrence)

    return [groups[label].to_summary() for label in sorted(groups)]


def build_dataset_stats(
    occurrences: Sequence[Occurrence],
    summaries: Sequence[ProjectSummary],
) -> DatasetStats:
    """Compute dataset-wide counters.

    ``late_cancellation_coverage_percentage`` is the share of late-cancelled
    minutes that ended up unbilled, and 0 when nothing was cancelled late.

    Args:
        occurrences: Finalized occurrences.
        summaries: Output of :func:`build_project_summaries` for the same
            occurrences.

    Returns:
        A :class:`DatasetStats` instance.
    """
    billable_minutes = sum(summary.total_minutes for summary in summaries)

    active_minutes = 0
    on_time_minutes = 0
    late_minutes = 0
    late_billable_minutes = 0
    late_count = 0

    for occurrence in occurrences:
        if occurrence.classification is Classification.ACTIVE:
            active_minutes += occurrence.duration_minutes
        elif occurrence.classification is Classification.CANCELLED_ON_TIME:
            on_time_minutes += occurrence.duration_minutes
        else:
            late_minutes += occurrence.duration_minutes
            late_billable_minutes += occurrence.billable_minutes
            late_count += 1

    coverage = 0.0
    if late_minutes > 0:
        coverage = round_half_up((late_minutes - late_billable_minutes) / late_minutes * 100)

    return DatasetStats(
        event_count=len(occurrences),
        project_count=len(summaries),
        billable_hours=minutes_to_hours(billable_minutes),
        late_cancellation_count=late_count,
        active_duration_hours=minutes_to_hours(active_minutes),
        cancelled_on_time_duration_hours=minutes_to_hours(on_time_minutes),
        cancelled_late_duration_hours=minutes_to_hours(late_minutes),
        late_cancellation_coverage_percentage=coverage,
    )
