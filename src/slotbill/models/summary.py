"""Roll-up models produced by the aggregator.

- :class:`ProjectSummary` -- totals for one project label.
- :class:`DatasetStats` -- counters across the whole occurrence list.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProjectSummary(BaseModel):
    """Totals for a single project label (including ``UNKNOWN``).

    Attributes:
        project_code: Project label.
        total_minutes: Billable minutes (ACTIVE plus CANCELLED_LATE).
        total_hours: ``total_minutes`` in hours, 2 decimals.
        total_duration_minutes: Scheduled minutes across all classifications.
        total_duration_hours: ``total_duration_minutes`` in hours, 2 decimals.
        active_count: Number of ACTIVE occurrences.
        cancelled_on_time_count: Number of CANCELLED_ON_TIME occurrences.
        cancelled_late_count: Number of CANCELLED_LATE occurrences.
        cancelled_on_time_minutes: Scheduled minutes of on-time cancellations.
        cancelled_late_minutes: Scheduled minutes of late cancellations.
        cancelled_late_billable_minutes: Billable minutes remaining on
            late cancellations after backfill credit.
        organizers: Sorted distinct normalized organizer emails.
    """

    model_config = ConfigDict(frozen=True)

    project_code: str
    total_minutes: int = 0
    total_hours: float = 0.0
    total_duration_minutes: int = 0
    total_duration_hours: float = 0.0
    active_count: int = 0
    cancelled_on_time_count: int = 0
    cancelled_late_count: int = 0
    cancelled_on_time_minutes: int = 0
    cancelled_late_minutes: int = 0
    cancelled_late_billable_minutes: int = 0
    organizers: list[str] = Field(default_factory=list)


class DatasetStats(BaseModel):
    """Dataset-wide counters.

    Attributes:
        event_count: Number of occurrences.
        project_count: Number of distinct project labels.
        billable_hours: Sum of billable minutes across summaries, in hours.
        late_cancellation_count: Number of CANCELLED_LATE occurrences.
        active_duration_hours: Scheduled hours of ACTIVE occurrences.
        cancelled_on_time_duration_hours: Scheduled hours of on-time
            cancellations.
        cancelled_late_duration_hours: Scheduled hours of late cancellations.
        late_cancellation_coverage_percentage: Share of late-cancelled
            minutes that ended up unbilled, 0-100 with 2 decimals.
    """

    model_config = ConfigDict(frozen=True)

    event_count: int = 0
    project_count: int = 0
    billable_hours: float = 0.0
    late_cancellation_count: int = 0
    active_duration_hours: float = 0.0
    cancelled_on_time_duration_hours: float = 0.0
    cancelled_late_duration_hours: float = 0.0
    late_cancellation_coverage_percentage: float = 0.0
