"""Time interval helpers for overlap accounting.

Provides :class:`Interval`, the sweep merge :func:`merge_intervals`, and
:func:`collect_overlaps`, which intersects one occurrence with a set of
candidates.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from slotbill.models.occurrence import RawOccurrence


@dataclass(frozen=True)
class Interval:
    """Half-open time range ``[start, end)``."""

    start: datetime
    end: datetime

    @property
    def minutes(self) -> int:
        """Length in whole minutes, rounded half up."""
        return round_minutes(self.end - self.start)


def round_minutes(delta: timedelta) -> int:
    """Round *delta* to the nearest minute, halves rounding up."""
    return math.floor(delta.total_seconds() / 60 + 0.5)


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Merge overlapping or touching intervals into a sorted disjoint list.

    Intervals are sorted by start and folded left: an interval starting at
    or before the current end extends it, anything later opens a new one.

    Args:
        intervals: Intervals with ``end > start``.

    Returns:
        The minimal sorted list covering the same union.
    """
    merged: list[Interval] = []
    for interval in sorted(intervals, key=lambda item: item.start):
        if merged and interval.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = Interval(last.start, max(last.end, interval.end))
        else:
            merged.append(interval)
    return merged


def collect_overlaps(
    target: RawOccurrence,
    candidates: Iterable[RawOccurrence],
) -> list[Interval]:
    """Intersect *target* with every candidate.

    Only positive-length intersections are returned.  A candidate that is
    the target object itself is skipped.
    """
    overlaps: list[Interval] = []
    for candidate in candidates:
        if candidate is target:
            continue
        start = max(target.start, candidate.start)
        end = min(target.end, candidate.end)
        if end > start:
            overlaps.append(Interval(start, end))
    return overlaps


def total_minutes(intervals: Iterable[Interval]) -> int:
    """Sum the rounded minutes of *intervals*."""
    return sum(interval.minutes for interval in intervals)
