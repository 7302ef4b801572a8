"""Data models for slotbill."""

from __future__ import annotations

from slotbill.models.occurrence import Classification, Occurrence, RawOccurrence
from slotbill.models.summary import DatasetStats, ProjectSummary

__all__ = [
    "Classification",
    "DatasetStats",
    "Occurrence",
    "ProjectSummary",
    "RawOccurrence",
]
