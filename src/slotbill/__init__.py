"""slotbill: late-cancellation billing for calendar bookings.

Classifies expanded calendar occurrences as active, cancelled on time or
cancelled late, credits late cancellations whose slot was backfilled, and
rolls the result up per project.
"""

from __future__ import annotations

from slotbill.aggregations import build_dataset_stats, build_project_summaries
from slotbill.billing import adjust_billable_minutes
from slotbill.cancellation import detect_cancellation
from slotbill.classifier import classify_occurrences
from slotbill.config import DEFAULT_CONFIG, ConfigError, EngineConfig, load_settings
from slotbill.exceptions import InputFormatError, SlotbillError
from slotbill.intervals import Interval, merge_intervals
from slotbill.loader import load_raw_occurrences, load_raw_occurrences_file
from slotbill.models import (
    Classification,
    DatasetStats,
    Occurrence,
    ProjectSummary,
    RawOccurrence,
)
from slotbill.organizers import normalize_organizer_email
from slotbill.project_code import extract_project_code

__version__ = "0.2.0"

__all__ = [
    "DEFAULT_CONFIG",
    "Classification",
    "ConfigError",
    "DatasetStats",
    "EngineConfig",
    "InputFormatError",
    "Interval",
    "Occurrence",
    "ProjectSummary",
    "RawOccurrence",
    "SlotbillError",
    "adjust_billable_minutes",
    "build_dataset_stats",
    "build_project_summaries",
    "classify_occurrences",
    "detect_cancellation",
    "extract_project_code",
    "load_raw_occurrences",
    "load_raw_occurrences_file",
    "load_settings",
    "merge_intervals",
    "normalize_organizer_email",
]
