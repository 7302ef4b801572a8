"""Pipeline orchestrator for an occurrence file.

Wires the components together: record loading, classification with
billable-minute adjustment, and aggregation.  The top-level entry point is
:func:`run_pipeline`, which returns a :class:`PipelineResult` suitable for
the report formatters.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from slotbill.aggregations import build_dataset_stats, build_project_summaries
from slotbill.classifier import classify_occurrences
from slotbill.config import EngineConfig
from slotbill.loader import load_raw_occurrences_file
from slotbill.models.occurrence import Occurrence, RawOccurrence
from slotbill.models.summary import DatasetStats, ProjectSummary

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Aggregated result from a full pipeline run.

    Attributes:
        source_path: Path to the input file.
        occurrences: Classified occurrences, sorted by start then id.
        summaries: Per-project summaries, sorted by label.
        stats: Dataset-wide counters.
        warnings: Non-fatal data-quality findings.
        duration_seconds: Wall-clock time for the run.
    """

    source_path: Path
    occurrences: list[Occurrence] = field(default_factory=list)
    summaries: list[ProjectSummary] = field(default_factory=list)
    stats: DatasetStats = field(default_factory=DatasetStats)
    warnings: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0


def find_data_warnings(raws: Sequence[RawOccurrence], occurrences: Sequence[Occurrence]) -> list[str]:
    """Report data-quality issues the engine tolerates silently.

    Flags occurrences whose end precedes their start and ids that appear
    more than once (the engine does not deduplicate).
    """
    warnings: list[str] = []
    for raw in raws:
        if raw.end < raw.start:
            warnings.append(f"Occurrence {raw.uid} ends before it starts; duration set to 0")

    counts = Counter(occurrence.id for occurrence in occurrences)
    for occurrence_id, count in sorted(counts.items()):
        if count > 1:
            warnings.append(f"Occurrence id {occurrence_id} appears {count} times")
    return warnings


def run_pipeline(source_path: Path, config: EngineConfig | None = None) -> PipelineResult:
    """Classify and aggregate the occurrences in *source_path*.

    Args:
        source_path: JSON file of raw occurrences.
        config: Engine tunables.  Defaults to the built-in configuration.

    Returns:
        A :class:`PipelineResult` with all outputs.

    Raises:
        FileNotFoundError: If *source_path* does not exist.
        InputFormatError: If the file content is malformed.
    """
    start_time = time.monotonic()
    result = PipelineResult(source_path=source_path)

    logger.info("Stage 1: Loading occurrences from %s", source_path)
    raws = load_raw_occurrences_file(source_path)
    logger.info("Stage 1 complete: %d record(s)", len(raws))

    logger.info("Stage 2: Classifying occurrences")
    occurrences = classify_occurrences(raws, config)
    result.warnings = find_data_warnings(raws, occurrences)
    for warning in result.warnings:
        logger.warning(warning)
    result.occurrences = sorted(occurrences, key=lambda occ: (occ.start, occ.id))

    logger.info("Stage 3: Aggregating %d occurrence(s)", len(result.occurrences))
    result.summaries = build_project_summaries(result.occurrences)
    result.stats = build_dataset_stats(result.occurrences, result.summaries)
    logger.info(
        "Stage 3 complete: %d project(s), %.2f billable hour(s)",
        result.stats.project_count,
        result.stats.billable_hours,
    )

    result.duration_seconds = time.monotonic() - start_time
    return result
