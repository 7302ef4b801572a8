"""Unit tests for the pipeline orchestrator.

Tests cover: full-flow classification and aggregation, presentation
ordering, data-quality warnings, config forwarding, empty input, and
error propagation from the loader.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from slotbill.config import EngineConfig
from slotbill.exceptions import InputFormatError
from slotbill.models.occurrence import Classification
from slotbill.pipeline import PipelineResult, run_pipeline

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _record(uid: str, summary: str, start: str, end: str, **extra: Any) -> dict[str, Any]:
    return {"uid": uid, "summary": summary, "start": start, "end": end, **extra}


def _write_records(tmp_path: Path, records: list[dict[str, Any]]) -> Path:
    path = tmp_path / "records.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def _backfill_records() -> list[dict[str, Any]]:
    return [
        _record(
            "late", "[ALPHA] Late drop", "2025-06-10T10:00:00Z", "2025-06-10T12:00:00Z",
            status="CANCELLED", appointmentSequenceTime="2025-06-09T12:00:00Z",
            organizer="mailto:alpha@libc.org",
        ),
        _record(
            "fill", "[BETA] Replacement", "2025-06-10T11:00:00Z", "2025-06-10T13:00:00Z",
            status="CONFIRMED", busyStatus="BUSY", organizer="Beta <beta@libc.org>",
        ),
        _record(
            "early", "[GAMMA] Plenty notice", "2025-06-01T09:00:00Z", "2025-06-01T10:30:00Z",
            status="CANCELLED", appointmentSequenceTime="2025-05-01T09:00:00Z",
        ),
    ]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestRunPipeline:
    """Tests for run_pipeline."""

    def test_full_flow(self, tmp_path: Path) -> None:
        path = _write_records(tmp_path, _backfill_records())

        result = run_pipeline(path)

        assert isinstance(result, PipelineResult)
        assert result.source_path == path
        by_uid = {occ.uid: occ for occ in result.occurrences}
        assert by_uid["late"].classification is Classification.CANCELLED_LATE
        assert by_uid["late"].billable_minutes == 60
        assert by_uid["fill"].billable_minutes == 120
        assert by_uid["early"].classification is Classification.CANCELLED_ON_TIME

        assert [s.project_code for s in result.summaries] == ["ALPHA", "BETA", "GAMMA"]
        assert result.summaries[0].organizers == ["alpha@libc.org"]
        assert result.stats.event_count == 3
        assert result.stats.billable_hours == 3.0
        assert result.stats.late_cancellation_coverage_percentage == 50.0
        assert result.warnings == []
        assert result.duration_seconds >= 0

    def test_occurrences_sorted_by_start(self, tmp_path: Path) -> None:
        path = _write_records(tmp_path, _backfill_records())

        result = run_pipeline(path)

        assert [occ.uid for occ in result.occurrences] == ["early", "late", "fill"]

    def test_config_forwarded(self, tmp_path: Path) -> None:
        path = _write_records(tmp_path, _backfill_records())

        result = run_pipeline(path, EngineConfig(late_cancellation_days=0))

        by_uid = {occ.uid: occ for occ in result.occurrences}
        assert by_uid["late"].classification is Classification.CANCELLED_ON_TIME
        assert result.stats.late_cancellation_count == 0

    def test_empty_file(self, tmp_path: Path) -> None:
        path = _write_records(tmp_path, [])

        result = run_pipeline(path)

        assert result.occurrences == []
        assert result.summaries == []
        assert result.stats.event_count == 0

    def test_inverted_range_warning(self, tmp_path: Path) -> None:
        records = [_record("bad", "[ALPHA] x", "2025-06-10T12:00:00Z", "2025-06-10T10:00:00Z")]
        path = _write_records(tmp_path, records)

        result = run_pipeline(path)

        assert result.occurrences[0].duration_minutes == 0
        assert any("ends before it starts" in w for w in result.warnings)

    def test_duplicate_id_warning(self, tmp_path: Path) -> None:
        record = _record("dup", "[ALPHA] x", "2025-06-10T10:00:00Z", "2025-06-10T11:00:00Z")
        path = _write_records(tmp_path, [record, record])

        result = run_pipeline(path)

        assert len(result.occurrences) == 2
        assert any("appears 2 times" in w for w in result.warnings)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            run_pipeline(tmp_path / "missing.json")

    def test_malformed_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "records.json"
        path.write_text('{"uid": "x"}', encoding="utf-8")

        with pytest.raises(InputFormatError):
            run_pipeline(path)
