"""Report output for pipeline results.

:func:`format_console_summary` renders a plain-text overview for the
terminal; :func:`build_report_payload` and :func:`write_json_report`
produce the machine-readable JSON form.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from slotbill.pipeline import PipelineResult

_BANNER_WIDTH = 78
_SEPARATOR = "=" * _BANNER_WIDTH
_TABLE_HEADER = (
    f"  {'Project':<12} {'Billable h':>10} {'Duration h':>10} "
    f"{'Active':>7} {'On-time':>8} {'Late':>6}  Organizers"
)


def format_console_summary(result: PipelineResult) -> str:
    """Render *result* as a multi-line console summary."""
    lines: list[str] = [_SEPARATOR, "  SLOT BILLING SUMMARY", _SEPARATOR]
    lines.append(f"  File: {result.source_path}")

    lines.append("")
    lines.append("--- PROJECTS ---")
    if not result.summaries:
        lines.append("  No occurrences found.")
    else:
        lines.append(_TABLE_HEADER)
        for summary in result.summaries:
            organizers = ", ".join(summary.organizers) if summary.organizers else "-"
            lines.append(
                f"  {summary.project_code:<12} {summary.total_hours:>10.2f} "
                f"{summary.total_duration_hours:>10.2f} {summary.active_count:>7} "
                f"{summary.cancelled_on_time_count:>8} {summary.cancelled_late_count:>6}  "
                f"{organizers}"
            )

    stats = result.stats
    lines.append("")
    lines.append("--- DATASET ---")
    lines.append(f"  Occurrences: {stats.event_count}")
    lines.append(f"  Projects: {stats.project_count}")
    lines.append(f"  Billable hours: {stats.billable_hours:.2f}")
    lines.append(f"  Active hours: {stats.active_duration_hours:.2f}")
    lines.append(f"  On-time cancelled hours: {stats.cancelled_on_time_duration_hours:.2f}")
    lines.append(
        f"  Late cancelled hours: {stats.cancelled_late_duration_hours:.2f} "
        f"({stats.late_cancellation_count} occurrence(s))"
    )
    lines.append(
        f"  Late cancellation coverage: {stats.late_cancellation_coverage_percentage:.2f}%"
    )

    lines.append(f"  Warnings: {len(result.warnings)}")
    for warning in result.warnings:
        lines.append(f"    - {warning}")
    lines.append(f"  Duration: {result.duration_seconds:.2f}s")
    lines.append(_SEPARATOR)
    return "\n".join(lines)


def print_console_summary(result: PipelineResult) -> None:
    """Format and print *result* to stdout."""
    sys.stdout.write(format_console_summary(result) + "\n")


def build_report_payload(result: PipelineResult) -> dict[str, Any]:
    """Return a JSON-serialisable dict of the pipeline outputs."""
    return {
        "source": str(result.source_path),
        "occurrences": [occ.model_dump(mode="json") for occ in result.occurrences],
        "summaries": [summary.model_dump(mode="json") for summary in result.summaries],
        "stats": result.stats.model_dump(mode="json"),
        "warnings": list(result.warnings),
    }


def write_json_report(result: PipelineResult, output_path: Path) -> Path:
    """Write the JSON report for *result* to *output_path*.

    Parent directories are created as needed.

    Returns:
        The path written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(build_report_payload(result), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return output_path
