"""Entry point for ``python -m slotbill``.

Classifies the occurrences in a JSON record file and prints a billing
summary.  Uses stdlib :mod:`argparse` for argument parsing.

Exit codes:
    0 -- Completed successfully (including an empty file).
    1 -- An error occurred (file not found, malformed input, config error).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from slotbill.config import ConfigError, load_settings
from slotbill.exceptions import InputFormatError
from slotbill.log import setup_logging
from slotbill.pipeline import run_pipeline
from slotbill.report import print_console_summary, write_json_report


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="slotbill",
        description=(
            "Classify calendar occurrences as active, cancelled on time or "
            "cancelled late, and total their billable minutes per project."
        ),
    )
    parser.add_argument(
        "records_file",
        type=str,
        help="Path to the JSON file of expanded raw occurrences.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Also write the full report as JSON to this path.",
    )
    parser.add_argument(
        "--late-days",
        type=int,
        default=None,
        help=(
            "Override the late-cancellation threshold in days "
            "(defaults to SLOTBILL_LATE_CANCELLATION_DAYS or 7)."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the slotbill CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``
            when ``None``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    engine = settings.engine
    if args.late_days is not None:
        if args.late_days < 0:
            print("Error: --late-days must not be negative", file=sys.stderr)
            return 1
        engine = dataclasses.replace(engine, late_cancellation_days=args.late_days)

    records_path = Path(args.records_file)
    if not records_path.is_file():
        print(f"Error: File not found: {records_path}", file=sys.stderr)
        return 1

    try:
        result = run_pipeline(records_path, engine)
    except (FileNotFoundError, PermissionError, InputFormatError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print_console_summary(result)

    if args.output:
        written = write_json_report(result, Path(args.output))
        print(f"Report written to {written}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
