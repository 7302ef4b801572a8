"""Tests for slotbill package structure and imports."""

from __future__ import annotations

import re
import subprocess
import sys


def test_package_has_semver_version() -> None:
    import slotbill

    assert re.match(r"^\d+\.\d+\.\d+$", slotbill.__version__)


def test_public_api_exports() -> None:
    import slotbill

    for name in slotbill.__all__:
        assert hasattr(slotbill, name), name


def test_main_module_without_args_shows_usage() -> None:
    """``python -m slotbill`` with no file exits with usage, not a traceback."""
    result = subprocess.run(
        [sys.executable, "-m", "slotbill"],
        capture_output=True,
        text=True,
        timeout=10,
    )
    assert result.returncode == 2
    assert "usage" in result.stderr.lower()
    assert "Traceback" not in result.stderr
