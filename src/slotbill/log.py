"""Logging setup for the slotbill CLI.

Log lines are pipe-separated with ISO 8601 timestamps, for example::

    2025-06-01T08:00:00 | INFO     | slotbill.pipeline | Stage 1: Loading ...

Modules log through ``logging.getLogger(__name__)``; only the CLI calls
:func:`setup_logging`.  :func:`resolve_level` is shared with
:func:`slotbill.config.load_settings` so a bad ``LOG_LEVEL`` is reported
together with the other invalid variables.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class _CliHandler(logging.StreamHandler):
    """Stderr handler installed by :func:`setup_logging`."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)
        self.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))


def resolve_level(name: str) -> int:
    """Map a level name such as ``"debug"`` to its numeric value.

    Raises:
        ValueError: If *name* is not one of the standard level names.
    """
    normalized = name.strip().upper()
    if normalized not in _LEVELS:
        raise ValueError(f"Invalid log level: {name!r}")
    return logging.getLevelName(normalized)


def setup_logging(level: str = "INFO") -> None:
    """Route slotbill logs to stderr at *level*.

    Repeated calls adjust the level of the already installed handler
    instead of adding another one.  Handlers added by other code are left
    alone.

    Raises:
        ValueError: If *level* is not a recognised level name.
    """
    numeric_level = resolve_level(level)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    handler = next((h for h in root.handlers if isinstance(h, _CliHandler)), None)
    if handler is None:
        handler = _CliHandler()
        root.addHandler(handler)
    handler.setLevel(numeric_level)
