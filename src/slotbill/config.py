"""Configuration loading for slotbill.

The classification engine takes its tunables from an :class:`EngineConfig`.
:func:`load_settings` builds one from environment variables (with ``.env``
support via python-dotenv) and validates every override.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

from slotbill.log import resolve_level

UNKNOWN_PROJECT_LABEL = "UNKNOWN"

DEFAULT_LATE_CANCELLATION_DAYS = 7
DEFAULT_UNBILLABLE_PROJECT_CODES: frozenset[str] = frozenset(
    {UNKNOWN_PROJECT_LABEL, "Z", "R"}
)
DEFAULT_PROJECT_CODE_PATTERN = r"\[([0-9a-zA-Z]+)\]"

# Words indicating cancellation in various languages.
DEFAULT_CANCEL_KEYWORDS: tuple[str, ...] = (
    "canceled",
    "cancelled",
    "geannuleerd",
    "abgesagt",
    "annulé",
    "cancelado",
    "annullato",
    "avbokad",
    "peruttu",
    "avlyst",
    "aflyst",
    "已取消",
)


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""


@dataclass(frozen=True)
class EngineConfig:
    """Tunable parameters of the classification engine.

    Attributes:
        late_cancellation_days: A cancellation made fewer than this many
            days before the occurrence start is late.
        unbillable_project_codes: Project labels that are not billable by
            default.  Compared case-insensitively.
        project_code_pattern: Regular expression whose first capture
            group is the project code.
        cancel_keywords: Words that mark an occurrence as cancelled when
            its free/busy status is ``FREE``.
    """

    late_cancellation_days: int = DEFAULT_LATE_CANCELLATION_DAYS
    unbillable_project_codes: frozenset[str] = DEFAULT_UNBILLABLE_PROJECT_CODES
    project_code_pattern: str = DEFAULT_PROJECT_CODE_PATTERN
    cancel_keywords: tuple[str, ...] = DEFAULT_CANCEL_KEYWORDS
    _compiled_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        normalized = frozenset(code.upper() for code in self.unbillable_project_codes)
        object.__setattr__(self, "unbillable_project_codes", normalized)
        object.__setattr__(self, "_compiled_pattern", re.compile(self.project_code_pattern))

    @property
    def project_code_regex(self) -> re.Pattern[str]:
        """The compiled :attr:`project_code_pattern`."""
        return self._compiled_pattern

    def is_billable_label(self, label: str) -> bool:
        """Whether *label* is billable by default."""
        return label.upper() not in self.unbillable_project_codes


DEFAULT_CONFIG = EngineConfig()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        engine: Engine tunables.
        log_level: Logging level (default ``"INFO"``).
    """

    engine: EngineConfig = DEFAULT_CONFIG
    log_level: str = "INFO"


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.  Every variable is optional; unset or
    blank variables fall back to the :class:`EngineConfig` defaults.

    Recognised variables:
        ``SLOTBILL_LATE_CANCELLATION_DAYS``, ``SLOTBILL_UNBILLABLE_CODES``,
        ``SLOTBILL_PROJECT_CODE_PATTERN``, ``SLOTBILL_CANCEL_KEYWORDS``
        and ``LOG_LEVEL``.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If any variable holds an invalid value.  The error
            message names **all** invalid variables.
    """
    load_dotenv()

    engine_values: dict[str, object] = {}
    invalid: list[str] = []

    days_raw = os.environ.get("SLOTBILL_LATE_CANCELLATION_DAYS", "").strip()
    if days_raw:
        try:
            days = int(days_raw)
        except ValueError:
            invalid.append("SLOTBILL_LATE_CANCELLATION_DAYS")
        else:
            if days < 0:
                invalid.append("SLOTBILL_LATE_CANCELLATION_DAYS")
            else:
                engine_values["late_cancellation_days"] = days

    codes_raw = os.environ.get("SLOTBILL_UNBILLABLE_CODES")
    if codes_raw is not None and codes_raw.strip():
        # An explicit value of commas only still means "nothing configured".
        codes = _split_list(codes_raw)
        if codes:
            engine_values["unbillable_project_codes"] = frozenset(codes)
        else:
            invalid.append("SLOTBILL_UNBILLABLE_CODES")

    pattern_raw = os.environ.get("SLOTBILL_PROJECT_CODE_PATTERN", "").strip()
    if pattern_raw:
        try:
            compiled = re.compile(pattern_raw)
        except re.error:
            invalid.append("SLOTBILL_PROJECT_CODE_PATTERN")
        else:
            if compiled.groups < 1:
                invalid.append("SLOTBILL_PROJECT_CODE_PATTERN")
            else:
                engine_values["project_code_pattern"] = pattern_raw

    keywords_raw = os.environ.get("SLOTBILL_CANCEL_KEYWORDS")
    if keywords_raw is not None and keywords_raw.strip():
        keywords = _split_list(keywords_raw)
        if keywords:
            engine_values["cancel_keywords"] = tuple(keywords)
        else:
            invalid.append("SLOTBILL_CANCEL_KEYWORDS")

    log_level = os.environ.get("LOG_LEVEL", "").strip().upper() or "INFO"
    try:
        resolve_level(log_level)
    except ValueError:
        invalid.append("LOG_LEVEL")

    if invalid:
        names = ", ".join(invalid)
        raise ConfigError(f"Invalid environment variables: {names}")

    return Settings(engine=EngineConfig(**engine_values), log_level=log_level)
