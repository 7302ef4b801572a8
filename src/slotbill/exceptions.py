"""Custom exceptions for slotbill.

The classification engine itself never raises for malformed occurrence
data; these exceptions belong to the input edge (record loading).
"""

from __future__ import annotations


class SlotbillError(Exception):
    """Base class for slotbill errors."""


class InputFormatError(SlotbillError):
    """Raised when a raw-occurrence record file cannot be loaded.

    Covers JSON syntax errors, a top-level value that is not a list, and
    records that fail Pydantic validation.

    Attributes:
        source: Label of the input (usually a file path).
        index: Zero-based position of the offending record, or ``None``
            when the document as a whole is malformed.
    """

    def __init__(self, message: str, source: str = "<string>", index: int | None = None) -> None:
        super().__init__(message)
        self.source = source
        self.index = index
