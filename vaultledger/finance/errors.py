"""Mini README: Error taxonomy for the ledger pipeline.

Structure:
    * LedgerError - base class for every failure raised by the pipeline.
    * VaultPathError - vault directory or one of its files cannot be read.
    * RecordParseError - a CSV row or header is structurally invalid.
    * UnknownTransactionTypeError - an explicit type value has no mapping.
    * LedgerWriteError / LedgerReadError - snapshot persistence failures.

Numeric formatting problems in amounts are not represented here: they are
logged by the aggregator and contribute zero.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class LedgerError(Exception):
    """Base class for pipeline failures surfaced to callers."""


class VaultPathError(LedgerError, OSError):
    """Raised when the vault directory or a file inside it is unusable."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class RecordParseError(LedgerError, ValueError):
    """Raised when a CSV file contains a structurally invalid header or row."""

    def __init__(self, source: str, line_number: int, reason: str) -> None:
        super().__init__(f"{source}:{line_number}: {reason}")
        self.source = source
        self.line_number = line_number
        self.reason = reason


class UnknownTransactionTypeError(LedgerError, ValueError):
    """Raised by classifiers when an explicit type value cannot be mapped."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unsupported transaction type: {value!r}")
        self.value = value


class LedgerWriteError(LedgerError, OSError):
    """Raised when the ledger snapshot cannot be persisted."""


class LedgerReadError(LedgerError, OSError):
    """Raised when a ledger snapshot exists but cannot be read."""
