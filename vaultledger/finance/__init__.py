"""Mini README: Transaction ledger processing pipeline.

The package reads CSV exports from a vault directory, classifies each row as
a payment, transfer or fee, groups and aggregates the results, and persists
a markdown ledger snapshot. Every call works from the files on disk; nothing
is cached between calls.
"""

from .categorizer import categorize_transactions, group_for_display
from .classifier import Classifier, KeywordClassifier, classify_record
from .errors import (
    LedgerError,
    LedgerReadError,
    LedgerWriteError,
    RecordParseError,
    UnknownTransactionTypeError,
    VaultPathError,
)
from .ledger_writer import PLACEHOLDER_LEDGER, read_snapshot, render_ledger, run, write_snapshot
from .processor import TransactionProcessor
from .summary import SummaryStats, calculate_summary, parse_amount
from .transactions import Transaction, TransactionType

__all__ = [
    "Classifier",
    "KeywordClassifier",
    "LedgerError",
    "LedgerReadError",
    "LedgerWriteError",
    "PLACEHOLDER_LEDGER",
    "RecordParseError",
    "SummaryStats",
    "Transaction",
    "TransactionProcessor",
    "TransactionType",
    "UnknownTransactionTypeError",
    "VaultPathError",
    "calculate_summary",
    "categorize_transactions",
    "classify_record",
    "group_for_display",
    "parse_amount",
    "read_snapshot",
    "render_ledger",
    "run",
    "write_snapshot",
]
