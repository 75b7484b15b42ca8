"""Mini README: Persist the markdown ledger snapshot for the vault.

Structure:
    * render_ledger - deterministic markdown document for a transaction list.
    * write_snapshot - atomic temp-file + rename replacement of the snapshot.
    * run - ingestion, aggregation, rendering and persistence in one call.
    * read_snapshot - load the snapshot for display, ``None`` when absent.

The rendered document carries no timestamps, so re-running against an
unchanged vault produces byte-identical output. Runs targeting the same
snapshot path are serialised within the process; readers only ever see the
previous or the new document because the swap is a single ``os.replace``.
"""

from __future__ import annotations

import os
import tempfile
import threading
import weakref
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..configuration import DEFAULT_LEDGER_FILENAME
from ..logging_utils import get_logger
from .categorizer import categorize_transactions
from .classifier import Classifier
from .errors import LedgerReadError, LedgerWriteError
from .processor import TransactionProcessor
from .summary import SummaryStats, calculate_summary
from .transactions import Transaction, TransactionType

LOGGER = get_logger(__name__)

PathLike = Union[str, Path]

LEDGER_TITLE = "FK Master Ledger"
PLACEHOLDER_LEDGER = "# No Ledger Available\n\nNo ledger data has been generated yet."

# Entries vanish once no run holds the lock.
_PATH_LOCKS: "weakref.WeakValueDictionary[Path, threading.Lock]" = weakref.WeakValueDictionary()
_PATH_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _PATH_LOCKS_GUARD:
        lock = _PATH_LOCKS.get(path)
        if lock is None:
            lock = threading.Lock()
            _PATH_LOCKS[path] = lock
        return lock


def _cell(value: str) -> str:
    """Make ``value`` safe for a single markdown table cell."""

    flattened = " ".join(value.split())
    return flattened.replace("\\", "\\\\").replace("|", "\\|")


def _money(value: float) -> str:
    return f"{value:.2f}"


def render_ledger(transactions: Sequence[Transaction], summary: SummaryStats) -> str:
    """Render the ledger snapshot as markdown."""

    sources = sorted({transaction.source for transaction in transactions if transaction.source})
    lines: List[str] = [
        f"# {LEDGER_TITLE}",
        "",
        f"Source files: {len(sources)}",
        "",
        "## Summary",
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Total transactions | {summary.total_transactions} |",
        f"| Payments | {summary.total_payments} |",
        f"| Transfers | {summary.total_transfers} |",
        f"| Fees | {summary.total_fees} |",
        f"| Payments sum | {_money(summary.payments_sum)} |",
        f"| Transfers sum | {_money(summary.transfers_sum)} |",
        f"| Fees sum | {_money(summary.fees_sum)} |",
        f"| Net liquidity | {_money(summary.net_liquidity)} |",
    ]

    categorized = categorize_transactions(transactions)
    for kind in TransactionType:
        entries = categorized[kind]
        lines.extend(["", f"## {kind.label}", ""])
        if not entries:
            lines.append(f"_No {kind.label.lower()} recorded._")
            continue
        lines.append("| Transaction ID | Date | Description | Amount | Source |")
        lines.append("| --- | --- | --- | --- | --- |")
        for transaction in entries:
            lines.append(
                "| {} | {} | {} | {} | {} |".format(
                    _cell(transaction.transaction_id),
                    _cell(transaction.date),
                    _cell(transaction.description),
                    _cell(transaction.amount),
                    _cell(f"{transaction.source}:{transaction.line_number}"),
                )
            )

    if sources:
        lines.extend(["", "## Sources", ""])
        lines.extend(f"- {_cell(source)}" for source in sources)
    return "\n".join(lines) + "\n"


def write_snapshot(
    ledger_directory: PathLike,
    content: str,
    *,
    filename: str = DEFAULT_LEDGER_FILENAME,
) -> Path:
    """Atomically replace ``<ledger_directory>/<filename>`` with ``content``."""

    directory = Path(ledger_directory).expanduser().resolve()
    target = directory / filename
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise LedgerWriteError(f"Cannot create ledger directory {directory}: {error}") from error

    temp_name: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="\n",
            dir=directory,
            prefix=f".{filename}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, target)
        temp_name = None
    except OSError as error:
        raise LedgerWriteError(f"Cannot write ledger snapshot {target}: {error}") from error
    finally:
        if temp_name is not None:
            try:
                os.unlink(temp_name)
            except FileNotFoundError:
                pass
    LOGGER.info("Ledger snapshot written to %s (%s bytes)", target, len(content.encode("utf-8")))
    return target


def run(
    vault_directory: PathLike,
    ledger_directory: PathLike,
    *,
    classifier: Optional[Classifier] = None,
    filename: str = DEFAULT_LEDGER_FILENAME,
) -> Path:
    """Rebuild the ledger snapshot from the vault and return its path.

    Raises ``VaultPathError`` or ``RecordParseError`` when the vault cannot
    be ingested and ``LedgerWriteError`` when the snapshot cannot be saved.
    """

    processor = TransactionProcessor(vault_directory, ledger_directory, classifier=classifier)
    target = processor.ledger_directory / filename
    with _lock_for(target):
        transactions = processor.read_csv_files()
        summary = calculate_summary(transactions)
        document = render_ledger(transactions, summary)
        return write_snapshot(processor.ledger_directory, document, filename=filename)


def read_snapshot(
    ledger_directory: PathLike, *, filename: str = DEFAULT_LEDGER_FILENAME
) -> Optional[str]:
    """Return the snapshot text, or ``None`` when no snapshot has been written."""

    target = Path(ledger_directory).expanduser().resolve() / filename
    try:
        return target.read_text(encoding="utf-8")
    except FileNotFoundError:
        LOGGER.info("No ledger snapshot at %s yet", target)
        return None
    except (OSError, UnicodeDecodeError) as error:
        raise LedgerReadError(f"Cannot read ledger snapshot {target}: {error}") from error
