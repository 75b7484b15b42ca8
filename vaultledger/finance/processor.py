"""Mini README: Directory-scoped CSV ingestion for the vault.

Structure:
    * TransactionProcessor - binds a vault and ledger directory, reads every
      CSV export in the vault and hands back classified transactions.

Ingestion policy:
    * Files are read in name order, rows in file order; the returned list is
      the concatenation.
    * Structural errors fail the whole call with ``RecordParseError``
      (file and line in the message). Rows that are entirely blank are
      skipped.
    * Amounts are carried as strings. Formatting problems are tolerated
      later by the aggregator.
    * Transaction ids must be unique across the vault.
"""

from __future__ import annotations

import csv
from contextlib import closing
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Union

from ..logging_utils import get_logger
from .categorizer import categorize_transactions
from .classifier import Classifier, classify_record
from .errors import RecordParseError, VaultPathError
from .parser import parse_row, validate_header
from .transactions import Transaction, TransactionType

LOGGER = get_logger(__name__)

PathLike = Union[str, Path]


def _normalise_directory(path: PathLike, *, role: str) -> Path:
    """Resolve ``path`` and reject anything that exists but is not a directory."""

    resolved = Path(path).expanduser().resolve()
    if resolved.exists() and not resolved.is_dir():
        raise VaultPathError(f"{role} path {resolved} is not a directory", resolved)
    return resolved


class TransactionProcessor:
    """Read classified transactions from the CSV files of a vault directory."""

    def __init__(
        self,
        vault_directory: PathLike,
        ledger_directory: PathLike,
        *,
        classifier: Optional[Classifier] = None,
    ) -> None:
        self.vault_directory = _normalise_directory(vault_directory, role="Vault")
        self.ledger_directory = _normalise_directory(ledger_directory, role="Ledger")
        self.classifier: Classifier = classifier or classify_record
        LOGGER.debug(
            "Transaction processor bound to vault=%s ledger=%s",
            self.vault_directory,
            self.ledger_directory,
        )

    def list_csv_files(self) -> List[Path]:
        """Return the vault's CSV files sorted by name."""

        if not self.vault_directory.is_dir():
            raise VaultPathError(
                f"Vault directory {self.vault_directory} does not exist", self.vault_directory
            )
        try:
            entries = list(self.vault_directory.iterdir())
        except OSError as error:
            raise VaultPathError(
                f"Cannot list vault directory {self.vault_directory}: {error}",
                self.vault_directory,
            ) from error
        return sorted(
            (entry for entry in entries if entry.suffix.lower() == ".csv" and entry.is_file()),
            key=lambda entry: entry.name,
        )

    def read_csv_files(self) -> List[Transaction]:
        """Parse every CSV file in the vault into one ordered transaction list."""

        transactions: List[Transaction] = []
        seen: Dict[str, str] = {}
        files = self.list_csv_files()
        for csv_path in files:
            count = 0
            with closing(self._read_file(csv_path)) as records:
                for transaction in records:
                    previous = seen.get(transaction.transaction_id)
                    if previous is not None:
                        raise RecordParseError(
                            transaction.source,
                            transaction.line_number,
                            f"duplicate transaction_id {transaction.transaction_id!r} "
                            f"(first seen at {previous})",
                        )
                    seen[transaction.transaction_id] = (
                        f"{transaction.source}:{transaction.line_number}"
                    )
                    transactions.append(transaction)
                    count += 1
            LOGGER.debug("Read %s transactions from %s", count, csv_path.name)
        LOGGER.info(
            "Loaded %s transactions from %s CSV files in %s",
            len(transactions),
            len(files),
            self.vault_directory,
        )
        return transactions

    def categorize_transactions(
        self, transactions: Sequence[Transaction]
    ) -> Dict[TransactionType, List[Transaction]]:
        """Group ``transactions`` by type; see :func:`categorize_transactions`."""

        return categorize_transactions(transactions)

    def _read_file(self, csv_path: Path) -> Iterator[Transaction]:
        source = csv_path.name
        try:
            with csv_path.open("r", encoding="utf-8-sig", newline="") as handle:
                reader = csv.reader(handle)
                header = next(reader, None)
                if header is None:
                    LOGGER.warning("Skipping empty CSV file %s", source)
                    return
                fieldnames = validate_header(header, source=source, line_number=reader.line_num)
                width = len(fieldnames)
                for cells in reader:
                    if not any(cell.strip() for cell in cells):
                        continue
                    row: Dict[Optional[str], object] = {
                        name: cells[index] if index < len(cells) else None
                        for index, name in enumerate(fieldnames)
                    }
                    if len(cells) > width:
                        row[None] = cells[width:]
                    yield parse_row(
                        row,  # type: ignore[arg-type]
                        source=source,
                        line_number=reader.line_num,
                        classifier=self.classifier,
                    )
        except csv.Error as error:
            raise RecordParseError(source, reader.line_num, f"malformed CSV: {error}") from error
        except UnicodeDecodeError as error:
            raise VaultPathError(f"{source} is not valid UTF-8 text: {error}", csv_path) from error
        except OSError as error:
            raise VaultPathError(f"Cannot read {csv_path}: {error}", csv_path) from error
