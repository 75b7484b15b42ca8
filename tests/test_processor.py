"""Mini README: Tests for directory-scoped CSV ingestion.

Structure:
    * ordering - file-then-row order across several exports.
    * empty and missing vaults - empty list versus explicit path errors.
    * fail-fast policy - structural problems name the file and line.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from vaultledger.finance import (
    RecordParseError,
    TransactionProcessor,
    TransactionType,
    VaultPathError,
)



def test_read_csv_files_returns_file_then_row_order(vault: Path, ledger_dir: Path, write_csv) -> None:
    write_csv("b_march.csv", "id,amount,description\nB1,1.00,Lunch\nB2,2.00,Bank fee\n")
    write_csv("a_february.csv", "id,amount,description\nA1,3.00,Wire transfer\n")
    write_csv("notes.txt", "not a csv")
    write_csv("C_APRIL.CSV", "id,amount\nC1,4.00\n")

    transactions = TransactionProcessor(vault, ledger_dir).read_csv_files()

    assert [txn.transaction_id for txn in transactions] == ["C1", "A1", "B1", "B2"]
    assert [txn.transaction_type for txn in transactions] == [
        TransactionType.PAYMENT,
        TransactionType.TRANSFER,
        TransactionType.PAYMENT,
        TransactionType.FEE,
    ]
    assert transactions[-1].source == "b_march.csv"
    assert transactions[-1].line_number == 3


def test_scenario_file_is_classified_from_type_column(
    vault: Path, ledger_dir: Path, write_csv, scenario_csv: str
) -> None:
    write_csv("ledger.csv", scenario_csv)

    transactions = TransactionProcessor(vault, ledger_dir).read_csv_files()

    assert [(txn.transaction_id, txn.transaction_type, txn.amount) for txn in transactions] == [
        ("T1", TransactionType.PAYMENT, "100.50"),
        ("T2", TransactionType.FEE, "2.00"),
        ("T3", TransactionType.TRANSFER, "oops"),
    ]


def test_empty_vault_returns_empty_list(vault: Path, ledger_dir: Path) -> None:
    assert TransactionProcessor(vault, ledger_dir).read_csv_files() == []


def test_header_only_and_blank_rows_are_ignored(vault: Path, ledger_dir: Path, write_csv) -> None:
    write_csv("empty.csv", "")
    write_csv("header.csv", "id,amount\n")
    write_csv("blank.csv", "id,amount\n\nX1,5\n,\n")

    transactions = TransactionProcessor(vault, ledger_dir).read_csv_files()

    assert [txn.transaction_id for txn in transactions] == ["X1"]


def test_missing_vault_raises_path_error(tmp_path: Path, ledger_dir: Path) -> None:
    processor = TransactionProcessor(tmp_path / "absent", ledger_dir)

    with pytest.raises(VaultPathError) as excinfo:
        processor.read_csv_files()
    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.path == (tmp_path / "absent").resolve()


def test_construction_rejects_file_paths(tmp_path: Path, vault: Path) -> None:
    blocker = tmp_path / "ledger"
    blocker.write_text("not a directory")

    with pytest.raises(VaultPathError):
        TransactionProcessor(vault, blocker)
    with pytest.raises(VaultPathError):
        TransactionProcessor(blocker, vault)


def test_paths_are_normalised(vault: Path, ledger_dir: Path) -> None:
    processor = TransactionProcessor(vault / ".." / "vault", ledger_dir)
    assert processor.vault_directory == vault.resolve()
    assert processor.ledger_directory.is_absolute()


def test_missing_required_column_fails_whole_call(vault: Path, ledger_dir: Path, write_csv) -> None:
    write_csv("a.csv", "id,amount\nA1,1\n")
    write_csv("b.csv", "id,description\nB1,Lunch\n")

    with pytest.raises(RecordParseError) as excinfo:
        TransactionProcessor(vault, ledger_dir).read_csv_files()
    assert excinfo.value.source == "b.csv"
    assert excinfo.value.line_number == 1


def test_short_row_reports_file_and_line(vault: Path, ledger_dir: Path, write_csv) -> None:
    write_csv("a.csv", "id,amount,description\nA1,1,ok\nA2\n")

    with pytest.raises(RecordParseError, match=r"a\.csv:3:"):
        TransactionProcessor(vault, ledger_dir).read_csv_files()


def test_unknown_explicit_type_is_structural(vault: Path, ledger_dir: Path, write_csv) -> None:
    write_csv("a.csv", "id,type,amount\nA1,refund,1\n")

    with pytest.raises(RecordParseError, match="refund"):
        TransactionProcessor(vault, ledger_dir).read_csv_files()


def test_duplicate_ids_across_files_are_rejected(vault: Path, ledger_dir: Path, write_csv) -> None:
    write_csv("a.csv", "id,amount\nDUP,1\n")
    write_csv("b.csv", "id,amount\nDUP,2\n")

    with pytest.raises(RecordParseError, match="first seen at a.csv:2"):
        TransactionProcessor(vault, ledger_dir).read_csv_files()


def test_non_utf8_file_is_a_path_error(vault: Path, ledger_dir: Path) -> None:
    (vault / "latin.csv").write_bytes("id,amount\nA1,1\nA2,caf\xe9\n".encode("latin-1"))

    with pytest.raises(VaultPathError, match="latin.csv"):
        TransactionProcessor(vault, ledger_dir).read_csv_files()


def test_custom_classifier_is_used(vault: Path, ledger_dir: Path, write_csv) -> None:
    write_csv("a.csv", "id,amount\nA1,1\nA2,2\n")

    processor = TransactionProcessor(vault, ledger_dir, classifier=lambda row: TransactionType.FEE)

    assert {txn.transaction_type for txn in processor.read_csv_files()} == {TransactionType.FEE}


def test_utf8_bom_header_is_recognised(vault: Path, ledger_dir: Path) -> None:
    (vault / "bom.csv").write_bytes("\ufeffid,amount\nA1,1\n".encode("utf-8"))

    assert [txn.transaction_id for txn in TransactionProcessor(vault, ledger_dir).read_csv_files()] == ["A1"]


class _TrackingProcessor(TransactionProcessor):
    """Remember every per-file reader handed out by ``_read_file``."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.readers = []

    def _read_file(self, csv_path: Path):
        reader = super()._read_file(csv_path)
        self.readers.append(reader)
        return reader


def test_duplicate_id_error_closes_file_reader(vault: Path, ledger_dir: Path, write_csv) -> None:
    write_csv("a.csv", "id,amount\nDUP,1\n")
    write_csv("b.csv", "id,amount\nDUP,2\nB2,3\n")
    processor = _TrackingProcessor(vault, ledger_dir)

    with pytest.raises(RecordParseError):
        processor.read_csv_files()

    assert len(processor.readers) == 2
    assert all(reader.gi_frame is None for reader in processor.readers)
