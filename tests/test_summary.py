"""Mini README: Tests for amount parsing and summary aggregation.

The scenario test mirrors a three-row export where one transfer carries a
malformed amount; the remaining tests pin the soft-failure policy and the
count and liquidity invariants.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

import pytest

from vaultledger.finance import (
    SummaryStats,
    Transaction,
    TransactionProcessor,
    TransactionType,
    calculate_summary,
    parse_amount,
)


def _txns(entries: List[Tuple[str, TransactionType, str]]) -> List[Transaction]:
    return [
        Transaction(transaction_id=txn_id, transaction_type=kind, amount=amount)
        for txn_id, kind, amount in entries
    ]


def test_scenario_summary(vault: Path, ledger_dir: Path, write_csv, scenario_csv: str) -> None:
    write_csv("ledger.csv", scenario_csv)

    stats = calculate_summary(TransactionProcessor(vault, ledger_dir).read_csv_files())

    assert stats.total_transactions == 3
    assert stats.total_payments == 1
    assert stats.payments_sum == pytest.approx(100.50)
    assert stats.total_fees == 1
    assert stats.fees_sum == pytest.approx(2.00)
    assert stats.total_transfers == 1
    assert stats.transfers_sum == 0.0
    assert stats.net_liquidity == pytest.approx(102.50)


def test_malformed_amount_counts_but_contributes_zero(caplog: pytest.LogCaptureFixture) -> None:
    transactions = _txns(
        [
            ("P1", TransactionType.PAYMENT, "abc"),
            ("P2", TransactionType.PAYMENT, "10"),
            ("F1", TransactionType.FEE, "-1.5"),
        ]
    )

    with caplog.at_level(logging.WARNING, logger="vaultledger.finance.summary"):
        stats = calculate_summary(transactions)

    assert stats.total_payments == 2
    assert stats.payments_sum == pytest.approx(10.0)
    assert stats.fees_sum == pytest.approx(-1.5)
    assert "'abc'" in caplog.text and "P1" in caplog.text


def test_empty_list_yields_zero_stats() -> None:
    assert calculate_summary([]) == SummaryStats()
    assert SummaryStats().as_dict() == {
        "total_transactions": 0,
        "total_payments": 0,
        "total_transfers": 0,
        "total_fees": 0,
        "payments_sum": 0.0,
        "transfers_sum": 0.0,
        "fees_sum": 0.0,
        "net_liquidity": 0.0,
    }


@pytest.mark.parametrize(
    "entries",
    [
        [("A", TransactionType.PAYMENT, "0.1"), ("B", TransactionType.TRANSFER, "0.2"), ("C", TransactionType.FEE, "0.3")],
        [("A", TransactionType.FEE, "1e3"), ("B", TransactionType.FEE, "nan"), ("C", TransactionType.TRANSFER, "-7.25")],
        [("A", TransactionType.TRANSFER, ""), ("B", TransactionType.TRANSFER, " 42 ")],
        [(f"T{i}", kind, str(i * 1.1)) for i, kind in enumerate(list(TransactionType) * 5)],
    ],
)
def test_summary_invariants(entries: List[Tuple[str, TransactionType, str]]) -> None:
    stats = calculate_summary(_txns(entries))

    assert stats.total_payments + stats.total_transfers + stats.total_fees == stats.total_transactions
    assert stats.total_transactions == len(entries)
    assert stats.net_liquidity == stats.payments_sum + stats.transfers_sum + stats.fees_sum


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("100.50", 100.50),
        (" -3 ", -3.0),
        ("+1e2", 100.0),
        ("abc", None),
        ("", None),
        ("1,234.00", None),
        ("1_000", None),
        ("100.50 USD", None),
        ("1e999", None),
        ("inf", None),
        ("NaN", None),
        (None, None),
    ],
)
def test_parse_amount(raw, expected) -> None:
    assert parse_amount(raw) == expected
