"""Mini README: Group classified transactions by kind.

``categorize_transactions`` partitions a list without copying or reordering
records; every ``TransactionType`` gets an entry so callers never need to
special-case a missing kind. ``group_for_display`` re-keys the result with
the plural labels used by the report, API and ledger.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from .transactions import Transaction, TransactionType


def categorize_transactions(
    transactions: Iterable[Transaction],
) -> Dict[TransactionType, List[Transaction]]:
    """Return transactions grouped by type, keeping source order within each group."""

    categorized: Dict[TransactionType, List[Transaction]] = {kind: [] for kind in TransactionType}
    for transaction in transactions:
        categorized[transaction.transaction_type].append(transaction)
    return categorized


def group_for_display(
    categorized: Mapping[TransactionType, List[Transaction]],
) -> Dict[str, List[Transaction]]:
    """Map ``{TransactionType: [...]}`` to ``{"Payments": [...], ...}``."""

    return {kind.label: list(categorized.get(kind, [])) for kind in TransactionType}
