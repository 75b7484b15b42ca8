"""Mini README: Summary statistics over a transaction list.

Structure:
    * SummaryStats - counts and sums per transaction kind plus net liquidity.
    * parse_amount - lenient amount parser returning ``None`` on failure.
    * calculate_summary - fold a transaction list into ``SummaryStats``.

A malformed amount never aborts aggregation. The transaction is still
counted, contributes ``0.0`` to its kind's sum, and a warning names the
offending value. Net liquidity is the plain sum of the three kind sums; no
sign convention is applied.
"""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional

from ..logging_utils import get_logger
from .transactions import Transaction, TransactionType

LOGGER = get_logger(__name__)

_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass(slots=True)
class SummaryStats:
    """Aggregated counts and sums for a transaction list."""

    total_transactions: int = 0
    total_payments: int = 0
    total_transfers: int = 0
    total_fees: int = 0
    payments_sum: float = 0.0
    transfers_sum: float = 0.0
    fees_sum: float = 0.0
    net_liquidity: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        """Export the statistics using the JSON API field names."""

        return asdict(self)


def parse_amount(raw: Optional[str]) -> Optional[float]:
    """Parse ``raw`` as a decimal number, returning ``None`` when it is not one."""

    if raw is None:
        return None
    text = raw.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def calculate_summary(transactions: Iterable[Transaction]) -> SummaryStats:
    """Compute counts and sums per kind for ``transactions``."""

    stats = SummaryStats()
    for transaction in transactions:
        stats.total_transactions += 1
        amount = parse_amount(transaction.amount)
        if amount is None:
            LOGGER.warning(
                "Failed to parse amount '%s' for transaction %s, treating as 0.0",
                transaction.amount,
                transaction.transaction_id,
            )
            amount = 0.0

        if transaction.transaction_type is TransactionType.PAYMENT:
            stats.total_payments += 1
            stats.payments_sum += amount
        elif transaction.transaction_type is TransactionType.TRANSFER:
            stats.total_transfers += 1
            stats.transfers_sum += amount
        elif transaction.transaction_type is TransactionType.FEE:
            stats.total_fees += 1
            stats.fees_sum += amount

    stats.net_liquidity = stats.payments_sum + stats.transfers_sum + stats.fees_sum
    return stats
