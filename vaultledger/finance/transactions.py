"""Mini README: Transaction entities produced by vault ingestion.

Structure:
    * TransactionType - enum of the supported kinds (payment, transfer, fee).
    * Transaction - immutable record for a single classified CSV row.

Amounts stay strings exactly as read from the CSV so ingestion never fails on
formatting artefacts; numeric parsing happens in :mod:`.summary`. The type
is fixed when the record is built and the dataclass is frozen, so nothing
downstream can re-derive it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class TransactionType(str, Enum):
    """Enumerate the supported transaction kinds in display order."""

    PAYMENT = "payment"
    TRANSFER = "transfer"
    FEE = "fee"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error

    @property
    def label(self) -> str:
        """Plural heading used by the HTML report, JSON API and ledger."""

        return _LABELS[self]


_LABELS = {
    TransactionType.PAYMENT: "Payments",
    TransactionType.TRANSFER: "Transfers",
    TransactionType.FEE: "Fees",
}


@dataclass(frozen=True, slots=True)
class Transaction:
    """Represent one ledger entry read from the vault."""

    transaction_id: str
    transaction_type: TransactionType
    amount: str
    date: str = ""
    description: str = ""
    details: Dict[str, str] = field(default_factory=dict)
    source: str = ""
    line_number: int = 0

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        return {
            "transaction_id": self.transaction_id,
            "type": self.transaction_type.value,
            "amount": self.amount,
            "date": self.date,
            "description": self.description,
            "details": dict(self.details),
            "source": self.source,
            "line_number": self.line_number,
        }
