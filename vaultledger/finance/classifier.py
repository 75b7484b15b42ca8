"""Mini README: Row-to-kind classification for vault transactions.

Structure:
    * Classifier - callable protocol every classification rule satisfies.
    * KeywordClassifier - default rule driven by synonym and keyword tables.
    * classify_record - module-level instance of the default rule.

The classifier only sees the normalised row mapping (header -> raw value)
and always answers with exactly one ``TransactionType``. Rows are resolved
in three steps: an explicit ``type`` column, keywords in the descriptive
columns, then the default kind. Swapping the rule means passing another
callable to :class:`~vaultledger.finance.processor.TransactionProcessor`;
ingestion and aggregation do not change.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping, Optional, Protocol, Sequence, Tuple

from ..logging_utils import get_logger
from .errors import UnknownTransactionTypeError
from .transactions import TransactionType

LOGGER = get_logger(__name__)

TYPE_SYNONYMS: Dict[str, TransactionType] = {
    "payment": TransactionType.PAYMENT,
    "payments": TransactionType.PAYMENT,
    "pmt": TransactionType.PAYMENT,
    "purchase": TransactionType.PAYMENT,
    "debit": TransactionType.PAYMENT,
    "credit": TransactionType.PAYMENT,
    "sale": TransactionType.PAYMENT,
    "transfer": TransactionType.TRANSFER,
    "transfers": TransactionType.TRANSFER,
    "xfer": TransactionType.TRANSFER,
    "wire": TransactionType.TRANSFER,
    "sweep": TransactionType.TRANSFER,
    "fee": TransactionType.FEE,
    "fees": TransactionType.FEE,
    "charge": TransactionType.FEE,
    "commission": TransactionType.FEE,
    "interest": TransactionType.FEE,
}

# Checked in order; fees win over transfers ("wire transfer fee").
DEFAULT_KEYWORDS: Sequence[Tuple[TransactionType, Tuple[str, ...]]] = (
    (TransactionType.FEE, ("fee", "fees", "charge", "commission", "interest", "penalty")),
    (TransactionType.TRANSFER, ("transfer", "xfer", "wire", "sweep", "ach")),
)

DESCRIPTIVE_COLUMNS: Tuple[str, ...] = ("description", "category", "memo")

_WORD_PATTERN = re.compile(r"[a-z0-9]+")


class Classifier(Protocol):
    """Anything that maps a normalised CSV row to a transaction type."""

    def __call__(self, row: Mapping[str, str]) -> TransactionType:
        ...


class KeywordClassifier:
    """Classify rows from an explicit type column or descriptive keywords."""

    def __init__(
        self,
        *,
        synonyms: Optional[Mapping[str, TransactionType]] = None,
        keywords: Optional[Iterable[Tuple[TransactionType, Iterable[str]]]] = None,
        default: TransactionType = TransactionType.PAYMENT,
    ) -> None:
        if synonyms is None:
            synonyms = TYPE_SYNONYMS
        self.synonyms = {key.strip().lower(): value for key, value in synonyms.items()}
        self.keywords = [
            (kind, frozenset(word.lower() for word in words))
            for kind, words in (keywords if keywords is not None else DEFAULT_KEYWORDS)
        ]
        self.default = default

    def __call__(self, row: Mapping[str, str]) -> TransactionType:
        return self.classify(row)

    def classify(self, row: Mapping[str, str]) -> TransactionType:
        """Return the transaction type for ``row``."""

        explicit = (row.get("type") or "").strip().lower()
        if explicit:
            try:
                return TransactionType.from_str(explicit)
            except ValueError:
                pass
            try:
                return self.synonyms[explicit]
            except KeyError:
                raise UnknownTransactionTypeError(explicit) from None

        words = set()
        for column in DESCRIPTIVE_COLUMNS:
            words.update(_WORD_PATTERN.findall((row.get(column) or "").lower()))
        for kind, keywords in self.keywords:
            if words & keywords:
                return kind

        LOGGER.debug(
            "No classification rule matched %s; using default %s",
            row.get("transaction_id"),
            self.default.value,
        )
        return self.default


classify_record = KeywordClassifier()
