"""Mini README: Turn raw CSV rows into ``Transaction`` records.

Structure:
    * normalise_header - canonical column names with a small alias table.
    * validate_header - fail fast when required columns are missing.
    * parse_row - build one Transaction, delegating the kind to a classifier.

Structural problems (missing columns, short or overlong rows, empty ids,
unmappable explicit types) raise ``RecordParseError`` with file and line
context. Amounts are never parsed here.
"""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Sequence

from .classifier import Classifier, classify_record
from .errors import RecordParseError, UnknownTransactionTypeError
from .transactions import Transaction

REQUIRED_COLUMNS = ("transaction_id", "amount")

# Columns promoted to dedicated Transaction fields; everything else lands in
# ``Transaction.details``.
_PROMOTED_COLUMNS = {"transaction_id", "amount", "date", "description", "type"}

HEADER_ALIASES: Dict[str, str] = {
    "id": "transaction_id",
    "txn_id": "transaction_id",
    "transactionid": "transaction_id",
    "kind": "type",
    "transaction_type": "type",
    "amt": "amount",
    "value": "amount",
}

_SEPARATORS = re.compile(r"[\s\-]+")


def normalise_header(name: Optional[str]) -> str:
    """Return the canonical column name for a raw CSV header cell."""

    cleaned = _SEPARATORS.sub("_", (name or "").strip().lower())
    return HEADER_ALIASES.get(cleaned, cleaned)


def validate_header(fieldnames: Sequence[str], *, source: str, line_number: int = 1) -> List[str]:
    """Normalise ``fieldnames`` and ensure the required columns are present."""

    normalised = [normalise_header(name) for name in fieldnames]
    missing = [column for column in REQUIRED_COLUMNS if column not in normalised]
    if missing:
        raise RecordParseError(
            source, line_number, f"missing required column(s): {', '.join(missing)}"
        )
    duplicates = sorted({name for name in normalised if name and normalised.count(name) > 1})
    if duplicates:
        raise RecordParseError(
            source, line_number, f"duplicate column(s): {', '.join(duplicates)}"
        )
    return normalised


def parse_row(
    row: Mapping[str, Optional[str]],
    *,
    source: str,
    line_number: int,
    classifier: Classifier = classify_record,
) -> Transaction:
    """Build a ``Transaction`` from a row keyed by normalised header names.

    ``None`` values mark cells missing from a short row and ``None`` keys
    hold surplus cells; both are structural errors.
    """

    if row.get(None):  # type: ignore[call-overload]
        raise RecordParseError(source, line_number, "row has more cells than the header")
    absent = [column for column, value in row.items() if column is not None and value is None]
    if absent:
        raise RecordParseError(
            source, line_number, f"row is missing value(s) for: {', '.join(absent)}"
        )

    values: Dict[str, str] = {column: value for column, value in row.items() if column}
    transaction_id = values.get("transaction_id", "").strip()
    if not transaction_id:
        raise RecordParseError(source, line_number, "empty transaction_id")

    try:
        transaction_type = classifier(values)
    except UnknownTransactionTypeError as error:
        raise RecordParseError(source, line_number, str(error)) from error

    return Transaction(
        transaction_id=transaction_id,
        transaction_type=transaction_type,
        amount=values["amount"],
        date=values.get("date", ""),
        description=values.get("description", ""),
        details={
            column: value for column, value in values.items() if column not in _PROMOTED_COLUMNS
        },
        source=source,
        line_number=line_number,
    )
