"""CSV ingestion of debt records."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from ..logging_config import get_logger
from ..models.debt import Debt
from .debts import InvalidInput

logger = get_logger("services.import_csv")

# Symbols users paste in along with the number.
_STRIP_CHARS = ("$", "₹", "€", "£", "%", ",", "_")


@dataclass(slots=True)
class DebtColumnMapping:
    """Maps debt fields to (lowercase) CSV headers."""

    balance: str = "balance"
    annual_rate_percent: str = "apr"
    minimum_payment: str = "minimum_payment"
    id: str | None = "id"
    name: str | None = "name"

    def required(self) -> list[str]:
        return [self.balance, self.annual_rate_percent, self.minimum_payment]


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file as strings with consistent column casing.

    Reading as ``str`` keeps amounts exactly as written so they convert to
    ``Decimal`` without passing through float.
    """

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [str(c).strip().lower() for c in frame.columns]
    return frame


def _parse_amount(raw: object, *, column: str, row_number: int) -> Decimal:
    text = str(raw if raw is not None else "").strip()
    for char in _STRIP_CHARS:
        text = text.replace(char, "")
    if not text:
        raise InvalidInput(f"Row {row_number}: missing value for {column!r}")
    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise InvalidInput(f"Row {row_number}: {column!r} is not a number ({raw!r})") from exc
    if not value.is_finite():
        raise InvalidInput(f"Row {row_number}: {column!r} must be finite")
    return value


def parse_debts(*, rows: Iterable[Mapping], mapping: DebtColumnMapping) -> list[Debt]:
    """Convert dict-like rows into :class:`Debt` records.

    ``id`` defaults to the 1-based row number and ``name`` to the id when the
    mapping's optional columns are absent or blank.
    """

    debts: list[Debt] = []
    for row_number, row in enumerate(rows, start=1):
        debt_id: object = row_number
        if mapping.id:
            raw_id = str(row.get(mapping.id, "") or "").strip()
            if raw_id:
                debt_id = raw_id

        name = str(debt_id)
        if mapping.name:
            raw_name = str(row.get(mapping.name, "") or "").strip()
            if raw_name:
                name = raw_name

        debts.append(
            Debt(
                id=debt_id,
                name=name,
                balance=_parse_amount(
                    row.get(mapping.balance), column=mapping.balance, row_number=row_number
                ),
                annual_rate_percent=_parse_amount(
                    row.get(mapping.annual_rate_percent),
                    column=mapping.annual_rate_percent,
                    row_number=row_number,
                ),
                minimum_payment=_parse_amount(
                    row.get(mapping.minimum_payment),
                    column=mapping.minimum_payment,
                    row_number=row_number,
                ),
            )
        )
    return debts


def load_debts_csv(*, csv_path: Path, mapping: DebtColumnMapping | None = None) -> list[Debt]:
    """Read debts from ``csv_path``; raises :class:`InvalidInput` on bad rows."""

    mapping = mapping or DebtColumnMapping()
    try:
        frame = normalize_frame(file_path=Path(csv_path))
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise InvalidInput(f"Cannot read {csv_path}: {exc}") from exc

    missing = [column for column in mapping.required() if column not in frame.columns]
    if missing:
        raise InvalidInput(f"CSV is missing required column(s): {', '.join(missing)}")

    rows = frame.to_dict(orient="records")
    debts = parse_debts(rows=rows, mapping=mapping)
    logger.info("Debts loaded from CSV", extra={"path": str(csv_path), "count": len(debts)})
    return debts


__all__ = ["DebtColumnMapping", "load_debts_csv", "normalize_frame", "parse_debts"]
