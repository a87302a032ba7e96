"""CSV export helpers for simulation ledgers."""

from __future__ import annotations

import csv
from pathlib import Path

from ..models.payoff import SimulationResult

LEDGER_HEADERS = ["period", "debt_id", "payment_applied", "interest", "balance_after"]


def export_ledger_csv(*, result: SimulationResult, output_path: Path) -> Path:
    """Write ``result.ledger`` to CSV at ``output_path``.

    Amounts are written as exact decimal strings. Returns the path written.
    """

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=LEDGER_HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for entry in result.ledger:
            writer.writerow(
                {
                    "period": entry.period,
                    "debt_id": entry.debt_id,
                    "payment_applied": str(entry.payment_applied),
                    "interest": str(entry.interest),
                    "balance_after": str(entry.balance_after),
                }
            )

    return output_path
