"""Payoff policies and simulation output records."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Hashable, Iterable

from .debt import Debt


class Policy(str, Enum):
    """Debt prioritization rule applied for the life of a simulation run."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"

    @property
    def label(self) -> str:
        return "Smallest balance first" if self is Policy.SNOWBALL else "Highest interest first"

    def priority_order(self, debts: Iterable[Debt]) -> list[Debt]:
        """Return debts in payoff priority; ties keep their input order."""

        # sorted() is stable, so equal keys preserve input order.
        if self is Policy.SNOWBALL:
            return sorted(debts, key=lambda d: d.balance)
        return sorted(debts, key=lambda d: -d.annual_rate_percent)


class PayoffStatus(str, Enum):
    """How a simulation run ended."""

    PAID_OFF = "paid_off"
    CAP_EXHAUSTED = "cap_exhausted"


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """One debt's payment within one period."""

    period: int
    debt_id: Hashable
    payment_applied: Decimal
    balance_after: Decimal
    interest: Decimal = Decimal(0)


@dataclass(frozen=True, slots=True)
class SimulationResult:
    """Outcome of running one policy over a set of debts."""

    policy: Policy
    months: int
    total_interest_paid: Decimal
    ledger: tuple[LedgerEntry, ...] = ()
    status: PayoffStatus = PayoffStatus.PAID_OFF
    starting_balance: Decimal = Decimal(0)
    remaining_balance: Decimal = Decimal(0)
    stalled_debt_ids: tuple[Hashable, ...] = field(default_factory=tuple)

    @property
    def paid_off(self) -> bool:
        return self.status is PayoffStatus.PAID_OFF

    def entries_for(self, period: int) -> list[LedgerEntry]:
        """Ledger rows recorded in ``period``."""
        return [entry for entry in self.ledger if entry.period == period]
