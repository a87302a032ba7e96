"""Reporting helpers built on simulation results.

Everything here returns exact ``Decimal`` values; rounding and currency
formatting belong to whoever displays them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Hashable, Iterable

from ..models.debt import Debt, MoneyLike, to_money
from ..models.payoff import Policy, SimulationResult
from .debts import MONEY_CONTEXT, coerce_policy


@dataclass(slots=True)
class DebtPortfolioSummary:
    """Totals across a set of debts, as shown above the strategy comparison."""

    debt_count: int
    total_balance: Decimal
    total_minimum_payment: Decimal
    total_with_extra: Decimal
    average_rate_percent: Decimal


def summarize_debts(*, debts: Iterable[Debt], extra_payment: MoneyLike = 0) -> DebtPortfolioSummary:
    """Aggregate balances, minimums and the simple mean interest rate."""

    ctx = MONEY_CONTEXT
    debt_list = list(debts)
    total_balance = Decimal(0)
    total_minimum = Decimal(0)
    rate_sum = Decimal(0)
    for debt in debt_list:
        total_balance = ctx.add(total_balance, debt.balance)
        total_minimum = ctx.add(total_minimum, debt.minimum_payment)
        rate_sum = ctx.add(rate_sum, debt.annual_rate_percent)

    average_rate = ctx.divide(rate_sum, len(debt_list)) if debt_list else Decimal(0)
    return DebtPortfolioSummary(
        debt_count=len(debt_list),
        total_balance=total_balance,
        total_minimum_payment=total_minimum,
        total_with_extra=ctx.add(total_minimum, to_money(extra_payment)),
        average_rate_percent=average_rate,
    )


def payoff_order(*, debts: Iterable[Debt], policy: Policy | str) -> list[Debt]:
    """Debts in the order ``policy`` targets them."""
    return coerce_policy(policy).priority_order(debts)


def payoff_periods(result: SimulationResult) -> dict[Hashable, int | None]:
    """Return the period in which each simulated debt reached zero.

    Debts still carrying a balance when the run stopped map to ``None``.
    Debts that started at zero never appear in the ledger and are omitted.
    """

    periods: dict[Hashable, int | None] = {}
    for entry in result.ledger:
        if entry.debt_id not in periods:
            periods[entry.debt_id] = None
        if entry.balance_after == 0 and periods[entry.debt_id] is None:
            periods[entry.debt_id] = entry.period
    return periods


def balance_timeline(result: SimulationResult) -> list[Decimal]:
    """Total remaining balance at the end of each period (index 0 = period 1).

    Debts absent from a period were already at zero, so summing that
    period's rows gives the full outstanding total.
    """

    totals = [Decimal(0)] * result.months
    for entry in result.ledger:
        index = entry.period - 1
        totals[index] = MONEY_CONTEXT.add(totals[index], entry.balance_after)
    return totals


def debt_balance_timelines(result: SimulationResult) -> dict[Hashable, list[Decimal]]:
    """Per-debt remaining balance for every period, zero-filled after payoff."""

    timelines: dict[Hashable, list[Decimal]] = {}
    for entry in result.ledger:
        series = timelines.setdefault(entry.debt_id, [Decimal(0)] * result.months)
        series[entry.period - 1] = entry.balance_after
    return timelines


def total_paid(result: SimulationResult) -> Decimal:
    """Sum of every payment recorded in the ledger."""

    total = Decimal(0)
    for entry in result.ledger:
        total = MONEY_CONTEXT.add(total, entry.payment_applied)
    return total


__all__ = [
    "DebtPortfolioSummary",
    "balance_timeline",
    "debt_balance_timelines",
    "payoff_order",
    "payoff_periods",
    "summarize_debts",
    "total_paid",
]
