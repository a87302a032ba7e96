"""Debt payoff simulation (snowball and avalanche)."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Context, Decimal
from typing import Iterable, Iterator

from ..logging_config import get_logger
from ..models.debt import Debt, MoneyLike, to_money
from ..models.payoff import LedgerEntry, PayoffStatus, Policy, SimulationResult

logger = get_logger("services.debts")

# 30 years of monthly periods.
MONTH_CAP = 360

# Arithmetic goes through an explicit context so results do not depend on the
# calling thread's decimal settings.
MONEY_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)

_ZERO = Decimal(0)


class InvalidInput(ValueError):
    """Raised when debts or the extra payment cannot be simulated."""


def coerce_policy(value: Policy | str) -> Policy:
    """Return the :class:`Policy` named by *value*."""

    if isinstance(value, Policy):
        return value
    try:
        return Policy(str(value).strip().lower())
    except ValueError as exc:
        raise InvalidInput(f"Invalid debt payoff strategy: {value!r}") from exc


def _check_finite(debt: Debt) -> None:
    for field_name in ("balance", "annual_rate_percent", "minimum_payment"):
        if not getattr(debt, field_name).is_finite():
            raise InvalidInput(f"Debt {debt.id!r}: {field_name} must be a finite number")


def validate_inputs(debts: Iterable[Debt], extra_payment: MoneyLike) -> tuple[list[Debt], Decimal]:
    """Reject inputs the simulator cannot handle.

    Returns the debts as a list (the caller's iterable is consumed once) and
    the extra payment as ``Decimal``.
    """

    try:
        extra = to_money(extra_payment)
    except TypeError as exc:
        raise InvalidInput(str(exc)) from exc
    if not extra.is_finite() or extra < 0:
        raise InvalidInput("Extra payment must be a non-negative amount")

    checked: list[Debt] = []
    seen_ids: set = set()
    for debt in debts:
        _check_finite(debt)
        if debt.balance < 0:
            raise InvalidInput(f"Debt {debt.id!r}: balance cannot be negative")
        if debt.annual_rate_percent < 0:
            raise InvalidInput(f"Debt {debt.id!r}: interest rate cannot be negative")
        if debt.minimum_payment <= 0:
            raise InvalidInput(f"Debt {debt.id!r}: minimum payment must be greater than zero")
        if debt.id in seen_ids:
            raise InvalidInput(f"Duplicate debt id {debt.id!r}")
        seen_ids.add(debt.id)
        checked.append(debt)
    return checked, extra


def stalled_debts(debts: Iterable[Debt]) -> list[Debt]:
    """Debts whose minimum payment does not exceed the first month's interest.

    Without extra money these balances never shrink.
    """

    ctx = MONEY_CONTEXT
    stalled = []
    for debt in debts:
        if debt.balance <= 0:
            continue
        interest = ctx.multiply(debt.balance, _monthly_rate(debt))
        if debt.minimum_payment <= interest:
            stalled.append(debt)
    return stalled


def _monthly_rate(debt: Debt) -> Decimal:
    ctx = MONEY_CONTEXT
    return ctx.divide(ctx.divide(debt.annual_rate_percent, 12), 100)


class AmortizationSimulator:
    """Runs one payoff policy over a set of debts.

    The priority order is fixed once from the initial balances/rates. Each
    period walks the debts in that order, accrues interest, applies the
    minimum payment and hands the whole extra payment to the first debt that
    still carries a balance. The run stops when every balance is zero or the
    month cap is reached.
    """

    def __init__(
        self,
        debts: Iterable[Debt],
        *,
        extra_payment: MoneyLike = 0,
        policy: Policy | str = Policy.SNOWBALL,
        month_cap: int = MONTH_CAP,
    ) -> None:
        self.debts, self.extra_payment = validate_inputs(debts, extra_payment)
        self.policy = coerce_policy(policy)
        if month_cap < 1:
            raise InvalidInput("Month cap must be at least 1")
        self.month_cap = month_cap
        self.order = self.policy.priority_order(self.debts)
        self._rates = [_monthly_rate(debt) for debt in self.order]
        self._reset()

    def _reset(self) -> None:
        # Working balances, aligned with self.order. Never shared with callers.
        self.balances: list[Decimal] = [debt.balance for debt in self.order]
        self.months = 0
        self.total_interest_paid = _ZERO

    def iter_ledger(self) -> Iterator[LedgerEntry]:
        """Simulate period by period, yielding ledger rows as they are produced.

        Each call restarts from the initial balances.
        """

        ctx = MONEY_CONTEXT
        self._reset()
        while any(balance > 0 for balance in self.balances) and self.months < self.month_cap:
            self.months += 1
            extra_available = self.extra_payment

            for index, debt in enumerate(self.order):
                balance = self.balances[index]
                if balance <= 0:
                    continue

                interest = ctx.multiply(balance, self._rates[index])
                self.total_interest_paid = ctx.add(self.total_interest_paid, interest)

                payment = debt.minimum_payment
                if extra_available > 0:
                    # First unpaid debt this period takes the whole extra amount.
                    payment = ctx.add(payment, extra_available)
                    extra_available = _ZERO

                principal = ctx.subtract(payment, interest)
                new_balance = ctx.subtract(balance, principal)
                if new_balance < 0:
                    new_balance = _ZERO
                self.balances[index] = new_balance

                yield LedgerEntry(
                    period=self.months,
                    debt_id=debt.id,
                    payment_applied=payment,
                    balance_after=new_balance,
                    interest=interest,
                )

    def run(self) -> SimulationResult:
        """Run the full simulation and collect the result."""

        stalled = tuple(debt.id for debt in stalled_debts(self.order))
        if stalled:
            logger.warning(
                "Minimum payment does not cover interest",
                extra={"policy": self.policy.value, "debt_ids": list(stalled)},
            )

        logger.debug(
            "Simulation started",
            extra={
                "policy": self.policy.value,
                "debt_count": len(self.order),
                "extra_payment": str(self.extra_payment),
            },
        )
        ledger = tuple(self.iter_ledger())

        starting = _ZERO
        for debt in self.order:
            starting = MONEY_CONTEXT.add(starting, debt.balance)
        remaining = _ZERO
        for balance in self.balances:
            remaining = MONEY_CONTEXT.add(remaining, balance)
        status = PayoffStatus.PAID_OFF if remaining == 0 else PayoffStatus.CAP_EXHAUSTED
        if status is PayoffStatus.CAP_EXHAUSTED:
            logger.warning(
                "Debts not paid off within month cap",
                extra={
                    "policy": self.policy.value,
                    "month_cap": self.month_cap,
                    "remaining_balance": str(remaining),
                },
            )

        result = SimulationResult(
            policy=self.policy,
            months=self.months,
            total_interest_paid=self.total_interest_paid,
            ledger=ledger,
            status=status,
            starting_balance=starting,
            remaining_balance=remaining,
            stalled_debt_ids=stalled,
        )
        logger.debug(
            "Simulation finished",
            extra={
                "policy": self.policy.value,
                "months": result.months,
                "status": status.value,
                "total_interest": str(result.total_interest_paid),
            },
        )
        return result


def simulate(
    debts: Iterable[Debt],
    extra_payment: MoneyLike = 0,
    policy: Policy | str = Policy.SNOWBALL,
) -> SimulationResult:
    """Simulate paying off ``debts`` under ``policy`` with a monthly ``extra_payment``."""

    return AmortizationSimulator(debts, extra_payment=extra_payment, policy=policy).run()


def snowball_schedule(*, debts: Iterable[Debt], surplus: MoneyLike = 0) -> SimulationResult:
    """Return payoff result prioritizing smallest balances first."""
    return simulate(debts, surplus, Policy.SNOWBALL)


def avalanche_schedule(*, debts: Iterable[Debt], surplus: MoneyLike = 0) -> SimulationResult:
    """Return payoff result prioritizing highest APR first."""
    return simulate(debts, surplus, Policy.AVALANCHE)


__all__ = [
    "MONTH_CAP",
    "AmortizationSimulator",
    "InvalidInput",
    "avalanche_schedule",
    "coerce_policy",
    "simulate",
    "snowball_schedule",
    "stalled_debts",
    "validate_inputs",
]
