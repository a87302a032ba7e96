"""Snowball vs. avalanche comparison."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from ..logging_config import get_logger
from ..models.debt import Debt, MoneyLike
from ..models.payoff import Policy, SimulationResult
from .debts import MONEY_CONTEXT, simulate, validate_inputs

logger = get_logger("services.comparison")


@dataclass(frozen=True, slots=True)
class PolicyComparison:
    """Both policy results plus the differences between them."""

    snowball: SimulationResult
    avalanche: SimulationResult
    months_saved: int
    interest_saved: Decimal
    cheaper_policy: Policy | None

    @property
    def is_tie(self) -> bool:
        """True when both policies cost exactly the same interest."""
        return self.cheaper_policy is None

    @property
    def faster_policy(self) -> Policy | None:
        if self.snowball.months < self.avalanche.months:
            return Policy.SNOWBALL
        if self.avalanche.months < self.snowball.months:
            return Policy.AVALANCHE
        return None

    def result_for(self, policy: Policy) -> SimulationResult:
        return self.snowball if policy is Policy.SNOWBALL else self.avalanche


def _cheaper(snowball: SimulationResult, avalanche: SimulationResult) -> Policy | None:
    if snowball.total_interest_paid < avalanche.total_interest_paid:
        return Policy.SNOWBALL
    if avalanche.total_interest_paid < snowball.total_interest_paid:
        return Policy.AVALANCHE
    return None


def compare(
    debts: Iterable[Debt], extra_payment: MoneyLike = 0, *, parallel: bool = False
) -> PolicyComparison:
    """Simulate both policies on the same input and summarize the difference.

    With ``parallel=True`` the two runs execute on a two-worker thread pool.
    The runs share no state, so the output matches the sequential path.
    """

    # Validate once up front so bad input fails before either run starts.
    debt_list, extra = validate_inputs(debts, extra_payment)

    if parallel:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="debtsage-policy") as pool:
            snowball_future = pool.submit(simulate, debt_list, extra, Policy.SNOWBALL)
            avalanche_future = pool.submit(simulate, debt_list, extra, Policy.AVALANCHE)
            snowball = snowball_future.result()
            avalanche = avalanche_future.result()
    else:
        snowball = simulate(debt_list, extra, Policy.SNOWBALL)
        avalanche = simulate(debt_list, extra, Policy.AVALANCHE)

    comparison = PolicyComparison(
        snowball=snowball,
        avalanche=avalanche,
        months_saved=abs(snowball.months - avalanche.months),
        interest_saved=MONEY_CONTEXT.abs(
            MONEY_CONTEXT.subtract(snowball.total_interest_paid, avalanche.total_interest_paid)
        ),
        cheaper_policy=_cheaper(snowball, avalanche),
    )
    logger.info(
        "Payoff policies compared",
        extra={
            "debt_count": len(debt_list),
            "cheaper_policy": comparison.cheaper_policy.value if comparison.cheaper_policy else "tie",
            "months_saved": comparison.months_saved,
            "interest_saved": str(comparison.interest_saved),
        },
    )
    return comparison


__all__ = ["PolicyComparison", "compare"]
