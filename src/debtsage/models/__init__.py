"""Domain record exports."""

from .debt import Debt, MoneyLike, to_money
from .payoff import LedgerEntry, PayoffStatus, Policy, SimulationResult

__all__ = [
    "Debt",
    "MoneyLike",
    "to_money",
    "LedgerEntry",
    "PayoffStatus",
    "Policy",
    "SimulationResult",
]
