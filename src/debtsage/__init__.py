"""DebtSage debt payoff planning package."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .models import Debt, LedgerEntry, PayoffStatus, Policy, SimulationResult
from .services.comparison import PolicyComparison, compare
from .services.debts import AmortizationSimulator, InvalidInput, simulate

__all__ = [
    "AmortizationSimulator",
    "BaseConfig",
    "Debt",
    "DevConfig",
    "InvalidInput",
    "LedgerEntry",
    "PayoffStatus",
    "Policy",
    "PolicyComparison",
    "SimulationResult",
    "compare",
    "simulate",
]
