"""Debt records supplied to the payoff engine."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Hashable, Union

MoneyLike = Union[Decimal, int, float, str]


def to_money(value: MoneyLike) -> Decimal:
    """Coerce *value* to ``Decimal`` without picking up binary float noise."""

    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a monetary value")
    if isinstance(value, float):
        # str() keeps 0.1 as 0.1 instead of 0.1000000000000000055511151231257827
        return Decimal(str(value))
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise TypeError(f"Cannot interpret {value!r} as a monetary value") from exc


@dataclass(frozen=True, slots=True)
class Debt:
    """A liability as the surrounding application stores it.

    Balances, rates and minimums are held as ``Decimal``. Validation of the
    values happens at simulation entry so records coming from storage can be
    constructed and inspected even when they would be rejected by the engine.
    """

    id: Hashable
    name: str
    balance: Decimal
    annual_rate_percent: Decimal
    minimum_payment: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "balance", to_money(self.balance))
        object.__setattr__(self, "annual_rate_percent", to_money(self.annual_rate_percent))
        object.__setattr__(self, "minimum_payment", to_money(self.minimum_payment))
