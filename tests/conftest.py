"""Pytest configuration and shared fixtures for DebtSage tests.

Provides debt factories, a quiet per-test environment, and helpers for
comparing exact decimal amounts.
"""

from __future__ import annotations

import itertools
import logging
from decimal import Decimal

import pytest

from debtsage.logging_config import ROOT_LOGGER_NAME
from debtsage.models import Debt


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point data/log output at a temp dir and keep console logging quiet."""

    monkeypatch.setenv("DEBTSAGE_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.setenv("DEBTSAGE_DEV_MODE", "false")
    monkeypatch.delenv("DEBTSAGE_DEFAULT_EXTRA_PAYMENT", raising=False)
    yield
    # Handlers installed by setup_logging hold files/streams owned by this test.
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def debt_factory():
    """Factory for creating debts with sensible defaults and unique ids.

    Returns:
        Callable: Function that builds Debt instances
    """

    counter = itertools.count(1)

    def _create_debt(
        balance="1000",
        annual_rate_percent="12",
        minimum_payment="50",
        id=None,
        name: str | None = None,
    ) -> Debt:
        debt_id = id if id is not None else f"debt-{next(counter)}"
        return Debt(
            id=debt_id,
            name=name or str(debt_id),
            balance=balance,
            annual_rate_percent=annual_rate_percent,
            minimum_payment=minimum_payment,
        )

    return _create_debt


@pytest.fixture
def mixed_debts(debt_factory):
    """Three debts whose snowball and avalanche orders differ.

    Snowball order: small, medium, large. Avalanche order: large, small, medium.
    """

    return [
        debt_factory(id="large", balance="5000", annual_rate_percent="22", minimum_payment="100"),
        debt_factory(id="small", balance="500", annual_rate_percent="18", minimum_payment="25"),
        debt_factory(id="medium", balance="2000", annual_rate_percent="9", minimum_payment="60"),
    ]


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_decimal_equal(actual: Decimal, expected, tolerance: str = "0"):
    """Assert two amounts match, exactly by default.

    Args:
        actual: Actual value
        expected: Expected value (anything Decimal accepts as a string)
        tolerance: Maximum allowed absolute difference

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    expected_dec = Decimal(str(expected))
    diff = abs(Decimal(actual) - expected_dec)
    assert diff <= Decimal(tolerance), f"Expected {expected_dec}, got {actual} (diff: {diff})"
