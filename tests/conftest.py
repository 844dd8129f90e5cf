"""Hypothesis strategies and pytest fixtures for paytally.

Strategies build valid transaction records; record_streams() mixes all five
kinds over a small id space so that disputes, resolves and chargebacks
frequently hit real history entries.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import HealthCheck, settings
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from paytally.ledger.engine import Ledger
from paytally.ledger.transactions import (
    AnyTransaction,
    Chargeback,
    Deposit,
    Dispute,
    Resolve,
    Withdrawal,
)

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# PRIMITIVE STRATEGIES
# ===================================================================


def amounts(
    min_value: str = "0",
    max_value: str = "1000000",
    places: int = 4,
) -> SearchStrategy[Decimal]:
    """Non-negative Decimal amounts at display precision."""
    return st.decimals(
        min_value=Decimal(min_value),
        max_value=Decimal(max_value),
        places=places,
        allow_nan=False,
        allow_infinity=False,
    )


def client_ids(max_value: int = 3) -> SearchStrategy[int]:
    return st.integers(min_value=1, max_value=max_value)


def tx_ids(max_value: int = 20) -> SearchStrategy[int]:
    return st.integers(min_value=1, max_value=max_value)


# ===================================================================
# RECORD STRATEGIES
# ===================================================================


@st.composite
def deposits(draw: st.DrawFn) -> Deposit:
    return Deposit(client_id=draw(client_ids()), tx_id=draw(tx_ids()), amount=draw(amounts()))


@st.composite
def withdrawals(draw: st.DrawFn) -> Withdrawal:
    return Withdrawal(
        client_id=draw(client_ids()), tx_id=draw(tx_ids()), amount=draw(amounts()),
    )


@st.composite
def dispute_lifecycle_records(draw: st.DrawFn) -> AnyTransaction:
    """Exactly one of Dispute | Resolve | Chargeback."""
    cls = draw(st.sampled_from([Dispute, Resolve, Chargeback]))
    return cls(client_id=draw(client_ids()), tx_id=draw(tx_ids()))


def any_records() -> SearchStrategy[AnyTransaction]:
    return st.one_of(deposits(), withdrawals(), dispute_lifecycle_records())


def record_streams(max_size: int = 40) -> SearchStrategy[list[AnyTransaction]]:
    return st.lists(any_records(), min_size=1, max_size=max_size)


# ===================================================================
# FIXTURES
# ===================================================================


@pytest.fixture
def ledger() -> Ledger:
    return Ledger()


SAMPLE_CSV = (
    "type, client, tx, amount\n"
    "deposit, 1, 1, 10.0\n"
    "deposit, 1, 2, 5.0\n"
    "withdrawal, 1, 3, 1.0\n"
    "dispute, 1, 2,\n"
    "resolve, 1, 2,\n"
    "withdrawal, 1, 3, 1.0\n"
    "dispute, 1, 2,\n"
    "chargeback, 1, 2,\n"
    "deposit, 2, 4, 10.0\n"
    "withdrawal, 2, 5, 5.0\n"
    "deposit, 2, 6, 5.0\n"
    "dispute, 2, 6,\n"
    "dispute, 1, 999,\n"
)


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV
