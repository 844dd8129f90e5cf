"""Client account balances and the three funds-movement operations.

Account is @final but NOT a dataclass, it holds mutable balance state.
Only total() derives from the stored fields: total == available + held.
Every operation validates before mutating, so an Err leaves the account
exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import final

from paytally.core.errors import (
    FundsError,
    FundsErrorReason,
    insufficient_funds,
)
from paytally.core.money import ZERO, add, sub
from paytally.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True)
class AccountSnapshot:
    """Point-in-time view of one account, handed to the result sink."""

    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


@final
class Account:
    """One client's available/held balances and lock marker."""

    __slots__ = ("_available", "_client_id", "_held", "_locked")

    def __init__(
        self,
        client_id: int,
        available: Decimal = ZERO,
        held: Decimal = ZERO,
        locked: bool = False,
    ) -> None:
        self._client_id = client_id
        self._available = available
        self._held = held
        self._locked = locked

    @property
    def client_id(self) -> int:
        return self._client_id

    @property
    def available(self) -> Decimal:
        return self._available

    @property
    def held(self) -> Decimal:
        return self._held

    @property
    def locked(self) -> bool:
        """True once a chargeback has hit this account. Does not block later operations."""
        return self._locked

    def total(self) -> Decimal:
        return add(self._available, self._held)

    def deposit(self, amount: Decimal) -> Ok[None] | Err[FundsError]:
        """Credit available funds. A negative amount is a withdrawal of |amount|."""
        if amount < 0 and -amount > self._available:
            return Err(insufficient_funds(
                self._client_id, -amount, self._available,
                "ledger.account.Account.deposit",
            ))
        self._available = add(self._available, amount)
        return Ok(None)

    def hold(self, amount: Decimal) -> Ok[None] | Err[FundsError]:
        """Move amount from available to held. A negative amount releases |amount|."""
        if amount < 0:
            if -amount > self._held:
                return Err(insufficient_funds(
                    self._client_id, -amount, self._held,
                    "ledger.account.Account.hold",
                ))
        elif amount > self._available:
            return Err(insufficient_funds(
                self._client_id, amount, self._available,
                "ledger.account.Account.hold",
            ))
        self._held = add(self._held, amount)
        self._available = sub(self._available, amount)
        return Ok(None)

    def chargeback(self, amount: Decimal) -> Ok[None] | Err[FundsError]:
        """Remove amount from held funds and lock the account."""
        if amount < 0:
            return Err(FundsError(
                message=f"Chargeback amount must not be negative, got {amount}",
                code="INVALID_SIGN",
                source="ledger.account.Account.chargeback",
                reason=FundsErrorReason.INVALID_SIGN,
                client_id=self._client_id,
                requested=str(amount),
                limit=str(self._held),
            ))
        if amount > self._held:
            return Err(insufficient_funds(
                self._client_id, amount, self._held,
                "ledger.account.Account.chargeback",
            ))
        self._held = sub(self._held, amount)
        self._locked = True
        return Ok(None)

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client_id=self._client_id,
            available=self._available,
            held=self._held,
            total=self.total(),
            locked=self._locked,
        )

    def __repr__(self) -> str:
        return (
            f"Account(client_id={self._client_id}, available={self._available}, "
            f"held={self._held}, locked={self._locked})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return (
            self._client_id == other._client_id
            and self._available == other._available
            and self._held == other._held
            and self._locked == other._locked
        )

    __hash__ = None  # type: ignore[assignment]
