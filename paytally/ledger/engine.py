"""Ledger: applies transaction records to client accounts in arrival order.

State:
  accounts  client_id -> Account, created lazily by the first deposit.
  history   tx_id -> Deposit | Withdrawal, the only records a later
            dispute, resolve or chargeback can reference.

Dispute lifecycle: dispute (hold) -> resolve (release) | chargeback (forfeit
and lock). Amounts always come from the referenced history record.

A dispute naming an unknown tx_id is ignored: it is treated as a client-side
mistake and must not stop the stream. A resolve or chargeback naming an
unknown tx_id is an error, the dispute should already have been recorded.

Ledger is @final but NOT a dataclass, it holds mutable internal state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import final

from paytally.core.errors import FundsError, LedgerLookupError, LookupErrorReason, missing_reference
from paytally.core.result import Err, Ok
from paytally.ledger.account import Account, AccountSnapshot
from paytally.ledger.transactions import (
    AnyTransaction,
    ApplyOutcome,
    Chargeback,
    Deposit,
    Dispute,
    FundsMovement,
    Resolve,
    Withdrawal,
)

logger = logging.getLogger(__name__)

type ApplyResult = Ok[ApplyOutcome] | Err[FundsError | LedgerLookupError]


@final
class Ledger:
    """Transaction-application state machine over in-memory account and history maps.

    Both maps grow with the input and are never evicted; the ledger is meant
    for run-to-completion batches.
    """

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._history: dict[int, FundsMovement] = {}
        self._applied = 0

    def apply(self, record: AnyTransaction) -> ApplyResult:
        """Apply one record. On Err no balance or history entry has changed."""
        match record:
            case Deposit():
                result = self._deposit(record)
            case Withdrawal():
                result = self._withdraw(record)
            case Dispute():
                result = self._dispute(record)
            case Resolve():
                result = self._resolve(record)
            case Chargeback():
                result = self._chargeback(record)
            case _:
                raise TypeError(f"Not a transaction record: {type(record).__name__}")

        match result:
            case Ok(ApplyOutcome.APPLIED):
                self._applied += 1
            case Ok(ApplyOutcome.IGNORED):
                logger.debug(
                    "Ignored %s for client %d tx %d",
                    record.kind.value, record.client_id, record.tx_id,
                )
            case Err(error):
                logger.warning(
                    "Rejected %s for client %d tx %d: %s",
                    record.kind.value, record.client_id, record.tx_id, error.message,
                )
        return result

    # ------------------------------------------------------------------
    # Per-kind transitions
    # ------------------------------------------------------------------

    def _deposit(self, record: Deposit) -> ApplyResult:
        account = self._accounts.get(record.client_id)
        if account is None:
            account = Account(record.client_id)
            self._accounts[record.client_id] = account
        match account.deposit(record.amount):
            case Err() as err:
                return err
        self._history[record.tx_id] = record
        return Ok(ApplyOutcome.APPLIED)

    def _withdraw(self, record: Withdrawal) -> ApplyResult:
        match self.get_account(record.client_id):
            case Err() as err:
                return err
            case Ok(account):
                pass
        match account.deposit(-record.amount):
            case Err() as err:
                return err
        self._history[record.tx_id] = record
        return Ok(ApplyOutcome.APPLIED)

    def _dispute(self, record: Dispute) -> ApplyResult:
        referenced = self._history.get(record.tx_id)
        if referenced is None:
            return Ok(ApplyOutcome.IGNORED)
        if not isinstance(referenced, Deposit):
            # only deposits are disputable
            return Ok(ApplyOutcome.IGNORED)
        amount = referenced.amount
        return self._on_account(record.client_id, lambda a: a.hold(amount))

    def _resolve(self, record: Resolve) -> ApplyResult:
        match self._referenced_amount(record.tx_id):
            case Err() as err:
                return err
            case Ok((amount, is_deposit)):
                pass
        if not is_deposit:
            return Ok(ApplyOutcome.IGNORED)
        return self._on_account(record.client_id, lambda a: a.hold(-amount))

    def _chargeback(self, record: Chargeback) -> ApplyResult:
        match self._referenced_amount(record.tx_id):
            case Err() as err:
                return err
            case Ok((amount, is_deposit)):
                pass
        if not is_deposit:
            return Ok(ApplyOutcome.IGNORED)
        return self._on_account(record.client_id, lambda a: a.chargeback(amount))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _on_account(
        self, client_id: int, op: Callable[[Account], Ok[None] | Err[FundsError]],
    ) -> ApplyResult:
        match self.get_account(client_id):
            case Err() as err:
                return err
            case Ok(account):
                return op(account).map(lambda _: ApplyOutcome.APPLIED)

    def _referenced_amount(
        self, tx_id: int,
    ) -> Ok[tuple[Decimal, bool]] | Err[LedgerLookupError]:
        """(amount, is_deposit) of the history record behind tx_id."""
        match self.get_transaction(tx_id):
            case Err() as err:
                return err
            case Ok(Deposit(amount=amount)):
                return Ok((amount, True))
            case Ok(Withdrawal(amount=amount)):
                return Ok((amount, False))
            case _:
                # history is typed FundsMovement, so only a corrupted entry lands here
                return Err(missing_reference(
                    LookupErrorReason.MISSING_AMOUNT, tx_id,
                    "ledger.engine.Ledger._referenced_amount",
                ))

    def get_account(self, client_id: int) -> Ok[Account] | Err[LedgerLookupError]:
        account = self._accounts.get(client_id)
        if account is None:
            return Err(missing_reference(
                LookupErrorReason.MISSING_CLIENT, client_id, "ledger.engine.Ledger.get_account",
            ))
        return Ok(account)

    def get_transaction(self, tx_id: int) -> Ok[FundsMovement] | Err[LedgerLookupError]:
        record = self._history.get(tx_id)
        if record is None:
            return Err(missing_reference(
                LookupErrorReason.MISSING_TRANSACTION, tx_id,
                "ledger.engine.Ledger.get_transaction",
            ))
        return Ok(record)

    # ------------------------------------------------------------------
    # Read paths
    # ------------------------------------------------------------------

    def finalize(self) -> Mapping[int, Account]:
        """Read-only view of every account, for the result sink."""
        return MappingProxyType(self._accounts)

    def snapshots(self) -> tuple[AccountSnapshot, ...]:
        """Snapshots of all accounts, sorted by client id."""
        return tuple(self._accounts[cid].snapshot() for cid in sorted(self._accounts))

    def history(self) -> Mapping[int, FundsMovement]:
        return MappingProxyType(self._history)

    def transaction_count(self) -> int:
        """Number of records that changed state (IGNORED and rejected ones excluded)."""
        return self._applied
