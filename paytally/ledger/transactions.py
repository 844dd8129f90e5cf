"""Transaction record types: one frozen variant per transaction kind.

Deposit and Withdrawal carry an amount; Dispute, Resolve and Chargeback do
not, they reuse the tx_id of the record they act on. An amount can therefore
never be present where it must be absent, that is enforced by the types.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar, final

from paytally.core.errors import FieldViolation, ValidationError
from paytally.core.money import parse_amount
from paytally.core.result import Err, Ok

MAX_CLIENT_ID = 2**16 - 1
MAX_TX_ID = 2**32 - 1


class TransactionKind(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class ApplyOutcome(Enum):
    APPLIED = "APPLIED"
    IGNORED = "IGNORED"


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """Fields shared by every variant. NOT @final, has subclasses.

    Records order by tx_id only, for deterministic iteration in tests and
    reports. Equality compares every field and the variant.
    """

    kind: ClassVar[TransactionKind]

    client_id: int
    tx_id: int

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TransactionRecord):
            return NotImplemented
        return self.tx_id < other.tx_id

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, TransactionRecord):
            return NotImplemented
        return self.tx_id > other.tx_id


def _check_amount(cls_name: str, amount: Decimal) -> None:
    match parse_amount(amount):
        case Err(e):
            raise TypeError(f"{cls_name}.amount: {e}")


@final
@dataclass(frozen=True, slots=True)
class Deposit(TransactionRecord):
    kind: ClassVar[TransactionKind] = TransactionKind.DEPOSIT

    amount: Decimal

    def __post_init__(self) -> None:
        _check_amount("Deposit", self.amount)


@final
@dataclass(frozen=True, slots=True)
class Withdrawal(TransactionRecord):
    kind: ClassVar[TransactionKind] = TransactionKind.WITHDRAWAL

    amount: Decimal

    def __post_init__(self) -> None:
        _check_amount("Withdrawal", self.amount)


@final
@dataclass(frozen=True, slots=True)
class Dispute(TransactionRecord):
    """Hold the funds of an earlier deposit."""

    kind: ClassVar[TransactionKind] = TransactionKind.DISPUTE


@final
@dataclass(frozen=True, slots=True)
class Resolve(TransactionRecord):
    """Release funds held by an earlier dispute."""

    kind: ClassVar[TransactionKind] = TransactionKind.RESOLVE


@final
@dataclass(frozen=True, slots=True)
class Chargeback(TransactionRecord):
    """Forfeit funds held by an earlier dispute and lock the account."""

    kind: ClassVar[TransactionKind] = TransactionKind.CHARGEBACK


type AnyTransaction = Deposit | Withdrawal | Dispute | Resolve | Chargeback

# Only these kinds are kept in ledger history.
type FundsMovement = Deposit | Withdrawal

_AMOUNT_KINDS = frozenset({TransactionKind.DEPOSIT, TransactionKind.WITHDRAWAL})


def create_record(
    kind: TransactionKind,
    client_id: int,
    tx_id: int,
    amount: Decimal | None,
) -> Ok[AnyTransaction] | Err[ValidationError]:
    """Build the variant for kind, checking ids and amount presence."""
    violations: list[FieldViolation] = []
    if not 0 <= client_id <= MAX_CLIENT_ID:
        violations.append(FieldViolation(
            path="client", constraint=f"must be in 0..{MAX_CLIENT_ID}",
            actual_value=repr(client_id),
        ))
    if not 0 <= tx_id <= MAX_TX_ID:
        violations.append(FieldViolation(
            path="tx", constraint=f"must be in 0..{MAX_TX_ID}", actual_value=repr(tx_id),
        ))
    if kind in _AMOUNT_KINDS:
        if amount is None:
            violations.append(FieldViolation(
                path="amount", constraint=f"required for {kind.value}", actual_value="None",
            ))
        else:
            match parse_amount(amount):
                case Err(e):
                    violations.append(FieldViolation(
                        path="amount", constraint=e, actual_value=repr(str(amount)),
                    ))
    elif amount is not None:
        violations.append(FieldViolation(
            path="amount", constraint=f"must be absent for {kind.value}",
            actual_value=repr(str(amount)),
        ))

    if violations:
        return Err(ValidationError(
            message=f"create_record failed: {len(violations)} field error(s)",
            code="INVALID_RECORD",
            source="ledger.transactions.create_record",
            fields=tuple(violations),
        ))

    match kind:
        case TransactionKind.DEPOSIT:
            assert amount is not None
            return Ok(Deposit(client_id=client_id, tx_id=tx_id, amount=amount))
        case TransactionKind.WITHDRAWAL:
            assert amount is not None
            return Ok(Withdrawal(client_id=client_id, tx_id=tx_id, amount=amount))
        case TransactionKind.DISPUTE:
            return Ok(Dispute(client_id=client_id, tx_id=tx_id))
        case TransactionKind.RESOLVE:
            return Ok(Resolve(client_id=client_id, tx_id=tx_id))
        case TransactionKind.CHARGEBACK:
            return Ok(Chargeback(client_id=client_id, tx_id=tx_id))
