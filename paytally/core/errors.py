"""Error values for paytally. Domain functions return these, never raise them.

Every error is a frozen dataclass that can be pattern-matched and logged.
Base class PaytallyError; @final subclasses per failure family.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import final


@dataclass(frozen=True, slots=True)
class PaytallyError:
    """Base error value. NOT @final, has subclasses."""

    message: str
    code: str
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> PaytallyError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")


class FundsErrorReason(Enum):
    INSUFFICIENT = "INSUFFICIENT"
    INVALID_SIGN = "INVALID_SIGN"


class LookupErrorReason(Enum):
    MISSING_CLIENT = "MISSING_CLIENT"
    MISSING_TRANSACTION = "MISSING_TRANSACTION"
    MISSING_AMOUNT = "MISSING_AMOUNT"


@final
@dataclass(frozen=True, slots=True)
class FundsError(PaytallyError):
    """A balance operation would move funds the account does not have."""

    reason: FundsErrorReason
    client_id: int
    requested: str
    limit: str  # the available or held balance the request was checked against


@final
@dataclass(frozen=True, slots=True)
class LedgerLookupError(PaytallyError):
    """A record referenced a client or transaction the ledger does not know."""

    reason: LookupErrorReason
    key: int


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single field validation failure."""

    path: str  # e.g. "amount"
    constraint: str  # e.g. "must be >= 0"
    actual_value: str  # e.g. "'-3'"


@final
@dataclass(frozen=True, slots=True)
class ValidationError(PaytallyError):
    """One or more fields of an inbound row failed validation."""

    fields: tuple[FieldViolation, ...]


@final
@dataclass(frozen=True, slots=True)
class ConfigError(PaytallyError):
    """Runtime configuration could not be loaded."""

    setting: str


def insufficient_funds(
    client_id: int, requested: object, limit: object, source: str,
) -> FundsError:
    return FundsError(
        message=f"Insufficient funds for client {client_id}: requested {requested}, limit {limit}",
        code="INSUFFICIENT_FUNDS",
        source=source,
        reason=FundsErrorReason.INSUFFICIENT,
        client_id=client_id,
        requested=str(requested),
        limit=str(limit),
    )


def missing_reference(reason: LookupErrorReason, key: int, source: str) -> LedgerLookupError:
    """Build a LedgerLookupError for the given missing key."""
    what = {
        LookupErrorReason.MISSING_CLIENT: "client",
        LookupErrorReason.MISSING_TRANSACTION: "transaction",
        LookupErrorReason.MISSING_AMOUNT: "transaction amount",
    }[reason]
    return LedgerLookupError(
        message=f"Missing {what} for id {key}",
        code=reason.value,
        source=source,
        reason=reason,
        key=key,
    )
