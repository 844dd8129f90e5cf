"""Gateway parser: raw row mapping to a transaction record.

parse_record is the single entry point for inbound transaction data.
It is total: every input yields Ok or Err, nothing raises.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from paytally.core.errors import FieldViolation, ValidationError
from paytally.core.result import Err, Ok
from paytally.ledger.transactions import AnyTransaction, TransactionKind, create_record


def _extract_str(raw: Mapping[str, object], key: str) -> str | None:
    val = raw.get(key)
    if isinstance(val, str):
        val = val.strip()
        return val or None
    return None


def _extract_int(raw: Mapping[str, object], key: str) -> int | None:
    val = raw.get(key)
    if isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val
    if isinstance(val, str):
        try:
            return int(val.strip())
        except ValueError:
            return None
    return None


def _extract_decimal(raw: Mapping[str, object], key: str) -> Decimal | None:
    val = raw.get(key)
    if isinstance(val, Decimal):
        return val
    if isinstance(val, int) and not isinstance(val, bool):
        return Decimal(val)
    if isinstance(val, str):
        try:
            return Decimal(val.strip())
        except InvalidOperation:
            return None
    return None


def _is_blank(val: object) -> bool:
    return val is None or (isinstance(val, str) and not val.strip())


def parse_record(raw: Mapping[str, object]) -> Ok[AnyTransaction] | Err[ValidationError]:
    """Parse one row with keys type, client, tx and (optionally) amount."""
    violations: list[FieldViolation] = []

    kind: TransactionKind | None = None
    kind_raw = _extract_str(raw, "type")
    if kind_raw is None:
        violations.append(FieldViolation(
            path="type", constraint="required", actual_value=repr(raw.get("type")),
        ))
    else:
        try:
            kind = TransactionKind(kind_raw.lower())
        except ValueError:
            violations.append(FieldViolation(
                path="type",
                constraint=f"must be one of {[k.value for k in TransactionKind]}",
                actual_value=repr(kind_raw),
            ))

    client_id = _extract_int(raw, "client")
    if client_id is None:
        violations.append(FieldViolation(
            path="client", constraint="required integer", actual_value=repr(raw.get("client")),
        ))

    tx_id = _extract_int(raw, "tx")
    if tx_id is None:
        violations.append(FieldViolation(
            path="tx", constraint="required integer", actual_value=repr(raw.get("tx")),
        ))

    amount: Decimal | None = None
    amount_raw = raw.get("amount")
    if not _is_blank(amount_raw):
        amount = _extract_decimal(raw, "amount")
        if amount is None:
            violations.append(FieldViolation(
                path="amount", constraint="must be numeric", actual_value=repr(amount_raw),
            ))

    if violations:
        return Err(ValidationError(
            message=f"parse_record failed: {len(violations)} field error(s)",
            code="INVALID_RECORD",
            source="gateway.parser.parse_record",
            fields=tuple(violations),
        ))

    assert kind is not None
    assert client_id is not None
    assert tx_id is not None
    return create_record(kind, client_id, tx_id, amount)
