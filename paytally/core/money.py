"""Decimal context and refined amount types.

All balance arithmetic runs under PAYTALLY_DECIMAL_CONTEXT: prec=28,
ROUND_HALF_EVEN, traps for InvalidOperation/DivisionByZero/Overflow.
Amounts are Decimal end to end so that total == available + held holds
exactly, with no binary floating-point drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN as _ROUND_HALF_EVEN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import final

from paytally.core.result import Err, Ok

PAYTALLY_DECIMAL_CONTEXT = Context(
    prec=28,
    rounding=_ROUND_HALF_EVEN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

DISPLAY_PLACES = 4

# Upper bound (exclusive) on a single deposit or withdrawal. Far below Emax,
# so no run of bounded records can overflow a balance.
MAX_AMOUNT = Decimal(10) ** 18

ZERO = Decimal(0)


@final
@dataclass(frozen=True, slots=True)
class NonNegativeDecimal:
    """Finite Decimal constrained to be >= 0."""

    value: Decimal

    def __post_init__(self) -> None:
        if (
            not isinstance(self.value, Decimal)
            or not self.value.is_finite()
            or self.value < 0
        ):
            raise TypeError(f"NonNegativeDecimal requires finite Decimal >= 0, got {self.value!r}")

    @staticmethod
    def parse(raw: Decimal) -> Ok[NonNegativeDecimal] | Err[str]:
        if not isinstance(raw, Decimal):
            return Err(f"NonNegativeDecimal requires Decimal, got {type(raw).__name__}")
        if not raw.is_finite():
            return Err(f"NonNegativeDecimal requires a finite value, got {raw}")
        if raw < 0:
            return Err(f"NonNegativeDecimal requires >= 0, got {raw}")
        return Ok(NonNegativeDecimal(value=raw))


def parse_amount(raw: Decimal) -> Ok[NonNegativeDecimal] | Err[str]:
    """NonNegativeDecimal.parse, also rejecting amounts >= MAX_AMOUNT."""
    match NonNegativeDecimal.parse(raw):
        case Err() as err:
            return err
        case Ok(amount) if amount.value >= MAX_AMOUNT:
            return Err(f"amount must be < {MAX_AMOUNT:E}, got {raw}")
        case ok:
            return ok


def add(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(PAYTALLY_DECIMAL_CONTEXT):
        return a + b


def sub(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(PAYTALLY_DECIMAL_CONTEXT):
        return a - b


def to_display(amount: Decimal, places: int = DISPLAY_PLACES) -> str:
    """Render amount with exactly `places` decimals, e.g. 1.5 -> '1.5000'."""
    quantizer = Decimal(10) ** -places
    with localcontext(PAYTALLY_DECIMAL_CONTEXT) as ctx:
        # widen precision so quantize never runs out of digits
        ctx.prec = max(ctx.prec, amount.adjusted() + 1 + places)
        rounded = amount.quantize(quantizer)
    # quantize keeps the sign of negative zero
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:f}"
