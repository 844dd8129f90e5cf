"""Tests for paytally.core.money: decimal context, refined type, display."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given

from paytally.core.money import (
    MAX_AMOUNT,
    PAYTALLY_DECIMAL_CONTEXT,
    NonNegativeDecimal,
    add,
    parse_amount,
    sub,
    to_display,
)
from paytally.core.result import Err, Ok
from tests.conftest import amounts


class TestNonNegativeDecimal:
    def test_accepts_zero(self) -> None:
        assert NonNegativeDecimal(Decimal(0)).value == 0

    def test_rejects_negative(self) -> None:
        with pytest.raises(TypeError):
            NonNegativeDecimal(Decimal("-0.0001"))

    def test_rejects_nan(self) -> None:
        with pytest.raises(TypeError):
            NonNegativeDecimal(Decimal("NaN"))

    def test_parse(self) -> None:
        assert NonNegativeDecimal.parse(Decimal("1.5")) == Ok(NonNegativeDecimal(Decimal("1.5")))
        assert isinstance(NonNegativeDecimal.parse(Decimal("-1")), Err)
        assert isinstance(NonNegativeDecimal.parse(Decimal("Infinity")), Err)
        assert isinstance(NonNegativeDecimal.parse(1.5), Err)  # type: ignore[arg-type]


class TestParseAmount:
    def test_below_bound(self) -> None:
        just_below = MAX_AMOUNT - Decimal("0.0001")
        assert parse_amount(just_below) == Ok(NonNegativeDecimal(just_below))

    @pytest.mark.parametrize(
        "raw", [MAX_AMOUNT, Decimal("1000000000000000000000000"), Decimal("9e999999")],
    )
    def test_at_or_above_bound(self, raw: Decimal) -> None:
        match parse_amount(raw):
            case Err(message):
                assert "must be < 1E+18" in message
            case _:
                pytest.fail("Should reject oversized amount")

    def test_keeps_non_negative_checks(self) -> None:
        assert isinstance(parse_amount(Decimal("-1")), Err)
        assert isinstance(parse_amount(Decimal("sNaN")), Err)


class TestArithmetic:
    def test_context_precision(self) -> None:
        assert PAYTALLY_DECIMAL_CONTEXT.prec == 28

    def test_no_binary_float_drift(self) -> None:
        assert add(Decimal("0.1"), Decimal("0.2")) == Decimal("0.3")

    @given(amounts(), amounts())
    def test_add_sub_inverse(self, a: Decimal, b: Decimal) -> None:
        assert sub(add(a, b), b) == a


class TestToDisplay:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Decimal("8"), "8.0000"),
            (Decimal("1.5"), "1.5000"),
            (Decimal("0.00005"), "0.0000"),
            (Decimal("0.00015"), "0.0002"),
            (Decimal("-2.25"), "-2.2500"),
            (Decimal("-0.00001"), "0.0000"),
            (Decimal("1234567.1234"), "1234567.1234"),
        ],
    )
    def test_four_places(self, amount: Decimal, expected: str) -> None:
        assert to_display(amount) == expected

    def test_custom_places(self) -> None:
        assert to_display(Decimal("1.5"), 2) == "1.50"

    def test_wider_than_context_precision(self) -> None:
        # 25 integer digits plus 4 places needs 29 digits of precision
        big = Decimal("1000000000000000000000000")
        assert to_display(big) == "1000000000000000000000000.0000"
        assert to_display(big * 10**6, 2) == "1000000000000000000000000000000.00"
