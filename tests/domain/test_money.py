"""Tests for fixed-point currency helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from settlectl.domain.money import deposit_cap, exceeds_deposit_cap, from_cents, to_cents


class TestToCents:
    @pytest.mark.parametrize(
        ("amount", "cents"),
        [
            (Decimal("25.01"), 2501),
            ("231.11", 23111),
            (25.01, 2501),
            (0.1, 10),
            (1150, 115000),
            ("-5", -500),
            ("0", 0),
        ],
    )
    def test_exact_conversion(self, amount: object, cents: int) -> None:
        assert to_cents(amount) == cents  # type: ignore[arg-type]

    @pytest.mark.parametrize("amount", ["abc", "", "1.001", "NaN", "Infinity", True, None, [1]])
    def test_rejects_non_currency(self, amount: object) -> None:
        with pytest.raises(ValueError):
            to_cents(amount)  # type: ignore[arg-type]


class TestFromCents:
    def test_two_places(self) -> None:
        assert from_cents(2501) == Decimal("25.01")
        assert str(from_cents(100)) == "1.00"
        assert str(from_cents(0)) == "0.00"


class TestDepositCap:
    def test_quarter_is_allowed(self) -> None:
        assert not exceeds_deposit_cap(2500, 10000)

    def test_one_cent_over(self) -> None:
        assert exceeds_deposit_cap(2501, 10000)

    def test_no_rounding_on_odd_totals(self) -> None:
        # 25% of 1.01 is 0.2525; 0.25 fits, 0.26 does not
        assert not exceeds_deposit_cap(25, 101)
        assert exceeds_deposit_cap(26, 101)

    def test_cap_rounds_down_for_display(self) -> None:
        assert deposit_cap(101) == Decimal("0.25")
        assert deposit_cap(40100) == Decimal("100.25")
