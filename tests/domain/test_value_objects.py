"""Unit tests for BudgetPeriod and the money formatting helpers."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.spend_alerts.domain.value_objects.budget_period import BudgetPeriod
from app.spend_alerts.domain.value_objects.money import format_plain, format_usd, to_decimal


class TestBudgetPeriod:
    """Tests for the calendar-month period."""

    def test_key_is_zero_padded(self) -> None:
        assert BudgetPeriod(2024, 3).key == "2024-03"
        assert str(BudgetPeriod(2024, 11)) == "2024-11"

    def test_invalid_month_raises(self) -> None:
        with pytest.raises(ValueError):
            BudgetPeriod(2024, 13)

    def test_containing_uses_local_calendar_month(self) -> None:
        # 03:00 UTC on March 1st is still February 29th in Toronto.
        moment = datetime(2024, 3, 1, 3, 0, tzinfo=timezone.utc)

        assert BudgetPeriod.containing(moment, "America/Toronto").key == "2024-02"
        assert BudgetPeriod.containing(moment, "UTC").key == "2024-03"

    def test_from_key_round_trips(self) -> None:
        assert BudgetPeriod.from_key("2024-02") == BudgetPeriod(2024, 2)

    @pytest.mark.parametrize("key", ["2024", "2024-13", "march", ""])
    def test_from_key_rejects_invalid_keys(self, key: str) -> None:
        with pytest.raises(ValueError):
            BudgetPeriod.from_key(key)

    def test_last_day_handles_leap_years(self) -> None:
        assert BudgetPeriod(2024, 2).last_day.day == 29
        assert BudgetPeriod(2023, 2).last_day.day == 28

    def test_bounds_cover_whole_month_inclusive(self) -> None:
        start, end = BudgetPeriod(2024, 3).bounds("UTC")

        assert start == datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert end.date().day == 31
        assert end < datetime(2024, 4, 1, tzinfo=timezone.utc)
        assert end > datetime(2024, 3, 31, 23, 59, 59, tzinfo=timezone.utc)


class TestMoney:
    """Tests for amount formatting."""

    def test_format_usd_always_has_cents(self) -> None:
        assert format_usd(Decimal("10")) == "$10.00"
        assert format_usd(Decimal("1234.5")) == "$1234.50"

    def test_format_usd_rounds_half_up(self) -> None:
        assert format_usd(Decimal("0.125")) == "$0.13"

    def test_format_plain_drops_trailing_zeros(self) -> None:
        assert format_plain(Decimal("510.00")) == "510"
        assert format_plain(Decimal("12.50")) == "12.5"

    def test_format_plain_never_uses_exponent(self) -> None:
        assert format_plain(Decimal("0.00000012")) == "0.00000012"
        assert format_plain(Decimal("0.10000000")) == "0.1"
        assert format_plain(Decimal("1E+3")) == "1000"

    def test_to_decimal_avoids_float_artefacts(self) -> None:
        assert to_decimal(0.1) == Decimal("0.1")
