"""Tests for amount and date parsing utilities."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerimport.utils.amount_parser import parse_amount, parse_decimal_string
from ledgerimport.utils.date_parser import get_statement_period, parse_date, parse_iso_date


class TestParseDecimalString:
    """Tests for strict decimal strings."""

    @pytest.mark.parametrize(
        "value,expected",
        [("1500.00", Decimal("1500.00")), ("0", Decimal("0")), ("-20.5", Decimal("-20.5"))],
    )
    def test_valid(self, value, expected):
        assert parse_decimal_string(value) == expected

    @pytest.mark.parametrize(
        "value", ["1.234", "1e3", " 1", "+1", "1,000", "", "NaN", "10.00\n", "\u0661\u0660", "1.\u0665"]
    )
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_decimal_string(value)

    def test_unsigned_rejects_minus(self):
        with pytest.raises(ValueError):
            parse_decimal_string("-1.00", signed=False)

    def test_non_string_rejected(self):
        with pytest.raises(ValueError):
            parse_decimal_string(Decimal("1.00"))


class TestParseAmount:
    """Tests for human-entered amounts."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1234.56", Decimal("1234.56")),
            ("R1,234.56", Decimal("1234.56")),
            ("-$12", Decimal("-12")),
            ("(12.50)", Decimal("-12.50")),
            ("ZAR 99", Decimal("99")),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", "abc", "inf"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_amount(value)


class TestDates:
    """Tests for date parsing."""

    def test_parse_iso_date(self):
        assert parse_iso_date("2025-01-31") == date(2025, 1, 31)

    @pytest.mark.parametrize(
        "value",
        ["2025-1-31", "2025-01-31x", "2025-01-31\n", "\u0662025-01-31", "31/01/2025", "2025-02-30", None],
    )
    def test_parse_iso_date_invalid(self, value):
        with pytest.raises(ValueError):
            parse_iso_date(value)

    def test_parse_date_loose(self):
        assert parse_date("31 Jan 2025") == date(2025, 1, 31)

    def test_parse_date_invalid(self):
        with pytest.raises(ValueError):
            parse_date("not a date")

    def test_last_month_across_year(self):
        """Test last-month in January is December of the previous year."""
        assert get_statement_period("last-month", today=date(2025, 1, 15)) == (
            date(2024, 12, 1),
            date(2024, 12, 31),
        )

    def test_this_year(self):
        assert get_statement_period("this-year", today=date(2025, 6, 3)) == (
            date(2025, 1, 1),
            date(2025, 6, 3),
        )

    def test_last_year(self):
        assert get_statement_period("last-year", today=date(2025, 6, 3)) == (
            date(2024, 1, 1),
            date(2024, 12, 31),
        )

    def test_unknown_period(self):
        with pytest.raises(ValueError, match="Unknown period"):
            get_statement_period("fortnight")
