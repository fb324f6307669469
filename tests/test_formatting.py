"""Tests for display formatting and the position size calculator."""

from datetime import date, time
from decimal import Decimal

import pytest

from tradeledger.calculator import position_size
from tradeledger.errors import ValidationError
from tradeledger.formatting import (
    format_currency,
    format_currency_with_sign,
    format_date,
    format_date_time,
    format_full_date,
    format_percent,
)


class TestCurrency:

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("1234.5"), "$1,234.50"),
        (Decimal("-20"), "$20.00"),
        (0, "$0.00"),
        (None, "$0.00"),
        (Decimal("1000000"), "$1,000,000.00"),
    ])
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("50"), "+$50.00"),
        (Decimal("-20"), "-$20.00"),
        (Decimal("0"), "+$0.00"),
    ])
    def test_format_currency_with_sign(self, amount, expected):
        assert format_currency_with_sign(amount) == expected

    def test_custom_symbol(self):
        assert format_currency(Decimal("5"), "€") == "€5.00"


class TestPercentAndDates:

    def test_format_percent(self):
        assert format_percent(Decimal("66.666")) == "66.7%"
        assert format_percent(50, places=0) == "50%"

    def test_dates(self):
        day = date(2024, 1, 2)
        assert format_date(day) == "Jan 2"
        assert format_full_date(day) == "Jan 2, 2024"
        assert format_date_time(day) == "Jan 2, 2024"
        assert format_date_time(day, time(10, 30)) == "Jan 2, 2024 10:30"


class TestPositionSize:
    """Risk amount and lot size from balance, risk and stop loss."""

    def test_standard_case(self):
        result = position_size(Decimal("10000"), 1, 20)
        assert result.risk_amount == Decimal("100")
        assert result.lots == Decimal("0.5")

    def test_accepts_strings(self):
        result = position_size("5000", "2", "25")
        assert result.risk_amount == Decimal("100")
        assert result.lots == Decimal("0.4")

    @pytest.mark.parametrize("stop_loss", [0, -5])
    def test_stop_loss_must_be_positive(self, stop_loss):
        with pytest.raises(ValidationError) as excinfo:
            position_size(1000, 1, stop_loss)
        assert excinfo.value.fields == ["stop_loss_pips"]

    def test_negative_risk_rejected(self):
        with pytest.raises(ValidationError):
            position_size(1000, -1, 10)
