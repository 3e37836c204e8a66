"""Tests for money rounding and the Premium value object."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from travel_premium.core.errors import CurrencyMismatchError
from travel_premium.models.money import (
    Premium,
    format_decimal,
    percentage_of,
    settle,
)


class TestRounding:
    """Test the single rounding policy."""

    def test_settle_rounds_half_up(self):
        """Test that halves round away from zero."""
        assert settle(Decimal("2.675")) == Decimal("2.68")
        assert settle(Decimal("2.665")) == Decimal("2.67")
        assert settle(Decimal("2.6749")) == Decimal("2.67")

    def test_percentage_of(self):
        """Test percentage amounts are settled."""
        assert percentage_of(Decimal("94.50"), Decimal("15")) == Decimal("14.18")
        assert percentage_of(Decimal("100.00"), Decimal("10")) == Decimal("10.00")

    def test_format_decimal(self):
        """Test display formatting for money and coefficients."""
        assert format_decimal(Decimal("63")) == "63.00"
        assert format_decimal(Decimal("1.3"), 4) == "1.3000"
        assert format_decimal(Decimal("0.123456"), 4) == "0.1235"


class TestPremium:
    """Test Premium arithmetic and validation."""

    def test_amount_is_settled(self):
        """Test that amounts are held at two decimal places."""
        premium = Premium(amount=Decimal("12.345"), currency="eur")

        assert premium.amount == Decimal("12.35")
        assert premium.currency == "EUR"
        assert str(premium) == "12.35 EUR"

    def test_negative_amount_rejected(self):
        """Test that direct construction refuses negative amounts."""
        with pytest.raises(ValidationError):
            Premium(amount=Decimal("-1.00"), currency="EUR")

    def test_of_clamps_negative(self):
        """Test that the factory clamps negative amounts to zero."""
        premium = Premium.of(Decimal("-5"), "EUR")
        assert premium.is_zero()

    def test_subtract(self):
        """Test same-currency subtraction."""
        result = Premium.of("10.00", "EUR").subtract(Premium.of("2.50", "EUR"))
        assert result.amount == Decimal("7.50")
        assert not result.is_zero()

    def test_subtract_clamps_at_zero(self):
        """Test that subtracting more than the amount gives zero."""
        result = Premium.of("10.00", "EUR").subtract(Premium.of("15.00", "EUR"))
        assert result.amount == Decimal("0.00")
        assert result.is_zero()

    def test_currency_mismatch_raises(self):
        """Test that mixing currencies is a programming error."""
        eur = Premium.of("10.00", "EUR")
        usd = Premium.of("10.00", "USD")

        with pytest.raises(CurrencyMismatchError):
            eur.subtract(usd)
