"""Tests for promo code validation and discount calculation."""

from datetime import date
from decimal import Decimal

import pytest

from travel_premium.models.reference import PromoCode, PromoDiscountType
from travel_premium.services.promo_codes import PromoCodeService

AS_OF = date(2025, 3, 1)


@pytest.fixture
def promo_service(catalogue):
    """Promo code service over the test catalogue."""
    return PromoCodeService(catalogue)


class TestPromoCodeValidation:
    """Test rejection reasons in their evaluation order."""

    @pytest.mark.parametrize(
        "code, premium, reason",
        [
            ("", Decimal("100.00"), "Promo code is empty"),
            ("   ", Decimal("100.00"), "Promo code is empty"),
            ("NOPE", Decimal("100.00"), "Promo code not found or expired"),
            ("PAUSED", Decimal("100.00"), "Promo code is not active"),
            ("FUTURE", Decimal("100.00"), "Promo code is not yet valid"),
            ("EXPIRED", Decimal("100.00"), "Promo code has expired"),
            (
                "MIN500",
                Decimal("100.00"),
                "Minimum premium amount for this promo code is 500.00 EUR",
            ),
            ("USEDUP", Decimal("100.00"), "Promo code usage limit reached"),
        ],
    )
    def test_rejection_reasons(self, promo_service, code, premium, reason):
        """Test each invalid code is rejected with its reason."""
        result = promo_service.apply_promo_code(code, AS_OF, premium, "EUR")

        assert not result.is_valid
        assert result.reason == reason
        assert result.discount_amount == Decimal("0.00")

    def test_none_code_is_empty(self, promo_service):
        """Test a missing code is treated as empty."""
        result = promo_service.apply_promo_code(None, AS_OF, Decimal("100.00"), "EUR")
        assert result.reason == "Promo code is empty"

    def test_minimum_premium_met(self, promo_service):
        """Test the minimum premium check passes at the threshold."""
        result = promo_service.apply_promo_code(
            "MIN500", AS_OF, Decimal("500.00"), "EUR"
        )

        assert result.is_valid
        assert result.discount_amount == Decimal("50.00")


class TestPromoCodeDiscount:
    """Test discount amounts for valid codes."""

    def test_percentage_discount(self, promo_service):
        """Test a percentage code matched case-insensitively."""
        result = promo_service.apply_promo_code("pct10", AS_OF, Decimal("63.00"), "EUR")

        assert result.is_valid
        assert result.promo_code == "PCT10"
        assert result.discount_amount == Decimal("6.30")
        assert result.discount_type == "PERCENTAGE"
        assert result.discount_value == Decimal("10")
        assert result.description == "Ten percent off"

    def test_max_discount_cap(self, promo_service):
        """Test the promo maximum caps a percentage discount."""
        result = promo_service.apply_promo_code(
            "CAPPED50", AS_OF, Decimal("100.00"), "EUR"
        )
        assert result.discount_amount == Decimal("20.00")

    def test_fixed_discount_capped_at_premium(self, promo_service):
        """Test a fixed discount never exceeds the premium."""
        result = promo_service.apply_promo_code(
            "BIG1000", AS_OF, Decimal("77.00"), "EUR"
        )

        assert result.is_valid
        assert result.discount_amount == Decimal("77.00")

    def test_calculate_discount_rounds(self):
        """Test the percentage discount is settled half-up."""
        promo = PromoCode(
            code="SEVEN",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("7.5"),
        )
        assert PromoCodeService.calculate_discount(promo, Decimal("33.30")) == (
            Decimal("2.50")
        )

    def test_usage_not_recorded(self, catalogue, promo_service):
        """Test applying a code leaves its usage counter unchanged."""
        promo_service.apply_promo_code("PCT10", AS_OF, Decimal("100.00"), "EUR")
        assert catalogue.find_promo_code("PCT10").current_usage_count == 0
