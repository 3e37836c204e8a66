"""Tests for minimum premium enforcement."""

from decimal import Decimal

import pytest

from travel_premium.core.config import PricingSettings
from travel_premium.models.money import Premium
from travel_premium.services.rating.floor import PremiumFloorEnforcer


@pytest.fixture
def enforcer(settings):
    """Floor enforcer with the default 10.00 minimum."""
    return PremiumFloorEnforcer(settings)


def eur(amount: str) -> Premium:
    return Premium.of(Decimal(amount), "EUR")


class TestPremiumFloorEnforcer:
    """Test the three floor outcomes."""

    def test_below_minimum_raised(self, enforcer):
        """Test a small positive premium is lifted to the minimum."""
        result = enforcer.enforce(eur("5.00"))

        assert result.premium == Decimal("10.00")
        assert result.premium_before_floor == Decimal("5.00")
        assert result.floor_applied

    def test_zero_stays_zero(self, enforcer):
        """Test a fully discounted premium is not raised."""
        result = enforcer.enforce(eur("0.00"))

        assert result.premium == Decimal("0.00")
        assert result.premium_before_floor == Decimal("0.00")
        assert not result.floor_applied

    @pytest.mark.parametrize("premium", ["10.00", "63.00"])
    def test_at_or_above_minimum_unchanged(self, enforcer, premium):
        """Test premiums at or above the minimum pass through."""
        result = enforcer.enforce(eur(premium))

        assert result.premium == Decimal(premium)
        assert not result.floor_applied

    def test_minimum_from_settings(self):
        """Test the minimum is configurable."""
        enforcer = PremiumFloorEnforcer(PricingSettings(minimum_premium=Decimal("0")))
        assert enforcer.enforce(eur("0.50")).premium == Decimal("0.50")

    def test_overshooting_discount_reaches_floor_as_zero(self, enforcer):
        """Test a discount larger than the premium arrives at the floor as 0.00."""
        remaining = eur("5.00").subtract(eur("50.00"))
        result = enforcer.enforce(remaining)

        assert result.premium == Decimal("0.00")
        assert not result.floor_applied
