"""Tests for pricing settings loaded from the environment."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from travel_premium.core.config import (
    PricingSettings,
    clear_settings_cache,
    get_settings,
)


class TestPricingSettings:
    """Test default values, validation and environment overrides."""

    def test_defaults(self):
        """Test the documented default settings."""
        settings = PricingSettings()

        assert settings.minimum_premium == Decimal("10.00")
        assert settings.default_currency == "EUR"
        assert settings.max_insurable_age == 80
        assert settings.age_coefficient_enabled is True
        assert settings.mandatory_risk_code == "TRAVEL_MEDICAL"
        assert settings.default_person_count == 1

    def test_environment_override(self, monkeypatch):
        """Test that PRICING_ prefixed variables override defaults."""
        monkeypatch.setenv("PRICING_MINIMUM_PREMIUM", "25.00")
        monkeypatch.setenv("PRICING_AGE_COEFFICIENT_ENABLED", "false")

        settings = PricingSettings()

        assert settings.minimum_premium == Decimal("25.00")
        assert settings.age_coefficient_enabled is False

    def test_invalid_currency_rejected(self):
        """Test that lower-case currency codes fail validation."""
        with pytest.raises(ValidationError):
            PricingSettings(default_currency="eur")

    def test_negative_minimum_rejected(self):
        """Test that the minimum premium cannot be negative."""
        with pytest.raises(ValidationError):
            PricingSettings(minimum_premium=Decimal("-1"))

    def test_mandatory_risk_code_normalized(self):
        """Test that the mandatory risk code is stored upper-case."""
        settings = PricingSettings(mandatory_risk_code=" travel_medical ")
        assert settings.mandatory_risk_code == "TRAVEL_MEDICAL"

    def test_settings_are_frozen(self):
        """Test that settings cannot be changed after creation."""
        settings = PricingSettings()
        with pytest.raises(ValidationError):
            settings.minimum_premium = Decimal("1.00")


class TestSettingsCache:
    """Test the cached settings accessor."""

    def test_get_settings_is_cached(self):
        """Test that repeated calls return the same instance."""
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self, monkeypatch):
        """Test that clearing the cache picks up new environment values."""
        first = get_settings()
        monkeypatch.setenv("PRICING_MINIMUM_PREMIUM", "15.00")
        clear_settings_cache()

        second = get_settings()

        assert second is not first
        assert second.minimum_premium == Decimal("15.00")
