"""Tests for age resolution and age coefficients."""

from datetime import date
from decimal import Decimal

import pytest

from travel_premium.core.config import PricingSettings
from travel_premium.core.errors import InvalidDateError, OutOfRangeError
from travel_premium.services.rating.age import (
    AgeResolver,
    age_group_description,
    fallback_coefficient,
    years_between,
)

AS_OF = date(2025, 3, 1)


class TestYearsBetween:
    """Test whole-year age arithmetic."""

    def test_birthday_not_yet_reached(self):
        """Test age before and on the birthday."""
        assert years_between(date(1990, 3, 2), AS_OF) == 34
        assert years_between(date(1990, 3, 1), AS_OF) == 35

    def test_leap_day_birthday(self):
        """Test a 29 February birthday in a non-leap year."""
        assert years_between(date(2000, 2, 29), date(2025, 2, 28)) == 24
        assert years_between(date(2000, 2, 29), date(2025, 3, 1)) == 25


class TestFallbackTable:
    """Test the built-in age table."""

    @pytest.mark.parametrize(
        "age, coefficient, label",
        [
            (0, "1.1", "Infants and toddlers"),
            (5, "1.1", "Infants and toddlers"),
            (6, "0.9", "Children and teenagers"),
            (17, "0.9", "Children and teenagers"),
            (30, "1.0", "Young adults"),
            (40, "1.1", "Adults"),
            (50, "1.3", "Middle-aged"),
            (60, "1.6", "Senior"),
            (70, "2.0", "Elderly"),
            (80, "2.5", "Very elderly"),
        ],
    )
    def test_brackets(self, age, coefficient, label):
        """Test bracket bounds are inclusive."""
        assert fallback_coefficient(age) == Decimal(coefficient)
        assert age_group_description(age) == label


class TestAgeResolver:
    """Test age and coefficient resolution against reference data."""

    def test_resolve_age(self, catalogue, settings):
        """Test a valid birth date."""
        resolver = AgeResolver(catalogue, settings)
        assert resolver.resolve_age(date(1990, 1, 1), AS_OF).unwrap() == 35

    def test_missing_birth_date(self, catalogue, settings):
        """Test a missing birth date is an invalid date."""
        result = AgeResolver(catalogue, settings).resolve_age(None, AS_OF)

        assert result.is_err()
        assert isinstance(result.unwrap_err(), InvalidDateError)
        assert result.unwrap_err().field == "person_birth_date"

    def test_birth_after_reference_date(self, catalogue, settings):
        """Test a birth date after the trip start is rejected."""
        result = AgeResolver(catalogue, settings).resolve_age(date(2025, 6, 1), AS_OF)
        assert isinstance(result.unwrap_err(), InvalidDateError)

    def test_coefficient_from_reference_data(self, catalogue, settings):
        """Test the bracket coefficient is used when one covers the age."""
        resolution = (
            AgeResolver(catalogue, settings).resolve_coefficient(70, AS_OF).unwrap()
        )

        assert resolution.coefficient == Decimal("1.5")
        assert resolution.description == "Elderly"
        assert not resolution.fallback_used

    def test_fallback_when_no_bracket(self, catalogue_factory, settings):
        """Test the built-in table is used when no bracket matches."""
        resolver = AgeResolver(catalogue_factory(age_coefficients=[]), settings)
        resolution = resolver.resolve_coefficient(35, AS_OF).unwrap()

        assert resolution.coefficient == Decimal("1.1")
        assert resolution.fallback_used

    def test_disabled_coefficient_is_neutral(self, catalogue, settings):
        """Test the switch forces a coefficient of exactly 1.0."""
        resolution = (
            AgeResolver(catalogue, settings)
            .resolve_coefficient(70, AS_OF, enabled=False)
            .unwrap()
        )

        assert resolution.coefficient == Decimal("1.0")
        assert not resolution.fallback_used

    @pytest.mark.parametrize("age", [-1, 81, 120])
    def test_out_of_range(self, catalogue, settings, age):
        """Test ages outside 0 to the insurable maximum are rejected."""
        result = AgeResolver(catalogue, settings).resolve_coefficient(age, AS_OF)
        error = result.unwrap_err()

        assert isinstance(error, OutOfRangeError)
        assert error.field == "age"
        assert error.maximum == 80

    def test_maximum_age_configurable(self, catalogue):
        """Test the insurable ceiling comes from settings."""
        resolver = AgeResolver(catalogue, PricingSettings(max_insurable_age=90))
        assert resolver.resolve_coefficient(85, AS_OF).is_ok()
