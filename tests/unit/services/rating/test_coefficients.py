"""Tests for coefficient composition and per-risk premiums."""

from datetime import date
from decimal import Decimal

import pytest

from travel_premium.core.errors import MissingReferenceDataError
from travel_premium.services.rating.coefficients import (
    CoefficientComposer,
    trip_days,
    trip_days_inclusive,
)

START = date(2025, 3, 1)
END = date(2025, 3, 15)


@pytest.fixture
def composer(catalogue, settings):
    """Coefficient composer over the test catalogue."""
    return CoefficientComposer(catalogue, settings)


class TestDayCounts:
    """Test exclusive and inclusive day counts."""

    def test_day_counts(self):
        """Test nights versus calendar days."""
        assert trip_days(START, END) == 14
        assert trip_days_inclusive(START, END) == 15


class TestComposition:
    """Test coefficient products and settled premiums."""

    def test_total_coefficient_unrounded(self):
        """Test the total coefficient keeps full precision."""
        total = CoefficientComposer.compose_total_coefficient(
            Decimal("1.1"), Decimal("1.3"), Decimal("0.95"), Decimal("0.78")
        )
        assert total == Decimal("2.418130")

    def test_compose_premium(self):
        """Test the premium is settled once at the end."""
        premium = CoefficientComposer.compose_premium(
            Decimal("4.50"), Decimal("1.5"), 14
        )
        assert premium == Decimal("94.50")

    def test_country_default_base(self):
        """Test the country default base leaves out the country coefficient."""
        base = CoefficientComposer.compose_country_default_base(
            Decimal("3.00"), Decimal("1.0"), Decimal("1.0"), 14
        )
        assert base == Decimal("42.00")

    def test_country_default_base_rejects_zero_days(self):
        """Test a non-positive day count is a programming error."""
        with pytest.raises(ValueError):
            CoefficientComposer.compose_country_default_base(
                Decimal("3.00"), Decimal("1.0"), Decimal("1.0"), 0
            )

    def test_apply_additional_risks(self):
        """Test the risk sum is folded in and settled again."""
        assert CoefficientComposer.apply_additional_risks(
            Decimal("42.00"), Decimal("0.78")
        ) == Decimal("74.76")
        assert CoefficientComposer.apply_additional_risks(
            Decimal("42.00"), Decimal("0")
        ) == Decimal("42.00")


class TestAdditionalRisks:
    """Test summing age-modified optional risks."""

    def test_no_risks(self, composer):
        """Test an empty selection sums to zero."""
        risks = composer.compose_additional_risks([], 35, START)

        assert risks.total_coefficient == Decimal("0")
        assert risks.risks == ()

    def test_age_modifier_applied(self, composer):
        """Test the age modifier multiplies the base coefficient."""
        risks = composer.compose_additional_risks(["EXTREME_SPORT"], 40, START)

        assert risks.total_coefficient == Decimal("0.78")
        assert risks.risks[0].age_modifier == Decimal("1.30")
        assert risks.risks[0].base_coefficient == Decimal("0.60")

    def test_missing_modifier_is_neutral(self, composer):
        """Test risks without a modifier keep their base coefficient."""
        risks = composer.compose_additional_risks(
            ["SPORT_ACTIVITIES", "ACCIDENT_COVERAGE"], 35, START
        )

        assert risks.total_coefficient == Decimal("0.50")
        assert [risk.age_modifier for risk in risks.risks] == [
            Decimal("1.0"),
            Decimal("1.0"),
        ]

    def test_mandatory_inactive_and_unknown_skipped(self, composer):
        """Test the mandatory risk, expired risks and unknown codes add nothing."""
        risks = composer.compose_additional_risks(
            ["TRAVEL_MEDICAL", "RETIRED_RISK", "UNKNOWN", "LUGGAGE_LOSS"], 35, START
        )

        assert risks.total_coefficient == Decimal("0.10")
        assert [risk.risk_code for risk in risks.risks] == ["LUGGAGE_LOSS"]


class TestRiskDetails:
    """Test premiums attributed to each included risk."""

    def test_details_use_inclusive_days(self, composer):
        """Test the medical premium and optional risk shares."""
        risks = composer.compose_additional_risks(
            ["SPORT_ACTIVITIES", "ACCIDENT_COVERAGE"], 35, START
        )
        details = composer.build_risk_details(
            risks,
            Decimal("4.50"),
            Decimal("1.0"),
            Decimal("1.0"),
            Decimal("1.0"),
            START,
            END,
        ).unwrap()

        assert [(d.risk_code, d.premium) for d in details] == [
            ("TRAVEL_MEDICAL", Decimal("67.50")),
            ("SPORT_ACTIVITIES", Decimal("20.25")),
            ("ACCIDENT_COVERAGE", Decimal("13.50")),
        ]
        assert details[0].is_mandatory
        assert not details[1].is_mandatory

    def test_missing_mandatory_risk(self, catalogue_factory, settings):
        """Test a catalogue without the medical risk is an error."""
        composer = CoefficientComposer(
            catalogue_factory(risk_types=[]),
            settings,
        )
        result = composer.build_risk_details(
            composer.compose_additional_risks([], 35, START),
            Decimal("4.50"),
            Decimal("1.0"),
            Decimal("1.0"),
            Decimal("1.0"),
            START,
            END,
        )
        error = result.unwrap_err()

        assert isinstance(error, MissingReferenceDataError)
        assert error.resource == "risk_type"
        assert error.identifier == "TRAVEL_MEDICAL"
