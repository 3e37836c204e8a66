"""Test configuration and shared pricing fixtures.

The catalogue built here is deliberately small and flat (country and
duration coefficients of 1.0 for short trips) so that expected premiums can
be worked out by hand in each test.
"""

from collections.abc import Callable, Iterator
from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from travel_premium.core.config import PricingSettings, clear_settings_cache
from travel_premium.models.quote import PremiumRequest
from travel_premium.models.reference import (
    AgeCoefficientRecord,
    AgeRiskModifier,
    Bundle,
    CountryDefaultRate,
    CountryProfile,
    CoverageLevel,
    DurationCoefficientRecord,
    PromoCode,
    PromoDiscountType,
    RiskType,
    SecondaryDiscount,
    SecondaryDiscountType,
)
from travel_premium.services.rating.premium_engine import PremiumEngine
from travel_premium.services.reference_data import InMemoryReferenceData

SINCE = date(2020, 1, 1)
TRIP_START = date(2025, 3, 1)
TRIP_END = date(2025, 3, 15)  # 14 nights
BIRTH_DATE_AGE_35 = date(1990, 1, 1)


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    """Each test starts without a cached settings instance."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> PricingSettings:
    """Default pricing settings."""
    return PricingSettings()


def build_countries() -> list[CountryProfile]:
    return [
        CountryProfile(
            iso_code="ES",
            name="Spain",
            risk_coefficient=Decimal("1.0"),
            valid_from=SINCE,
        ),
        CountryProfile(
            iso_code="TR",
            name="Turkey",
            risk_coefficient=Decimal("1.3"),
            valid_from=SINCE,
        ),
    ]


def build_coverage_levels() -> list[CoverageLevel]:
    return [
        CoverageLevel(
            code="50000",
            daily_rate=Decimal("4.50"),
            coverage_amount=Decimal("50000"),
            currency="EUR",
            valid_from=SINCE,
        ),
        CoverageLevel(
            code="10000",
            daily_rate=Decimal("10.00"),
            coverage_amount=Decimal("10000"),
            currency="EUR",
            valid_from=SINCE,
        ),
        CoverageLevel(
            code="CAPPED",
            daily_rate=Decimal("10.00"),
            coverage_amount=Decimal("100000"),
            max_payout_amount=Decimal("50000"),
            currency="EUR",
            valid_from=SINCE,
        ),
        CoverageLevel(
            code="MINI",
            daily_rate=Decimal("0.25"),
            coverage_amount=Decimal("1000"),
            currency="EUR",
            valid_from=SINCE,
        ),
    ]


def build_risk_types(include_medical: bool = True) -> list[RiskType]:
    risks = [
        RiskType(
            code="SPORT_ACTIVITIES",
            name="Sport Activities",
            coefficient=Decimal("0.30"),
            valid_from=SINCE,
        ),
        RiskType(
            code="ACCIDENT_COVERAGE",
            name="Accident Coverage",
            coefficient=Decimal("0.20"),
            valid_from=SINCE,
        ),
        RiskType(
            code="EXTREME_SPORT",
            name="Extreme Sport",
            coefficient=Decimal("0.60"),
            valid_from=SINCE,
        ),
        RiskType(
            code="LUGGAGE_LOSS",
            name="Luggage Loss",
            coefficient=Decimal("0.10"),
            valid_from=SINCE,
        ),
        RiskType(
            code="RETIRED_RISK",
            name="Retired Risk",
            coefficient=Decimal("0.50"),
            valid_from=SINCE,
            valid_to=date(2021, 12, 31),
        ),
    ]
    if include_medical:
        risks.insert(
            0,
            RiskType(
                code="TRAVEL_MEDICAL",
                name="Medical Coverage",
                coefficient=Decimal("0.00"),
                is_mandatory=True,
                valid_from=SINCE,
            ),
        )
    return risks


def build_age_coefficients() -> list[AgeCoefficientRecord]:
    return [
        AgeCoefficientRecord(
            age_from=0, age_to=17, coefficient=Decimal("0.8"), valid_from=SINCE
        ),
        AgeCoefficientRecord(
            age_from=18, age_to=64, coefficient=Decimal("1.0"), valid_from=SINCE
        ),
        AgeCoefficientRecord(
            age_from=65, age_to=80, coefficient=Decimal("1.5"), valid_from=SINCE
        ),
    ]


def build_promo_codes() -> list[PromoCode]:
    return [
        PromoCode(
            code="PCT10",
            description="Ten percent off",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            valid_from=SINCE,
        ),
        PromoCode(
            code="BIG1000",
            description="Fixed 1000 off",
            discount_type=PromoDiscountType.FIXED_AMOUNT,
            discount_value=Decimal("1000"),
            valid_from=SINCE,
        ),
        PromoCode(
            code="CAPPED50",
            description="Half off, at most 20",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("50"),
            max_discount_amount=Decimal("20"),
            valid_from=SINCE,
        ),
        PromoCode(
            code="EXPIRED",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            valid_from=SINCE,
            valid_to=date(2024, 12, 31),
        ),
        PromoCode(
            code="FUTURE",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            valid_from=date(2030, 1, 1),
        ),
        PromoCode(
            code="PAUSED",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            is_active=False,
            valid_from=SINCE,
        ),
        PromoCode(
            code="MIN500",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            min_premium_amount=Decimal("500"),
            valid_from=SINCE,
        ),
        PromoCode(
            code="USEDUP",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            max_usage_count=5,
            current_usage_count=5,
            valid_from=SINCE,
        ),
    ]


def build_catalogue(**overrides: Any) -> InMemoryReferenceData:
    """Test catalogue; keyword arguments replace whole record lists."""
    records: dict[str, Any] = {
        "countries": build_countries(),
        "coverage_levels": build_coverage_levels(),
        "risk_types": build_risk_types(),
        "age_coefficients": build_age_coefficients(),
        "age_risk_modifiers": [
            AgeRiskModifier(
                risk_code="EXTREME_SPORT",
                age_from=36,
                age_to=50,
                modifier=Decimal("1.30"),
                valid_from=SINCE,
            ),
        ],
        "duration_coefficients": [
            DurationCoefficientRecord(
                days_from=1, days_to=30, coefficient=Decimal("1.0"), valid_from=SINCE
            ),
            DurationCoefficientRecord(
                days_from=31, days_to=365, coefficient=Decimal("0.9"), valid_from=SINCE
            ),
        ],
        "country_default_rates": [
            CountryDefaultRate(
                iso_code="TR",
                default_day_rate=Decimal("3.00"),
                currency="EUR",
                valid_from=SINCE,
            ),
        ],
        "bundles": [
            Bundle(
                code="ACTIVE_TRAVELER",
                name="Active Traveler Package",
                discount_percentage=Decimal("15"),
                required_risks=("SPORT_ACTIVITIES", "ACCIDENT_COVERAGE"),
                valid_from=SINCE,
            ),
            Bundle(
                code="SPORT_PLUS",
                name="Sport Plus",
                discount_percentage=Decimal("10"),
                required_risks=("SPORT_ACTIVITIES",),
                valid_from=SINCE,
            ),
            Bundle(
                code="HALF_PRICE",
                name="Half Price Luggage",
                discount_percentage=Decimal("50"),
                required_risks=("LUGGAGE_LOSS",),
                valid_from=SINCE,
            ),
        ],
        "promo_codes": build_promo_codes(),
        "secondary_discounts": [],
    }
    records.update(overrides)
    return InMemoryReferenceData(**records)


@pytest.fixture
def catalogue() -> InMemoryReferenceData:
    """Small hand-computable reference catalogue."""
    return build_catalogue()


@pytest.fixture
def loyalty_discount() -> SecondaryDiscount:
    """Always-applicable 5% loyalty discount."""
    return SecondaryDiscount(
        code="LOYALTY_5",
        name="Loyalty discount 5%",
        discount_type=SecondaryDiscountType.LOYALTY,
        discount_percentage=Decimal("5"),
        valid_from=SINCE,
    )


@pytest.fixture
def engine(
    catalogue: InMemoryReferenceData, settings: PricingSettings
) -> PremiumEngine:
    """Premium engine over the test catalogue."""
    return PremiumEngine(catalogue, settings)


@pytest.fixture
def make_request() -> Callable[..., PremiumRequest]:
    """Factory for a 14-night Spain trip for a 35-year-old at level 50000."""

    def _make(**overrides: Any) -> PremiumRequest:
        fields: dict[str, Any] = {
            "person_birth_date": BIRTH_DATE_AGE_35,
            "agreement_date_from": TRIP_START,
            "agreement_date_to": TRIP_END,
            "country_iso_code": "ES",
            "medical_risk_limit_level": "50000",
        }
        fields.update(overrides)
        return PremiumRequest(**fields)

    return _make


@pytest.fixture
def catalogue_factory() -> Callable[..., InMemoryReferenceData]:
    """Build a test catalogue with some record lists replaced."""
    return build_catalogue
