#!/usr/bin/env python3
"""Demo script running representative travel quotes through the premium engine.

This script demonstrates:
1. Medical level pricing with age-modified optional risks
2. Country default pricing and its fallback
3. Bundle, promo code and secondary discount stacking
4. The calculation steps behind every premium
"""

from datetime import date

from travel_premium.core.config import get_settings
from travel_premium.core.logging_utils import (
    configure_logging,
    get_logger,
    level_from_name,
)
from travel_premium.models.quote import PremiumRequest
from travel_premium.services.rating import PremiumEngine
from travel_premium.services.reference_data import default_reference_data

configure_logging(level=level_from_name(get_settings().log_level))
logger = get_logger("demo_premium_calculation")

SCENARIOS: list[tuple[str, PremiumRequest]] = [
    (
        "Two weeks in Spain, medical cover only",
        PremiumRequest(
            person_birth_date=date(1990, 5, 20),
            agreement_date_from=date(2025, 3, 1),
            agreement_date_to=date(2025, 3, 15),
            country_iso_code="ES",
            medical_risk_limit_level="50000",
        ),
    ),
    (
        "Active traveller in Turkey with a summer promo",
        PremiumRequest(
            person_birth_date=date(1982, 11, 2),
            agreement_date_from=date(2025, 7, 1),
            agreement_date_to=date(2025, 7, 22),
            country_iso_code="TR",
            medical_risk_limit_level="100000",
            selected_risks=["SPORT_ACTIVITIES", "ACCIDENT_COVERAGE", "EXTREME_SPORT"],
            promo_code="SUMMER2025",
        ),
    ),
    (
        "Corporate group of twelve at the country default rate",
        PremiumRequest(
            person_birth_date=date(1975, 1, 15),
            agreement_date_from=date(2025, 4, 1),
            agreement_date_to=date(2025, 5, 1),
            country_iso_code="US",
            selected_risks=["TRIP_CANCELLATION", "LUGGAGE_LOSS", "FLIGHT_DELAY"],
            person_count=12,
            is_corporate=True,
            use_country_default_premium=True,
        ),
    ),
    (
        "Country default requested where no rate is published",
        PremiumRequest(
            person_birth_date=date(1960, 8, 30),
            agreement_date_from=date(2025, 3, 10),
            agreement_date_to=date(2025, 3, 17),
            country_iso_code="EG",
            medical_risk_limit_level="20000",
            use_country_default_premium=True,
            promo_code="NOSUCHCODE",
        ),
    ),
    (
        "Traveller above the insurable age",
        PremiumRequest(
            person_birth_date=date(1940, 1, 1),
            agreement_date_from=date(2025, 3, 1),
            agreement_date_to=date(2025, 3, 8),
            country_iso_code="IT",
            medical_risk_limit_level="10000",
        ),
    ),
]


def run_demo() -> None:
    """Price every scenario and log the breakdown."""
    engine = PremiumEngine(default_reference_data())

    for title, request in SCENARIOS:
        logger.info("=" * 60)
        logger.info(title)

        result = engine.calculate_premium(request)
        if result.is_err():
            logger.error(f"Rejected: {result.unwrap_err()}")
            continue

        quote = result.unwrap()
        logger.info(f"Mode: {quote.calculation_mode.value}")
        for step in quote.calculation_steps:
            logger.info(f"  {step.description}: {step.formula}")
        logger.info(f"Formula: {quote.formula}")
        for warning in quote.warnings:
            logger.warning(f"  {warning['code']}: {warning['message']}")
        logger.info(f"Premium: {quote.premium} {quote.currency}")


if __name__ == "__main__":
    run_demo()
