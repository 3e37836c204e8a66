# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Read-only reference data lookups keyed by an "as of" date.

The pricing pipeline only depends on ``ReferenceDataSource``. The in-memory
implementation backs the test suite and the demo script; a persistent store
only has to expose the same lookups.
"""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from typing import Protocol, TypeVar, runtime_checkable

from beartype import beartype

from ..core.logging_utils import get_logger
from ..models.base import EffectiveDatedModel
from ..models.reference import (
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

logger = get_logger(__name__)

R = TypeVar("R", bound=EffectiveDatedModel)

DEFAULT_DURATION_COEFFICIENT = Decimal("1.0")


@runtime_checkable
class ReferenceDataSource(Protocol):
    """Lookups the pricing pipeline consumes."""

    def find_active_country(self, iso_code: str, as_of: date) -> CountryProfile | None:
        """Country profile valid on the date."""
        ...

    def find_active_coverage_level(
        self, code: str, as_of: date
    ) -> CoverageLevel | None:
        """Medical coverage level valid on the date."""
        ...

    def find_active_risk_type(self, code: str, as_of: date) -> RiskType | None:
        """Risk type valid on the date."""
        ...

    def find_age_coefficient(self, age: int, as_of: date) -> Decimal | None:
        """Age coefficient, or None so the caller can fall back."""
        ...

    def find_age_risk_modifier(
        self, risk_code: str, age: int, as_of: date
    ) -> Decimal | None:
        """Age modifier for an optional risk, or None when there is none."""
        ...

    def find_duration_coefficient(self, days: int, as_of: date) -> Decimal:
        """Duration coefficient; 1.0 when no bracket matches."""
        ...

    def find_default_day_rate(
        self, iso_code: str, as_of: date
    ) -> CountryDefaultRate | None:
        """Country default day rate valid on the date."""
        ...

    def find_applicable_bundles(
        self, selected_risks: Iterable[str], as_of: date
    ) -> list[Bundle]:
        """Active bundles whose required risks are all selected."""
        ...

    def find_promo_code(self, code: str) -> PromoCode | None:
        """Promo code definition regardless of validity window."""
        ...

    def list_secondary_discounts(self) -> list[SecondaryDiscount]:
        """Secondary discount catalogue in priority order."""
        ...


@beartype
def _latest_active(records: Iterable[R], as_of: date) -> R | None:
    """Most recently started record active on the date."""
    active = [record for record in records if record.is_active_on(as_of)]
    if not active:
        return None
    return max(active, key=lambda record: record.valid_from)


@beartype
class InMemoryReferenceData:
    """Reference data held in memory; lookups never mutate state."""

    def __init__(
        self,
        *,
        countries: Sequence[CountryProfile] = (),
        coverage_levels: Sequence[CoverageLevel] = (),
        risk_types: Sequence[RiskType] = (),
        age_coefficients: Sequence[AgeCoefficientRecord] = (),
        age_risk_modifiers: Sequence[AgeRiskModifier] = (),
        duration_coefficients: Sequence[DurationCoefficientRecord] = (),
        country_default_rates: Sequence[CountryDefaultRate] = (),
        bundles: Sequence[Bundle] = (),
        promo_codes: Sequence[PromoCode] = (),
        secondary_discounts: Sequence[SecondaryDiscount] = (),
    ) -> None:
        """Initialize the catalogue from record lists."""
        self._countries = tuple(countries)
        self._coverage_levels = tuple(coverage_levels)
        self._risk_types = tuple(risk_types)
        self._age_coefficients = tuple(age_coefficients)
        self._age_risk_modifiers = tuple(age_risk_modifiers)
        self._duration_coefficients = tuple(duration_coefficients)
        self._country_default_rates = tuple(country_default_rates)
        self._bundles = tuple(bundles)
        self._promo_codes = tuple(promo_codes)
        self._secondary_discounts = tuple(secondary_discounts)

    @beartype
    def find_active_country(self, iso_code: str, as_of: date) -> CountryProfile | None:
        """Country profile valid on the date (ISO code case-insensitive)."""
        code = iso_code.strip().upper()
        return _latest_active(
            (c for c in self._countries if c.iso_code == code), as_of
        )

    @beartype
    def find_active_coverage_level(
        self, code: str, as_of: date
    ) -> CoverageLevel | None:
        """Coverage level valid on the date."""
        level_code = code.strip().upper()
        return _latest_active(
            (lvl for lvl in self._coverage_levels if lvl.code == level_code), as_of
        )

    @beartype
    def find_active_risk_type(self, code: str, as_of: date) -> RiskType | None:
        """Risk type valid on the date."""
        risk_code = code.strip().upper()
        return _latest_active(
            (risk for risk in self._risk_types if risk.code == risk_code), as_of
        )

    @beartype
    def find_age_coefficient(self, age: int, as_of: date) -> Decimal | None:
        """Age coefficient from the bracket covering the age."""
        record = _latest_active(
            (r for r in self._age_coefficients if r.covers(age)), as_of
        )
        if record is None:
            return None
        logger.debug(f"Age coefficient for age {age}: {record.coefficient}")
        return record.coefficient

    @beartype
    def find_age_risk_modifier(
        self, risk_code: str, age: int, as_of: date
    ) -> Decimal | None:
        """Age modifier for a risk code."""
        code = risk_code.strip().upper()
        record = _latest_active(
            (
                m
                for m in self._age_risk_modifiers
                if m.risk_code == code and m.covers(age)
            ),
            as_of,
        )
        return record.modifier if record is not None else None

    @beartype
    def find_duration_coefficient(self, days: int, as_of: date) -> Decimal:
        """Duration coefficient from the bracket covering the day count."""
        record = _latest_active(
            (r for r in self._duration_coefficients if r.covers(days)), as_of
        )
        if record is None:
            logger.info(
                f"No duration coefficient for {days} days on {as_of}, "
                f"using {DEFAULT_DURATION_COEFFICIENT}"
            )
            return DEFAULT_DURATION_COEFFICIENT
        return record.coefficient

    @beartype
    def find_default_day_rate(
        self, iso_code: str, as_of: date
    ) -> CountryDefaultRate | None:
        """Country default day rate valid on the date."""
        code = iso_code.strip().upper()
        return _latest_active(
            (r for r in self._country_default_rates if r.iso_code == code), as_of
        )

    @beartype
    def find_applicable_bundles(
        self, selected_risks: Iterable[str], as_of: date
    ) -> list[Bundle]:
        """Active bundles fully covered by the selected risks."""
        selected = {code.strip().upper() for code in selected_risks}
        if not selected:
            return []
        return [
            bundle
            for bundle in self._bundles
            if bundle.is_active
            and bundle.is_active_on(as_of)
            and bundle.is_satisfied_by(selected)
        ]

    @beartype
    def find_promo_code(self, code: str) -> PromoCode | None:
        """Promo code matched case-insensitively."""
        promo_code = code.strip().upper()
        for promo in self._promo_codes:
            if promo.code == promo_code:
                return promo
        return None

    @beartype
    def list_secondary_discounts(self) -> list[SecondaryDiscount]:
        """Secondary discount catalogue in declaration order."""
        return list(self._secondary_discounts)


_SINCE_2020 = date(2020, 1, 1)
_SINCE_2025 = date(2025, 1, 1)


@beartype
def default_secondary_discounts() -> list[SecondaryDiscount]:
    """Published group, corporate, seasonal and loyalty discounts."""
    return [
        SecondaryDiscount(
            code="GROUP_5",
            name="Group discount 5+ persons",
            discount_type=SecondaryDiscountType.GROUP,
            discount_percentage=Decimal("10"),
            min_persons_count=5,
            valid_from=_SINCE_2025,
        ),
        SecondaryDiscount(
            code="GROUP_10",
            name="Group discount 10+ persons",
            discount_type=SecondaryDiscountType.GROUP,
            discount_percentage=Decimal("15"),
            min_persons_count=10,
            valid_from=_SINCE_2025,
        ),
        SecondaryDiscount(
            code="GROUP_20",
            name="Group discount 20+ persons",
            discount_type=SecondaryDiscountType.GROUP,
            discount_percentage=Decimal("20"),
            min_persons_count=20,
            valid_from=_SINCE_2025,
        ),
        SecondaryDiscount(
            code="CORPORATE",
            name="Corporate discount",
            discount_type=SecondaryDiscountType.CORPORATE,
            discount_percentage=Decimal("20"),
            min_premium_amount=Decimal("100"),
            valid_from=_SINCE_2025,
        ),
        SecondaryDiscount(
            code="WINTER_SEASON",
            name="Winter season discount",
            discount_type=SecondaryDiscountType.SEASONAL,
            discount_percentage=Decimal("8"),
            valid_from=date(2025, 12, 1),
            valid_to=date(2026, 2, 28),
        ),
        SecondaryDiscount(
            code="SUMMER_SEASON",
            name="Summer season discount",
            discount_type=SecondaryDiscountType.SEASONAL,
            discount_percentage=Decimal("5"),
            valid_from=date(2025, 6, 1),
            valid_to=date(2025, 8, 31),
        ),
        SecondaryDiscount(
            code="LOYALTY_5",
            name="Loyalty discount 5%",
            discount_type=SecondaryDiscountType.LOYALTY,
            discount_percentage=Decimal("5"),
            valid_from=_SINCE_2025,
        ),
        SecondaryDiscount(
            code="LOYALTY_10",
            name="Loyalty discount 10%",
            discount_type=SecondaryDiscountType.LOYALTY,
            discount_percentage=Decimal("10"),
            valid_from=_SINCE_2025,
        ),
    ]


@beartype
def default_reference_data() -> InMemoryReferenceData:
    """Catalogue seeded with the published pricing tables."""
    countries = [
        CountryProfile(
            iso_code=iso,
            name=name,
            risk_coefficient=Decimal(coeff),
            valid_from=_SINCE_2020,
        )
        for iso, name, coeff in (
            ("ES", "Spain", "1.0"),
            ("FR", "France", "1.0"),
            ("DE", "Germany", "1.0"),
            ("IT", "Italy", "1.0"),
            ("AT", "Austria", "1.0"),
            ("CH", "Switzerland", "1.0"),
            ("TR", "Turkey", "1.3"),
            ("US", "United States", "1.3"),
            ("EG", "Egypt", "1.8"),
            ("IN", "India", "1.8"),
            ("AF", "Afghanistan", "3.0"),
        )
    ]
    coverage_levels = [
        CoverageLevel(
            code=code,
            coverage_amount=Decimal(amount),
            daily_rate=Decimal(rate),
            currency="EUR",
            valid_from=_SINCE_2020,
        )
        for code, amount, rate in (
            ("5000", "5000.00", "1.50"),
            ("10000", "10000.00", "2.00"),
            ("20000", "20000.00", "3.00"),
            ("50000", "50000.00", "4.50"),
            ("100000", "100000.00", "7.00"),
            ("200000", "200000.00", "12.00"),
            ("500000", "500000.00", "20.00"),
        )
    ]
    risk_types = [
        RiskType(
            code="TRAVEL_MEDICAL",
            name="Medical Coverage",
            coefficient=Decimal("0.00"),
            is_mandatory=True,
            valid_from=_SINCE_2020,
        )
    ] + [
        RiskType(
            code=code, name=name, coefficient=Decimal(coeff), valid_from=_SINCE_2020
        )
        for code, name, coeff in (
            ("SPORT_ACTIVITIES", "Sport Activities", "0.30"),
            ("EXTREME_SPORT", "Extreme Sport", "0.60"),
            ("PREGNANCY", "Pregnancy Coverage", "0.20"),
            ("CHRONIC_DISEASES", "Chronic Diseases", "0.40"),
            ("ACCIDENT_COVERAGE", "Accident Coverage", "0.20"),
            ("TRIP_CANCELLATION", "Trip Cancellation", "0.15"),
            ("LUGGAGE_LOSS", "Luggage Loss", "0.10"),
            ("FLIGHT_DELAY", "Flight Delay", "0.05"),
            ("CIVIL_LIABILITY", "Civil Liability", "0.10"),
        )
    ]
    age_coefficients = [
        AgeCoefficientRecord(
            age_from=lo,
            age_to=hi,
            coefficient=Decimal(coeff),
            description=label,
            valid_from=_SINCE_2020,
        )
        for lo, hi, coeff, label in (
            (0, 17, "0.8", "Children"),
            (18, 24, "0.9", "Young adults"),
            (25, 64, "1.0", "Adults"),
            (65, 74, "1.5", "Seniors"),
            (75, 80, "2.0", "Elderly"),
        )
    ]
    age_risk_modifiers = [
        AgeRiskModifier(
            risk_code=code,
            age_from=lo,
            age_to=hi,
            modifier=Decimal(mod),
            valid_from=_SINCE_2020,
        )
        for code, lo, hi, mod in (
            ("EXTREME_SPORT", 18, 35, "1.00"),
            ("EXTREME_SPORT", 36, 50, "1.30"),
            ("EXTREME_SPORT", 51, 65, "1.80"),
            ("EXTREME_SPORT", 66, 80, "2.50"),
            ("SPORT_ACTIVITIES", 18, 50, "1.00"),
            ("SPORT_ACTIVITIES", 51, 65, "1.20"),
            ("SPORT_ACTIVITIES", 66, 80, "1.50"),
            ("CHRONIC_DISEASES", 18, 45, "1.00"),
            ("CHRONIC_DISEASES", 46, 60, "1.40"),
            ("CHRONIC_DISEASES", 61, 70, "1.80"),
            ("CHRONIC_DISEASES", 71, 80, "2.50"),
        )
    ]
    duration_coefficients = [
        DurationCoefficientRecord(
            days_from=lo,
            days_to=hi,
            coefficient=Decimal(coeff),
            description=label,
            valid_from=_SINCE_2020,
        )
        for lo, hi, coeff, label in (
            (1, 7, "1.00", "Short trip (1 week)"),
            (8, 14, "0.95", "Medium trip (2 weeks)"),
            (15, 30, "0.90", "Long trip (1 month)"),
            (31, 60, "0.88", "Extended trip (2 months)"),
            (61, 90, "0.85", "Very long trip (3 months)"),
            (91, 365, "0.82", "Ultra long trip (3+ months)"),
        )
    ]
    # Demo rates; production values come from the pricing team's table.
    country_default_rates = [
        CountryDefaultRate(
            iso_code=iso,
            default_day_rate=Decimal(rate),
            description=label,
            valid_from=_SINCE_2025,
        )
        for iso, rate, label in (
            ("ES", "2.50", "Spain default day premium"),
            ("DE", "2.50", "Germany default day premium"),
            ("TR", "3.90", "Turkey default day premium"),
            ("US", "6.50", "United States default day premium"),
        )
    ]
    bundles = [
        Bundle(
            code="ACTIVE_TRAVELER",
            name="Active Traveler Package",
            discount_percentage=Decimal("15.00"),
            required_risks=("SPORT_ACTIVITIES", "ACCIDENT_COVERAGE"),
            valid_from=_SINCE_2020,
        ),
        Bundle(
            code="FULL_PROTECTION",
            name="Full Protection Package",
            discount_percentage=Decimal("20.00"),
            required_risks=("TRIP_CANCELLATION", "LUGGAGE_LOSS", "FLIGHT_DELAY"),
            valid_from=_SINCE_2020,
        ),
        Bundle(
            code="EXTREME_ADVENTURE",
            name="Extreme Adventure",
            discount_percentage=Decimal("18.00"),
            required_risks=("EXTREME_SPORT", "ACCIDENT_COVERAGE", "CHRONIC_DISEASES"),
            valid_from=_SINCE_2020,
        ),
    ]
    promo_codes = [
        PromoCode(
            code="SUMMER2025",
            description="Summer discount 10%",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            min_premium_amount=Decimal("50"),
            max_discount_amount=Decimal("100"),
            max_usage_count=1000,
            valid_from=date(2025, 6, 1),
            valid_to=date(2025, 8, 31),
        ),
        PromoCode(
            code="WINTER2025",
            description="Winter discount 15%",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("15"),
            min_premium_amount=Decimal("100"),
            max_discount_amount=Decimal("200"),
            max_usage_count=500,
            valid_from=date(2025, 12, 1),
            valid_to=date(2026, 12, 31),
        ),
        PromoCode(
            code="WELCOME50",
            description="Welcome bonus 50 EUR",
            discount_type=PromoDiscountType.FIXED_AMOUNT,
            discount_value=Decimal("50"),
            min_premium_amount=Decimal("200"),
            max_usage_count=100,
            valid_from=_SINCE_2025,
            valid_to=date(2026, 12, 31),
        ),
        PromoCode(
            code="FAMILY20",
            description="Family discount 20%",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("20"),
            min_premium_amount=Decimal("150"),
            max_discount_amount=Decimal("300"),
            valid_from=_SINCE_2025,
            valid_to=date(2026, 12, 31),
        ),
    ]
    return InMemoryReferenceData(
        countries=countries,
        coverage_levels=coverage_levels,
        risk_types=risk_types,
        age_coefficients=age_coefficients,
        age_risk_modifiers=age_risk_modifiers,
        duration_coefficients=duration_coefficients,
        country_default_rates=country_default_rates,
        bundles=bundles,
        promo_codes=promo_codes,
        secondary_discounts=default_secondary_discounts(),
    )
