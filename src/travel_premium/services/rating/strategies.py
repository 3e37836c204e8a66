# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Base premium strategies and strategy selection.

Two closed strategies share one interface. ``StrategySelector`` picks one per
request before any premium math runs, since the strategies read different
reference records.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import ClassVar

from attrs import frozen
from beartype import beartype

from ...core.config import PricingSettings, get_settings
from ...core.errors import (
    FallbackUsedWarning,
    MissingReferenceDataError,
    PricingError,
    PricingWarning,
)
from ...core.logging_utils import get_logger
from ...core.result_types import Err, Ok, Result
from ...models.money import ONE
from ...models.quote import CalculationMode, PremiumRequest
from ...models.reference import CountryDefaultRate, CountryProfile
from ...schemas.pricing import AdditionalRisks, AgeResolution, BaseResult
from ..reference_data import ReferenceDataSource
from .coefficients import CoefficientComposer
from .payout_limit import apply_payout_limit

logger = get_logger(__name__)


@frozen(kw_only=True)
class PricingContext:
    """Inputs resolved once per request and shared by both strategies."""

    start: date
    end: date
    days: int
    age: AgeResolution
    country: CountryProfile
    duration_coefficient: Decimal
    additional_risks: AdditionalRisks
    default_rate: CountryDefaultRate | None = None


@beartype
class PremiumStrategy(ABC):
    """Base class for base premium strategies."""

    mode: ClassVar[CalculationMode]

    def __init__(
        self,
        reference_data: ReferenceDataSource,
        composer: CoefficientComposer,
        settings: PricingSettings | None = None,
    ) -> None:
        """Initialize with shared collaborators."""
        self._reference_data = reference_data
        self._composer = composer
        self._settings = settings or get_settings()

    @abstractmethod
    def compute_base(
        self, request: PremiumRequest, context: PricingContext
    ) -> Result[BaseResult, PricingError]:
        """Compute the base premium before any discount."""
        pass


@beartype
class MedicalLevelStrategy(PremiumStrategy):
    """Coverage level daily rate × age × country × duration × risks × days."""

    mode: ClassVar[CalculationMode] = CalculationMode.MEDICAL_LEVEL

    @beartype
    def compute_base(
        self, request: PremiumRequest, context: PricingContext
    ) -> Result[BaseResult, PricingError]:
        """Compute the medical-level base premium with payout correction."""
        level_code = request.medical_risk_limit_level
        level = (
            self._reference_data.find_active_coverage_level(level_code, context.start)
            if level_code is not None
            else None
        )
        if level is None:
            return Err(
                MissingReferenceDataError.for_resource(
                    "coverage_level",
                    level_code,
                    context.start,
                    field="medical_risk_limit_level",
                )
            )

        risks_coefficient = context.additional_risks.total_coefficient
        total_coefficient = self._composer.compose_total_coefficient(
            context.age.coefficient,
            context.country.risk_coefficient,
            context.duration_coefficient,
            risks_coefficient,
        )
        raw_base = self._composer.compose_premium(
            level.daily_rate, total_coefficient, context.days
        )
        payout = apply_payout_limit(
            raw_base, level.coverage_amount, level.max_payout_amount
        )

        details = self._composer.build_risk_details(
            context.additional_risks,
            level.daily_rate,
            context.age.coefficient,
            context.country.risk_coefficient,
            context.duration_coefficient,
            context.start,
            context.end,
        )
        if isinstance(details, Err):
            return details

        logger.info(
            f"MEDICAL_LEVEL base premium {payout.adjusted_premium} "
            f"(level={level.code}, age={context.age.age}, "
            f"total_coeff={total_coefficient}, days={context.days})"
        )

        return Ok(
            BaseResult(
                mode=self.mode,
                currency=level.currency or self._settings.default_currency,
                daily_rate=level.daily_rate,
                age=context.age.age,
                age_coefficient=context.age.coefficient,
                age_group_description=context.age.description,
                age_fallback_used=context.age.fallback_used,
                country_iso_code=context.country.iso_code,
                country_name=context.country.name,
                country_coefficient=context.country.risk_coefficient,
                duration_coefficient=context.duration_coefficient,
                additional_risks_coefficient=risks_coefficient,
                total_coefficient=total_coefficient,
                days=context.days,
                raw_base_premium=raw_base,
                base_premium=payout.adjusted_premium,
                coverage_amount=level.coverage_amount,
                country_default_day_rate=(
                    context.default_rate.default_day_rate
                    if context.default_rate is not None
                    else None
                ),
                medical_payout_limit=level.coverage_amount,
                applied_payout_limit=payout.applied_payout_limit,
                payout_limit_applied=payout.payout_limit_applied,
                risk_details=tuple(details.unwrap()),
            )
        )


@beartype
class CountryDefaultStrategy(PremiumStrategy):
    """Country default day rate × age × duration × days, then × (1 + risks).

    The country coefficient is reported but never multiplied in: the default
    rate already includes it.
    """

    mode: ClassVar[CalculationMode] = CalculationMode.COUNTRY_DEFAULT

    @beartype
    def compute_base(
        self, request: PremiumRequest, context: PricingContext
    ) -> Result[BaseResult, PricingError]:
        """Compute the country-default base premium."""
        rate = context.default_rate
        if rate is None:
            return Err(
                MissingReferenceDataError.for_resource(
                    "country_default_rate",
                    request.country_iso_code,
                    context.start,
                    field="country_iso_code",
                )
            )

        risks_coefficient = context.additional_risks.total_coefficient
        base = self._composer.compose_country_default_base(
            rate.default_day_rate,
            context.age.coefficient,
            context.duration_coefficient,
            context.days,
        )
        base = self._composer.apply_additional_risks(base, risks_coefficient)
        total_coefficient = self._composer.compose_total_coefficient(
            context.age.coefficient,
            ONE,
            context.duration_coefficient,
            risks_coefficient,
        )

        details = self._composer.build_risk_details(
            context.additional_risks,
            rate.default_day_rate,
            context.age.coefficient,
            ONE,
            context.duration_coefficient,
            context.start,
            context.end,
        )
        if isinstance(details, Err):
            return details

        logger.info(
            f"COUNTRY_DEFAULT base premium {base} "
            f"(country={rate.iso_code}, default_rate={rate.default_day_rate}, "
            f"age={context.age.age}, days={context.days})"
        )

        return Ok(
            BaseResult(
                mode=self.mode,
                currency=rate.currency or self._settings.default_currency,
                daily_rate=rate.default_day_rate,
                age=context.age.age,
                age_coefficient=context.age.coefficient,
                age_group_description=context.age.description,
                age_fallback_used=context.age.fallback_used,
                country_iso_code=context.country.iso_code,
                country_name=context.country.name,
                country_coefficient=context.country.risk_coefficient,
                duration_coefficient=context.duration_coefficient,
                additional_risks_coefficient=risks_coefficient,
                total_coefficient=total_coefficient,
                days=context.days,
                raw_base_premium=base,
                base_premium=base,
                country_default_day_rate=rate.default_day_rate,
                risk_details=tuple(details.unwrap()),
            )
        )


@frozen(kw_only=True)
class StrategySelection:
    """Chosen strategy with the default rate record and any fallback warning."""

    mode: CalculationMode
    strategy: PremiumStrategy
    default_rate: CountryDefaultRate | None = None
    warnings: tuple[PricingWarning, ...] = ()


@beartype
class StrategySelector:
    """Choose between the medical-level and country-default strategies."""

    def __init__(
        self,
        reference_data: ReferenceDataSource,
        composer: CoefficientComposer,
        settings: PricingSettings | None = None,
    ) -> None:
        """Initialize both strategies once."""
        self._reference_data = reference_data
        self._strategies: dict[CalculationMode, PremiumStrategy] = {
            CalculationMode.MEDICAL_LEVEL: MedicalLevelStrategy(
                reference_data, composer, settings
            ),
            CalculationMode.COUNTRY_DEFAULT: CountryDefaultStrategy(
                reference_data, composer, settings
            ),
        }

    @beartype
    def get_strategy(self, mode: CalculationMode) -> PremiumStrategy:
        """Strategy registered for the mode."""
        return self._strategies[mode]

    @beartype
    def select(self, request: PremiumRequest, as_of: date) -> StrategySelection:
        """Use COUNTRY_DEFAULT only when requested and a rate record exists.

        Args:
            request: Premium request
            as_of: Agreement start date the rate record must be active on
        """
        default_rate = self._reference_data.find_default_day_rate(
            request.country_iso_code, as_of
        )

        if request.use_country_default_premium:
            if default_rate is not None:
                logger.info(
                    f"Using COUNTRY_DEFAULT strategy for {request.country_iso_code}"
                )
                return StrategySelection(
                    mode=CalculationMode.COUNTRY_DEFAULT,
                    strategy=self.get_strategy(CalculationMode.COUNTRY_DEFAULT),
                    default_rate=default_rate,
                )

            message = (
                f"No country default rate for '{request.country_iso_code}' on "
                f"{as_of}, falling back to MEDICAL_LEVEL"
            )
            logger.warning(message)
            return StrategySelection(
                mode=CalculationMode.MEDICAL_LEVEL,
                strategy=self.get_strategy(CalculationMode.MEDICAL_LEVEL),
                default_rate=None,
                warnings=(
                    FallbackUsedWarning(message=message, source="CALCULATION_MODE"),
                ),
            )

        logger.info("Using MEDICAL_LEVEL strategy")
        return StrategySelection(
            mode=CalculationMode.MEDICAL_LEVEL,
            strategy=self.get_strategy(CalculationMode.MEDICAL_LEVEL),
            default_rate=default_rate,
        )
