# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Premium engine that orchestrates the whole pricing pipeline.

Flow: validate dates → select strategy → resolve age, country, duration and
optional risks → strategy base premium → bundle discount → promo and
secondary discounts → minimum premium → calculation steps.
"""

from beartype import beartype

from ...core.config import PricingSettings, get_settings
from ...core.errors import (
    FallbackUsedWarning,
    InvalidDateError,
    MissingReferenceDataError,
    PricingError,
    PricingWarning,
)
from ...core.logging_utils import get_logger
from ...core.performance_monitor import performance_monitor
from ...core.result_types import Err, Ok, Result, result_from_optional
from ...models.money import Premium
from ...models.quote import PremiumCalculationResult, PremiumRequest
from ...schemas.pricing import StepTrace
from ..discounts import SecondaryDiscountService
from ..promo_codes import PromoCodeService
from ..reference_data import ReferenceDataSource
from .age import AgeResolver
from .bundles import RiskBundleDiscountEngine
from .coefficients import CoefficientComposer, trip_days
from .discount_stacking import DiscountStackingEngine
from .floor import PremiumFloorEnforcer
from .steps import CalculationStepsBuilder
from .strategies import PricingContext, StrategySelector

logger = get_logger(__name__)


@beartype
class PremiumEngine:
    """Single entry point for travel premium calculations.

    The engine holds no per-request state: every call builds its values
    fresh and only reads reference data.
    """

    def __init__(
        self,
        reference_data: ReferenceDataSource,
        settings: PricingSettings | None = None,
    ) -> None:
        """Wire the pipeline components around one reference data source."""
        self._settings = settings or get_settings()
        self._reference_data = reference_data
        self._age_resolver = AgeResolver(reference_data, self._settings)
        self._composer = CoefficientComposer(reference_data, self._settings)
        self._selector = StrategySelector(
            reference_data, self._composer, self._settings
        )
        self._bundles = RiskBundleDiscountEngine(reference_data)
        self._discounts = DiscountStackingEngine(
            PromoCodeService(reference_data),
            SecondaryDiscountService(reference_data),
            self._settings,
        )
        self._floor = PremiumFloorEnforcer(self._settings)
        self._steps = CalculationStepsBuilder()

    @beartype
    @performance_monitor("calculate_premium")
    def calculate_premium(
        self, request: PremiumRequest
    ) -> Result[PremiumCalculationResult, PricingError]:
        """Calculate the premium with its full breakdown.

        Args:
            request: Premium request

        Returns:
            Result containing the calculation result or a terminal pricing error
        """
        start = request.agreement_date_from
        end = request.agreement_date_to
        if start is None:
            return Err(
                InvalidDateError(
                    message="Agreement start date is required",
                    field="agreement_date_from",
                )
            )
        if end is None:
            return Err(
                InvalidDateError(
                    message="Agreement end date is required",
                    field="agreement_date_to",
                )
            )
        if end <= start:
            return Err(
                InvalidDateError(
                    message=(
                        f"Agreement end date {end} must be after start date {start}"
                    ),
                    field="agreement_date_to",
                )
            )

        warnings: list[PricingWarning] = []

        selection = self._selector.select(request, start)
        warnings.extend(selection.warnings)

        age_result = self._age_resolver.resolve_age(request.person_birth_date, start)
        if age_result.is_err():
            return Err(age_result.unwrap_err())

        enabled = (
            request.apply_age_coefficient
            if request.apply_age_coefficient is not None
            else self._settings.age_coefficient_enabled
        )
        resolution_result = self._age_resolver.resolve_coefficient(
            age_result.unwrap(), start, enabled=enabled
        )
        if resolution_result.is_err():
            return Err(resolution_result.unwrap_err())
        age = resolution_result.unwrap()
        if age.fallback_used:
            warnings.append(
                FallbackUsedWarning(
                    message=(
                        f"Built-in age coefficient {age.coefficient} used for age "
                        f"{age.age}"
                    ),
                    source="AGE_COEFFICIENT",
                )
            )

        country_result = result_from_optional(
            self._reference_data.find_active_country(request.country_iso_code, start),
            MissingReferenceDataError.for_resource(
                "country", request.country_iso_code, start, field="country_iso_code"
            ),
        )
        if country_result.is_err():
            return Err(country_result.unwrap_err())
        country = country_result.unwrap()

        days = trip_days(start, end)
        context = PricingContext(
            start=start,
            end=end,
            days=days,
            age=age,
            country=country,
            duration_coefficient=self._reference_data.find_duration_coefficient(
                days, start
            ),
            additional_risks=self._composer.compose_additional_risks(
                request.selected_risks, age.age, start
            ),
            default_rate=selection.default_rate,
        )

        base_result = selection.strategy.compute_base(request, context)
        if base_result.is_err():
            return Err(base_result.unwrap_err())
        base = base_result.unwrap()

        bundle = self._bundles.apply(request.selected_risks, start, base.base_premium)
        after_bundle = Premium.of(base.base_premium, base.currency).subtract(
            Premium.of(bundle.discount_amount, base.currency)
        )

        stack = self._discounts.apply(after_bundle, request, start)
        warnings.extend(stack.warnings)

        floor = self._floor.enforce(
            Premium(amount=stack.remaining_premium, currency=base.currency)
        )

        trace = StepTrace(
            mode=base.mode,
            currency=base.currency,
            daily_rate=base.daily_rate,
            age_coefficient=base.age_coefficient,
            country_coefficient=base.country_coefficient,
            duration_coefficient=base.duration_coefficient,
            additional_risks_coefficient=base.additional_risks_coefficient,
            days=base.days,
            raw_base_premium=base.raw_base_premium,
            base_premium=base.base_premium,
            payout_limit_applied=base.payout_limit_applied,
            applied_payout_limit=base.applied_payout_limit,
            coverage_amount=base.coverage_amount,
            bundle=bundle,
            premium_after_bundle=after_bundle.amount,
            applied_discounts=stack.applied_discounts,
            floor=floor,
        )

        logger.info(
            f"{base.mode.value} premium {floor.premium} {base.currency} "
            f"(base={base.base_premium}, bundle={bundle.discount_amount}, "
            f"discounts={stack.total_discount}, floor_applied={floor.floor_applied})"
        )

        return Ok(
            PremiumCalculationResult(
                calculation_mode=base.mode,
                currency=base.currency,
                agreement_date_from=start,
                premium=floor.premium,
                base_daily_rate=base.daily_rate,
                coverage_amount=base.coverage_amount,
                country_default_day_rate=base.country_default_day_rate,
                age=base.age,
                age_coefficient=base.age_coefficient,
                age_group_description=base.age_group_description,
                country_iso_code=base.country_iso_code,
                country_name=base.country_name,
                country_coefficient=base.country_coefficient,
                duration_coefficient=base.duration_coefficient,
                additional_risks_coefficient=base.additional_risks_coefficient,
                total_coefficient=base.total_coefficient,
                days=base.days,
                medical_payout_limit=base.medical_payout_limit,
                applied_payout_limit=base.applied_payout_limit,
                payout_limit_applied=base.payout_limit_applied,
                base_premium=base.base_premium,
                bundle_discount=bundle,
                premium_after_bundle=after_bundle.amount,
                applied_discounts=list(stack.applied_discounts),
                total_discount=stack.total_discount,
                promo_code_result=stack.promo_result,
                premium_before_floor=stack.remaining_premium,
                floor_applied=floor.floor_applied,
                risk_details=list(base.risk_details),
                calculation_steps=self._steps.build(trace),
                formula=self._steps.build_formula(trace),
                warnings=[warning.to_dict() for warning in warnings],
            )
        )
