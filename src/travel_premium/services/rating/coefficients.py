# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Coefficient composition and base premium arithmetic.

Coefficients compose by multiplication and are never rounded. Money is
settled once per externally observable stage:

    base = settle(daily_rate × age × country × duration × days)
    total coefficient = age × country × duration × (1 + Σ modified risks)
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from beartype import beartype

from ...core.config import PricingSettings, get_settings
from ...core.errors import MissingReferenceDataError, PricingError
from ...core.logging_utils import get_logger
from ...core.result_types import Err, Ok, Result
from ...models.money import ONE, ZERO, settle
from ...models.quote import RiskPremiumDetail
from ...schemas.pricing import AdditionalRisks, ModifiedRisk
from ..reference_data import ReferenceDataSource

logger = get_logger(__name__)

NEUTRAL_MODIFIER = Decimal("1.0")


@beartype
def trip_days(start: date, end: date) -> int:
    """Nights between start and end (end exclusive)."""
    return (end - start).days


@beartype
def trip_days_inclusive(start: date, end: date) -> int:
    """Calendar days from start to end, both included."""
    return (end - start).days + 1


@beartype
class CoefficientComposer:
    """Combine pricing coefficients into totals and base premiums."""

    def __init__(
        self,
        reference_data: ReferenceDataSource,
        settings: PricingSettings | None = None,
    ) -> None:
        """Initialize with reference data and pricing settings."""
        self._reference_data = reference_data
        self._settings = settings or get_settings()

    @staticmethod
    @beartype
    def compose_base(
        daily_rate: Decimal,
        age_coefficient: Decimal,
        country_coefficient: Decimal,
        duration_coefficient: Decimal,
        days: int,
    ) -> Decimal:
        """Daily rate times every coefficient and the day count, settled once."""
        return settle(
            daily_rate
            * age_coefficient
            * country_coefficient
            * duration_coefficient
            * Decimal(days)
        )

    @staticmethod
    @beartype
    def compose_total_coefficient(
        age_coefficient: Decimal,
        country_coefficient: Decimal,
        duration_coefficient: Decimal,
        additional_risks_coefficient: Decimal,
    ) -> Decimal:
        """Exact product ``age × country × duration × (1 + Σ risks)``."""
        return (
            age_coefficient
            * country_coefficient
            * duration_coefficient
            * (ONE + additional_risks_coefficient)
        )

    @staticmethod
    @beartype
    def compose_premium(
        daily_rate: Decimal, total_coefficient: Decimal, days: int
    ) -> Decimal:
        """Daily rate times the total coefficient and day count, settled once."""
        return settle(daily_rate * total_coefficient * Decimal(days))

    @staticmethod
    @beartype
    def compose_country_default_base(
        default_day_rate: Decimal,
        age_coefficient: Decimal,
        duration_coefficient: Decimal,
        days: int,
    ) -> Decimal:
        """Country default rate times age, duration and days, settled once.

        The country coefficient is already part of the default day rate.

        Raises:
            ValueError: If the day count is not positive
        """
        if days <= 0:
            raise ValueError(f"Trip day count must be positive, got {days}")
        return settle(
            default_day_rate * age_coefficient * duration_coefficient * Decimal(days)
        )

    @staticmethod
    @beartype
    def apply_additional_risks(
        base_premium: Decimal, additional_risks_coefficient: Decimal
    ) -> Decimal:
        """Fold the risk sum into an already composed base premium."""
        if additional_risks_coefficient <= ZERO:
            return base_premium
        return settle(base_premium * (ONE + additional_risks_coefficient))

    @beartype
    def compose_additional_risks(
        self, selected_codes: Sequence[str], age: int, reference_date: date
    ) -> AdditionalRisks:
        """Sum age-modified coefficients of the selected optional risks.

        Mandatory and inactive risks are skipped. A missing age modifier
        leaves the base coefficient unchanged.
        """
        modified: list[ModifiedRisk] = []
        total = ZERO

        for code in selected_codes:
            risk = self._reference_data.find_active_risk_type(code, reference_date)
            if risk is None:
                logger.warning(
                    f"Risk type '{code}' not active on {reference_date}, skipped"
                )
                continue
            if risk.is_mandatory:
                continue

            modifier = self._reference_data.find_age_risk_modifier(
                risk.code, age, reference_date
            )
            if modifier is None:
                modifier = NEUTRAL_MODIFIER

            modified_coefficient = risk.coefficient * modifier
            total += modified_coefficient
            modified.append(
                ModifiedRisk(
                    risk_code=risk.code,
                    risk_name=risk.name,
                    base_coefficient=risk.coefficient,
                    age_modifier=modifier,
                    modified_coefficient=modified_coefficient,
                )
            )
            logger.debug(
                f"Risk '{risk.code}': base={risk.coefficient}, "
                f"age_modifier={modifier}, modified={modified_coefficient}"
            )

        return AdditionalRisks(total_coefficient=total, risks=tuple(modified))

    @beartype
    def build_risk_details(
        self,
        additional_risks: AdditionalRisks,
        daily_rate: Decimal,
        age_coefficient: Decimal,
        country_coefficient: Decimal,
        duration_coefficient: Decimal,
        start: date,
        end: date,
    ) -> Result[list[RiskPremiumDetail], PricingError]:
        """Premium attributed to the mandatory medical risk and each optional risk.

        Per-risk premiums use the inclusive day count. The medical premium is
        the composed base; each optional risk is that base times its modified
        coefficient.
        """
        mandatory_code = self._settings.mandatory_risk_code
        medical = self._reference_data.find_active_risk_type(mandatory_code, start)
        if medical is None:
            return Err(
                MissingReferenceDataError.for_resource(
                    "risk_type", mandatory_code, start, field="selected_risks"
                )
            )

        medical_premium = self.compose_base(
            daily_rate,
            age_coefficient,
            country_coefficient,
            duration_coefficient,
            trip_days_inclusive(start, end),
        )
        details = [
            RiskPremiumDetail(
                risk_code=medical.code,
                risk_name=medical.name,
                premium=medical_premium,
                coefficient=medical.coefficient,
                is_mandatory=True,
            )
        ]
        for risk in additional_risks.risks:
            details.append(
                RiskPremiumDetail(
                    risk_code=risk.risk_code,
                    risk_name=risk.risk_name,
                    premium=settle(medical_premium * risk.modified_coefficient),
                    coefficient=risk.base_coefficient,
                    age_modifier=risk.age_modifier,
                )
            )
        return Ok(details)
