# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Premium request and calculation result models."""

from datetime import date
from decimal import Decimal
from enum import Enum

from beartype import beartype
from pydantic import Field, computed_field, field_validator

from .base import BaseModelConfig


class CalculationMode(str, Enum):
    """Base premium strategies."""

    MEDICAL_LEVEL = "MEDICAL_LEVEL"
    COUNTRY_DEFAULT = "COUNTRY_DEFAULT"


@beartype
class PremiumRequest(BaseModelConfig):
    """Input for a single premium calculation.

    Dates are optional at the model level so that a missing date is reported
    by the pipeline as an ``InvalidDateError`` rather than a validation error.
    """

    person_birth_date: date | None = None
    agreement_date_from: date | None = None
    agreement_date_to: date | None = None
    country_iso_code: str = Field(..., min_length=2, max_length=2)
    medical_risk_limit_level: str | None = Field(default=None, max_length=20)
    selected_risks: list[str] = Field(default_factory=list)
    promo_code: str | None = Field(default=None, max_length=50)
    person_count: int | None = None
    is_corporate: bool = False
    use_country_default_premium: bool = False
    apply_age_coefficient: bool | None = None

    @field_validator("country_iso_code")
    @classmethod
    def normalize_country(cls, v: str) -> str:
        """Country codes are matched upper-case."""
        return v.upper()

    @field_validator("medical_risk_limit_level")
    @classmethod
    def normalize_level(cls, v: str | None) -> str | None:
        """Blank coverage level means no level."""
        if v is None or not v.strip():
            return None
        return v.strip().upper()

    @field_validator("selected_risks")
    @classmethod
    def normalize_selected_risks(cls, v: list[str]) -> list[str]:
        """Upper-case, drop blanks and duplicates, keep first-seen order."""
        seen: list[str] = []
        for code in v:
            normalized = code.strip().upper()
            if normalized and normalized not in seen:
                seen.append(normalized)
        return seen


@beartype
class RiskPremiumDetail(BaseModelConfig):
    """Premium attributed to one included risk."""

    risk_code: str
    risk_name: str
    premium: Decimal = Field(..., ge=0)
    coefficient: Decimal = Field(..., ge=0)
    age_modifier: Decimal = Field(default=Decimal("1.0"), gt=0)
    is_mandatory: bool = False


@beartype
class CalculationStep(BaseModelConfig):
    """One line of the audit trail."""

    description: str
    formula: str
    result: Decimal


@beartype
class BundleDiscountResult(BaseModelConfig):
    """Outcome of the bundle discount stage; zero when no bundle applies."""

    bundle_code: str | None = None
    bundle_name: str | None = None
    discount_percentage: Decimal = Field(default=Decimal("0"), ge=0)
    discount_amount: Decimal = Field(default=Decimal("0.00"), ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def applied(self) -> bool:
        """Whether a bundle discount was applied."""
        return self.bundle_code is not None and self.discount_amount > 0


@beartype
class AppliedDiscount(BaseModelConfig):
    """One discount taken off the premium after the bundle stage."""

    source: str = Field(..., description="PROMO_CODE or a secondary discount type")
    code: str
    name: str
    percentage: Decimal | None = None
    amount: Decimal = Field(..., gt=0)
    premium_before: Decimal = Field(..., ge=0)
    premium_after: Decimal = Field(..., ge=0)


@beartype
class PromoResult(BaseModelConfig):
    """Outcome of applying a promo code."""

    promo_code: str | None
    is_valid: bool
    discount_amount: Decimal = Field(default=Decimal("0.00"), ge=0)
    discount_type: str | None = None
    discount_value: Decimal | None = None
    description: str | None = None
    reason: str | None = None


@beartype
class PremiumCalculationResult(BaseModelConfig):
    """Full calculation output with the auditable breakdown."""

    calculation_mode: CalculationMode
    currency: str
    agreement_date_from: date

    premium: Decimal = Field(..., ge=0, description="Final premium")
    base_daily_rate: Decimal
    coverage_amount: Decimal | None = None
    country_default_day_rate: Decimal | None = None

    age: int
    age_coefficient: Decimal
    age_group_description: str

    country_iso_code: str
    country_name: str
    country_coefficient: Decimal

    duration_coefficient: Decimal
    additional_risks_coefficient: Decimal
    total_coefficient: Decimal
    days: int

    medical_payout_limit: Decimal | None = None
    applied_payout_limit: Decimal | None = None
    payout_limit_applied: bool = False

    base_premium: Decimal = Field(..., ge=0)
    bundle_discount: BundleDiscountResult
    premium_after_bundle: Decimal = Field(..., ge=0)
    applied_discounts: list[AppliedDiscount] = Field(default_factory=list)
    total_discount: Decimal = Field(default=Decimal("0.00"), ge=0)
    promo_code_result: PromoResult | None = None
    premium_before_floor: Decimal = Field(..., ge=0)
    floor_applied: bool = False

    risk_details: list[RiskPremiumDetail] = Field(default_factory=list)
    calculation_steps: list[CalculationStep] = Field(default_factory=list)
    formula: str
    warnings: list[dict[str, str | None]] = Field(default_factory=list)
