# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Pydantic models used as typed payloads for pricing pipeline Result objects.

Each pipeline stage hands the next one a frozen payload instead of a naked
tuple or dict, so both type checkers and runtime validation know the shape.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import PricingWarning
from ..models.quote import (
    AppliedDiscount,
    BundleDiscountResult,
    CalculationMode,
    PromoResult,
    RiskPremiumDetail,
)

__all__ = [
    "AgeResolution",
    "ModifiedRisk",
    "AdditionalRisks",
    "BaseResult",
    "DiscountResult",
    "DiscountStackResult",
    "FloorResult",
    "StepTrace",
]


class AgeResolution(BaseModel):
    """Resolved age with its coefficient and group label."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    age: int = Field(..., ge=0)
    coefficient: Decimal = Field(..., gt=0)
    description: str
    fallback_used: bool = False


class ModifiedRisk(BaseModel):
    """Optional risk coefficient after the age modifier."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    risk_code: str
    risk_name: str
    base_coefficient: Decimal = Field(..., ge=0)
    age_modifier: Decimal = Field(..., gt=0)
    modified_coefficient: Decimal = Field(..., ge=0)


class AdditionalRisks(BaseModel):
    """Sum of age-modified optional risk coefficients."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    total_coefficient: Decimal = Field(default=Decimal("0"), ge=0)
    risks: tuple[ModifiedRisk, ...] = Field(default_factory=tuple)


class BaseResult(BaseModel):
    """Base premium produced by a pricing strategy, before any discount."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    mode: CalculationMode
    currency: str
    daily_rate: Decimal = Field(..., gt=0)

    age: int
    age_coefficient: Decimal
    age_group_description: str
    age_fallback_used: bool = False

    country_iso_code: str
    country_name: str
    country_coefficient: Decimal

    duration_coefficient: Decimal
    additional_risks_coefficient: Decimal
    total_coefficient: Decimal
    days: int = Field(..., gt=0)

    raw_base_premium: Decimal = Field(..., ge=0, description="Before payout correction")
    base_premium: Decimal = Field(..., ge=0, description="After payout correction")

    coverage_amount: Decimal | None = None
    country_default_day_rate: Decimal | None = None
    medical_payout_limit: Decimal | None = None
    applied_payout_limit: Decimal | None = None
    payout_limit_applied: bool = False

    risk_details: tuple[RiskPremiumDetail, ...] = Field(default_factory=tuple)


class DiscountResult(BaseModel):
    """Best secondary discount for the current premium."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    code: str
    name: str
    discount_type: str
    percentage: Decimal = Field(..., gt=0)
    amount: Decimal = Field(..., ge=0)


class DiscountStackResult(BaseModel):
    """Promo code and secondary discount applied in sequence."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        validate_default=True,
        arbitrary_types_allowed=True,
    )

    applied_discounts: tuple[AppliedDiscount, ...] = Field(default_factory=tuple)
    total_discount: Decimal = Field(default=Decimal("0.00"), ge=0)
    remaining_premium: Decimal = Field(..., ge=0)
    promo_result: PromoResult | None = None
    warnings: tuple[PricingWarning, ...] = Field(default_factory=tuple)


class FloorResult(BaseModel):
    """Premium after minimum-premium enforcement."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        validate_default=True,
    )

    premium: Decimal = Field(..., ge=0)
    premium_before_floor: Decimal = Field(..., ge=0)
    minimum_premium: Decimal
    floor_applied: bool = False


class StepTrace(BaseModel):
    """Every intermediate value the audit trail is rebuilt from."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        validate_default=True,
    )

    mode: CalculationMode
    currency: str
    daily_rate: Decimal
    age_coefficient: Decimal
    country_coefficient: Decimal
    duration_coefficient: Decimal
    additional_risks_coefficient: Decimal
    days: int
    raw_base_premium: Decimal
    base_premium: Decimal
    payout_limit_applied: bool = False
    applied_payout_limit: Decimal | None = None
    coverage_amount: Decimal | None = None
    bundle: BundleDiscountResult
    premium_after_bundle: Decimal
    applied_discounts: tuple[AppliedDiscount, ...] = Field(default_factory=tuple)
    floor: FloorResult
