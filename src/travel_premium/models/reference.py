# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Read-only reference records consumed by the pricing pipeline.

Each record is valid on a window of dates; lookups always ask for the record
active on the agreement start date.
"""

from decimal import Decimal
from enum import Enum

from beartype import beartype
from pydantic import Field, field_validator, model_validator

from .base import EffectiveDatedModel


class PromoDiscountType(str, Enum):
    """How a promo code discount value is interpreted."""

    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


class SecondaryDiscountType(str, Enum):
    """Mutually exclusive secondary discount families."""

    GROUP = "GROUP"
    CORPORATE = "CORPORATE"
    SEASONAL = "SEASONAL"
    LOYALTY = "LOYALTY"


def _upper_code(v: str) -> str:
    return v.strip().upper()


@beartype
class CountryProfile(EffectiveDatedModel):
    """Destination country with its risk coefficient."""

    iso_code: str = Field(
        ..., min_length=2, max_length=2, description="ISO 3166 alpha-2"
    )
    name: str = Field(..., min_length=1, max_length=100)
    risk_coefficient: Decimal = Field(..., gt=0, description="Country risk multiplier")

    @field_validator("iso_code")
    @classmethod
    def normalize_iso_code(cls, v: str) -> str:
        """ISO codes are stored upper-case."""
        return _upper_code(v)


@beartype
class CoverageLevel(EffectiveDatedModel):
    """Medical coverage level: daily base rate and coverage ceiling."""

    code: str = Field(..., min_length=1, max_length=20)
    daily_rate: Decimal = Field(..., gt=0, description="Base premium per day")
    coverage_amount: Decimal = Field(..., gt=0, description="Medical coverage ceiling")
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    max_payout_amount: Decimal | None = Field(
        default=None, gt=0, description="Payout cap below the coverage ceiling"
    )

    @field_validator("code", "currency")
    @classmethod
    def normalize_code(cls, v: str | None) -> str | None:
        """Codes are stored upper-case."""
        return _upper_code(v) if v is not None else None


@beartype
class RiskType(EffectiveDatedModel):
    """Insurable risk with its base coefficient."""

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    coefficient: Decimal = Field(..., ge=0)
    is_mandatory: bool = False

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Risk codes are stored upper-case."""
        return _upper_code(v)


@beartype
class CountryDefaultRate(EffectiveDatedModel):
    """Per-day base rate for a country with the country risk already included."""

    iso_code: str = Field(..., min_length=2, max_length=2)
    default_day_rate: Decimal = Field(..., gt=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    description: str | None = None

    @field_validator("iso_code", "currency")
    @classmethod
    def normalize_code(cls, v: str | None) -> str | None:
        """Codes are stored upper-case."""
        return _upper_code(v) if v is not None else None


@beartype
class AgeCoefficientRecord(EffectiveDatedModel):
    """Age bracket coefficient."""

    age_from: int = Field(..., ge=0)
    age_to: int = Field(..., ge=0)
    coefficient: Decimal = Field(..., gt=0)
    description: str | None = None

    @model_validator(mode="after")
    def validate_bracket(self) -> "AgeCoefficientRecord":
        """Bracket bounds must be ordered."""
        if self.age_to < self.age_from:
            raise ValueError("age_to must not be below age_from")
        return self

    @beartype
    def covers(self, age: int) -> bool:
        """Check whether the age falls inside the bracket (inclusive)."""
        return self.age_from <= age <= self.age_to


@beartype
class AgeRiskModifier(EffectiveDatedModel):
    """Age-dependent multiplier for an optional risk coefficient."""

    risk_code: str = Field(..., min_length=1, max_length=50)
    age_from: int = Field(..., ge=0)
    age_to: int = Field(..., ge=0)
    modifier: Decimal = Field(..., gt=0)
    description: str | None = None

    @field_validator("risk_code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Risk codes are stored upper-case."""
        return _upper_code(v)

    @beartype
    def covers(self, age: int) -> bool:
        """Check whether the age falls inside the bracket (inclusive)."""
        return self.age_from <= age <= self.age_to


@beartype
class DurationCoefficientRecord(EffectiveDatedModel):
    """Trip-length bracket coefficient."""

    days_from: int = Field(..., ge=0)
    days_to: int = Field(..., ge=0)
    coefficient: Decimal = Field(..., gt=0)
    description: str | None = None

    @beartype
    def covers(self, days: int) -> bool:
        """Check whether the day count falls inside the bracket (inclusive)."""
        return self.days_from <= days <= self.days_to


@beartype
class Bundle(EffectiveDatedModel):
    """Named set of optional risks earning a discount when selected together."""

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    discount_percentage: Decimal = Field(..., ge=0, le=100)
    required_risks: tuple[str, ...] = Field(..., min_length=1)
    is_active: bool = True

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Bundle codes are stored upper-case."""
        return _upper_code(v)

    @field_validator("required_risks")
    @classmethod
    def normalize_required_risks(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Required risk codes are stored upper-case."""
        return tuple(_upper_code(code) for code in v)

    @beartype
    def is_satisfied_by(self, selected_risks: set[str]) -> bool:
        """Every required risk is among the selected ones."""
        return set(self.required_risks).issubset(selected_risks)


@beartype
class PromoCode(EffectiveDatedModel):
    """Promotional code definition."""

    code: str = Field(..., min_length=1, max_length=50)
    description: str | None = None
    discount_type: PromoDiscountType
    discount_value: Decimal = Field(..., gt=0)
    min_premium_amount: Decimal | None = Field(default=None, ge=0)
    max_discount_amount: Decimal | None = Field(default=None, gt=0)
    max_usage_count: int | None = Field(default=None, ge=0)
    current_usage_count: int = Field(default=0, ge=0)
    is_active: bool = True

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Promo codes are matched case-insensitively."""
        return _upper_code(v)

    @beartype
    def usage_exhausted(self) -> bool:
        """Check whether the usage limit has been reached."""
        return (
            self.max_usage_count is not None
            and self.current_usage_count >= self.max_usage_count
        )


@beartype
class SecondaryDiscount(EffectiveDatedModel):
    """Group, corporate, seasonal or loyalty discount definition."""

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    discount_type: SecondaryDiscountType
    discount_percentage: Decimal = Field(..., gt=0, le=100)
    min_persons_count: int | None = Field(default=None, ge=1)
    min_premium_amount: Decimal | None = Field(default=None, ge=0)
    is_active: bool = True

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Discount codes are stored upper-case."""
        return _upper_code(v)
