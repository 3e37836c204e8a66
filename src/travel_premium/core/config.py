# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Pricing configuration using Pydantic Settings."""

from decimal import Decimal

from beartype import beartype
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    """Premium calculation settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PRICING_",
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,  # Immutable settings
        validate_default=True,
        extra="forbid",
    )

    # Premium rules
    minimum_premium: Decimal = Field(
        default=Decimal("10.00"),
        ge=Decimal("0"),
        description="Minimum final premium applied after all discounts",
    )
    default_currency: str = Field(
        default="EUR",
        min_length=3,
        max_length=3,
        description="Premium currency when the rate record carries none",
    )

    # Age rules
    max_insurable_age: int = Field(
        default=80,
        ge=1,
        le=120,
        description="Insurability ceiling in whole years",
    )
    age_coefficient_enabled: bool = Field(
        default=True,
        description="System-wide switch for the age coefficient",
    )

    # Risks and requests
    mandatory_risk_code: str = Field(
        default="TRAVEL_MEDICAL",
        min_length=1,
        description="Code of the always-included medical risk",
    )
    default_person_count: int = Field(
        default=1,
        ge=1,
        description="Person count used when the request carries none",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level for the pricing loggers",
    )

    @field_validator("default_currency")
    @classmethod
    def validate_currency(cls: type["PricingSettings"], v: str) -> str:
        """Currency must be an upper-case ISO 4217 code."""
        if not v.isalpha() or not v.isupper():
            raise ValueError(f"Invalid currency code: {v}")
        return v

    @field_validator("mandatory_risk_code")
    @classmethod
    def normalize_risk_code(cls: type["PricingSettings"], v: str) -> str:
        """Risk codes are compared upper-case."""
        return v.strip().upper()


_settings: PricingSettings | None = None


@beartype
def get_settings() -> PricingSettings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = PricingSettings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
