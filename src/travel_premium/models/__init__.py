# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Domain models for the travel premium engine.

Reference records are read-only lookup data; requests, premiums and results
are transient values created fresh per calculation.
"""

from .base import BaseModelConfig, EffectiveDatedModel
from .money import Premium, format_decimal, percentage_of, settle
from .quote import (
    AppliedDiscount,
    BundleDiscountResult,
    CalculationMode,
    CalculationStep,
    PremiumCalculationResult,
    PremiumRequest,
    PromoResult,
    RiskPremiumDetail,
)
from .reference import (
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

__all__ = [
    # Base models
    "BaseModelConfig",
    "EffectiveDatedModel",
    # Money
    "Premium",
    "settle",
    "percentage_of",
    "format_decimal",
    # Reference records
    "CountryProfile",
    "CoverageLevel",
    "RiskType",
    "CountryDefaultRate",
    "AgeCoefficientRecord",
    "AgeRiskModifier",
    "DurationCoefficientRecord",
    "Bundle",
    "PromoCode",
    "PromoDiscountType",
    "SecondaryDiscount",
    "SecondaryDiscountType",
    # Request and result
    "CalculationMode",
    "PremiumRequest",
    "PremiumCalculationResult",
    "RiskPremiumDetail",
    "CalculationStep",
    "BundleDiscountResult",
    "AppliedDiscount",
    "PromoResult",
]
