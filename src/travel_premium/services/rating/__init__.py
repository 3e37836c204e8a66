# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Premium calculation pipeline services.

This package provides:
- Age resolution with a built-in coefficient fallback
- Coefficient composition and base premium strategies
- Risk bundle discounts
- Promo code and secondary discount stacking
- Minimum premium enforcement
- Calculation step audit trail
"""

from .age import AgeResolver, age_group_description, fallback_coefficient
from .bundles import RiskBundleDiscountEngine
from .coefficients import CoefficientComposer, trip_days, trip_days_inclusive
from .discount_stacking import DiscountStackingEngine
from .floor import PremiumFloorEnforcer
from .payout_limit import PayoutLimitResult, apply_payout_limit
from .premium_engine import PremiumEngine
from .steps import CalculationStepsBuilder
from .strategies import (
    CountryDefaultStrategy,
    MedicalLevelStrategy,
    PremiumStrategy,
    PricingContext,
    StrategySelection,
    StrategySelector,
)

__all__ = [
    "AgeResolver",
    "age_group_description",
    "fallback_coefficient",
    "CoefficientComposer",
    "trip_days",
    "trip_days_inclusive",
    "PremiumStrategy",
    "MedicalLevelStrategy",
    "CountryDefaultStrategy",
    "PricingContext",
    "StrategySelection",
    "StrategySelector",
    "PayoutLimitResult",
    "apply_payout_limit",
    "RiskBundleDiscountEngine",
    "DiscountStackingEngine",
    "PremiumFloorEnforcer",
    "CalculationStepsBuilder",
    "PremiumEngine",
]
