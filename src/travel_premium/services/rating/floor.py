# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Minimum premium enforcement after discount stacking."""

from beartype import beartype

from ...core.config import PricingSettings, get_settings
from ...core.logging_utils import get_logger
from ...models.money import Premium, settle
from ...schemas.pricing import FloorResult

logger = get_logger(__name__)


@beartype
class PremiumFloorEnforcer:
    """Clamp the discounted premium to the configured minimum.

    The premium arrives as a non-negative ``Premium``: discounts that would
    overshoot already stop at 0.00 in ``Premium.subtract``. A premium
    discounted down to zero stays at 0.00; the floor only lifts positive
    premiums that fall under the minimum.
    """

    def __init__(self, settings: PricingSettings | None = None) -> None:
        """Initialize with pricing settings."""
        self._settings = settings or get_settings()

    @beartype
    def enforce(self, premium: Premium) -> FloorResult:
        """Apply the floor exactly once."""
        minimum = self._settings.minimum_premium

        if premium.is_zero():
            logger.info("Premium fully discounted, minimum not applied")
            return FloorResult(
                premium=premium.amount,
                premium_before_floor=premium.amount,
                minimum_premium=minimum,
            )

        if premium.amount < minimum:
            logger.info(f"Premium {premium.amount} below minimum, raised to {minimum}")
            return FloorResult(
                premium=settle(minimum),
                premium_before_floor=premium.amount,
                minimum_premium=minimum,
                floor_applied=True,
            )

        return FloorResult(
            premium=premium.amount,
            premium_before_floor=premium.amount,
            minimum_premium=minimum,
        )
