# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Sequential promo code and secondary discount stacking.

Order is fixed: the promo code first, then the best secondary discount. Each
stage is computed against the premium left after the previous stage, so the
discounts compound rather than add up as percentages of the original.
"""

from datetime import date

from beartype import beartype

from ...core.config import PricingSettings, get_settings
from ...core.errors import PricingWarning, PromoCodeRejected
from ...core.logging_utils import get_logger
from ...models.money import Premium
from ...models.quote import AppliedDiscount, PremiumRequest, PromoResult
from ...models.reference import PromoDiscountType
from ...schemas.pricing import DiscountStackResult
from ..discounts import SecondaryDiscountService
from ..promo_codes import PromoCodeService

logger = get_logger(__name__)

PROMO_CODE_SOURCE = "PROMO_CODE"


@beartype
class DiscountStackingEngine:
    """Apply a promo code and the best secondary discount in sequence."""

    def __init__(
        self,
        promo_codes: PromoCodeService,
        secondary_discounts: SecondaryDiscountService,
        settings: PricingSettings | None = None,
    ) -> None:
        """Initialize with the discount collaborators."""
        self._promo_codes = promo_codes
        self._secondary_discounts = secondary_discounts
        self._settings = settings or get_settings()

    @beartype
    def apply(
        self, premium: Premium, request: PremiumRequest, as_of: date
    ) -> DiscountStackResult:
        """Apply both discount stages to the bundle-discounted premium.

        Args:
            premium: Premium after the bundle discount
            request: Request carrying promo code, person count and corporate flag
            as_of: Agreement start date discounts must be valid on

        Returns:
            Applied discounts, total discount and the remaining premium
        """
        remaining = premium
        applied: list[AppliedDiscount] = []
        warnings: list[PricingWarning] = []
        promo_result: PromoResult | None = None

        if request.promo_code is not None:
            promo_result = self._promo_codes.apply_promo_code(
                request.promo_code, as_of, remaining.amount, remaining.currency
            )
            if not promo_result.is_valid:
                warnings.append(
                    PromoCodeRejected(
                        message=(
                            f"Promo code '{request.promo_code}' not applied: "
                            f"{promo_result.reason}"
                        ),
                        promo_code=request.promo_code,
                        reason=promo_result.reason or "Promo code rejected",
                    )
                )
            elif promo_result.discount_amount > 0:
                discount = Premium.of(promo_result.discount_amount, remaining.currency)
                after = remaining.subtract(discount)
                applied.append(
                    AppliedDiscount(
                        source=PROMO_CODE_SOURCE,
                        code=promo_result.promo_code or request.promo_code,
                        name=promo_result.description or promo_result.promo_code or "",
                        percentage=(
                            promo_result.discount_value
                            if promo_result.discount_type
                            == PromoDiscountType.PERCENTAGE.value
                            else None
                        ),
                        amount=discount.amount,
                        premium_before=remaining.amount,
                        premium_after=after.amount,
                    )
                )
                remaining = after

        person_count = request.person_count
        if person_count is None or person_count < 1:
            person_count = self._settings.default_person_count

        if not remaining.is_zero():
            best = self._secondary_discounts.best_discount(
                remaining.amount, person_count, request.is_corporate, as_of
            )
            if best is not None and best.amount > 0:
                discount = Premium.of(best.amount, remaining.currency)
                after = remaining.subtract(discount)
                applied.append(
                    AppliedDiscount(
                        source=best.discount_type,
                        code=best.code,
                        name=best.name,
                        percentage=best.percentage,
                        amount=discount.amount,
                        premium_before=remaining.amount,
                        premium_after=after.amount,
                    )
                )
                logger.info(
                    f"Secondary discount '{best.code}' applied: "
                    f"{remaining.amount} -> {after.amount}"
                )
                remaining = after

        total = premium.subtract(remaining).amount
        return DiscountStackResult(
            applied_discounts=tuple(applied),
            total_discount=total,
            remaining_premium=remaining.amount,
            promo_result=promo_result,
            warnings=tuple(warnings),
        )
