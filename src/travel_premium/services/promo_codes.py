# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Promo code validation and discount calculation.

Applying a code never mutates the promo code record: usage counters are
owned by whatever persists accepted quotes.
"""

from datetime import date
from decimal import Decimal

from beartype import beartype

from ..core.logging_utils import get_logger
from ..models.money import percentage_of, settle
from ..models.quote import PromoResult
from ..models.reference import PromoCode, PromoDiscountType
from .reference_data import ReferenceDataSource

logger = get_logger(__name__)


@beartype
class PromoCodeService:
    """Validate promo codes and compute their discount."""

    def __init__(self, reference_data: ReferenceDataSource) -> None:
        """Initialize with reference data."""
        self._reference_data = reference_data

    @beartype
    def apply_promo_code(
        self,
        code: str | None,
        as_of: date,
        current_premium: Decimal,
        currency: str,
    ) -> PromoResult:
        """Validate the code for the date and premium and compute its discount.

        Args:
            code: Promo code as entered, matched case-insensitively
            as_of: Agreement start date
            current_premium: Premium the discount is computed against
            currency: Currency of the premium, used in rejection reasons

        Returns:
            PromoResult with ``is_valid`` False and a reason when rejected
        """
        if code is None or not code.strip():
            return self._rejected(code, "Promo code is empty")

        promo = self._reference_data.find_promo_code(code)
        if promo is None:
            logger.warning(f"Promo code not found: {code}")
            return self._rejected(code, "Promo code not found or expired")

        reason = self._validate(promo, as_of, current_premium, currency)
        if reason is not None:
            logger.warning(f"Promo code validation failed: {code} - {reason}")
            return self._rejected(code, reason)

        discount = self.calculate_discount(promo, current_premium)
        logger.info(f"Promo code '{promo.code}' applied, discount {discount}")
        return PromoResult(
            promo_code=promo.code,
            is_valid=True,
            discount_amount=discount,
            discount_type=promo.discount_type.value,
            discount_value=promo.discount_value,
            description=promo.description,
        )

    @staticmethod
    @beartype
    def calculate_discount(promo: PromoCode, current_premium: Decimal) -> Decimal:
        """Discount capped at the promo maximum, then at the premium."""
        if promo.discount_type == PromoDiscountType.PERCENTAGE:
            discount = percentage_of(current_premium, promo.discount_value)
        else:
            discount = promo.discount_value

        if (
            promo.max_discount_amount is not None
            and discount > promo.max_discount_amount
        ):
            discount = promo.max_discount_amount

        if discount > current_premium:
            discount = current_premium

        return settle(discount)

    @staticmethod
    def _validate(
        promo: PromoCode, as_of: date, current_premium: Decimal, currency: str
    ) -> str | None:
        if not promo.is_active:
            return "Promo code is not active"
        if as_of < promo.valid_from:
            return "Promo code is not yet valid"
        if promo.valid_to is not None and as_of > promo.valid_to:
            return "Promo code has expired"
        if (
            promo.min_premium_amount is not None
            and current_premium < promo.min_premium_amount
        ):
            return (
                f"Minimum premium amount for this promo code is "
                f"{settle(promo.min_premium_amount)} {currency}"
            )
        if promo.usage_exhausted():
            return "Promo code usage limit reached"
        return None

    @staticmethod
    def _rejected(code: str | None, reason: str) -> PromoResult:
        return PromoResult(promo_code=code, is_valid=False, reason=reason)
