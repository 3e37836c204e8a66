# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Secondary discounts: group, corporate, seasonal and loyalty.

The families are mutually exclusive; only the single largest discount is
ever applied.
"""

from datetime import date
from decimal import Decimal

from beartype import beartype

from ..core.logging_utils import get_logger
from ..models.money import percentage_of
from ..models.reference import SecondaryDiscount, SecondaryDiscountType
from ..schemas.pricing import DiscountResult
from .reference_data import ReferenceDataSource

logger = get_logger(__name__)


@beartype
class SecondaryDiscountService:
    """Pick the best secondary discount for a premium."""

    def __init__(self, reference_data: ReferenceDataSource) -> None:
        """Initialize with reference data."""
        self._reference_data = reference_data

    @staticmethod
    @beartype
    def is_applicable(
        discount: SecondaryDiscount,
        current_premium: Decimal,
        person_count: int,
        is_corporate: bool,
        as_of: date,
    ) -> bool:
        """Check activity, validity window, minimum premium and type rule."""
        if not discount.is_active or not discount.is_active_on(as_of):
            return False
        if (
            discount.min_premium_amount is not None
            and current_premium < discount.min_premium_amount
        ):
            return False

        if discount.discount_type == SecondaryDiscountType.GROUP:
            return (
                discount.min_persons_count is not None
                and person_count >= discount.min_persons_count
            )
        if discount.discount_type == SecondaryDiscountType.CORPORATE:
            return is_corporate
        # Seasonal and loyalty discounts only depend on the window
        return True

    @beartype
    def best_discount(
        self,
        current_premium: Decimal,
        person_count: int,
        is_corporate: bool,
        as_of: date,
    ) -> DiscountResult | None:
        """Largest applicable discount amount; first in catalogue order on ties."""
        best: DiscountResult | None = None
        for discount in self._reference_data.list_secondary_discounts():
            if not self.is_applicable(
                discount, current_premium, person_count, is_corporate, as_of
            ):
                continue

            amount = min(
                percentage_of(current_premium, discount.discount_percentage),
                current_premium,
            )
            if best is None or amount > best.amount:
                best = DiscountResult(
                    code=discount.code,
                    name=discount.name,
                    discount_type=discount.discount_type.value,
                    percentage=discount.discount_percentage,
                    amount=amount,
                )

        if best is not None:
            logger.debug(f"Best secondary discount: {best.code} = {best.amount}")
        return best
