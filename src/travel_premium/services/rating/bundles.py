# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Risk bundle discounts."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.money import ZERO, percentage_of
from ...models.quote import BundleDiscountResult
from ...models.reference import Bundle
from ..reference_data import ReferenceDataSource

logger = get_logger(__name__)


@beartype
class RiskBundleDiscountEngine:
    """Find the best applicable bundle and compute its discount."""

    def __init__(self, reference_data: ReferenceDataSource) -> None:
        """Initialize with reference data."""
        self._reference_data = reference_data

    @staticmethod
    @beartype
    def discount_amount(base_premium: Decimal, bundle: Bundle) -> Decimal:
        """Bundle percentage of the base premium, never more than the base."""
        amount = percentage_of(base_premium, bundle.discount_percentage)
        return min(amount, base_premium)

    @beartype
    def best_bundle(
        self,
        selected_risks: Sequence[str],
        reference_date: date,
        base_premium: Decimal,
    ) -> Bundle | None:
        """Bundle yielding the largest discount amount; first wins on ties."""
        if not selected_risks:
            return None

        best: Bundle | None = None
        best_amount = ZERO
        for bundle in self._reference_data.find_applicable_bundles(
            selected_risks, reference_date
        ):
            amount = self.discount_amount(base_premium, bundle)
            if best is None or amount > best_amount:
                best, best_amount = bundle, amount
        return best

    @beartype
    def apply(
        self,
        selected_risks: Sequence[str],
        reference_date: date,
        base_premium: Decimal,
    ) -> BundleDiscountResult:
        """Bundle discount outcome; a zero result when nothing qualifies."""
        bundle = self.best_bundle(selected_risks, reference_date, base_premium)
        if bundle is None:
            return BundleDiscountResult()

        amount = self.discount_amount(base_premium, bundle)
        logger.info(
            f"Applied bundle '{bundle.code}' with {bundle.discount_percentage}% "
            f"discount = {amount}"
        )
        return BundleDiscountResult(
            bundle_code=bundle.code,
            bundle_name=bundle.name,
            discount_percentage=bundle.discount_percentage,
            discount_amount=amount,
        )
