# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Payout limit correction for coverage levels with a capped payout."""

from decimal import ROUND_HALF_UP, Decimal

from attrs import frozen
from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.money import settle

logger = get_logger(__name__)

RATIO_SCALE = Decimal("0.0000000001")


@frozen
class PayoutLimitResult:
    """Premium after the payout correction and the limit that was used."""

    adjusted_premium: Decimal
    applied_payout_limit: Decimal
    payout_limit_applied: bool


@beartype
def apply_payout_limit(
    raw_premium: Decimal,
    coverage_amount: Decimal,
    max_payout_amount: Decimal | None,
) -> PayoutLimitResult:
    """Scale the premium by ``max_payout / coverage`` when payout is capped.

    The ratio is rounded half-up to 10 places before it is applied; the
    adjusted premium is settled to 2 places.
    """
    if max_payout_amount is None or max_payout_amount >= coverage_amount:
        logger.debug(
            f"Payout limit not applicable: max_payout={max_payout_amount}, "
            f"coverage={coverage_amount}"
        )
        return PayoutLimitResult(
            adjusted_premium=raw_premium,
            applied_payout_limit=(
                max_payout_amount if max_payout_amount is not None else coverage_amount
            ),
            payout_limit_applied=False,
        )

    ratio = (max_payout_amount / coverage_amount).quantize(
        RATIO_SCALE, rounding=ROUND_HALF_UP
    )
    adjusted = settle(raw_premium * ratio)
    logger.info(
        f"Payout limit applied: coverage={coverage_amount}, "
        f"max_payout={max_payout_amount}, ratio={ratio}, "
        f"{raw_premium} -> {adjusted}"
    )
    return PayoutLimitResult(
        adjusted_premium=adjusted,
        applied_payout_limit=max_payout_amount,
        payout_limit_applied=True,
    )
