# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Business logic service layer."""

from ..core.result_types import Err, Ok, Result
from .discounts import SecondaryDiscountService
from .promo_codes import PromoCodeService
from .reference_data import (
    InMemoryReferenceData,
    ReferenceDataSource,
    default_reference_data,
    default_secondary_discounts,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "ReferenceDataSource",
    "InMemoryReferenceData",
    "default_reference_data",
    "default_secondary_discounts",
    "PromoCodeService",
    "SecondaryDiscountService",
]
