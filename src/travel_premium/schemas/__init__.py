# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Typed payloads exchanged between pricing pipeline stages."""

from .pricing import (
    AdditionalRisks,
    AgeResolution,
    BaseResult,
    DiscountResult,
    DiscountStackResult,
    FloorResult,
    ModifiedRisk,
    StepTrace,
)

__all__ = [
    "AgeResolution",
    "ModifiedRisk",
    "AdditionalRisks",
    "BaseResult",
    "DiscountResult",
    "DiscountStackResult",
    "FloorResult",
    "StepTrace",
]
