# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Travel insurance premium calculation engine."""

from .core.result_types import Err, Ok, Result
from .models.quote import CalculationMode, PremiumCalculationResult, PremiumRequest
from .services.reference_data import InMemoryReferenceData, default_reference_data
from .services.rating.premium_engine import PremiumEngine

__version__ = "0.1.0"

__all__ = [
    "PremiumEngine",
    "PremiumRequest",
    "PremiumCalculationResult",
    "CalculationMode",
    "InMemoryReferenceData",
    "default_reference_data",
    "Ok",
    "Err",
    "Result",
]
