# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Core infrastructure for the travel premium engine."""

from .config import PricingSettings, clear_settings_cache, get_settings
from .errors import (
    CurrencyMismatchError,
    FallbackUsedWarning,
    InvalidDateError,
    MissingReferenceDataError,
    OutOfRangeError,
    PricingError,
    PricingWarning,
    PromoCodeRejected,
)
from .logging_utils import configure_logging, get_logger
from .result_types import Err, Ok, Result

__all__ = [
    "PricingSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
    "Ok",
    "Err",
    "Result",
    "PricingError",
    "MissingReferenceDataError",
    "OutOfRangeError",
    "InvalidDateError",
    "PricingWarning",
    "FallbackUsedWarning",
    "PromoCodeRejected",
    "CurrencyMismatchError",
]
