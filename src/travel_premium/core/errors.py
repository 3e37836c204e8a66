# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Pricing error and warning records.

Terminal problems (missing reference data, out-of-range age, bad dates) are
returned inside ``Err`` and abort the calculation. Non-fatal conditions
(fallback tables, rejected promo codes) are ``PricingWarning`` records that
ride along with a successful result.
"""

from datetime import date
from decimal import Decimal
from typing import ClassVar

from attrs import frozen
from beartype import beartype


@frozen(kw_only=True)
class PricingError:
    """Base record for terminal pricing failures."""

    code: ClassVar[str] = "PRICING_ERROR"
    is_terminal: ClassVar[bool] = True

    message: str
    field: str | None = None
    resource: str | None = None

    @beartype
    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "field": self.field,
            "resource": self.resource,
        }

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@frozen(kw_only=True)
class MissingReferenceDataError(PricingError):
    """A required lookup record does not exist for the agreement date."""

    code: ClassVar[str] = "MISSING_REFERENCE_DATA"

    identifier: str | None = None
    as_of: date | None = None

    @classmethod
    @beartype
    def for_resource(
        cls,
        resource: str,
        identifier: str | None,
        as_of: date | None,
        field: str | None = None,
    ) -> "MissingReferenceDataError":
        """Build the error with a standard message."""
        return cls(
            message=f"No active {resource} '{identifier}' found for {as_of}",
            field=field,
            resource=resource,
            identifier=identifier,
            as_of=as_of,
        )


@frozen(kw_only=True)
class OutOfRangeError(PricingError):
    """A value is outside insurable bounds."""

    code: ClassVar[str] = "OUT_OF_RANGE"

    value: int | Decimal | None = None
    minimum: int | Decimal | None = None
    maximum: int | Decimal | None = None


@frozen(kw_only=True)
class InvalidDateError(PricingError):
    """A required date is missing or dates are in the wrong order."""

    code: ClassVar[str] = "INVALID_DATE"


@frozen(kw_only=True)
class PricingWarning:
    """Base record for non-fatal pricing signals."""

    code: ClassVar[str] = "PRICING_WARNING"
    is_terminal: ClassVar[bool] = False

    message: str

    @beartype
    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for serialization."""
        return {"code": self.code, "message": self.message}


@frozen(kw_only=True)
class FallbackUsedWarning(PricingWarning):
    """Documented fallback values replaced unavailable reference data."""

    code: ClassVar[str] = "FALLBACK_USED"

    source: str

    @beartype
    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for serialization."""
        return {"code": self.code, "message": self.message, "source": self.source}


@frozen(kw_only=True)
class PromoCodeRejected(PricingWarning):
    """Promo code was not applied; the premium is priced without it."""

    code: ClassVar[str] = "PROMO_CODE_REJECTED"

    promo_code: str | None
    reason: str

    @beartype
    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "promo_code": self.promo_code,
            "reason": self.reason,
        }


class CurrencyMismatchError(ValueError):
    """Arithmetic between premiums in different currencies."""
