# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Money value object and the single decimal rounding policy.

All monetary settlement goes through ``settle``: two decimal places,
round-half-up. Coefficients and running products are never rounded; they
only get rounded for display through ``format_decimal``.
"""

from decimal import ROUND_HALF_UP, Decimal

from beartype import beartype
from pydantic import Field, field_validator

from ..core.errors import CurrencyMismatchError
from .base import BaseModelConfig

MONEY_SCALE = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0")
ONE = Decimal("1")


@beartype
def settle(amount: Decimal) -> Decimal:
    """Round a monetary amount to 2 places, half-up."""
    return amount.quantize(MONEY_SCALE, rounding=ROUND_HALF_UP)


@beartype
def percentage_of(amount: Decimal, percentage: Decimal) -> Decimal:
    """Return ``amount × percentage / 100`` settled to 2 places."""
    return settle(amount * percentage / HUNDRED)


@beartype
def format_decimal(value: Decimal, places: int = 2) -> str:
    """Format a decimal for display with half-up rounding."""
    quantum = Decimal(1).scaleb(-places)
    return f"{value.quantize(quantum, rounding=ROUND_HALF_UP):f}"


@beartype
class Premium(BaseModelConfig):
    """Non-negative monetary amount tagged with a currency."""

    amount: Decimal = Field(..., ge=ZERO, description="Settled premium amount")
    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 code")

    @field_validator("amount")
    @classmethod
    def settle_amount(cls, v: Decimal) -> Decimal:
        """Amounts are always held at money scale."""
        return settle(v)

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Currency codes are upper-case."""
        return v.upper()

    @classmethod
    @beartype
    def of(cls, amount: Decimal | str, currency: str) -> "Premium":
        """Create a premium, clamping negative amounts to zero."""
        value = Decimal(amount)
        return cls(amount=max(value, ZERO), currency=currency)

    def _check_currency(self, other: "Premium", operation: str) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot {operation} premiums with different currencies: "
                f"{self.currency} and {other.currency}"
            )

    @beartype
    def subtract(self, other: "Premium") -> "Premium":
        """Subtract a premium, clamping the result at zero."""
        self._check_currency(other, "subtract")
        return Premium(
            amount=max(self.amount - other.amount, ZERO), currency=self.currency
        )

    @beartype
    def is_zero(self) -> bool:
        """Check whether the amount is zero."""
        return self.amount == ZERO

    def __str__(self) -> str:
        return f"{format_decimal(self.amount)} {self.currency}"
