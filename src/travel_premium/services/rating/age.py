# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Age resolution and age coefficients.

The age coefficient comes from the reference data first. When no bracket
covers the age, a fixed built-in table is used instead and the caller is told
through ``AgeResolution.fallback_used``.
"""

from datetime import date
from decimal import Decimal

from beartype import beartype

from ...core.config import PricingSettings, get_settings
from ...core.errors import InvalidDateError, OutOfRangeError, PricingError
from ...core.logging_utils import get_logger
from ...core.result_types import Err, Ok, Result
from ...schemas.pricing import AgeResolution
from ..reference_data import ReferenceDataSource

logger = get_logger(__name__)

NEUTRAL_AGE_COEFFICIENT = Decimal("1.0")

# (upper age bound inclusive, coefficient, group label)
_AGE_BRACKETS: tuple[tuple[int, Decimal, str], ...] = (
    (5, Decimal("1.1"), "Infants and toddlers"),
    (17, Decimal("0.9"), "Children and teenagers"),
    (30, Decimal("1.0"), "Young adults"),
    (40, Decimal("1.1"), "Adults"),
    (50, Decimal("1.3"), "Middle-aged"),
    (60, Decimal("1.6"), "Senior"),
    (70, Decimal("2.0"), "Elderly"),
    (80, Decimal("2.5"), "Very elderly"),
)


def _bracket_for(age: int) -> tuple[int, Decimal, str]:
    for bracket in _AGE_BRACKETS:
        if age <= bracket[0]:
            return bracket
    return _AGE_BRACKETS[-1]


@beartype
def fallback_coefficient(age: int) -> Decimal:
    """Built-in age coefficient used when the reference data has no match."""
    return _bracket_for(age)[1]


@beartype
def age_group_description(age: int) -> str:
    """Fixed age group label."""
    return _bracket_for(age)[2]


@beartype
def years_between(birth_date: date, reference_date: date) -> int:
    """Whole years elapsed from birth date to reference date."""
    had_birthday = (reference_date.month, reference_date.day) >= (
        birth_date.month,
        birth_date.day,
    )
    return reference_date.year - birth_date.year - (0 if had_birthday else 1)


@beartype
class AgeResolver:
    """Resolve age at the trip start and its pricing coefficient."""

    def __init__(
        self,
        reference_data: ReferenceDataSource,
        settings: PricingSettings | None = None,
    ) -> None:
        """Initialize with reference data and pricing settings."""
        self._reference_data = reference_data
        self._settings = settings or get_settings()

    @beartype
    def resolve_age(
        self, birth_date: date | None, reference_date: date
    ) -> Result[int, PricingError]:
        """Compute age in whole years at the reference date."""
        if birth_date is None:
            return Err(
                InvalidDateError(
                    message="Birth date is required",
                    field="person_birth_date",
                )
            )
        if birth_date > reference_date:
            return Err(
                InvalidDateError(
                    message=(
                        f"Birth date {birth_date} is after the reference date "
                        f"{reference_date}"
                    ),
                    field="person_birth_date",
                )
            )
        return Ok(years_between(birth_date, reference_date))

    @beartype
    def resolve_coefficient(
        self, age: int, reference_date: date, *, enabled: bool = True
    ) -> Result[AgeResolution, PricingError]:
        """Find the age coefficient valid on the reference date.

        Args:
            age: Age in whole years
            reference_date: Date the lookup must be valid on
            enabled: When False the coefficient is exactly 1.0

        Returns:
            Result containing the age resolution or an OutOfRangeError
        """
        max_age = self._settings.max_insurable_age
        if age < 0 or age > max_age:
            return Err(
                OutOfRangeError(
                    message=f"Age {age} is outside insurable range 0-{max_age}",
                    field="age",
                    value=age,
                    minimum=0,
                    maximum=max_age,
                )
            )

        description = age_group_description(age)

        if not enabled:
            logger.debug(f"Age coefficient disabled, using {NEUTRAL_AGE_COEFFICIENT}")
            return Ok(
                AgeResolution(
                    age=age,
                    coefficient=NEUTRAL_AGE_COEFFICIENT,
                    description=description,
                )
            )

        coefficient = self._reference_data.find_age_coefficient(age, reference_date)
        if coefficient is not None:
            return Ok(
                AgeResolution(age=age, coefficient=coefficient, description=description)
            )

        fallback = fallback_coefficient(age)
        logger.warning(
            f"No age coefficient found for age {age} on {reference_date}, "
            f"using built-in fallback {fallback}"
        )
        return Ok(
            AgeResolution(
                age=age,
                coefficient=fallback,
                description=description,
                fallback_used=True,
            )
        )
