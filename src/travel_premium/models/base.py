# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Base Pydantic model configuration for all pricing models.

Every reference record and transient pricing value is immutable: records
are read-only lookup data, values are created fresh per calculation.
"""

from datetime import date

from beartype import beartype
from pydantic import BaseModel, ConfigDict, Field, model_validator


@beartype
class BaseModelConfig(BaseModel):
    """Base model with strict configuration for all pricing entities.

    Enforces:
    - Immutability (frozen=True)
    - No extra fields allowed (extra="forbid")
    - Validation on assignment
    - Automatic whitespace stripping
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )


@beartype
class EffectiveDatedModel(BaseModelConfig):
    """Base model for reference records with a validity window."""

    valid_from: date = Field(
        default=date.min, description="First day the record applies"
    )
    valid_to: date | None = Field(
        default=None, description="Last day the record applies (open-ended if None)"
    )

    @model_validator(mode="after")
    def validate_window(self) -> "EffectiveDatedModel":
        """Validity window must not be inverted."""
        if self.valid_to is not None and self.valid_to < self.valid_from:
            raise ValueError(
                f"valid_to {self.valid_to} is before valid_from {self.valid_from}"
            )
        return self

    @beartype
    def is_active_on(self, as_of: date) -> bool:
        """Check whether the record applies on the given date."""
        if as_of < self.valid_from:
            return False
        return self.valid_to is None or as_of <= self.valid_to
