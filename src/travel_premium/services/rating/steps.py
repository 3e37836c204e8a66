# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.


"""Audit trail of every multiplication and subtraction in a calculation.

Steps are rebuilt from a finished ``StepTrace`` by pure functions. Running
products are carried unrounded and only formatted for display: coefficients
and running products to 4 places, money to 2, both half-up. Stages with no
effect are left out, so the number of steps depends on the data.
"""

from decimal import Decimal

from beartype import beartype

from ...models.money import ONE, ZERO, format_decimal
from ...models.quote import CalculationMode, CalculationStep
from ...schemas.pricing import StepTrace
from .discount_stacking import PROMO_CODE_SOURCE


def _money(value: Decimal) -> str:
    return format_decimal(value, 2)


def _coeff(value: Decimal) -> str:
    return format_decimal(value, 4)


@beartype
class CalculationStepsBuilder:
    """Build calculation steps and the one-line formula."""

    @beartype
    def build(self, trace: StepTrace) -> list[CalculationStep]:
        """Ordered calculation steps for the trace."""
        is_country_default = trace.mode == CalculationMode.COUNTRY_DEFAULT
        currency = trace.currency
        steps: list[CalculationStep] = []

        if is_country_default:
            steps.append(
                CalculationStep(
                    description=(
                        "Country default day premium (country risk already included)"
                    ),
                    formula=f"Default Day Rate = {_money(trace.daily_rate)} {currency}",
                    result=trace.daily_rate,
                )
            )
        else:
            steps.append(
                CalculationStep(
                    description="Base daily rate (medical level)",
                    formula=f"Daily Rate = {_money(trace.daily_rate)} {currency}",
                    result=trace.daily_rate,
                )
            )

        after_age = trace.daily_rate * trace.age_coefficient
        steps.append(
            CalculationStep(
                description="Age coefficient applied",
                formula=(
                    f"{_money(trace.daily_rate)} × {_coeff(trace.age_coefficient)} "
                    f"(age coeff) = {_coeff(after_age)}"
                ),
                result=after_age,
            )
        )

        running = after_age
        if not is_country_default:
            after_country = running * trace.country_coefficient
            steps.append(
                CalculationStep(
                    description="Country risk coefficient applied",
                    formula=(
                        f"{_coeff(running)} × {_coeff(trace.country_coefficient)} "
                        f"(country coeff) = {_coeff(after_country)}"
                    ),
                    result=after_country,
                )
            )
            running = after_country

        after_duration = running * trace.duration_coefficient
        steps.append(
            CalculationStep(
                description=(
                    "Duration coefficient applied "
                    "[country coeff is baked into base rate]"
                    if is_country_default
                    else "Duration coefficient applied"
                ),
                formula=(
                    f"{_coeff(running)} × {_coeff(trace.duration_coefficient)} "
                    f"(duration coeff) = {_coeff(after_duration)}"
                ),
                result=after_duration,
            )
        )
        running = after_duration

        if trace.additional_risks_coefficient > ZERO:
            after_risks = running * (ONE + trace.additional_risks_coefficient)
            steps.append(
                CalculationStep(
                    description="Additional risks (age-modified)",
                    formula=(
                        f"{_coeff(running)} × "
                        f"(1 + {_coeff(trace.additional_risks_coefficient)}) "
                        f"= {_coeff(after_risks)}"
                    ),
                    result=after_risks,
                )
            )

        steps.append(
            CalculationStep(
                description="Multiply by trip days",
                formula=(
                    f"× {trace.days} days = "
                    f"{_money(trace.raw_base_premium)} {currency}"
                ),
                result=trace.raw_base_premium,
            )
        )

        if trace.payout_limit_applied and trace.applied_payout_limit is not None:
            coverage = trace.coverage_amount or trace.applied_payout_limit
            steps.append(
                CalculationStep(
                    description="Payout limit correction applied",
                    formula=(
                        f"{_money(trace.raw_base_premium)} × (payout limit "
                        f"{_money(trace.applied_payout_limit)} / coverage "
                        f"{_money(coverage)}) = {_money(trace.base_premium)} {currency}"
                    ),
                    result=trace.base_premium,
                )
            )

        if trace.bundle.discount_amount > ZERO:
            steps.append(
                CalculationStep(
                    description="Bundle discount applied",
                    formula=(
                        f"{_money(trace.base_premium)} - "
                        f"{_money(trace.bundle.discount_amount)} (bundle discount) "
                        f"= {_money(trace.premium_after_bundle)} {currency}"
                    ),
                    result=trace.premium_after_bundle,
                )
            )

        for discount in trace.applied_discounts:
            if discount.source == PROMO_CODE_SOURCE:
                description = "Promo code discount applied"
                label = f"promo {discount.code}"
            else:
                description = f"{discount.source.capitalize()} discount applied"
                label = discount.code
            steps.append(
                CalculationStep(
                    description=description,
                    formula=(
                        f"{_money(discount.premium_before)} - "
                        f"{_money(discount.amount)} ({label}) "
                        f"= {_money(discount.premium_after)} {currency}"
                    ),
                    result=discount.premium_after,
                )
            )

        floor = trace.floor
        if floor.floor_applied:
            steps.append(
                CalculationStep(
                    description="Minimum premium applied",
                    formula=(
                        f"{_money(floor.premium_before_floor)} < "
                        f"{_money(floor.minimum_premium)} (minimum) "
                        f"= {_money(floor.premium)} {currency}"
                    ),
                    result=floor.premium,
                )
            )

        return steps

    @beartype
    def build_formula(self, trace: StepTrace) -> str:
        """One-line summary of the composed formula."""
        is_country_default = trace.mode == CalculationMode.COUNTRY_DEFAULT
        rate_label = "country default rate" if is_country_default else "daily rate"
        parts = [
            f"Premium = {_money(trace.daily_rate)} ({rate_label})",
            f"{_coeff(trace.age_coefficient)} (age)",
        ]
        if not is_country_default:
            parts.append(f"{_coeff(trace.country_coefficient)} (country)")
        parts.append(f"{_coeff(trace.duration_coefficient)} (duration)")
        if trace.additional_risks_coefficient > ZERO:
            parts.append(f"(1 + {_coeff(trace.additional_risks_coefficient)}) (risks)")
        parts.append(f"{trace.days} days")

        formula = " × ".join(parts)
        if trace.bundle.discount_amount > ZERO:
            formula += f" - {_money(trace.bundle.discount_amount)} (bundle discount)"
        return formula
