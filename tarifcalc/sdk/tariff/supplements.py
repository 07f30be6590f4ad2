"""Statutory supplements outside on-call and standby duty.

- Permanent shift work: flat monthly allowance (dated series)
- Night work in a rotating schedule: flat EUR per hour (dated series)
- Sunday work: 40% of the step-3 hourly rate
- Holiday work without compensatory time off: 135% of the step-3 hourly rate
- Holiday work with compensatory time off: 35% of the step-3 hourly rate

Percentage supplements are benchmarked against step 3 of the person's
grade regardless of their own step.
"""

from datetime import date
from decimal import Decimal

from ..numbers import ZERO
from ..schemas import SupplementBreakdown, SupplementInputs
from .index import TariffIndex
from .versions import value_in_force

SUNDAY_PCT = Decimal("0.40")
HOLIDAY_NO_COMP_PCT = Decimal("1.35")
HOLIDAY_WITH_COMP_PCT = Decimal("0.35")

REFERENCE_STEP = 3


def series_reference_date(year: int, month: int) -> date:
    """Allowance series are looked up on the first day of the month."""
    return date(year, month, 1)


def shift_allowance(index: TariffIndex, year: int, month: int) -> Decimal:
    """Monthly permanent-shift allowance in force for year/month."""
    return value_in_force(index.shift_allowance, series_reference_date(year, month))


def night_shift_rate(index: TariffIndex, year: int, month: int) -> Decimal:
    """Rotating-schedule night rate (EUR/h) in force for year/month."""
    return value_in_force(index.night_shift_rates, series_reference_date(year, month))


def calc_supplements(
    index: TariffIndex,
    inputs: SupplementInputs,
    year: int,
    month: int,
    hourly_at_step3: Decimal,
) -> SupplementBreakdown:
    """Compute statutory supplements for a month.

    Args:
        index: Tariff index holding the allowance series
        inputs: Supplement hours and the permanent-shift flag
        year, month: Requested month
        hourly_at_step3: Hourly rate derived from the step-3 table salary

    Returns:
        SupplementBreakdown
    """
    night_rate = night_shift_rate(index, year, month)
    return SupplementBreakdown(
        shift_allowance=shift_allowance(index, year, month) if inputs.permanent_shift else ZERO,
        night_shift_rate=night_rate,
        night_shift_sum=inputs.night_shift_hours * night_rate,
        hourly_at_step3=hourly_at_step3,
        sunday_sum=inputs.sunday_hours * (hourly_at_step3 * SUNDAY_PCT),
        holiday_no_comp_sum=inputs.holiday_hours_no_comp * (hourly_at_step3 * HOLIDAY_NO_COMP_PCT),
        holiday_with_comp_sum=inputs.holiday_hours_with_comp * (hourly_at_step3 * HOLIDAY_WITH_COMP_PCT),
    )
