"""Table salary lookup and individual hourly rate."""

from datetime import date
from decimal import Decimal
from typing import Any, List, Tuple, Union

from ..numbers import ZERO, to_decimal
from ..schemas import PayGrade
from .index import TariffIndex, parse_iso_date

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12
DEFAULT_STEP = 3

Version = Union[str, date, None]


def grade_steps(index: TariffIndex, version: Version, pay_grade: Any) -> Tuple[Decimal, ...]:
    """Monthly amounts of a grade in a version; empty if absent."""
    effective = parse_iso_date(version) if version is not None else None
    grade = PayGrade.parse(pay_grade)
    if effective is None or grade is None:
        return ()
    return index.wage_tables.get(effective, {}).get(grade, ())


def base_monthly(index: TariffIndex, version: Version, pay_grade: Any, step: int) -> Decimal:
    """Monthly table salary for a grade and 1-based seniority step.

    The step is clamped into the table, so step 0 returns the first
    amount and a step beyond the table returns the last. Missing
    version or grade yields 0.
    """
    steps = grade_steps(index, version, pay_grade)
    if not steps:
        return ZERO
    i = min(len(steps) - 1, max(0, int(step) - 1))
    return steps[i]


def available_steps(index: TariffIndex, version: Version, pay_grade: Any) -> List[Tuple[int, Decimal]]:
    """(step, monthly amount) pairs of a grade's table, step 1 first."""
    return [(i + 1, amount) for i, amount in enumerate(grade_steps(index, version, pay_grade))]


def default_step(index: TariffIndex, version: Version, pay_grade: Any) -> int:
    """Step 3, or the highest step when the table is shorter; 1 if empty."""
    count = len(grade_steps(index, version, pay_grade))
    return min(count, DEFAULT_STEP) if count else 1


def monthly_hours(weekly_hours: Any) -> Decimal:
    """Average working hours per month (weekly * 52 / 12)."""
    return to_decimal(weekly_hours) * WEEKS_PER_YEAR / MONTHS_PER_YEAR


def hourly_from_monthly(monthly: Any, weekly_hours: Any) -> Decimal:
    """Individual hourly rate: monthly salary / average monthly hours.

    Computed as monthly * 12 / (weekly * 52) so no rounded intermediate
    enters the division. Returns 0 when there are no working hours.

    Example:
        hourly_from_monthly(7992, 40) -> 46.1076923... (7992 / 173.33...)
    """
    yearly_hours = to_decimal(weekly_hours) * WEEKS_PER_YEAR
    if yearly_hours <= ZERO:
        return ZERO
    return to_decimal(monthly) * MONTHS_PER_YEAR / yearly_hours
