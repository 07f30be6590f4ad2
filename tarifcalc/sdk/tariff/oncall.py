"""On-site on-call duty pay (Bereitschaftsdienst, BD).

All surcharges are additive on top of the base pay:

    base                = hours * rate
    night surcharge     = night hours * rate * 15%
    holiday surcharge   = holiday hours * rate * 25%
    threshold surcharge = hours beyond the 97th * rate * 5%

Night and holiday hours are subsets of the total: night is clamped to
[0, total] and holiday to [0, total - night].
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Union

from ..numbers import ZERO, clamp, non_negative
from ..schemas import OnCallBreakdown, OnCallHours, PayGrade
from .index import TariffIndex, parse_iso_date

logger = logging.getLogger(__name__)

NIGHT_SURCHARGE = Decimal("0.15")
HOLIDAY_SURCHARGE = Decimal("0.25")
THRESHOLD_SURCHARGE = Decimal("0.05")
THRESHOLD_HOURS = Decimal(97)


def oncall_hourly_rate(index: TariffIndex, version: Union[str, date, None], pay_grade: Any) -> Decimal:
    """On-call hourly rate for a grade in a version.

    If the version has no rate for the grade, the last rate known at or
    before that version is used. 0 if there is none.
    """
    effective = parse_iso_date(version) if version is not None else None
    grade = PayGrade.parse(pay_grade)
    if effective is None or grade is None:
        return ZERO

    exact = index.oncall_rates.get(effective, {})
    if grade in exact:
        return exact[grade]

    last = ZERO
    for candidate in index.versions:
        if candidate > effective:
            break
        rates = index.oncall_rates.get(candidate, {})
        if grade in rates:
            last = rates[grade]
    if last:
        logger.debug(f"No on-call rate for {grade.value} in {effective}; using last known rate {last}")
    return last


def calc_oncall_pay(hours: OnCallHours, rate: Decimal) -> OnCallBreakdown:
    """Compute on-call duty pay for a month.

    Args:
        hours: Total, night and holiday on-call hours
        rate: On-call hourly rate for the grade and version

    Returns:
        OnCallBreakdown with each surcharge itemized
    """
    total_hours = non_negative(hours.total)
    night = clamp(non_negative(hours.night), ZERO, total_hours)
    holiday = clamp(non_negative(hours.holiday), ZERO, total_hours - night)
    beyond_threshold = max(ZERO, total_hours - THRESHOLD_HOURS)

    base = total_hours * rate
    night_surcharge = night * rate * NIGHT_SURCHARGE
    holiday_surcharge = holiday * rate * HOLIDAY_SURCHARGE
    threshold_surcharge = beyond_threshold * rate * THRESHOLD_SURCHARGE

    return OnCallBreakdown(
        hourly_rate=rate,
        hours=total_hours,
        night_hours=night,
        holiday_hours=holiday,
        threshold_hours=beyond_threshold,
        base=base,
        night_surcharge=night_surcharge,
        holiday_surcharge=holiday_surcharge,
        threshold_surcharge=threshold_surcharge,
        total=base + night_surcharge + holiday_surcharge + threshold_surcharge,
    )
