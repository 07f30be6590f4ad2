"""Monthly gross pay: resolve the version, run the calculators, sum up.

    total = table salary + on-call pay + standby pay
            + shift allowance + percentage supplements

The standby tax-free share is reported but not added.
"""

import logging

from ..schemas import CalculationRequest, CalculationResult
from .base_salary import base_monthly, default_step, hourly_from_monthly
from .index import TariffIndex
from .oncall import calc_oncall_pay, oncall_hourly_rate
from .standby import calc_standby_pay
from .supplements import REFERENCE_STEP, calc_supplements
from .versions import resolve_version

logger = logging.getLogger(__name__)


def evaluate(index: TariffIndex, request: CalculationRequest) -> CalculationResult:
    """Calculate itemized monthly gross pay for a request.

    Pure function of the index and the request. Missing tariff data
    zeroes the affected components instead of raising.

    Args:
        index: Tariff index from build_index()
        request: Validated calculation request

    Returns:
        CalculationResult
    """
    version = resolve_version(index, request.year, request.month)
    grade = request.pay_grade
    step = request.step if request.step is not None else default_step(index, version, grade)
    weekly_hours = index.weekly_hours

    monthly = base_monthly(index, version, grade, step)
    hourly = hourly_from_monthly(monthly, weekly_hours)

    # step-3 benchmark, own salary only when the grade has no table
    monthly_at_step3 = base_monthly(index, version, grade, REFERENCE_STEP) or monthly
    hourly_at_step3 = hourly_from_monthly(monthly_at_step3, weekly_hours)

    on_call = calc_oncall_pay(request.on_call, oncall_hourly_rate(index, version, grade))
    standby = calc_standby_pay(index, request.standby_hours, request.standby_level, hourly)
    supplements = calc_supplements(index, request.supplements, request.year, request.month, hourly_at_step3)

    grand_total = (
        monthly
        + on_call.total
        + standby.euro_total
        + supplements.shift_allowance
        + supplements.percentage_total
    )
    logger.debug(
        f"{request.year}-{request.month:02d} {grade.value}/{step}: version={version} "
        f"base={monthly} on_call={on_call.total} standby={standby.euro_total} "
        f"supplements={supplements.shift_total} total={grand_total}"
    )

    return CalculationResult(
        version=version,
        year=request.year,
        month=request.month,
        pay_grade=grade,
        step=step,
        weekly_hours=weekly_hours,
        base_monthly=monthly,
        base_hourly=hourly,
        on_call=on_call,
        standby=standby,
        supplements=supplements,
        grand_total=grand_total,
    )
