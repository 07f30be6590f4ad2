"""tariff - Tariff-versioned monthly pay calculation engine.

Scope:
- Index building from a raw tariff dataset (build_index)
- Effective-version resolution for a month
- Table salary, on-call duty, standby and statutory supplement pay
- Aggregation into an itemized result (evaluate)

Constraints:
- Pure calculation - no file, network or presentation access
- The index is built once per dataset and never mutated
- Missing data yields zeroed components, never an exception

Usage:
    from tarifcalc.sdk.tariff import build_index, evaluate
    from tarifcalc.sdk.schemas import CalculationRequest

    index = build_index(dataset["tariff"])
    result = evaluate(index, CalculationRequest(year=2025, month=6, pay_grade="EG II", step=3))
"""

from .index import TariffIndex, build_index
from .versions import list_versions, resolve_version, value_in_force
from .base_salary import (
    available_steps,
    base_monthly,
    default_step,
    hourly_from_monthly,
    monthly_hours,
)
from .oncall import calc_oncall_pay, oncall_hourly_rate
from .standby import calc_standby_pay
from .supplements import calc_supplements, night_shift_rate, shift_allowance
from .aggregate import evaluate

__all__ = [
    # Index
    "TariffIndex",
    "build_index",
    # Versions
    "resolve_version",
    "list_versions",
    "value_in_force",
    # Table salary
    "base_monthly",
    "hourly_from_monthly",
    "monthly_hours",
    "available_steps",
    "default_step",
    # Calculators
    "calc_oncall_pay",
    "oncall_hourly_rate",
    "calc_standby_pay",
    "calc_supplements",
    "shift_allowance",
    "night_shift_rate",
    # Aggregation
    "evaluate",
]
