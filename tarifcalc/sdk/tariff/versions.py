"""Effective-version resolution.

A version applies from its valid_from date until the next version takes
effect. Lookups use binary search over the ascending version list.
"""

import logging
from bisect import bisect_right
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from ..numbers import ZERO
from .index import DatedSeries, TariffIndex

logger = logging.getLogger(__name__)

# Mid-month reference day avoids month-boundary ambiguity
REFERENCE_DAY = 15


def reference_date(year: int, month: int) -> date:
    """Date used to pick the tariff version for a month."""
    return date(year, month, REFERENCE_DAY)


def resolve_version_date(versions: Sequence[date], on: date) -> Optional[date]:
    """Latest version effective on `on`, else the earliest version.

    Returns None only when there are no versions at all.
    """
    if not versions:
        return None
    pos = bisect_right(versions, on)
    if pos == 0:
        logger.debug(f"{on} precedes all versions; falling back to earliest {versions[0]}")
        return versions[0]
    return versions[pos - 1]


def resolve_version(index: TariffIndex, year: int, month: int) -> Optional[str]:
    """Return the tariff version (ISO date) in force for year/month.

    Falls back to the earliest known version when the month precedes all
    versions; None if the index has no versions.
    """
    effective = resolve_version_date(index.versions, reference_date(year, month))
    return effective.isoformat() if effective else None


def value_in_force(series: DatedSeries, on: date) -> Decimal:
    """Value of a dated series on a date; 0 if no entry is effective yet."""
    pos = bisect_right([effective for effective, _ in series], on)
    if pos == 0:
        return ZERO
    return series[pos - 1][1]


def list_versions(index: TariffIndex) -> List[Dict[str, Any]]:
    """Describe each tariff version, oldest first.

    Returns:
        [
            {
                "version": "2025-04-01",
                "wage_table_grades": ["EG_I", "EG_II", ...],
                "oncall_rate_grades": ["EG_I", ...],
            },
            ...
        ]
    """
    return [
        {
            "version": effective.isoformat(),
            "wage_table_grades": [g.value for g in index.wage_tables.get(effective, {})],
            "oncall_rate_grades": [g.value for g in index.oncall_rates.get(effective, {})],
        }
        for effective in index.versions
    ]
