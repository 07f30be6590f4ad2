"""Tariff index: read-only lookup structures built once from a dataset.

The dataset is the raw `tariff` mapping (see dataset.py). Building never
raises: a missing or malformed sub-table becomes an empty map and is
logged, so the calculators can still produce a (partly zeroed) result.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..numbers import ZERO, to_decimal
from ..schemas import PayGrade, StandbyLevel, StandbySlot

logger = logging.getLogger(__name__)

DEFAULT_WEEKLY_HOURS = Decimal(40)

DatedSeries = Tuple[Tuple[date, Decimal], ...]


@dataclass(frozen=True)
class TariffIndex:
    """Lookup tables derived from one tariff dataset.

    versions holds the effective dates of all wage tables and on-call
    rate tables, ascending and without duplicates.
    """

    weekly_hours: Decimal = DEFAULT_WEEKLY_HOURS
    versions: Tuple[date, ...] = ()
    wage_tables: Mapping[date, Mapping[PayGrade, Tuple[Decimal, ...]]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    oncall_rates: Mapping[date, Mapping[PayGrade, Decimal]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    standby_factors: Mapping[StandbySlot, Mapping[StandbyLevel, Decimal]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    standby_tax_free: Mapping[StandbySlot, Decimal] = field(
        default_factory=lambda: MappingProxyType({})
    )
    shift_allowance: DatedSeries = ()
    night_shift_rates: DatedSeries = ()


def parse_iso_date(value: Any) -> Optional[date]:
    """Parse a valid_from value (date or 'YYYY-MM-DD'), None if invalid."""
    # YAML timestamps load as datetime, which does not compare with date
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def _dated_entries(raw: Any, name: str) -> List[Tuple[date, Dict[str, Any]]]:
    """Return (valid_from, entry) pairs of a versioned sub-table."""
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        logger.warning(f"{name}: expected a list of versions, got {type(raw).__name__}; ignoring")
        return []

    entries = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            logger.warning(f"{name}[{i}]: not a mapping; skipped")
            continue
        effective = parse_iso_date(entry.get("valid_from"))
        if effective is None:
            logger.warning(f"{name}[{i}]: invalid valid_from {entry.get('valid_from')!r}; skipped")
            continue
        entries.append((effective, entry))
    return entries


def _grade_map(raw: Any, name: str) -> Dict[PayGrade, Any]:
    """Re-key a per-grade mapping by PayGrade, dropping unknown grades."""
    if not isinstance(raw, dict):
        logger.warning(f"{name}: expected a mapping of pay grades; ignoring")
        return {}
    grades = {}
    for key, value in raw.items():
        grade = PayGrade.parse(key)
        if grade is None:
            logger.debug(f"{name}: unknown pay grade {key!r} skipped")
            continue
        grades[grade] = value
    return grades


def _build_wage_tables(raw: Any) -> Dict[date, Mapping[PayGrade, Tuple[Decimal, ...]]]:
    tables = {}
    for effective, entry in _dated_entries(raw, "entgelttabellen"):
        grades = {}
        for grade, steps in _grade_map(entry.get("table"), f"entgelttabellen[{effective}]").items():
            if not isinstance(steps, (list, tuple)):
                logger.warning(f"entgelttabellen[{effective}].{grade.value}: steps are not a list; skipped")
                continue
            grades[grade] = tuple(to_decimal(amount) for amount in steps)
        tables[effective] = MappingProxyType(grades)
    return tables


def _build_oncall_rates(raw: Any) -> Dict[date, Mapping[PayGrade, Decimal]]:
    rates = {}
    for effective, entry in _dated_entries(raw, "bd_hourly"):
        by_grade = _grade_map(entry.get("by_eg"), f"bd_hourly[{effective}]")
        rates[effective] = MappingProxyType({g: to_decimal(v) for g, v in by_grade.items()})
    return rates


def _build_standby_factors(raw: Any) -> Dict[StandbySlot, Mapping[StandbyLevel, Decimal]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("rb_factors: expected a mapping of slots; ignoring")
        return {}
    factors = {}
    for key, row in raw.items():
        slot = StandbySlot.parse(key)
        if slot is None or not isinstance(row, dict):
            logger.warning(f"rb_factors.{key}: unknown slot or malformed row; skipped")
            continue
        levels = {}
        for level_key, pct in row.items():
            level = StandbyLevel.parse(level_key)
            if level is not None:
                levels[level] = to_decimal(pct)
        factors[slot] = MappingProxyType(levels)
    return factors


def _build_standby_tax_free(raw: Any) -> Dict[StandbySlot, Decimal]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("rb_taxfree: expected a mapping of slots; ignoring")
        return {}
    tax_free = {}
    for key, pct in raw.items():
        slot = StandbySlot.parse(key)
        if slot is None:
            logger.warning(f"rb_taxfree.{key}: unknown slot; skipped")
            continue
        tax_free[slot] = to_decimal(pct)
    return tax_free


def _build_series(raw: Any, name: str, value_key: str) -> DatedSeries:
    series = [(effective, to_decimal(entry.get(value_key))) for effective, entry in _dated_entries(raw, name)]
    # stable sort keeps the later of two same-day entries last
    series.sort(key=lambda item: item[0])
    return tuple(series)


def build_index(dataset: Optional[Mapping[str, Any]]) -> TariffIndex:
    """Build the lookup index for a tariff dataset.

    Args:
        dataset: The raw tariff mapping (weekly_hours, entgelttabellen,
            bd_hourly, rb_factors, rb_taxfree, schichtzulage,
            wechselschicht_nacht_eur_per_h). None or a non-mapping yields
            an empty index.

    Returns:
        Immutable TariffIndex
    """
    if not isinstance(dataset, Mapping):
        if dataset is not None:
            logger.warning(f"Tariff dataset is not a mapping ({type(dataset).__name__}); using empty index")
        return TariffIndex()

    weekly_hours = to_decimal(dataset.get("weekly_hours"))
    if weekly_hours <= ZERO:
        weekly_hours = DEFAULT_WEEKLY_HOURS

    wage_tables = _build_wage_tables(dataset.get("entgelttabellen"))
    oncall_rates = _build_oncall_rates(dataset.get("bd_hourly"))
    versions = tuple(sorted(set(wage_tables) | set(oncall_rates)))

    index = TariffIndex(
        weekly_hours=weekly_hours,
        versions=versions,
        wage_tables=MappingProxyType(wage_tables),
        oncall_rates=MappingProxyType(oncall_rates),
        standby_factors=MappingProxyType(_build_standby_factors(dataset.get("rb_factors"))),
        standby_tax_free=MappingProxyType(_build_standby_tax_free(dataset.get("rb_taxfree"))),
        shift_allowance=_build_series(dataset.get("schichtzulage"), "schichtzulage", "eur_per_month"),
        night_shift_rates=_build_series(
            dataset.get("wechselschicht_nacht_eur_per_h"), "wechselschicht_nacht_eur_per_h", "eur_per_hour"
        ),
    )
    logger.debug(
        f"Tariff index built: {len(versions)} version(s) "
        f"[{', '.join(v.isoformat() for v in versions)}], weekly_hours={weekly_hours}"
    )
    return index
