"""Off-site standby pay (Rufbereitschaft, RB).

Standby hours are paid as a working-time equivalent: each slot's hours
count with a percentage that depends on the slot and the standby level,
and the equivalent hours are paid at the person's own hourly rate
(derived from their table salary, not the on-call duty rate).

A tax-free share of each slot's pay is reported for display. It is part
of the standby pay already and is not added to any total.
"""

from decimal import Decimal
from typing import Mapping

from ..numbers import ZERO
from ..schemas import StandbyBreakdown, StandbyLevel, StandbySlot, StandbySlotResult
from .index import TariffIndex

HUNDRED = Decimal(100)


def calc_standby_pay(
    index: TariffIndex,
    hours_by_slot: Mapping[StandbySlot, Decimal],
    level: StandbyLevel,
    hourly_rate: Decimal,
) -> StandbyBreakdown:
    """Compute standby pay across all slots.

    Args:
        index: Tariff index holding slot factors and tax-free percentages
        hours_by_slot: Standby hours per slot (missing slots = 0)
        level: Standby level selecting the factor column
        hourly_rate: Individual hourly rate from the table salary

    Returns:
        StandbyBreakdown with one line per slot that has hours
    """
    slots = []
    for slot in StandbySlot:
        hours = hours_by_slot.get(slot, ZERO)
        if not hours:
            continue

        factor_pct = index.standby_factors.get(slot, {}).get(level, ZERO)
        equivalent_hours = hours * factor_pct / HUNDRED
        euro = equivalent_hours * hourly_rate
        tax_free_pct = index.standby_tax_free.get(slot, ZERO)

        slots.append(StandbySlotResult(
            slot=slot,
            hours=hours,
            factor_pct=factor_pct,
            equivalent_hours=equivalent_hours,
            euro=euro,
            tax_free_pct=tax_free_pct,
            tax_free_euro=euro * tax_free_pct / HUNDRED,
        ))

    return StandbyBreakdown(
        level=level,
        hourly_rate=hourly_rate,
        slots=slots,
        equivalent_hours=sum((s.equivalent_hours for s in slots), ZERO),
        euro_total=sum((s.euro for s in slots), ZERO),
        tax_free_total=sum((s.tax_free_euro for s in slots), ZERO),
    )
