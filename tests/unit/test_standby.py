"""Tests for off-site standby (RB) pay."""

from decimal import Decimal

import pytest

from tarifcalc.sdk.schemas import StandbyLevel, StandbySlot
from tarifcalc.sdk.tariff import build_index, calc_standby_pay, hourly_from_monthly

HOURLY = hourly_from_monthly(7992, 40)


class TestStandbyPay:

    def test_single_slot(self, index):
        """12h weekday night at level III: 11.91% equivalent, 40% tax-free."""
        pay = calc_standby_pay(index, {StandbySlot.WEEKDAY_NIGHT: Decimal(12)}, StandbyLevel.III, HOURLY)

        assert pay.equivalent_hours == Decimal("1.4292")
        assert pay.euro_total == Decimal("1.4292") * HOURLY
        assert float(pay.euro_total) == pytest.approx(65.897, abs=0.001)
        assert pay.tax_free_total == pay.euro_total * Decimal("0.40")

    def test_level_selects_factor_column(self, index):
        hours = {StandbySlot.SUNDAY: Decimal(24)}
        level_i = calc_standby_pay(index, hours, StandbyLevel.I, HOURLY)
        level_iii = calc_standby_pay(index, hours, StandbyLevel.III, HOURLY)

        assert level_i.equivalent_hours == Decimal("4.0008")
        assert level_iii.equivalent_hours == Decimal("4.8")

    def test_sums_across_slots(self, index):
        hours = {
            StandbySlot.WEEKDAY_DAY: Decimal(10),
            StandbySlot.SATURDAY: Decimal(8),
            StandbySlot.HOLIDAY: Decimal(24),
        }
        pay = calc_standby_pay(index, hours, StandbyLevel.II, HOURLY)

        assert [line.slot for line in pay.slots] == [StandbySlot.WEEKDAY_DAY, StandbySlot.SATURDAY, StandbySlot.HOLIDAY]
        assert pay.equivalent_hours == sum(line.equivalent_hours for line in pay.slots)
        assert pay.euro_total == sum(line.euro for line in pay.slots)
        # holiday tax-free share is 125% of its pay
        holiday = pay.slots[-1]
        assert holiday.tax_free_euro == holiday.euro * Decimal("1.25")
        assert pay.tax_free_total == holiday.tax_free_euro

    def test_zero_factor_slot_has_no_equivalent(self, tariff):
        tariff["rb_factors"]["wd_6_20"]["I"] = 0
        pay = calc_standby_pay(build_index(tariff), {StandbySlot.WEEKDAY_DAY: Decimal(100)}, StandbyLevel.I, HOURLY)

        assert pay.equivalent_hours == 0
        assert pay.euro_total == 0

    def test_missing_factor_is_zero(self, tariff):
        del tariff["rb_factors"]["sat"]
        pay = calc_standby_pay(build_index(tariff), {StandbySlot.SATURDAY: Decimal(8)}, StandbyLevel.III, HOURLY)
        assert pay.equivalent_hours == 0

    def test_slots_without_hours_skipped(self, index):
        pay = calc_standby_pay(index, {StandbySlot.SUNDAY: Decimal(0)}, StandbyLevel.III, HOURLY)
        assert pay.slots == []
        assert pay.euro_total == 0
        assert pay.tax_free_total == 0

    def test_scales_with_individual_rate(self, index):
        hours = {StandbySlot.SATURDAY: Decimal(10)}
        low = calc_standby_pay(index, hours, StandbyLevel.III, hourly_from_monthly(6910, 40))
        high = calc_standby_pay(index, hours, StandbyLevel.III, hourly_from_monthly(9174, 40))
        assert high.euro_total > low.euro_total
        assert high.equivalent_hours == low.equivalent_hours
