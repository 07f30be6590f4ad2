"""Tests for statutory supplements."""

from decimal import Decimal

import pytest

from tarifcalc.sdk.schemas import SupplementInputs
from tarifcalc.sdk.tariff import calc_supplements, hourly_from_monthly, night_shift_rate, shift_allowance

STEP3_HOURLY = hourly_from_monthly(7992, 40)


class TestSeriesLookups:

    def test_shift_allowance_in_force(self, index):
        assert shift_allowance(index, 2025, 6) == Decimal(220)
        assert shift_allowance(index, 2025, 9) == Decimal(240)
        assert shift_allowance(index, 2025, 1) == Decimal(200)

    def test_shift_allowance_before_first_entry(self, index):
        assert shift_allowance(index, 2024, 10) == 0

    def test_night_shift_rate(self, index):
        assert night_shift_rate(index, 2025, 6) == Decimal("8.25")


class TestCalcSupplements:

    def test_shift_allowance_only_for_permanent_shift(self, index):
        off = calc_supplements(index, SupplementInputs(), 2025, 6, STEP3_HOURLY)
        on = calc_supplements(index, SupplementInputs(permanent_shift=True), 2025, 6, STEP3_HOURLY)

        assert off.shift_allowance == 0
        assert on.shift_allowance == Decimal(220)

    @pytest.mark.parametrize("flag,expected", [("ja", True), ("nein", False), ("yes", True), ("0", False)])
    def test_permanent_shift_flag_text(self, flag, expected):
        assert SupplementInputs(permanent_shift=flag).permanent_shift is expected

    def test_night_shift_sum(self, index):
        supp = calc_supplements(index, SupplementInputs(night_shift_hours=10), 2025, 6, STEP3_HOURLY)
        assert supp.night_shift_rate == Decimal("8.25")
        assert supp.night_shift_sum == Decimal("82.50")

    def test_percentage_supplements(self, index):
        inputs = SupplementInputs(sunday_hours=8, holiday_hours_no_comp=4, holiday_hours_with_comp=6)
        supp = calc_supplements(index, inputs, 2025, 6, STEP3_HOURLY)

        assert supp.sunday_sum == 8 * (STEP3_HOURLY * Decimal("0.40"))
        assert supp.holiday_no_comp_sum == 4 * (STEP3_HOURLY * Decimal("1.35"))
        assert supp.holiday_with_comp_sum == 6 * (STEP3_HOURLY * Decimal("0.35"))
        assert float(supp.sunday_sum) == pytest.approx(147.5446, abs=0.001)

    def test_totals(self, index):
        inputs = SupplementInputs(permanent_shift=True, night_shift_hours=10, sunday_hours=8)
        supp = calc_supplements(index, inputs, 2025, 6, STEP3_HOURLY)

        assert supp.percentage_total == supp.night_shift_sum + supp.sunday_sum
        assert supp.shift_total == Decimal(220) + supp.percentage_total
