"""Tests for effective-version resolution."""

from datetime import date
from decimal import Decimal

from tarifcalc.sdk.tariff import build_index, list_versions, resolve_version, value_in_force
from tarifcalc.sdk.tariff.versions import resolve_version_date


VERSIONS = (date(2024, 11, 1), date(2025, 4, 1), date(2025, 9, 1))


def _months(start_year, end_year):
    for year in range(start_year, end_year + 1):
        for month in range(1, 13):
            yield year, month


class TestResolveVersion:

    def test_latest_version_at_mid_month(self):
        assert resolve_version_date(VERSIONS, date(2025, 6, 15)) == date(2025, 4, 1)
        assert resolve_version_date(VERSIONS, date(2025, 9, 15)) == date(2025, 9, 1)
        assert resolve_version_date(VERSIONS, date(2030, 1, 15)) == date(2025, 9, 1)

    def test_date_before_all_versions_returns_earliest(self):
        """Months before the first version fall back to the earliest one."""
        assert resolve_version_date(VERSIONS, date(2000, 1, 15)) == date(2024, 11, 1)

    def test_exact_effective_date_included(self):
        assert resolve_version_date(VERSIONS, date(2025, 4, 1)) == date(2025, 4, 1)

    def test_no_versions(self):
        assert resolve_version_date((), date(2025, 1, 15)) is None

    def test_reference_day_is_fifteenth(self, tariff):
        """A version starting on the 20th applies from the following month."""
        tariff["entgelttabellen"].append({"valid_from": "2025-06-20", "table": {"EG_II": [1]}})
        index = build_index(tariff)

        assert resolve_version(index, 2025, 6) == "2025-04-01"
        assert resolve_version(index, 2025, 7) == "2025-06-20"

    def test_returns_iso_string(self, index):
        assert resolve_version(index, 2025, 6) == "2025-04-01"
        assert resolve_version(index, 2020, 1) == "2025-04-01"

    def test_empty_index(self):
        assert resolve_version(build_index({}), 2025, 6) is None

    def test_monotonic_over_months(self, tariff):
        """Resolved version never moves backwards as the month advances."""
        tariff["bd_hourly"].append({"valid_from": "2025-09-01", "by_eg": {}})
        tariff["entgelttabellen"].append({"valid_from": "2026-04-01", "table": {}})
        index = build_index(tariff)

        resolved = [resolve_version(index, y, m) for y, m in _months(2024, 2027)]

        assert resolved == sorted(resolved)
        assert resolved[0] == "2025-04-01"
        assert resolved[-1] == "2026-04-01"


class TestValueInForce:

    def test_last_value_at_or_before_date(self, index):
        assert value_in_force(index.shift_allowance, date(2025, 6, 1)) == Decimal(220)
        assert value_in_force(index.shift_allowance, date(2025, 9, 1)) == Decimal(240)

    def test_zero_before_first_entry(self, index):
        """Series lookups do not fall back to the earliest entry."""
        assert value_in_force(index.shift_allowance, date(2024, 10, 1)) == 0

    def test_empty_series(self):
        assert value_in_force((), date(2025, 1, 1)) == 0


class TestListVersions:

    def test_describes_each_version(self, tariff):
        tariff["bd_hourly"].append({"valid_from": "2025-09-01", "by_eg": {"EG_I": 33.6}})
        described = list_versions(build_index(tariff))

        assert [v["version"] for v in described] == ["2025-04-01", "2025-09-01"]
        assert described[0]["wage_table_grades"] == ["EG_I", "EG_II", "EG_III", "EG_IV"]
        assert described[1]["wage_table_grades"] == []
        assert described[1]["oncall_rate_grades"] == ["EG_I"]
