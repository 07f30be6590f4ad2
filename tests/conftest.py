"""Shared fixtures: small tariff datasets and isolated configuration."""

import copy

import pytest
import yaml

from tarifcalc.sdk.tariff import build_index


SINGLE_VERSION_TARIFF = {
    "weekly_hours": 40,
    "entgelttabellen": [
        {
            "valid_from": "2025-04-01",
            "table": {
                "EG_I": [5223, 5516, 5728, 6104, 6542, 6722],
                "EG_II": [6910, 7489, 7992, 8300, 8587, 8887, 9174],
                "EG_III": [8643, 9155, 9865, 10341],
                "EG_IV": [10165, 10904, 11122],
            },
        }
    ],
    "bd_hourly": [
        {"valid_from": "2025-04-01", "by_eg": {"EG_I": 32.78, "EG_II": 38.03, "EG_III": 41.29, "EG_IV": 43.92}},
    ],
    "rb_factors": {
        "wd_6_20": {"I": 12.50, "II": 12.90, "III": 16.67},
        "wd_4_6": {"I": 10.00, "II": 10.32, "III": 13.34},
        "wd_20_24": {"I": 10.00, "II": 10.32, "III": 13.34},
        "wd_0_4": {"I": 8.93, "II": 9.21, "III": 11.91},
        "sat": {"I": 12.50, "II": 12.90, "III": 16.67},
        "sun": {"I": 16.67, "II": 16.67, "III": 20.00},
        "hol": {"I": 20.00, "II": 20.00, "III": 25.00},
    },
    "rb_taxfree": {"wd_6_20": 0, "wd_4_6": 25, "wd_20_24": 25, "wd_0_4": 40, "sat": 0, "sun": 50, "hol": 125},
    "schichtzulage": [
        {"valid_from": "2024-11-01", "eur_per_month": 200},
        {"valid_from": "2025-04-01", "eur_per_month": 220},
        {"valid_from": "2025-09-01", "eur_per_month": 240},
    ],
    "wechselschicht_nacht_eur_per_h": [
        {"valid_from": "2024-11-01", "eur_per_hour": 7.50},
        {"valid_from": "2025-04-01", "eur_per_hour": 8.25},
        {"valid_from": "2025-09-01", "eur_per_hour": 9.00},
    ],
}


@pytest.fixture
def tariff():
    """Single-version tariff (2025-04-01) as a raw mapping."""
    return copy.deepcopy(SINGLE_VERSION_TARIFF)


@pytest.fixture
def index(tariff):
    """Tariff index built from the single-version tariff."""
    return build_index(tariff)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TARIF_CALC_CONFIG_PATH", str(config_dir))
    monkeypatch.delenv("TARIF_CALC_DATASET", raising=False)
    return config_dir


@pytest.fixture
def dataset_file(tmp_path, tariff):
    """Single-version tariff written as a YAML document under a tariff key."""
    path = tmp_path / "tariff.yaml"
    path.write_text(yaml.safe_dump({"tariff": tariff}, sort_keys=False))
    return path
