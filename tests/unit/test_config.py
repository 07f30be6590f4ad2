"""Tests for config directory and settings.json handling."""

import json

import pytest

from tarifcalc.sdk import (
    BUNDLED_DATASET,
    SettingsError,
    get_config_dir,
    get_dataset_path,
    get_setting,
    load_settings,
    set_setting,
)


class TestConfigDir:

    def test_env_override(self, isolated_config):
        assert get_config_dir() == isolated_config

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TARIF_CALC_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "tarif-calc"


class TestSettings:

    def test_missing_file_is_empty(self, isolated_config):
        assert load_settings() == {}
        assert get_setting("dataset") is None
        assert get_setting("output_format", "text") == "text"

    def test_set_and_get(self, isolated_config):
        path = set_setting("output_format", "json")

        assert path == isolated_config / "settings.json"
        assert json.loads(path.read_text()) == {"output_format": "json"}
        assert get_setting("output_format") == "json"

    def test_none_removes_key(self, isolated_config):
        set_setting("dataset", "/data/tariff.yaml")
        set_setting("output_format", "json")
        set_setting("dataset", None)
        assert load_settings() == {"output_format": "json"}

    def test_invalid_json_raises(self, isolated_config):
        (isolated_config / "settings.json").write_text("{oops")
        with pytest.raises(SettingsError):
            load_settings()

    def test_non_object_raises(self, isolated_config):
        (isolated_config / "settings.json").write_text("[1, 2]")
        with pytest.raises(SettingsError):
            load_settings()


class TestDatasetPath:

    def test_resolution_order(self, isolated_config, monkeypatch):
        assert get_dataset_path() == (BUNDLED_DATASET, "bundled")

        set_setting("dataset", "/from/settings.yaml")
        assert get_dataset_path()[1] == "settings"

        monkeypatch.setenv("TARIF_CALC_DATASET", "/from/env.yaml")
        assert get_dataset_path()[1] == "env"

        path, source = get_dataset_path("/explicit.yaml")
        assert source == "explicit"
        assert str(path) == "/explicit.yaml"

    def test_bundled_dataset_ships(self):
        assert BUNDLED_DATASET.exists()
