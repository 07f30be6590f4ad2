"""Configuration management for Tarif Calc.

Configuration lives in one file:

settings.json - Machine-specific settings
   - dataset: path to a tariff dataset file (YAML or JSON)
   - output_format: default CLI output format ("text" or "json")

Config directory resolution:
1. TARIF_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/tarif-calc/ (XDG_CONFIG_HOME fallback)

Dataset resolution:
1. Explicit path (CLI --dataset)
2. TARIF_CALC_DATASET environment variable
3. settings.json "dataset" key
4. Bundled default dataset (tarifcalc/data/tv_aerzte.yaml)
"""

import json
import os
from pathlib import Path
from typing import Any, Optional, Tuple


APP_NAME = "tarif-calc"
SETTINGS_FILENAME = "settings.json"
BUNDLED_DATASET = Path(__file__).resolve().parent.parent / "data" / "tv_aerzte.yaml"

OUTPUT_FORMATS = ("text", "json")


class SettingsError(Exception):
    """Raised when settings.json exists but cannot be read."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TARIF_CALC_CONFIG_PATH environment variable
    2. ~/.config/tarif-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TARIF_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        SettingsError: If the file is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid JSON in {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise SettingsError(f"{settings_file} must contain a JSON object")
    return settings


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "dataset", "output_format")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json. None removes the key.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    if value is None:
        settings.pop(key, None)
    else:
        settings[key] = value
    return save_settings(settings)


def get_dataset_path(explicit: Optional[str] = None) -> Tuple[Path, str]:
    """Resolve which dataset file to use.

    Args:
        explicit: Path given by the caller (takes precedence)

    Returns:
        Tuple of (path, source) where source is one of
        "explicit", "env", "settings" or "bundled"
    """
    if explicit:
        return Path(explicit).expanduser(), "explicit"

    env_path = os.environ.get("TARIF_CALC_DATASET")
    if env_path:
        return Path(env_path).expanduser(), "env"

    configured = get_setting("dataset")
    if configured:
        return Path(configured).expanduser(), "settings"

    return BUNDLED_DATASET, "bundled"
