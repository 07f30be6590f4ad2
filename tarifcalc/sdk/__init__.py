"""Tarif Calc SDK - Core functionality for tariff-versioned pay calculation."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_dataset_path,
    SettingsError,
    BUNDLED_DATASET,
)

from .numbers import (
    parse_de_number,
    to_decimal,
    round_cents,
    format_eur,
    format_hours,
)

from .schemas import (
    PayGrade,
    StandbySlot,
    StandbyLevel,
    TariffDataset,
    OnCallHours,
    SupplementInputs,
    CalculationRequest,
    CalculationResult,
    OnCallBreakdown,
    StandbyBreakdown,
    StandbySlotResult,
    SupplementBreakdown,
)

from .dataset import (
    load_dataset,
    load_dataset_or_bundled,
    read_dataset_file,
    validate_dataset,
    DatasetValidationResult,
    DatasetNotFoundError,
    DatasetFormatError,
)

from .tariff import (
    TariffIndex,
    build_index,
    evaluate,
    resolve_version,
    list_versions,
    available_steps,
    default_step,
    base_monthly,
    hourly_from_monthly,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_dataset_path",
    "SettingsError",
    "BUNDLED_DATASET",
    # Numbers
    "parse_de_number",
    "to_decimal",
    "round_cents",
    "format_eur",
    "format_hours",
    # Schemas
    "PayGrade",
    "StandbySlot",
    "StandbyLevel",
    "TariffDataset",
    "OnCallHours",
    "SupplementInputs",
    "CalculationRequest",
    "CalculationResult",
    "OnCallBreakdown",
    "StandbyBreakdown",
    "StandbySlotResult",
    "SupplementBreakdown",
    # Dataset
    "load_dataset",
    "load_dataset_or_bundled",
    "read_dataset_file",
    "validate_dataset",
    "DatasetValidationResult",
    "DatasetNotFoundError",
    "DatasetFormatError",
    # Engine
    "TariffIndex",
    "build_index",
    "evaluate",
    "resolve_version",
    "list_versions",
    "available_steps",
    "default_step",
    "base_monthly",
    "hourly_from_monthly",
]
