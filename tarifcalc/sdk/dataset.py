"""Tariff dataset loading and validation.

SDK layer - reads dataset files and reports problems. The engine itself
never touches files; callers load a dataset here and pass the `tariff`
mapping to build_index().

A dataset file is YAML or JSON and either is the tariff mapping itself or
contains it under a top-level `tariff` key.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from .config import BUNDLED_DATASET, get_dataset_path
from .schemas import PayGrade, StandbySlot, TariffDataset, normalize_grade_key

logger = logging.getLogger(__name__)

TARIFF_KEYS = (
    "weekly_hours",
    "entgelttabellen",
    "bd_hourly",
    "rb_factors",
    "rb_taxfree",
    "schichtzulage",
    "wechselschicht_nacht_eur_per_h",
)


class DatasetNotFoundError(Exception):
    """Raised when a dataset file does not exist."""
    pass


class DatasetFormatError(Exception):
    """Raised when a dataset file cannot be parsed into a tariff mapping."""
    pass


def read_dataset_file(path: Path) -> Dict[str, Any]:
    """Read a dataset file and return its tariff mapping.

    Args:
        path: YAML (.yaml/.yml) or JSON (.json) file

    Returns:
        The tariff mapping

    Raises:
        DatasetNotFoundError: If the file doesn't exist
        DatasetFormatError: If the file is not valid YAML/JSON or holds no mapping
    """
    path = Path(path)
    if not path.exists():
        raise DatasetNotFoundError(f"Tariff dataset not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                document = json.load(f)
            else:
                document = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise DatasetFormatError(f"Cannot parse {path}: {e}") from e

    if not isinstance(document, dict):
        raise DatasetFormatError(f"{path} must contain a mapping, got {type(document).__name__}")

    tariff = document.get("tariff", document)
    if not isinstance(tariff, dict):
        raise DatasetFormatError(f"{path}: 'tariff' must be a mapping")
    return tariff


def normalize_dataset(tariff: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy with pay grade keys in canonical form ('EG-II' -> 'EG_II')."""
    normalized = dict(tariff)
    for key, grades_key in (("entgelttabellen", "table"), ("bd_hourly", "by_eg")):
        versions = tariff.get(key)
        if not isinstance(versions, list):
            continue
        fixed = []
        for entry in versions:
            if isinstance(entry, dict) and isinstance(entry.get(grades_key), dict):
                entry = {
                    **entry,
                    grades_key: {normalize_grade_key(k): v for k, v in entry[grades_key].items()},
                }
            fixed.append(entry)
        normalized[key] = fixed
    return normalized


def load_dataset(path: Optional[str] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Load the tariff dataset from the resolved location.

    Args:
        path: Explicit dataset path (overrides env var and settings)

    Returns:
        Tuple of (tariff mapping, source) where source is
        {"type": "explicit"|"env"|"settings"|"bundled", "path": "..."}

    Raises:
        DatasetNotFoundError, DatasetFormatError
    """
    dataset_path, source_type = get_dataset_path(path)
    tariff = normalize_dataset(read_dataset_file(dataset_path))
    logger.debug(f"Loaded tariff dataset from {dataset_path} ({source_type})")
    return tariff, {"type": source_type, "path": str(dataset_path)}


def load_dataset_or_bundled(path: Optional[str] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Load the dataset, falling back to the bundled one on failure.

    Returns:
        Tuple of (tariff mapping, source). When the fallback was used the
        source has type "fallback" and an "error" describing why.
    """
    try:
        return load_dataset(path)
    except (DatasetNotFoundError, DatasetFormatError, OSError) as e:
        logger.warning(f"Dataset could not be loaded, using bundled dataset: {e}")
        tariff = normalize_dataset(read_dataset_file(BUNDLED_DATASET))
        return tariff, {"type": "fallback", "path": str(BUNDLED_DATASET), "error": str(e)}


@dataclass
class DatasetValidationResult:
    """Result of validate_dataset()."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def _format_error(error: Dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg')}"


def validate_dataset(tariff: Any) -> DatasetValidationResult:
    """Check a tariff mapping against the dataset schema.

    Never raises. Schema violations become errors; unknown keys, unknown
    pay grades or slots and inconsistent versions become warnings.
    """
    result = DatasetValidationResult()
    if not isinstance(tariff, dict):
        result.errors.append(f"tariff must be a mapping, got {type(tariff).__name__}")
        return result

    try:
        dataset = TariffDataset.model_validate(tariff)
    except ValidationError as e:
        result.errors.extend(_format_error(err) for err in e.errors())
        return result

    for key in tariff:
        if key not in TARIFF_KEYS:
            result.warnings.append(f"unknown key '{key}' ignored")

    for version in dataset.entgelttabellen:
        for key, steps in version.table.items():
            if PayGrade.parse(key) is None:
                result.warnings.append(f"entgelttabellen[{version.valid_from}]: unknown pay grade '{key}'")
            elif not steps:
                result.warnings.append(f"entgelttabellen[{version.valid_from}].{key}: no steps")

    for version in dataset.bd_hourly:
        for key in version.by_eg:
            if PayGrade.parse(key) is None:
                result.warnings.append(f"bd_hourly[{version.valid_from}]: unknown pay grade '{key}'")

    for section in ("rb_factors", "rb_taxfree"):
        for key in getattr(dataset, section):
            if StandbySlot.parse(key) is None:
                result.warnings.append(f"{section}: unknown slot '{key}'")
    missing = [s.value for s in StandbySlot if s.value not in dataset.rb_factors]
    if missing:
        result.warnings.append(f"rb_factors: no factors for slot(s) {', '.join(missing)}")

    wage_dates = {v.valid_from for v in dataset.entgelttabellen}
    for version in dataset.bd_hourly:
        if version.valid_from not in wage_dates:
            result.warnings.append(
                f"bd_hourly[{version.valid_from}]: no wage table with the same date; "
                "table salaries resolve to 0 in that version"
            )

    return result
