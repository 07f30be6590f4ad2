"""Pydantic schemas for tarif-calc data validation.

Three groups:
- Closed key enumerations (pay grades, standby slots, standby levels)
- Tariff dataset schemas, used to validate dataset files
- Calculation request and result models exchanged with the engine

Request and result models use extra='forbid' so typos in request files
cause clear errors rather than silently zeroed inputs.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .numbers import ZERO, non_negative


# =============================================================================
# Key enumerations
# =============================================================================


def normalize_grade_key(key: Any) -> str:
    """Collapse pay grade spellings to the canonical form.

    'EG II', 'EG-II', 'eg_ii' and ' EG  II ' all become 'EG_II'.
    """
    text = str(key).strip().upper().replace("-", " ").replace("_", " ")
    return "_".join(text.split())


class PayGrade(str, Enum):
    """Salary classification grade (Entgeltgruppe)."""

    EG_I = "EG_I"
    EG_II = "EG_II"
    EG_III = "EG_III"
    EG_IV = "EG_IV"

    @property
    def label(self) -> str:
        """Human label, e.g. 'EG II'."""
        return self.value.replace("_", " ")

    @classmethod
    def parse(cls, key: Any) -> Optional["PayGrade"]:
        """Return the grade for any accepted spelling, None if unknown."""
        if isinstance(key, cls):
            return key
        try:
            return cls(normalize_grade_key(key))
        except ValueError:
            return None


class StandbySlot(str, Enum):
    """Time-of-week slot for off-site standby (Rufbereitschaft) hours."""

    WEEKDAY_DAY = "wd_6_20"
    WEEKDAY_EARLY = "wd_4_6"
    WEEKDAY_LATE = "wd_20_24"
    WEEKDAY_NIGHT = "wd_0_4"
    SATURDAY = "sat"
    SUNDAY = "sun"
    HOLIDAY = "hol"

    @property
    def label(self) -> str:
        return _SLOT_LABELS[self]

    @classmethod
    def parse(cls, key: Any) -> Optional["StandbySlot"]:
        if isinstance(key, cls):
            return key
        text = str(key).strip().lower().replace("-", "_")
        if text.startswith("rb_"):
            text = text[3:]
        try:
            return cls(text)
        except ValueError:
            pass
        try:
            return cls[text.upper()]
        except KeyError:
            return None


_SLOT_LABELS = {
    StandbySlot.WEEKDAY_DAY: "Werktag 6–20",
    StandbySlot.WEEKDAY_EARLY: "Werktag 4–6",
    StandbySlot.WEEKDAY_LATE: "Werktag 20–24",
    StandbySlot.WEEKDAY_NIGHT: "Werktag 0–4",
    StandbySlot.SATURDAY: "Samstag",
    StandbySlot.SUNDAY: "Sonntag",
    StandbySlot.HOLIDAY: "Feiertag",
}


class StandbyLevel(str, Enum):
    """Standby level selecting the factor column (I, II or III)."""

    I = "I"
    II = "II"
    III = "III"

    @classmethod
    def parse(cls, key: Any) -> Optional["StandbyLevel"]:
        if isinstance(key, cls):
            return key
        try:
            return cls(str(key).strip().upper())
        except ValueError:
            return None


# =============================================================================
# Tariff dataset schemas - validation of dataset files
# =============================================================================


class WageTableVersion(BaseModel):
    """Monthly table salaries per pay grade, indexed by seniority step."""

    model_config = ConfigDict(extra="ignore")

    valid_from: date
    table: Dict[str, List[Decimal]] = Field(default_factory=dict)


class OnCallRateVersion(BaseModel):
    """On-call duty hourly rate per pay grade."""

    model_config = ConfigDict(extra="ignore")

    valid_from: date
    by_eg: Dict[str, Decimal] = Field(default_factory=dict)


class StandbyFactorRow(BaseModel):
    """Time-equivalent percentages of one standby slot per level."""

    model_config = ConfigDict(extra="forbid")

    I: Decimal = Field(default=ZERO, ge=0)
    II: Decimal = Field(default=ZERO, ge=0)
    III: Decimal = Field(default=ZERO, ge=0)


class ShiftAllowanceVersion(BaseModel):
    """Flat monthly allowance for permanent shift work."""

    model_config = ConfigDict(extra="ignore")

    valid_from: date
    eur_per_month: Decimal = Field(..., ge=0)


class NightShiftRateVersion(BaseModel):
    """Flat hourly rate for night work within a rotating schedule."""

    model_config = ConfigDict(extra="ignore")

    valid_from: date
    eur_per_hour: Decimal = Field(..., ge=0)


class TariffDataset(BaseModel):
    """Complete tariff dataset (the `tariff` section of a dataset file)."""

    model_config = ConfigDict(extra="ignore")

    weekly_hours: Decimal = Field(default=Decimal(40), gt=0)
    entgelttabellen: List[WageTableVersion] = Field(default_factory=list)
    bd_hourly: List[OnCallRateVersion] = Field(default_factory=list)
    rb_factors: Dict[str, StandbyFactorRow] = Field(default_factory=dict)
    rb_taxfree: Dict[str, Decimal] = Field(default_factory=dict)
    schichtzulage: List[ShiftAllowanceVersion] = Field(default_factory=list)
    wechselschicht_nacht_eur_per_h: List[NightShiftRateVersion] = Field(default_factory=list)


# =============================================================================
# Calculation request
# =============================================================================


_TRUE_FLAGS = {"ja", "yes", "true", "1", "y", "j", "on"}


class OnCallHours(BaseModel):
    """On-site on-call duty hours for the month.

    night and holiday are subsets of total; the calculator clamps them.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    total: Decimal = ZERO
    night: Decimal = ZERO
    holiday: Decimal = ZERO

    @field_validator("total", "night", "holiday", mode="before")
    @classmethod
    def parse_hours(cls, v: Any) -> Decimal:
        return non_negative(v)


class SupplementInputs(BaseModel):
    """Inputs for statutory supplements outside on-call and standby."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    permanent_shift: bool = False
    night_shift_hours: Decimal = ZERO
    sunday_hours: Decimal = ZERO
    holiday_hours_no_comp: Decimal = ZERO
    holiday_hours_with_comp: Decimal = ZERO

    @field_validator("permanent_shift", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in _TRUE_FLAGS
        return bool(v)

    @field_validator(
        "night_shift_hours", "sunday_hours", "holiday_hours_no_comp", "holiday_hours_with_comp",
        mode="before",
    )
    @classmethod
    def parse_hours(cls, v: Any) -> Decimal:
        return non_negative(v)


class CalculationRequest(BaseModel):
    """One monthly pay calculation request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    pay_grade: PayGrade
    step: Optional[int] = Field(default=None, description="Seniority step, 1-based; None = default step")
    on_call: OnCallHours = Field(default_factory=OnCallHours)
    standby_level: StandbyLevel = StandbyLevel.III
    standby_hours: Dict[StandbySlot, Decimal] = Field(default_factory=dict)
    supplements: SupplementInputs = Field(default_factory=SupplementInputs)

    @field_validator("pay_grade", mode="before")
    @classmethod
    def parse_pay_grade(cls, v: Any) -> PayGrade:
        grade = PayGrade.parse(v)
        if grade is None:
            raise ValueError(f"unknown pay grade: {v!r}")
        return grade

    @field_validator("standby_level", mode="before")
    @classmethod
    def parse_standby_level(cls, v: Any) -> StandbyLevel:
        level = StandbyLevel.parse(v)
        if level is None:
            raise ValueError(f"unknown standby level: {v!r} (expected I, II or III)")
        return level

    @field_validator("standby_hours", mode="before")
    @classmethod
    def parse_standby_hours(cls, v: Any) -> Dict[StandbySlot, Decimal]:
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("standby_hours must be a mapping of slot -> hours")
        hours = {}
        for key, value in v.items():
            slot = StandbySlot.parse(key)
            if slot is None:
                valid = ", ".join(s.value for s in StandbySlot)
                raise ValueError(f"unknown standby slot: {key!r} (expected one of {valid})")
            hours[slot] = non_negative(value)
        return hours


# =============================================================================
# Calculation result
# =============================================================================


class OnCallBreakdown(BaseModel):
    """On-site on-call duty (Bereitschaftsdienst) pay."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    hourly_rate: Decimal
    hours: Decimal
    night_hours: Decimal
    holiday_hours: Decimal
    threshold_hours: Decimal = Field(..., description="Hours beyond the 97th monthly hour")
    base: Decimal
    night_surcharge: Decimal
    holiday_surcharge: Decimal
    threshold_surcharge: Decimal
    total: Decimal


class StandbySlotResult(BaseModel):
    """Standby pay for one time slot."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    slot: StandbySlot
    hours: Decimal
    factor_pct: Decimal
    equivalent_hours: Decimal
    euro: Decimal
    tax_free_pct: Decimal
    tax_free_euro: Decimal


class StandbyBreakdown(BaseModel):
    """Off-site standby (Rufbereitschaft) pay across all slots."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: StandbyLevel
    hourly_rate: Decimal
    slots: List[StandbySlotResult] = Field(default_factory=list)
    equivalent_hours: Decimal
    euro_total: Decimal
    tax_free_total: Decimal = Field(..., description="Display only, not part of the grand total")


class SupplementBreakdown(BaseModel):
    """Statutory supplements (shift allowance and percentage supplements)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    shift_allowance: Decimal
    night_shift_rate: Decimal
    night_shift_sum: Decimal
    hourly_at_step3: Decimal
    sunday_sum: Decimal
    holiday_no_comp_sum: Decimal
    holiday_with_comp_sum: Decimal

    @computed_field
    @property
    def percentage_total(self) -> Decimal:
        """Sunday, holiday and rotating-night supplements."""
        return self.night_shift_sum + self.sunday_sum + self.holiday_no_comp_sum + self.holiday_with_comp_sum

    @computed_field
    @property
    def shift_total(self) -> Decimal:
        """Shift allowance plus percentage supplements."""
        return self.shift_allowance + self.percentage_total


class CalculationResult(BaseModel):
    """Itemized monthly gross pay."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    version: Optional[str] = Field(..., description="Effective tariff version (valid_from, ISO date)")
    year: int
    month: int
    pay_grade: PayGrade
    step: int
    weekly_hours: Decimal
    base_monthly: Decimal
    base_hourly: Decimal
    on_call: OnCallBreakdown
    standby: StandbyBreakdown
    supplements: SupplementBreakdown
    grand_total: Decimal

    @computed_field
    @property
    def on_call_total(self) -> Decimal:
        return self.on_call.total

    @computed_field
    @property
    def standby_euro_total(self) -> Decimal:
        return self.standby.euro_total

    @computed_field
    @property
    def standby_tax_free_total(self) -> Decimal:
        return self.standby.tax_free_total

    @computed_field
    @property
    def shift_allowance(self) -> Decimal:
        return self.supplements.shift_allowance

    @computed_field
    @property
    def supplement_total(self) -> Decimal:
        return self.supplements.percentage_total
