"""Tarif Calc MCP Server - FastMCP implementation for pay calculation tools."""

import logging
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from tarifcalc.sdk import (
    CalculationRequest,
    PayGrade,
    available_steps,
    build_index,
    default_step,
    evaluate,
    list_versions as sdk_list_versions,
    load_dataset_or_bundled,
    resolve_version,
)
from tarifcalc.sdk.tariff import TariffIndex

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("tarif-calc")

# Index snapshot, built once on first use
_state: Dict[str, Any] = {"index": None, "source": None}


def _get_index() -> TariffIndex:
    if _state["index"] is None:
        tariff, source = load_dataset_or_bundled()
        _state["index"] = build_index(tariff)
        _state["source"] = source
        logger.info(f"Tariff index built from {source['path']} ({source['type']})")
    return _state["index"]


# --- Tools ---

@mcp.tool()
async def calculate_pay(
    year: int = Field(description="Year (e.g., 2025)"),
    month: int = Field(description="Month 1-12"),
    pay_grade: str = Field(description="Pay grade, e.g. 'EG II' or 'EG_II'"),
    step: Optional[int] = Field(default=None, description="Seniority step (default: 3 or highest available)"),
    on_call_hours: float = Field(default=0, description="On-call duty (BD) hours, total"),
    on_call_night_hours: float = Field(default=0, description="On-call night hours (subset of total)"),
    on_call_holiday_hours: float = Field(default=0, description="On-call holiday hours (subset of total)"),
    standby_level: str = Field(default="III", description="Standby (RB) level: I, II or III"),
    standby_hours: Optional[Dict[str, float]] = Field(
        default=None,
        description="Standby hours per slot: wd_6_20, wd_4_6, wd_20_24, wd_0_4, sat, sun, hol",
    ),
    permanent_shift: bool = Field(default=False, description="Permanent shift work (flat allowance)"),
    night_shift_hours: float = Field(default=0, description="Night hours in a rotating schedule"),
    sunday_hours: float = Field(default=0, description="Sunday hours"),
    holiday_hours_no_comp: float = Field(default=0, description="Holiday hours without compensatory time off"),
    holiday_hours_with_comp: float = Field(default=0, description="Holiday hours with compensatory time off"),
) -> dict[str, Any]:
    """Calculate itemized monthly gross pay under the tariff version in force for the month."""
    try:
        request = CalculationRequest(
            year=year,
            month=month,
            pay_grade=pay_grade,
            step=step,
            on_call={
                "total": on_call_hours,
                "night": on_call_night_hours,
                "holiday": on_call_holiday_hours,
            },
            standby_level=standby_level,
            standby_hours=standby_hours or {},
            supplements={
                "permanent_shift": permanent_shift,
                "night_shift_hours": night_shift_hours,
                "sunday_hours": sunday_hours,
                "holiday_hours_no_comp": holiday_hours_no_comp,
                "holiday_hours_with_comp": holiday_hours_with_comp,
            },
        )
    except ValidationError as e:
        return {"error": str(e)}

    result = evaluate(_get_index(), request)
    return {"result": result.model_dump(mode="json"), "source": _state["source"]}


@mcp.tool()
async def list_versions() -> dict[str, Any]:
    """List tariff versions (valid_from dates) and the pay grades each covers."""
    return {"versions": sdk_list_versions(_get_index()), "source": _state["source"]}


@mcp.tool()
async def list_steps(
    pay_grade: str = Field(description="Pay grade, e.g. 'EG II'"),
    year: int = Field(description="Year"),
    month: int = Field(description="Month 1-12"),
) -> dict[str, Any]:
    """Show the monthly step table of a pay grade in force for a month."""
    grade = PayGrade.parse(pay_grade)
    if grade is None:
        return {"error": f"Unknown pay grade: {pay_grade}"}
    if not 1 <= year <= 9999:
        return {"error": f"Year must be 1-9999, got {year}"}
    if not 1 <= month <= 12:
        return {"error": f"Month must be 1-12, got {month}"}

    index = _get_index()
    version = resolve_version(index, year, month)
    return {
        "version": version,
        "pay_grade": grade.value,
        "default_step": default_step(index, version, grade),
        "steps": [{"step": s, "monthly": str(amount)} for s, amount in available_steps(index, version, grade)],
    }


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    _get_index()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
