"""Tarif Calc CLI - Command-line interface for tariff-versioned pay calculation."""

import json
import logging
import os
from datetime import date
from typing import Any, Dict, Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console

from tarifcalc import __version__
from tarifcalc.sdk import (
    CalculationRequest,
    PayGrade,
    SettingsError,
    StandbySlot,
    available_steps,
    build_index,
    default_step,
    evaluate,
    get_setting,
    hourly_from_monthly,
    list_versions,
    load_dataset_or_bundled,
    read_dataset_file,
    resolve_version,
)
from tarifcalc.sdk.dataset import DatasetFormatError, DatasetNotFoundError
from tarifcalc.sdk.tariff import TariffIndex

from .dataset_commands import dataset as dataset_group
from .settings_commands import settings as settings_group
from .renderers.result_renderer import render_result, render_steps, render_versions

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s: %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging from LOG_LEVEL (default WARNING); --verbose forces DEBUG."""
    level_name = os.environ.get("LOG_LEVEL", "WARNING").upper()
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=True)


def load_index(dataset_path: Optional[str]) -> Tuple[TariffIndex, Dict[str, Any]]:
    """Load the dataset (falling back to the bundled one) and build the index once."""
    try:
        tariff, source = load_dataset_or_bundled(dataset_path)
    except SettingsError as e:
        raise click.ClickException(str(e))
    if source["type"] == "fallback":
        click.echo(click.style(f"Warning: {source['error']}; using bundled dataset.", fg="yellow"), err=True)
    return build_index(tariff), source


def resolve_output_format(output_format: Optional[str]) -> str:
    """Option value, else settings.json output_format, else text."""
    if output_format:
        return output_format
    try:
        configured = get_setting("output_format", "text")
    except SettingsError as e:
        raise click.ClickException(str(e))
    return configured if configured in ("text", "json") else "text"


def parse_pay_grade(value: str) -> PayGrade:
    grade = PayGrade.parse(value)
    if grade is None:
        choices = ", ".join(g.label for g in PayGrade)
        raise click.BadParameter(f"Unknown pay grade '{value}'. Use one of: {choices}")
    return grade


def parse_standby_pairs(pairs: Tuple[str, ...]) -> Dict[str, str]:
    """Parse repeated SLOT=HOURS options into a mapping."""
    hours = {}
    for pair in pairs:
        slot, sep, value = pair.partition("=")
        if not sep or StandbySlot.parse(slot) is None:
            valid = ", ".join(s.value for s in StandbySlot)
            raise click.BadParameter(f"Expected SLOT=HOURS with SLOT in {valid}, got '{pair}'", param_hint="--rb")
        hours[StandbySlot.parse(slot).value] = value
    return hours


def load_request_file(path: str) -> Dict[str, Any]:
    """Read a request from a YAML/JSON file (same loader as datasets)."""
    try:
        return dict(read_dataset_file(path))
    except (DatasetNotFoundError, DatasetFormatError) as e:
        raise click.ClickException(str(e))


def format_validation_error(e: ValidationError) -> str:
    lines = ["Invalid request:"]
    for err in e.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        lines.append(f"  {location}: {err.get('msg')}")
    return "\n".join(lines)


@click.group()
@click.version_option(version=__version__, prog_name="tarif-calc")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """Tarif Calc - Monthly gross pay under the physicians' tariff.

    Computes table salary, on-call duty (BD), standby (RB) and statutory
    supplements for any month, using the tariff version in force.

    The tariff dataset is loaded from (in order):

    \b
    1. --dataset option
    2. TARIF_CALC_DATASET environment variable
    3. settings.json 'dataset' key
    4. Bundled default dataset
    """
    setup_logging(verbose)


cli.add_command(dataset_group)
cli.add_command(settings_group)


@cli.command("calc")
@click.option("--year", "-y", type=click.IntRange(1, 9999), help="Year (default: current year)")
@click.option("--month", "-m", type=int, help="Month 1-12 (default: current month)")
@click.option("--grade", "-g", help="Pay grade, e.g. 'EG II' or EG_II")
@click.option("--step", "-s", type=int, help="Seniority step (default: 3 or highest available)")
@click.option("--bd-hours", help="On-call duty hours (total)")
@click.option("--bd-night", help="On-call night hours (subset of total)")
@click.option("--bd-holiday", help="On-call holiday hours (subset of total)")
@click.option("--rb-level", type=click.Choice(["I", "II", "III"], case_sensitive=False), help="Standby level (default III)")
@click.option("--rb", "rb_pairs", multiple=True, metavar="SLOT=HOURS",
              help="Standby hours per slot (wd_6_20, wd_4_6, wd_20_24, wd_0_4, sat, sun, hol). Repeatable.")
@click.option("--permanent-shift/--no-permanent-shift", default=None, help="Permanent shift work (flat allowance)")
@click.option("--ws-night-hours", help="Night hours in a rotating schedule")
@click.option("--sunday-hours", help="Sunday hours")
@click.option("--holiday-no-comp", help="Holiday hours without compensatory time off")
@click.option("--holiday-with-comp", help="Holiday hours with compensatory time off")
@click.option("--request", "request_file", type=click.Path(), help="Request file (YAML/JSON); options override it")
@click.option("--dataset", "dataset_path", type=click.Path(), help="Tariff dataset file (YAML/JSON)")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), help="Output format")
def calc(year, month, grade, step, bd_hours, bd_night, bd_holiday, rb_level, rb_pairs, permanent_shift,
         ws_night_hours, sunday_hours, holiday_no_comp, holiday_with_comp, request_file, dataset_path,
         output_format):
    """Calculate monthly gross pay.

    Hour options accept German number text ("12,5", "1.234,5").

    \b
    Examples:
      tarif-calc calc -y 2025 -m 6 -g "EG II" -s 3
      tarif-calc calc -g EG_II --bd-hours 100 --bd-night 10 --bd-holiday 5
      tarif-calc calc -g EG_II --rb wd_0_4=12 --rb sun=24 --rb-level II
      tarif-calc calc --request june.yaml --format json
    """
    output_format = resolve_output_format(output_format)
    data = load_request_file(request_file) if request_file else {}

    today = date.today()
    data.setdefault("year", today.year)
    data.setdefault("month", today.month)

    overrides = {
        "year": year,
        "month": month,
        "pay_grade": parse_pay_grade(grade) if grade else None,
        "step": step,
        "standby_level": rb_level.upper() if rb_level else None,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    if "pay_grade" not in data:
        raise click.UsageError("Missing pay grade: use --grade or set pay_grade in the request file.")

    on_call = {"total": bd_hours, "night": bd_night, "holiday": bd_holiday}
    data["on_call"] = {**data.get("on_call", {}), **{k: v for k, v in on_call.items() if v is not None}}

    if rb_pairs:
        data["standby_hours"] = {**data.get("standby_hours", {}), **parse_standby_pairs(rb_pairs)}

    supplements = {
        "permanent_shift": permanent_shift,
        "night_shift_hours": ws_night_hours,
        "sunday_hours": sunday_hours,
        "holiday_hours_no_comp": holiday_no_comp,
        "holiday_hours_with_comp": holiday_with_comp,
    }
    data["supplements"] = {
        **data.get("supplements", {}),
        **{k: v for k, v in supplements.items() if v is not None},
    }

    try:
        request = CalculationRequest.model_validate(data)
    except ValidationError as e:
        raise click.ClickException(format_validation_error(e))

    index, source = load_index(dataset_path)
    result = evaluate(index, request)

    if output_format == "json":
        output = result.model_dump(mode="json")
        output["source"] = source
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
        return

    render_result(Console(), result, source)


@cli.command("versions")
@click.option("--dataset", "dataset_path", type=click.Path(), help="Tariff dataset file (YAML/JSON)")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), help="Output format")
def versions(dataset_path, output_format):
    """List tariff versions and which grades they cover."""
    output_format = resolve_output_format(output_format)
    index, _ = load_index(dataset_path)
    described = list_versions(index)

    if output_format == "json":
        click.echo(json.dumps({"versions": described}, indent=2))
        return

    if not described:
        click.echo("No tariff versions in dataset.")
        return
    render_versions(Console(), described)


@cli.command("steps")
@click.option("--grade", "-g", required=True, help="Pay grade, e.g. 'EG II'")
@click.option("--year", "-y", type=click.IntRange(1, 9999), help="Year (default: current year)")
@click.option("--month", "-m", type=click.IntRange(1, 12), help="Month (default: current month)")
@click.option("--dataset", "dataset_path", type=click.Path(), help="Tariff dataset file (YAML/JSON)")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), help="Output format")
def steps(grade, year, month, dataset_path, output_format):
    """Show the step table of a pay grade in force for a month.

    The default step used by 'calc' is marked with '*'.
    """
    output_format = resolve_output_format(output_format)
    pay_grade = parse_pay_grade(grade)
    today = date.today()
    year = year if year is not None else today.year
    month = month if month is not None else today.month

    index, _ = load_index(dataset_path)
    version = resolve_version(index, year, month)
    table = available_steps(index, version, pay_grade)
    marked = default_step(index, version, pay_grade)

    if output_format == "json":
        click.echo(json.dumps({
            "version": version,
            "pay_grade": pay_grade.value,
            "default_step": marked,
            "steps": [
                {
                    "step": step,
                    "monthly": str(amount),
                    "hourly": str(hourly_from_monthly(amount, index.weekly_hours)),
                }
                for step, amount in table
            ],
        }, indent=2))
        return

    if not table:
        click.echo(f"No wage table for {pay_grade.label} in version {version or '-'}.")
        return
    title = f"{pay_grade.label} · Tarifstand {version} · {month:02d}/{year}"
    render_steps(Console(), title, table, index.weekly_hours, hourly_from_monthly, marked)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
