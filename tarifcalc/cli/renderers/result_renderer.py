"""Rich renderer for calculation results.

Transforms SDK results into formatted Rich tables. This is the only
place where amounts are rounded to cents.
"""

from typing import Any, Dict, List, Tuple

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tarifcalc.sdk.numbers import format_eur, format_hours
from tarifcalc.sdk.schemas import CalculationResult

DASH = "–"


def _eur_or_dash(amount) -> str:
    return format_eur(amount) if amount else DASH


def render_result(console: Console, result: CalculationResult, source: Dict[str, Any]) -> None:
    """Render a calculation result.

    Args:
        console: Rich Console instance
        result: Result from evaluate()
        source: Dataset source info from load_dataset_or_bundled()
    """
    if source.get("type") == "fallback":
        console.print(Panel(
            f"[yellow]{source.get('error')}[/yellow]\nUsing bundled dataset.",
            title="Note",
            border_style="yellow",
        ))

    _render_header(console, result, source)
    _render_components(console, result)
    if result.standby.slots:
        _render_standby_slots(console, result)


def _render_header(console: Console, result: CalculationResult, source: Dict[str, Any]) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Month", f"{result.month:02d}/{result.year}")
    table.add_row("Tariff version", result.version or DASH)
    table.add_row("Pay grade / step", f"{result.pay_grade.label} / Stufe {result.step}")
    table.add_row("Weekly hours", f"{result.weekly_hours}")
    table.add_row("Dataset", f"{source.get('path', '?')} ({source.get('type', '?')})")

    console.print(Panel(table, title="Request", border_style="dim"))


def _component_rows(result: CalculationResult) -> List[Tuple[str, str, str]]:
    on_call = result.on_call
    standby = result.standby
    supp = result.supplements

    surcharges = " · ".join(filter(None, [
        f"Nacht {format_eur(on_call.night_surcharge)}" if on_call.night_surcharge else None,
        f"Feiertag {format_eur(on_call.holiday_surcharge)}" if on_call.holiday_surcharge else None,
        f"≥97 h {format_eur(on_call.threshold_surcharge)}" if on_call.threshold_surcharge else None,
    ])) or DASH

    night_detail = (
        f"{format_eur(supp.night_shift_rate)} / h" if supp.night_shift_sum else DASH
    )

    return [
        ("Tabellenentgelt", format_eur(result.base_monthly), f"{format_eur(result.base_hourly)} / h individuell"),
        ("Bereitschaftsdienst (BD)", format_eur(on_call.total),
         f"{format_eur(on_call.hourly_rate)} / h" if on_call.hourly_rate else DASH),
        ("  BD-Zuschläge", "", surcharges),
        ("Rufbereitschaft (RB)", format_eur(standby.euro_total),
         f"{format_hours(standby.equivalent_hours)} Äquivalent"),
        ("  davon steuerfrei", _eur_or_dash(standby.tax_free_total), "nur Anzeige"),
        ("Schichtzulage", _eur_or_dash(supp.shift_allowance), ""),
        ("Wechselschicht-Nacht", _eur_or_dash(supp.night_shift_sum), night_detail),
        ("Sonntag", _eur_or_dash(supp.sunday_sum), "40 % Stufe 3"),
        ("Feiertag ohne FA", _eur_or_dash(supp.holiday_no_comp_sum), "135 % Stufe 3"),
        ("Feiertag mit FA", _eur_or_dash(supp.holiday_with_comp_sum), "35 % Stufe 3"),
        ("§ 11 Summe", _eur_or_dash(supp.percentage_total), ""),
        ("Schicht gesamt", format_eur(supp.shift_total), ""),
    ]


def _render_components(console: Console, result: CalculationResult) -> None:
    table = Table(title="Monatsbrutto", box=box.SIMPLE_HEAVY)
    table.add_column("Komponente")
    table.add_column("Betrag", justify="right")
    table.add_column("Details", style="dim")

    for label, amount, detail in _component_rows(result):
        table.add_row(label, amount, detail)

    table.add_section()
    table.add_row("[bold]Gesamt[/bold]", f"[bold]{format_eur(result.grand_total)}[/bold]", "")
    console.print(table)


def _render_standby_slots(console: Console, result: CalculationResult) -> None:
    table = Table(title=f"RB-Slots (Stufe {result.standby.level.value})", box=box.SIMPLE)
    table.add_column("Slot")
    table.add_column("Stunden", justify="right")
    table.add_column("Faktor", justify="right")
    table.add_column("Äquivalent", justify="right")
    table.add_column("Betrag", justify="right")
    table.add_column("steuerfrei", justify="right", style="dim")

    for line in result.standby.slots:
        table.add_row(
            line.slot.label,
            format_hours(line.hours),
            f"{line.factor_pct} %",
            format_hours(line.equivalent_hours),
            format_eur(line.euro),
            _eur_or_dash(line.tax_free_euro),
        )
    console.print(table)


def render_versions(console: Console, versions: List[Dict[str, Any]]) -> None:
    """Render the tariff version list."""
    table = Table(title="Tariff versions", box=box.SIMPLE)
    table.add_column("valid_from")
    table.add_column("Wage tables")
    table.add_column("On-call rates")
    for v in versions:
        table.add_row(
            v["version"],
            ", ".join(g.replace("_", " ") for g in v["wage_table_grades"]) or DASH,
            ", ".join(g.replace("_", " ") for g in v["oncall_rate_grades"]) or DASH,
        )
    console.print(table)


def render_steps(console: Console, title: str, steps, weekly_hours, hourly_fn, default: int) -> None:
    """Render a grade's step table with monthly and hourly amounts."""
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Stufe", justify="right")
    table.add_column("Monat", justify="right")
    table.add_column("Stunde", justify="right")
    for step, amount in steps:
        marker = " *" if step == default else ""
        table.add_row(f"{step}{marker}", format_eur(amount), format_eur(hourly_fn(amount, weekly_hours)))
    console.print(table)
