"""Settings CLI commands for Tarif Calc.

Manages settings.json - dataset path and output preferences.
"""

import click
from pathlib import Path

from tarifcalc.sdk import (
    SettingsError,
    get_dataset_path,
    get_settings_path,
    load_settings,
    set_setting,
)


def _load_or_fail() -> dict:
    try:
        return load_settings()
    except SettingsError as e:
        raise click.ClickException(str(e))


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - dataset: path to a tariff dataset file
    - output_format: default output format (text or json)
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = _load_or_fail()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    path, source = get_dataset_path()
    click.echo()
    click.echo("Effective dataset:")
    click.echo(f"  {path} ({source})")


@settings.command("dataset")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom dataset, revert to bundled default")
def settings_dataset(path, clear):
    """Set or clear the tariff dataset path.

    Examples:
        tarif-calc settings dataset ~/tarif/tariff.yaml
        tarif-calc settings dataset --clear
    """
    if clear:
        current = _load_or_fail()
        if "dataset" in current:
            set_setting("dataset", None)
            click.echo("Cleared dataset setting.")
        else:
            click.echo("dataset was not set.")
        return

    if not path:
        current = _load_or_fail().get("dataset")
        click.echo(f"dataset: {current}" if current else "dataset is not set (using bundled default).")
        return

    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        click.echo(click.style(f"Warning: {resolved} does not exist yet.", fg="yellow"))

    _load_or_fail()
    settings_file = set_setting("dataset", str(resolved))
    click.echo(f"Set dataset to: {resolved}")
    click.echo(f"Saved to: {settings_file}")


@settings.command("output-format")
@click.argument("output_format", type=click.Choice(["text", "json"]))
def settings_output_format(output_format):
    """Set the default output format."""
    _load_or_fail()
    settings_file = set_setting("output_format", output_format)
    click.echo(f"Set output_format to: {output_format}")
    click.echo(f"Saved to: {settings_file}")
