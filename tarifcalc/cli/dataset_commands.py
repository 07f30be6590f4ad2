"""Dataset CLI commands for Tarif Calc.

Shows which tariff dataset is in use and validates dataset files.
"""

import json

import click

from tarifcalc.sdk import (
    SettingsError,
    get_dataset_path,
    read_dataset_file,
    validate_dataset,
)
from tarifcalc.sdk.dataset import DatasetFormatError, DatasetNotFoundError, normalize_dataset


@click.group()
def dataset():
    """Inspect and validate tariff datasets."""
    pass


@dataset.command("show")
@click.option("--dataset", "dataset_path", type=click.Path(), help="Tariff dataset file (YAML/JSON)")
def dataset_show(dataset_path):
    """Show the dataset path that would be used and its source."""
    try:
        path, source = get_dataset_path(dataset_path)
    except SettingsError as e:
        raise click.ClickException(str(e))

    click.echo(f"Dataset: {path}")
    click.echo(f"Source: {source}")
    click.echo(f"File exists: {path.exists()}")


@dataset.command("validate")
@click.argument("path", required=False, type=click.Path())
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format")
def dataset_validate(path, output_format):
    """Validate a tariff dataset file.

    PATH defaults to the dataset resolved from env var / settings /
    bundled default. Exits with status 1 when errors are found.
    """
    try:
        dataset_path, _ = get_dataset_path(path)
        tariff = normalize_dataset(read_dataset_file(dataset_path))
    except (DatasetNotFoundError, DatasetFormatError, SettingsError) as e:
        raise click.ClickException(str(e))

    result = validate_dataset(tariff)

    if output_format == "json":
        click.echo(json.dumps({
            "path": str(dataset_path),
            "valid": result.valid,
            "errors": result.errors,
            "warnings": result.warnings,
        }, indent=2))
    else:
        click.echo(f"Dataset: {dataset_path}")
        for error in result.errors:
            click.echo(click.style(f"  ERROR: {error}", fg="red"))
        for warning in result.warnings:
            click.echo(click.style(f"  WARNING: {warning}", fg="yellow"))
        if result.valid:
            click.echo(click.style("Dataset is valid.", fg="green"))

    if not result.valid:
        raise SystemExit(1)
