# src/icm_lookup/cli.py
import logging
from pathlib import Path

import click
import yaml

from icm_lookup.catalog import Catalog
from icm_lookup.codes import CodeType
from icm_lookup.config import load_config
from icm_lookup.exceptions import CodeLookupError
from icm_lookup.lookup import CodeLookup
from icm_lookup.utils import validate_source_text

SUBSET_CHOICES = [code_type.value for code_type in CodeType]
SUBSET_MENU = ", ".join(f"{i} for {code_type.value}" for i, code_type in enumerate(CodeType))


def _format_entry(entry) -> str:
    return f"Code: {entry.code}, Description: {entry.description}"


def _get_lookup(ctx) -> CodeLookup:
    """Build the catalog on first use and keep it on the context."""
    obj = ctx.ensure_object(dict)
    if "lookup" not in obj:
        try:
            catalog = Catalog.load(obj["config"])
        except CodeLookupError as e:
            raise click.ClickException(f"Could not load code catalog: {e}")
        obj["lookup"] = CodeLookup(
            catalog, max_results=obj["config"]["search"]["max_results"]
        )
    return obj["lookup"]


def _parse_subset(value):
    if value is None:
        return None
    try:
        return CodeType.parse(value)
    except CodeLookupError as e:
        raise click.BadParameter(str(e))


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="YAML config overriding the packaged defaults")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging level (defaults to the config value)")
@click.pass_context
def cli(ctx, config_path, log_level):
    """ICD-9/ICD-10 code lookup CLI"""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid config file {config_path}: {e}")

    level = (log_level or config.get("logging", {}).get("level", "WARNING")).upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command()
@click.argument("code")
@click.option("--subset", default=None, help=f"Code set to search ({', '.join(SUBSET_CHOICES)})")
@click.pass_context
def find(ctx, code, subset):
    """Look up a code exactly (case and punctuation are ignored)."""
    code_type = _parse_subset(subset)
    entry = _get_lookup(ctx).find(code, code_type)
    if entry is None:
        click.echo("ICM Code not found.")
        ctx.exit(1)
    click.echo(f"Found ICM Code: {entry.code}, Description: {entry.description}")


@cli.command()
@click.argument("query")
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Number of results")
@click.option("--distances/--no-distances", default=False, help="Show edit distances")
@click.pass_context
def search(ctx, query, limit, distances):
    """List the codes closest to QUERY by edit distance."""
    ranked = _get_lookup(ctx).rank(query, max_results=limit)
    if not ranked:
        click.echo("No ICM Codes found.")
        return

    click.echo("Found ICM Codes:")
    for entry, distance in ranked:
        line = _format_entry(entry)
        if distances:
            line = f"{line} (distance={distance})"
        click.echo(line)


@cli.command()
@click.argument("subset")
@click.argument("count", type=int)
@click.pass_context
def samples(ctx, subset, count):
    """Print COUNT random codes from SUBSET."""
    code_type = _parse_subset(subset)
    try:
        entries = _get_lookup(ctx).get_samples(code_type, count)
    except CodeLookupError as e:
        raise click.BadParameter(str(e), param_hint="COUNT")

    click.echo("ICM Code Samples:")
    for entry in entries:
        click.echo(_format_entry(entry))


@cli.command()
@click.pass_context
def stats(ctx):
    """Show entry counts per code set."""
    for name, subset_stats in _get_lookup(ctx).catalog.get_stats().items():
        click.echo(
            f"{name}: {subset_stats['total_codes']:,} codes, "
            f"{subset_stats['duplicate_normalized_codes']:,} duplicate normalized codes"
        )


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def validate(ctx, path):
    """Check a "code,description" file without loading it."""
    encoding = ctx.obj["config"].get("encoding", "utf-8")
    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Could not read {path}: {e}")
    result = validate_source_text(text)

    click.echo(f"Lines: {result['total_lines']:,}")
    click.echo(f"Entries: {result['total_entries']:,}")
    click.echo(f"Duplicate lines: {result['duplicate_lines']:,}")
    click.echo(f"Duplicate normalized codes: {len(result['duplicate_normalized_codes']):,}")
    if not result["valid"]:
        click.echo(f"Malformed lines: {', '.join(map(str, result['malformed_lines']))}")
        ctx.exit(1)
    click.echo("Valid")


@cli.command()
@click.pass_context
def menu(ctx):
    """Interactive lookup menu."""
    lookup = _get_lookup(ctx)

    click.echo("ICM Lookup Console App")
    click.echo("----------------------")

    while True:
        click.echo("Select an option:")
        click.echo("1. Find an ICM Code")
        click.echo("2. Search for ICM Codes")
        click.echo("3. Get ICM Code Samples")
        click.echo("4. Exit")

        option = click.prompt("Option", default="", show_default=False).strip()

        try:
            if option == "1":
                code = click.prompt("Enter the ICM Code")
                code_type = CodeType.parse(
                    click.prompt(f"Enter the Code Type ({SUBSET_MENU})")
                )
                entry = lookup.find(code, code_type)
                if entry is not None:
                    click.echo(f"Found ICM Code: {entry.code}, Description: {entry.description}")
                else:
                    click.echo("ICM Code not found.")

            elif option == "2":
                results = lookup.search(click.prompt("Enter the search term"))
                if results:
                    click.echo("Found ICM Codes:")
                    for entry in results:
                        click.echo(_format_entry(entry))
                else:
                    click.echo("No ICM Codes found.")

            elif option == "3":
                code_type = CodeType.parse(
                    click.prompt(f"Enter the Code Type ({SUBSET_MENU})")
                )
                count = click.prompt("Enter the number of samples", type=int)
                click.echo("ICM Code Samples:")
                for entry in lookup.get_samples(code_type, count):
                    click.echo(_format_entry(entry))

            elif option == "4" or option.lower() in ("q", "quit", "exit"):
                return

            else:
                click.echo("Invalid option. Please try again.")

        except CodeLookupError as e:
            click.echo(f"Error: {e}")

        click.echo()


if __name__ == "__main__":
    cli()
