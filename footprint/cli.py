"""Command-line interface for the Digital Footprint settings core.

Reads and changes the same settings, exclude list and site categories the
extension's options page edits, and exports or wipes the stored data.

Built with Click for commands and Rich for terminal output.

Usage:
    footprint settings show
    footprint settings set scanInterval 60000
    footprint exclude save domains.txt
    footprint categories add productivity https://github.com
    footprint export -o ./exports
    footprint clear-all
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from footprint import __version__
from footprint.categories import CategoryStore
from footprint.config import get_config
from footprint.models import (
    Category,
    OperationResult,
    ScanInterval,
    Settings,
    StatusMessage,
)
from footprint.portability import DataPortability
from footprint.settings_store import SettingsStore, UnknownSettingError
from footprint.storage import JsonFileStorage, StorageError
from footprint.utils.logging import setup_logging

logger = logging.getLogger(__name__)

console = Console()


# =============================================================================
# Helper Functions
# =============================================================================


def print_header(text: str) -> None:
    console.print()
    console.print(Panel(text, style="bold blue", expand=False))
    console.print()


def print_success(text: str) -> None:
    console.print(f"[green]✓[/green] {escape(text)}")


def print_warning(text: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {escape(text)}")


def print_error(text: str) -> None:
    console.print(f"[red]✗[/red] {escape(text)}")


def print_info(text: str) -> None:
    console.print(f"[blue]ℹ[/blue] {escape(text)}")


def confirm_action(prompt: str, default: bool = False) -> bool:
    """Ask for Y/N confirmation."""
    return Confirm.ask(prompt, default=default)


def parse_value(raw: str) -> Any:
    """Interpret a command-line value as a JSON scalar or list, else a string.

    Example:
        >>> parse_value("true"), parse_value("60000"), parse_value("example.com")
        (True, 60000, 'example.com')
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def report(result: OperationResult) -> None:
    """Print an operation result and exit non-zero on failure."""
    if result.ok:
        print_success(result.message)
        return
    if result.error is None:
        print_info(result.message)
        return
    print_error(result.message)
    sys.exit(1)


def get_storage(ctx: click.Context) -> JsonFileStorage:
    return ctx.obj["storage"]


# =============================================================================
# Main CLI Group
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="Digital Footprint")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to config file",
)
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Storage file to use instead of the configured one",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_path: Path | None,
    data_file: Path | None,
) -> None:
    """Digital Footprint - manage tracking settings and site categories.

    For more information on a command:
        footprint COMMAND --help
    """
    app_config = get_config(config_path)
    setup_logging("DEBUG" if verbose else app_config.log_level, app_config.log_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = app_config
    ctx.obj["storage"] = JsonFileStorage(data_file or app_config.resolve_data_file())


# =============================================================================
# Settings Commands
# =============================================================================


@cli.group()
def settings() -> None:
    """Show and change tracking settings."""
    pass


@settings.command("show")
@click.pass_context
def settings_show(ctx: click.Context) -> None:
    """Show current settings."""
    current = asyncio.run(SettingsStore(get_storage(ctx)).load())

    table = Table(show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in current.to_storage().items():
        if key == "excludeList":
            value = f"{len(value)} domain(s)"
        table.add_row(key, escape(str(value)))

    console.print(table)


@settings.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def settings_set(ctx: click.Context, key: str, value: str) -> None:
    """Set one setting.

    Example:
        footprint settings set biasDetection false
        footprint settings set scanInterval 60000
    """
    parsed = parse_value(value)
    offered = [i.value for i in ScanInterval]
    if Settings.field_name_for(key) == "scan_interval" and parsed not in offered:
        print_warning(f"{parsed} is not an offered interval; saving anyway")

    try:
        asyncio.run(SettingsStore(get_storage(ctx)).update(key, parsed))
    except UnknownSettingError as e:
        print_error(str(e))
        sys.exit(1)
    except ValidationError as e:
        print_error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
        sys.exit(1)

    print_success(StatusMessage.SETTINGS_SAVED)


@settings.command("reset")
@click.pass_context
def settings_reset(ctx: click.Context) -> None:
    """Reset settings to defaults (categories are kept)."""
    asyncio.run(SettingsStore(get_storage(ctx)).reset_to_defaults())
    print_success(StatusMessage.SETTINGS_RESET)


# =============================================================================
# Exclude List Commands
# =============================================================================


@cli.group()
def exclude() -> None:
    """Manage domains that are never scanned."""
    pass


@exclude.command("show")
@click.pass_context
def exclude_show(ctx: click.Context) -> None:
    """Print the exclude list, one domain per line."""
    text = asyncio.run(SettingsStore(get_storage(ctx)).exclude_text())
    if text:
        click.echo(text)
    else:
        print_info("Exclude list is empty")


@exclude.command("save")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_context
def exclude_save(ctx: click.Context, source: Any) -> None:
    """Replace the exclude list with the lines of SOURCE ('-' for stdin)."""
    updated = asyncio.run(SettingsStore(get_storage(ctx)).save_exclude_list(source.read()))
    print_success(StatusMessage.SETTINGS_SAVED)
    print_info(f"{len(updated.exclude_list)} domain(s) excluded")


# =============================================================================
# Category Commands
# =============================================================================


@cli.group()
def categories() -> None:
    """Manage custom site categories."""
    pass


@categories.command("list")
@click.pass_context
def categories_list(ctx: click.Context) -> None:
    """List custom site categories."""
    current = asyncio.run(CategoryStore(get_storage(ctx)).load())

    if not current:
        print_info("No custom categories defined yet")
        console.print(f"  Suggested: {', '.join(c.value for c in Category)}")
        return

    for category, domains in current.items():
        console.print(f"[bold]{escape(category[:1].upper() + category[1:])}[/bold]")
        for domain in domains:
            console.print(f"  {escape(domain)}")


@categories.command("add")
@click.argument("category")
@click.argument("url")
@click.pass_context
def categories_add(ctx: click.Context, category: str, url: str) -> None:
    """Add the site at URL to CATEGORY."""
    result = asyncio.run(CategoryStore(get_storage(ctx)).add_domain(category, url))
    report(result)


@categories.command("remove")
@click.argument("category")
@click.argument("domain")
@click.pass_context
def categories_remove(ctx: click.Context, category: str, domain: str) -> None:
    """Remove DOMAIN from CATEGORY."""
    result = asyncio.run(CategoryStore(get_storage(ctx)).remove_domain(category, domain))
    report(result)


@categories.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def categories_clear(ctx: click.Context, yes: bool) -> None:
    """Remove every custom category."""
    if not yes and not confirm_action("Remove all custom categories?"):
        print_info("Cancelled.")
        return

    asyncio.run(CategoryStore(get_storage(ctx)).clear())
    print_success(StatusMessage.CATEGORIES_CLEARED)


# =============================================================================
# Data Commands
# =============================================================================


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to write the export into",
)
@click.pass_context
def export(ctx: click.Context, output: Path | None) -> None:
    """Export all stored data as a dated JSON file."""
    directory = output or ctx.obj["config"].export_dir
    path = asyncio.run(DataPortability(get_storage(ctx)).export_to_file(directory))
    print_success(StatusMessage.DATA_EXPORTED)
    console.print(f"  {escape(str(path))}")


@cli.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset(ctx: click.Context, yes: bool) -> None:
    """Reset settings to defaults and remove all custom categories."""
    if not yes and not confirm_action("Reset settings and remove all custom categories?"):
        print_info("Cancelled.")
        return

    report(asyncio.run(DataPortability(get_storage(ctx)).reset_all()))


@cli.command("clear-all")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_all(ctx: click.Context, yes: bool) -> None:
    """Erase all stored data, including tracking history."""
    print_header("Clear all data")

    def confirm() -> bool:
        return yes or confirm_action(
            "Are you sure you want to clear all tracking data? This cannot be undone."
        )

    report(asyncio.run(DataPortability(get_storage(ctx)).clear_all(confirm)))


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print()
        print_info("Interrupted.")
        sys.exit(130)
    except StorageError as e:
        print_error(str(e))
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Unexpected error")
        sys.exit(1)


if __name__ == "__main__":
    main()
