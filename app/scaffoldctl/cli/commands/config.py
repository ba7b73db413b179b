"""Configuration commands.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import typer

from scaffoldctl.cli.types import require_config
from scaffoldctl.core.config import ConfigError, ScaffoldConfig, save_config
from scaffoldctl.core.paths import get_config_path
from scaffoldctl.scaffold.pipeline import EXIT_FATAL
from scaffoldctl.utils.formatting import (
    console,
    create_table,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Show or initialize scaffoldctl configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    config = require_config()
    path = get_config_path()

    table = create_table("Configuration")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("source", str(config.source) if config.source else "[muted](current directory)[/]")
    table.add_row("manifest", config.manifest)
    table.add_row("case_check", config.case_check.value)
    table.add_row("verify_before_write", str(config.verify_before_write).lower())
    table.add_row("report_format", config.report_format)
    console.print(table)

    origin = str(path) if path.exists() else "built-in defaults"
    print_info(f"Loaded from: {origin}")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(ScaffoldConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    print_success(f"Config written to {saved}")
