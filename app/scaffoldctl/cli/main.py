"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from scaffoldctl import __version__
from scaffoldctl.cli.commands import apply, check, config
from scaffoldctl.utils.formatting import configure_logging

app = typer.Typer(
    name="scaffoldctl",
    help="Copy template scaffold files into a repository without clobbering local files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"scaffoldctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging on stderr.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """scaffoldctl - Conflict-safe scaffold replication.

    Scan a target repository against a template manifest and copy the
    scaffold only when nothing in the target would be overwritten.
    """
    configure_logging(verbose)
    # Read by run_scaffold via ctx.obj
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Subcommands
app.add_typer(check.app, name="check")
app.add_typer(apply.app, name="apply")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
