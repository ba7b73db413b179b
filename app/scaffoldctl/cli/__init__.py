"""CLI package for scaffoldctl.

This package contains the Typer application and all subcommands.
"""

from scaffoldctl.cli.main import app

__all__ = ["app"]
