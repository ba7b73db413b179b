"""CLI commands for scaffoldctl.

This package contains all subcommand implementations.
"""

from scaffoldctl.cli.commands import apply, check, config

__all__ = ["apply", "check", "config"]
