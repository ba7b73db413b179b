"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from scaffoldctl.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_table(title: str) -> Table:
    """Create a pre-configured table with the shared header and border styles.

    Args:
        title: Table title.

    Returns:
        Rich Table ready for columns.
    """
    return Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    root = logging.getLogger("scaffoldctl")
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=err_console, show_path=False, markup=False))


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
