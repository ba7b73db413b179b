"""Unit tests for the main CLI entry point."""

from scaffoldctl import __version__
from scaffoldctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"scaffoldctl version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        """Help lists every command."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("check", "apply", "config"):
            assert command in result.stdout
