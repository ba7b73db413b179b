"""Unit tests for config commands."""

from pathlib import Path

from scaffoldctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigShow:
    """Tests for scaffoldctl config show."""

    def test_show_defaults(self) -> None:
        """Without a config file the built-in defaults are shown."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "case_check" in result.stdout
        assert "built-in defaults" in result.stdout

    def test_show_file_values(self, isolated_config_home: Path) -> None:
        """Values from the config file are shown."""
        config_dir = isolated_config_home / "scaffoldctl"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text('case_check = "never"\n')

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "never" in result.stdout


class TestConfigInit:
    """Tests for scaffoldctl config init."""

    def test_init_writes_file(self, isolated_config_home: Path) -> None:
        """Init writes a default config file."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        path = isolated_config_home / "scaffoldctl" / "config.toml"
        assert path.exists()
        assert 'case_check = "auto"' in path.read_text()

    def test_init_refuses_overwrite(self, isolated_config_home: Path) -> None:
        """Init keeps an existing file unless --force is given."""
        config_dir = isolated_config_home / "scaffoldctl"
        config_dir.mkdir(parents=True)
        path = config_dir / "config.toml"
        path.write_text('case_check = "never"\n')

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert path.read_text() == 'case_check = "never"\n'

    def test_init_force(self, isolated_config_home: Path) -> None:
        """Init --force replaces an existing file."""
        config_dir = isolated_config_home / "scaffoldctl"
        config_dir.mkdir(parents=True)
        path = config_dir / "config.toml"
        path.write_text('case_check = "never"\n')

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        assert 'case_check = "auto"' in path.read_text()
