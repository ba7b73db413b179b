"""User configuration and settings.

This module provides the configuration model and I/O functions for
scaffoldctl defaults: where the template lives, which manifest to read,
how the case-fold collision check behaves, and the default report format.

Configuration is stored in ~/.config/scaffoldctl/config.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scaffoldctl.core.paths import DEFAULT_MANIFEST_RELPATH, get_config_path
from scaffoldctl.scaffold.scanner import CaseCheck

# Report format type alias
ReportFormat = Literal["text", "json"]


class ScaffoldConfig(BaseModel):
    """Configuration for scaffoldctl.

    Attributes:
        source: Default template root. If None, the current directory is used.
        manifest: Manifest path, relative to the template root or absolute.
        case_check: When to run the case-fold collision check.
        verify_before_write: Re-check each target immediately before writing.
        report_format: Default report format.
    """

    model_config = ConfigDict(extra="forbid")

    source: Annotated[Path | None, Field(description="Default template root")] = None
    manifest: Annotated[
        str,
        Field(min_length=1, description="Manifest path relative to the template root"),
    ] = DEFAULT_MANIFEST_RELPATH
    case_check: Annotated[
        CaseCheck,
        Field(description="Case-fold collision check policy"),
    ] = CaseCheck.AUTO
    verify_before_write: Annotated[
        bool,
        Field(description="Refuse to overwrite targets that appear after the scan"),
    ] = True
    report_format: Annotated[ReportFormat, Field(description="Default report format")] = "text"

    @property
    def effective_source(self) -> Path:
        """Get the template root to use when none is given explicitly."""
        return self.source if self.source is not None else Path.cwd()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> ScaffoldConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ScaffoldConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't
            match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return ScaffoldConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ScaffoldConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: ScaffoldConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ScaffoldConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: ScaffoldConfig) -> dict[str, object]:
    """Convert ScaffoldConfig to a dictionary for TOML serialization.

    TOML has no null, so an unset source is omitted.
    """
    result: dict[str, object] = {
        "manifest": config.manifest,
        "case_check": config.case_check.value,
        "verify_before_write": config.verify_before_write,
        "report_format": config.report_format,
    }
    if config.source is not None:
        result["source"] = str(config.source)
    return result
