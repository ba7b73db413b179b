"""Shared types and utilities for CLI commands.

This module provides the option enums and the scan/copy driver used by
both the ``check`` and ``apply`` commands.
"""

from enum import Enum
from pathlib import Path

import typer

from scaffoldctl.cli.report import (
    print_clean_paths,
    print_conflicts,
    print_copy_report,
    print_json_report,
    print_scan_summary,
    print_skipped_paths,
)
from scaffoldctl.core.config import ConfigError, ScaffoldConfig, load_config
from scaffoldctl.core.manifest import ManifestError, load_source_manifest
from scaffoldctl.scaffold.pipeline import (
    EXIT_FATAL,
    PipelineMode,
    PipelineResult,
    PipelineState,
    ScaffoldError,
    run_pipeline,
)
from scaffoldctl.scaffold.scanner import CaseCheck
from scaffoldctl.utils.formatting import print_error, print_success


class OutputFormat(str, Enum):
    """Report format options."""

    TEXT = "text"
    JSON = "json"


def require_config() -> ScaffoldConfig:
    """Load the user configuration or exit with a fatal status.

    Raises:
        typer.Exit: If the configuration file is invalid.
    """
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FATAL) from e


def run_scaffold(
    ctx: typer.Context,
    mode: PipelineMode,
    *,
    target: Path,
    source: Path | None,
    manifest: Path | None,
    output_format: OutputFormat | None,
    case_check: CaseCheck | None,
    verify_absent: bool | None = None,
) -> None:
    """Load the manifest, run the pipeline and report the outcome.

    Command-line values take precedence over configuration values.

    Raises:
        typer.Exit: With the pipeline exit code when it is non-zero, or
            with the fatal status when the invocation cannot proceed.
    """
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    config = require_config()

    source_root = (source or config.effective_source).resolve()
    target_root = target.expanduser().resolve()
    fmt = output_format or OutputFormat(config.report_format)

    try:
        scaffold = load_source_manifest(source_root, manifest or config.manifest)
    except ManifestError as e:
        print_error(f"Failed to load manifest: {e}")
        raise typer.Exit(code=EXIT_FATAL) from e

    try:
        result = run_pipeline(
            source_root,
            target_root,
            scaffold.paths,
            mode,
            case_check=case_check or config.case_check,
            verify_absent=config.verify_before_write if verify_absent is None else verify_absent,
        )
    except ScaffoldError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FATAL) from e
    except OSError as e:
        print_error(f"Unexpected filesystem error: {e}")
        raise typer.Exit(code=EXIT_FATAL) from e

    if fmt == OutputFormat.JSON:
        print_json_report(result)
    else:
        _print_text_report(result, quiet=quiet)

    if result.exit_code != 0:
        raise typer.Exit(code=result.exit_code)


def _print_text_report(result: PipelineResult, *, quiet: bool) -> None:
    """Render a pipeline result for humans."""
    scan = result.scan

    if result.state == PipelineState.CONFLICTS_FOUND:
        print_scan_summary(scan)
        print_conflicts(scan.conflicts)
        if result.mode == PipelineMode.COMMIT:
            print_error("Apply aborted: conflicts detected. Resolve manually and retry.")
        return

    if not quiet:
        print_scan_summary(scan)
        print_skipped_paths(scan)

    if result.state == PipelineState.CLEAN:
        if not quiet:
            print_clean_paths(scan)
        print_success("No conflicts detected. Safe to apply.")
        return

    if result.copy is None:
        return

    print_copy_report(result.copy)
    if result.state == PipelineState.PARTIAL:
        print_error(
            f"Copy finished with {len(result.copy.errors)} error(s); "
            f"{result.copy.entries_written} entries were written."
        )
        return

    print_success(
        f"Successfully copied {result.copy.files_written} files "
        f"and {result.copy.symlinks_copied} symlinks."
    )
