"""Apply command implementation.

Copies the scaffold into a target repository, but only when the scan
found no conflicts (commit mode).
"""

from pathlib import Path
from typing import Annotated

import typer

from scaffoldctl.cli.types import OutputFormat, run_scaffold
from scaffoldctl.scaffold.pipeline import PipelineMode
from scaffoldctl.scaffold.scanner import CaseCheck

app = typer.Typer(
    help="Copy the scaffold into a target repository.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def apply(
    ctx: typer.Context,
    target: Annotated[
        Path,
        typer.Option("--target", "-t", help="Target repository path."),
    ],
    source: Annotated[
        Path | None,
        typer.Option(
            "--source",
            "-s",
            help="Template root (default: configured source or current directory).",
        ),
    ] = None,
    manifest: Annotated[
        Path | None,
        typer.Option(
            "--manifest",
            "-m",
            help="Manifest file, relative to the template root or absolute.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option(
            "--format",
            "-f",
            help="Report format: text or json.",
            case_sensitive=False,
        ),
    ] = None,
    case_check: Annotated[
        CaseCheck | None,
        typer.Option(
            "--case-check",
            help="Case-fold collision check: auto, always or never.",
            case_sensitive=False,
        ),
    ] = None,
    verify: Annotated[
        bool | None,
        typer.Option(
            "--verify/--no-verify",
            help="Re-check each target right before writing it.",
        ),
    ] = None,
) -> None:
    """Copy scaffold files into the target, aborting on any conflict.

    Exit codes: 0 when everything was copied, 1 when conflicts blocked
    the copy, 2 on fatal errors, 3 when some entries failed to copy.

    Examples:
        scaffoldctl apply --target ../my-repo
        scaffoldctl apply -t ../my-repo --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    run_scaffold(
        ctx,
        PipelineMode.COMMIT,
        target=target,
        source=source,
        manifest=manifest,
        output_format=output_format,
        case_check=case_check,
        verify_absent=verify,
    )
