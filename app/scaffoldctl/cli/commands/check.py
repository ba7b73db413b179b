"""Check command implementation.

Scans a target repository for scaffold conflicts without writing
anything (preview mode).
"""

from pathlib import Path
from typing import Annotated

import typer

from scaffoldctl.cli.types import OutputFormat, run_scaffold
from scaffoldctl.scaffold.pipeline import PipelineMode
from scaffoldctl.scaffold.scanner import CaseCheck

app = typer.Typer(
    help="Scan a target repository for scaffold conflicts.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def check(
    ctx: typer.Context,
    target: Annotated[
        Path,
        typer.Option(
            "--target",
            "-t",
            help="Target repository path.",
        ),
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
) -> None:
    """Report which scaffold paths would be copied and which conflict.

    Never modifies the target. Exits 0 when the target is clean and 1
    when any conflict was found.

    Examples:
        scaffoldctl check --target ../my-repo
        scaffoldctl check -t ../my-repo --format json
        scaffoldctl check -t ../my-repo --source ~/templates/rpi
    """
    if ctx.invoked_subcommand is not None:
        return

    run_scaffold(
        ctx,
        PipelineMode.PREVIEW,
        target=target,
        source=source,
        manifest=manifest,
        output_format=output_format,
        case_check=case_check,
    )
