"""Scan and copy report rendering.

Turns pipeline results into Rich tables for humans or JSON for
machines. Rendering never changes the outcome; exit codes are decided
by the pipeline state.
"""

import json

from scaffoldctl.scaffold.models import (
    ConflictReason,
    CopyResult,
    EntryDescriptor,
    ScanConflict,
    ScanResult,
)
from scaffoldctl.scaffold.pipeline import PipelineResult
from scaffoldctl.utils.formatting import console, create_table, print_warning

RESOLUTION_HINT = "Resolve manually in the target project, then retry."


def print_json_report(result: PipelineResult) -> None:
    """Print the full pipeline result as JSON."""
    console.print_json(json.dumps(result.to_dict()))


def print_scan_summary(scan: ScanResult) -> None:
    """Print path counts by classification."""
    summary = scan.summary
    table = create_table("Scaffold Scan")
    table.add_column("Paths", style="text")
    table.add_column("Count", justify="right")
    table.add_row("Total in manifest", str(summary["total"]))
    table.add_row("[clean]Clean (safe to copy)[/]", str(summary["clean"]))
    table.add_row("[conflict]Conflicts[/]", str(summary["conflicts"]))
    if summary["skipped"]:
        table.add_row("[skipped]Skipped (not in template)[/]", str(summary["skipped"]))
    console.print(table)


def print_conflicts(conflicts: tuple[ScanConflict, ...]) -> None:
    """Print a table of conflicting paths with what was found and expected."""
    table = create_table("Conflicts")
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Reason", width=14)
    table.add_column("Discovered")
    table.add_column("Expected / Details", style="muted")

    for conflict in conflicts:
        table.add_row(
            conflict.path,
            f"[conflict]{conflict.reason.value}[/]",
            _describe(conflict.discovered),
            _details(conflict),
        )

    console.print(table)
    console.print(f"[warning]{RESOLUTION_HINT}[/]")


def print_clean_paths(scan: ScanResult) -> None:
    """Print the paths that would be copied."""
    if not scan.clean:
        return
    console.print("[header]Clean paths:[/]")
    for path in scan.clean:
        console.print(f"  [clean]{path}[/]", highlight=False)


def print_skipped_paths(scan: ScanResult) -> None:
    """Print manifest entries missing from the template."""
    for path in scan.skipped:
        print_warning(f"Not in template, skipped: {path}")


def print_copy_report(copy_result: CopyResult) -> None:
    """Print copy counters and a table of failed paths, if any."""
    console.print(
        f"[info]Files written: {copy_result.files_written}, "
        f"symlinks copied: {copy_result.symlinks_copied}, "
        f"directories ensured: {len(copy_result.directories)}[/]"
    )
    if not copy_result.errors:
        return

    table = create_table("Copy Errors")
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Code", width=8)
    table.add_column("Message", style="muted")
    for error in copy_result.errors:
        table.add_row(error.path, f"[error]{error.code}[/]", error.message)
    console.print(table)


def _describe(descriptor: EntryDescriptor | None) -> str:
    """Format a descriptor as "<type> (<size> bytes)"."""
    if descriptor is None:
        return "-"
    return f"{descriptor.kind.value} ({descriptor.size_bytes} bytes)"


def _details(conflict: ScanConflict) -> str:
    """Format the reason-specific part of a conflict row."""
    if conflict.reason == ConflictReason.LOOKUP_ERROR:
        return f"{conflict.error} ({conflict.error_code})"
    if conflict.reason == ConflictReason.CASE_COLLISION:
        return f"collides with {conflict.collides_with}"
    return _describe(conflict.expected)
