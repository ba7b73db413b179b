"""Scan-then-copy pipeline orchestration.

The scanner always runs first. Any conflict, including a failed
lookup, is terminal in both modes, so the target is never written
unless the whole manifest scanned clean. Preview mode stops at the
clean state; commit mode copies and ends in DONE, or PARTIAL when some
entries could not be materialized.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from scaffoldctl.scaffold.copier import ScaffoldCopier
from scaffoldctl.scaffold.models import CopyResult, ScanResult
from scaffoldctl.scaffold.scanner import CaseCheck, ScaffoldScanner

logger = logging.getLogger(__name__)


class ScaffoldError(Exception):
    """Base exception for fatal scaffold pipeline errors."""


class TargetRootError(ScaffoldError):
    """Raised when the target root exists but is not a directory."""


class PipelineMode(str, Enum):
    """How far the pipeline is allowed to go.

    Attributes:
        PREVIEW: Scan and report only; never mutates the target.
        COMMIT: Copy clean paths when the scan found no conflicts.
    """

    PREVIEW = "preview"
    COMMIT = "commit"


class PipelineState(str, Enum):
    """States of a pipeline run.

    Terminal states are CONFLICTS_FOUND, CLEAN (preview only), DONE
    and PARTIAL.
    """

    IDLE = "idle"
    SCANNING = "scanning"
    CONFLICTS_FOUND = "conflicts_found"
    CLEAN = "clean"
    COPYING = "copying"
    DONE = "done"
    PARTIAL = "partial"


# Process exit status per terminal state
EXIT_CODES: dict[PipelineState, int] = {
    PipelineState.CLEAN: 0,
    PipelineState.DONE: 0,
    PipelineState.CONFLICTS_FOUND: 1,
    PipelineState.PARTIAL: 3,
}

# Exit status for errors that abort the invocation
EXIT_FATAL = 2


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outcome of one pipeline invocation.

    Attributes:
        mode: Mode the pipeline ran in.
        state: Terminal state reached.
        scan: Scan result (always present).
        copy: Copy result, or None when copying did not run.
    """

    mode: PipelineMode
    state: PipelineState
    scan: ScanResult
    copy: CopyResult | None = None

    @property
    def exit_code(self) -> int:
        """Process exit status for the terminal state."""
        return EXIT_CODES[self.state]

    @property
    def success(self) -> bool:
        """Check if the run ended without conflicts or copy errors."""
        return self.exit_code == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "mode": self.mode.value,
            "state": self.state.value,
            "exitCode": self.exit_code,
            "scan": self.scan.to_dict(),
            "copy": self.copy.to_dict() if self.copy is not None else None,
        }


def _transition(current: PipelineState, new: PipelineState) -> PipelineState:
    logger.debug("Pipeline state: %s -> %s", current.value, new.value)
    return new


def run_pipeline(
    source_root: Path,
    target_root: Path,
    manifest_paths: Sequence[str],
    mode: PipelineMode = PipelineMode.PREVIEW,
    *,
    case_check: CaseCheck = CaseCheck.AUTO,
    verify_absent: bool = True,
) -> PipelineResult:
    """Scan a target root and, in commit mode, copy the scaffold into it.

    Args:
        source_root: Template root.
        target_root: Repository root to populate. May not exist yet.
        manifest_paths: Relative scaffold paths in manifest order.
        mode: Preview or commit.
        case_check: Policy for the case-fold collision check.
        verify_absent: Re-check each target before writing it.

    Returns:
        PipelineResult describing the terminal state.

    Raises:
        TargetRootError: If the target root exists and is not a directory.
    """
    if target_root.exists() and not target_root.is_dir():
        msg = f"Target is not a directory: {target_root}"
        raise TargetRootError(msg)

    state = _transition(PipelineState.IDLE, PipelineState.SCANNING)
    scanner = ScaffoldScanner(source_root, target_root, case_check=case_check)
    scan_result = scanner.scan(manifest_paths)

    if scan_result.has_conflicts:
        state = _transition(state, PipelineState.CONFLICTS_FOUND)
        if mode == PipelineMode.COMMIT:
            logger.info(
                "Apply aborted: %d conflicts in %s", len(scan_result.conflicts), target_root
            )
        return PipelineResult(mode=mode, state=state, scan=scan_result)

    state = _transition(state, PipelineState.CLEAN)
    if mode == PipelineMode.PREVIEW:
        return PipelineResult(mode=mode, state=state, scan=scan_result)

    state = _transition(state, PipelineState.COPYING)
    copier = ScaffoldCopier(source_root, target_root, verify_absent=verify_absent)
    copy_result = copier.copy(scan_result.clean)

    final = PipelineState.DONE if copy_result.success else PipelineState.PARTIAL
    state = _transition(state, final)
    return PipelineResult(mode=mode, state=state, scan=scan_result, copy=copy_result)
