"""Scaffold conflict scanning and copying.

This module provides the two-phase pipeline that replicates a
manifest of scaffold paths into a target repository without
overwriting anything the target already owns.
"""

from scaffoldctl.scaffold.copier import ScaffoldCopier, copy
from scaffoldctl.scaffold.manifest import ScaffoldManifest
from scaffoldctl.scaffold.models import (
    ConflictReason,
    CopyError,
    CopyResult,
    EntryDescriptor,
    EntryKind,
    ScanConflict,
    ScanResult,
)
from scaffoldctl.scaffold.pipeline import (
    PipelineMode,
    PipelineResult,
    PipelineState,
    ScaffoldError,
    TargetRootError,
    run_pipeline,
)
from scaffoldctl.scaffold.scanner import CaseCheck, ScaffoldScanner, scan

__all__ = [
    "CaseCheck",
    "ConflictReason",
    "CopyError",
    "CopyResult",
    "EntryDescriptor",
    "EntryKind",
    "PipelineMode",
    "PipelineResult",
    "PipelineState",
    "ScaffoldCopier",
    "ScaffoldError",
    "ScaffoldManifest",
    "ScaffoldScanner",
    "ScanConflict",
    "ScanResult",
    "TargetRootError",
    "copy",
    "run_pipeline",
    "scan",
]
