"""Unit tests for the scan-then-copy pipeline.

Tests state transitions, the no-write guarantee on conflicts, preview
mode, and the partial-success status.
"""

import errno
from pathlib import Path
from unittest.mock import patch

import pytest
from scaffoldctl.scaffold.pipeline import (
    EXIT_FATAL,
    PipelineMode,
    PipelineState,
    TargetRootError,
    run_pipeline,
)
from scaffoldctl.scaffold.scanner import CaseCheck


class TestPreviewMode:
    """Tests for preview runs."""

    def test_clean_target_stops_at_clean(
        self, template: Path, target: Path, template_paths: list[str], snapshot
    ) -> None:
        """Preview of a clean target reports CLEAN and writes nothing."""
        before = snapshot(target)

        result = run_pipeline(template, target, template_paths, PipelineMode.PREVIEW)

        assert result.state == PipelineState.CLEAN
        assert result.copy is None
        assert result.exit_code == 0
        assert snapshot(target) == before

    def test_conflicts_found(self, template: Path, target: Path, template_paths: list[str]) -> None:
        """Preview with a conflict ends in CONFLICTS_FOUND with exit 1."""
        (target / "AGENTS.md").write_text("existing")

        result = run_pipeline(template, target, template_paths, PipelineMode.PREVIEW)

        assert result.state == PipelineState.CONFLICTS_FOUND
        assert result.exit_code == 1
        assert result.success is False


class TestCommitMode:
    """Tests for commit runs."""

    def test_clean_target_is_copied(
        self, template: Path, target: Path, template_paths: list[str]
    ) -> None:
        """Commit on a clean target copies everything and ends in DONE."""
        result = run_pipeline(template, target, template_paths, PipelineMode.COMMIT)

        assert result.state == PipelineState.DONE
        assert result.exit_code == 0
        assert result.copy is not None
        assert result.copy.files_written == 3
        assert result.copy.symlinks_copied == 1
        assert (target / "scripts" / "setup.sh").exists()

    def test_conflict_blocks_all_writes(
        self, template: Path, target: Path, template_paths: list[str], snapshot
    ) -> None:
        """A single conflict prevents every write, even to clean paths."""
        (target / "docs").mkdir()
        (target / "docs" / "guide.md").write_text("local guide")
        before = snapshot(target)

        result = run_pipeline(template, target, template_paths, PipelineMode.COMMIT)

        assert result.state == PipelineState.CONFLICTS_FOUND
        assert result.copy is None
        assert snapshot(target) == before
        assert not (target / "AGENTS.md").exists()

    def test_lookup_error_blocks_writes(
        self, template: Path, target: Path, snapshot
    ) -> None:
        """An unknown target state is never treated as safe."""
        (target / "docs").write_text("file where a directory belongs")
        before = snapshot(target)

        result = run_pipeline(
            template, target, ["AGENTS.md", "docs/guide.md"], PipelineMode.COMMIT
        )

        assert result.state == PipelineState.CONFLICTS_FOUND
        assert result.scan.conflicts[0].is_error
        assert snapshot(target) == before

    def test_case_collision_blocks_writes(self, tmp_path: Path, target: Path) -> None:
        """Case collisions gate the copy like any other conflict."""
        source = tmp_path / "cased"
        source.mkdir()
        (source / "Makefile").write_text("upper")
        (source / "makefile").write_text("lower")

        result = run_pipeline(
            source,
            target,
            ["Makefile", "makefile"],
            PipelineMode.COMMIT,
            case_check=CaseCheck.ALWAYS,
        )

        assert result.state == PipelineState.CONFLICTS_FOUND
        assert list(target.iterdir()) == []

    def test_copy_errors_end_in_partial(
        self, template: Path, target: Path, template_paths: list[str]
    ) -> None:
        """Copy failures produce PARTIAL with a distinct exit code."""
        with patch(
            "scaffoldctl.scaffold.copier.ScaffoldCopier._copy_file",
            side_effect=OSError(errno.EIO, "Input/output error"),
        ):
            result = run_pipeline(template, target, template_paths, PipelineMode.COMMIT)

        assert result.state == PipelineState.PARTIAL
        assert result.exit_code == 3
        assert result.exit_code not in (0, 1, EXIT_FATAL)
        assert result.copy is not None
        assert len(result.copy.errors) == 3
        assert result.copy.symlinks_copied == 1

    def test_creates_missing_target_root(self, template: Path, tmp_path: Path) -> None:
        """A target root that does not exist yet is created by the copy."""
        new_root = tmp_path / "fresh"

        result = run_pipeline(template, new_root, ["docs/guide.md"], PipelineMode.COMMIT)

        assert result.state == PipelineState.DONE
        assert (new_root / "docs" / "guide.md").is_file()

    def test_skipped_entries_do_not_fail(self, template: Path, target: Path) -> None:
        """Stale manifest entries are neither copied nor failures."""
        result = run_pipeline(template, target, ["AGENTS.md", "gone.txt"], PipelineMode.COMMIT)

        assert result.state == PipelineState.DONE
        assert result.scan.skipped == ("gone.txt",)
        assert not (target / "gone.txt").exists()


class TestPipelineErrors:
    """Tests for fatal conditions."""

    def test_target_is_a_file(self, template: Path, tmp_path: Path) -> None:
        """A target root that is a regular file aborts the run."""
        not_a_dir = tmp_path / "file"
        not_a_dir.write_text("x")

        with pytest.raises(TargetRootError, match="not a directory"):
            run_pipeline(template, not_a_dir, ["AGENTS.md"], PipelineMode.COMMIT)

    def test_to_dict(self, template: Path, target: Path) -> None:
        """to_dict carries mode, state, exit code, scan and copy."""
        result = run_pipeline(template, target, ["AGENTS.md"], PipelineMode.COMMIT)
        data = result.to_dict()

        assert data["mode"] == "commit"
        assert data["state"] == "done"
        assert data["exitCode"] == 0
        assert data["scan"]["summary"]["clean"] == 1
        assert data["copy"]["filesWritten"] == 1


class TestDuplicateManifestPaths:
    """Tests for manifests that list the same path twice."""

    def test_duplicates_copy_cleanly(self, template: Path, target: Path) -> None:
        """Duplicate entries scan clean twice and copy without errors."""
        paths = ["AGENTS.md", "AGENTS.md", "links/agents.md", "links/agents.md"]

        result = run_pipeline(template, target, paths, PipelineMode.COMMIT)

        assert result.state == PipelineState.DONE
        assert result.exit_code == 0
        assert result.copy is not None
        assert result.copy.errors == []
        assert result.scan.clean == tuple(paths)
