"""Tests for bumpdeps.pipeline."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from bumpdeps.config import BumpOptions
from bumpdeps.models import ChangeType
from bumpdeps.pipeline import gather_bump_info, run_bump


@patch("bumpdeps.pipeline.get_change_path")
class TestGatherBumpInfo:
    def test_collects_packages_scope_and_changes(
        self, mock_change_path: MagicMock, tmp_workspace: Path
    ) -> None:
        mock_change_path.return_value = tmp_workspace / "change"

        bump_info = gather_bump_info(tmp_workspace, BumpOptions())

        assert len(bump_info.package_infos) == 4
        assert bump_info.scoped_packages == set(bump_info.package_infos)
        assert list(bump_info.change_file_change_infos) == ["core-1.json", "docs-1.json"]
        assert bump_info.dependents == {}

    def test_outside_git_repo_has_no_changes(
        self, mock_change_path: MagicMock, tmp_workspace: Path
    ) -> None:
        mock_change_path.return_value = None

        bump_info = gather_bump_info(tmp_workspace, BumpOptions())

        assert bump_info.change_file_change_infos == {}


@patch("bumpdeps.pipeline.get_change_path")
class TestRunBump:
    def test_transitive_propagation(
        self, mock_change_path: MagicMock, tmp_workspace: Path
    ) -> None:
        mock_change_path.return_value = tmp_workspace / "change"

        bump_info = run_bump(tmp_workspace, BumpOptions())

        assert bump_info.dependents == {
            "@repo/core": ["@repo/utils"],
            "@repo/utils": ["@repo/app"],
        }
        # core's change declares dependentChangeType = patch
        assert bump_info.dependent_change_types == {
            "@repo/utils": ChangeType.PATCH,
            "@repo/app": ChangeType.PATCH,
        }

    def test_single_hop(self, mock_change_path: MagicMock, tmp_workspace: Path) -> None:
        mock_change_path.return_value = tmp_workspace / "change"

        bump_info = run_bump(tmp_workspace, BumpOptions(transitive=False))

        assert bump_info.dependents == {"@repo/core": ["@repo/utils"]}

    def test_scope_limits_dependents(
        self, mock_change_path: MagicMock, tmp_workspace: Path
    ) -> None:
        mock_change_path.return_value = tmp_workspace / "change"
        options = BumpOptions(scope=["packages/core", "packages/utils"])

        bump_info = run_bump(tmp_workspace, options)

        assert bump_info.dependents == {"@repo/core": ["@repo/utils"]}
        assert list(bump_info.change_file_change_infos) == ["core-1.json"]

    def test_package_policy_stops_propagation(
        self, mock_change_path: MagicMock, tmp_workspace: Path
    ) -> None:
        mock_change_path.return_value = tmp_workspace / "change"
        options = BumpOptions.model_validate(
            {"packages": {"@repo/utils": {"bump-deps": {"bumpTo": "minor"}}}}
        )

        bump_info = run_bump(tmp_workspace, options)

        # utils only receives a patch, below its minor threshold
        assert bump_info.dependents == {"@repo/core": ["@repo/utils"]}

    def test_prints_summary(
        self,
        mock_change_path: MagicMock,
        tmp_workspace: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        mock_change_path.return_value = tmp_workspace / "change"

        run_bump(tmp_workspace, BumpOptions(bump_deps=False))

        out = capsys.readouterr().out
        assert "@repo/core: minor (core-1.json)" in out
        assert "No dependents to bump" in out
