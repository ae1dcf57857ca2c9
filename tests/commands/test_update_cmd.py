"""CLI tests for `edutech update`."""

from unittest.mock import patch

from click.testing import CliRunner

from edutech.cli.cli import cli
from edutech.core.git.fake import FakeGit
from edutech.core.snapshot.fake import FakeSnapshotFetcher
from edutech.core.user_feedback.fake import FakeUserFeedback
from tests.test_utils.portal_env import (
    ACADEMIC_LOCATOR,
    CBT_LOCATOR,
    simulated_portal_env,
)


def test_update_single_portal() -> None:
    runner = CliRunner()
    with simulated_portal_env(runner) as env:
        env.install_portal("cbt")
        feedback = FakeUserFeedback()
        ctx = env.build_context(feedback=feedback)

        result = runner.invoke(cli, ["update", "cbt"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert 'Portal "cbt" updated successfully!' in feedback.texts("success")
        assert "Updated: portals/cbt/" in feedback.texts("info")
        backup_lines = [line for line in feedback.texts("info") if line.startswith("Backup: ")]
        assert backup_lines[0].startswith("Backup: portal-backups/cbt-")


def test_update_dirty_portal_is_refused() -> None:
    runner = CliRunner()
    with simulated_portal_env(runner) as env:
        portal_dir = env.install_portal("cbt")
        git = FakeGit(work_trees={env.workspace.root}, dirty_paths={portal_dir})
        ctx = env.build_context(git=git)

        result = runner.invoke(cli, ["update", "cbt"], obj=ctx)

        assert result.exit_code == 1
        assert 'Error: Portal "cbt" has uncommitted changes.' in result.output
        assert "2. Use --force to overwrite changes" in result.output


def test_update_dirty_portal_with_force() -> None:
    runner = CliRunner()
    with simulated_portal_env(runner) as env:
        portal_dir = env.install_portal("cbt")
        git = FakeGit(work_trees={env.workspace.root}, dirty_paths={portal_dir})
        ctx = env.build_context(git=git)

        result = runner.invoke(cli, ["update", "cbt", "--force"], obj=ctx)

        assert result.exit_code == 0, result.output


def test_update_unmanaged_portal() -> None:
    runner = CliRunner()
    with simulated_portal_env(runner) as env:
        env.install_portal("manual", version=None)
        ctx = env.build_context()

        result = runner.invoke(cli, ["update", "manual"], obj=ctx)

        assert result.exit_code == 1
        assert 'No configuration found for portal "manual"' in result.output


def test_update_failure_reports_rollback() -> None:
    runner = CliRunner()
    with simulated_portal_env(runner) as env:
        env.install_portal("cbt")
        ctx = env.build_context(snapshot=FakeSnapshotFetcher(sources={}))

        result = runner.invoke(cli, ["update", "cbt"], obj=ctx)

        assert result.exit_code == 1
        assert "Error: Update failed: Failed to fetch" in result.output
        assert 'Portal "cbt" was restored from its pre-update backup' in result.output


def test_update_failed_restore_points_at_backup() -> None:
    runner = CliRunner()
    with simulated_portal_env(runner) as env:
        env.install_portal("cbt")
        ctx = env.build_context(snapshot=FakeSnapshotFetcher(sources={}))

        with patch(
            "edutech.core.backup.BackupManager.restore",
            side_effect=OSError(16, "Device or resource busy"),
        ):
            result = runner.invoke(cli, ["update", "cbt"], obj=ctx)

        assert result.exit_code == 1
        assert "restoring the backup also failed" in result.output
        assert "Its pre-update backup is available at: " in result.output
        assert "portal-backups" in result.output
        assert "Traceback" not in result.output


def test_update_all_success() -> None:
    runner = CliRunner()
    with simulated_portal_env(runner) as env:
        env.install_portal("cbt")
        env.install_portal("academic", repo=ACADEMIC_LOCATOR)
        feedback = FakeUserFeedback()
        ctx = env.build_context(feedback=feedback)

        result = runner.invoke(cli, ["update", "all"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert feedback.texts("success")[-1] == "All portals update completed"
        assert 'Portal "academic" updated successfully!' in feedback.texts("success")
        assert 'Portal "cbt" updated successfully!' in feedback.texts("success")


def test_update_all_with_failure_exits_nonzero_after_trying_all() -> None:
    runner = CliRunner()
    with simulated_portal_env(runner) as env:
        env.install_portal("cbt")
        env.install_portal("academic", repo=ACADEMIC_LOCATOR)
        feedback = FakeUserFeedback()
        snapshot = FakeSnapshotFetcher(sources={CBT_LOCATOR: {"index.js": "new"}})
        ctx = env.build_context(feedback=feedback, snapshot=snapshot)

        result = runner.invoke(cli, ["update", "all"], obj=ctx)

        assert result.exit_code == 1
        assert "Error: Failed to update: academic" in result.output
        assert 'Portal "cbt" updated successfully!' in feedback.texts("success")
        assert [locator for locator, _ in snapshot.fetch_calls] == [ACADEMIC_LOCATOR, CBT_LOCATOR]


def test_update_all_with_no_managed_portals() -> None:
    runner = CliRunner()
    with simulated_portal_env(runner) as env:
        feedback = FakeUserFeedback()
        ctx = env.build_context(feedback=feedback)

        result = runner.invoke(cli, ["update", "all"], obj=ctx)

        assert result.exit_code == 0
        assert feedback.texts("info") == ["No updatable portals found"]
        assert feedback.texts("success") == []
