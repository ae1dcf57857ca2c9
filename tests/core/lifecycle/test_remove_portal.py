"""Tests for remove_portal."""

from pathlib import Path
from unittest.mock import patch

import pytest

from edutech.core.errors import BackupError, PortalNotFoundError, PortalRemovalError
from edutech.core.git.fake import FakeGit
from edutech.core.lifecycle import remove_portal
from edutech.core.process_manifest import ProcessManifest
from edutech.core.prompter.fake import FakePrompter
from edutech.core.user_feedback.fake import FakeUserFeedback
from edutech.core.workspace_discovery import WorkspaceContext
from edutech.core.workspace_manifest import WorkspaceManifest
from tests.test_utils.portal_env import build_portal_context, build_workspace, install_portal


def _registered_workspace(tmp_path: Path, *names: str) -> WorkspaceContext:
    workspace = build_workspace(tmp_path)
    for name in names:
        install_portal(workspace, name)
        WorkspaceManifest(workspace.package_json_path).register(f"portals/{name}")
        ProcessManifest(workspace.ecosystem_path).register(name)
    return workspace


def test_remove_with_confirmation_and_backup(tmp_path: Path) -> None:
    # Arrange
    workspace = _registered_workspace(tmp_path, "cbt", "academic")
    prompter = FakePrompter(confirm_answers=[True, True])
    feedback = FakeUserFeedback()
    ctx = build_portal_context(workspace, prompter=prompter, feedback=feedback)

    # Act
    result = remove_portal(ctx, "cbt")

    # Assert
    assert result.removed
    assert not result.cancelled
    assert not workspace.portal_path("cbt").exists()
    assert result.backup_location is not None
    assert (result.backup_location / "package.json").exists()
    assert prompter.confirm_calls == [
        ('Are you sure you want to remove portal "cbt"?', False),
        ("Create a backup before removal?", True),
    ]
    assert WorkspaceManifest(workspace.package_json_path).entries() == ["portals/academic"]
    assert [app.name for app in ProcessManifest(workspace.ecosystem_path).apps()] == [
        "academic-portal"
    ]
    assert "Removed from workspaces configuration" in feedback.texts("success")
    assert "Removed from PM2 configuration" in feedback.texts("success")
    # Other portals remain, so the portals directory stays
    assert workspace.portals_dir.is_dir()
    assert not result.portals_dir_removed


def test_declined_confirmation_changes_nothing(tmp_path: Path) -> None:
    workspace = _registered_workspace(tmp_path, "cbt")
    package_json_before = workspace.package_json_path.read_text(encoding="utf-8")
    feedback = FakeUserFeedback()
    ctx = build_portal_context(
        workspace, prompter=FakePrompter(confirm_answers=[False]), feedback=feedback
    )

    result = remove_portal(ctx, "cbt")

    assert result.cancelled
    assert workspace.portal_path("cbt").is_dir()
    assert workspace.package_json_path.read_text(encoding="utf-8") == package_json_before
    assert not workspace.backups_dir.exists()
    assert "Removal cancelled" in feedback.texts("info")


def test_unanswered_confirmation_defaults_to_no(tmp_path: Path) -> None:
    workspace = _registered_workspace(tmp_path, "cbt")
    ctx = build_portal_context(workspace, prompter=FakePrompter())

    result = remove_portal(ctx, "cbt")

    assert result.cancelled
    assert workspace.portal_path("cbt").is_dir()


def test_force_skips_prompts_and_still_backs_up(tmp_path: Path) -> None:
    workspace = _registered_workspace(tmp_path, "cbt")
    prompter = FakePrompter()
    ctx = build_portal_context(workspace, prompter=prompter)

    result = remove_portal(ctx, "cbt", force=True)

    assert result.removed
    assert result.backup_location is not None
    assert prompter.confirm_calls == []


def test_last_portal_removes_empty_portals_dir(tmp_path: Path) -> None:
    workspace = _registered_workspace(tmp_path, "cbt")
    feedback = FakeUserFeedback()
    ctx = build_portal_context(workspace, feedback=feedback)

    result = remove_portal(ctx, "cbt", force=True, backup=False)

    assert result.portals_dir_removed
    assert not workspace.portals_dir.exists()
    assert result.backup_location is None
    assert "Removed empty portals directory" in feedback.texts("info")


def test_empty_portal_is_not_removed_on_an_empty_backup(tmp_path: Path) -> None:
    workspace = build_workspace(tmp_path)
    install_portal(workspace, "cbt", files={}, version=None)
    prompter = FakePrompter()
    feedback = FakeUserFeedback()
    ctx = build_portal_context(workspace, prompter=prompter, feedback=feedback)

    result = remove_portal(ctx, "cbt", force=True, backup=True)

    assert result.cancelled
    assert workspace.portal_path("cbt").is_dir()
    assert any("backup is empty" in text for text in feedback.texts("warning"))
    assert prompter.confirm_calls == [("Continue without backup?", False)]


def test_operator_can_decline_backup(tmp_path: Path) -> None:
    workspace = _registered_workspace(tmp_path, "cbt")
    ctx = build_portal_context(workspace, prompter=FakePrompter(confirm_answers=[True, False]))

    result = remove_portal(ctx, "cbt")

    assert result.removed
    assert result.backup_location is None
    assert not workspace.backups_dir.exists()


def test_dirty_portal_without_backup_warns_changes_lost(tmp_path: Path) -> None:
    workspace = _registered_workspace(tmp_path, "cbt")
    git = FakeGit(work_trees={workspace.root}, dirty_paths={workspace.portal_path("cbt")})
    feedback = FakeUserFeedback()
    ctx = build_portal_context(workspace, git=git, feedback=feedback)

    result = remove_portal(ctx, "cbt", force=True, backup=False)

    assert result.had_uncommitted_changes
    assert result.changes_lost
    assert feedback.texts("warning") == [
        "Portal has uncommitted changes!",
        "Uncommitted changes were lost!",
    ]


def test_dirty_portal_with_backup_is_not_lost(tmp_path: Path) -> None:
    workspace = _registered_workspace(tmp_path, "cbt")
    git = FakeGit(work_trees={workspace.root}, dirty_paths={workspace.portal_path("cbt")})
    ctx = build_portal_context(workspace, git=git)

    result = remove_portal(ctx, "cbt", force=True)

    assert result.had_uncommitted_changes
    assert not result.changes_lost


def test_backup_failure_requires_explicit_consent(tmp_path: Path) -> None:
    """When the backup fails, removal continues only if the operator agrees."""
    workspace = _registered_workspace(tmp_path, "cbt")
    prompter = FakePrompter(confirm_answers=[True, True])
    ctx = build_portal_context(workspace, prompter=prompter)

    with patch("edutech.core.backup.BackupManager.create_backup") as mock_backup:
        mock_backup.side_effect = BackupError(workspace.portal_path("cbt"), "disk full")
        result = remove_portal(ctx, "cbt")

    assert result.cancelled
    assert workspace.portal_path("cbt").is_dir()
    assert prompter.confirm_calls[-1] == ("Continue without backup?", False)


def test_backup_failure_with_consent_removes(tmp_path: Path) -> None:
    workspace = _registered_workspace(tmp_path, "cbt")
    ctx = build_portal_context(workspace, prompter=FakePrompter(confirm_answers=[True]))

    with patch("edutech.core.backup.BackupManager.create_backup") as mock_backup:
        mock_backup.side_effect = BackupError(workspace.portal_path("cbt"), "disk full")
        result = remove_portal(ctx, "cbt", force=True)

    assert result.removed
    assert result.backup_location is None


def test_remove_missing_portal(tmp_path: Path) -> None:
    ctx = build_portal_context(build_workspace(tmp_path))

    with pytest.raises(PortalNotFoundError):
        remove_portal(ctx, "cbt", force=True)


def test_remove_unmanaged_portal(tmp_path: Path) -> None:
    """Portals without metadata can still be removed."""
    workspace = build_workspace(tmp_path)
    install_portal(workspace, "manual", version=None)
    ctx = build_portal_context(workspace)

    result = remove_portal(ctx, "manual", force=True, backup=False)

    assert result.removed
    assert not workspace.portal_path("manual").exists()


def test_remove_failure_reports_backup(tmp_path: Path) -> None:
    workspace = _registered_workspace(tmp_path, "cbt")
    ctx = build_portal_context(workspace)

    with patch("edutech.core.lifecycle.remove.remove_tree") as mock_remove:
        mock_remove.side_effect = PermissionError("Permission denied")
        with pytest.raises(PortalRemovalError) as exc_info:
            remove_portal(ctx, "cbt", force=True)

    assert exc_info.value.backup_location is not None
    assert exc_info.value.hint == f"Backup is available at: {exc_info.value.backup_location}"
