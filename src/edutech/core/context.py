"""Application context with dependency injection."""

import logging
from dataclasses import dataclass, replace
from pathlib import Path

import click

from edutech.cli.output import user_output
from edutech.core.backup import BackupManager
from edutech.core.errors import WorkspaceNotFoundError
from edutech.core.git.abc import Git
from edutech.core.git.real import RealGit
from edutech.core.package_manager.abc import PackageManager
from edutech.core.package_manager.real import RealPackageManager
from edutech.core.prompter.abc import Prompter
from edutech.core.prompter.real import ClickPrompter
from edutech.core.registry import RegistryCache
from edutech.core.registry_client.abc import RegistryClient
from edutech.core.registry_client.real import HttpRegistryClient
from edutech.core.snapshot.abc import SnapshotFetcher
from edutech.core.snapshot.real import RealSnapshotFetcher
from edutech.core.time.abc import Time
from edutech.core.time.real import RealTime
from edutech.core.user_feedback import InteractiveFeedback, SuppressedFeedback, UserFeedback
from edutech.core.workspace_discovery import (
    NoWorkspaceSentinel,
    WorkspaceContext,
    discover_workspace_or_sentinel,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortalContext:
    """Immutable context holding all dependencies for portal operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    snapshot: SnapshotFetcher
    registry_client: RegistryClient
    package_manager: PackageManager
    prompter: Prompter
    feedback: UserFeedback
    time: Time
    cwd: Path  # Current working directory at CLI invocation
    workspace: WorkspaceContext | NoWorkspaceSentinel

    def require_workspace(self) -> WorkspaceContext:
        """Return the enclosing workspace or raise WorkspaceNotFoundError."""
        if isinstance(self.workspace, NoWorkspaceSentinel):
            raise WorkspaceNotFoundError(
                self.workspace.message,
                hint="Run this command inside a workspace, or create one with: edutech init",
            )
        return self.workspace

    def registry_cache(self) -> RegistryCache:
        workspace = self.require_workspace()
        return RegistryCache(
            workspace.cache_path,
            workspace.config.registry_url,
            self.registry_client,
            self.time,
            self.feedback,
            ttl=workspace.cache_ttl,
        )

    def backup_manager(self) -> BackupManager:
        return BackupManager(self.require_workspace().backups_dir, self.time)

    def with_workspace(self, workspace: WorkspaceContext | NoWorkspaceSentinel) -> "PortalContext":
        """Copy of this context bound to another workspace (used after init)."""
        return replace(self, workspace=workspace)

    @staticmethod
    def for_test(
        git: Git | None = None,
        snapshot: SnapshotFetcher | None = None,
        registry_client: RegistryClient | None = None,
        package_manager: PackageManager | None = None,
        prompter: Prompter | None = None,
        feedback: UserFeedback | None = None,
        time: Time | None = None,
        cwd: Path | None = None,
        workspace: WorkspaceContext | NoWorkspaceSentinel | None = None,
    ) -> "PortalContext":
        """Create test context with optional pre-configured integration classes.

        Every unspecified integration gets its empty fake; `cwd` defaults to
        the workspace root when a workspace is given.

        Example:
            >>> snapshot = FakeSnapshotFetcher(sources={"https://github.com/org/cbt": {...}})
            >>> ctx = PortalContext.for_test(snapshot=snapshot, workspace=workspace)
        """
        from edutech.core.git.fake import FakeGit
        from edutech.core.package_manager.fake import FakePackageManager
        from edutech.core.prompter.fake import FakePrompter
        from edutech.core.registry_client.fake import FakeRegistryClient
        from edutech.core.snapshot.fake import FakeSnapshotFetcher
        from edutech.core.time.fake import FakeTime
        from edutech.core.user_feedback.fake import FakeUserFeedback

        if workspace is None:
            workspace = NoWorkspaceSentinel()

        if cwd is None:
            if isinstance(workspace, WorkspaceContext):
                cwd = workspace.root
            else:
                cwd = Path("/test/default/cwd")

        return PortalContext(
            git=git or FakeGit(),
            snapshot=snapshot or FakeSnapshotFetcher(),
            registry_client=registry_client or FakeRegistryClient(),
            package_manager=package_manager or FakePackageManager(),
            prompter=prompter or FakePrompter(),
            feedback=feedback or FakeUserFeedback(),
            time=time or FakeTime(),
            cwd=cwd,
            workspace=workspace,
        )


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        (path, None) on success, (None, error_message) if the directory is gone
    """
    try:
        return (Path.cwd(), None)
    except (FileNotFoundError, OSError):
        return (None, "Current working directory no longer exists")


def create_context(*, quiet: bool) -> PortalContext:
    """Create production context with real implementations.

    Args:
        quiet: If True, use SuppressedFeedback so only warnings and errors
               are shown
    """
    # 1. Capture cwd (no deps)
    cwd_result, error_msg = safe_cwd()
    if cwd_result is None:
        assert error_msg is not None
        user_output(click.style("Error: ", fg="red") + error_msg)
        user_output("\nThe directory you're running from has been deleted.")
        user_output("Please change to a valid directory and try again.")
        raise SystemExit(1)
    cwd = cwd_result

    # 2. Discover workspace and load its config
    workspace = discover_workspace_or_sentinel(cwd)
    if isinstance(workspace, WorkspaceContext):
        logger.debug("Workspace root: %s", workspace.root)
        package_manager_name = workspace.config.package_manager
    else:
        package_manager_name = "pnpm"

    # 3. Choose feedback implementation based on mode
    feedback: UserFeedback
    if quiet:
        feedback = SuppressedFeedback()
    else:
        feedback = InteractiveFeedback()

    git: Git = RealGit()
    return PortalContext(
        git=git,
        snapshot=RealSnapshotFetcher(git),
        registry_client=HttpRegistryClient(),
        package_manager=RealPackageManager(package_manager_name),
        prompter=ClickPrompter(),
        feedback=feedback,
        time=RealTime(),
        cwd=cwd,
        workspace=workspace,
    )
