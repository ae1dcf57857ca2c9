"""Removing a portal, with optional backup."""

import logging

from edutech.core.context import PortalContext
from edutech.core.errors import BackupError, PortalNotFoundError, PortalRemovalError
from edutech.core.fs_utils import is_empty_dir, remove_tree
from edutech.core.inventory import PortalRecord, find_portal
from edutech.core.lifecycle.common import deregister_portal, has_uncommitted_changes
from edutech.core.lifecycle.types import RemoveResult
from edutech.core.naming import validate_portal_name

logger = logging.getLogger(__name__)


def _describe(ctx: PortalContext, record: PortalRecord) -> None:
    ctx.feedback.info("Portal Information:")
    ctx.feedback.info(f"  Name: {record.name}")
    ctx.feedback.info(f"  Path: {record.path}")
    ctx.feedback.info(f"  Size: {record.size}")
    ctx.feedback.info(f"  Installed: {record.installed_at}")
    if record.managed:
        ctx.feedback.info(f"  Theme: {record.theme}")


def remove_portal(
    ctx: PortalContext, name: str, *, force: bool = False, backup: bool = True
) -> RemoveResult:
    """Delete portal `name` and drop it from the workspace manifests.

    Unless `force` is set the operator confirms the removal (default no) and,
    when `backup` is on, whether to take a backup (default yes). If the
    backup fails the operator must explicitly agree to continue without one.
    Declining any of these returns a cancelled result with nothing touched.

    Raises:
        PortalNotFoundError: If the portal directory does not exist
        PortalRemovalError: If deleting the directory fails
    """
    workspace = ctx.require_workspace()
    validate_portal_name(name)
    record = find_portal(workspace.portals_dir, name)
    if record is None:
        raise PortalNotFoundError(name, workspace.portal_path(name))

    _describe(ctx, record)

    dirty = has_uncommitted_changes(ctx, record.path)
    if dirty:
        ctx.feedback.warning("Portal has uncommitted changes!")

    cancelled = RemoveResult(
        name=name, path=record.path, removed=False, had_uncommitted_changes=dirty
    )

    if not force:
        if not ctx.prompter.confirm(
            f'Are you sure you want to remove portal "{name}"?', default=False
        ):
            ctx.feedback.info("Removal cancelled")
            return cancelled
        if backup and not ctx.prompter.confirm("Create a backup before removal?", default=True):
            backup = False

    backup_location = None
    if backup:
        try:
            backup_location = ctx.backup_manager().create_backup(record.path)
        except BackupError as e:
            ctx.feedback.warning(str(e))
            if not ctx.prompter.confirm("Continue without backup?", default=False):
                ctx.feedback.info("Removal cancelled")
                return cancelled
        else:
            ctx.feedback.success(f"Backup created: {backup_location}")

    deregister_portal(ctx, workspace, name)

    try:
        remove_tree(record.path)
    except OSError as e:
        raise PortalRemovalError(record.path, str(e), backup_location) from e
    ctx.feedback.success(f"Portal directory removed: {record.path}")

    portals_dir_removed = False
    if workspace.portals_dir.is_dir() and is_empty_dir(workspace.portals_dir):
        try:
            workspace.portals_dir.rmdir()
        except OSError as e:
            logger.debug("Could not remove empty portals directory: %s", e)
        else:
            portals_dir_removed = True
            ctx.feedback.info("Removed empty portals directory")

    result = RemoveResult(
        name=name,
        path=record.path,
        removed=True,
        backup_location=backup_location,
        had_uncommitted_changes=dirty,
        portals_dir_removed=portals_dir_removed,
    )
    if result.changes_lost:
        ctx.feedback.warning("Uncommitted changes were lost!")
    return result
