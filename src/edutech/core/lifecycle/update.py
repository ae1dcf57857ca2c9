"""Updating installed portals from their recorded source."""

import logging
import shutil
from pathlib import Path

from edutech.core.backup import BackupManager
from edutech.core.context import PortalContext
from edutech.core.errors import (
    PortalError,
    PortalMetadataError,
    PortalNotFoundError,
    PortalNotManagedError,
    RollbackFailedError,
    SnapshotFetchError,
    UncommittedChangesError,
    UpdateRolledBackError,
)
from edutech.core.fs_utils import is_empty_dir, merge_directories, remove_tree
from edutech.core.inventory import list_updatable
from edutech.core.lifecycle.common import (
    has_uncommitted_changes,
    install_dependencies,
    read_dependency_sets,
)
from edutech.core.lifecycle.types import UpdateOutcome, UpdateResult
from edutech.core.naming import METADATA_FILENAME, validate_portal_name
from edutech.core.portal_metadata import PortalMetadata, read_metadata, write_metadata

logger = logging.getLogger(__name__)


def _snapshot_version(snapshot_dir: Path) -> str | None:
    try:
        shipped = read_metadata(snapshot_dir)
    except PortalMetadataError as e:
        logger.debug("Ignoring snapshot metadata: %s", e)
        return None
    if shipped is None or shipped.version == "unknown":
        return None
    return shipped.version


def update_portal(ctx: PortalContext, name: str, *, force: bool = False) -> UpdateResult:
    """Refresh portal `name` from the source recorded in its metadata.

    A backup is always taken first. Without `force` the fetched snapshot is
    merged over the live tree: files are added or overwritten, never
    deleted, and the portal's own metadata file is kept. With `force` the
    live tree is replaced outright.

    Raises:
        PortalNotFoundError: If the portal directory does not exist
        PortalNotManagedError: If the portal has no metadata file
        UncommittedChangesError: If the portal is dirty and `force` is off
        BackupError: If the pre-update backup fails
        UpdateRolledBackError: If the update failed and was reverted
        RollbackFailedError: If the update failed and the revert failed too
    """
    workspace = ctx.require_workspace()
    validate_portal_name(name)
    portal_path = workspace.portal_path(name)
    if not portal_path.is_dir():
        raise PortalNotFoundError(name, portal_path)

    metadata = read_metadata(portal_path)
    if metadata is None:
        raise PortalNotManagedError(name)

    ctx.feedback.info(f"Current version: {metadata.version}")
    ctx.feedback.info(f"Source: {metadata.repo}")

    if has_uncommitted_changes(ctx, portal_path):
        if not force:
            raise UncommittedChangesError(name, workspace.display_path(portal_path))
        ctx.feedback.warning(f'Portal "{name}" has uncommitted changes; --force overwrites them')

    backups = ctx.backup_manager()
    backup_location = backups.create_backup(portal_path)
    ctx.feedback.success(f"Backup created: {workspace.display_path(backup_location)}")

    now = ctx.time.now()
    temp_dir = workspace.root / f"temp-update-{name}-{int(now.timestamp() * 1000)}"
    try:
        new_version = _apply_snapshot(ctx, metadata, portal_path, temp_dir, force=force)
        updated = metadata.with_update(
            updated_at=now.isoformat(),
            backup_location=workspace.display_path(backup_location),
            new_version=new_version,
        )
        write_metadata(portal_path, updated)
    except (PortalError, OSError) as e:
        _roll_back(ctx, backups, backup_location, portal_path, temp_dir, name=name, reason=str(e))
        raise UpdateRolledBackError(name, str(e)) from e

    dependencies_changed = read_dependency_sets(backup_location) != read_dependency_sets(
        portal_path
    )
    installed = False
    if dependencies_changed:
        ctx.feedback.info("Dependencies changed, installing updates...")
        installed = install_dependencies(ctx, workspace)

    return UpdateResult(
        name=name,
        path=portal_path,
        backup_location=backup_location,
        previous_version=metadata.version,
        new_version=new_version,
        forced=force,
        already_latest=new_version is not None and new_version == metadata.version,
        dependencies_changed=dependencies_changed,
        dependencies_installed=installed,
    )


def _apply_snapshot(
    ctx: PortalContext,
    metadata: PortalMetadata,
    portal_path: Path,
    temp_dir: Path,
    *,
    force: bool,
) -> str | None:
    """Fetch into `temp_dir` and fold it into the live portal.

    Returns:
        The version shipped in the snapshot's metadata file, if any
    """
    ctx.feedback.info(f"Fetching latest version from: {metadata.repo}")
    ctx.snapshot.fetch(metadata.repo, temp_dir)
    if is_empty_dir(temp_dir):
        raise SnapshotFetchError(metadata.repo, "Failed to fetch update (empty directory)")
    ctx.feedback.success("Fetched latest version")

    new_version = _snapshot_version(temp_dir)
    if new_version is not None:
        ctx.feedback.info(f"New version: {new_version}")
        if new_version == metadata.version:
            ctx.feedback.warning("Portal is already at the latest version")

    if force:
        ctx.feedback.warning("Force mode: Replacing portal completely")
        remove_tree(portal_path)
        shutil.move(str(temp_dir), str(portal_path))
        ctx.feedback.success("Portal replaced with new version")
    else:
        ctx.feedback.info("Merging new files into the portal...")
        copied = merge_directories(temp_dir, portal_path, skip_names={METADATA_FILENAME})
        remove_tree(temp_dir)
        logger.debug("Merged %d files into %s", copied, portal_path)
        ctx.feedback.success("Merge completed")
    return new_version


def _roll_back(
    ctx: PortalContext,
    backups: BackupManager,
    backup_location: Path,
    portal_path: Path,
    temp_dir: Path,
    *,
    name: str,
    reason: str,
) -> None:
    try:
        remove_tree(temp_dir)
    except OSError as e:
        logger.debug("Could not remove %s: %s", temp_dir, e)
    ctx.feedback.info("Restoring from backup...")
    try:
        backups.restore(backup_location, portal_path)
    except OSError as e:
        raise RollbackFailedError(name, reason, backup_location, str(e)) from e
    ctx.feedback.success("Portal restored from backup")


def update_all(ctx: PortalContext, *, force: bool = False) -> list[UpdateOutcome]:
    """Update every managed portal in name order, one at a time.

    A failure is recorded in the portal's outcome and the run continues
    with the next portal.
    """
    workspace = ctx.require_workspace()
    names = list_updatable(workspace.portals_dir)
    if not names:
        ctx.feedback.info("No updatable portals found")
        return []

    ctx.feedback.info(f"Updating all portals: {', '.join(names)}")
    outcomes = []
    for name in names:
        try:
            result = update_portal(ctx, name, force=force)
        except PortalError as e:
            ctx.feedback.error(f"Failed to update {name}: {e}")
            outcomes.append(UpdateOutcome(name=name, result=None, error=e))
        else:
            outcomes.append(UpdateOutcome(name=name, result=result, error=None))
    return outcomes
