"""Steps shared by the add, update and remove operations."""

import json
import logging
from pathlib import Path
from typing import Any

from edutech.core.context import PortalContext
from edutech.core.errors import ManifestError
from edutech.core.naming import workspace_entry
from edutech.core.process_manifest import ProcessManifest
from edutech.core.workspace_discovery import WorkspaceContext
from edutech.core.workspace_manifest import WorkspaceManifest

logger = logging.getLogger(__name__)


def workspace_manifest(workspace: WorkspaceContext) -> WorkspaceManifest:
    return WorkspaceManifest(workspace.package_json_path)


def process_manifest(workspace: WorkspaceContext) -> ProcessManifest:
    return ProcessManifest(
        workspace.ecosystem_path,
        portals_dir=workspace.config.portals_dir,
        base_port=workspace.config.base_port,
    )


def has_uncommitted_changes(ctx: PortalContext, path: Path) -> bool:
    """Dirty-check a portal; anything outside a git checkout is clean."""
    if not ctx.git.is_inside_work_tree(path):
        logger.debug("%s is not inside a git work tree", path)
        return False
    return ctx.git.has_uncommitted_changes(path)


def install_dependencies(ctx: PortalContext, workspace: WorkspaceContext) -> bool:
    """Run the workspace install; failure is reported, never raised."""
    ctx.feedback.info("Installing dependencies...")
    try:
        ctx.package_manager.install(workspace.root)
    except RuntimeError as e:
        logger.debug("Install failed: %s", e)
        ctx.feedback.warning(
            "Failed to install dependencies. "
            f"You may need to run: {workspace.config.package_manager} install"
        )
        return False
    ctx.feedback.success("Dependencies installed")
    return True


def register_portal(ctx: PortalContext, workspace: WorkspaceContext, name: str) -> int | None:
    """Add the portal to both manifests.

    Returns:
        The process-manager port, or None if that manifest was not updated
    """
    entry = workspace_entry(name, workspace.config.portals_dir)
    try:
        if workspace_manifest(workspace).register(entry):
            ctx.feedback.success("Updated workspaces configuration")
    except ManifestError as e:
        ctx.feedback.warning(f"Could not update workspaces: {e}")

    manifest = process_manifest(workspace)
    if not manifest.exists():
        return None
    try:
        port = manifest.register(name)
    except ManifestError as e:
        ctx.feedback.warning(f"Could not update ecosystem.config.js: {e}")
        return None
    ctx.feedback.success(f"Added to PM2 configuration (port {port})")
    return port


def deregister_portal(ctx: PortalContext, workspace: WorkspaceContext, name: str) -> None:
    entry = workspace_entry(name, workspace.config.portals_dir)
    try:
        if workspace_manifest(workspace).deregister(entry):
            ctx.feedback.success("Removed from workspaces configuration")
    except ManifestError as e:
        ctx.feedback.warning(f"Could not update workspaces: {e}")

    try:
        if process_manifest(workspace).deregister(name):
            ctx.feedback.success("Removed from PM2 configuration")
    except ManifestError as e:
        ctx.feedback.warning(f"Could not update ecosystem.config.js: {e}")


def read_dependency_sets(portal_dir: Path) -> tuple[Any, Any]:
    """(dependencies, devDependencies) from a portal's package.json, or Nones."""
    package_json = portal_dir / "package.json"
    if not package_json.is_file():
        return (None, None)
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("Ignoring unreadable %s: %s", package_json, e)
        return (None, None)
    if not isinstance(data, dict):
        return (None, None)
    return (data.get("dependencies"), data.get("devDependencies"))
