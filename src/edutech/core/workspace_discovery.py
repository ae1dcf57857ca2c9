"""Workspace discovery.

Finds the enclosing edutech workspace from a starting directory without
requiring a full PortalContext, so configuration can be loaded before the
context is built.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from edutech.core.workspace_config import (
    WorkspaceConfig,
    is_workspace_root,
    load_workspace_config,
)


@dataclass(frozen=True)
class WorkspaceContext:
    """A discovered workspace root and its loaded configuration."""

    root: Path
    config: WorkspaceConfig

    @property
    def portals_dir(self) -> Path:
        return self.root / self.config.portals_dir

    @property
    def backups_dir(self) -> Path:
        return self.root / self.config.backups_dir

    @property
    def cache_path(self) -> Path:
        return self.root / self.config.cache_file

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(seconds=self.config.cache_ttl_seconds)

    @property
    def package_json_path(self) -> Path:
        return self.root / "package.json"

    @property
    def ecosystem_path(self) -> Path:
        return self.root / "ecosystem.config.js"

    def portal_path(self, name: str) -> Path:
        return self.portals_dir / name

    def display_path(self, path: Path) -> Path:
        """`path` relative to the workspace root when it lies inside it."""
        if path.is_relative_to(self.root):
            return path.relative_to(self.root)
        return path


@dataclass(frozen=True)
class NoWorkspaceSentinel:
    """Sentinel value indicating execution outside an edutech workspace.

    Commands that need a workspace check for this and fail fast; `init` and
    `--help` work without one.
    """

    message: str = "Not inside an edutech workspace"


def find_workspace_root(start: Path) -> Path | None:
    """Walk up from `start` to the first directory holding workspace config."""
    if not start.exists():
        return None
    current = start.resolve()
    for candidate in [current, *current.parents]:
        if is_workspace_root(candidate):
            return candidate
    return None


def discover_workspace_or_sentinel(
    cwd: Path, env: Mapping[str, str] | None = None
) -> WorkspaceContext | NoWorkspaceSentinel:
    root = find_workspace_root(cwd)
    if root is None:
        return NoWorkspaceSentinel(
            message=(
                "Not inside an edutech workspace "
                "(no .edutech/config.toml or .edutechrc found up the tree)"
            )
        )
    return WorkspaceContext(root=root, config=load_workspace_config(root, env))
