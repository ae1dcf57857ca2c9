"""Result values returned by lifecycle operations."""

from dataclasses import dataclass
from pathlib import Path

from edutech.core.errors import PortalError
from edutech.core.snapshot.abc import SnapshotStrategy


@dataclass(frozen=True)
class AddResult:
    name: str
    path: Path
    theme: str
    locator: str
    version: str
    strategy: SnapshotStrategy
    port: int | None
    dependencies_installed: bool


@dataclass(frozen=True)
class UpdateResult:
    name: str
    path: Path
    backup_location: Path
    previous_version: str
    new_version: str | None
    forced: bool
    already_latest: bool
    dependencies_changed: bool
    dependencies_installed: bool


@dataclass(frozen=True)
class UpdateOutcome:
    """Per-portal entry of an `update all` run."""

    name: str
    result: UpdateResult | None
    error: PortalError | None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RemoveResult:
    name: str
    path: Path
    removed: bool
    backup_location: Path | None = None
    had_uncommitted_changes: bool = False
    portals_dir_removed: bool = False

    @property
    def cancelled(self) -> bool:
        return not self.removed

    @property
    def changes_lost(self) -> bool:
        """True when uncommitted work was deleted with no backup to recover it."""
        return self.removed and self.had_uncommitted_changes and self.backup_location is None
