"""Exception hierarchy for portal lifecycle operations.

Core modules raise these; the CLI layer is the only place that turns them
into styled error output and a non-zero exit code.
"""

from pathlib import Path


class PortalError(Exception):
    """Base class for every failure the lifecycle engine reports.

    Attributes:
        hint: Optional remediation shown below the error message.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class WorkspaceNotFoundError(PortalError):
    """Raised when no edutech workspace encloses the current directory."""


class PortalValidationError(PortalError):
    """Raised for an invalid portal name or argument."""


class PortalExistsError(PortalError):
    def __init__(self, name: str, path: Path) -> None:
        super().__init__(
            f'Portal "{name}" already exists at {path}',
            hint=f"Use: edutech update {name} to update the existing portal",
        )
        self.name = name
        self.path = path


class UnknownPortalError(PortalError):
    """Raised when the registry has no entry for the requested portal.

    Attributes:
        available: Mapping of registry portal names to their theme names.
    """

    def __init__(self, name: str, available: dict[str, list[str]]) -> None:
        super().__init__(f'Portal "{name}" not found in registry')
        self.name = name
        self.available = available


class UnknownThemeError(PortalError):
    def __init__(self, portal: str, theme: str, available: list[str]) -> None:
        super().__init__(f'Theme "{theme}" not available for portal "{portal}"')
        self.portal = portal
        self.theme = theme
        self.available = available


class PortalNotFoundError(PortalError):
    def __init__(self, name: str, path: Path) -> None:
        super().__init__(
            f'Portal "{name}" does not exist',
            hint="Use: edutech list --installed to see installed portals",
        )
        self.name = name
        self.path = path


class PortalNotManagedError(PortalError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f'No configuration found for portal "{name}". '
            "This portal may have been added manually.",
            hint=f"Remove and re-add it with: edutech add {name}",
        )
        self.name = name


class UncommittedChangesError(PortalError):
    def __init__(self, name: str, path: Path) -> None:
        super().__init__(
            f'Portal "{name}" has uncommitted changes.',
            hint=(
                "Options:\n"
                "  1. Commit or stash your changes first\n"
                "  2. Use --force to overwrite changes\n"
                "  3. Update manually by merging changes\n\n"
                f"To see changes:\n  cd {path} && git status"
            ),
        )
        self.name = name
        self.path = path


class PortalMetadataError(PortalError):
    """Raised when a portal metadata file exists but cannot be parsed."""


class RegistryUnavailableError(PortalError):
    def __init__(self, detail: str | None = None) -> None:
        message = "No registry available"
        if detail:
            message += f": {detail}"
        super().__init__(
            message,
            hint="Check your internet connection or the registry_url setting",
        )


class SnapshotFetchError(PortalError):
    def __init__(self, locator: str, detail: str) -> None:
        super().__init__(f"Failed to fetch {locator}\n{detail}")
        self.locator = locator


class BackupError(PortalError):
    def __init__(self, portal_path: Path, detail: str) -> None:
        super().__init__(f"Failed to create backup of {portal_path}: {detail}")
        self.portal_path = portal_path


class UpdateRolledBackError(PortalError):
    """Raised after a failed update has been reverted from its backup."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(
            f"Update failed: {reason}",
            hint=f'Portal "{name}" was restored from its pre-update backup',
        )
        self.name = name
        self.reason = reason


class RollbackFailedError(PortalError):
    """Raised when a failed update could not be reverted from its backup."""

    def __init__(self, name: str, reason: str, backup_location: Path, detail: str) -> None:
        super().__init__(
            f"Update failed: {reason}; restoring the backup also failed: {detail}",
            hint=(
                f'Portal "{name}" may be incomplete. '
                f"Its pre-update backup is available at: {backup_location}"
            ),
        )
        self.name = name
        self.reason = reason
        self.backup_location = backup_location


class PortalRemovalError(PortalError):
    def __init__(self, path: Path, detail: str, backup_location: Path | None) -> None:
        hint = None
        if backup_location is not None:
            hint = f"Backup is available at: {backup_location}"
        super().__init__(f"Failed to remove portal directory {path}: {detail}", hint=hint)
        self.path = path
        self.backup_location = backup_location


class ManifestError(PortalError):
    """Raised when a workspace or process manifest cannot be read or written."""


class WorkspaceConfigError(PortalError):
    """Raised when `.edutech/config.toml` or `.edutechrc` is malformed."""


class WorkspaceExistsError(PortalError):
    def __init__(self, path: Path) -> None:
        super().__init__(f'Directory "{path.name}" already exists')
        self.path = path
