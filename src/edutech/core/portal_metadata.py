"""Reading and writing the `.portal-config.json` file inside each portal."""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from edutech.core.errors import PortalMetadataError
from edutech.core.naming import METADATA_FILENAME

_KNOWN_KEYS = {
    "name",
    "theme",
    "repo",
    "version",
    "installedAt",
    "source",
    "updatedAt",
    "previousVersion",
    "backupLocation",
}


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass(frozen=True)
class PortalMetadata:
    """Provenance record for an installed portal.

    Keys the tool does not know about are carried in `extra` and written
    back unchanged.
    """

    name: str
    theme: str
    repo: str
    version: str
    installed_at: str
    source: str = "registry"
    updated_at: str | None = None
    previous_version: str | None = None
    backup_location: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_json(data: dict[str, Any]) -> "PortalMetadata":
        return PortalMetadata(
            name=str(data.get("name", "")),
            theme=str(data.get("theme", "default")),
            repo=str(data.get("repo", "unknown")),
            version=str(data.get("version", "unknown")),
            installed_at=str(data.get("installedAt", "unknown")),
            source=str(data.get("source", "registry")),
            updated_at=_optional_str(data.get("updatedAt")),
            previous_version=_optional_str(data.get("previousVersion")),
            backup_location=_optional_str(data.get("backupLocation")),
            extra={key: value for key, value in data.items() if key not in _KNOWN_KEYS},
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "theme": self.theme,
            "repo": self.repo,
            "version": self.version,
            "installedAt": self.installed_at,
            "source": self.source,
        }
        if self.updated_at is not None:
            data["updatedAt"] = self.updated_at
        if self.previous_version is not None:
            data["previousVersion"] = self.previous_version
        if self.backup_location is not None:
            data["backupLocation"] = self.backup_location
        data.update(self.extra)
        return data

    def with_update(
        self, *, updated_at: str, backup_location: Path, new_version: str | None
    ) -> "PortalMetadata":
        """Return a copy stamped with a completed update."""
        return replace(
            self,
            version=new_version if new_version is not None else self.version,
            updated_at=updated_at,
            previous_version=self.version,
            backup_location=str(backup_location),
        )


def metadata_path(portal_dir: Path) -> Path:
    return portal_dir / METADATA_FILENAME


def has_metadata(portal_dir: Path) -> bool:
    return metadata_path(portal_dir).is_file()


def read_metadata(portal_dir: Path) -> PortalMetadata | None:
    """Load a portal's metadata, or None when the portal has none.

    Raises:
        PortalMetadataError: If the file exists but is not a JSON object
    """
    path = metadata_path(portal_dir)
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PortalMetadataError(f"Cannot read {path}: {e}") from e
    if not isinstance(data, dict):
        raise PortalMetadataError(f"Cannot read {path}: expected a JSON object")
    return PortalMetadata.from_json(data)


def write_metadata(portal_dir: Path, metadata: PortalMetadata) -> Path:
    path = metadata_path(portal_dir)
    path.write_text(json.dumps(metadata.to_json(), indent=2) + "\n", encoding="utf-8")
    return path
