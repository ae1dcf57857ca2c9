"""Pydantic models for JSON output schemas.

These models validate the structures `edutech list --json` writes to stdout.
"""

from pydantic import BaseModel, ConfigDict

from edutech.core.inventory import PortalRecord
from edutech.core.registry import PortalDescriptor


class InstalledPortalInfo(BaseModel):
    """One installed portal in `edutech list --json` output."""

    model_config = ConfigDict(strict=True)

    name: str
    path: str
    description: str
    theme: str
    version: str
    installed_at: str
    updated_at: str | None
    repo: str
    size: str
    size_bytes: int
    managed: bool

    @staticmethod
    def from_record(record: PortalRecord) -> "InstalledPortalInfo":
        return InstalledPortalInfo(
            name=record.name,
            path=str(record.path),
            description=record.description,
            theme=record.theme,
            version=record.version,
            installed_at=record.installed_at,
            updated_at=record.updated_at,
            repo=record.repo,
            size=record.size,
            size_bytes=record.size_bytes,
            managed=record.managed,
        )


class AvailablePortalInfo(BaseModel):
    model_config = ConfigDict(strict=True)

    name: str
    description: str
    version: str
    themes: list[str]
    installed: bool

    @staticmethod
    def from_descriptor(
        name: str, descriptor: PortalDescriptor, *, installed: bool
    ) -> "AvailablePortalInfo":
        return AvailablePortalInfo(
            name=name,
            description=descriptor.description,
            version=descriptor.version,
            themes=sorted(descriptor.themes),
            installed=installed,
        )


class ListCommandResponse(BaseModel):
    """JSON response schema for `edutech list --json`.

    Attributes:
        installed: Installed portals, or None when not requested
        available: Registry portals, or None when not requested or unavailable
    """

    model_config = ConfigDict(strict=True)

    installed: list[InstalledPortalInfo] | None = None
    available: list[AvailablePortalInfo] | None = None
