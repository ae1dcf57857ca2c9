"""Enumeration of the portals installed in a workspace."""

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from edutech.core.errors import PortalMetadataError
from edutech.core.fs_utils import directory_size, format_size
from edutech.core.portal_metadata import PortalMetadata, has_metadata, read_metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortalRecord:
    """Derived view of one installed portal directory."""

    name: str
    path: Path
    theme: str
    version: str
    installed_at: str
    repo: str
    description: str
    size_bytes: int
    managed: bool
    updated_at: str | None = None
    framework: str | None = None
    scripts: dict[str, str] = field(default_factory=dict)

    @property
    def size(self) -> str:
        return format_size(self.size_bytes)


def _read_package_json(portal_dir: Path) -> dict:
    package_json = portal_dir / "package.json"
    if not package_json.is_file():
        return {}
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("Ignoring unreadable %s: %s", package_json, e)
        return {}
    return data if isinstance(data, dict) else {}


def _load_metadata_leniently(portal_dir: Path) -> PortalMetadata | None:
    try:
        return read_metadata(portal_dir)
    except PortalMetadataError as e:
        logger.debug("Treating corrupt metadata as absent: %s", e)
        return None


def build_record(portal_dir: Path) -> PortalRecord:
    """Assemble a PortalRecord from whatever the directory contains."""
    metadata = _load_metadata_leniently(portal_dir)
    package = _read_package_json(portal_dir)
    raw_scripts = package.get("scripts")
    scripts = (
        {str(k): str(v) for k, v in raw_scripts.items()} if isinstance(raw_scripts, dict) else {}
    )
    framework = "Next.js" if (portal_dir / "next.config.js").exists() else None

    return PortalRecord(
        name=portal_dir.name,
        path=portal_dir,
        theme=metadata.theme if metadata else "default",
        version=metadata.version if metadata else "unknown",
        installed_at=metadata.installed_at if metadata else "unknown",
        repo=metadata.repo if metadata else "unknown",
        description=str(package.get("description") or "No description"),
        size_bytes=directory_size(portal_dir),
        managed=metadata is not None,
        updated_at=metadata.updated_at if metadata else None,
        framework=framework,
        scripts=scripts,
    )


def list_installed(portals_root: Path) -> Iterator[PortalRecord]:
    """Yield one record per portal directory, sorted by name.

    Hidden entries and plain files are skipped. The directory is re-scanned on
    every call.
    """
    if not portals_root.is_dir():
        return
    for child in sorted(portals_root.iterdir(), key=lambda p: p.name):
        if child.name.startswith(".") or not child.is_dir():
            continue
        yield build_record(child)


def find_portal(portals_root: Path, name: str) -> PortalRecord | None:
    portal_dir = portals_root / name
    if not portal_dir.is_dir():
        return None
    return build_record(portal_dir)


def list_updatable(portals_root: Path) -> list[str]:
    """Names of installed portals that carry a metadata file."""
    if not portals_root.is_dir():
        return []
    return sorted(
        child.name
        for child in portals_root.iterdir()
        if child.is_dir() and not child.name.startswith(".") and has_metadata(child)
    )
