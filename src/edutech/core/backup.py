"""Timestamped full-copy backups of portal directories."""

import json
import logging
import secrets
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from edutech.core.errors import BackupError
from edutech.core.fs_utils import is_empty_dir, remove_tree
from edutech.core.time.abc import Time

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".backup.json"


@dataclass(frozen=True)
class BackupRecord:
    portal: str
    location: Path
    backed_up_at: str
    original_path: str


def backup_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp made filesystem safe, e.g. 2024-01-15T10-30-00-000Z."""
    return moment.strftime("%Y-%m-%dT%H-%M-%S-") + f"{moment.microsecond // 1000:03d}Z"


def _random_suffix() -> str:
    return secrets.token_hex(3)


def sidecar_path(backup_location: Path) -> Path:
    return backup_location.with_name(backup_location.name + SIDECAR_SUFFIX)


class BackupManager:
    """Creates, restores and lists portal backups under one root directory.

    Each backup is `<root>/<portal>-<timestamp>-<suffix>/` with a sidecar
    `<root>/<portal>-<timestamp>-<suffix>.backup.json` next to it, so the
    copied tree stays byte-identical to the portal it came from.
    """

    def __init__(
        self,
        backups_root: Path,
        time: Time,
        *,
        suffix_factory: Callable[[], str] = _random_suffix,
    ) -> None:
        self._root = backups_root
        self._time = time
        self._suffix_factory = suffix_factory

    @property
    def root(self) -> Path:
        return self._root

    def create_backup(self, portal_path: Path) -> Path:
        """Copy `portal_path` into a fresh backup directory.

        Returns:
            Location of the new backup

        Raises:
            BackupError: If the copy or the sidecar write fails, or the copy
                is empty; any partial copy is removed first
        """
        now = self._time.now()
        name = f"{portal_path.name}-{backup_timestamp(now)}-{self._suffix_factory()}"
        location = self._root / name

        if location.exists():
            raise BackupError(portal_path, f"backup target {location} already exists")

        try:
            self._root.mkdir(parents=True, exist_ok=True)
            shutil.copytree(portal_path, location, symlinks=True)
            info = {
                "portal": portal_path.name,
                "backedUpAt": now.isoformat(),
                "originalPath": str(portal_path),
                "backupLocation": str(location),
            }
            sidecar_path(location).write_text(json.dumps(info, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            remove_tree(location)
            remove_tree(sidecar_path(location))
            raise BackupError(portal_path, str(e)) from e

        if is_empty_dir(location):
            remove_tree(location)
            remove_tree(sidecar_path(location))
            raise BackupError(portal_path, "backup is empty")

        logger.debug("Backed up %s to %s", portal_path, location)
        return location

    def restore(self, backup_location: Path, target_path: Path) -> None:
        """Move a backup back into place, replacing whatever is at `target_path`.

        The backup is consumed: its directory moves and its sidecar is deleted.
        """
        remove_tree(target_path)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(backup_location), str(target_path))
        sidecar_path(backup_location).unlink(missing_ok=True)
        logger.debug("Restored %s from %s", target_path, backup_location)

    def list_backups(self, portal: str | None = None) -> list[BackupRecord]:
        """All backups on disk, oldest first, optionally for one portal."""
        if not self._root.is_dir():
            return []
        records = []
        for sidecar in sorted(self._root.glob(f"*{SIDECAR_SUFFIX}")):
            location = self._root / sidecar.name.removesuffix(SIDECAR_SUFFIX)
            if not location.is_dir():
                continue
            try:
                info = json.loads(sidecar.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.debug("Skipping unreadable backup sidecar %s: %s", sidecar, e)
                continue
            record = BackupRecord(
                portal=str(info.get("portal", "")),
                location=location,
                backed_up_at=str(info.get("backedUpAt", "unknown")),
                original_path=str(info.get("originalPath", "")),
            )
            if portal is None or record.portal == portal:
                records.append(record)
        return sorted(records, key=lambda r: r.backed_up_at)
