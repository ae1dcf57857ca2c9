"""Editing the `workspaces` list in the root package.json."""

import json
import logging
from pathlib import Path
from typing import Any

from edutech.core.errors import ManifestError

logger = logging.getLogger(__name__)


class WorkspaceManifest:
    """Set-like view over `package.json` workspaces.

    Both the plain array form and the `{"packages": [...]}` object form of
    `workspaces` are supported. Key order and every unrelated field survive a
    rewrite.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ManifestError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise ManifestError(f"Cannot read {self._path}: expected a JSON object")
        return data

    def _save(self, data: dict[str, Any]) -> None:
        try:
            self._path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ManifestError(f"Cannot write {self._path}: {e}") from e

    @staticmethod
    def _entries(data: dict[str, Any]) -> list[str]:
        """Return the live list object that holds workspace entries, creating it if needed."""
        workspaces = data.get("workspaces")
        if isinstance(workspaces, dict):
            packages = workspaces.setdefault("packages", [])
            if not isinstance(packages, list):
                raise ManifestError("workspaces.packages is not an array")
            return packages
        if workspaces is None:
            data["workspaces"] = []
            return data["workspaces"]
        if not isinstance(workspaces, list):
            raise ManifestError("workspaces is not an array")
        return workspaces

    def entries(self) -> list[str]:
        if not self._path.exists():
            return []
        return list(self._entries(self._load()))

    def register(self, entry: str) -> bool:
        """Add `entry` unless already present.

        Returns:
            True if the manifest was modified

        Raises:
            ManifestError: If the manifest is missing or malformed
        """
        data = self._load()
        entries = self._entries(data)
        if entry in entries:
            return False
        entries.append(entry)
        self._save(data)
        logger.debug("Registered workspace %s in %s", entry, self._path)
        return True

    def deregister(self, entry: str) -> bool:
        """Remove every occurrence of `entry`. A missing manifest is a no-op.

        Returns:
            True if the manifest was modified
        """
        if not self._path.exists():
            return False
        data = self._load()
        entries = self._entries(data)
        if entry not in entries:
            return False
        entries[:] = [existing for existing in entries if existing != entry]
        self._save(data)
        logger.debug("Deregistered workspace %s from %s", entry, self._path)
        return True
