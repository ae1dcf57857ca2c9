"""Tests for package.json workspaces editing."""

import json
from pathlib import Path

import pytest

from edutech.core.errors import ManifestError
from edutech.core.workspace_manifest import WorkspaceManifest


def _manifest(tmp_path: Path, data: object) -> WorkspaceManifest:
    path = tmp_path / "package.json"
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return WorkspaceManifest(path)


def _read(manifest: WorkspaceManifest) -> dict:
    return json.loads(manifest.path.read_text(encoding="utf-8"))


def test_register_appends_and_preserves_other_fields(tmp_path: Path) -> None:
    manifest = _manifest(
        tmp_path, {"name": "ws", "private": True, "workspaces": ["shared"], "scripts": {}}
    )

    assert manifest.register("portals/cbt") is True

    data = _read(manifest)
    assert data["workspaces"] == ["shared", "portals/cbt"]
    assert list(data) == ["name", "private", "workspaces", "scripts"]
    assert manifest.path.read_text(encoding="utf-8").endswith("}\n")


def test_register_is_idempotent(tmp_path: Path) -> None:
    manifest = _manifest(tmp_path, {"workspaces": ["portals/cbt"]})

    assert manifest.register("portals/cbt") is False
    assert manifest.entries() == ["portals/cbt"]


def test_register_creates_missing_workspaces_key(tmp_path: Path) -> None:
    manifest = _manifest(tmp_path, {"name": "ws"})

    manifest.register("portals/cbt")

    assert _read(manifest)["workspaces"] == ["portals/cbt"]


def test_object_form_uses_packages_list(tmp_path: Path) -> None:
    manifest = _manifest(tmp_path, {"workspaces": {"packages": ["shared"], "nohoist": ["**"]}})

    manifest.register("portals/cbt")
    manifest.deregister("shared")

    assert _read(manifest)["workspaces"] == {"packages": ["portals/cbt"], "nohoist": ["**"]}


def test_deregister_removes_every_occurrence(tmp_path: Path) -> None:
    manifest = _manifest(tmp_path, {"workspaces": ["portals/cbt", "shared", "portals/cbt"]})

    assert manifest.deregister("portals/cbt") is True
    assert manifest.entries() == ["shared"]


def test_deregister_absent_entry_leaves_file_untouched(tmp_path: Path) -> None:
    manifest = _manifest(tmp_path, {"workspaces": ["shared"]})
    before = manifest.path.read_text(encoding="utf-8")

    assert manifest.deregister("portals/cbt") is False
    assert manifest.path.read_text(encoding="utf-8") == before


def test_missing_file(tmp_path: Path) -> None:
    manifest = WorkspaceManifest(tmp_path / "package.json")

    assert manifest.entries() == []
    assert manifest.deregister("portals/cbt") is False
    with pytest.raises(ManifestError, match="Cannot read"):
        manifest.register("portals/cbt")


@pytest.mark.parametrize("data", [["not", "an", "object"], {"workspaces": "portals/*"}])
def test_malformed_manifest_raises(tmp_path: Path, data: object) -> None:
    manifest = _manifest(tmp_path, data)

    with pytest.raises(ManifestError):
        manifest.register("portals/cbt")


def test_undecodable_manifest_raises_manifest_error(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_bytes(b'{"name": "\xc3\x28", "workspaces": []}')
    manifest = WorkspaceManifest(path)

    with pytest.raises(ManifestError, match="Cannot read"):
        manifest.register("portals/cbt")
    with pytest.raises(ManifestError):
        manifest.entries()
