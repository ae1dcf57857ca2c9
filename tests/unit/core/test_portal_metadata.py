"""Tests for the per-portal metadata file."""

import json
from pathlib import Path

import pytest

from edutech.core.errors import PortalMetadataError
from edutech.core.portal_metadata import (
    PortalMetadata,
    has_metadata,
    metadata_path,
    read_metadata,
    write_metadata,
)


def _metadata() -> PortalMetadata:
    return PortalMetadata(
        name="cbt",
        theme="default",
        repo="https://github.com/org/cbt-default",
        version="1.0.0",
        installed_at="2024-01-01T09:00:00+00:00",
    )


def test_write_then_read_preserves_fields(tmp_path: Path) -> None:
    write_metadata(tmp_path, _metadata())

    assert has_metadata(tmp_path)
    assert read_metadata(tmp_path) == _metadata()
    raw = metadata_path(tmp_path).read_text(encoding="utf-8")
    assert raw.endswith("}\n")
    assert json.loads(raw) == {
        "name": "cbt",
        "theme": "default",
        "repo": "https://github.com/org/cbt-default",
        "version": "1.0.0",
        "installedAt": "2024-01-01T09:00:00+00:00",
        "source": "registry",
    }


def test_unknown_keys_survive_a_rewrite(tmp_path: Path) -> None:
    """Keys written by other tools are carried through untouched."""
    raw = {**_metadata().to_json(), "customNote": "pinned by IT", "build": {"id": 7}}
    metadata_path(tmp_path).write_text(json.dumps(raw), encoding="utf-8")

    loaded = read_metadata(tmp_path)
    assert loaded is not None
    write_metadata(tmp_path, loaded)

    written = json.loads(metadata_path(tmp_path).read_text(encoding="utf-8"))
    assert written["customNote"] == "pinned by IT"
    assert written["build"] == {"id": 7}


def test_with_update_stamps_update_fields() -> None:
    updated = _metadata().with_update(
        updated_at="2024-02-01T00:00:00+00:00",
        backup_location=Path("portal-backups/cbt-x"),
        new_version="1.1.0",
    )

    assert updated.version == "1.1.0"
    assert updated.previous_version == "1.0.0"
    assert updated.backup_location == "portal-backups/cbt-x"
    assert updated.to_json()["updatedAt"] == "2024-02-01T00:00:00+00:00"
    assert updated.installed_at == _metadata().installed_at


def test_with_update_keeps_version_when_snapshot_has_none() -> None:
    updated = _metadata().with_update(
        updated_at="2024-02-01T00:00:00+00:00",
        backup_location=Path("portal-backups/cbt-x"),
        new_version=None,
    )

    assert updated.version == "1.0.0"
    assert updated.previous_version == "1.0.0"


def test_from_json_fills_defaults_for_sparse_files() -> None:
    loaded = PortalMetadata.from_json({"name": "legacy"})

    assert loaded.theme == "default"
    assert loaded.version == "unknown"
    assert loaded.installed_at == "unknown"
    assert loaded.updated_at is None


def test_read_metadata_absent_returns_none(tmp_path: Path) -> None:
    assert read_metadata(tmp_path) is None
    assert not has_metadata(tmp_path)


@pytest.mark.parametrize("content", [b"{broken", b'"just a string"', b'{"name": "\xc3\x28"}'])
def test_read_metadata_corrupt_raises(tmp_path: Path, content: bytes) -> None:
    metadata_path(tmp_path).write_bytes(content)

    with pytest.raises(PortalMetadataError):
        read_metadata(tmp_path)
