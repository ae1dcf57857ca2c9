"""Workspace configuration stored in `.edutech/config.toml`.

Workspaces created before the TOML file existed only carry a `.edutechrc`
JSON file; it is read as a fallback. `EDUTECH_REGISTRY_URL` in the
environment overrides the registry URL from either source.
"""

import json
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path

import tomlkit

from edutech.core.errors import WorkspaceConfigError

CONFIG_DIR = ".edutech"
CONFIG_FILE = "config.toml"
LEGACY_RC_FILE = ".edutechrc"
REGISTRY_URL_ENV = "EDUTECH_REGISTRY_URL"
DEFAULT_REGISTRY_URL = (
    "https://raw.githubusercontent.com/z1lms/edutech-portal-registry/main/registry.json"
)


@dataclass(frozen=True)
class WorkspaceConfig:
    """Immutable per-workspace settings."""

    registry_url: str | None = None
    institution: str | None = None
    portals_dir: str = "portals"
    backups_dir: str = "portal-backups"
    cache_file: str = "portal-registry-cache.json"
    cache_ttl_seconds: int = 3600
    github_host: str = "https://github.com"
    package_manager: str = "pnpm"
    base_port: int = 3000


_FIELD_TYPES = {
    "registry_url": str,
    "institution": str,
    "portals_dir": str,
    "backups_dir": str,
    "cache_file": str,
    "cache_ttl_seconds": int,
    "github_host": str,
    "package_manager": str,
    "base_port": int,
}


def config_path(root: Path) -> Path:
    return root / CONFIG_DIR / CONFIG_FILE


def legacy_rc_path(root: Path) -> Path:
    return root / LEGACY_RC_FILE


def is_workspace_root(path: Path) -> bool:
    return config_path(path).is_file() or legacy_rc_path(path).is_file()


def _from_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise WorkspaceConfigError(f"Invalid TOML in {path}: {e}") from e

    values: dict[str, object] = {}
    for key, expected in _FIELD_TYPES.items():
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, expected) or isinstance(value, bool):
            raise WorkspaceConfigError(
                f"Invalid value for {key!r} in {path}: expected {expected.__name__}"
            )
        values[key] = value
    return values


def _from_legacy_rc(path: Path) -> dict[str, object]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise WorkspaceConfigError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"Invalid {path}: expected a JSON object")

    values: dict[str, object] = {}
    if isinstance(data.get("registryUrl"), str):
        values["registry_url"] = data["registryUrl"]
    if isinstance(data.get("institution"), str):
        values["institution"] = data["institution"]
    return values


def load_workspace_config(root: Path, env: Mapping[str, str] | None = None) -> WorkspaceConfig:
    """Load the configuration for the workspace at `root`.

    Raises:
        WorkspaceConfigError: If a config file exists but is malformed
    """
    environ = os.environ if env is None else env

    toml_file = config_path(root)
    rc_file = legacy_rc_path(root)
    if toml_file.is_file():
        values = _from_toml(toml_file)
    elif rc_file.is_file():
        values = _from_legacy_rc(rc_file)
    else:
        values = {}

    override = environ.get(REGISTRY_URL_ENV)
    if override:
        values["registry_url"] = override

    return WorkspaceConfig(**values)  # type: ignore[arg-type]


def render_workspace_config(config: WorkspaceConfig) -> str:
    doc = tomlkit.document()
    doc.add(tomlkit.comment("edutech workspace configuration"))
    for config_field in fields(config):
        value = getattr(config, config_field.name)
        if value is None:
            continue
        doc[config_field.name] = value
    return tomlkit.dumps(doc)


def write_workspace_config(root: Path, config: WorkspaceConfig) -> Path:
    """Write `.edutech/config.toml`, preserving comments in an existing file."""
    path = config_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text(render_workspace_config(config), encoding="utf-8")
        return path

    with path.open("r", encoding="utf-8") as f:
        doc = tomlkit.load(f)
    for config_field in fields(config):
        value = getattr(config, config_field.name)
        if value is None:
            if config_field.name in doc:
                del doc[config_field.name]
            continue
        doc[config_field.name] = value
    with path.open("w", encoding="utf-8") as f:
        tomlkit.dump(doc, f)
    return path
