"""Scaffolding a new portal workspace."""

import json
import logging
from pathlib import Path

from edutech.core.context import PortalContext
from edutech.core.errors import WorkspaceExistsError
from edutech.core.fs_utils import remove_tree
from edutech.core.naming import validate_portal_name
from edutech.core.process_manifest import EMPTY_ECOSYSTEM
from edutech.core.workspace_config import (
    LEGACY_RC_FILE,
    WorkspaceConfig,
    write_workspace_config,
)
from edutech.core.workspace_discovery import WorkspaceContext

logger = logging.getLogger(__name__)

GITIGNORE = """\
# Dependencies
node_modules/
.pnpm-store/

# Build outputs
.next/
out/
dist/

# Environment variables
.env.local
.env*.local

# Logs
*.log

# OS
.DS_Store

# Portal lifecycle
{backups_dir}/
{cache_file}
temp-*/
"""

README = """\
# {title} Edutech Platform

This workspace contains the edutech portals for {institution}.

## Managing portals

```bash
edutech list --available          # browse the registry
edutech add <portal> [-t <theme>] # install a portal
edutech update <portal>|all       # pull the latest version
edutech remove <portal>           # remove (with backup)
```

## Layout

- `{portals_dir}/` - individual portal applications
- `shared/` - shared components and utilities
- `.edutech/config.toml` - workspace configuration
- `ecosystem.config.js` - PM2 process definitions
"""


def _root_package_json(workspace_name: str) -> dict:
    return {
        "name": workspace_name,
        "version": "1.0.0",
        "private": True,
        "workspaces": [],
        "scripts": {
            "portal:add": "edutech add",
            "portal:update": "edutech update",
            "portal:remove": "edutech remove",
            "portal:list": "edutech list",
        },
    }


def init_workspace(
    ctx: PortalContext,
    institution: str,
    *,
    parent: Path,
    registry_url: str,
) -> WorkspaceContext:
    """Create `<institution>-workspace` under `parent`.

    A failure part-way through removes the partially created directory.
    `git init` is best-effort.

    Raises:
        PortalValidationError: If `institution` is not a legal name
        WorkspaceExistsError: If the target directory already exists
    """
    validate_portal_name(institution, kind="institution")
    workspace_name = f"{institution}-workspace"
    root = parent / workspace_name
    if root.exists():
        raise WorkspaceExistsError(root)

    config = WorkspaceConfig(registry_url=registry_url, institution=institution)
    ctx.feedback.info(f"Creating workspace: {workspace_name}")
    root.mkdir(parents=True)
    try:
        _scaffold(root, workspace_name, institution, config, ctx.time.now().isoformat())
    except OSError:
        remove_tree(root)
        raise

    try:
        ctx.git.init_repository(root)
    except RuntimeError as e:
        logger.debug("git init failed: %s", e)
        ctx.feedback.warning("Could not initialize a git repository; continuing without one")
    else:
        ctx.feedback.success("Initialized git repository")

    ctx.feedback.success(f"Workspace created at {root}")
    return WorkspaceContext(root=root, config=config)


def _scaffold(
    root: Path,
    workspace_name: str,
    institution: str,
    config: WorkspaceConfig,
    created_at: str,
) -> None:
    (root / "package.json").write_text(
        json.dumps(_root_package_json(workspace_name), indent=2) + "\n", encoding="utf-8"
    )
    (root / config.portals_dir).mkdir()
    (root / "shared").mkdir()
    write_workspace_config(root, config)

    legacy = {
        "institution": institution,
        "workspaceName": workspace_name,
        "registryUrl": config.registry_url,
        "createdAt": created_at,
        "version": "1.0.0",
    }
    (root / LEGACY_RC_FILE).write_text(json.dumps(legacy, indent=2) + "\n", encoding="utf-8")
    (root / "ecosystem.config.js").write_text(EMPTY_ECOSYSTEM, encoding="utf-8")
    (root / ".gitignore").write_text(
        GITIGNORE.format(backups_dir=config.backups_dir, cache_file=config.cache_file),
        encoding="utf-8",
    )
    (root / "README.md").write_text(
        README.format(
            title=institution.upper(),
            institution=institution,
            portals_dir=config.portals_dir,
        ),
        encoding="utf-8",
    )
