"""Adding a portal from the registry."""

import logging

from edutech.core.context import PortalContext
from edutech.core.errors import (
    PortalError,
    PortalExistsError,
    PortalMetadataError,
    UnknownPortalError,
    UnknownThemeError,
)
from edutech.core.fs_utils import remove_tree
from edutech.core.lifecycle.common import install_dependencies, register_portal
from edutech.core.lifecycle.types import AddResult
from edutech.core.naming import normalize_locator, validate_portal_name
from edutech.core.portal_metadata import PortalMetadata, write_metadata
from edutech.core.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def add_portal(ctx: PortalContext, name: str, theme: str = "default") -> AddResult:
    """Install portal `name` in `theme` from the registry.

    The snapshot fetch and the metadata write either both land or leave no
    portal directory behind. Manifest registration and the dependency
    install afterwards are best-effort and only warn.

    Raises:
        PortalValidationError: If `name` is not a legal portal name
        PortalExistsError: If the portal directory already exists
        RegistryUnavailableError: If neither the registry nor its cache is usable
        UnknownPortalError: If the registry has no such portal
        UnknownThemeError: If the portal has no such theme
        SnapshotFetchError: If every fetch strategy fails
    """
    workspace = ctx.require_workspace()
    validate_portal_name(name)

    target = workspace.portal_path(name)
    if target.exists():
        raise PortalExistsError(name, target)

    registry = ctx.registry_cache().fetch(force_refresh=True)

    descriptor = registry.portals.get(name)
    if descriptor is None:
        raise UnknownPortalError(name, registry.theme_names())

    raw_locator = descriptor.themes.get(theme)
    if raw_locator is None:
        raise UnknownThemeError(name, theme, sorted(descriptor.themes))

    locator = normalize_locator(raw_locator, workspace.config.github_host)
    ctx.feedback.info(f"Cloning from: {locator}")

    uow = UnitOfWork()
    try:
        with uow:
            workspace.portals_dir.mkdir(parents=True, exist_ok=True)
            uow.on_rollback(f"remove partial portal {target}", lambda: remove_tree(target))

            strategy = ctx.snapshot.fetch(locator, target)
            logger.debug("Fetched %s into %s using %s", locator, target, strategy)

            metadata = PortalMetadata(
                name=name,
                theme=theme,
                repo=locator,
                version=descriptor.version,
                installed_at=ctx.time.now().isoformat(),
                source="registry",
            )
            try:
                write_metadata(target, metadata)
            except OSError as e:
                raise PortalMetadataError(f"Cannot write portal configuration: {e}") from e
            uow.commit()
    except PortalError:
        for description in uow.rollback_failures:
            ctx.feedback.warning(f"Cleanup step failed: {description}")
        raise

    ctx.feedback.success("Portal files fetched")
    ctx.feedback.success("Created portal configuration")

    port = register_portal(ctx, workspace, name)
    installed = install_dependencies(ctx, workspace)

    return AddResult(
        name=name,
        path=target,
        theme=theme,
        locator=locator,
        version=descriptor.version,
        strategy=strategy,
        port=port,
        dependencies_installed=installed,
    )
