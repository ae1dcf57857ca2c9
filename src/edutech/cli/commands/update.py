"""`edutech update`: refresh one portal, or all of them."""

import click

from edutech.cli.core import portal_error_boundary
from edutech.cli.ensure import Ensure
from edutech.core.context import PortalContext
from edutech.core.lifecycle import UpdateResult, update_all, update_portal


def _report_update(ctx: PortalContext, result: UpdateResult) -> None:
    workspace = ctx.require_workspace()
    ctx.feedback.success(f'Portal "{result.name}" updated successfully!')
    ctx.feedback.info(f"Updated: {workspace.display_path(result.path)}/")
    ctx.feedback.info(f"Backup: {workspace.display_path(result.backup_location)}/")
    if result.new_version is not None:
        ctx.feedback.info(f"Version: {result.previous_version} -> {result.new_version}")
    ctx.feedback.info("Review the changes and test the portal; the backup is kept for rollback.")


@click.command("update")
@click.argument("name")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Replace the portal outright, overwriting local changes.",
)
@click.pass_obj
@portal_error_boundary
def update_cmd(ctx: PortalContext, name: str, force: bool) -> None:
    """Update portal NAME from its source, or every managed portal with `all`.

    A backup is always taken first. Without --force new files are merged over
    the portal and nothing is deleted; a portal with uncommitted changes is
    refused. A failed update restores the backup.

    Examples:
        edutech update cbt
        edutech update academic --force
        edutech update all
    """
    if name != "all":
        ctx.feedback.info(f"Updating portal: {name}")
        _report_update(ctx, update_portal(ctx, name, force=force))
        return

    outcomes = update_all(ctx, force=force)
    for outcome in outcomes:
        if outcome.result is not None:
            _report_update(ctx, outcome.result)

    failed = [outcome.name for outcome in outcomes if not outcome.succeeded]
    Ensure.invariant(not failed, f"Failed to update: {', '.join(failed)}")
    if outcomes:
        ctx.feedback.success("All portals update completed")
