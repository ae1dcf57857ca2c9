"""`edutech remove`: delete a portal, optionally interactively."""

import click

from edutech.cli.core import portal_error_boundary
from edutech.cli.ensure import Ensure
from edutech.cli.output import user_output
from edutech.core.context import PortalContext
from edutech.core.inventory import PortalRecord, list_installed
from edutech.core.lifecycle import remove_portal


def _print_portals(portals: list[PortalRecord]) -> None:
    user_output(click.style("Available Portals:", fg="blue") + "\n")
    for index, portal in enumerate(portals, start=1):
        installed = portal.installed_at.split("T")[0]
        user_output(f"{index}. {click.style(portal.name, fg='cyan')}")
        user_output(f"   {portal.path}")
        user_output(f"   {portal.size} | theme: {portal.theme}")
        user_output(f"   installed: {installed}")
        user_output()


def _select_portal(ctx: PortalContext, portals: list[PortalRecord]) -> str:
    answer = ctx.prompter.prompt(f"Enter portal number or name (1-{len(portals)})").strip()
    if answer.isdigit() and 1 <= int(answer) <= len(portals):
        return portals[int(answer) - 1].name
    by_name = {portal.name: portal for portal in portals}
    selected = Ensure.not_none(by_name.get(answer), "Invalid selection")
    return selected.name


@click.command("remove")
@click.argument("name", required=False)
@click.option("--force", "-f", is_flag=True, help="Skip confirmation prompts.")
@click.option("--no-backup", "-n", "no_backup", is_flag=True, help="Do not back up first.")
@click.option("--interactive", "-i", is_flag=True, help="Pick the portal from a list.")
@click.option("--list", "-l", "list_only", is_flag=True, help="List removable portals.")
@click.pass_obj
@portal_error_boundary
def remove_cmd(
    ctx: PortalContext,
    name: str | None,
    force: bool,
    no_backup: bool,
    interactive: bool,
    list_only: bool,
) -> None:
    """Remove portal NAME from the workspace.

    Unless --force is given you are asked to confirm, and offered a backup
    under portal-backups/ first. Backups are never deleted automatically.

    Examples:
        edutech remove cbt
        edutech remove academic --force --no-backup
        edutech remove --interactive
    """
    workspace = ctx.require_workspace()

    if list_only or interactive:
        portals = list(list_installed(workspace.portals_dir))
        if not portals:
            ctx.feedback.info("No portals found")
            return
        _print_portals(portals)
        if list_only:
            return
        name = _select_portal(ctx, portals)
        force = False

    portal_name = Ensure.not_none(name, "Portal name is required (or use --interactive)")
    result = remove_portal(ctx, portal_name, force=force, backup=not no_backup)
    if result.cancelled:
        return

    ctx.feedback.success(f'Portal "{portal_name}" removed successfully!')
    if result.backup_location is not None:
        ctx.feedback.info(f"Backup saved to: {workspace.display_path(result.backup_location)}")
        ctx.feedback.info("Backup will not be automatically cleaned up")
    ctx.feedback.info(
        f"Next steps:\n  {workspace.config.package_manager} install"
        "  # Update workspace dependencies"
    )
