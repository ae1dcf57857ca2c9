"""`edutech list`: installed and available portals."""

import click
from rich.console import Console
from rich.table import Table

from edutech.cli.core import portal_error_boundary
from edutech.cli.ensure import Ensure
from edutech.cli.json_output import emit_json
from edutech.cli.json_schemas import (
    AvailablePortalInfo,
    InstalledPortalInfo,
    ListCommandResponse,
)
from edutech.cli.output import user_output
from edutech.core.context import PortalContext
from edutech.core.errors import RegistryUnavailableError
from edutech.core.inventory import PortalRecord, find_portal, list_installed
from edutech.core.registry import Registry


def _format_date(value: str) -> str:
    if not value or value == "unknown":
        return "unknown"
    return value.split("T")[0]


def _console() -> Console:
    # Tables go to stderr with the rest of the human-facing output
    return Console(stderr=True, width=200)


def _print_installed(portals: list[PortalRecord]) -> None:
    if not portals:
        user_output(click.style("No portals installed yet", fg="yellow"))
        user_output("Use edutech list --available to see available portals")
        return

    table = Table(title="Installed portals", show_header=True, header_style="bold")
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("description")
    table.add_column("theme", no_wrap=True)
    table.add_column("version", no_wrap=True)
    table.add_column("installed", no_wrap=True)
    table.add_column("size", no_wrap=True, justify="right")
    table.add_column("path", no_wrap=True)
    for portal in portals:
        table.add_row(
            portal.name,
            portal.description,
            portal.theme,
            portal.version,
            _format_date(portal.installed_at),
            portal.size,
            str(portal.path),
        )
    console = _console()
    console.print(table)
    console.print()
    user_output(f"Total: {len(portals)} portal(s) installed")


def _print_available(registry: Registry, installed_names: set[str]) -> None:
    if not registry.portals:
        user_output(click.style("The registry lists no portals", fg="yellow"))
        return

    table = Table(title="Available portals", show_header=True, header_style="bold")
    table.add_column("portal", style="cyan", no_wrap=True)
    table.add_column("description")
    table.add_column("themes")
    table.add_column("version", no_wrap=True)
    table.add_column("status", no_wrap=True)
    for name, descriptor in sorted(registry.portals.items()):
        status = "[green]installed[/green]" if name in installed_names else "[dim]available[/dim]"
        table.add_row(
            name,
            descriptor.description,
            ", ".join(sorted(descriptor.themes)) or "default",
            descriptor.version,
            status,
        )
    console = _console()
    console.print(table)
    console.print()
    user_output(f"Total: {len(registry.portals)} portal(s) available")
    user_output("Use: edutech add <name> [--theme <theme>] to install")


def _print_details(portal: PortalRecord) -> None:
    user_output(click.style(portal.name, fg="cyan", bold=True))
    user_output("-" * (len(portal.name) + 2))
    user_output(f"  Description: {portal.description}")
    user_output(f"  Theme: {portal.theme}")
    user_output(f"  Version: {portal.version}")
    user_output(f"  Installed: {_format_date(portal.installed_at)}")
    if portal.updated_at:
        user_output(f"  Updated: {_format_date(portal.updated_at)}")
    user_output(f"  Path: {portal.path}")
    user_output(f"  Repository: {portal.repo}")
    user_output(f"  Size: {portal.size}")
    if portal.framework:
        user_output(f"  Framework: {portal.framework}")
    if portal.scripts:
        user_output("  Scripts:")
        for script_name, command in portal.scripts.items():
            user_output(f"    {click.style(script_name, fg='green')}: {command}")


def _show_details(ctx: PortalContext, name: str, *, as_json: bool) -> None:
    workspace = ctx.require_workspace()
    portal = find_portal(workspace.portals_dir, name)
    if portal is not None:
        if as_json:
            emit_json({"portal": InstalledPortalInfo.from_record(portal).model_dump(mode="json")})
        else:
            _print_details(portal)
        return

    user_output(click.style("Error: ", fg="red") + f'Portal "{name}" is not installed')
    try:
        registry = ctx.registry_cache().fetch()
    except RegistryUnavailableError:
        raise SystemExit(1) from None
    descriptor = registry.portals.get(name)
    if descriptor is not None:
        user_output(click.style("\nThis portal is available but not installed:", fg="yellow"))
        user_output(f"  Description: {descriptor.description}")
        user_output(f"  Themes: {', '.join(sorted(descriptor.themes))}")
        user_output(f"  Version: {descriptor.version}")
        user_output(f"\nInstall with: edutech add {name}")
    raise SystemExit(1)


@click.command("list")
@click.option("--installed", "-i", is_flag=True, help="List only installed portals.")
@click.option("--available", "-a", is_flag=True, help="List only registry portals.")
@click.option("--details", "-d", metavar="NAME", help="Show details about one portal.")
@click.option("--refresh", "-r", is_flag=True, help="Refresh the registry cache first.")
@click.option("--json", "as_json", is_flag=True, help="Write JSON to stdout.")
@click.pass_obj
@portal_error_boundary
def list_cmd(
    ctx: PortalContext,
    installed: bool,
    available: bool,
    details: str | None,
    refresh: bool,
    as_json: bool,
) -> None:
    """List installed and available portals.

    The registry is cached for one hour; use --refresh to bypass the cache.

    Examples:
        edutech list
        edutech list --installed
        edutech list --available --refresh
        edutech list --details cbt
    """
    Ensure.at_most_one_flag(
        {"--installed": installed, "--available": available, "--details": details is not None}
    )
    workspace = ctx.require_workspace()

    if details is not None:
        _show_details(ctx, details, as_json=as_json)
        return

    portals = list(list_installed(workspace.portals_dir))
    installed_names = {portal.name for portal in portals}

    registry: Registry | None = None
    if not installed:
        cache = ctx.registry_cache()
        if available:
            registry = cache.fetch(force_refresh=refresh)
        else:
            try:
                registry = cache.fetch(force_refresh=refresh)
            except RegistryUnavailableError as e:
                ctx.feedback.warning(str(e))
    elif refresh:
        ctx.feedback.info("Refreshing registry cache...")
        ctx.registry_cache().fetch(force_refresh=True)

    if as_json:
        response = ListCommandResponse(
            installed=(
                None if available else [InstalledPortalInfo.from_record(p) for p in portals]
            ),
            available=(
                None
                if registry is None
                else [
                    AvailablePortalInfo.from_descriptor(
                        name, descriptor, installed=name in installed_names
                    )
                    for name, descriptor in sorted(registry.portals.items())
                ]
            ),
        )
        emit_json(response.model_dump(mode="json"))
        return

    if installed:
        _print_installed(portals)
        return
    if available:
        assert registry is not None
        _print_available(registry, installed_names)
        return

    _print_installed(portals)
    if registry is not None:
        remaining = len(set(registry.portals) - installed_names)
        if remaining > 0:
            message = f"\n{remaining} more portal(s) available to install"
            user_output(click.style(message, bold=True))
    user_output("\nCommands:")
    user_output("  edutech list --installed   Show installed portals")
    user_output("  edutech list --available   Show available portals")
    user_output("  edutech list --refresh     Refresh registry cache")
    user_output("  edutech add <name>         Install a portal")
