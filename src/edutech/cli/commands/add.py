"""`edutech add`: install a portal from the registry."""

import click

from edutech.cli.core import portal_error_boundary
from edutech.core.context import PortalContext
from edutech.core.lifecycle import add_portal


@click.command("add")
@click.argument("name")
@click.option(
    "--theme",
    "-t",
    default="default",
    show_default=True,
    help="Theme variant to install.",
)
@click.pass_obj
@portal_error_boundary
def add_cmd(ctx: PortalContext, name: str, theme: str) -> None:
    """Add portal NAME to the workspace.

    Examples:
        edutech add cbt
        edutech add academic --theme modern
    """
    ctx.feedback.info(f"Adding portal: {name} ({theme} theme)")
    result = add_portal(ctx, name, theme)

    workspace = ctx.require_workspace()
    relative = workspace.display_path(result.path)
    ctx.feedback.success(f'Portal "{name}" added successfully!')
    ctx.feedback.info(f"Location: {relative}/")
    ctx.feedback.info(f"Theme: {theme}")
    ctx.feedback.info(f"Version: {result.version}")
    if result.port is not None:
        ctx.feedback.info(f"Port: {result.port}")
    ctx.feedback.info(
        f"Next steps:\n  cd {relative}\n  {workspace.config.package_manager} run dev"
    )
