"""`edutech init`: scaffold a new workspace."""

import click

from edutech.cli.core import portal_error_boundary, report_portal_error
from edutech.core.context import PortalContext
from edutech.core.errors import PortalError
from edutech.core.lifecycle import add_portal
from edutech.core.workspace_config import DEFAULT_REGISTRY_URL, REGISTRY_URL_ENV
from edutech.core.workspace_init import init_workspace


@click.command("init")
@click.argument("institution")
@click.argument("first_portal", required=False)
@click.option(
    "--registry-url",
    envvar=REGISTRY_URL_ENV,
    default=DEFAULT_REGISTRY_URL,
    show_default=True,
    help="Portal registry document to record in the workspace configuration.",
)
@click.pass_obj
@portal_error_boundary
def init_cmd(
    ctx: PortalContext, institution: str, first_portal: str | None, registry_url: str
) -> None:
    """Create INSTITUTION-workspace in the current directory.

    With FIRST_PORTAL, the portal is added (default theme) right away.

    Examples:
        edutech init aks academic
        edutech init harvard
    """
    workspace = init_workspace(ctx, institution, parent=ctx.cwd, registry_url=registry_url)

    if first_portal:
        ctx.feedback.info(f"Adding initial portal: {first_portal}")
        try:
            add_portal(ctx.with_workspace(workspace), first_portal)
        except PortalError as e:
            report_portal_error(e)
            ctx.feedback.warning("Initial portal setup skipped due to error")
            ctx.feedback.info(f"You can add it later with: edutech add {first_portal}")

    next_steps = [f"cd {workspace.root.name}"]
    if not first_portal:
        next_steps.append("edutech list --available   # View available portals")
        next_steps.append("edutech add <portal>       # Add your first portal")
    ctx.feedback.info("Next steps:\n" + "\n".join(f"  {step}" for step in next_steps))
