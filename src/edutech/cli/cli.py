import logging
import os

import click

from edutech.cli.commands.add import add_cmd
from edutech.cli.commands.init import init_cmd
from edutech.cli.commands.list_cmd import list_cmd
from edutech.cli.commands.remove import remove_cmd
from edutech.cli.commands.update import update_cmd
from edutech.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# Enable debug logging if EDUTECH_DEBUG environment variable is set
if os.getenv("EDUTECH_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="edutech-portals")
@click.option("--quiet", "-q", is_flag=True, help="Only show warnings and errors.")
@click.pass_context
def cli(ctx: click.Context, quiet: bool) -> None:
    """Add, update, remove and list the portals of an edutech workspace."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(quiet=quiet)


cli.add_command(add_cmd)
cli.add_command(init_cmd)
cli.add_command(list_cmd)
cli.add_command(remove_cmd)
cli.add_command(update_cmd)


def main() -> None:
    """CLI entry point used by the `edutech` console script."""
    cli()
