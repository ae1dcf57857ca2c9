"""Output helpers with explicit stream routing.

Human-facing messages go to stderr so stdout stays clean for machine output
such as `edutech list --json`.
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str) -> None:
    """Write machine-readable output to stdout."""
    click.echo(message)
