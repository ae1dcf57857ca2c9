"""Shared plumbing for CLI commands: the PortalError boundary."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from edutech.cli.output import user_output
from edutech.core.errors import PortalError, UnknownPortalError, UnknownThemeError


def report_portal_error(error: PortalError) -> None:
    """Print a PortalError the way every command does: red prefix, then hint."""
    user_output(click.style("Error: ", fg="red") + str(error))

    if isinstance(error, UnknownPortalError) and error.available:
        user_output("\nAvailable portals:")
        for name, themes in error.available.items():
            user_output(f"  - {click.style(name, fg='cyan')}: {', '.join(themes) or 'default'}")
    elif isinstance(error, UnknownThemeError) and error.available:
        user_output(f"\nAvailable themes: {', '.join(error.available)}")

    if error.hint:
        user_output("\n" + error.hint)


def portal_error_boundary(func: Callable) -> Callable:
    """Turn a PortalError escaping a command into styled output and exit code 1."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PortalError as e:
            report_portal_error(e)
            raise SystemExit(1) from e

    return wrapper
