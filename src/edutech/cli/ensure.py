"""CLI error handling utilities with styled output.

Ensure asserts argument-level invariants inside commands. Failures print a
red "Error:" line to stderr and exit with code 1, matching how PortalError
is reported by the command error boundary.
"""

from typing import TypeVar

import click

from edutech.cli.output import user_output

T = TypeVar("T")


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Provides type narrowing from `T | None` to `T`.

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)
        return value

    @staticmethod
    def at_most_one_flag(flags: dict[str, bool]) -> None:
        """Ensure no more than one of the mutually exclusive flags is set.

        Example:
            >>> Ensure.at_most_one_flag({"--installed": installed, "--available": available})
        """
        chosen = [name for name, value in flags.items() if value]
        if len(chosen) > 1:
            user_output(
                click.style("Error: ", fg="red")
                + f"Options {' and '.join(chosen)} cannot be used together"
            )
            raise SystemExit(1)
