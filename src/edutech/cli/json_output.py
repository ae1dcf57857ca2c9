"""JSON output utilities for CLI commands with machine-parseable output."""

import json
from typing import Any

from edutech.cli.output import machine_output


def emit_json(data: dict[str, Any]) -> None:
    """Write `data` as indented JSON to stdout.

    Callers pass plain JSON values; dump pydantic models with
    `model_dump(mode="json")` first. Human-readable messages stay on stderr,
    so the stdout stream can be piped straight into another tool.
    """
    machine_output(json.dumps(data, indent=2))
