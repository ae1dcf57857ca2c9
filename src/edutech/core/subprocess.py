"""Running the external tools a workspace depends on.

git, `npx degit` and the package manager all go through run_external_tool.
A failure becomes one RuntimeError that names what was being attempted, so
callers can fall back to another strategy or wrap it in a PortalError.
"""

import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

# Lines of tool output kept in an error message
OUTPUT_TAIL_LINES = 20


def _output_tail(output: str | None) -> str:
    if not output:
        return ""
    lines = [line for line in output.splitlines() if line.strip()]
    return "\n".join(lines[-OUTPUT_TAIL_LINES:])


def run_external_tool(
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    capture_output: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run `cmd` and raise RuntimeError if it is missing or exits non-zero.

    `operation_context` completes the phrase "Failed to ...", for example
    "clone https://github.com/org/cbt". With `capture_output` off the tool
    writes its progress straight to the terminal, which is how
    `pnpm install` runs.

    Raises:
        RuntimeError: With the command line, exit code and the tail of
            stderr (or stdout when stderr is empty)
    """
    try:
        return subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=capture_output,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
    except FileNotFoundError as e:
        raise RuntimeError(
            f"Cannot {operation_context}: {cmd[0]} is not installed or not on PATH"
        ) from e
    except subprocess.CalledProcessError as e:
        lines = [
            f"Failed to {operation_context} (exit code {e.returncode})",
            f"Command: {shlex.join(cmd)}",
        ]
        stderr = _output_tail(e.stderr)
        stdout = _output_tail(e.stdout)
        if stderr:
            lines.append(f"stderr: {stderr}")
        elif stdout:
            lines.append(f"stdout: {stdout}")
        raise RuntimeError("\n".join(lines)) from e
