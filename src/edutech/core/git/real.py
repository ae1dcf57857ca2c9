"""Production Git implementation using subprocess."""

import subprocess
from pathlib import Path

from edutech.core.git.abc import Git
from edutech.core.subprocess import run_external_tool


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def is_inside_work_tree(self, path: Path) -> bool:
        if not path.is_dir():
            return False
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--is-inside-work-tree"],
                cwd=path,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            # git not installed: nothing can be a checkout
            return False
        return result.returncode == 0 and result.stdout.strip() == "true"

    def has_uncommitted_changes(self, path: Path) -> bool:
        result = subprocess.run(
            ["git", "status", "--porcelain", "--", "."],
            cwd=path,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return False
        return bool(result.stdout.strip())

    def clone_shallow(self, url: str, destination: Path) -> None:
        run_external_tool(
            ["git", "clone", "--depth", "1", url, str(destination)],
            operation_context=f"clone {url}",
        )

    def init_repository(self, path: Path) -> None:
        run_external_tool(
            ["git", "init"],
            operation_context=f"initialize git repository in {path}",
            cwd=path,
        )
