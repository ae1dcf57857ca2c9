from pathlib import Path

from edutech.core.package_manager.abc import PackageManager
from edutech.core.subprocess import run_external_tool


class RealPackageManager(PackageManager):
    """Runs `<executable> install` with output streamed to the terminal."""

    def __init__(self, executable: str = "pnpm") -> None:
        self._executable = executable

    @property
    def executable(self) -> str:
        return self._executable

    def install(self, workspace_root: Path) -> None:
        run_external_tool(
            [self._executable, "install"],
            operation_context="install workspace dependencies",
            cwd=workspace_root,
            capture_output=False,
        )
