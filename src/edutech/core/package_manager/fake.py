from pathlib import Path

from edutech.core.package_manager.abc import PackageManager


class FakePackageManager(PackageManager):
    """Records install() calls; fails with `install_error` when given."""

    def __init__(self, *, install_error: str | None = None) -> None:
        self._install_error = install_error
        self._install_calls: list[Path] = []

    @property
    def install_calls(self) -> list[Path]:
        return list(self._install_calls)

    def install(self, workspace_root: Path) -> None:
        self._install_calls.append(workspace_root)
        if self._install_error is not None:
            raise RuntimeError(self._install_error)
