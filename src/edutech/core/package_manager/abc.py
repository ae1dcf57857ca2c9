from abc import ABC, abstractmethod
from pathlib import Path


class PackageManager(ABC):
    """Installs dependencies for the whole workspace."""

    @abstractmethod
    def install(self, workspace_root: Path) -> None:
        """Run a workspace-wide dependency install.

        Raises:
            RuntimeError: If the install command fails
        """
        ...
