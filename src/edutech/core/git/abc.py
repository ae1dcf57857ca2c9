"""High-level git operations interface.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
- FakeGit: In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from pathlib import Path


class Git(ABC):
    """Abstract interface for git operations.

    This interface contains ONLY runtime operations - no test setup methods.
    """

    @abstractmethod
    def is_inside_work_tree(self, path: Path) -> bool:
        """Return True if `path` lies inside a git working tree."""
        ...

    @abstractmethod
    def has_uncommitted_changes(self, path: Path) -> bool:
        """Check whether anything under `path` is modified, staged or untracked.

        Only changes beneath `path` count, so a portal inside a larger
        workspace repository is judged on its own files.
        """
        ...

    @abstractmethod
    def clone_shallow(self, url: str, destination: Path) -> None:
        """Clone `url` into `destination` with a depth of one commit.

        Raises:
            RuntimeError: If the clone fails
        """
        ...

    @abstractmethod
    def init_repository(self, path: Path) -> None:
        """Initialize an empty repository at `path`.

        Raises:
            RuntimeError: If git init fails
        """
        ...
