from abc import ABC, abstractmethod
from pathlib import Path
from typing import Literal

SnapshotStrategy = Literal["degit", "git"]


class SnapshotFetcher(ABC):
    """Fetch the latest snapshot of a remote source into a directory."""

    @abstractmethod
    def fetch(self, locator: str, destination: Path) -> SnapshotStrategy:
        """Populate `destination` with the current tree of `locator`.

        `destination` must not exist beforehand. On failure nothing is left
        at `destination`.

        Returns:
            The strategy that succeeded

        Raises:
            SnapshotFetchError: If every strategy fails
        """
        ...
