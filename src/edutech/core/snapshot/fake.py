"""Fake SnapshotFetcher writing canned trees."""

from pathlib import Path

from edutech.core.errors import SnapshotFetchError
from edutech.core.snapshot.abc import SnapshotFetcher, SnapshotStrategy


class FakeSnapshotFetcher(SnapshotFetcher):
    """In-memory snapshot source.

    Constructor Injection:
    - sources: locator -> {relative path: file content}; an empty mapping
      yields an empty directory
    - strategy: value returned from successful fetches

    Locators missing from `sources` fail with SnapshotFetchError and leave
    nothing behind, like the real fetcher.
    """

    def __init__(
        self,
        *,
        sources: dict[str, dict[str, str]] | None = None,
        strategy: SnapshotStrategy = "degit",
    ) -> None:
        self._sources = sources or {}
        self._strategy = strategy
        self._fetch_calls: list[tuple[str, Path]] = []

    @property
    def fetch_calls(self) -> list[tuple[str, Path]]:
        """(locator, destination) pairs in call order. For test assertions only."""
        return list(self._fetch_calls)

    def fetch(self, locator: str, destination: Path) -> SnapshotStrategy:
        self._fetch_calls.append((locator, destination))
        if locator not in self._sources:
            raise SnapshotFetchError(locator, "could not find repository")
        destination.mkdir(parents=True)
        for relative, content in self._sources[locator].items():
            target = destination / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return self._strategy
