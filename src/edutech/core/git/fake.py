"""Fake Git implementation for testing."""

from pathlib import Path

from edutech.core.git.abc import Git


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    Constructor Injection:
    - work_trees: roots of simulated repositories; any path beneath one is
      "inside a work tree"
    - dirty_paths: paths reported as having uncommitted changes
    - clone_sources: url -> {relative path: content} written on clone_shallow();
      unknown urls fail like a real clone would

    Examples:
        >>> git = FakeGit(work_trees={Path("/ws")}, dirty_paths={Path("/ws/portals/cbt")})
        >>> git.has_uncommitted_changes(Path("/ws/portals/cbt"))
        True
    """

    def __init__(
        self,
        *,
        work_trees: set[Path] | None = None,
        dirty_paths: set[Path] | None = None,
        clone_sources: dict[str, dict[str, str]] | None = None,
        init_fails: bool = False,
    ) -> None:
        self._work_trees = work_trees or set()
        self._dirty_paths = dirty_paths or set()
        self._clone_sources = clone_sources or {}
        self._init_fails = init_fails
        self._cloned: list[tuple[str, Path]] = []
        self._initialized: list[Path] = []

    @property
    def cloned(self) -> list[tuple[str, Path]]:
        """(url, destination) pairs passed to clone_shallow(). For test assertions only."""
        return list(self._cloned)

    @property
    def initialized(self) -> list[Path]:
        return list(self._initialized)

    def is_inside_work_tree(self, path: Path) -> bool:
        return any(path == root or path.is_relative_to(root) for root in self._work_trees)

    def has_uncommitted_changes(self, path: Path) -> bool:
        return path in self._dirty_paths

    def clone_shallow(self, url: str, destination: Path) -> None:
        self._cloned.append((url, destination))
        if url not in self._clone_sources:
            raise RuntimeError(f"Failed to clone {url}\nfatal: repository not found")
        destination.mkdir(parents=True)
        (destination / ".git").mkdir()
        (destination / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
        for relative, content in self._clone_sources[url].items():
            target = destination / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")

    def init_repository(self, path: Path) -> None:
        if self._init_fails:
            raise RuntimeError(f"Failed to initialize git repository in {path}")
        self._initialized.append(path)
