"""Production snapshot fetcher: degit first, shallow git clone as fallback."""

import logging
import shutil
import tempfile
from pathlib import Path

from edutech.core.errors import SnapshotFetchError
from edutech.core.fs_utils import remove_tree
from edutech.core.git.abc import Git
from edutech.core.snapshot.abc import SnapshotFetcher, SnapshotStrategy
from edutech.core.subprocess import run_external_tool

logger = logging.getLogger(__name__)


class RealSnapshotFetcher(SnapshotFetcher):
    """Fetch snapshots with `npx degit`, falling back to `git clone --depth 1`.

    The fallback clones into a scratch directory, strips `.git`, and moves the
    tree into place so the result is history-less either way.
    """

    def __init__(self, git: Git, *, npx: str = "npx") -> None:
        self._git = git
        self._npx = npx

    def fetch(self, locator: str, destination: Path) -> SnapshotStrategy:
        try:
            run_external_tool(
                [self._npx, "--yes", "degit", locator, str(destination)],
                operation_context=f"fetch {locator} with degit",
            )
            return "degit"
        except RuntimeError as degit_error:
            logger.debug("degit failed for %s: %s", locator, degit_error)
            remove_tree(destination)

        scratch = Path(tempfile.mkdtemp(prefix=f"temp-clone-{destination.name}-"))
        clone_dir = scratch / "clone"
        try:
            self._git.clone_shallow(locator, clone_dir)
            remove_tree(clone_dir / ".git")
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(clone_dir), str(destination))
        except (RuntimeError, OSError) as clone_error:
            remove_tree(destination)
            raise SnapshotFetchError(locator, str(clone_error)) from clone_error
        finally:
            shutil.rmtree(scratch, ignore_errors=True)
        return "git"
