"""Filesystem helpers shared by the lifecycle engine."""

import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

_SIZE_UNITS = ["B", "KB", "MB", "GB"]


def remove_tree(path: Path) -> None:
    """Delete a directory tree (or a single file) if it exists."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)


def is_empty_dir(path: Path) -> bool:
    """True when `path` is missing, not a directory, or has no entries."""
    if not path.is_dir():
        return True
    return next(path.iterdir(), None) is None


def merge_directories(source: Path, target: Path, *, skip_names: Iterable[str] = ()) -> int:
    """Copy every file from `source` over `target`, recursively.

    Same-path files are overwritten, missing directories are created, and
    files that exist only in `target` are left alone. Files whose name is in
    `skip_names` are never copied, at any depth.

    Returns:
        Number of files copied
    """
    skipped = set(skip_names)
    copied = 0
    target.mkdir(parents=True, exist_ok=True)
    for entry in sorted(source.iterdir()):
        destination = target / entry.name
        if entry.is_dir() and not entry.is_symlink():
            copied += merge_directories(entry, destination, skip_names=skipped)
            continue
        if entry.name in skipped:
            continue
        if destination.is_dir() and not destination.is_symlink():
            shutil.rmtree(destination)
        shutil.copy2(entry, destination, follow_symlinks=False)
        copied += 1
    return copied


def directory_size(path: Path) -> int:
    """Sum the byte size of every regular file beneath `path`."""
    if not path.exists():
        return 0
    total = 0
    for root, _dirs, files in os.walk(path):
        for name in files:
            file_path = Path(root) / name
            if file_path.is_symlink():
                continue
            total += file_path.stat().st_size
    return total


def format_size(size: int) -> str:
    """Render a byte count in a human-scaled unit, e.g. "12.3 KB"."""
    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.1f} {_SIZE_UNITS[unit_index]}"


def atomic_write_text(path: Path, content: str) -> None:
    """Replace `path` with `content` in one rename.

    Readers see either the old file or the new one, never a partial write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
