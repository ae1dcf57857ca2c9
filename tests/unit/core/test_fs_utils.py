"""Tests for filesystem helpers."""

from pathlib import Path

import pytest

from edutech.core.fs_utils import (
    atomic_write_text,
    directory_size,
    format_size,
    is_empty_dir,
    merge_directories,
    remove_tree,
)


def _write(root: Path, relative: str, content: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_merge_overwrites_adds_and_never_deletes(tmp_path: Path) -> None:
    """Files only in the target survive a merge; shared paths take the source content."""
    source = tmp_path / "source"
    target = tmp_path / "target"
    _write(source, "a.txt", "new a")
    _write(source, "nested/b.txt", "new b")
    _write(target, "a.txt", "old a")
    _write(target, "local.txt", "mine")
    _write(target, "nested/kept.txt", "kept")

    copied = merge_directories(source, target)

    assert copied == 2
    assert (target / "a.txt").read_text(encoding="utf-8") == "new a"
    assert (target / "nested" / "b.txt").read_text(encoding="utf-8") == "new b"
    assert (target / "local.txt").read_text(encoding="utf-8") == "mine"
    assert (target / "nested" / "kept.txt").read_text(encoding="utf-8") == "kept"


def test_merge_skips_named_files_at_any_depth(tmp_path: Path) -> None:
    source = tmp_path / "source"
    target = tmp_path / "target"
    _write(source, ".portal-config.json", "{}")
    _write(source, "nested/.portal-config.json", "{}")
    _write(source, "index.js", "x")
    _write(target, ".portal-config.json", '{"keep": true}')

    copied = merge_directories(source, target, skip_names={".portal-config.json"})

    assert copied == 1
    assert (target / ".portal-config.json").read_text(encoding="utf-8") == '{"keep": true}'
    assert not (target / "nested" / ".portal-config.json").exists()


def test_merge_replaces_directory_with_file(tmp_path: Path) -> None:
    source = tmp_path / "source"
    target = tmp_path / "target"
    _write(source, "thing", "now a file")
    _write(target, "thing/inner.txt", "was a dir")

    merge_directories(source, target)

    assert (target / "thing").is_file()


def test_is_empty_dir(tmp_path: Path) -> None:
    assert is_empty_dir(tmp_path / "missing")
    assert is_empty_dir(tmp_path)
    _write(tmp_path, "file.txt", "x")
    assert not is_empty_dir(tmp_path)


def test_remove_tree_handles_dirs_files_and_missing(tmp_path: Path) -> None:
    _write(tmp_path, "dir/file.txt", "x")
    _write(tmp_path, "single.txt", "x")

    remove_tree(tmp_path / "dir")
    remove_tree(tmp_path / "single.txt")
    remove_tree(tmp_path / "never-existed")

    assert not (tmp_path / "dir").exists()
    assert not (tmp_path / "single.txt").exists()


def test_directory_size_counts_nested_files(tmp_path: Path) -> None:
    _write(tmp_path, "a.txt", "12345")
    _write(tmp_path, "deep/b.txt", "123")

    assert directory_size(tmp_path) == 8
    assert directory_size(tmp_path / "missing") == 0


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0.0 B"),
        (512, "512.0 B"),
        (1024, "1.0 KB"),
        (12_595, "12.3 KB"),
        (5 * 1024 * 1024, "5.0 MB"),
        (3 * 1024**3, "3.0 GB"),
        (2048 * 1024**3, "2048.0 GB"),
    ],
)
def test_format_size(size: int, expected: str) -> None:
    assert format_size(size) == expected


def test_atomic_write_text_replaces_content_and_leaves_no_temp(tmp_path: Path) -> None:
    target = tmp_path / "cache" / "registry.json"

    atomic_write_text(target, "first")
    atomic_write_text(target, "second")

    assert target.read_text(encoding="utf-8") == "second"
    assert [p.name for p in target.parent.iterdir()] == ["registry.json"]
