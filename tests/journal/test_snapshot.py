"""Tests for the filesystem snapshotter."""

import os
from pathlib import Path

import pytest

from smol.journal.snapshot import FileSnapshotter, snapshot_root


def create_test_file(path: Path, content: str = "test content") -> Path:
    """Create a test file with given content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def test_scan_empty_directory(root_dir: Path):
    result = FileSnapshotter(root_dir).scan()
    assert result.files == []
    assert result.errors == {}


def test_scan_missing_directory(tmp_path: Path):
    result = FileSnapshotter(tmp_path / "nonexistent").scan()
    assert result.files == []
    assert result.errors == {}


def test_scan_is_sorted_and_recursive(root_dir: Path):
    create_test_file(root_dir / "b.txt")
    create_test_file(root_dir / "a.txt")
    create_test_file(root_dir / "sub" / "z.txt")
    create_test_file(root_dir / "sub" / "deeper" / "c.txt")
    create_test_file(root_dir / "aaa" / "x.txt")
    (root_dir / "empty").mkdir()

    result = FileSnapshotter(root_dir).scan()

    root = str(root_dir)
    assert result.files == [
        os.path.join(root, "a.txt"),
        os.path.join(root, "b.txt"),
        os.path.join(root, "aaa", "x.txt"),
        os.path.join(root, "sub", "z.txt"),
        os.path.join(root, "sub", "deeper", "c.txt"),
    ]


def test_scan_is_deterministic(root_dir: Path):
    for name in ["q", "w", "e", "r", "t", "y"]:
        create_test_file(root_dir / name / f"{name}.txt")

    snapshotter = FileSnapshotter(root_dir)
    assert snapshotter.scan().files == snapshotter.scan().files


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
def test_symlinks_are_excluded(root_dir: Path, tmp_path: Path):
    target = create_test_file(root_dir / "real.txt")
    outside = tmp_path / "outside"
    create_test_file(outside / "hidden.txt")

    os.symlink(target, root_dir / "link.txt")
    os.symlink(outside, root_dir / "linked_dir")
    os.symlink(root_dir / "missing.txt", root_dir / "broken.txt")

    result = FileSnapshotter(root_dir).scan()

    assert result.files == [str(target)]


def test_paths_are_absolute(root_dir: Path, monkeypatch):
    create_test_file(root_dir / "a.txt")
    monkeypatch.chdir(root_dir.parent)

    result = FileSnapshotter(Path(root_dir.name)).scan()

    assert result.files == [os.path.join(os.path.abspath(root_dir), "a.txt")]


def test_snapshot_root_is_absolute(tmp_path: Path):
    assert snapshot_root(tmp_path / "x" / ".." / "y") == os.path.join(str(tmp_path), "y")


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores permissions"
)
def test_unreadable_directory_is_skipped(root_dir: Path):
    create_test_file(root_dir / "ok.txt")
    locked = root_dir / "locked"
    create_test_file(locked / "secret.txt")
    locked.chmod(0o000)

    try:
        result = FileSnapshotter(root_dir).scan()
    finally:
        locked.chmod(0o755)

    assert result.files == [str(root_dir / "ok.txt")]
    assert str(locked) in result.errors
