"""Tests for rebuilding the known file set from journals."""

import random
from pathlib import Path

import pytest

from smol.journal.exceptions import ReplayError
from smol.journal.replay import (
    ADDED,
    REMOVED,
    apply_lines,
    parse_line,
    read_lines,
    reconstruct,
    replay_documents,
    summarize_document,
)


def write_journal(path: Path, *lines: str) -> Path:
    """Write a journal document made of the given lines."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{line}\n" for line in lines))
    return path


def test_parse_line():
    assert parse_line("") is None
    assert parse_line("# (2024-01-01_00:00:00) hello") is None
    assert parse_line("# Deleted") is None
    assert parse_line("/home/a.txt") == (ADDED, "/home/a.txt")
    assert parse_line(" /home/a.txt") == (REMOVED, "/home/a.txt")


def test_marker_only_line_is_empty_path():
    """A bare marker is tolerated and removes the empty path."""
    assert parse_line(" ") == (REMOVED, "")
    assert apply_lines({"", "/a"}, [" "]) == {"/a"}


def test_removal_of_absent_path_is_noop():
    files = {"/a", "/b"}
    assert apply_lines(files, [" /zzz"]) == {"/a", "/b"}


def test_later_entries_win():
    files = apply_lines(set(), ["/a", " /a", "/b", " /b", "/b"])
    assert files == {"/b"}


def test_fold_matches_plain_set_operations():
    """Replaying random add/remove lines equals applying them to a set."""
    rng = random.Random(1234)
    paths = [f"/data/file{i}" for i in range(8)]
    lines = []
    expected = set()
    for _ in range(300):
        path = rng.choice(paths)
        if rng.random() < 0.5:
            lines.append(path)
            expected.add(path)
        else:
            lines.append(f" {path}")
            expected.discard(path)

    assert apply_lines(set(), lines) == expected


def test_read_lines_strips_terminators(tmp_path: Path):
    path = tmp_path / "doc.md"
    path.write_bytes(b"# (t) x\r\n/a\n/b")
    assert list(read_lines(path)) == ["# (t) x", "/a", "/b"]


def test_read_lines_keeps_undecodable_names(tmp_path: Path):
    """Non UTF-8 bytes survive replay as surrogate escapes."""
    path = tmp_path / "doc.md"
    path.write_bytes(b"/data/caf\xe9\n")
    name = b"/data/caf\xe9".decode("utf-8", "surrogateescape")
    assert list(read_lines(path)) == [name]


def test_read_missing_document_fails(tmp_path: Path):
    with pytest.raises(ReplayError):
        list(read_lines(tmp_path / "missing.md"))


def test_replay_aborts_on_unreadable_document(tmp_path: Path):
    good = write_journal(tmp_path / "2024-01-01_00:00:00.md", "# (t)", "/a")
    with pytest.raises(ReplayError):
        replay_documents([good, tmp_path / "2024-01-02_00:00:00.md"])


def test_reconstruct_missing_store(tmp_path: Path):
    assert reconstruct(tmp_path / "nonexistent") == set()


def test_reconstruct_replays_in_chronological_order(tmp_path: Path):
    """Later removal overrides earlier addition, later addition revives."""
    write_journal(tmp_path / "2024-01-01_00:00:00.md", "# (2024-01-01_00:00:00) ", "/a", "/b")
    write_journal(
        tmp_path / "2024-01-02_00:00:00.md",
        "# (2024-01-02_00:00:00) ",
        "/c",
        "",
        "# Deleted",
        " /a",
    )
    write_journal(tmp_path / "2024-01-03_00:00:00.md", "# (2024-01-03_00:00:00) ", "/a")
    (tmp_path / "notes.txt").write_text("/ignored\n")

    assert reconstruct(tmp_path) == {"/a", "/b", "/c"}


def test_reconstruct_removal_in_later_document(tmp_path: Path):
    """A path added once and removed later stays gone."""
    write_journal(tmp_path / "2024-01-01_00:00:00.md", "# (t) ", "/a")
    write_journal(tmp_path / "2024-01-02_00:00:00.md", "# (t) ", "", "# Deleted", " /a")

    assert "/a" not in reconstruct(tmp_path)


def test_reconstruct_is_idempotent(tmp_path: Path):
    write_journal(tmp_path / "2024-01-01_00:00:00.md", "# (t) ", "/a", "/b")
    write_journal(tmp_path / "2024-01-02_00:00:00.md", "# (t) ", "/c", "", "# Deleted", " /b")

    assert reconstruct(tmp_path) == reconstruct(tmp_path) == {"/a", "/c"}


def test_summarize_document(tmp_path: Path):
    path = write_journal(
        tmp_path / "2024-01-02_00:00:00.md",
        "# (2024-01-02_00:00:00) after cleanup",
        "/c",
        "/d",
        "",
        "# Deleted",
        " /a",
    )

    summary = summarize_document(path)

    assert summary.timestamp == "2024-01-02_00:00:00"
    assert summary.description == "after cleanup"
    assert summary.added == 2
    assert summary.removed == 1
