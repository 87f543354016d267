"""Rebuild the known file set by replaying journal documents."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Set, Tuple

from loguru import logger

from smol.journal.exceptions import ReplayError
from smol.journal.store import (
    COMMENT_MARKER,
    ENCODING,
    ENCODING_ERRORS,
    REMOVED_MARKER,
    list_documents,
)

ADDED = "added"
REMOVED = "removed"

HEADER_PATTERN = re.compile(r"^# \((?P<timestamp>[^)]*)\) ?(?P<description>.*)$")


def parse_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Classify one journal line.

    Args:
        line: Line without its line terminator

    Returns:
        (ADDED, path) or (REMOVED, path), or None for blank and comment lines
    """
    if not line:
        return None
    first = line[0]
    if first == COMMENT_MARKER:
        return None
    if first == REMOVED_MARKER:
        return REMOVED, line[1:]
    return ADDED, line


def read_lines(path: Path) -> Iterator[str]:
    """Yield the lines of a document without terminators.

    Raises:
        ReplayError: If the document cannot be opened or read
    """
    try:
        with path.open("r", encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
            for line in f:
                if line.endswith("\n"):
                    line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
                yield line
    except OSError as e:
        logger.error(f"Failed to read journal {path}: {e}")
        raise ReplayError(f"Failed to read journal {path}: {e}") from e


def apply_lines(files: Set[str], lines: Iterable[str]) -> Set[str]:
    """Fold journal lines into a file set, in order. Mutates and returns files."""
    for line in lines:
        entry = parse_line(line)
        if entry is None:
            continue
        kind, path = entry
        if kind == REMOVED:
            files.discard(path)
        else:
            files.add(path)
    return files


def replay_documents(documents: Iterable[Path]) -> Set[str]:
    """Fold the given documents, in the given order, into a new file set."""
    files: Set[str] = set()
    for document in documents:
        logger.debug(f"Replaying journal: {document}")
        apply_lines(files, read_lines(document))
    return files


def reconstruct(directory: Path) -> Set[str]:
    """
    Rebuild the known file set from every journal in a directory.

    A missing directory is empty history. Any unreadable document aborts
    the whole replay, since a partial history is not trustworthy.

    Args:
        directory: Journal directory

    Returns:
        Set of known file paths

    Raises:
        ReplayError: If a document cannot be read
    """
    if not directory.is_dir():
        logger.debug(f"Journal directory does not exist: {directory}")
        return set()

    documents = list_documents(directory)
    files = replay_documents(documents)
    logger.debug(f"Replayed {len(documents)} journals into {len(files)} known files")
    return files


@dataclass
class DocumentSummary:
    """Header and entry counts of one journal document."""

    path: Path
    timestamp: str
    description: str
    added: int = 0
    removed: int = 0


def summarize_document(path: Path) -> DocumentSummary:
    """Read a document's header and count its entries."""
    timestamp = ""
    description = ""
    added = removed = 0

    for index, line in enumerate(read_lines(path)):
        if index == 0:
            match = HEADER_PATTERN.match(line)
            if match:
                timestamp = match.group("timestamp")
                description = match.group("description")
                continue
        entry = parse_line(line)
        if entry is None:
            continue
        if entry[0] == REMOVED:
            removed += 1
        else:
            added += 1

    return DocumentSummary(
        path=path, timestamp=timestamp, description=description, added=added, removed=removed
    )
