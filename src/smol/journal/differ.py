"""Diff the known file set against the live snapshot and write the next journal."""

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set

from loguru import logger

from smol.classify import FileTypeStats
from smol.journal.replay import reconstruct
from smol.journal.snapshot import FileSnapshotter
from smol.journal.store import create_document, ensure_store, format_timestamp


@dataclass
class JournalReport:
    """Outcome of one journal run.

    Attributes:
        journal_path: Document that was written (None for a dry run)
        timestamp: Timestamp in the document header
        added: Paths that appeared since the last recorded state
        removed: Paths that disappeared since the last recorded state
        elapsed: Wall time of the run in seconds
        file_types: File-type totals, when classification was requested
        errors: Walk entries that were skipped, path -> message
    """

    journal_path: Optional[Path] = None
    timestamp: str = ""
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    elapsed: float = 0.0
    file_types: Optional[FileTypeStats] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def total_changes(self) -> int:
        return len(self.added) + len(self.removed)


def compute_delta(
    known: Set[str],
    live: Iterable[str],
    file_types: Optional[FileTypeStats] = None,
    on_added: Optional[Callable[[str], None]] = None,
) -> JournalReport:
    """
    Split the live snapshot into additions and removals against known files.

    The known set is copied, never modified.

    Args:
        known: Known file set from replay
        live: Live snapshot paths, in snapshot order
        file_types: Optional accumulator every live path is recorded into
        on_added: Called with each addition as soon as it is found

    Returns:
        JournalReport with added (snapshot order) and removed (sorted) paths
    """
    remaining = set(known)
    report = JournalReport(file_types=file_types)

    for path in live:
        if file_types is not None:
            file_types.record(path)
        if path in remaining:
            remaining.discard(path)
        else:
            if on_added is not None:
                on_added(path)
            report.added.append(path)

    report.removed = sorted(remaining)
    return report


class JournalDiffer:
    """Records the difference between the journal history and a root directory."""

    def __init__(self, journal_dir: Path, root: Path):
        self.journal_dir = journal_dir
        self.root = root
        self.snapshotter = FileSnapshotter(root)

    def status(self, file_types: Optional[FileTypeStats] = None) -> JournalReport:
        """Compute pending changes without writing a journal."""
        started = time.perf_counter()

        known = reconstruct(self.journal_dir)
        scan = self.snapshotter.scan()
        report = compute_delta(known, scan.files, file_types)
        report.errors = scan.errors
        report.elapsed = time.perf_counter() - started
        return report

    def _live_paths(
        self, pending: Path, committed: Path, errors: Dict[str, str]
    ) -> Iterator[str]:
        """Walk the root, reporting the document being written under its final name.

        The store may live below the root; the temporary file only exists
        during the run, the committed document stays.
        """
        pending_path = os.path.abspath(pending)
        committed_path = os.path.abspath(committed)
        for path in self.snapshotter.iter_files(errors):
            yield committed_path if path == pending_path else path

    def record(
        self,
        description: str = "",
        file_types: Optional[FileTypeStats] = None,
        timestamp: Optional[str] = None,
    ) -> JournalReport:
        """
        Write the next journal document.

        Additions are written while the root is walked. Whatever is left
        of the known set afterwards goes to the Deleted section.

        Args:
            description: Free text for the document header
            file_types: Optional accumulator for the file-type pass
            timestamp: Header timestamp, defaults to now

        Returns:
            JournalReport for the new document

        Raises:
            StoreUnavailableError: If the journal directory cannot be created
            ReplayError: If an existing journal cannot be read
            DocumentWriteError: If the new journal cannot be written
        """
        started = time.perf_counter()

        if ensure_store(self.journal_dir):
            known = reconstruct(self.journal_dir)
        else:
            known = set()
        logger.debug(f"Known files: {len(known)}")

        timestamp = timestamp or format_timestamp()
        errors: Dict[str, str] = {}

        writer = create_document(self.journal_dir, timestamp)
        with writer:
            writer.write_header(timestamp, description)
            live = self._live_paths(writer.temp_path, writer.path, errors)
            report = compute_delta(known, live, file_types, on_added=writer.write_addition)
            writer.write_removals(report.removed)

        report.timestamp = timestamp
        report.errors = errors
        report.journal_path = writer.path
        report.elapsed = time.perf_counter() - started

        logger.info(
            f"Journal {writer.path.name}: {len(report.added)} added, {len(report.removed)} removed"
        )
        if report.errors:
            logger.warning(f"Skipped {len(report.errors)} entries while scanning {self.root}")
        return report
