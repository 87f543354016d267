"""On-disk store of journal documents."""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Iterable, List, Optional

from loguru import logger

from smol.journal.exceptions import DocumentWriteError, StoreUnavailableError

JOURNAL_EXT = "md"
COMMENT_MARKER = "#"
REMOVED_MARKER = " "
DELETED_HEADER = f"{COMMENT_MARKER} Deleted"
TIMESTAMP_FORMAT = "%Y-%m-%d_%H:%M:%S"

# Paths on POSIX may not be valid UTF-8; surrogateescape keeps them byte-exact
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment (default: now, UTC) as a sortable journal timestamp."""
    moment = moment or datetime.now(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def ensure_store(directory: Path) -> bool:
    """
    Make sure the journal directory exists.

    Args:
        directory: Journal directory

    Returns:
        True if the directory already existed, False if it was just created
        (in which case there is no history to replay)

    Raises:
        StoreUnavailableError: If the directory cannot be created
    """
    if directory.is_dir():
        return True

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create journal directory {directory}: {e}")
        raise StoreUnavailableError(f"Failed to create journal directory {directory}: {e}") from e

    logger.debug(f"Created journal directory: {directory}")
    return False


def is_journal_document(path: Path) -> bool:
    """True if the file name carries the journal extension."""
    return path.suffix == f".{JOURNAL_EXT}"


def list_documents(directory: Path) -> List[Path]:
    """
    List every journal document below a directory, oldest first.

    File names are timestamps, so sorting by path is chronological.
    Entries that cannot be read while walking are skipped.
    """
    documents = []

    def on_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable journal entry {error.filename}: {error}")

    for current, _, filenames in os.walk(directory, onerror=on_error):
        for name in filenames:
            path = Path(current) / name
            if not is_journal_document(path):
                continue
            try:
                if not path.is_file():
                    continue
            except OSError as e:
                on_error(e)
                continue
            documents.append(path)

    return sorted(documents, key=str)


def document_path(directory: Path, timestamp: str) -> Path:
    """Pick an unused document path for a timestamp.

    A second document in the same second gets a zero-padded suffix. The
    suffixed name still sorts after the plain one.
    """
    path = directory / f"{timestamp}.{JOURNAL_EXT}"
    counter = 0
    while path.exists():
        counter += 1
        path = directory / f"{timestamp}_{counter:03d}.{JOURNAL_EXT}"

    if counter:
        logger.warning(f"Journal name for {timestamp} already taken, using {path.name}")
    return path


class JournalWriter:
    """Writes one journal document.

    Lines go to a temporary sibling file which is renamed into place when
    the context exits cleanly. On error the temporary file is removed and
    no document is committed.
    """

    def __init__(self, path: Path):
        self.path = path
        self.temp_path = path.with_suffix(".tmp")
        self._file: Optional[IO[str]] = None

    def __enter__(self) -> "JournalWriter":
        try:
            self._file = self.temp_path.open(
                "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n"
            )
        except OSError as e:
            logger.error(f"Failed to create journal {self.path}: {e}")
            raise DocumentWriteError(f"Failed to create journal {self.path}: {e}") from e
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if self._file is not None:
                self._file.close()
        except OSError as e:
            if exc_type is None:
                self._discard()
                raise DocumentWriteError(f"Failed to write journal {self.path}: {e}") from e
        finally:
            self._file = None

        if exc_type is not None:
            self._discard()
            return False

        try:
            self.temp_path.replace(self.path)
        except OSError as e:
            self._discard()
            logger.error(f"Failed to commit journal {self.path}: {e}")
            raise DocumentWriteError(f"Failed to commit journal {self.path}: {e}") from e
        return False

    def _discard(self) -> None:
        self.temp_path.unlink(missing_ok=True)

    def write_line(self, line: str) -> None:
        if self._file is None:
            raise DocumentWriteError(f"Journal {self.path} is not open for writing")
        try:
            self._file.write(f"{line}\n")
        except OSError as e:
            logger.error(f"Failed to write journal {self.path}: {e}")
            raise DocumentWriteError(f"Failed to write journal {self.path}: {e}") from e

    def write_header(self, timestamp: str, description: str = "") -> None:
        # Keep the header on one line
        description = " ".join(description.splitlines())
        self.write_line(f"{COMMENT_MARKER} ({timestamp}) {description}")

    def write_addition(self, path: str) -> None:
        self.write_line(path)

    def write_removals(self, paths: Iterable[str]) -> None:
        """Write the Deleted section. Nothing is written for no paths."""
        paths = list(paths)
        if not paths:
            return
        self.write_line("")
        self.write_line(DELETED_HEADER)
        for path in paths:
            self.write_line(f"{REMOVED_MARKER}{path}")


def create_document(directory: Path, timestamp: str) -> JournalWriter:
    """Allocate a new document for a timestamp and return its writer.

    Use the writer as a context manager; the document exists only after
    the context exits without error.
    """
    return JournalWriter(document_path(directory, timestamp))
