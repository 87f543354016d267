"""Walk a directory tree and collect the files that exist right now."""

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from loguru import logger


@dataclass
class ScanResult:
    """Result of walking a root directory."""

    # absolute paths of regular files, in walk order
    files: List[str] = field(default_factory=list)
    # path -> error message for entries that were skipped
    errors: Dict[str, str] = field(default_factory=dict)


def snapshot_root(root: Path) -> str:
    """Absolute display form of the root, without resolving symlinks."""
    return os.path.abspath(os.fspath(root))


class FileSnapshotter:
    """
    Produces the live snapshot of a root directory.

    Only regular files are reported; directories, symlinks and special
    files are left out and symlinked directories are not followed.
    Directory entries are visited in sorted order, so the same tree
    always yields the same sequence.
    """

    def __init__(self, root: Path):
        self.root = snapshot_root(root)

    def iter_files(self, errors: Optional[Dict[str, str]] = None) -> Iterator[str]:
        """
        Yield the path of every regular file below the root.

        Entries that fail with an OSError are skipped. When an errors
        dict is given, the failure is recorded there.
        """
        errors = errors if errors is not None else {}
        if not os.path.isdir(self.root):
            logger.debug(f"Directory does not exist: {self.root}")
            return

        def on_error(error: OSError) -> None:
            path = error.filename or self.root
            errors[str(path)] = str(error)
            logger.debug(f"Skipping {path}: {error}")

        for current, dirnames, filenames in os.walk(self.root, onerror=on_error):
            # in-place sort fixes the descent order as well
            dirnames.sort()
            for name in sorted(filenames):
                path = os.path.join(current, name)
                try:
                    mode = os.lstat(path).st_mode
                except OSError as e:
                    on_error(e)
                    continue
                if stat.S_ISREG(mode):
                    yield path

    def scan(self) -> ScanResult:
        """Walk the whole tree and collect the result."""
        logger.debug(f"Scanning directory: {self.root}")
        result = ScanResult()
        result.files = list(self.iter_files(result.errors))

        logger.debug(f"Found {len(result.files)} files")
        if result.errors:
            logger.warning(f"Encountered {len(result.errors)} errors while scanning")
        return result
