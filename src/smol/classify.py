"""Extension based estimates of reclaimable disk space."""

import os
from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from loguru import logger

# extension -> (lossless ratio, lossy ratio)
COMPRESSIBLE_RATIOS: Dict[str, Tuple[float, float]] = {
    "mp3": (0.1, 0.5),
    **{ext: (0.4, 0.7) for ext in ("jpeg", "jpg", "webp", "png", "gif", "svg")},
    **{ext: (0.4, 0.7) for ext in ("mp4", "av1", "webm")},
    **{ext: (0.4, 0.7) for ext in ("pdf", "docx", "xlsx", "pptx")},
}

USELESS_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        "tmp",
        "temp",
        "deb",
        "old",
        "~",
        "log",
        "dmp",
        "crdownload",
        "part",
        "download",
        "opdownload",
        "pyc",
        "pyo",
        "o",
        "so",
    }
)


def file_extension(path: str) -> str:
    """Extension without the dot, or "" when there is none.

    Dotfiles such as ``.bashrc`` have no extension.
    """
    name = os.path.basename(path)
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext


def file_size(path: str) -> int:
    try:
        return os.stat(path).st_size
    except OSError as e:
        logger.debug(f"Cannot stat {path}: {e}")
        return 0


@dataclass
class FileTypeStats:
    """Accumulated counts and byte estimates per file-type category.

    Attributes:
        compressible_files: Files that could be recompressed
        lossless_bytes: Estimated bytes saved by lossless recompression
        lossy_bytes: Estimated bytes saved by lossy recompression
        useless_files: Temporary, cache and build leftovers
        useless_bytes: Total size of the useless files
    """

    compressible_files: int = 0
    lossless_bytes: int = 0
    lossy_bytes: int = 0
    useless_files: int = 0
    useless_bytes: int = 0

    def record(self, path: str) -> None:
        """Classify one file and add it to the totals."""
        ext = file_extension(path)
        if not ext:
            return

        ratios = COMPRESSIBLE_RATIOS.get(ext)
        if ratios is not None:
            lossless, lossy = ratios
            size = file_size(path)
            self.compressible_files += 1
            self.lossless_bytes += int(size * lossless)
            self.lossy_bytes += int(size * lossy)
        elif ext in USELESS_EXTENSIONS:
            self.useless_files += 1
            self.useless_bytes += file_size(path)
