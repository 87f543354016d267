from .differ import JournalDiffer, JournalReport, compute_delta
from .exceptions import DocumentWriteError, JournalError, ReplayError, StoreUnavailableError
from .replay import reconstruct
from .snapshot import FileSnapshotter, ScanResult

__all__ = [
    "JournalDiffer",
    "JournalReport",
    "compute_delta",
    "reconstruct",
    "FileSnapshotter",
    "ScanResult",
    "JournalError",
    "StoreUnavailableError",
    "ReplayError",
    "DocumentWriteError",
]
