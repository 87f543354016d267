"""Exceptions raised by the journal core."""


class JournalError(Exception):
    """Base exception for journal operations."""

    pass


class StoreUnavailableError(JournalError):
    """Raised when the journal directory cannot be created."""

    pass


class ReplayError(JournalError):
    """Raised when a journal document cannot be read during replay."""

    pass


class DocumentWriteError(JournalError):
    """Raised when a new journal document cannot be written."""

    pass
