"""CLI commands for smol."""

from . import history, journal, status

__all__ = ["history", "journal", "status"]
