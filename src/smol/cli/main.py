"""Main CLI entry point for smol."""  # pragma: no cover

from smol.cli.app import app  # pragma: no cover

# Register commands
from smol.cli.commands import history, journal, status  # pragma: no cover

__all__ = ["history", "journal", "status"]  # pragma: no cover


if __name__ == "__main__":  # pragma: no cover
    app()
