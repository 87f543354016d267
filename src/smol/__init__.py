"""smol - an append-only journal of the files under a directory."""

__version__ = "0.3.0"
