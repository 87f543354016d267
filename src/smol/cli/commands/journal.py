"""Command that records a new journal."""

from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.filesize import decimal
from rich.markup import escape

from smol.classify import FileTypeStats
from smol.cli.app import app
from smol.config import get_config
from smol.journal import JournalDiffer, JournalReport

console = Console(highlight=False)


def label(text: str) -> str:
    """Right aligned magenta label, cargo style."""
    return f"[magenta]{text:>12}[/magenta]"


def format_elapsed(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.2f}s"


def display_file_types(stats: FileTypeStats) -> None:
    """Display reclaimable space estimates."""
    console.print(
        f"{label('Stats')} Compressible files: {stats.compressible_files} "
        f"(lossless: {decimal(stats.lossless_bytes)}, lossy: {decimal(stats.lossy_bytes)})"
    )
    console.print(
        f"{label('Stats')} Useless files: {stats.useless_files} ({decimal(stats.useless_bytes)})"
    )


def display_journal_report(report: JournalReport, stats: bool = False) -> None:
    """Display the outcome of a journal run."""
    path = str(report.journal_path)
    console.print(
        f"{label('Finished')} Journal done in {format_elapsed(report.elapsed)} "
        f"[dim]([link=file://{escape(path)}]{escape(path)}[/link])[/dim]"
    )

    if stats:
        console.print(f"{label('Stats')} {len(report.added)} files added")
        console.print(f"{label('Stats')} {len(report.removed)} files removed")

    if report.file_types is not None:
        display_file_types(report.file_types)

    if report.errors:
        console.print(f"{label('Skipped')} [yellow]{len(report.errors)} unreadable entries[/yellow]")


@app.command()
def journal(
    description: str = typer.Argument("", help="Description of the new journal entry."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory for the journals."
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Root directory to scan for files."
    ),
    full: bool = typer.Option(
        False, "--full", "-f", help="Estimate reclaimable space by file type."
    ),
    stats: bool = typer.Option(False, "--stats", "-s", help="Give added/removed counts."),
) -> None:
    """Record which files were added and removed since the last journal."""
    try:
        config = get_config(journal_dir=output, root=root)
        differ = JournalDiffer(config.journal_dir, config.root)
        report = differ.record(description, file_types=FileTypeStats() if full else None)

    except Exception as e:
        if not isinstance(e, typer.Exit):
            logger.exception("Journal failed")
            typer.echo(f"Error writing journal: {e}", err=True)
            raise typer.Exit(1)
        raise

    display_journal_report(report, stats=stats)
