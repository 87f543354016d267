"""History command: list recorded journals."""

from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from smol.cli.app import app
from smol.config import get_config
from smol.journal.replay import DocumentSummary, summarize_document
from smol.journal.store import list_documents

console = Console()


def display_history(summaries: List[DocumentSummary]) -> None:
    """Display journals oldest first."""
    if not summaries:
        console.print("[yellow]No journals recorded yet[/yellow]")
        return

    table = Table(title="Journals")
    table.add_column("Timestamp", style="magenta", no_wrap=True)
    table.add_column("Description")
    table.add_column("Added", justify="right", style="green")
    table.add_column("Removed", justify="right", style="red")

    for summary in summaries:
        table.add_row(
            escape(summary.timestamp or summary.path.stem),
            escape(summary.description),
            str(summary.added),
            str(summary.removed),
        )

    console.print(table)


@app.command()
def history(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory holding the journals."
    ),
) -> None:
    """List recorded journals with their added/removed counts."""
    try:
        config = get_config(journal_dir=output)
        summaries = [summarize_document(path) for path in list_documents(config.journal_dir)]
    except Exception as e:
        logger.error(f"Error reading journals: {e}")
        typer.echo(f"Error reading journals: {e}", err=True)
        raise typer.Exit(1)

    display_history(summaries)
