"""Status command for smol CLI."""

import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.tree import Tree

from smol.cli.app import app
from smol.config import get_config
from smol.journal import JournalDiffer, JournalReport
from smol.journal.snapshot import snapshot_root

# Create rich console
console = Console()


def relative_to_root(path: str, root: str) -> str:
    """Display path relative to the scanned root."""
    try:
        return os.path.relpath(path, root)
    except ValueError:
        # different drive on Windows
        return path


def group_by_directory(paths: Iterable[str], root: str) -> Dict[str, List[str]]:
    """Group paths by their parent directory, relative to the root."""
    by_dir: Dict[str, List[str]] = {}
    for path in sorted(paths):
        rel = relative_to_root(path, root)
        dir_name, file_name = os.path.split(rel)
        by_dir.setdefault(dir_name, []).append(file_name)
    return by_dir


def add_files_to_tree(tree: Tree, paths: Iterable[str], root: str, style: str) -> None:
    """Add files to tree, grouped by directory."""
    for dir_name, files in sorted(group_by_directory(paths, root).items()):
        if dir_name:
            branch = tree.add(f"[bold]{escape(dir_name)}/[/bold]")
        else:
            branch = tree

        for file_name in files:
            branch.add(f"[{style}]{escape(file_name)}[/{style}]")


def display_changes(title: str, changes: JournalReport, root: str, verbose: bool = False) -> None:
    """Display pending changes as a tree."""
    tree = Tree(title)

    if changes.total_changes == 0:
        tree.add("No changes")
        console.print(Panel(tree, expand=False))
        return

    if not verbose:
        # Per directory counts
        counts: Dict[str, Dict[str, int]] = {}
        for change_type, paths in [("added", changes.added), ("removed", changes.removed)]:
            for dir_name, files in group_by_directory(paths, root).items():
                counts.setdefault(dir_name or ".", {"added": 0, "removed": 0})
                counts[dir_name or "."][change_type] += len(files)

        for dir_name, dir_counts in sorted(counts.items()):
            summary_parts = []
            if dir_counts["added"]:
                summary_parts.append(f"[green]+{dir_counts['added']} added[/green]")
            if dir_counts["removed"]:
                summary_parts.append(f"[red]-{dir_counts['removed']} removed[/red]")
            tree.add(f"[bold]{escape(dir_name)}/[/bold] {' '.join(summary_parts)}")

    else:
        summary = []
        if changes.added:
            summary.append(f"[green]{len(changes.added)} added[/green]")
        if changes.removed:
            summary.append(f"[red]{len(changes.removed)} removed[/red]")
        tree.add(f"Found {', '.join(summary)}")

        if changes.added:
            added_branch = tree.add("[green]Added[/green]")
            add_files_to_tree(added_branch, changes.added, root, "green")

        if changes.removed:
            removed_branch = tree.add("[red]Removed[/red]")
            add_files_to_tree(removed_branch, changes.removed, root, "red")

    console.print(Panel(tree, expand=False))


@app.command()
def status(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory holding the journals."
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Root directory to scan for files."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every changed file."),
) -> None:
    """Show changes since the last journal without recording them."""
    try:
        config = get_config(journal_dir=output, root=root)
        changes = JournalDiffer(config.journal_dir, config.root).status()
    except Exception as e:
        logger.error(f"Error checking status: {e}")
        typer.echo(f"Error checking status: {e}", err=True)
        raise typer.Exit(1)

    display_changes(escape(str(config.root)), changes, snapshot_root(config.root), verbose)
