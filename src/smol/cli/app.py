from typing import Optional

import typer

from smol.config import get_config
from smol.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import smol

        typer.echo(f"smol version: {smol.__version__}")
        raise typer.Exit()


app = typer.Typer(name="smol", help="smol, your disk buddy: a journal of the files you keep.")


@app.callback()
def app_callback(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr output.",
        envvar="SMOL_LOG_LEVEL",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """smol - track which files come and go, one journal per run."""

    if not version and ctx.invoked_subcommand is not None:
        config = get_config(log_level=log_level)
        setup_logging(log_level=config.log_level, log_file=config.log_file)
