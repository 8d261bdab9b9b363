"""
Root Typer application for the coin-spine CLI.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from typer import Typer

from coin_spine import __version__
from coin_spine.cli.coins import app as coins_app
from coin_spine.cli.db import app as db_app
from coin_spine.cli.serve import app as serve_app
from coin_spine.core.logging import configure_logging

app = Typer(
    name="coin-spine",
    help="coin-spine: coin and price-history store.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("coin-spine")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"coin-spine {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Structured log level."),
) -> None:
    """coin-spine CLI: manage coins, seed data, and run the API."""
    configure_logging(level=log_level, json_format=False)


# ── Sub-command registration ─────────────────────────────────────────────

app.add_typer(db_app, name="db", help="Database operations.")
app.add_typer(coins_app, name="coins", help="Query and delete coins.")
app.add_typer(serve_app, name="serve", help="Start the API server.")
