"""
CLI: ``coin-spine db``: database management commands.
"""

from __future__ import annotations

import typer

from coin_spine.cli.utils import make_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database: str | None = typer.Option(None, "--database", "-d", help="SQLAlchemy database URL"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Initialise database schema (create tables)."""
    from coin_spine.ops.result import OperationResult

    ctx = make_context(database)
    output_result(
        OperationResult.ok({"schema": "ready", "coins": ctx.store.count()}),
        as_json=json_out,
        title="Database Init",
    )


@app.command()
def seed(
    count: int = typer.Option(10, "--count", "-n", min=0, help="Coins to add"),
    prices: int = typer.Option(10, "--prices", min=0, help="Prices per coin"),
    max_value: int = typer.Option(100, "--max-value", min=1, help="Upper bound of price values"),
    database: str | None = typer.Option(None, "--database", "-d", help="SQLAlchemy database URL"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Append a batch of synthetic coins with random price histories."""
    from coin_spine.ops.seed import seed_coins

    ctx = make_context(database)
    result = seed_coins(ctx, coin_count=count, price_count=prices, max_value=max_value)
    output_result(result, as_json=json_out, title="Seed Result")
