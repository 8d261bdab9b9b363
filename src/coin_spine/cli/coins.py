"""
CLI: ``coin-spine coins``: query and delete coins.
"""

from __future__ import annotations

from enum import Enum

import typer

from coin_spine.cli.utils import console, make_context, output_result
from coin_spine.ops import coins as coin_ops

app = typer.Typer(no_args_is_help=True)

DEFAULT_LAST_COUNT = 10


class Order(str, Enum):
    name_desc = "name-desc"
    start_date_desc = "start-date-desc"
    description_desc_name_asc = "description-desc-name-asc"


@app.command("list")
def list_coins(
    order: Order | None = typer.Option(None, "--order", "-o", help="Sort order"),
    limit: int | None = typer.Option(None, "--limit", "-l", min=1, help="Max coins to show"),
    database: str | None = typer.Option(None, "--database", "-d", help="SQLAlchemy database URL"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List coins.

    Without ``--order`` the coins come back in creation order when
    ``--limit`` is given and unordered otherwise.  ``start-date-desc``
    shows the ``--limit`` most recent coins (default 10).
    """
    ctx = make_context(database)

    if order is None:
        result = coin_ops.list_first_coins(ctx, limit) if limit else coin_ops.list_coins(ctx)
    elif order is Order.start_date_desc:
        result = coin_ops.list_last_coins(ctx, limit or DEFAULT_LAST_COUNT)
    else:
        op = {
            Order.name_desc: coin_ops.list_coins_by_name_desc,
            Order.description_desc_name_asc: coin_ops.list_coins_by_description_desc_name_asc,
        }[order]
        result = op(ctx)
        if result.success and limit:
            result.data = result.data[:limit]

    output_result(result, as_json=json_out, title="Coins")


@app.command()
def show(
    name: str = typer.Argument(..., help="Exact coin name"),
    database: str | None = typer.Option(None, "--database", "-d", help="SQLAlchemy database URL"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Show one coin and its price history."""
    ctx = make_context(database)
    output_result(coin_ops.get_coin_by_name(ctx, name), as_json=json_out, title=name)


@app.command()
def delete(
    coin_id: str = typer.Argument(..., help="Coin ID (UUID)"),
    database: str | None = typer.Option(None, "--database", "-d", help="SQLAlchemy database URL"),
) -> None:
    """Delete a coin and all of its prices."""
    ctx = make_context(database)
    result = coin_ops.delete_coin(ctx, coin_id)
    if result.success:
        console.print(f"[green]Deleted coin[/green] {coin_id}")
        return
    output_result(result)
