"""
CLI utility helpers: output formatting and store construction.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from coin_spine.core.orm.session import create_coin_engine, init_schema
from coin_spine.core.repositories.coins import CoinRepository
from coin_spine.core.settings import CoinSpineSettings
from coin_spine.ops.context import OperationContext
from coin_spine.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)


# ── Store helper ─────────────────────────────────────────────────────────


def make_context(database: str | None = None) -> OperationContext:
    """Create an ``OperationContext`` over a coin store for CLI commands.

    *database* is a SQLAlchemy URL; defaults to ``COIN_SPINE_DATABASE_URL``.
    The schema is created on first use.
    """
    settings = CoinSpineSettings()
    engine = create_coin_engine(database or settings.database_url, echo=settings.echo_sql)
    init_schema(engine)
    return OperationContext(store=CoinRepository.from_engine(engine), caller="cli")


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def _json_default(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal."""
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}")
        raise typer.Exit(code=1)

    data = result.data

    if as_json:
        payload = _to_dict(data) if not isinstance(data, list | tuple) else [_to_dict(d) for d in data]
        console.print_json(json.dumps(payload, default=_json_default))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


# ── Private helpers ──────────────────────────────────────────────────────


def _cell(value: Any) -> str:
    # Nested collections (a coin's price_list) are summarized by size
    if isinstance(value, list):
        return str(len(value))
    return str(value)


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(_cell(v) for v in d.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs; list values become tables."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    nested = {}
    for k, v in data.items():
        if isinstance(v, list) and v:
            nested[k] = v
            continue
        console.print(f"  [cyan]{k}[/cyan]: {_cell(v) if isinstance(v, list) else v}")
    for k, v in nested.items():
        _print_table(v, title=k)
