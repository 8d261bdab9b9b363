"""
Typed request objects for coin operations.

Each dataclass is the *input* contract for a single operation function.
Requests carry transport-agnostic data: the REST layer builds them from
pydantic bodies, the CLI from Typer options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class PriceInput:
    """One price entry of a write request.

    ``id`` identifies an existing price of the same coin; leave it ``None``
    to add a new sample.
    """

    value: Decimal | int | float | str
    date: datetime
    id: str | None = None


@dataclass(frozen=True, slots=True)
class SaveCoinRequest:
    """Request for :func:`coin_spine.ops.coins.create_coin` and
    :func:`coin_spine.ops.coins.update_coin`.

    On update the given ``prices`` replace the stored collection: entries
    with an ``id`` are updated, entries without one are inserted, stored
    prices not listed are deleted.
    """

    name: str
    start_date: datetime
    description: str | None = None
    prices: list[PriceInput] = field(default_factory=list)
