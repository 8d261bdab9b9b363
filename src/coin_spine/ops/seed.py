"""
Seed loader: bootstrap the store with synthetic coins.

Writes ``coin_count`` coins, each carrying ``price_count`` daily prices with
values drawn uniformly from ``[0, max_value)``.  Coin ``i`` starts ``i``
days ago and its ``d``-th price is dated ``d`` days ago.

The whole batch goes through :meth:`CoinRepository.save_all`, one
transaction, so when :meth:`CoinSeeder.seed` returns every row is durable.

Seeding is not idempotent: every run appends a new batch.  Names carry a
per-run token (``"coin 3-1a2b3c4d"``) so a second batch does not collide
with the first on the unique name index.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal

from coin_spine.core.logging import get_logger
from coin_spine.core.repositories.coins import CoinRepository
from coin_spine.core.timestamps import utc_now
from coin_spine.domain.models import Coin, Price
from coin_spine.ops.coins import _execute
from coin_spine.ops.context import OperationContext
from coin_spine.ops.result import OperationResult

logger = get_logger(__name__)

SEED_DESCRIPTION = "Description"


class CoinSeeder:
    """One-shot producer of synthetic coins and price histories.

    Parameters:
        store: Coin store to write through.
        coin_count: Coins per run.
        price_count: Prices per coin.
        max_value: Upper bound of the uniform price distribution.
        rng: Random source (pass a seeded ``random.Random`` for reproducible data).
        clock: Source of "now" that all dates are derived from.
    """

    def __init__(
        self,
        store: CoinRepository,
        *,
        coin_count: int = 10,
        price_count: int = 10,
        max_value: int = 100,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._coin_count = coin_count
        self._price_count = price_count
        self._max_value = max_value
        self._rng = rng or random.Random()
        self._clock = clock

    def build(self) -> list[Coin]:
        """Build one batch of unsaved coins."""
        now = self._clock()
        token = f"{self._rng.getrandbits(32):08x}"
        coins = []
        for i in range(1, self._coin_count + 1):
            coin = Coin(
                name=f"coin {i}-{token}",
                description=SEED_DESCRIPTION,
                start_date=now - timedelta(days=i),
            )
            for d in range(1, self._price_count + 1):
                value = self._rng.uniform(0, self._max_value)
                coin.price_list.append(
                    Price(value=Decimal(repr(value)), date=now - timedelta(days=d))
                )
            coins.append(coin)
        return coins

    def seed(self) -> list[Coin]:
        """Write one batch and return the persisted coins."""
        saved = self._store.save_all(self.build())
        logger.info(
            "seed_completed",
            coins=len(saved),
            prices=sum(len(c.price_list) for c in saved),
        )
        return saved


def seed_coins(
    ctx: OperationContext,
    *,
    coin_count: int = 10,
    price_count: int = 10,
    max_value: int = 100,
) -> OperationResult[dict[str, int]]:
    """Run one seed batch through the store in *ctx* and summarize it."""

    def _seed() -> dict[str, int]:
        saved = CoinSeeder(
            ctx.store,
            coin_count=coin_count,
            price_count=price_count,
            max_value=max_value,
        ).seed()
        return {
            "coins_added": len(saved),
            "prices_added": sum(len(c.price_list) for c in saved),
            "total_coins": ctx.store.count(),
        }

    return _execute(ctx, "seed_coins", _seed)
