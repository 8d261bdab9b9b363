"""Tests for the seed loader."""

from __future__ import annotations

import random
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from coin_spine.core.errors import ConstraintViolationError
from coin_spine.ops.seed import SEED_DESCRIPTION, CoinSeeder, seed_coins

NOW = datetime(2026, 6, 1, 9, 30, tzinfo=UTC)


def _seeder(store, **kwargs) -> CoinSeeder:
    kwargs.setdefault("rng", random.Random(7))
    kwargs.setdefault("clock", lambda: NOW)
    return CoinSeeder(store, **kwargs)


class TestBuild:
    def test_default_shape(self):
        coins = _seeder(MagicMock()).build()
        assert len(coins) == 10
        assert all(len(c.price_list) == 10 for c in coins)
        assert all(c.description == SEED_DESCRIPTION for c in coins)
        assert all(c.id is None for c in coins)

    def test_dates(self):
        coins = _seeder(MagicMock(), coin_count=3, price_count=2).build()
        assert [c.start_date for c in coins] == [NOW - timedelta(days=i) for i in (1, 2, 3)]
        assert [p.date for p in coins[0].price_list] == [NOW - timedelta(days=d) for d in (1, 2)]

    def test_values_in_range(self):
        coins = _seeder(MagicMock(), max_value=5).build()
        values = [p.value for c in coins for p in c.price_list]
        assert all(isinstance(v, Decimal) for v in values)
        assert all(Decimal(0) <= v < Decimal(5) for v in values)

    def test_names_unique_within_and_across_batches(self):
        seeder = _seeder(MagicMock())
        first = [c.name for c in seeder.build()]
        second = [c.name for c in seeder.build()]
        assert len(set(first)) == 10
        assert not set(first) & set(second)
        assert first[0].startswith("coin 1-")

    def test_reproducible_with_seeded_rng(self):
        a = _seeder(MagicMock(), rng=random.Random(42)).build()
        b = _seeder(MagicMock(), rng=random.Random(42)).build()
        assert [c.name for c in a] == [c.name for c in b]
        assert [p.value for p in a[0].price_list] == [p.value for p in b[0].price_list]

    def test_zero_counts(self):
        assert _seeder(MagicMock(), coin_count=0).build() == []
        coins = _seeder(MagicMock(), coin_count=2, price_count=0).build()
        assert all(c.price_list == [] for c in coins)


class TestSeed:
    def test_writes_single_batch(self):
        store = MagicMock()
        store.save_all.side_effect = lambda coins: coins
        saved = _seeder(store, coin_count=4).seed()
        store.save_all.assert_called_once()
        assert len(store.save_all.call_args.args[0]) == 4
        assert len(saved) == 4

    def test_persists_everything(self, repo):
        _seeder(repo).seed()
        assert repo.count() == 10
        assert all(len(c.price_list) == 10 for c in repo.find_all())

    def test_seeding_twice_doubles_count(self, repo):
        _seeder(repo, rng=random.Random(1)).seed()
        _seeder(repo, rng=random.Random(2)).seed()
        assert repo.count() == 20

    def test_seeded_values_round_trip(self, repo):
        saved = _seeder(repo, coin_count=1, price_count=5).seed()[0]
        loaded = repo.find_by_id(saved.id)
        assert [p.value for p in loaded.price_list] == [p.value for p in saved.price_list]

    def test_colliding_batch_writes_nothing(self, repo):
        _seeder(repo, rng=random.Random(1)).seed()
        with pytest.raises(ConstraintViolationError):
            _seeder(repo, rng=random.Random(1)).seed()
        assert repo.count() == 10


class TestSeedCoinsOperation:
    def test_summary(self, ctx):
        result = seed_coins(ctx, coin_count=3, price_count=2)
        assert result.success
        assert result.data == {"coins_added": 3, "prices_added": 6, "total_coins": 3}

    def test_conflict_reported(self, ctx, monkeypatch):
        monkeypatch.setattr(
            "coin_spine.ops.seed.CoinSeeder.seed",
            MagicMock(side_effect=ConstraintViolationError("dup")),
        )
        assert seed_coins(ctx).error.code == "CONFLICT"
