"""
Shared pytest fixtures and configuration for coin-spine tests.

This module provides:
- An in-memory SQLite engine with the coin schema
- A ``CoinRepository`` driven by a controllable clock
- An ``OperationContext`` over that repository
- Helpers to build coins with prices

Usage:
    Fixtures are auto-discovered by pytest::

        def test_something(repo, make_coin):
            saved = repo.save(make_coin("btc"))
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from coin_spine.core.orm.session import create_coin_engine, init_schema
from coin_spine.core.repositories.coins import CoinRepository
from coin_spine.domain.models import Coin, Price
from coin_spine.ops.context import OperationContext

BASE_TIME = datetime(2026, 1, 15, 12, 0, 0, tzinfo=UTC)


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        # API and CLI tests drive the full stack
        if test_path.parts[0] in ("api", "cli"):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Clock
# =============================================================================


class StepClock:
    """Deterministic clock: every call returns a time one second later."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + self.step
        return now


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with the coin schema created."""
    eng = create_coin_engine("sqlite:///:memory:")
    init_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def repo(engine: Engine, clock: StepClock) -> CoinRepository:
    return CoinRepository.from_engine(engine, clock=clock)


@pytest.fixture
def ctx(repo: CoinRepository) -> OperationContext:
    return OperationContext(store=repo, caller="test")


# =============================================================================
# Builders
# =============================================================================


@pytest.fixture
def make_coin() -> Callable[..., Coin]:
    """Factory for unsaved coins; ``prices`` is a list of decimal strings."""

    def _make(
        name: str,
        *,
        description: str | None = "Description",
        start_date: datetime = BASE_TIME,
        prices: list[str] | None = None,
    ) -> Coin:
        price_list = [
            Price(value=Decimal(v), date=BASE_TIME - timedelta(days=i + 1))
            for i, v in enumerate(prices or [])
        ]
        return Coin(
            name=name,
            description=description,
            start_date=start_date,
            price_list=price_list,
        )

    return _make
