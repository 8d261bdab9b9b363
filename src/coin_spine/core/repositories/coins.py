"""Coin store: persistence and the fixed query contract for coins.

:class:`CoinRepository` owns a ``sessionmaker`` and runs every public
method in its own transaction.  Callers hand in and get back detached
:class:`~coin_spine.domain.models.Coin` values, never live ORM rows, so
nothing outside this module can observe a half-applied write.

Architecture::

    ┌────────────────────────────────────────────────────────────────────┐
    │                         CoinRepository                              │
    │                                                                    │
    │   session_factory: sessionmaker   ← one transaction per call       │
    │   clock: () -> datetime           ← audit timestamps               │
    │                                                                    │
    │   find_all()                                  → list[Coin]         │
    │   find_page(limit, offset)                    → list[Coin]         │
    │   find_all_order_by_name_desc()               → list[Coin]         │
    │   find_all_order_by_start_date_desc(l, o)     → list[Coin]         │
    │   find_all_order_by_description_desc_name_asc() → list[Coin]       │
    │   find_by_name(name) / find_by_id(id)         → Coin | NotFound    │
    │   save(coin) / save_all(coins)                → Coin / list[Coin]  │
    │   delete_by_id(id)                            → None | NotFound    │
    └────────────────────────────────────────────────────────────────────┘

Save is an upsert keyed on ``coin.id``.  The price collection is
synchronized inside the same transaction: new prices are inserted, known
prices updated in place, missing ones deleted, and positions rewritten to
the incoming order.

Tags:
    repository, database, sqlalchemy, coin-spine
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import Select, func, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from coin_spine.core.errors import (
    CoinNotFoundError,
    CoinSpineError,
    ConstraintViolationError,
    DatabaseError,
    PriceNotFoundError,
    ValidationError,
)
from coin_spine.core.logging import get_logger
from coin_spine.core.orm.session import coin_session_factory
from coin_spine.core.orm.tables import CoinTable, PriceTable
from coin_spine.core.timestamps import ensure_utc, utc_now
from coin_spine.domain.models import Coin, Price, parse_uuid

logger = get_logger(__name__)


def check_page(limit: Any, offset: Any) -> None:
    """Reject page specs the store cannot serve (``limit >= 1``, ``offset >= 0``)."""
    for name, value, minimum in (("limit", limit, 1), ("offset", offset, 0)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{name} must be an integer, got {value!r}").with_context(
                field=name
            )
        if value < minimum:
            raise ValidationError(f"{name} must be >= {minimum}, got {value}").with_context(
                field=name
            )


def _to_price(row: PriceTable) -> Price:
    return Price(id=row.id, value=row.value, date=row.date)


def _to_coin(row: CoinTable) -> Coin:
    return Coin(
        id=row.id,
        name=row.name,
        description=row.description,
        start_date=row.start_date,
        created=row.created,
        updated=row.updated,
        price_list=[_to_price(p) for p in row.prices],
    )


def _check_required(coin: Coin) -> None:
    if not isinstance(coin.name, str) or not coin.name.strip():
        raise ConstraintViolationError("Coin name is required").with_context(field="name")
    if coin.start_date is None:
        raise ConstraintViolationError("Coin start_date is required").with_context(
            field="start_date", name=coin.name
        )
    for price in coin.price_list:
        if not isinstance(price, Price):
            raise ValidationError(
                f"price_list entries must be Price, got {type(price).__name__}"
            ).with_context(name=coin.name)


class CoinRepository:
    """Durable store of coin aggregates under a unique-name constraint.

    Parameters:
        session_factory: ``sessionmaker`` bound to the coin-spine engine.
        clock: Source of "now" for ``created`` / ``updated``.  Defaults to
               :func:`~coin_spine.core.timestamps.utc_now`.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Any],
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    @classmethod
    def from_engine(cls, engine: Engine, **kwargs: Any) -> CoinRepository:
        """Create a repository over a fresh ``sessionmaker`` for *engine*."""
        return cls(coin_session_factory(engine), **kwargs)

    # -- Transactions ------------------------------------------------------

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """Run the body in one transaction, translating driver errors."""
        session = self._session_factory()
        try:
            with session.begin():
                yield session
        except CoinSpineError:
            raise
        except IntegrityError as exc:
            raise ConstraintViolationError(
                f"Write rejected by store constraint: {exc.orig}", cause=exc
            ) from exc
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Coin store failure: {exc}", cause=exc) from exc
        finally:
            session.close()

    def _select(self, stmt: Select[Any]) -> list[Coin]:
        with self._transaction() as session:
            rows = session.scalars(stmt.options(selectinload(CoinTable.prices))).all()
            return [_to_coin(r) for r in rows]

    # -- Queries -----------------------------------------------------------

    def find_all(self) -> list[Coin]:
        """All coins, in no particular order."""
        return self._select(select(CoinTable))

    def find_page(self, limit: int, offset: int = 0) -> list[Coin]:
        """A page of coins in the store's base order (creation order)."""
        check_page(limit, offset)
        stmt = (
            select(CoinTable)
            .order_by(CoinTable.created, CoinTable.id)
            .limit(limit)
            .offset(offset)
        )
        return self._select(stmt)

    def find_all_order_by_name_desc(self) -> list[Coin]:
        """All coins sorted by ``name`` descending."""
        return self._select(select(CoinTable).order_by(CoinTable.name.desc()))

    def find_all_order_by_start_date_desc(self, limit: int, offset: int = 0) -> list[Coin]:
        """A page of coins sorted by ``start_date`` descending.

        An offset past the last row yields an empty list, not an error.
        """
        check_page(limit, offset)
        stmt = (
            select(CoinTable)
            .order_by(CoinTable.start_date.desc(), CoinTable.id)
            .limit(limit)
            .offset(offset)
        )
        return self._select(stmt)

    def find_all_order_by_description_desc_name_asc(self) -> list[Coin]:
        """All coins sorted by ``description`` descending, ties by ``name`` ascending.

        Coins without a description sort after every described coin.
        """
        stmt = select(CoinTable).order_by(
            CoinTable.description.desc().nulls_last(),
            CoinTable.name.asc(),
        )
        return self._select(stmt)

    def find_by_name(self, name: str) -> Coin:
        """The coin whose ``name`` matches exactly.

        Raises:
            CoinNotFoundError: no coin has that name.
        """
        with self._transaction() as session:
            row = session.scalars(
                select(CoinTable)
                .where(CoinTable.name == name)
                .options(selectinload(CoinTable.prices))
            ).one_or_none()
            if row is None:
                raise CoinNotFoundError(name, field="name")
            return _to_coin(row)

    def find_by_id(self, coin_id: uuid.UUID | str) -> Coin:
        """The coin with the given identifier.

        Raises:
            CoinNotFoundError: no coin has that identifier.
        """
        coin_id = parse_uuid(coin_id)
        with self._transaction() as session:
            row = session.get(CoinTable, coin_id, options=[selectinload(CoinTable.prices)])
            if row is None:
                raise CoinNotFoundError(coin_id)
            return _to_coin(row)

    def find_price_by_id(self, price_id: uuid.UUID | str) -> Price:
        """A single price by identifier (read-only; prices change through their coin)."""
        price_id = parse_uuid(price_id, field="price_id")
        with self._transaction() as session:
            row = session.get(PriceTable, price_id)
            if row is None:
                raise PriceNotFoundError(price_id)
            return _to_price(row)

    def count(self) -> int:
        """Number of stored coins."""
        with self._transaction() as session:
            return session.scalar(select(func.count()).select_from(CoinTable)) or 0

    def ping(self) -> None:
        """Round-trip a trivial statement; raises ``DatabaseError`` when the store is down."""
        with self._transaction() as session:
            session.execute(text("SELECT 1"))

    # -- Writes ------------------------------------------------------------

    def save(self, coin: Coin) -> Coin:
        """Insert (no ``id``) or update (``id`` set) a coin and its prices.

        Raises:
            ConstraintViolationError: duplicate name, missing required field,
                or a price id owned by another coin.  Nothing is written.
            CoinNotFoundError: ``coin.id`` is set but no such coin exists.
        """
        with self._transaction() as session:
            saved = self._save_in(session, coin, ensure_utc(self._clock()))
        logger.debug("coin_saved", coin_id=str(saved.id), prices=len(saved.price_list))
        return saved

    def save_all(self, coins: Iterable[Coin]) -> list[Coin]:
        """Save several coins in a single transaction (all or nothing)."""
        with self._transaction() as session:
            now = ensure_utc(self._clock())
            saved = [self._save_in(session, coin, now) for coin in coins]
        logger.debug("coins_saved", count=len(saved))
        return saved

    def delete_by_id(self, coin_id: uuid.UUID | str) -> None:
        """Delete a coin and every price it owns.

        Raises:
            CoinNotFoundError: no coin has that identifier.
        """
        coin_id = parse_uuid(coin_id)
        with self._transaction() as session:
            row = session.get(CoinTable, coin_id, options=[selectinload(CoinTable.prices)])
            if row is None:
                raise CoinNotFoundError(coin_id)
            price_count = len(row.prices)
            session.delete(row)
        logger.info("coin_deleted", coin_id=str(coin_id), prices=price_count)

    def _save_in(self, session: Session, coin: Coin, now: datetime) -> Coin:
        _check_required(coin)

        if coin.id is None:
            row = CoinTable(id=uuid.uuid4(), created=now, updated=now)
            session.add(row)
        else:
            row = session.get(CoinTable, coin.id, options=[selectinload(CoinTable.prices)])
            if row is None:
                raise CoinNotFoundError(coin.id)
            row.updated = max(now, row.created)

        row.name = coin.name
        row.description = coin.description
        row.start_date = coin.start_date
        self._sync_prices(row, coin.price_list)

        session.flush()
        return _to_coin(row)

    @staticmethod
    def _sync_prices(row: CoinTable, incoming: list[Price]) -> None:
        """Make ``row.prices`` match *incoming*; orphans are deleted on flush."""
        existing = {p.id: p for p in row.prices}
        synced: list[PriceTable] = []

        for position, price in enumerate(incoming):
            if price.id is None:
                target = PriceTable(id=uuid.uuid4())
            else:
                target = existing.pop(price.id, None)
                if target is None:
                    raise ConstraintViolationError(
                        f"Price {price.id} does not belong to coin {row.id}"
                    ).with_context(price_id=price.id, coin_id=row.id)
            target.position = position
            target.value = price.value
            target.date = price.date
            synced.append(target)

        row.prices = synced


__all__ = ["CoinRepository", "check_page"]
