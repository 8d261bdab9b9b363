"""Tests for the ORM layer: column types, schema and engine setup."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import inspect, select, text
from sqlalchemy.exc import IntegrityError

from coin_spine.core.orm import CoinTable, PriceTable, coin_session_factory
from coin_spine.core.orm.base import ExactDecimal, UTCDateTime
from coin_spine.core.orm.session import create_coin_engine, init_schema


def _coin_row(name: str = "btc") -> CoinTable:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    return CoinTable(id=uuid.uuid4(), name=name, created=now, updated=now, start_date=now)


class TestColumnTypes:
    def test_exact_decimal_bind(self):
        assert ExactDecimal().process_bind_param(Decimal("12.50"), None) == "12.50"
        assert ExactDecimal().process_bind_param(None, None) is None

    def test_exact_decimal_result(self):
        value = ExactDecimal().process_result_value("0.10000000000000001", None)
        assert value == Decimal("0.10000000000000001")

    def test_utc_datetime_strips_to_naive_utc(self):
        tz = timezone(timedelta(hours=-5))
        bound = UTCDateTime().process_bind_param(datetime(2026, 1, 1, 7, tzinfo=tz), None)
        assert bound == datetime(2026, 1, 1, 12)
        assert bound.tzinfo is None

    def test_utc_datetime_result_is_aware(self):
        loaded = UTCDateTime().process_result_value(datetime(2026, 1, 1, 12), None)
        assert loaded == datetime(2026, 1, 1, 12, tzinfo=UTC)


class TestSchema:
    def test_tables_created(self, engine):
        names = set(inspect(engine).get_table_names())
        assert {"coins", "prices"} <= names

    def test_init_schema_is_idempotent(self, engine):
        init_schema(engine)
        assert "coins" in inspect(engine).get_table_names()

    def test_name_is_unique(self, engine):
        factory = coin_session_factory(engine)
        with factory() as session:
            session.add(_coin_row("btc"))
            session.commit()
            session.add(_coin_row("btc"))
            with pytest.raises(IntegrityError):
                session.commit()

    def test_foreign_keys_enforced(self, engine):
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_delete_cascades_in_database(self, engine):
        factory = coin_session_factory(engine)
        with factory() as session:
            coin = _coin_row()
            coin.prices = [
                PriceTable(
                    id=uuid.uuid4(),
                    position=0,
                    value=Decimal("1.5"),
                    date=datetime(2026, 1, 2, tzinfo=UTC),
                )
            ]
            session.add(coin)
            session.commit()
            coin_id = coin.id

        with engine.begin() as conn:
            conn.execute(CoinTable.__table__.delete().where(CoinTable.id == coin_id))

        with factory() as session:
            assert session.scalars(select(PriceTable)).all() == []

    def test_values_round_trip_exactly(self, engine):
        factory = coin_session_factory(engine)
        with factory() as session:
            coin = _coin_row()
            coin.prices = [
                PriceTable(
                    id=uuid.uuid4(),
                    position=0,
                    value=Decimal("12345678901234567890.123456789"),
                    date=datetime(2026, 1, 2, 3, 4, 5, 678901, tzinfo=UTC),
                )
            ]
            session.add(coin)
            session.commit()

        with factory() as session:
            price = session.scalars(select(PriceTable)).one()
            assert price.value == Decimal("12345678901234567890.123456789")
            assert price.date == datetime(2026, 1, 2, 3, 4, 5, 678901, tzinfo=UTC)


class TestEngine:
    def test_memory_engine_shares_one_database(self):
        eng = create_coin_engine("sqlite://")
        init_schema(eng)
        factory = coin_session_factory(eng)
        with factory() as session:
            session.add(_coin_row())
            session.commit()
        with factory() as session:
            assert session.scalars(select(CoinTable)).one().name == "btc"
        eng.dispose()

    def test_file_engine_uses_wal(self, tmp_path):
        eng = create_coin_engine(f"sqlite:///{tmp_path / 'coins.db'}")
        with eng.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        eng.dispose()
