"""Declarative base and portable column types for the coin-spine ORM.

Uses SQLAlchemy 2.0 ``DeclarativeBase`` with a ``type_annotation_map``
so mapped columns can be declared with plain Python types.

Column types
------------
* **ExactDecimal**: ``Decimal`` stored as canonical text.  SQLite has no
  exact numeric storage (``NUMERIC`` affinity rounds through REAL), and
  monetary values must round-trip digit for digit on every backend.
* **UTCDateTime**: aware UTC ``datetime`` stored as naive UTC, re-tagged
  with ``UTC`` on load.
"""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import DateTime, Integer, String, Text, Uuid
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


class ExactDecimal(TypeDecorator[Decimal]):
    """``Decimal`` persisted as its canonical string form."""

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect: Dialect) -> str | None:
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value: Any, dialect: Dialect) -> Decimal | None:
        if value is None:
            return None
        return Decimal(str(value))


class UTCDateTime(TypeDecorator[datetime.datetime]):
    """Timezone-aware UTC datetime, stored naive so SQLite keeps microseconds."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(
        self, value: datetime.datetime | None, dialect: Dialect
    ) -> datetime.datetime | None:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(datetime.UTC)
        return value.replace(tzinfo=None)

    def process_result_value(
        self, value: datetime.datetime | None, dialect: Dialect
    ) -> datetime.datetime | None:
        if value is None:
            return None
        return value.replace(tzinfo=datetime.UTC)


class CoinBase(DeclarativeBase):
    """Shared declarative base for every coin-spine table.

    * ``str``   → ``Text``
    * ``int``   → ``Integer``
    * ``uuid.UUID`` → ``Uuid`` (CHAR(32) on SQLite, native UUID elsewhere)
    * ``Decimal`` → ``ExactDecimal``
    * ``datetime.datetime`` → ``UTCDateTime``
    """

    type_annotation_map = {
        str: Text,
        int: Integer,
        uuid.UUID: Uuid,
        Decimal: ExactDecimal,
        datetime.datetime: UTCDateTime,
    }
