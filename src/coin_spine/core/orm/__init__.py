"""SQLAlchemy 2.0 ORM layer for coin-spine.

Modules
-------
base        CoinBase (declarative base) + ExactDecimal / UTCDateTime column types
session     Engine factory, CoinSession, schema bootstrap
tables      CoinTable, PriceTable

Tags:
    coin-spine, orm, sqlalchemy, declarative

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from coin_spine.core.orm.base import CoinBase, ExactDecimal, UTCDateTime
from coin_spine.core.orm.session import (
    CoinSession,
    coin_session_factory,
    create_coin_engine,
    init_schema,
)
from coin_spine.core.orm.tables import CoinTable, PriceTable

__all__ = [
    "CoinBase",
    "ExactDecimal",
    "UTCDateTime",
    "CoinSession",
    "coin_session_factory",
    "create_coin_engine",
    "init_schema",
    "CoinTable",
    "PriceTable",
]
