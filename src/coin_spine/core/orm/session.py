"""SQLAlchemy engine factory and session factory.

This module provides:

* ``create_coin_engine``   -- Create a SA engine from a URL with sane defaults.
* ``CoinSession``          -- Session with ``expire_on_commit=False``.
* ``coin_session_factory`` -- ``sessionmaker`` producing ``CoinSession``.
* ``init_schema``          -- Create every coin-spine table that is missing.

Tags:
    coin-spine, orm, sqlalchemy, session, engine

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine as _sa_create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from coin_spine.core.logging import get_logger

logger = get_logger(__name__)


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def create_coin_engine(
    url: str = "sqlite:///coin_spine.db",
    *,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
    pool_timeout: int | None = None,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine with sane defaults.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql://…``, etc.)
    echo:
        If ``True``, log all SQL to stdout.
    pool_size, max_overflow, pool_timeout:
        Connection pool parameters (ignored for SQLite).
    **kwargs:
        Extra arguments forwarded to ``sqlalchemy.create_engine``.
    """

    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        # One shared connection, otherwise each session gets its own empty database
        if _is_memory_sqlite(url):
            kwargs.setdefault("poolclass", StaticPool)

        engine = _sa_create_engine(url, echo=echo, **kwargs)

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            if not _is_memory_sqlite(url):
                cursor.execute("PRAGMA journal_mode=WAL")
            # SQLite ignores ON DELETE CASCADE unless this is on
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    pool_kwargs: dict[str, Any] = {}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size
    if max_overflow is not None:
        pool_kwargs["max_overflow"] = max_overflow
    if pool_timeout is not None:
        pool_kwargs["pool_timeout"] = pool_timeout

    return _sa_create_engine(url, echo=echo, **pool_kwargs, **kwargs)


class CoinSession(Session):
    """Pre-configured session with ``expire_on_commit=False``.

    Objects read inside a transaction stay readable after commit, which is
    what the repository relies on when converting rows to domain models.
    """

    def __init__(self, bind: Engine | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("expire_on_commit", False)
        super().__init__(bind=bind, **kwargs)


def coin_session_factory(engine: Engine) -> sessionmaker[CoinSession]:
    """Return a ``sessionmaker`` bound to *engine* that produces ``CoinSession`` instances."""
    return sessionmaker(bind=engine, class_=CoinSession)


def init_schema(engine: Engine) -> None:
    """Create the ``coins`` and ``prices`` tables if they do not exist."""
    from coin_spine.core.orm.base import CoinBase
    from coin_spine.core.orm import tables  # noqa: F401  (registers mappers)

    CoinBase.metadata.create_all(engine)
    logger.info("schema_initialized", url=engine.url.render_as_string(hide_password=True))
