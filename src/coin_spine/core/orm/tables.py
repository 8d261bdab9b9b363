"""Coin and price table definitions.

``coins`` is the aggregate root; ``prices`` rows exist only through their
owning coin.  The relationship cascades every operation
(``all, delete-orphan``) and the foreign key also carries
``ON DELETE CASCADE`` so a delete issued outside the ORM still leaves no
orphans.  ``position`` keeps the caller's list order.
"""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coin_spine.core.orm.base import CoinBase, ExactDecimal, UTCDateTime


class CoinTable(CoinBase):
    __tablename__ = "coins"
    __table_args__ = (UniqueConstraint("name", name="uq_coins_name"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created: Mapped[datetime.datetime] = mapped_column(UTCDateTime, nullable=False)
    updated: Mapped[datetime.datetime] = mapped_column(UTCDateTime, nullable=False)
    start_date: Mapped[datetime.datetime] = mapped_column(UTCDateTime, nullable=False)

    # --- relationships ---
    prices: Mapped[list[PriceTable]] = relationship(
        "PriceTable",
        back_populates="coin",
        cascade="all, delete-orphan",
        order_by="PriceTable.position",
    )


class PriceTable(CoinBase):
    __tablename__ = "prices"
    __table_args__ = (Index("ix_prices_coin_id_position", "coin_id", "position"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    coin_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("coins.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    value: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
    date: Mapped[datetime.datetime] = mapped_column(UTCDateTime, nullable=False)

    # --- relationships ---
    coin: Mapped[CoinTable] = relationship("CoinTable", back_populates="prices")


__all__ = ["CoinTable", "PriceTable"]
