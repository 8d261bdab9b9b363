"""
Coin and price domain models (stdlib dataclass).

STDLIB ONLY - NO PYDANTIC.

Models:
    Price: One sampled observation, an exact decimal value at a UTC instant
    Coin: Aggregate root owning an ordered list of prices

These are the objects the coin store accepts and returns.  They are plain
values, detached from any database session: mutating a loaded ``Coin`` has
no effect until it is passed back to ``CoinRepository.save``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from coin_spine.core.errors import ValidationError
from coin_spine.core.timestamps import ensure_utc


def to_decimal(value: Any) -> Decimal:
    """Coerce *value* to an exact ``Decimal``.

    Floats go through ``repr`` so ``12.5`` becomes ``Decimal("12.5")`` and
    not the binary expansion.  Booleans are rejected even though they are
    ints.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise ValidationError(f"Price value must be a decimal, got {value!r}")
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value.strip() if isinstance(value, str) else value)
        except InvalidOperation as exc:
            raise ValidationError(f"Price value is not a decimal: {value!r}", cause=exc) from exc
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        raise ValidationError(f"Price value must be a decimal, got {type(value).__name__}")

    if not result.is_finite():
        raise ValidationError(f"Price value must be finite, got {value!r}")
    return result


def parse_uuid(value: Any, *, field: str = "id") -> uuid.UUID:
    """Parse an identifier from a ``UUID`` or its string form."""
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, str):
        try:
            return uuid.UUID(value.strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid {field}: {value!r}", cause=exc).with_context(
                field=field
            ) from exc
    raise ValidationError(f"Invalid {field}: {value!r}").with_context(field=field)


# =============================================================================
# Price
# =============================================================================


@dataclass(frozen=True, slots=True)
class Price:
    """
    A single timestamped observation owned by a coin.

    Immutable after creation; to change a sample, replace it in the owning
    coin's ``price_list`` with ``dataclasses.replace``.

    Attributes:
        value: Non-negative exact decimal amount
        date: Observation instant (UTC)
        id: Store-generated identifier, ``None`` until first saved
    """

    value: Decimal
    date: datetime
    id: uuid.UUID | None = None

    def __post_init__(self) -> None:
        if self.date is None:
            raise ValidationError("Price date is required")
        if not isinstance(self.date, datetime):
            raise ValidationError(f"Price date must be a datetime, got {type(self.date).__name__}")
        value = to_decimal(self.value)
        if value < 0:
            raise ValidationError(f"Price value must be non-negative, got {value}")
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "date", ensure_utc(self.date))


# =============================================================================
# Coin
# =============================================================================


@dataclass(slots=True)
class Coin:
    """
    Aggregate root for a tracked asset and its price history.

    ``created`` and ``updated`` are owned by the store: values set by
    callers are ignored on save.  ``price_list`` order is the persisted
    order.

    Example::

        coin = Coin(name="coin 1", start_date=utc_now(), description="Description")
        coin.price_list.append(Price(value=Decimal("12.50"), date=utc_now()))
        saved = repo.save(coin)
        assert saved.id is not None
    """

    name: str
    start_date: datetime | None
    description: str | None = None
    price_list: list[Price] = field(default_factory=list)
    id: uuid.UUID | None = None
    created: datetime | None = None
    updated: datetime | None = None

    def __post_init__(self) -> None:
        if self.start_date is not None:
            self.start_date = ensure_utc(self.start_date)
        self.price_list = list(self.price_list)

    @property
    def is_new(self) -> bool:
        """True until the store has assigned an identifier."""
        return self.id is None
