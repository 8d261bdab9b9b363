"""
Coin schemas: REST views of the domain models and write bodies.

Response schemas read straight from :class:`~coin_spine.domain.models.Coin`
dataclasses (``from_attributes``).  Price values are serialized as decimal
strings so no precision is lost in JSON.

Doc-Types: API_REFERENCE
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from coin_spine.ops.requests import PriceInput, SaveCoinRequest


class PriceSchema(BaseModel):
    """A stored price sample."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    value: Decimal = Field(description="Exact decimal amount, serialized as a string")
    date: datetime

    @field_serializer("value")
    def _value_as_str(self, value: Decimal) -> str:
        return str(value)


class CoinSchema(BaseModel):
    """A stored coin with its full price history, oldest position first."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None = None
    start_date: datetime
    created: datetime
    updated: datetime
    price_list: list[PriceSchema] = Field(default_factory=list)


class PriceBody(BaseModel):
    value: Decimal = Field(description="Non-negative decimal amount")
    date: datetime
    id: str | None = Field(default=None, description="Existing price id (updates only)")


class CoinBody(BaseModel):
    """Body for ``POST /coins`` and ``PUT /coins/{coin_id}``.

    On ``PUT`` the ``prices`` list replaces the stored collection: entries
    carrying an ``id`` are updated, new entries inserted, omitted ones deleted.
    """

    name: str
    description: str | None = None
    start_date: datetime
    prices: list[PriceBody] = Field(default_factory=list)

    def to_request(self) -> SaveCoinRequest:
        return SaveCoinRequest(
            name=self.name,
            description=self.description,
            start_date=self.start_date,
            prices=[PriceInput(value=p.value, date=p.date, id=p.id) for p in self.prices],
        )
