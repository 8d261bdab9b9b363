"""Coin and price domain models."""

from coin_spine.domain.models import Coin, Price, parse_uuid, to_decimal

__all__ = ["Coin", "Price", "parse_uuid", "to_decimal"]
