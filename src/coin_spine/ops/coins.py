"""
Coin operations.

The externally reachable operation set over the coin store.  Each function
maps 1:1 onto a :class:`~coin_spine.core.repositories.coins.CoinRepository`
call; the only work done here is input coercion (identifier strings to
UUIDs, request objects to domain models) and translating store errors into
:class:`OperationResult` failure codes:

    ValidationError           → ``VALIDATION_FAILED``
    ConstraintViolationError  → ``CONFLICT``
    NotFoundError             → ``NOT_FOUND``
    anything else             → ``INTERNAL``
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from coin_spine.core.errors import (
    CoinSpineError,
    ConstraintViolationError,
    NotFoundError,
    ValidationError,
)
from coin_spine.core.logging import LogContext, get_logger
from coin_spine.domain.models import Coin, Price, parse_uuid
from coin_spine.ops.context import OperationContext
from coin_spine.ops.requests import PriceInput, SaveCoinRequest
from coin_spine.ops.result import OperationResult, _Timer, start_timer

logger = get_logger(__name__)

T = TypeVar("T")

_ERROR_CODES: tuple[tuple[type[CoinSpineError], str], ...] = (
    (ValidationError, "VALIDATION_FAILED"),
    (ConstraintViolationError, "CONFLICT"),
    (NotFoundError, "NOT_FOUND"),
)


def _fail(code: str, exc: CoinSpineError, timer: _Timer) -> OperationResult:
    return OperationResult.fail(
        code,
        exc.message,
        category=exc.category,
        details={k: str(v) for k, v in exc.context.items()},
        elapsed_ms=timer.elapsed_ms,
    )


def _execute(
    ctx: OperationContext,
    operation: str,
    call: Callable[[], T],
) -> OperationResult[T]:
    """Run one store call and wrap its outcome in an ``OperationResult``."""
    timer = start_timer()
    with LogContext(request_id=ctx.request_id, caller=ctx.caller, operation=operation):
        try:
            data = call()
        except CoinSpineError as exc:
            for error_type, code in _ERROR_CODES:
                if isinstance(exc, error_type):
                    logger.info("op_rejected", code=code, **exc.to_dict())
                    return _fail(code, exc, timer)
            logger.exception("op_failed", **exc.to_dict())
            return _fail("INTERNAL", exc, timer)
        except Exception as exc:
            logger.exception("op_failed", error=str(exc))
            return OperationResult.fail(
                "INTERNAL",
                f"{operation} failed: {exc}",
                elapsed_ms=timer.elapsed_ms,
            )
    return OperationResult.ok(data, elapsed_ms=timer.elapsed_ms)


def _to_prices(inputs: list[PriceInput]) -> list[Price]:
    return [
        Price(
            value=p.value,
            date=p.date,
            id=parse_uuid(p.id, field="price_id") if p.id is not None else None,
        )
        for p in inputs
    ]


# ------------------------------------------------------------------ #
# Reads
# ------------------------------------------------------------------ #


def list_coins(ctx: OperationContext) -> OperationResult[list[Coin]]:
    """All coins, unspecified order."""
    return _execute(ctx, "list_coins", ctx.store.find_all)


def list_coins_by_name_desc(ctx: OperationContext) -> OperationResult[list[Coin]]:
    """All coins sorted by name, descending."""
    return _execute(ctx, "list_coins_by_name_desc", ctx.store.find_all_order_by_name_desc)


def list_coins_by_description_desc_name_asc(
    ctx: OperationContext,
) -> OperationResult[list[Coin]]:
    """All coins sorted by description descending, then name ascending."""
    return _execute(
        ctx,
        "list_coins_by_description_desc_name_asc",
        ctx.store.find_all_order_by_description_desc_name_asc,
    )


def list_first_coins(ctx: OperationContext, count: int) -> OperationResult[list[Coin]]:
    """The first *count* coins in the store's base order."""
    return _execute(ctx, "list_first_coins", lambda: ctx.store.find_page(count, 0))


def list_last_coins(ctx: OperationContext, count: int) -> OperationResult[list[Coin]]:
    """The *count* coins with the most recent start dates."""
    return _execute(
        ctx,
        "list_last_coins",
        lambda: ctx.store.find_all_order_by_start_date_desc(count, 0),
    )


def get_coin_by_name(ctx: OperationContext, name: str) -> OperationResult[Coin]:
    """The coin with exactly this name, or ``NOT_FOUND``."""
    return _execute(ctx, "get_coin_by_name", lambda: ctx.store.find_by_name(name))


def get_coin(ctx: OperationContext, coin_id: str) -> OperationResult[Coin]:
    """The coin with this identifier, or ``NOT_FOUND``."""
    return _execute(ctx, "get_coin", lambda: ctx.store.find_by_id(parse_uuid(coin_id)))


# ------------------------------------------------------------------ #
# Writes
# ------------------------------------------------------------------ #


def create_coin(ctx: OperationContext, request: SaveCoinRequest) -> OperationResult[Coin]:
    """Insert a new coin with its initial prices."""

    def _create() -> Coin:
        if any(p.id is not None for p in request.prices):
            raise ValidationError("New coins cannot reference existing price ids")
        coin = Coin(
            name=request.name,
            description=request.description,
            start_date=request.start_date,
            price_list=_to_prices(request.prices),
        )
        saved = ctx.store.save(coin)
        logger.info("coin_created", coin_id=str(saved.id), name=saved.name)
        return saved

    return _execute(ctx, "create_coin", _create)


def update_coin(
    ctx: OperationContext,
    coin_id: str,
    request: SaveCoinRequest,
) -> OperationResult[Coin]:
    """Replace a coin's fields and synchronize its price list."""

    def _update() -> Coin:
        existing = ctx.store.find_by_id(parse_uuid(coin_id))
        existing.name = request.name
        existing.description = request.description
        existing.start_date = request.start_date
        existing.price_list = _to_prices(request.prices)
        saved = ctx.store.save(existing)
        logger.info("coin_updated", coin_id=str(saved.id), prices=len(saved.price_list))
        return saved

    return _execute(ctx, "update_coin", _update)


def delete_coin(ctx: OperationContext, coin_id: str) -> OperationResult[None]:
    """Delete a coin and all of its prices, or ``NOT_FOUND``."""
    return _execute(ctx, "delete_coin", lambda: ctx.store.delete_by_id(parse_uuid(coin_id)))
