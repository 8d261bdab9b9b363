"""
Coin router: query façade and CRUD over the coin store.

GET    /coins
GET    /coins/sorted-by-name-desc
GET    /coins/by-name?name=
GET    /coins/sorted-by-description-desc-name-asc
GET    /coins/first?count=N
GET    /coins/last?count=N
GET    /coins/{coin_id}
POST   /coins
PUT    /coins/{coin_id}
DELETE /coins/{coin_id}

Fixed-path routes are declared before ``/coins/{coin_id}`` so they are not
captured as identifiers.
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Query, Request, Response

from coin_spine.api.deps import OpContext
from coin_spine.api.schemas.coins import CoinBody, CoinSchema
from coin_spine.api.schemas.common import SuccessResponse
from coin_spine.api.utils import _handle_error
from coin_spine.ops import coins as coin_ops

router = APIRouter(prefix="/coins")


def _one(result):
    return SuccessResponse(
        data=CoinSchema.model_validate(result.data),
        elapsed_ms=result.elapsed_ms,
        warnings=result.warnings,
    )


def _many(result):
    return SuccessResponse(
        data=[CoinSchema.model_validate(c) for c in (result.data or [])],
        elapsed_ms=result.elapsed_ms,
        warnings=result.warnings,
    )


@router.get("", response_model=SuccessResponse[list[CoinSchema]])
def list_coins(ctx: OpContext, request: Request):
    """List every coin (no guaranteed order).

    Example:
        GET /api/v1/coins

        Response:
        {
            "data": [
                {
                    "id": "5b0c…",
                    "name": "coin 1-1a2b3c4d",
                    "description": "Description",
                    "start_date": "2026-10-18T09:00:00Z",
                    "price_list": [{"id": "…", "value": "42.17", "date": "…"}]
                }
            ],
            "elapsed_ms": 1.2
        }
    """
    result = coin_ops.list_coins(ctx)
    if not result.success:
        return _handle_error(result, request)
    return _many(result)


@router.get("/sorted-by-name-desc", response_model=SuccessResponse[list[CoinSchema]])
def list_coins_by_name_desc(ctx: OpContext, request: Request):
    """List every coin sorted by name, Z→A."""
    result = coin_ops.list_coins_by_name_desc(ctx)
    if not result.success:
        return _handle_error(result, request)
    return _many(result)


@router.get("/by-name", response_model=SuccessResponse[CoinSchema])
def get_coin_by_name(
    ctx: OpContext,
    request: Request,
    name: str = Query(..., description="Exact coin name"),
):
    """Fetch the coin with exactly this name.

    Raises:
        404 NOT_FOUND: No coin has that name.
    """
    result = coin_ops.get_coin_by_name(ctx, name)
    if not result.success:
        return _handle_error(result, request)
    return _one(result)


@router.get(
    "/sorted-by-description-desc-name-asc",
    response_model=SuccessResponse[list[CoinSchema]],
)
def list_coins_by_description_desc_name_asc(ctx: OpContext, request: Request):
    """List every coin sorted by description (Z→A), ties broken by name (A→Z).

    Coins without a description come last.
    """
    result = coin_ops.list_coins_by_description_desc_name_asc(ctx)
    if not result.success:
        return _handle_error(result, request)
    return _many(result)


@router.get("/first", response_model=SuccessResponse[list[CoinSchema]])
def list_first_coins(
    ctx: OpContext,
    request: Request,
    count: int = Query(..., ge=1, description="Number of coins to return"),
):
    """The first ``count`` coins in creation order."""
    result = coin_ops.list_first_coins(ctx, count)
    if not result.success:
        return _handle_error(result, request)
    return _many(result)


@router.get("/last", response_model=SuccessResponse[list[CoinSchema]])
def list_last_coins(
    ctx: OpContext,
    request: Request,
    count: int = Query(..., ge=1, description="Number of coins to return"),
):
    """The ``count`` coins with the most recent start dates, newest first."""
    result = coin_ops.list_last_coins(ctx, count)
    if not result.success:
        return _handle_error(result, request)
    return _many(result)


@router.get("/{coin_id}", response_model=SuccessResponse[CoinSchema])
def get_coin(
    ctx: OpContext,
    request: Request,
    coin_id: str = Path(..., description="Coin ID (UUID)"),
):
    """Fetch one coin by identifier.

    Raises:
        400 VALIDATION_FAILED: ``coin_id`` is not a UUID.
        404 NOT_FOUND: No coin has that identifier.
    """
    result = coin_ops.get_coin(ctx, coin_id)
    if not result.success:
        return _handle_error(result, request)
    return _one(result)


@router.post("", response_model=SuccessResponse[CoinSchema], status_code=201)
def create_coin(ctx: OpContext, request: Request, body: CoinBody):
    """Create a coin together with its initial prices.

    Raises:
        400 VALIDATION_FAILED: Negative price value, or a price carrying an ``id``.
        409 CONFLICT: A coin with the same name already exists.

    Example:
        POST /api/v1/coins
        {
            "name": "btc",
            "start_date": "2026-01-01T00:00:00Z",
            "prices": [{"value": "12.50", "date": "2026-01-02T00:00:00Z"}]
        }
    """
    result = coin_ops.create_coin(ctx, body.to_request())
    if not result.success:
        return _handle_error(result, request)
    return _one(result)


@router.put("/{coin_id}", response_model=SuccessResponse[CoinSchema])
def update_coin(
    ctx: OpContext,
    request: Request,
    body: CoinBody,
    coin_id: str = Path(..., description="Coin ID (UUID)"),
):
    """Replace a coin's fields and synchronize its price list.

    Raises:
        404 NOT_FOUND: No coin has that identifier.
        409 CONFLICT: Name taken by another coin, or a price id from another coin.
    """
    result = coin_ops.update_coin(ctx, coin_id, body.to_request())
    if not result.success:
        return _handle_error(result, request)
    return _one(result)


@router.delete("/{coin_id}", status_code=204)
def delete_coin(
    ctx: OpContext,
    request: Request,
    coin_id: str = Path(..., description="Coin ID (UUID)"),
):
    """Delete a coin and every price it owns.

    Raises:
        404 NOT_FOUND: No coin has that identifier.
    """
    result = coin_ops.delete_coin(ctx, coin_id)
    if not result.success:
        return _handle_error(result, request)
    return Response(status_code=204)
