"""
FastAPI dependency injection: shared singletons and per-request factories.

Usage in routers::

    from coin_spine.api.deps import OpContext

    @router.get("/coins")
    def list_coins(ctx: OpContext):
        ...

The coin store is built once by the application lifespan and kept on
``app.state.store``; per-request objects (``OperationContext``) carry
request-scoped state through the call chain.

Tags:
    coin-spine, api, dependency-injection, singletons, OpContext

Doc-Types:
    api-reference
"""

from __future__ import annotations

import uuid
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from coin_spine.api.settings import CoinSpineAPISettings
from coin_spine.core.repositories.coins import CoinRepository
from coin_spine.ops.context import OperationContext

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> CoinSpineAPISettings:
    """Cached settings, loaded once per process."""
    return CoinSpineAPISettings()


# ── Coin store (application-scoped) ──────────────────────────────────────


def get_store(request: Request) -> CoinRepository:
    """The coin store created by the application lifespan."""
    return request.app.state.store


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    store: Annotated[CoinRepository, Depends(get_store)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    return OperationContext(
        store=store,
        request_id=request_id,
        caller="api",
    )


# ── Convenience type aliases ─────────────────────────────────────────────

OpContext = Annotated[OperationContext, Depends(get_operation_context)]
