"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, and
lifespan events into a single ``FastAPI`` instance.

Startup order (lifespan)::

    configure_logging
        │
        ▼
    engine + schema  ──(skipped when a store is injected)
        │
        ▼
    seed loader      ──(when seed_on_startup)
        │
        ▼
    serve requests

Tags:
    coin-spine, api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from coin_spine.api.deps import get_settings
from coin_spine.api.middleware.errors import (
    request_validation_handler,
    unhandled_exception_handler,
)
from coin_spine.api.middleware.request_id import RequestIDMiddleware
from coin_spine.api.middleware.timing import TimingMiddleware
from coin_spine.api.settings import CoinSpineAPISettings
from coin_spine.core.health import HealthCheck, create_health_router
from coin_spine.core.logging import configure_logging, get_logger
from coin_spine.core.orm.session import create_coin_engine, init_schema
from coin_spine.core.repositories.coins import CoinRepository
from coin_spine.ops.seed import CoinSeeder

logger = get_logger("coin_spine.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup / shutdown hooks."""
    settings: CoinSpineAPISettings = app.state.settings
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    logger.info("coin-spine API starting", version=app.version)

    engine = None
    if app.state.store is None:
        engine = create_coin_engine(settings.database_url, echo=settings.echo_sql)
        init_schema(engine)
        app.state.store = CoinRepository.from_engine(engine)
        logger.info("database initialized", url=engine.url.render_as_string(hide_password=True))

    if settings.seed_on_startup:
        seeder = CoinSeeder(
            app.state.store,
            coin_count=settings.seed_coin_count,
            price_count=settings.seed_price_count,
            max_value=settings.seed_max_value,
        )
        await asyncio.to_thread(seeder.seed)

    yield

    logger.info("coin-spine API shutting down")
    if engine is not None:
        engine.dispose()


def create_app(
    *,
    settings: CoinSpineAPISettings | None = None,
    store: CoinRepository | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : CoinSpineAPISettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    store : CoinRepository | None
        Pre-built coin store.  When ``None`` the lifespan builds one from
        ``settings.database_url``.
    """

    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    # Stash settings and store on app state for lifespan, deps and middleware
    app.state.settings = settings
    app.state.store = store

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from coin_spine.api.routers import coins

    async def _store_ready() -> bool:
        await asyncio.to_thread(app.state.store.ping)
        return True

    # Health endpoints at root level (no prefix) for container healthchecks
    app.include_router(
        create_health_router(
            "coin-spine",
            version=settings.api_version,
            checks=[HealthCheck("coin_store", _store_ready)],
        ),
    )

    app.include_router(coins.router, prefix=settings.api_prefix, tags=["coins"])

    return app
