"""
API-specific settings.

Extends :class:`~coin_spine.core.settings.CoinSpineSettings` with the
parameters that govern the REST transport (bind address, prefix, CORS).

All values can be overridden via ``COIN_SPINE_``-prefixed environment
variables, e.g. ``COIN_SPINE_API_PREFIX=/v2``.
"""

from __future__ import annotations

from pydantic import Field

from coin_spine.core.settings import CoinSpineSettings


class CoinSpineAPISettings(CoinSpineSettings):
    """Settings for the coin-spine REST API.

    Order of precedence (highest → lowest):
        1. Environment variables (``COIN_SPINE_API_PREFIX``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Bind port")
    debug: bool = Field(default=False, description="Expose exception text in 500 responses")

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api/v1", description="URL prefix for all endpoints")
    api_title: str = Field(default="coin-spine API", description="OpenAPI title")
    api_version: str = Field(default="0.1.0", description="OpenAPI version string")

    # ── CORS ─────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
