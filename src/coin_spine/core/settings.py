"""Base settings for coin-spine.

Configuration is explicit, validated, and environment-driven.  Every field
can be overridden with a ``COIN_SPINE_``-prefixed environment variable or a
``.env`` file in the working directory.

Examples:
    >>> from coin_spine.core.settings import CoinSpineSettings
    >>> CoinSpineSettings(database_url="sqlite:///:memory:").seed_coin_count
    10

Tags:
    settings, configuration, pydantic, environment, coin-spine

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoinSpineSettings(BaseSettings):
    """Settings shared by the API server and the CLI.

    Fields
    ──────
    database_url      : SQLAlchemy URL of the coin store
    echo_sql          : Log every SQL statement
    log_level         : Structlog log level
    json_logs         : Force JSON (True) / console (False) / auto (None)
    seed_on_startup   : Run the seed loader once when the API starts
    seed_coin_count   : Coins written per seed run
    seed_price_count  : Prices written per seeded coin
    seed_max_value    : Upper bound of the uniform price distribution
    """

    model_config = SettingsConfigDict(
        env_prefix="COIN_SPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite:///coin_spine.db",
        description="SQLAlchemy-style connection URL",
    )
    echo_sql: bool = False

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None

    # ── Seeding ──────────────────────────────────────────────────
    seed_on_startup: bool = True
    seed_coin_count: int = Field(default=10, ge=0)
    seed_price_count: int = Field(default=10, ge=0)
    seed_max_value: int = Field(default=100, gt=0)
