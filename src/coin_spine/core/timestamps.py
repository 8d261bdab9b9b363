"""
UTC timestamp utilities (stdlib-only).

Every timestamp that crosses the store boundary is timezone-aware UTC.
Naive datetimes handed in by callers are interpreted as UTC rather than
local time, so the same instant always round-trips to the same value.

Tags:
    timestamps, utc, datetime, coin-spine, stdlib-only

STDLIB ONLY - NO PYDANTIC.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Return *dt* as an aware UTC datetime (naive input is taken as UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
