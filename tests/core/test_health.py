"""Tests for the health router factory."""

from __future__ import annotations

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from coin_spine.core.health import HealthCheck, create_health_router


async def _ok() -> bool:
    return True


async def _down() -> bool:
    raise ConnectionError("store unreachable")


async def _slow() -> bool:
    await asyncio.sleep(1)
    return True


def _client(checks: list[HealthCheck]) -> TestClient:
    app = FastAPI()
    app.include_router(create_health_router("coin-spine", version="9.9.9", checks=checks))
    return TestClient(app)


class TestHealthEndpoints:
    def test_all_healthy(self):
        resp = _client([HealthCheck("coin_store", _ok)]).get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["service"] == "coin-spine"
        assert body["version"] == "9.9.9"
        assert body["checks"]["coin_store"]["status"] == "healthy"

    def test_required_failure_is_unhealthy(self):
        resp = _client([HealthCheck("coin_store", _down)]).get("/health")
        assert resp.status_code == 503
        body = resp.json()
        assert body["status"] == "unhealthy"
        assert "store unreachable" in body["checks"]["coin_store"]["error"]

    def test_optional_failure_is_degraded(self):
        client = _client([HealthCheck("coin_store", _ok), HealthCheck("extra", _down, required=False)])
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "degraded"

    @pytest.mark.parametrize(
        ("checks", "expected"),
        [
            ([HealthCheck("coin_store", _ok)], 200),
            ([HealthCheck("extra", _down, required=False)], 503),
        ],
    )
    def test_readiness(self, checks, expected):
        assert _client(checks).get("/health/ready").status_code == expected

    def test_timeout(self):
        resp = _client([HealthCheck("coin_store", _slow, timeout_s=0.01)]).get("/health")
        assert resp.json()["checks"]["coin_store"]["error"] == "timeout"

    def test_liveness_skips_checks(self):
        resp = _client([HealthCheck("coin_store", _down)]).get("/health/live")
        assert resp.status_code == 200
        assert resp.json() == {"status": "alive"}

    def test_no_checks(self):
        assert _client([]).get("/health").json()["status"] == "healthy"
