"""Tests for the coin-spine CLI via typer's CliRunner.

Commands run against a temporary SQLite file passed with ``--database``.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from coin_spine.cli.app import app
from coin_spine.core.orm.session import create_coin_engine
from coin_spine.core.repositories.coins import CoinRepository

runner = CliRunner()


@pytest.fixture()
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'cli.db'}"


@pytest.fixture()
def seeded(db_url):
    result = runner.invoke(app, ["db", "seed", "--count", "5", "--prices", "3", "-d", db_url])
    assert result.exit_code == 0, result.output
    return db_url


def _store(db_url: str) -> CoinRepository:
    return CoinRepository.from_engine(create_coin_engine(db_url))


def _json(result) -> object:
    return json.loads(result.stdout)


# ─── Root ────────────────────────────────────────────────────────────────


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("coin-spine ")

    def test_help_lists_groups(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for group in ("db", "coins", "serve"):
            assert group in result.output


# ─── db ──────────────────────────────────────────────────────────────────


class TestDbCommands:
    def test_init(self, db_url):
        result = runner.invoke(app, ["db", "init", "-d", db_url, "--json"])
        assert result.exit_code == 0, result.output
        assert _json(result) == {"schema": "ready", "coins": 0}

    def test_seed_json(self, db_url):
        result = runner.invoke(app, ["db", "seed", "-n", "2", "--prices", "4", "-d", db_url, "--json"])
        assert result.exit_code == 0, result.output
        assert _json(result) == {"coins_added": 2, "prices_added": 8, "total_coins": 2}

    def test_seed_twice_appends(self, seeded):
        runner.invoke(app, ["db", "seed", "--count", "5", "-d", seeded])
        assert _store(seeded).count() == 10

    def test_seed_rejects_negative_count(self, db_url):
        result = runner.invoke(app, ["db", "seed", "--count", "-1", "-d", db_url])
        assert result.exit_code != 0


# ─── coins ───────────────────────────────────────────────────────────────


class TestCoinsList:
    def test_table(self, seeded):
        result = runner.invoke(app, ["coins", "list", "-d", seeded])
        assert result.exit_code == 0, result.output
        assert "Coins" in result.output

    def test_json(self, seeded):
        result = runner.invoke(app, ["coins", "list", "-d", seeded, "--json"])
        data = _json(result)
        assert len(data) == 5
        assert all(len(c["price_list"]) == 3 for c in data)
        assert isinstance(data[0]["price_list"][0]["value"], str)

    def test_name_desc(self, seeded):
        result = runner.invoke(app, ["coins", "list", "--order", "name-desc", "-d", seeded, "--json"])
        names = [c["name"] for c in _json(result)]
        assert names == sorted(names, reverse=True)

    def test_start_date_desc_with_limit(self, seeded):
        result = runner.invoke(
            app,
            ["coins", "list", "--order", "start-date-desc", "--limit", "2", "-d", seeded, "--json"],
        )
        names = [c["name"].split("-")[0] for c in _json(result)]
        assert names == ["coin 1", "coin 2"]

    def test_description_order_with_limit(self, seeded):
        result = runner.invoke(
            app,
            ["coins", "list", "-o", "description-desc-name-asc", "-l", "3", "-d", seeded, "--json"],
        )
        assert len(_json(result)) == 3

    def test_first_with_limit(self, seeded):
        result = runner.invoke(app, ["coins", "list", "--limit", "4", "-d", seeded, "--json"])
        assert len(_json(result)) == 4

    def test_bad_order(self, seeded):
        result = runner.invoke(app, ["coins", "list", "--order", "sideways", "-d", seeded])
        assert result.exit_code != 0

    def test_empty(self, db_url):
        result = runner.invoke(app, ["coins", "list", "-d", db_url])
        assert result.exit_code == 0
        assert "No items" in result.output


class TestCoinsShowDelete:
    def test_show(self, seeded):
        name = _store(seeded).find_all()[0].name
        result = runner.invoke(app, ["coins", "show", name, "-d", seeded, "--json"])
        assert result.exit_code == 0, result.output
        assert _json(result)["name"] == name

    def test_show_table_includes_prices(self, seeded):
        name = _store(seeded).find_all()[0].name
        result = runner.invoke(app, ["coins", "show", name, "-d", seeded])
        assert result.exit_code == 0
        assert "price_list" in result.output

    def test_show_missing(self, seeded):
        result = runner.invoke(app, ["coins", "show", "doge", "-d", seeded])
        assert result.exit_code == 1

    def test_delete(self, seeded):
        coin = _store(seeded).find_all()[0]
        result = runner.invoke(app, ["coins", "delete", str(coin.id), "-d", seeded])
        assert result.exit_code == 0, result.output
        assert "Deleted coin" in result.output
        assert _store(seeded).count() == 4

    def test_delete_missing(self, seeded):
        result = runner.invoke(app, ["coins", "delete", "00000000-0000-0000-0000-000000000000", "-d", seeded])
        assert result.exit_code == 1

    def test_delete_malformed(self, seeded):
        result = runner.invoke(app, ["coins", "delete", "nope", "-d", seeded])
        assert result.exit_code == 1


# ─── serve ───────────────────────────────────────────────────────────────


class TestServe:
    @patch("coin_spine.cli.serve.uvicorn.run")
    def test_start(self, mock_run):
        result = runner.invoke(app, ["serve", "start", "--port", "9000"])
        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == "coin_spine.api:create_app"
        assert kwargs["factory"] is True
        assert kwargs["port"] == 9000
