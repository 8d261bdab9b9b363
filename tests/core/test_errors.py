"""Tests for coin_spine.core.errors."""

from __future__ import annotations

import uuid

from coin_spine.core.errors import (
    CoinNotFoundError,
    CoinSpineError,
    ConstraintViolationError,
    DatabaseError,
    ErrorCategory,
    NotFoundError,
    PriceNotFoundError,
    ValidationError,
    categorize_error,
)


class TestCategories:
    def test_default_categories(self):
        assert ValidationError("x").category == ErrorCategory.VALIDATION
        assert ConstraintViolationError("x").category == ErrorCategory.CONSTRAINT
        assert NotFoundError("x").category == ErrorCategory.NOT_FOUND
        assert DatabaseError("x").category == ErrorCategory.DATABASE
        assert CoinSpineError("x").category == ErrorCategory.INTERNAL

    def test_explicit_category_overrides_default(self):
        err = CoinSpineError("x", category=ErrorCategory.DATABASE)
        assert err.category == ErrorCategory.DATABASE

    def test_not_found_subclasses(self):
        assert issubclass(CoinNotFoundError, NotFoundError)
        assert issubclass(PriceNotFoundError, NotFoundError)


class TestContext:
    def test_with_context_is_fluent(self):
        err = ValidationError("bad").with_context(field="limit")
        assert isinstance(err, ValidationError)
        assert err.context == {"field": "limit"}

    def test_cause_is_chained(self):
        root = KeyError("k")
        err = DatabaseError("boom", cause=root)
        assert err.cause is root
        assert err.__cause__ is root

    def test_to_dict(self):
        err = ConstraintViolationError("dup", cause=ValueError("v")).with_context(name="btc")
        d = err.to_dict()
        assert d["error_type"] == "ConstraintViolationError"
        assert d["message"] == "dup"
        assert d["category"] == "CONSTRAINT"
        assert d["context"] == {"name": "btc"}
        assert d["cause"] == "v"

    def test_to_dict_omits_empty_fields(self):
        d = NotFoundError("missing").to_dict()
        assert "context" not in d
        assert "cause" not in d


class TestNotFoundErrors:
    def test_coin_not_found_by_id(self):
        coin_id = uuid.uuid4()
        err = CoinNotFoundError(coin_id)
        assert err.key == coin_id
        assert err.field == "id"
        assert str(coin_id) in err.message

    def test_coin_not_found_by_name(self):
        err = CoinNotFoundError("btc", field="name")
        assert err.context == {"name": "btc"}
        assert "name=btc" in str(err)

    def test_price_not_found(self):
        price_id = uuid.uuid4()
        err = PriceNotFoundError(price_id)
        assert err.price_id == price_id
        assert err.category == ErrorCategory.NOT_FOUND


class TestCategorizeError:
    def test_coin_spine_error(self):
        assert categorize_error(CoinNotFoundError("x")) == ErrorCategory.NOT_FOUND

    def test_value_error(self):
        assert categorize_error(ValueError("x")) == ErrorCategory.VALIDATION

    def test_unknown(self):
        assert categorize_error(RuntimeError("x")) == ErrorCategory.UNKNOWN
