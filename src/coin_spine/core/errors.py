"""
Structured error types for coin-spine.

Every failure the coin store or the operation layer can report is a
:class:`CoinSpineError` subclass carrying a category, a context mapping and
an optional chained cause.  Transports (REST, CLI) never inspect messages;
they route on the error type or on the category.

Architecture:
    ::

        ┌───────────────────────────────────────────────────────────┐
        │                      CoinSpineError                        │
        │           (category, context, cause)                       │
        ├───────────────────────────────────────────────────────────┤
        │                                                            │
        │  ValidationError     ConstraintViolationError              │
        │  (VALIDATION)        (CONSTRAINT)                          │
        │                                                            │
        │  NotFoundError       DatabaseError                         │
        │  (NOT_FOUND)         (DATABASE)                            │
        │     │                                                      │
        │  CoinNotFoundError                                         │
        │  PriceNotFoundError                                        │
        └───────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Raise a bare Exception for an expected failure
    ✅ DO: Pick the subclass that names the failure

    ❌ DON'T: Swallow the driver exception
    ✅ DO: Pass it as ``cause=`` so the traceback keeps it

Tags:
    error-handling, exception-hierarchy, error-context, coin-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    VALIDATION = "VALIDATION"
    CONSTRAINT = "CONSTRAINT"
    NOT_FOUND = "NOT_FOUND"
    DATABASE = "DATABASE"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


class CoinSpineError(Exception):
    """
    Base class for all coin-spine errors.

    Subclasses set ``default_category``; callers may attach structured
    context with :meth:`with_context` and chain the underlying exception
    with ``cause=``.

    Examples:
        >>> error = CoinSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = NotFoundError("missing").with_context(name="coin 1")
        >>> error.context["name"]
        'coin 1'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CoinSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConstraintViolationError("Duplicate name").with_context(
                name="coin 1",
            )
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = {k: str(v) for k, v in self.context.items()}
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CALLER ERRORS
# =============================================================================


class ValidationError(CoinSpineError):
    """
    Malformed caller input.

    Raised before the store is touched: unparsable identifiers, negative
    page sizes, prices without a date or with a non-decimal value.
    """

    default_category = ErrorCategory.VALIDATION


class ConstraintViolationError(CoinSpineError):
    """
    A write rejected by a store constraint.

    Covers the unique ``name`` index and required fields.  The enclosing
    transaction is rolled back, so nothing from the write is visible.
    """

    default_category = ErrorCategory.CONSTRAINT


# =============================================================================
# LOOKUP ERRORS
# =============================================================================


class NotFoundError(CoinSpineError):
    """Lookup or delete referencing a key that does not exist."""

    default_category = ErrorCategory.NOT_FOUND


class CoinNotFoundError(NotFoundError):
    """No coin with the given identifier or name."""

    def __init__(self, key: Any, *, field: str = "id"):
        self.key = key
        self.field = field
        super().__init__(f"Coin not found: {field}={key}", context={field: key})


class PriceNotFoundError(NotFoundError):
    """No price with the given identifier."""

    def __init__(self, price_id: Any):
        self.price_id = price_id
        super().__init__(f"Price not found: id={price_id}", context={"id": price_id})


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class DatabaseError(CoinSpineError):
    """Unexpected backing-store failure (driver, connection, SQL)."""

    default_category = ErrorCategory.DATABASE


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, CoinSpineError):
        return error.category
    if isinstance(error, ValueError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "CoinSpineError",
    "ValidationError",
    "ConstraintViolationError",
    "NotFoundError",
    "CoinNotFoundError",
    "PriceNotFoundError",
    "DatabaseError",
    "categorize_error",
]
