"""
Shared API router utilities.

Provides ``_handle_error()``, which converts a failed OperationResult into
a ``problem_response``.

Tags:
    coin-spine, api, utils, shared

Doc-Types: API_INFRASTRUCTURE
"""

from __future__ import annotations

from fastapi import Request

from coin_spine.api.middleware.errors import problem_response, status_for_error_code


def _handle_error(result, request: Request | None = None):
    """Convert a failed ``OperationResult`` into a Problem Details response.

    Uses the error code from the result to determine the HTTP status code,
    and the error message as the problem title.  The error's ``field``
    detail, when present, is reported as a field-level error.
    """
    error = result.error
    code = error.code if error else "INTERNAL"
    errors = []
    if error and "field" in error.details:
        errors.append({"code": code, "message": error.message, "field": error.details["field"]})
    return problem_response(
        status=status_for_error_code(code),
        title=error.message if error else "Operation failed",
        instance=str(request.url) if request is not None else "",
        errors=errors,
    )
