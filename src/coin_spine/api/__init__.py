"""
coin-spine REST API.

FastAPI transport over the coin operations in :mod:`coin_spine.ops`.
Run it with ``coin-spine serve start`` or any ASGI server::

    uvicorn coin_spine.api:create_app --factory
"""

from coin_spine.api.app import create_app

__all__ = ["create_app"]
