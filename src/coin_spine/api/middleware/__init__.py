"""HTTP middleware and exception handlers for the coin-spine API."""
