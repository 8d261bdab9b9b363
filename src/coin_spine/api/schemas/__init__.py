"""Pydantic request/response schemas for the coin-spine API."""
