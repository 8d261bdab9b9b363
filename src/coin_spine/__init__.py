"""
coin-spine: a coin and price-history store with a REST and CLI surface.

Layers, innermost first:

- ``coin_spine.domain``: Coin / Price value models
- ``coin_spine.core``: errors, logging, settings, ORM, the coin store
- ``coin_spine.ops``: operation functions (the query façade) and the seed loader
- ``coin_spine.api``: FastAPI application
- ``coin_spine.cli``: Typer command line
"""

__version__ = "0.1.0"
