"""Repositories over the coin-spine ORM.

Tags:
    repository, database, coin-spine
"""

from coin_spine.core.repositories.coins import CoinRepository, check_page

__all__ = ["CoinRepository", "check_page"]
