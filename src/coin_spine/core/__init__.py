"""
coin-spine core primitives: errors, logging, settings, timestamps, ORM and
the coin store.

Submodules are imported explicitly (``from coin_spine.core.errors import
...``); this package does not re-export them so that importing
``coin_spine.core.errors`` never drags in SQLAlchemy.
"""
