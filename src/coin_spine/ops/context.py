"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the coin store handle, caller identity and
arbitrary metadata.  The store is constructed once by the composition root
(API lifespan or CLI command) and passed in here explicitly.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from coin_spine.core.repositories.coins import CoinRepository


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        store: The coin store every operation reads and writes through.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request: ``"api"``, ``"cli"``, ``"sdk"``.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    store: CoinRepository
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    metadata: dict[str, Any] = field(default_factory=dict)
