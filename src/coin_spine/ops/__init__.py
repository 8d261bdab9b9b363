"""
Operations layer: the transport-agnostic operation set over the coin store.

Every operation takes an :class:`OperationContext` and returns an
:class:`OperationResult`.  The REST routers and the CLI are thin adapters
over these functions.
"""

from coin_spine.ops.context import OperationContext
from coin_spine.ops.result import OperationError, OperationResult

__all__ = ["OperationContext", "OperationError", "OperationResult"]
