"""Domain value objects."""

from .value_objects import CorrelationId, ExecutionID
from .order_id import OrderId

__all__ = [
    "CorrelationId",
    "ExecutionID",
    "OrderId",
]
