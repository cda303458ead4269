"""Domain value objects."""

from .value_objects import ExecutionID, Money
from .order_number import (
    ATTEMPT_SEPARATOR,
    GATEWAY_ORDER_ID_MAX_LENGTH,
    OrderNumber,
    base_order_number,
    build_attempt_id,
)

__all__ = [
    "ATTEMPT_SEPARATOR",
    "GATEWAY_ORDER_ID_MAX_LENGTH",
    "ExecutionID",
    "Money",
    "OrderNumber",
    "base_order_number",
    "build_attempt_id",
]
