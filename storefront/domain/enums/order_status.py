"""
Order Status Enum.

Status values for the order lifecycle.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order status values."""

    PENDING = "pending"
    PAID = "paid"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.FAILED)

    @property
    def is_settled(self) -> bool:
        """Payment captured; the order can no longer be re-paid."""
        return self in (
            OrderStatus.PAID,
            OrderStatus.PROCESSING,
            OrderStatus.SHIPPED,
            OrderStatus.DELIVERED,
        )

    @property
    def releases_stock(self) -> bool:
        return self in (OrderStatus.CANCELLED, OrderStatus.FAILED)


class ShippingMethod(str, Enum):
    STANDARD = "standard"
    EXPRESS = "express"
