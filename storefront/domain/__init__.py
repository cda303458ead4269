"""Domain layer - pure domain models and interfaces."""

from .entities import MaintenanceSettings, Order, OrderLine, PaymentRecord, Product, SizeStock
from .enums import OrderStatus, ShippingMethod
from .repositories import (
    InventoryRepository,
    MaintenanceRepository,
    OrderRepository,
    PaymentRepository,
    ProductRepository,
)
from .value_objects import ExecutionID, Money, OrderNumber

__all__ = [
    "ExecutionID",
    "InventoryRepository",
    "MaintenanceRepository",
    "MaintenanceSettings",
    "Money",
    "Order",
    "OrderLine",
    "OrderNumber",
    "OrderRepository",
    "OrderStatus",
    "PaymentRecord",
    "PaymentRepository",
    "Product",
    "ProductRepository",
    "ShippingMethod",
    "SizeStock",
]
