"""Database models."""

from .base import Base
from .maintenance_model import MaintenanceSettingsModel
from .order_model import OrderItemModel, OrderModel
from .payment_model import PaymentModel
from .product_model import ProductModel, ProductSizeModel

__all__ = [
    "Base",
    "MaintenanceSettingsModel",
    "OrderItemModel",
    "OrderModel",
    "PaymentModel",
    "ProductModel",
    "ProductSizeModel",
]
