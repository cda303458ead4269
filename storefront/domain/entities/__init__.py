from .catalog import Product, SizeStock
from .maintenance import MaintenanceSettings
from .order import FULFILMENT_TRANSITIONS, Order, OrderLine
from .payment import PaymentRecord

__all__ = [
    "FULFILMENT_TRANSITIONS",
    "MaintenanceSettings",
    "Order",
    "OrderLine",
    "PaymentRecord",
    "Product",
    "SizeStock",
]
