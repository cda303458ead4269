from .inventory_repository import InventoryRepository, MaintenanceRepository, ProductRepository
from .order_repository import OrderRepository, PaymentRepository

__all__ = [
    "InventoryRepository",
    "MaintenanceRepository",
    "OrderRepository",
    "PaymentRepository",
    "ProductRepository",
]
