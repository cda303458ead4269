"""Repository implementations."""

from .inventory_repository_impl import (
    SqlAlchemyInventoryRepository,
    SqlAlchemyMaintenanceRepository,
    SqlAlchemyProductRepository,
)
from .order_repository_impl import SqlAlchemyOrderRepository, SqlAlchemyPaymentRepository

__all__ = [
    "SqlAlchemyInventoryRepository",
    "SqlAlchemyMaintenanceRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyProductRepository",
]
