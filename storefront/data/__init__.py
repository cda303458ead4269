"""Data layer - infrastructure persistence and mapping."""

from .mappers import OrderLineMapper, OrderMapper, PaymentMapper, ProductMapper
from .models import Base
from .repositories import (
    SqlAlchemyInventoryRepository,
    SqlAlchemyMaintenanceRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyProductRepository,
)
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "create_uow",
    "OrderLineMapper",
    "OrderMapper",
    "PaymentMapper",
    "ProductMapper",
    "SqlAlchemyInventoryRepository",
    "SqlAlchemyMaintenanceRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyProductRepository",
    "UnitOfWork",
]
