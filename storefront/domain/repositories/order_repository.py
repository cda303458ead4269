"""Repository interfaces for the Order aggregate and its Payment Record."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..entities.order import Order
from ..entities.payment import PaymentRecord


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Insert a new order with its lines.

        Args:
            order: Order aggregate to persist

        Returns:
            The order with its generated id and timestamps
        """
        pass

    @abstractmethod
    async def update(self, order: Order) -> None:
        """Persist header changes of an existing order (lines are immutable)."""
        pass

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def find_by_order_number(self, order_number: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def find_by_gateway_order_id(self, gateway_order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def exists(self, order_number: str) -> bool:
        """Check if an order number is already taken."""
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str, limit: int = 50) -> List[Order]:
        """Caller's orders, newest first."""
        pass

    @abstractmethod
    async def find_pending_older_than(self, cutoff: datetime) -> List[Order]:
        """Pending orders created before cutoff."""
        pass


class PaymentRepository(ABC):
    """Abstract repository for Payment Records (one per order)."""

    @abstractmethod
    async def get_for_order(self, order_id: str) -> Optional[PaymentRecord]:
        pass

    @abstractmethod
    async def upsert(self, record: PaymentRecord) -> PaymentRecord:
        """Insert or replace the record keyed by order_id."""
        pass
