"""Repository interfaces for catalog and per-size stock."""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from ..entities.catalog import Product
from ..entities.maintenance import MaintenanceSettings


class InventoryRepository(ABC):
    """
    Per-(product, size) stock ledger.

    Every mutation is a single statement so concurrent requests never
    read-modify-write the same row.
    """

    @abstractmethod
    async def get_quantity(self, product_id: str, size: str) -> Optional[int]:
        """Current quantity, or None when the size row does not exist."""
        pass

    @abstractmethod
    async def reserve(self, product_id: str, size: str, quantity: int) -> bool:
        """Conditional decrement; False when stock is short."""
        pass

    @abstractmethod
    async def release(self, product_id: str, size: str, quantity: int) -> None:
        """Increment stock back."""
        pass

    @abstractmethod
    async def take_floored(self, product_id: str, size: str, quantity: int) -> None:
        """Decrement stock, never below zero."""
        pass

    @abstractmethod
    async def recompute_product_stock(self, product_id: str) -> int:
        """Write the sum of size stock onto the product row and return it."""
        pass


class ProductRepository(ABC):

    @abstractmethod
    async def get_many(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        """Active products keyed by id. Missing or inactive ids are absent."""
        pass


class MaintenanceRepository(ABC):

    @abstractmethod
    async def get(self) -> Optional[MaintenanceSettings]:
        pass

    @abstractmethod
    async def save(self, settings: MaintenanceSettings) -> MaintenanceSettings:
        pass
