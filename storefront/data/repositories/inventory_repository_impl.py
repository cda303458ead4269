"""SQLAlchemy implementations of the catalog, stock and maintenance repositories."""

import logging
from typing import Dict, Iterable, Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domain.entities import MaintenanceSettings, Product
from storefront.domain.repositories import (
    InventoryRepository,
    MaintenanceRepository,
    ProductRepository,
)

from ..mappers import MaintenanceMapper, ProductMapper
from ..models import MaintenanceSettingsModel, ProductModel, ProductSizeModel

logger = logging.getLogger(__name__)


class SqlAlchemyInventoryRepository(InventoryRepository):
    """
    Stock ledger over product_sizes.

    All writes are bulk UPDATE statements evaluated by the database, never
    read-then-write in Python.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _size_row(self, product_id: str, size: str):
        return (ProductSizeModel.product_id == product_id) & (ProductSizeModel.size == size)

    async def get_quantity(self, product_id: str, size: str) -> Optional[int]:
        result = await self._session.execute(
            select(ProductSizeModel.quantity).where(self._size_row(product_id, size))
        )
        return result.scalar_one_or_none()

    async def reserve(self, product_id: str, size: str, quantity: int) -> bool:
        result = await self._session.execute(
            update(ProductSizeModel)
            .where(self._size_row(product_id, size))
            .where(ProductSizeModel.quantity >= quantity)
            .values(quantity=ProductSizeModel.quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        reserved = result.rowcount == 1
        if not reserved:
            logger.info(f"Reservation refused for {product_id}/{size} x{quantity}")
        return reserved

    async def release(self, product_id: str, size: str, quantity: int) -> None:
        result = await self._session.execute(
            update(ProductSizeModel)
            .where(self._size_row(product_id, size))
            .values(quantity=ProductSizeModel.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            logger.warning(f"No size stock row to release into for {product_id}/{size}")

    async def take_floored(self, product_id: str, size: str, quantity: int) -> None:
        await self._session.execute(
            update(ProductSizeModel)
            .where(self._size_row(product_id, size))
            .values(
                quantity=case(
                    (ProductSizeModel.quantity >= quantity, ProductSizeModel.quantity - quantity),
                    else_=0,
                )
            )
            .execution_options(synchronize_session=False)
        )

    async def recompute_product_stock(self, product_id: str) -> int:
        result = await self._session.execute(
            select(func.coalesce(func.sum(ProductSizeModel.quantity), 0)).where(
                ProductSizeModel.product_id == product_id
            )
        )
        total = int(result.scalar_one())
        await self._session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock_quantity=total)
            .execution_options(synchronize_session=False)
        )
        return total


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_many(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        ids = list(set(product_ids))
        if not ids:
            return {}
        result = await self._session.execute(
            select(ProductModel).where(ProductModel.id.in_(ids)).where(ProductModel.is_active.is_(True))
        )
        return {model.id: ProductMapper.to_domain(model) for model in result.scalars().all()}


class SqlAlchemyMaintenanceRepository(MaintenanceRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _current(self) -> Optional[MaintenanceSettingsModel]:
        result = await self._session.execute(
            select(MaintenanceSettingsModel).order_by(MaintenanceSettingsModel.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def get(self) -> Optional[MaintenanceSettings]:
        model = await self._current()
        return MaintenanceMapper.to_domain(model) if model else None

    async def save(self, settings: MaintenanceSettings) -> MaintenanceSettings:
        model = await self._current()
        if model is None:
            model = MaintenanceSettingsModel()
            self._session.add(model)
        MaintenanceMapper.update_persistence(settings, model)
        await self._session.flush()
        return MaintenanceMapper.to_domain(model)
