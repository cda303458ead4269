"""SQLAlchemy implementations of the order and payment repositories."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.domain.entities import Order, PaymentRecord
from storefront.domain.enums import OrderStatus
from storefront.domain.repositories import OrderRepository, PaymentRepository

from ..mappers import OrderMapper, PaymentMapper
from ..models import OrderModel, PaymentModel


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    def _select(self):
        return select(OrderModel).options(selectinload(OrderModel.items))

    async def _first(self, statement) -> Optional[Order]:
        result = await self._session.execute(statement)
        model = result.scalar_one_or_none()
        if not model:
            return None
        return OrderMapper.to_domain(model)

    async def add(self, order: Order) -> Order:
        """Insert order and lines.

        Args:
            order: New Order aggregate

        Returns:
            Order with generated id and timestamps
        """
        order_model = OrderMapper.to_persistence(order)
        self._session.add(order_model)
        await self._session.flush()  # Propagate to DB without committing
        return OrderMapper.to_domain(order_model)

    async def update(self, order: Order) -> None:
        """Persist header changes.

        Args:
            order: Order aggregate loaded from this repository
        """
        if order.id is None:
            raise ValueError("Cannot update an order that was never persisted")
        existing = await self._session.get(OrderModel, order.id)
        if existing is None:
            raise ValueError(f"Order {order.id} does not exist")
        OrderMapper.update_persistence(order, existing)
        await self._session.flush()

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        return await self._first(self._select().where(OrderModel.id == order_id))

    async def find_by_order_number(self, order_number: str) -> Optional[Order]:
        return await self._first(self._select().where(OrderModel.order_number == order_number))

    async def find_by_gateway_order_id(self, gateway_order_id: str) -> Optional[Order]:
        return await self._first(
            self._select().where(OrderModel.gateway_order_id == gateway_order_id)
        )

    async def exists(self, order_number: str) -> bool:
        """Check if order number is taken (duplicate prevention).

        Args:
            order_number: Order number string

        Returns:
            True if order exists, False otherwise
        """
        result = await self._session.execute(
            select(OrderModel.id).where(OrderModel.order_number == order_number)
        )
        return result.scalar_one_or_none() is not None

    async def list_for_user(self, user_id: str, limit: int = 50) -> List[Order]:
        result = await self._session.execute(
            self._select()
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc())
            .limit(limit)
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def find_pending_older_than(self, cutoff: datetime) -> List[Order]:
        result = await self._session.execute(
            self._select()
            .where(OrderModel.status == OrderStatus.PENDING.value)
            .where(OrderModel.created_at < cutoff)
            .order_by(OrderModel.created_at)
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]


class SqlAlchemyPaymentRepository(PaymentRepository):
    """Payment records keyed by order id."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _model_for(self, order_id: str) -> Optional[PaymentModel]:
        result = await self._session.execute(
            select(PaymentModel).where(PaymentModel.order_id == order_id)
        )
        return result.scalar_one_or_none()

    async def get_for_order(self, order_id: str) -> Optional[PaymentRecord]:
        model = await self._model_for(order_id)
        return PaymentMapper.to_domain(model) if model else None

    async def upsert(self, record: PaymentRecord) -> PaymentRecord:
        model = await self._model_for(record.order_id)
        if model is None:
            model = PaymentModel()
            self._session.add(model)
        PaymentMapper.update_persistence(record, model)
        await self._session.flush()
        return PaymentMapper.to_domain(model)
