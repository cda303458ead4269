"""Application service for Order operations."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from storefront.application.dtos import OrderDTO, OrderListDTO
from storefront.application.interfaces import AuthenticatedUser
from storefront.data.uow import UnitOfWork, create_uow
from storefront.domain.entities import Order
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import NotFoundOrForbidden

from .reconciliation import proof_json, record_payment, release_order_stock, utcnow

logger = logging.getLogger(__name__)


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Buyer queries over their own orders
    - Buyer cancellation of unpaid orders
    - Operator fulfilment transitions
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize order application service.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory

    async def list_orders(self, user: AuthenticatedUser, limit: int = 50) -> OrderListDTO:
        """List the caller's orders, newest first.

        Args:
            user: Authenticated buyer
            limit: Maximum number of orders to return

        Returns:
            OrderListDTO
        """
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.list_for_user(user.id, limit=limit)
            return OrderListDTO(
                orders=[OrderDTO.from_entity(order) for order in orders],
                total=len(orders),
            )

    async def get_order(self, user: AuthenticatedUser, order_number: str) -> OrderDTO:
        """Get one of the caller's orders with lines and payment record.

        Raises:
            NotFoundOrForbidden: Unknown order or owned by someone else
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_order_number(order_number)
            if order is None or order.user_id != user.id:
                raise NotFoundOrForbidden("Order not found")
            payment = await uow.payments.get_for_order(order.id)
            return OrderDTO.from_entity(order, payment)

    async def cancel_order(self, user: AuthenticatedUser, order_ref: str) -> OrderDTO:
        """Cancel an unpaid order and give its stock back.

        Args:
            user: Authenticated buyer
            order_ref: Order id or order number

        Raises:
            NotFoundOrForbidden: Unknown order or owned by someone else
            ConflictError: Order is not pending
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._find(uow, order_ref)
            if order is None or order.user_id != user.id:
                raise NotFoundOrForbidden("Order not found")

            order.cancel_by_user()
            await self._release(uow, order, source="user_cancel")
            await uow.commit()

            logger.info(f"[{uow.execution_id}] Order {order.order_number} cancelled by user {user.id}")
            payment = await uow.payments.get_for_order(order.id)
            return OrderDTO.from_entity(order, payment)

    async def update_status(
        self,
        order_number: str,
        new_status: OrderStatus,
        tracking_number: Optional[str] = None,
    ) -> OrderDTO:
        """Operator fulfilment transition.

        Raises:
            NotFoundOrForbidden: Unknown order
            ConflictError: Transition not allowed
            ValidationError: Shipping without tracking number
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_order_number(order_number)
            if order is None:
                raise NotFoundOrForbidden("Order not found")

            previous = order.status
            order.advance_fulfilment(new_status, tracking_number)
            if new_status == OrderStatus.CANCELLED:
                await self._release(uow, order, source="admin_cancel")
            else:
                await uow.orders.update(order)
            await uow.commit()

            logger.info(
                f"[{uow.execution_id}] Order {order_number}: {previous.value} -> {new_status.value}"
            )
            payment = await uow.payments.get_for_order(order.id)
            return OrderDTO.from_entity(order, payment)

    @staticmethod
    async def _find(uow: UnitOfWork, order_ref: str) -> Optional[Order]:
        order = await uow.orders.find_by_order_number(order_ref)
        if order is None:
            order = await uow.orders.find_by_id(order_ref)
        return order

    @staticmethod
    async def _release(uow: UnitOfWork, order: Order, source: str) -> None:
        await release_order_stock(uow, order)
        await uow.orders.update(order)
        payment = await uow.payments.get_for_order(order.id)
        if payment is not None and payment.status != OrderStatus.PAID:
            await record_payment(
                uow,
                order,
                OrderStatus.CANCELLED,
                proof_json({"source": source, "cancelled_at": utcnow().isoformat()}),
            )
