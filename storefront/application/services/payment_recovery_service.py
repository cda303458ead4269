"""Payment URL recovery and payment method change."""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from storefront.application.dtos import PaymentSessionResponse
from storefront.application.interfaces import AuthenticatedUser, IPaymentGateway
from storefront.data.uow import create_uow
from storefront.domain.entities import Order
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import (
    ConflictError,
    NotFoundOrForbidden,
    PriceMismatch,
    UpstreamGatewayError,
)
from storefront.domain.value_objects import Money
from storefront.settings import StorefrontSettings

from .payment_sessions import build_session_request
from .reconciliation import proof_json, record_payment, resolve_order, utcnow

logger = logging.getLogger(__name__)


class PaymentRecoveryService:
    """
    Opens a fresh payment session for an order that is still payable.

    Each session gets its own attempt id so the gateway never sees the
    same order id twice.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        gateway: IPaymentGateway,
        storefront: StorefrontSettings,
    ) -> None:
        self._session_factory = session_factory
        self._gateway = gateway
        self._storefront = storefront

    async def recover(self, user: AuthenticatedUser, order_ref: str) -> PaymentSessionResponse:
        """New session for a pending order whose payment page was lost."""
        return await self._new_attempt(user, order_ref, expected_total=None, source="recover_payment_url")

    async def change_method(
        self,
        user: AuthenticatedUser,
        order_ref: str,
        expected_total: Optional[Decimal] = None,
    ) -> PaymentSessionResponse:
        """New session so the buyer can pick another payment method."""
        return await self._new_attempt(user, order_ref, expected_total, source="change_payment_method")

    async def _new_attempt(
        self,
        user: AuthenticatedUser,
        order_ref: str,
        expected_total: Optional[Decimal],
        source: str,
    ) -> PaymentSessionResponse:
        uow = create_uow(self._session_factory)
        async with uow:
            order = await resolve_order(uow, order_ref)
            if order is None or order.user_id != user.id:
                raise NotFoundOrForbidden("Order not found")

            self._ensure_payable(order)

            if expected_total is not None and Money(expected_total).rounded() != order.total.rounded():
                raise PriceMismatch(
                    "Order total changed",
                    details={
                        "expected_total": str(order.total.amount),
                        "submitted_total": str(expected_total),
                    },
                )

            payment = await uow.payments.get_for_order(order.id)
            if payment is not None and payment.status == OrderStatus.PAID:
                raise ConflictError("Order has already been paid")

            if payment is not None and payment.status == OrderStatus.PENDING:
                # Superseded attempt
                payment.record(
                    OrderStatus.CANCELLED,
                    proof_json(
                        {
                            "midtrans_order_id": order.gateway_order_id,
                            "superseded_at": utcnow().isoformat(),
                            "source": source,
                        }
                    ),
                )
                await uow.payments.upsert(payment)

            products = await uow.products.get_many(line.product_id for line in order.lines)
            await uow.commit()

        attempt_id = order.order_number.attempt_id()
        if attempt_id == order.gateway_order_id:
            # Minted in the same millisecond as the previous attempt
            previous_ms = int(attempt_id.rsplit("-", 1)[1])
            attempt_id = order.order_number.attempt_id(previous_ms + 1)
        logger.info(f"New payment attempt {attempt_id} for order {order.order_number} ({source})")

        try:
            session = await self._gateway.create_session(
                build_session_request(order, products, attempt_id, self._storefront.base_url)
            )
        except UpstreamGatewayError as exc:
            logger.error(f"Payment session for attempt {attempt_id} failed: {exc.message}")
            exc.details.setdefault("order_number", order.order_number.value)
            raise

        uow = create_uow(self._session_factory)
        async with uow:
            stored = await uow.orders.find_by_id(order.id)
            current = await uow.payments.get_for_order(order.id)
            if not stored.is_payable or (current is not None and current.status == OrderStatus.PAID):
                # Settled or cancelled while the gateway call was in flight
                logger.warning(
                    f"[{uow.execution_id}] Attempt {attempt_id} discarded: order {stored.order_number} "
                    f"is now {stored.status.value}"
                )
                raise ConflictError(
                    f"Order {stored.order_number} is no longer payable",
                    details={"current_status": stored.status.value},
                )
            stored.attach_payment_session(
                redirect_url=session.redirect_url,
                token=session.token,
                gateway_order_id=attempt_id,
                payment_method="midtrans",
            )
            await uow.orders.update(stored)
            await record_payment(
                uow,
                stored,
                OrderStatus.PENDING,
                proof_json(
                    {
                        "midtrans_order_id": attempt_id,
                        "generated_at": utcnow().isoformat(),
                        "source": source,
                    }
                ),
            )
            await uow.commit()

        return PaymentSessionResponse(
            success=True,
            payment_url=session.redirect_url,
            token=session.token,
            order_number=order.order_number.value,
            gateway_order_id=attempt_id,
        )

    @staticmethod
    def _ensure_payable(order: Order) -> None:
        if order.status.is_settled:
            raise ConflictError(
                f"Order {order.order_number} is already {order.status.value}",
                details={"current_status": order.status.value},
            )
        if order.status != OrderStatus.PENDING:
            raise ConflictError(
                f"Order {order.order_number} is no longer payable",
                details={"current_status": order.status.value},
            )
