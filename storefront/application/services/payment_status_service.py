"""Client-driven payment status reconciliation."""

import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import async_sessionmaker

from storefront.application.dtos import OrderDTO, PaymentStatusRequest, PaymentStatusResponse
from storefront.application.interfaces import (
    AuthenticatedUser,
    GatewayTransactionStatus,
    IPaymentGateway,
)
from storefront.data.uow import create_uow
from storefront.domain.entities import Order
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import NotFoundOrForbidden, UpstreamGatewayError
from storefront.domain.payment_rules import SETTLING_TRANSACTION_STATUSES, map_transaction_status

from .reconciliation import apply_gateway_outcome, proof_json, resolve_order, utcnow

logger = logging.getLogger(__name__)


class PaymentStatusService:
    """
    Reconciles an order when the buyer returns from the hosted page.

    Never touches stock; stock follows the webhook only.
    """

    def __init__(self, session_factory: async_sessionmaker, gateway: IPaymentGateway) -> None:
        self._session_factory = session_factory
        self._gateway = gateway

    async def check(self, user: AuthenticatedUser, request: PaymentStatusRequest) -> PaymentStatusResponse:
        """Resolve the current payment status of the caller's order.

        Source order: gateway status API, then callback parameters when the
        gateway cannot be reached, then the stored status. A settling
        callback is never taken on its own word.
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await resolve_order(uow, request.order_id)
            if order is None or order.user_id != user.id:
                raise NotFoundOrForbidden("Order not found")

            source, transaction_status, fraud_status, status_code = await self._pick_source(
                order, request
            )

            mapped = map_transaction_status(transaction_status, fraud_status, order.status)
            await apply_gateway_outcome(
                uow,
                order,
                mapped,
                proof=proof_json(
                    {
                        "source": source,
                        "order_id": request.order_id,
                        "transaction_status": transaction_status,
                        "status_code": status_code,
                        "fraud_status": fraud_status,
                        "checked_at": utcnow().isoformat(),
                    }
                ),
                mutate_stock=False,
            )
            await uow.commit()
            payment = await uow.payments.get_for_order(order.id)

        return PaymentStatusResponse(
            order=OrderDTO.from_entity(order, payment),
            payment_status=transaction_status,
        )

    async def _pick_source(
        self, order: Order, request: PaymentStatusRequest
    ) -> Tuple[str, str, Optional[str], Optional[str]]:
        # Callback parameters come from the buyer's browser; the gateway wins
        reachable, remote = await self._query_gateway(order)
        if remote is not None:
            return "gateway", remote.transaction_status, remote.fraud_status, remote.status_code
        if reachable:
            # No transaction under the active attempt id yet
            return "gateway", "pending", None, "404"

        if request.transaction_status:
            status = request.transaction_status.lower()
            if status in SETTLING_TRANSACTION_STATUSES:
                logger.warning(
                    f"Unconfirmed {status} callback for {order.order_number} ignored; "
                    "waiting for the gateway notification"
                )
            elif order.status == OrderStatus.PENDING:
                return "callback", status, None, request.status_code

        stored = "settlement" if order.status.is_settled else "pending"
        return "stored", stored, None, None

    async def _query_gateway(
        self, order: Order
    ) -> Tuple[bool, Optional[GatewayTransactionStatus]]:
        """
        Returns:
            (reachable, status); status is None when the gateway has no
            such transaction or could not be asked
        """
        gateway_order_id = order.gateway_order_id or order.order_number.value
        try:
            return True, await self._gateway.get_status(gateway_order_id)
        except UpstreamGatewayError as exc:
            logger.warning(f"Status query for {gateway_order_id} failed: {exc.message}")
            return False, None
