"""Application service reconciling gateway notifications."""

import logging
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.ext.asyncio import async_sessionmaker

from storefront.application.dtos import WebhookResponse, parse_notification
from storefront.data.uow import create_uow
from storefront.domain.entities import Order
from storefront.domain.errors import ConfigurationError, InvalidSignature
from storefront.domain.payment_rules import (
    SETTLING_TRANSACTION_STATUSES,
    map_transaction_status,
    verify_signature,
)

from .reconciliation import (
    apply_gateway_outcome,
    payment_status_for,
    proof_json,
    record_payment,
    resolve_order,
)

logger = logging.getLogger(__name__)


class WebhookReconciler:
    """
    Applies gateway notifications to orders, payment records and stock.

    Safe to call any number of times with the same notification.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        server_key: str,
        amount_tolerance: Decimal = Decimal("0.01"),
    ) -> None:
        self._session_factory = session_factory
        self._server_key = server_key
        self._amount_tolerance = amount_tolerance

    async def handle(self, payload: Dict[str, Any]) -> WebhookResponse:
        """Verify and apply one notification.

        Args:
            payload: Raw notification body

        Returns:
            WebhookResponse; "ignored" for unknown orders or amount mismatch

        Raises:
            ValidationError: Required fields missing
            ConfigurationError: Server key not configured
            InvalidSignature: Signature did not verify
        """
        if not self._server_key:
            raise ConfigurationError("Payment gateway server key is not configured")

        notification = parse_notification(payload)

        if not verify_signature(
            notification.order_id,
            notification.status_code,
            notification.gross_amount,
            self._server_key,
            notification.signature_key,
        ):
            logger.warning(f"Invalid signature on notification for {notification.order_id}")
            raise InvalidSignature("Invalid signature")

        uow = create_uow(self._session_factory)
        async with uow:
            order = await resolve_order(uow, notification.order_id)
            if order is None:
                logger.warning(
                    f"[{uow.execution_id}] Notification for unknown order {notification.order_id} ignored"
                )
                return WebhookResponse(status="ignored", reason="order_not_found")

            if not order.total.is_close_to(Decimal(notification.gross_amount), self._amount_tolerance):
                logger.warning(
                    f"[{uow.execution_id}] Amount mismatch for {order.order_number}: "
                    f"notified {notification.gross_amount}, expected {order.total.amount}"
                )
                return WebhookResponse(
                    status="ignored", order_id=order.order_number.value, reason="amount_mismatch"
                )

            if self._is_superseded(order, notification.order_id, notification.transaction_status):
                logger.warning(
                    f"[{uow.execution_id}] {notification.transaction_status} for superseded attempt "
                    f"{notification.order_id} ignored; active attempt is {order.gateway_order_id}"
                )
                await record_payment(
                    uow, order, payment_status_for(order.status), proof_json(notification.raw)
                )
                await uow.commit()
                return WebhookResponse(
                    status="ignored", order_id=order.order_number.value, reason="superseded_attempt"
                )

            mapped = map_transaction_status(
                notification.transaction_status, notification.fraud_status, order.status
            )
            logger.info(
                f"[{uow.execution_id}] Notification {notification.transaction_status} "
                f"({notification.method_label}) for {order.order_number}"
            )

            await apply_gateway_outcome(
                uow,
                order,
                mapped,
                proof=proof_json(notification.raw),
                payment_method=notification.method_code,
                mutate_stock=True,
            )
            await uow.commit()

        return WebhookResponse(
            status="success",
            order_id=order.order_number.value,
            order_status=order.status.value,
        )

    @staticmethod
    def _is_superseded(order: Order, notified_id: str, transaction_status: str) -> bool:
        """
        True for a non-settling outcome reported under an attempt id that
        is no longer the order's active one. Captured money always counts.
        """
        if not order.gateway_order_id or order.gateway_order_id == notified_id:
            return False
        return transaction_status.lower() not in SETTLING_TRANSACTION_STATUSES
