"""
Mock Payment Gateway Implementation.

This simulates the hosted payment page for local development and tests.
"""
import logging
from typing import Dict, List, Optional
from uuid import uuid4

from storefront.application.interfaces import (
    GatewayTransactionStatus,
    IPaymentGateway,
    PaymentSession,
    PaymentSessionRequest,
)
from storefront.domain.errors import UpstreamGatewayError


logger = logging.getLogger(__name__)


class MockPaymentGateway(IPaymentGateway):
    """
    Mock implementation of the payment gateway.

    Records session requests and answers status queries from an
    in-memory table. Useful for testing and demos.
    """

    def __init__(self, base_url: str = "https://mock-gateway.local/pay"):
        """Initialize mock gateway."""
        self.base_url = base_url
        self.sessions: List[PaymentSessionRequest] = []
        self.statuses: Dict[str, GatewayTransactionStatus] = {}
        self.fail_next: Optional[UpstreamGatewayError] = None
        self.status_unavailable = False
        logger.info("MockPaymentGateway initialized (no real payments)")

    async def create_session(self, request: PaymentSessionRequest) -> PaymentSession:
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error
        self.sessions.append(request)
        token = uuid4().hex
        logger.info(f"Mock session {token} for {request.gateway_order_id} ({request.gross_amount})")
        return PaymentSession(token=token, redirect_url=f"{self.base_url}/{token}")

    async def get_status(self, gateway_order_id: str) -> Optional[GatewayTransactionStatus]:
        if self.status_unavailable:
            raise UpstreamGatewayError("Mock gateway status API unavailable")
        return self.statuses.get(gateway_order_id)

    def set_status(
        self,
        gateway_order_id: str,
        transaction_status: str,
        fraud_status: Optional[str] = None,
        status_code: str = "200",
    ) -> None:
        self.statuses[gateway_order_id] = GatewayTransactionStatus(
            transaction_status=transaction_status,
            status_code=status_code,
            fraud_status=fraud_status,
            raw={"order_id": gateway_order_id, "transaction_status": transaction_status},
        )
