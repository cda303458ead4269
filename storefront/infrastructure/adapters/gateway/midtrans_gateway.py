"""
Midtrans Payment Gateway Implementation.

Opens Snap sessions and queries the Core API transaction status.
"""
import asyncio
import logging
import re
from typing import Any, Dict, Optional

import aiohttp

from storefront.application.interfaces import (
    GatewayTransactionStatus,
    IPaymentGateway,
    PaymentSession,
    PaymentSessionRequest,
)
from storefront.domain.errors import ConfigurationError, GatewayTimeout, UpstreamGatewayError
from storefront.settings.sections.midtrans import MidtransSettings


logger = logging.getLogger(__name__)

ENABLED_PAYMENTS = ["credit_card", "bank_transfer", "echannel", "gopay", "shopeepay"]
SESSION_EXPIRY_MINUTES = 60

DEFAULT_CITY = "Jakarta"
DEFAULT_POSTAL_CODE = "12345"
DEFAULT_COUNTRY_CODE = "IDN"


class MidtransPaymentGateway(IPaymentGateway):
    """
    Midtrans implementation of the payment gateway.

    Uses Basic auth with the server key and a bounded ClientTimeout.
    No retries; callers surface failures as 502.
    """

    def __init__(self, settings: MidtransSettings):
        """
        Initialize Midtrans gateway.

        Args:
            settings: Midtrans settings with server key and environment
        """
        self.settings = settings
        self.timeout = aiohttp.ClientTimeout(total=settings.timeout_seconds)
        logger.info(
            f"MidtransPaymentGateway initialized ({'production' if settings.is_production else 'sandbox'})"
        )

    def _auth(self) -> aiohttp.BasicAuth:
        if not self.settings.server_key:
            raise ConfigurationError("MIDTRANS_SERVER_KEY is not configured")
        return aiohttp.BasicAuth(self.settings.server_key, "")

    def build_payload(self, request: PaymentSessionRequest) -> Dict[str, Any]:
        """Snap transaction body for a session request."""
        phone = re.sub(r"\D", "", request.customer.phone or "")
        payload: Dict[str, Any] = {
            "transaction_details": {
                "order_id": request.gateway_order_id,
                "gross_amount": request.gross_amount,
            },
            "item_details": [
                {
                    "id": item.id,
                    "price": item.price,
                    "quantity": item.quantity,
                    "name": item.name,
                }
                for item in request.items
            ],
            "customer_details": {
                "first_name": request.customer.name,
                "email": request.customer.email,
                "phone": phone,
                "shipping_address": {
                    "first_name": request.customer.name,
                    "phone": phone,
                    "address": request.customer.address,
                    "city": DEFAULT_CITY,
                    "postal_code": DEFAULT_POSTAL_CODE,
                    "country_code": DEFAULT_COUNTRY_CODE,
                },
            },
            "credit_card": {"secure": True},
            "callbacks": {
                "finish": request.callbacks.finish,
                "unfinish": request.callbacks.unfinish,
                "error": request.callbacks.error,
            },
        }
        if self.settings.is_production:
            payload["enabled_payments"] = list(ENABLED_PAYMENTS)
            payload["custom_expiry"] = {
                "expiry_duration": SESSION_EXPIRY_MINUTES,
                "unit": "minute",
            }
        return payload

    async def create_session(self, request: PaymentSessionRequest) -> PaymentSession:
        """Open a Snap session."""
        payload = self.build_payload(request)
        logger.info(
            f"Creating Snap session for {request.gateway_order_id}, gross {request.gross_amount}"
        )

        try:
            async with aiohttp.ClientSession(timeout=self.timeout, auth=self._auth()) as session:
                async with session.post(
                    self.settings.snap_url,
                    json=payload,
                    headers={"Accept": "application/json"},
                ) as response:
                    body = await self._json(response)
                    if response.status not in (200, 201):
                        messages = body.get("error_messages") or [body.get("status_message")]
                        logger.error(f"Snap API error: {response.status} - {messages}")
                        raise UpstreamGatewayError(
                            "Payment gateway rejected the session request",
                            details={"gateway_status": response.status, "gateway_errors": messages},
                        )
        except asyncio.TimeoutError as exc:
            raise GatewayTimeout("Payment gateway timed out") from exc
        except aiohttp.ClientError as exc:
            raise UpstreamGatewayError(f"Payment gateway unreachable: {exc}") from exc

        redirect_url = body.get("redirect_url")
        if not redirect_url:
            raise UpstreamGatewayError("Payment gateway returned no redirect URL")
        return PaymentSession(token=body.get("token"), redirect_url=redirect_url)

    async def get_status(self, gateway_order_id: str) -> Optional[GatewayTransactionStatus]:
        """Query /v2/{id}/status."""
        url = f"{self.settings.api_base_url}/v2/{gateway_order_id}/status"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout, auth=self._auth()) as session:
                async with session.get(url, headers={"Accept": "application/json"}) as response:
                    body = await self._json(response)
        except asyncio.TimeoutError as exc:
            raise GatewayTimeout("Payment gateway status query timed out") from exc
        except aiohttp.ClientError as exc:
            raise UpstreamGatewayError(f"Payment gateway unreachable: {exc}") from exc

        # Core API reports "not found" in the body with HTTP 200 or 404
        status_code = str(body.get("status_code") or response.status)
        if response.status == 404 or status_code == "404":
            return None
        if response.status != 200 or "transaction_status" not in body:
            raise UpstreamGatewayError(
                "Payment gateway status query failed",
                details={"gateway_status": response.status},
            )

        return GatewayTransactionStatus(
            transaction_status=body["transaction_status"],
            status_code=status_code,
            fraud_status=body.get("fraud_status"),
            payment_type=body.get("payment_type"),
            gross_amount=body.get("gross_amount"),
            raw=body,
        )

    @staticmethod
    async def _json(response: aiohttp.ClientResponse) -> Dict[str, Any]:
        try:
            body = await response.json(content_type=None)
        except ValueError:
            text = await response.text()
            logger.error(f"Non-JSON gateway response: {response.status} - {text[:200]}")
            return {}
        return body if isinstance(body, dict) else {}
