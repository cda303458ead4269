"""Application layer interfaces."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class SessionItem:
    id: str
    name: str
    price: int
    quantity: int


@dataclass(frozen=True)
class CustomerDetails:
    name: str
    email: str
    phone: str
    address: str


@dataclass(frozen=True)
class PaymentCallbacks:
    finish: str
    unfinish: str
    error: str


@dataclass(frozen=True)
class PaymentSessionRequest:
    """Everything the gateway needs to open a hosted payment page."""

    gateway_order_id: str
    gross_amount: int
    items: List[SessionItem]
    customer: CustomerDetails
    callbacks: PaymentCallbacks


@dataclass(frozen=True)
class PaymentSession:
    token: Optional[str]
    redirect_url: str


@dataclass(frozen=True)
class GatewayTransactionStatus:
    transaction_status: str
    status_code: Optional[str] = None
    fraud_status: Optional[str] = None
    payment_type: Optional[str] = None
    gross_amount: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: Optional[str] = None
    role: Optional[str] = None


class IPaymentGateway(ABC):
    """
    Interface for the hosted payment gateway.

    This interface defines the contract for opening payment sessions and
    querying transaction status, allowing the application layer to talk
    to the gateway without depending on its wire format.
    """

    @abstractmethod
    async def create_session(self, request: PaymentSessionRequest) -> PaymentSession:
        """
        Open a hosted payment session.

        Args:
            request: Order, items, customer and callback URLs

        Returns:
            Session token and redirect URL

        Raises:
            UpstreamGatewayError: If the gateway is unreachable or refuses
        """
        pass

    @abstractmethod
    async def get_status(self, gateway_order_id: str) -> Optional[GatewayTransactionStatus]:
        """
        Query the current transaction status.

        Args:
            gateway_order_id: Order id the session was opened with

        Returns:
            Transaction status, or None if the gateway has no such transaction

        Raises:
            UpstreamGatewayError: If the gateway is unreachable
        """
        pass


class IIdentityProvider(ABC):
    """Interface for resolving a bearer access token to a user."""

    @abstractmethod
    async def resolve(self, access_token: str) -> AuthenticatedUser:
        """
        Resolve the user behind an access token.

        Raises:
            AuthError: If the token is missing, expired or unknown
        """
        pass


__all__ = [
    "AuthenticatedUser",
    "CustomerDetails",
    "GatewayTransactionStatus",
    "IIdentityProvider",
    "IPaymentGateway",
    "PaymentCallbacks",
    "PaymentSession",
    "PaymentSessionRequest",
    "SessionItem",
]
