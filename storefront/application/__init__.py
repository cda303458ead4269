"""Application layer - services, interfaces, and DTOs."""

from .dtos import CheckoutRequest, CheckoutResponse, OrderDTO, OrderListDTO
from .interfaces import AuthenticatedUser, IIdentityProvider, IPaymentGateway

__all__ = [
    # DTOs
    "CheckoutRequest",
    "CheckoutResponse",
    "OrderDTO",
    "OrderListDTO",
    # Interfaces
    "AuthenticatedUser",
    "IIdentityProvider",
    "IPaymentGateway",
]
