"""
Storefront error taxonomy.

Every business or boundary failure raised by the application layer is a
StorefrontError carrying the HTTP status and the error-type classification
the UI uses to pick a user-facing message (validation / auth / network /
timeout / system).
"""
from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """Base class for all storefront errors."""

    status_code: int = 500
    error_type: str = "system"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "error_type": self.error_type, **self.details}


class ValidationError(StorefrontError):
    status_code = 400
    error_type = "validation"


class PriceMismatch(ValidationError):
    """Client-submitted total does not match the server-computed total."""


class AuthError(StorefrontError):
    status_code = 401
    error_type = "auth"


class InvalidSignature(AuthError):
    """Gateway notification signature did not verify."""


class NotFoundOrForbidden(StorefrontError):
    status_code = 404
    error_type = "validation"


class ConflictError(StorefrontError):
    status_code = 409
    error_type = "validation"


class InsufficientStock(StorefrontError):
    status_code = 409
    error_type = "validation"

    def __init__(self, product_id: str, size: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for product {product_id} size {size}. "
            f"Available: {available}, Requested: {requested}",
            details={
                "product_id": product_id,
                "size": size,
                "available": available,
                "requested": requested,
            },
        )
        self.product_id = product_id
        self.size = size
        self.available = available
        self.requested = requested


class UpstreamGatewayError(StorefrontError):
    status_code = 502
    error_type = "network"


class GatewayTimeout(UpstreamGatewayError):
    error_type = "timeout"


class ConfigurationError(StorefrontError):
    status_code = 500
    error_type = "system"


class InternalError(StorefrontError):
    status_code = 500
    error_type = "system"
