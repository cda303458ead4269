"""Checkout endpoint."""

import logging

from fastapi import APIRouter, Depends

from storefront.application.dtos import CheckoutRequest, CheckoutResponse
from storefront.application.interfaces import AuthenticatedUser
from storefront.application.services import CheckoutService

from apps.api.deps import get_checkout_service, get_current_user

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("", response_model=CheckoutResponse)
async def checkout(
    request: CheckoutRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: CheckoutService = Depends(get_checkout_service),
) -> CheckoutResponse:
    """Create an order from the cart and open a payment session.

    Args:
        request: Cart and buyer details
        user: Authenticated buyer
        service: CheckoutService instance

    Returns:
        CheckoutResponse with token, redirect URL and order number
    """
    return await service.checkout(user, request)
