"""Order endpoints for REST API."""

import logging

from fastapi import APIRouter, Depends, Query

from storefront.application.dtos import OrderDTO, OrderListDTO
from storefront.application.interfaces import AuthenticatedUser
from storefront.application.services import OrderApplicationService

from apps.api.deps import get_current_user, get_order_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=OrderListDTO)
async def list_orders(
    limit: int = Query(default=50, ge=1, le=200, description="Maximum number of orders"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    """List the caller's orders, newest first.

    Args:
        limit: Maximum number of orders to return
        user: Authenticated buyer
        service: OrderApplicationService instance

    Returns:
        OrderListDTO
    """
    return await service.list_orders(user, limit=limit)


@router.get("/{order_number}", response_model=OrderDTO)
async def get_order(
    order_number: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Get one of the caller's orders with lines and payment record."""
    return await service.get_order(user, order_number)


@router.post("/{order_id}/cancel", response_model=OrderDTO)
async def cancel_order(
    order_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Cancel an unpaid order; its reserved stock is released."""
    return await service.cancel_order(user, order_id)
