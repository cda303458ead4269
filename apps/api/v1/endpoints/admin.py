"""Operator endpoints, guarded by the X-Admin-Key header."""

import logging

from fastapi import APIRouter, Depends

from storefront.application.dtos import (
    AdminStatusUpdateRequest,
    CleanupResultDTO,
    MaintenanceDTO,
    MaintenanceUpdateRequest,
    OrderDTO,
)
from storefront.application.services import (
    ExpiredOrderCleanupService,
    MaintenanceService,
    OrderApplicationService,
)

from apps.api.deps import (
    get_cleanup_service,
    get_maintenance_service,
    get_order_service,
    require_admin_key,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin_key)])


@router.post("/orders/cleanup-expired", response_model=CleanupResultDTO)
async def cleanup_expired_orders(
    service: ExpiredOrderCleanupService = Depends(get_cleanup_service),
) -> CleanupResultDTO:
    """Cancel abandoned pending orders and release their stock."""
    result = await service.run()
    logger.info(f"Cleanup: {result.processed}/{result.total_found} processed, {result.errors} errors")
    return result


@router.patch("/orders/{order_number}/status", response_model=OrderDTO)
async def update_order_status(
    order_number: str,
    request: AdminStatusUpdateRequest,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Apply a fulfilment transition."""
    return await service.update_status(order_number, request.status, request.tracking_number)


@router.put("/maintenance", response_model=MaintenanceDTO)
async def update_maintenance(
    request: MaintenanceUpdateRequest,
    service: MaintenanceService = Depends(get_maintenance_service),
) -> MaintenanceDTO:
    """Update maintenance mode and drop the cached settings."""
    return await service.update(request)
