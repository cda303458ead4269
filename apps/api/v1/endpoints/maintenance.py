"""Public maintenance mode endpoint."""

from fastapi import APIRouter, Depends

from storefront.application.dtos import MaintenanceDTO
from storefront.application.services import MaintenanceService

from apps.api.deps import get_maintenance_service

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.get("", response_model=MaintenanceDTO)
async def get_maintenance(
    service: MaintenanceService = Depends(get_maintenance_service),
) -> MaintenanceDTO:
    """Current maintenance mode, served from the settings cache."""
    return await service.get_status()
