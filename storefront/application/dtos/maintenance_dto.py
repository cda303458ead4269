"""Application DTOs for maintenance mode."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from storefront.domain.entities import MaintenanceSettings


class MaintenanceDTO(BaseModel):
    is_enabled: bool
    is_active: bool
    maintenance_start: Optional[datetime] = None
    maintenance_end: Optional[datetime] = None
    message: Optional[str] = None

    @classmethod
    def from_entity(cls, settings: MaintenanceSettings, now: datetime) -> "MaintenanceDTO":
        return cls(
            is_enabled=settings.is_enabled,
            is_active=settings.is_active(now),
            maintenance_start=settings.maintenance_start,
            maintenance_end=settings.maintenance_end,
            message=settings.message,
        )


class MaintenanceUpdateRequest(BaseModel):
    is_enabled: bool
    maintenance_start: Optional[datetime] = None
    maintenance_end: Optional[datetime] = None
    message: Optional[str] = None
