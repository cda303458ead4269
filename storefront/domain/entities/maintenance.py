"""Maintenance window settings (single row)."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class MaintenanceSettings:
    is_enabled: bool = False
    maintenance_start: Optional[datetime] = None
    maintenance_end: Optional[datetime] = None
    message: Optional[str] = None
    id: Optional[int] = None

    def is_active(self, now: datetime) -> bool:
        """Enabled and, when a window is set, `now` falls inside it."""
        if not self.is_enabled:
            return False
        if self.maintenance_start and now < self.maintenance_start:
            return False
        if self.maintenance_end and now > self.maintenance_end:
            return False
        return True
