"""Maintenance mode settings with an explicit TTL cache."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from storefront.application.dtos import MaintenanceDTO, MaintenanceUpdateRequest
from storefront.data.uow import create_uow
from storefront.domain.entities import MaintenanceSettings

from .reconciliation import utcnow

logger = logging.getLogger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MaintenanceSettingsCache:
    """
    TTL cache over the maintenance settings row.

    Concurrent misses share a single load.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        ttl_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session_factory = session_factory
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._value: Optional[MaintenanceSettings] = None
        self._expires_at = 0.0
        self._lock = asyncio.Lock()
        self.loads = 0

    def _fresh(self) -> bool:
        return self._value is not None and self._clock() < self._expires_at

    async def get(self) -> MaintenanceSettings:
        if self._fresh():
            return self._value

        async with self._lock:
            if self._fresh():
                return self._value

            uow = create_uow(self._session_factory)
            async with uow:
                settings = await uow.maintenance.get()
            self.loads += 1
            self._value = settings or MaintenanceSettings()
            self._expires_at = self._clock() + self._ttl_seconds
            logger.debug(f"Maintenance settings loaded (enabled={self._value.is_enabled})")
            return self._value

    def invalidate(self) -> None:
        self._value = None
        self._expires_at = 0.0


class MaintenanceService:

    def __init__(self, session_factory: async_sessionmaker, cache: MaintenanceSettingsCache) -> None:
        self._session_factory = session_factory
        self._cache = cache

    async def get_status(self, now: Optional[datetime] = None) -> MaintenanceDTO:
        settings = await self._cache.get()
        return MaintenanceDTO.from_entity(settings, now or utcnow())

    async def update(self, request: MaintenanceUpdateRequest) -> MaintenanceDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            saved = await uow.maintenance.save(
                MaintenanceSettings(
                    is_enabled=request.is_enabled,
                    maintenance_start=_as_utc(request.maintenance_start),
                    maintenance_end=_as_utc(request.maintenance_end),
                    message=request.message,
                )
            )
            await uow.commit()

        self._cache.invalidate()
        logger.info(f"Maintenance mode {'enabled' if saved.is_enabled else 'disabled'}")
        return MaintenanceDTO.from_entity(saved, utcnow())
