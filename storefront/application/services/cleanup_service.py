"""Scheduled cancellation of abandoned pending orders."""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from storefront.application.dtos import CleanupResultDTO
from storefront.data.uow import create_uow
from storefront.domain.enums import OrderStatus

from .reconciliation import proof_json, record_payment, release_order_stock, utcnow

logger = logging.getLogger(__name__)


class ExpiredOrderCleanupService:
    """Cancels pending orders older than the TTL and releases their stock."""

    def __init__(self, session_factory: async_sessionmaker, ttl_minutes: int = 120) -> None:
        self._session_factory = session_factory
        self._ttl = timedelta(minutes=ttl_minutes)

    async def run(self, now: Optional[datetime] = None) -> CleanupResultDTO:
        """Sweep once. A failing order is counted and skipped."""
        cutoff = (now or utcnow()) - self._ttl

        uow = create_uow(self._session_factory)
        async with uow:
            expired = await uow.orders.find_pending_older_than(cutoff)

        logger.info(f"Found {len(expired)} pending orders created before {cutoff.isoformat()}")

        processed = 0
        errors = 0
        for candidate in expired:
            try:
                if await self._expire(candidate.id):
                    processed += 1
            except Exception:
                errors += 1
                logger.error(f"Failed to expire order {candidate.order_number}", exc_info=True)

        return CleanupResultDTO(
            status="success",
            message=f"Processed {processed} expired orders",
            processed=processed,
            errors=errors,
            total_found=len(expired),
        )

    async def _expire(self, order_id: str) -> bool:
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(order_id)
            # Settled or cancelled since the sweep started
            if order is None or order.status != OrderStatus.PENDING:
                return False

            order.apply_gateway_status(OrderStatus.CANCELLED)
            await release_order_stock(uow, order)
            await uow.orders.update(order)

            payment = await uow.payments.get_for_order(order.id)
            if payment is None or payment.status != OrderStatus.PAID:
                await record_payment(
                    uow,
                    order,
                    OrderStatus.CANCELLED,
                    proof_json({"source": "expired_cleanup", "cancelled_at": utcnow().isoformat()}),
                )
            await uow.commit()
            logger.info(f"[{uow.execution_id}] Expired order {order.order_number} cancelled")
            return True
