"""Expired pending order cleanup."""

from datetime import timedelta

import pytest

from storefront.application.services import ExpiredOrderCleanupService, WebhookReconciler
from storefront.application.services.reconciliation import utcnow
from storefront.domain.enums import OrderStatus

SERVER_KEY = "SB-Mid-server-test-key"


@pytest.fixture
def cleanup(session_factory) -> ExpiredOrderCleanupService:
    return ExpiredOrderCleanupService(session_factory, ttl_minutes=120)


@pytest.mark.asyncio
async def test_recent_orders_are_left_alone(cleanup, place_order, load_order):
    response = await place_order()

    result = await cleanup.run()

    assert result.total_found == 0
    assert result.processed == 0
    order, _ = await load_order(response.order_id)
    assert order.status == OrderStatus.PENDING


@pytest.mark.asyncio
async def test_expired_orders_are_cancelled_and_restocked(
    cleanup, session_factory, place_order, load_order, size_stock, product_stock, signed_notification
):
    stale = await place_order([("tee-black", "M", 2)])
    paid = await place_order([("hoodie-grey", "XL", 1)])
    await WebhookReconciler(session_factory, server_key=SERVER_KEY).handle(
        signed_notification(paid.order_id, "settlement")
    )
    assert await size_stock("tee-black", "M") == 3

    result = await cleanup.run(now=utcnow() + timedelta(hours=3))

    assert result.status == "success"
    assert result.total_found == 1
    assert result.processed == 1
    assert result.errors == 0
    assert result.message == "Processed 1 expired orders"

    order, payment = await load_order(stale.order_id)
    assert order.status == OrderStatus.CANCELLED
    assert order.payment_url is None
    assert order.stock_reserved is False
    assert payment.status == OrderStatus.CANCELLED
    assert await size_stock("tee-black", "M") == 5
    assert await product_stock("tee-black") == 7

    paid_order, _ = await load_order(paid.order_id)
    assert paid_order.status == OrderStatus.PAID
    assert await size_stock("hoodie-grey", "XL") == 0


@pytest.mark.asyncio
async def test_second_sweep_finds_nothing(cleanup, place_order, size_stock):
    await place_order([("tee-black", "M", 2)])
    later = utcnow() + timedelta(hours=3)

    await cleanup.run(now=later)
    result = await cleanup.run(now=later)

    assert result.total_found == 0
    assert await size_stock("tee-black", "M") == 5
