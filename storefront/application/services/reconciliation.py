"""
Reconciliation steps shared by the webhook, the status poller,
cancellation and cleanup.

All functions operate inside the caller's UnitOfWork and never commit.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from storefront.data.uow import UnitOfWork
from storefront.domain.entities import Order, PaymentRecord
from storefront.domain.enums import OrderStatus
from storefront.domain.value_objects import ATTEMPT_SEPARATOR, base_order_number

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def proof_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, default=str, sort_keys=True)


def payment_status_for(order_status: OrderStatus) -> OrderStatus:
    """Collapse fulfilment statuses onto the payment vocabulary."""
    if order_status.is_settled:
        return OrderStatus.PAID
    return order_status


async def resolve_order(uow: UnitOfWork, reference: str) -> Optional[Order]:
    """
    Find an order from any id the gateway or the UI may hold.

    Tries the order number, then the active gateway attempt id, then the
    base order number of an attempt id.
    """
    order = await uow.orders.find_by_order_number(reference)
    if order:
        return order
    order = await uow.orders.find_by_gateway_order_id(reference)
    if order:
        return order
    if ATTEMPT_SEPARATOR in reference:
        return await uow.orders.find_by_order_number(base_order_number(reference))
    return None


async def _recompute(uow: UnitOfWork, order: Order) -> None:
    for product_id in sorted({line.product_id for line in order.lines}):
        await uow.inventory.recompute_product_stock(product_id)


async def release_order_stock(uow: UnitOfWork, order: Order) -> bool:
    """
    Give the order's reserved stock back, once.

    Returns:
        True if stock was released
    """
    if not order.stock_reserved:
        return False
    for line in order.lines:
        await uow.inventory.release(line.product_id, line.size, line.quantity)
    order.stock_reserved = False
    await _recompute(uow, order)
    logger.info(f"[{uow.execution_id}] Released stock of order {order.order_number}")
    return True


async def retake_order_stock(uow: UnitOfWork, order: Order) -> bool:
    """
    Take stock again for an order that settled after its reservation was
    released. Quantities are floored at zero.

    Returns:
        True if stock was taken
    """
    if order.stock_reserved:
        return False
    for line in order.lines:
        await uow.inventory.take_floored(line.product_id, line.size, line.quantity)
    order.stock_reserved = True
    await _recompute(uow, order)
    logger.warning(
        f"[{uow.execution_id}] Late settlement of order {order.order_number}; stock re-taken"
    )
    return True


async def record_payment(
    uow: UnitOfWork, order: Order, status: OrderStatus, proof: Optional[str]
) -> PaymentRecord:
    record = await uow.payments.get_for_order(order.id)
    if record is None:
        record = PaymentRecord(order_id=order.id, amount=order.total)
    record.amount = order.total
    record.record(status, proof)
    return await uow.payments.upsert(record)


async def apply_gateway_outcome(
    uow: UnitOfWork,
    order: Order,
    mapped: OrderStatus,
    proof: str,
    payment_method: Optional[str] = None,
    mutate_stock: bool = True,
) -> bool:
    """
    Apply a mapped gateway status to an order and its payment record.

    Args:
        uow: Active unit of work
        order: Order to reconcile
        mapped: Status the gateway outcome maps to
        proof: Raw reconciliation input, stored on the payment record
        payment_method: Payment method code reported by the gateway
        mutate_stock: False for client-driven polling

    Returns:
        True if the order status changed
    """
    previous = await uow.payments.get_for_order(order.id)
    previously_paid = previous is not None and previous.status == OrderStatus.PAID

    changed = order.apply_gateway_status(mapped)
    if payment_method:
        order.payment_method = payment_method

    if mutate_stock:
        if changed and order.status == OrderStatus.PAID:
            if previously_paid:
                logger.info(
                    f"[{uow.execution_id}] Payment of {order.order_number} already recorded; stock untouched"
                )
            else:
                await retake_order_stock(uow, order)
        elif order.status.releases_stock:
            await release_order_stock(uow, order)

    order.touch()
    await uow.orders.update(order)
    await record_payment(uow, order, payment_status_for(order.status), proof)

    logger.info(
        f"[{uow.execution_id}] Order {order.order_number}: gateway status {mapped.value} "
        f"-> order status {order.status.value} (changed={changed})"
    )
    return changed
