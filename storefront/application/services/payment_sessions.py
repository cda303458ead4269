"""Builders for gateway payment session requests."""

from decimal import Decimal
from typing import Dict, List
from urllib.parse import quote

from storefront.application.interfaces import (
    CustomerDetails,
    PaymentCallbacks,
    PaymentSessionRequest,
    SessionItem,
)
from storefront.domain.entities import Order, Product
from storefront.domain.value_objects import Money

SHIPPING_ITEM_ID = "SHIPPING"
SHIPPING_ITEM_NAME = "Ongkos Kirim Express"
# Gateway rejects longer item names
ITEM_NAME_MAX_LENGTH = 50


def build_callbacks(base_url: str, order_number: str) -> PaymentCallbacks:
    """
    Redirect targets after the hosted page closes.

    `{transaction_status}` and `{status_code}` are filled in by the gateway.
    """
    order_param = quote(order_number, safe="")
    return PaymentCallbacks(
        finish=(
            f"{base_url}/finish-payment?order_id={order_param}"
            "&transaction_status={transaction_status}&status_code={status_code}"
        ),
        unfinish=(
            f"{base_url}/payment-error?order_id={order_param}"
            "&transaction_status=cancel&error_type=cancelled"
        ),
        error=(
            f"{base_url}/payment-error?order_id={order_param}"
            "&transaction_status=failure&error_type=system&error_code={status_code}"
        ),
    )


def build_session_request(
    order: Order,
    products: Dict[str, Product],
    gateway_order_id: str,
    base_url: str,
) -> PaymentSessionRequest:
    """
    Session request for an order.

    Whatever the order total holds beyond its lines is billed as the
    express shipping item so the items always add up to the gross amount.
    """
    items: List[SessionItem] = []
    lines_total = Money.zero(order.total.currency)
    for line in order.lines:
        product = products.get(line.product_id)
        name = f"{product.name if product else line.product_id} ({line.size})"
        items.append(
            SessionItem(
                id=f"{line.product_id}-{line.size}"[:ITEM_NAME_MAX_LENGTH],
                name=name[:ITEM_NAME_MAX_LENGTH],
                price=line.unit_price.rounded(),
                quantity=line.quantity,
            )
        )
        lines_total = lines_total + line.subtotal

    surcharge = order.total.amount - lines_total.amount
    if surcharge > Decimal("0"):
        items.append(
            SessionItem(
                id=SHIPPING_ITEM_ID,
                name=SHIPPING_ITEM_NAME,
                price=Money(surcharge, order.total.currency).rounded(),
                quantity=1,
            )
        )

    return PaymentSessionRequest(
        gateway_order_id=gateway_order_id,
        gross_amount=order.total.rounded(),
        items=items,
        customer=CustomerDetails(
            name=order.buyer_name,
            email=order.buyer_email,
            phone=order.buyer_phone,
            address=order.shipping_address,
        ),
        callbacks=build_callbacks(base_url, order.order_number.value),
    )
