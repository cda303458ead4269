"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from ..enums import OrderStatus
from ..errors import ConflictError, ValidationError
from ..value_objects import Money, OrderNumber


# Fulfilment transitions an operator may apply by hand.
FULFILMENT_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.PROCESSING},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderLine:
    """Order line; unit price is snapshotted at order time."""
    product_id: str
    size: str
    quantity: int
    unit_price: Money
    id: Optional[int] = None

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class Order:
    """
    Order aggregate root.

    `stock_reserved` tells whether the order currently holds the stock it
    took at checkout. The reconciler consults it instead of guessing from
    status history, so commit and release each happen at most once.
    """
    order_number: OrderNumber
    user_id: str
    total: Money
    lines: List[OrderLine] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING

    # Payment session (pre-payment only)
    payment_method: Optional[str] = None
    payment_url: Optional[str] = None
    payment_token: Optional[str] = None
    gateway_order_id: Optional[str] = None

    # Fulfilment
    tracking_number: Optional[str] = None
    shipping_method: str = "standard"
    shipping_address: str = ""

    # Buyer contact
    buyer_name: str = ""
    buyer_email: str = ""
    buyer_phone: str = ""

    stock_reserved: bool = False
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_payable(self) -> bool:
        return self.status == OrderStatus.PENDING

    def touch(self) -> None:
        self.updated_at = _now()

    def attach_payment_session(
        self,
        redirect_url: str,
        token: Optional[str],
        gateway_order_id: str,
        payment_method: Optional[str] = None,
    ) -> None:
        """Store the gateway session the buyer should be sent to."""
        self.payment_url = redirect_url
        self.payment_token = token
        self.gateway_order_id = gateway_order_id
        if payment_method:
            self.payment_method = payment_method
        self.touch()

    def clear_payment_session(self) -> None:
        self.payment_url = None
        self.payment_token = None

    def apply_gateway_status(self, mapped: OrderStatus) -> bool:
        """
        Move to the status reported by the gateway.

        Settled orders are never downgraded to pending, and a late
        settlement may revive a cancelled or failed order.

        Returns:
            True if the status changed
        """
        current = self.status
        if mapped == current:
            return False

        allowed = False
        if mapped == OrderStatus.PAID:
            allowed = current in (OrderStatus.PENDING, OrderStatus.CANCELLED, OrderStatus.FAILED)
        elif mapped == OrderStatus.CANCELLED:
            allowed = current == OrderStatus.PENDING
        elif mapped == OrderStatus.FAILED:
            allowed = current in (OrderStatus.PENDING, OrderStatus.PAID)

        if not allowed:
            return False

        self.status = mapped
        # No outcome other than pending leaves a usable payment page
        self.clear_payment_session()
        self.touch()
        return True

    def cancel_by_user(self) -> None:
        """Business rule: only unpaid orders can be cancelled by the buyer."""
        if self.status != OrderStatus.PENDING:
            raise ConflictError(
                f"Order {self.order_number} cannot be cancelled in status {self.status.value}",
                details={"current_status": self.status.value},
            )
        self.status = OrderStatus.CANCELLED
        self.clear_payment_session()
        self.touch()

    def advance_fulfilment(self, new_status: OrderStatus, tracking_number: Optional[str] = None) -> None:
        """Business rule: operator-driven transitions follow the fulfilment chain."""
        allowed = FULFILMENT_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise ConflictError(
                f"Cannot move order {self.order_number} from {self.status.value} to {new_status.value}",
                details={"current_status": self.status.value},
            )
        if new_status == OrderStatus.SHIPPED:
            if not tracking_number:
                raise ValidationError("Tracking number is required to mark an order as shipped")
            self.tracking_number = tracking_number
        if new_status == OrderStatus.CANCELLED:
            self.clear_payment_session()
        self.status = new_status
        self.touch()
