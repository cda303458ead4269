"""Payment record entity - one per order, upserted."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..enums import OrderStatus
from ..value_objects import Money


@dataclass
class PaymentRecord:
    """
    Latest known payment state of an order.

    payment_proof holds the raw input of the most recent reconciliation
    (gateway notification, status query or attempt metadata) as JSON text.
    """
    order_id: str
    amount: Money
    status: OrderStatus = OrderStatus.PENDING
    payment_proof: Optional[str] = None
    id: Optional[int] = None
    updated_at: Optional[datetime] = None

    def record(self, status: OrderStatus, proof: Optional[str]) -> None:
        self.status = status
        self.payment_proof = proof
        self.updated_at = datetime.now(timezone.utc)
