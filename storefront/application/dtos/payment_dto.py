"""Application DTOs for payment reconciliation and recovery."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from .order_dto import OrderDTO


class WebhookResponse(BaseModel):
    status: str = Field(..., description="success or ignored")
    order_id: Optional[str] = None
    order_status: Optional[str] = None
    reason: Optional[str] = None


class PaymentStatusRequest(BaseModel):
    """Status poll; order_id is an order number or an attempt id."""

    order_id: str = Field(..., min_length=1)
    transaction_status: Optional[str] = None
    status_code: Optional[str] = None


class PaymentStatusResponse(BaseModel):
    order: OrderDTO
    payment_status: str


class RecoverPaymentRequest(BaseModel):
    order_id: str = Field(..., min_length=1)


class ChangeMethodRequest(BaseModel):
    expected_total: Optional[Decimal] = Field(default=None, alias="expectedTotal")

    model_config = {"populate_by_name": True}


class PaymentSessionResponse(BaseModel):
    success: bool = True
    payment_url: str
    token: Optional[str] = None
    order_number: str
    gateway_order_id: str
