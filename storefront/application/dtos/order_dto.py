"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront.domain.entities import Order, PaymentRecord
from storefront.domain.enums import OrderStatus
from storefront.domain.payment_rules import format_payment_method


class OrderLineDTO(BaseModel):
    """DTO for order line."""

    product_id: str = Field(..., description="Product ID")
    size: str = Field(..., description="Size label")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    unit_price: Decimal = Field(..., ge=0, description="Unit price at order time")

    model_config = {"frozen": True}


class PaymentRecordDTO(BaseModel):
    status: str
    amount: Decimal
    payment_proof: Optional[str] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, record: PaymentRecord) -> "PaymentRecordDTO":
        return cls(
            status=record.status.value,
            amount=record.amount.amount,
            payment_proof=record.payment_proof,
            updated_at=record.updated_at,
        )


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: str = Field(..., description="Internal order ID")
    order_number: str = Field(..., description="External order number")
    status: str = Field(..., description="Order status")
    total: Decimal = Field(..., ge=0, description="Order total")
    currency: str = Field(default="IDR", description="Currency code")
    payment_method: Optional[str] = None
    payment_method_label: str = "-"
    payment_url: Optional[str] = None
    gateway_order_id: Optional[str] = None
    tracking_number: Optional[str] = None
    shipping_method: str = "standard"
    shipping_address: str = ""
    buyer_name: str = ""
    buyer_email: str = ""
    buyer_phone: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    lines: List[OrderLineDTO] = Field(default_factory=list, description="Order lines")
    payment: Optional[PaymentRecordDTO] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, order: Order, payment: Optional[PaymentRecord] = None) -> "OrderDTO":
        """Transform Order domain entity to OrderDTO."""
        return cls(
            id=order.id,
            order_number=order.order_number.value,
            status=order.status.value,
            total=order.total.amount,
            currency=order.total.currency,
            payment_method=order.payment_method,
            payment_method_label=format_payment_method(order.payment_method),
            payment_url=order.payment_url,
            gateway_order_id=order.gateway_order_id,
            tracking_number=order.tracking_number,
            shipping_method=order.shipping_method,
            shipping_address=order.shipping_address,
            buyer_name=order.buyer_name,
            buyer_email=order.buyer_email,
            buyer_phone=order.buyer_phone,
            created_at=order.created_at,
            updated_at=order.updated_at,
            lines=[
                OrderLineDTO(
                    product_id=line.product_id,
                    size=line.size,
                    quantity=line.quantity,
                    unit_price=line.unit_price.amount,
                )
                for line in order.lines
            ],
            payment=PaymentRecordDTO.from_entity(payment) if payment else None,
        )


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")
    total: int = Field(..., ge=0, description="Total count")

    model_config = {"frozen": True}


class AdminStatusUpdateRequest(BaseModel):
    status: OrderStatus
    tracking_number: Optional[str] = None


class CleanupResultDTO(BaseModel):
    status: str = "success"
    message: str
    processed: int = 0
    errors: int = 0
    total_found: int = 0
