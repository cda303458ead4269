"""Application DTOs for checkout."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront.domain.enums import ShippingMethod


class CheckoutItemDTO(BaseModel):
    """One cart line as submitted by the storefront UI."""

    product_id: str = Field(..., min_length=1, description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    ukuran: str = Field(..., min_length=1, description="Size label")

    model_config = {"frozen": True}


class CheckoutOrderDataDTO(BaseModel):
    """Buyer and shipping details, with the total the client computed."""

    total: Decimal = Field(..., ge=0, description="Client-side total")
    nama_pembeli: str = Field(default="", description="Buyer name")
    email_pembeli: str = Field(default="", description="Buyer email")
    telepon_pembeli: str = Field(default="", description="Buyer phone")
    shipping_address: str = Field(default="", description="Shipping address")
    shipping_method: ShippingMethod = Field(default=ShippingMethod.STANDARD)
    payment_method: Optional[str] = Field(default=None, description="Preferred payment method")

    model_config = {"frozen": True}


class CheckoutRequest(BaseModel):
    """Request DTO for POST /checkout."""

    order_data: CheckoutOrderDataDTO = Field(..., alias="orderData")
    items: List[CheckoutItemDTO] = Field(default_factory=list)

    model_config = {"frozen": True, "populate_by_name": True}


class CheckoutResponse(BaseModel):
    token: Optional[str] = Field(None, description="Gateway session token")
    redirect_url: str = Field(..., description="Hosted payment page")
    order_id: str = Field(..., description="Order number")
