"""
Gateway notification payloads.

Notifications differ by payment_type. Each shape is a typed variant that
keeps the full raw payload so nothing the gateway sent is lost when the
notification is stored as payment proof.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from storefront.domain.errors import ValidationError
from storefront.domain.payment_rules import format_payment_method

REQUIRED_FIELDS = ("order_id", "status_code", "gross_amount", "signature_key", "transaction_status")


class BaseNotification(BaseModel):
    """Fields common to every notification."""

    order_id: str
    status_code: str
    gross_amount: str
    signature_key: str
    transaction_status: str
    fraud_status: Optional[str] = None
    payment_type: Optional[str] = None
    transaction_id: Optional[str] = None
    transaction_time: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("status_code", "gross_amount", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        # Signature input is the exact text the gateway sent
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("gross_amount")
    @classmethod
    def _numeric_amount(cls, value: str) -> str:
        try:
            amount = Decimal(value)
        except InvalidOperation as exc:
            raise ValueError("gross_amount must be numeric") from exc
        if not amount.is_finite():
            raise ValueError("gross_amount must be numeric")
        return value

    @property
    def method_code(self) -> str:
        return self.payment_type or "midtrans"

    @property
    def method_label(self) -> str:
        return format_payment_method(self.method_code)


class VirtualAccount(BaseModel):
    bank: str
    va_number: str


class BankTransferNotification(BaseNotification):
    payment_type: Literal["bank_transfer"]
    va_numbers: List[VirtualAccount] = Field(default_factory=list)
    permata_va_number: Optional[str] = None

    @property
    def bank(self) -> Optional[str]:
        if self.va_numbers:
            return self.va_numbers[0].bank
        if self.permata_va_number:
            return "permata"
        return None

    @property
    def method_label(self) -> str:
        if self.bank:
            return f"Bank Transfer ({self.bank.upper()})"
        return format_payment_method(self.method_code)


class EChannelNotification(BaseNotification):
    """Mandiri bill payment."""

    payment_type: Literal["echannel"]
    bill_key: Optional[str] = None
    biller_code: Optional[str] = None


class ConvenienceStoreNotification(BaseNotification):
    payment_type: Literal["cstore"]
    store: Optional[str] = None
    payment_code: Optional[str] = None

    @property
    def method_label(self) -> str:
        if self.store:
            return f"Convenience Store ({self.store.title()})"
        return format_payment_method(self.method_code)


class CardNotification(BaseNotification):
    payment_type: Literal["credit_card"]
    masked_card: Optional[str] = None
    bank: Optional[str] = None
    card_type: Optional[str] = None


class EWalletNotification(BaseNotification):
    payment_type: Literal["gopay", "shopeepay", "qris"]
    acquirer: Optional[str] = None


class GenericNotification(BaseNotification):
    """Any payment type without a dedicated variant."""


_VARIANTS: Dict[str, Type[BaseNotification]] = {
    "bank_transfer": BankTransferNotification,
    "echannel": EChannelNotification,
    "cstore": ConvenienceStoreNotification,
    "credit_card": CardNotification,
    "gopay": EWalletNotification,
    "shopeepay": EWalletNotification,
    "qris": EWalletNotification,
}


def parse_notification(payload: Dict[str, Any]) -> BaseNotification:
    """
    Build the typed variant for a raw notification payload.

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    if not isinstance(payload, dict):
        raise ValidationError("Notification body must be a JSON object")

    missing = [name for name in REQUIRED_FIELDS if payload.get(name) in (None, "")]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            details={"missing_fields": missing},
        )

    variant = _VARIANTS.get(payload.get("payment_type") or "", GenericNotification)
    try:
        return variant.model_validate({**payload, "raw": dict(payload)})
    except PydanticValidationError as exc:
        raise ValidationError(
            "Malformed notification",
            details={"errors": [error["msg"] for error in exc.errors()]},
        ) from exc
