"""Application DTOs."""

from .checkout_dto import CheckoutItemDTO, CheckoutOrderDataDTO, CheckoutRequest, CheckoutResponse
from .maintenance_dto import MaintenanceDTO, MaintenanceUpdateRequest
from .notification_dto import (
    BankTransferNotification,
    BaseNotification,
    CardNotification,
    ConvenienceStoreNotification,
    EChannelNotification,
    EWalletNotification,
    GenericNotification,
    parse_notification,
)
from .order_dto import (
    AdminStatusUpdateRequest,
    CleanupResultDTO,
    OrderDTO,
    OrderLineDTO,
    OrderListDTO,
    PaymentRecordDTO,
)
from .payment_dto import (
    ChangeMethodRequest,
    PaymentSessionResponse,
    PaymentStatusRequest,
    PaymentStatusResponse,
    RecoverPaymentRequest,
    WebhookResponse,
)

__all__ = [
    "AdminStatusUpdateRequest",
    "BankTransferNotification",
    "BaseNotification",
    "CardNotification",
    "ChangeMethodRequest",
    "CheckoutItemDTO",
    "CheckoutOrderDataDTO",
    "CheckoutRequest",
    "CheckoutResponse",
    "CleanupResultDTO",
    "ConvenienceStoreNotification",
    "EChannelNotification",
    "EWalletNotification",
    "GenericNotification",
    "MaintenanceDTO",
    "MaintenanceUpdateRequest",
    "OrderDTO",
    "OrderLineDTO",
    "OrderListDTO",
    "PaymentRecordDTO",
    "PaymentSessionResponse",
    "PaymentStatusRequest",
    "PaymentStatusResponse",
    "RecoverPaymentRequest",
    "WebhookResponse",
    "parse_notification",
]
