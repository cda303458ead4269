"""Application services."""

from .checkout_service import CheckoutService
from .cleanup_service import ExpiredOrderCleanupService
from .maintenance_service import MaintenanceService, MaintenanceSettingsCache
from .order_service import OrderApplicationService
from .payment_recovery_service import PaymentRecoveryService
from .payment_status_service import PaymentStatusService
from .webhook_service import WebhookReconciler

__all__ = [
    "CheckoutService",
    "ExpiredOrderCleanupService",
    "MaintenanceService",
    "MaintenanceSettingsCache",
    "OrderApplicationService",
    "PaymentRecoveryService",
    "PaymentStatusService",
    "WebhookReconciler",
]
