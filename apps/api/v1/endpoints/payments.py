"""Payment endpoints: gateway webhook, status poll, recovery."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from storefront.application.dtos import (
    ChangeMethodRequest,
    PaymentSessionResponse,
    PaymentStatusRequest,
    PaymentStatusResponse,
    RecoverPaymentRequest,
    WebhookResponse,
)
from storefront.application.interfaces import AuthenticatedUser
from storefront.application.services import (
    PaymentRecoveryService,
    PaymentStatusService,
    WebhookReconciler,
)
from storefront.domain.errors import ValidationError

from apps.api.deps import (
    get_current_user,
    get_payment_recovery_service,
    get_payment_status_service,
    get_webhook_reconciler,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/webhook", response_model=WebhookResponse, response_model_exclude_none=True)
async def payment_webhook(
    request: Request,
    reconciler: WebhookReconciler = Depends(get_webhook_reconciler),
) -> WebhookResponse:
    """Gateway notification endpoint (unauthenticated, signature-verified)."""
    try:
        payload: Dict[str, Any] = await request.json()
    except ValueError as exc:
        # Covers malformed JSON and bodies that are not valid UTF-8
        raise ValidationError("Notification body is not valid JSON") from exc
    return await reconciler.handle(payload)


@router.post("/status", response_model=PaymentStatusResponse)
async def payment_status(
    request: PaymentStatusRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: PaymentStatusService = Depends(get_payment_status_service),
) -> PaymentStatusResponse:
    """Reconcile the caller's order after returning from the payment page."""
    return await service.check(user, request)


@router.post("/recover", response_model=PaymentSessionResponse)
async def recover_payment_url(
    request: RecoverPaymentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: PaymentRecoveryService = Depends(get_payment_recovery_service),
) -> PaymentSessionResponse:
    """Open a fresh payment session for a pending order."""
    return await service.recover(user, request.order_id)


@router.post("/{order_id}/change-method", response_model=PaymentSessionResponse)
async def change_payment_method(
    order_id: str,
    request: ChangeMethodRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: PaymentRecoveryService = Depends(get_payment_recovery_service),
) -> PaymentSessionResponse:
    """Open a fresh payment session so the buyer can pick another method."""
    return await service.change_method(user, order_id, request.expected_total)
