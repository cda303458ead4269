"""Webhook reconciliation: signatures, idempotence and stock."""

import json

import pytest

from storefront.application.services import WebhookReconciler
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import ConfigurationError, InvalidSignature, ValidationError

SERVER_KEY = "SB-Mid-server-test-key"


@pytest.fixture
def reconciler(session_factory) -> WebhookReconciler:
    return WebhookReconciler(session_factory, server_key=SERVER_KEY)


@pytest.mark.asyncio
async def test_settlement_after_checkout_does_not_decrement_again(
    place_order, reconciler, signed_notification, load_order, size_stock, product_stock
):
    response = await place_order([("tee-black", "M", 2)])

    result = await reconciler.handle(
        signed_notification(
            response.order_id,
            "settlement",
            payment_type="bank_transfer",
            va_numbers=[{"bank": "bca", "va_number": "123"}],
        )
    )

    assert result.status == "success"
    assert result.order_status == "paid"

    order, payment = await load_order(response.order_id)
    assert order.status == OrderStatus.PAID
    assert order.payment_url is None
    assert order.payment_token is None
    assert order.payment_method == "bank_transfer"
    assert payment.status == OrderStatus.PAID
    assert json.loads(payment.payment_proof)["va_numbers"][0]["bank"] == "bca"

    assert await size_stock("tee-black", "M") == 3
    assert await product_stock("tee-black") == 5


@pytest.mark.asyncio
async def test_duplicate_settlement_is_idempotent(
    place_order, reconciler, signed_notification, load_order, size_stock
):
    response = await place_order([("tee-black", "M", 2)])
    notification = signed_notification(response.order_id, "settlement")

    await reconciler.handle(notification)
    second = await reconciler.handle(notification)

    assert second.order_status == "paid"
    order, payment = await load_order(response.order_id)
    assert order.status == OrderStatus.PAID
    assert payment.status == OrderStatus.PAID
    assert await size_stock("tee-black", "M") == 3


@pytest.mark.asyncio
async def test_expire_releases_stock_once(
    place_order, reconciler, signed_notification, load_order, size_stock, product_stock
):
    response = await place_order([("tee-black", "M", 2)])
    notification = signed_notification(response.order_id, "expire")

    await reconciler.handle(notification)
    await reconciler.handle(notification)

    order, payment = await load_order(response.order_id)
    assert order.status == OrderStatus.CANCELLED
    assert order.stock_reserved is False
    assert payment.status == OrderStatus.CANCELLED
    assert await size_stock("tee-black", "M") == 5
    assert await product_stock("tee-black") == 7


@pytest.mark.asyncio
async def test_failure_releases_stock(
    place_order, reconciler, signed_notification, load_order, size_stock
):
    response = await place_order([("hoodie-grey", "XL", 1)])

    result = await reconciler.handle(
        signed_notification(response.order_id, "failure", gross_amount="300000.00")
    )

    assert result.order_status == "failed"
    assert await size_stock("hoodie-grey", "XL") == 1


@pytest.mark.asyncio
async def test_late_settlement_retakes_released_stock(
    place_order, reconciler, signed_notification, load_order, size_stock
):
    response = await place_order([("tee-black", "M", 2)])

    await reconciler.handle(signed_notification(response.order_id, "expire"))
    assert await size_stock("tee-black", "M") == 5

    await reconciler.handle(signed_notification(response.order_id, "settlement"))

    order, _ = await load_order(response.order_id)
    assert order.status == OrderStatus.PAID
    assert order.stock_reserved is True
    assert await size_stock("tee-black", "M") == 3


@pytest.mark.asyncio
async def test_expire_after_settlement_is_not_a_downgrade(
    place_order, reconciler, signed_notification, load_order, size_stock
):
    response = await place_order([("tee-black", "M", 2)])

    await reconciler.handle(signed_notification(response.order_id, "settlement"))
    result = await reconciler.handle(signed_notification(response.order_id, "expire"))

    assert result.order_status == "paid"
    order, payment = await load_order(response.order_id)
    assert order.status == OrderStatus.PAID
    assert payment.status == OrderStatus.PAID
    assert await size_stock("tee-black", "M") == 3


@pytest.mark.asyncio
async def test_capture_under_fraud_review_stays_pending(
    place_order, reconciler, signed_notification, load_order, size_stock
):
    response = await place_order([("tee-black", "M", 2)])

    await reconciler.handle(
        signed_notification(
            response.order_id, "capture", fraud_status="challenge", payment_type="credit_card"
        )
    )

    order, payment = await load_order(response.order_id)
    assert order.status == OrderStatus.PENDING
    assert order.payment_method == "credit_card"
    assert payment.status == OrderStatus.PENDING
    assert await size_stock("tee-black", "M") == 3


@pytest.mark.asyncio
async def test_bad_signature_rejected_without_mutation(
    place_order, reconciler, signed_notification, load_order
):
    response = await place_order([("tee-black", "M", 2)])
    notification = signed_notification(response.order_id, "settlement", server_key="wrong-key")

    with pytest.raises(InvalidSignature) as exc_info:
        await reconciler.handle(notification)

    assert exc_info.value.status_code == 401
    order, payment = await load_order(response.order_id)
    assert order.status == OrderStatus.PENDING
    assert payment is None


@pytest.mark.asyncio
async def test_amount_mismatch_is_ignored(
    place_order, reconciler, signed_notification, load_order
):
    response = await place_order([("tee-black", "M", 2)])

    result = await reconciler.handle(
        signed_notification(response.order_id, "settlement", gross_amount="1000.00")
    )

    assert result.status == "ignored"
    assert result.reason == "amount_mismatch"
    order, _ = await load_order(response.order_id)
    assert order.status == OrderStatus.PENDING


@pytest.mark.asyncio
async def test_unknown_order_is_ignored(reconciler, signed_notification):
    result = await reconciler.handle(signed_notification("ORD-19990101-0000", "settlement"))

    assert result.status == "ignored"
    assert result.reason == "order_not_found"


@pytest.mark.asyncio
async def test_attempt_id_resolves_to_base_order(
    place_order, reconciler, signed_notification, load_order
):
    response = await place_order([("tee-black", "M", 2)])
    attempt_id = f"{response.order_id}-ATTEMPT-1736000000000"

    result = await reconciler.handle(signed_notification(attempt_id, "settlement"))

    assert result.status == "success"
    assert result.order_id == response.order_id
    order, _ = await load_order(response.order_id)
    assert order.status == OrderStatus.PAID


@pytest.mark.asyncio
async def test_missing_fields_rejected(reconciler):
    with pytest.raises(ValidationError):
        await reconciler.handle({"order_id": "ORD-1", "transaction_status": "settlement"})


@pytest.mark.asyncio
async def test_missing_server_key_is_a_configuration_error(session_factory, signed_notification):
    reconciler = WebhookReconciler(session_factory, server_key="")

    with pytest.raises(ConfigurationError) as exc_info:
        await reconciler.handle(signed_notification("ORD-1", "settlement"))

    assert exc_info.value.status_code == 500
