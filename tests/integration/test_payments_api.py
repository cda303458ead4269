"""Integration tests for payment endpoints."""

import pytest


async def _checkout(client, checkout_body, headers) -> str:
    response = await client.post("/api/v1/checkout", json=checkout_body(), headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["order_id"]


@pytest.mark.asyncio
async def test_webhook_settlement(client, checkout_body, buyer_headers, signed_notification, size_stock):
    order_number = await _checkout(client, checkout_body, buyer_headers)

    response = await client.post(
        "/api/v1/payments/webhook",
        json=signed_notification(order_number, "settlement", payment_type="gopay"),
    )

    assert response.status_code == 200
    assert response.json() == {
        "status": "success",
        "order_id": order_number,
        "order_status": "paid",
    }
    assert await size_stock("tee-black", "M") == 3


@pytest.mark.asyncio
async def test_webhook_bad_signature_is_401(client, checkout_body, buyer_headers, signed_notification):
    order_number = await _checkout(client, checkout_body, buyer_headers)

    response = await client.post(
        "/api/v1/payments/webhook",
        json=signed_notification(order_number, "settlement", server_key="forged"),
    )

    assert response.status_code == 401
    assert response.json()["error_type"] == "auth"


@pytest.mark.asyncio
async def test_webhook_missing_fields_is_400(client):
    response = await client.post("/api/v1/payments/webhook", json={"order_id": "ORD-1"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_webhook_invalid_json_is_400(client):
    response = await client.post(
        "/api/v1/payments/webhook",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_webhook_body_that_is_not_utf8_is_400(client):
    response = await client.post(
        "/api/v1/payments/webhook",
        content=b"\x80\x81\x82\x83",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error_type"] == "validation"


@pytest.mark.asyncio
async def test_webhook_unknown_order_is_ignored(client, signed_notification):
    response = await client.post(
        "/api/v1/payments/webhook", json=signed_notification("ORD-19990101-0000", "settlement")
    )

    assert response.status_code == 200
    assert response.json() == {"status": "ignored", "reason": "order_not_found"}


@pytest.mark.asyncio
async def test_status_poll(client, checkout_body, buyer_headers, gateway):
    order_number = await _checkout(client, checkout_body, buyer_headers)
    gateway.set_status(order_number, "settlement")

    response = await client.post(
        "/api/v1/payments/status",
        json={"order_id": order_number, "transaction_status": "settlement", "status_code": "200"},
        headers=buyer_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["payment_status"] == "settlement"
    assert data["order"]["status"] == "paid"


@pytest.mark.asyncio
async def test_status_poll_for_someone_elses_order_is_404(
    client, checkout_body, buyer_headers, other_headers
):
    order_number = await _checkout(client, checkout_body, buyer_headers)

    response = await client.post(
        "/api/v1/payments/status", json={"order_id": order_number}, headers=other_headers
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_recover_and_change_method(client, checkout_body, buyer_headers):
    order_number = await _checkout(client, checkout_body, buyer_headers)

    recovered = await client.post(
        "/api/v1/payments/recover", json={"order_id": order_number}, headers=buyer_headers
    )
    assert recovered.status_code == 200
    assert recovered.json()["gateway_order_id"].startswith(f"{order_number}-ATTEMPT-")

    changed = await client.post(
        f"/api/v1/payments/{order_number}/change-method",
        json={"expectedTotal": 300000},
        headers=buyer_headers,
    )
    assert changed.status_code == 200
    assert changed.json()["success"] is True


@pytest.mark.asyncio
async def test_recover_paid_order_is_409(client, checkout_body, buyer_headers, signed_notification):
    order_number = await _checkout(client, checkout_body, buyer_headers)
    await client.post(
        "/api/v1/payments/webhook", json=signed_notification(order_number, "settlement")
    )

    response = await client.post(
        "/api/v1/payments/recover", json={"order_id": order_number}, headers=buyer_headers
    )

    assert response.status_code == 409
