"""Integration tests for operator and maintenance endpoints."""

import pytest

ADMIN_HEADERS = {"X-Admin-Key": "admin-secret"}


@pytest.mark.asyncio
async def test_admin_endpoints_require_key(client):
    missing = await client.post("/api/v1/admin/orders/cleanup-expired")
    wrong = await client.post(
        "/api/v1/admin/orders/cleanup-expired", headers={"X-Admin-Key": "guess"}
    )

    assert missing.status_code == 401
    assert wrong.status_code == 401


@pytest.mark.asyncio
async def test_cleanup_expired(client):
    response = await client.post("/api/v1/admin/orders/cleanup-expired", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.json() == {
        "status": "success",
        "message": "Processed 0 expired orders",
        "processed": 0,
        "errors": 0,
        "total_found": 0,
    }


@pytest.mark.asyncio
async def test_admin_status_update(client, checkout_body, buyer_headers, signed_notification):
    created = await client.post("/api/v1/checkout", json=checkout_body(), headers=buyer_headers)
    order_number = created.json()["order_id"]
    url = f"/api/v1/admin/orders/{order_number}/status"

    premature = await client.patch(url, json={"status": "processing"}, headers=ADMIN_HEADERS)
    assert premature.status_code == 409

    await client.post(
        "/api/v1/payments/webhook", json=signed_notification(order_number, "settlement")
    )

    processing = await client.patch(url, json={"status": "processing"}, headers=ADMIN_HEADERS)
    assert processing.status_code == 200
    assert processing.json()["status"] == "processing"

    no_tracking = await client.patch(url, json={"status": "shipped"}, headers=ADMIN_HEADERS)
    assert no_tracking.status_code == 400

    shipped = await client.patch(
        url, json={"status": "shipped", "tracking_number": "JNE123"}, headers=ADMIN_HEADERS
    )
    assert shipped.status_code == 200
    assert shipped.json()["tracking_number"] == "JNE123"


@pytest.mark.asyncio
async def test_maintenance_round_trip(client):
    initial = await client.get("/api/v1/maintenance")
    assert initial.status_code == 200
    assert initial.json()["is_enabled"] is False

    updated = await client.put(
        "/api/v1/admin/maintenance",
        json={"is_enabled": True, "message": "Back soon"},
        headers=ADMIN_HEADERS,
    )
    assert updated.status_code == 200

    current = await client.get("/api/v1/maintenance")
    assert current.json()["is_enabled"] is True
    assert current.json()["is_active"] is True
    assert current.json()["message"] == "Back soon"
