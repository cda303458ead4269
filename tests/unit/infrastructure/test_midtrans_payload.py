"""Unit tests for the Snap request body built by the Midtrans gateway."""

import pytest

from storefront.application.interfaces import (
    CustomerDetails,
    PaymentCallbacks,
    PaymentSessionRequest,
    SessionItem,
)
from storefront.infrastructure.adapters.gateway import MidtransPaymentGateway
from storefront.settings import MidtransSettings


@pytest.fixture
def session_request() -> PaymentSessionRequest:
    return PaymentSessionRequest(
        gateway_order_id="ORD-20250103-0042",
        gross_amount=320000,
        items=[
            SessionItem(id="tee-black-M", name="Black Tee (M)", price=150000, quantity=2),
            SessionItem(id="SHIPPING", name="Ongkos Kirim Express", price=20000, quantity=1),
        ],
        customer=CustomerDetails(
            name="Budi Santoso",
            email="budi@example.com",
            phone="+62 812-3456-7890",
            address="Jl. Sudirman No. 1, Jakarta",
        ),
        callbacks=PaymentCallbacks(finish="https://f", unfinish="https://u", error="https://e"),
    )


def _gateway(environment: str) -> MidtransPaymentGateway:
    return MidtransPaymentGateway(
        MidtransSettings(_env_file=None, server_key="SB-key", environment=environment)
    )


def test_sandbox_payload(session_request):
    payload = _gateway("sandbox").build_payload(session_request)

    assert payload["transaction_details"] == {
        "order_id": "ORD-20250103-0042",
        "gross_amount": 320000,
    }
    assert sum(item["price"] * item["quantity"] for item in payload["item_details"]) == 320000
    assert payload["credit_card"] == {"secure": True}
    assert payload["callbacks"] == {"finish": "https://f", "unfinish": "https://u", "error": "https://e"}
    assert "enabled_payments" not in payload
    assert "custom_expiry" not in payload


def test_customer_phone_is_digits_only(session_request):
    customer = _gateway("sandbox").build_payload(session_request)["customer_details"]

    assert customer["phone"] == "6281234567890"
    assert customer["shipping_address"]["city"] == "Jakarta"
    assert customer["shipping_address"]["postal_code"] == "12345"
    assert customer["shipping_address"]["country_code"] == "IDN"


def test_production_payload_restricts_methods_and_expiry(session_request):
    payload = _gateway("production").build_payload(session_request)

    assert payload["enabled_payments"] == [
        "credit_card", "bank_transfer", "echannel", "gopay", "shopeepay",
    ]
    assert payload["custom_expiry"] == {"expiry_duration": 60, "unit": "minute"}


def test_environment_selects_base_urls():
    sandbox = MidtransSettings(_env_file=None, environment="sandbox")
    production = MidtransSettings(_env_file=None, environment="production")

    assert sandbox.snap_url == "https://app.sandbox.midtrans.com/snap/v1/transactions"
    assert production.snap_url == "https://app.midtrans.com/snap/v1/transactions"
    assert sandbox.api_base_url == "https://api.sandbox.midtrans.com"
    assert production.api_base_url == "https://api.midtrans.com"
