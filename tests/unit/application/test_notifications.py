"""Unit tests for typed gateway notifications."""

import pytest

from storefront.application.dtos import (
    BankTransferNotification,
    ConvenienceStoreNotification,
    EWalletNotification,
    GenericNotification,
    parse_notification,
)
from storefront.domain.errors import ValidationError

BASE = {
    "order_id": "ORD-20250103-0042",
    "status_code": "200",
    "gross_amount": "300000.00",
    "signature_key": "abc",
    "transaction_status": "settlement",
}


def test_bank_transfer_label_includes_bank():
    notification = parse_notification(
        {**BASE, "payment_type": "bank_transfer", "va_numbers": [{"bank": "bca", "va_number": "123"}]}
    )

    assert isinstance(notification, BankTransferNotification)
    assert notification.method_code == "bank_transfer"
    assert notification.method_label == "Bank Transfer (BCA)"


def test_permata_virtual_account():
    notification = parse_notification(
        {**BASE, "payment_type": "bank_transfer", "permata_va_number": "8562000"}
    )
    assert notification.method_label == "Bank Transfer (PERMATA)"


def test_convenience_store_label():
    notification = parse_notification({**BASE, "payment_type": "cstore", "store": "indomaret"})

    assert isinstance(notification, ConvenienceStoreNotification)
    assert notification.method_label == "Convenience Store (Indomaret)"


def test_ewallet_variant():
    notification = parse_notification({**BASE, "payment_type": "gopay"})

    assert isinstance(notification, EWalletNotification)
    assert notification.method_label == "GoPay"


def test_unknown_payment_type_is_generic_and_keeps_raw():
    payload = {**BASE, "payment_type": "akulaku", "merchant_id": "M-1"}
    notification = parse_notification(payload)

    assert isinstance(notification, GenericNotification)
    assert notification.method_label == "akulaku"
    assert notification.raw["merchant_id"] == "M-1"


def test_numeric_fields_are_kept_as_text():
    notification = parse_notification({**BASE, "status_code": 200, "gross_amount": 300000})

    assert notification.status_code == "200"
    assert notification.gross_amount == "300000"


def test_missing_fields_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_notification({"order_id": "ORD-1", "transaction_status": "settlement"})

    assert exc_info.value.status_code == 400
    assert set(exc_info.value.details["missing_fields"]) == {
        "status_code",
        "gross_amount",
        "signature_key",
    }


def test_non_numeric_amount_rejected():
    with pytest.raises(ValidationError):
        parse_notification({**BASE, "gross_amount": "lots"})
