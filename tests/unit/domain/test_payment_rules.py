"""Unit tests for signature, status mapping and payment method labels."""

import hashlib

import pytest

from storefront.domain.enums import OrderStatus
from storefront.domain.payment_rules import (
    compute_signature,
    format_payment_method,
    map_transaction_status,
    verify_signature,
)


def test_signature_is_sha512_of_concatenated_fields():
    expected = hashlib.sha512(b"ORD-1200300000.00server-key").hexdigest()
    assert compute_signature("ORD-1", "200", "300000.00", "server-key") == expected


def test_verify_signature_accepts_match_and_rejects_tampering():
    signature = compute_signature("ORD-1", "200", "300000.00", "server-key")

    assert verify_signature("ORD-1", "200", "300000.00", "server-key", signature)
    assert verify_signature("ORD-1", "200", "300000.00", "server-key", signature.upper())
    assert not verify_signature("ORD-1", "200", "1.00", "server-key", signature)
    assert not verify_signature("ORD-1", "200", "300000.00", "other-key", signature)
    assert not verify_signature("ORD-1", "200", "300000.00", "server-key", "")


@pytest.mark.parametrize(
    "transaction_status, fraud_status, expected",
    [
        ("capture", "accept", OrderStatus.PAID),
        ("capture", "challenge", OrderStatus.PENDING),
        ("capture", None, OrderStatus.PENDING),
        ("settlement", None, OrderStatus.PAID),
        ("cancel", None, OrderStatus.CANCELLED),
        ("deny", None, OrderStatus.CANCELLED),
        ("expire", None, OrderStatus.CANCELLED),
        ("failure", None, OrderStatus.FAILED),
        ("pending", None, OrderStatus.PENDING),
        ("SETTLEMENT", None, OrderStatus.PAID),
    ],
)
def test_map_transaction_status(transaction_status, fraud_status, expected):
    assert map_transaction_status(transaction_status, fraud_status, OrderStatus.PENDING) == expected


def test_unknown_transaction_status_keeps_current():
    assert map_transaction_status("refund", None, OrderStatus.PAID) == OrderStatus.PAID


@pytest.mark.parametrize(
    "method, label",
    [
        ("midtrans", "Midtrans"),
        ("bank_transfer", "Bank Transfer"),
        ("gopay", "GoPay"),
        ("qris", "QRIS"),
        ("shopeepay", "ShopeePay"),
        ("credit_card", "Kartu Kredit/Debit"),
        ("cstore", "Convenience Store"),
        ("echannel", "Mandiri Bill Payment"),
        ("akulaku", "akulaku"),
        (None, "-"),
    ],
)
def test_format_payment_method(method, label):
    assert format_payment_method(method) == label
