"""
Gateway reconciliation rules.

Pure functions shared by the webhook reconciler and the status poller:
notification signature, transaction status mapping and payment method
labels.
"""
import hashlib
import hmac
from typing import Optional

from .enums import OrderStatus


SETTLING_TRANSACTION_STATUSES = frozenset({"capture", "settlement"})


def compute_signature(order_id: str, status_code: str, gross_amount: str, server_key: str) -> str:
    """SHA-512 hex digest of order_id + status_code + gross_amount + server_key."""
    payload = f"{order_id}{status_code}{gross_amount}{server_key}"
    return hashlib.sha512(payload.encode("utf-8")).hexdigest()


def verify_signature(
    order_id: str,
    status_code: str,
    gross_amount: str,
    server_key: str,
    signature_key: str,
) -> bool:
    """Constant-time comparison against the notification's signature_key."""
    expected = compute_signature(order_id, status_code, gross_amount, server_key)
    return hmac.compare_digest(expected, (signature_key or "").lower())


def map_transaction_status(
    transaction_status: str,
    fraud_status: Optional[str],
    current: OrderStatus,
) -> OrderStatus:
    """
    Map a gateway transaction status onto the order status vocabulary.

    Args:
        transaction_status: Gateway transaction_status
        fraud_status: Gateway fraud_status (only meaningful for capture)
        current: Order status to keep when the gateway status is unknown

    Returns:
        Target order status
    """
    status = (transaction_status or "").lower()

    if status == "capture":
        if (fraud_status or "").lower() == "accept":
            return OrderStatus.PAID
        return OrderStatus.PENDING
    if status == "settlement":
        return OrderStatus.PAID
    if status in ("cancel", "deny", "expire"):
        return OrderStatus.CANCELLED
    if status == "failure":
        return OrderStatus.FAILED
    if status == "pending":
        return OrderStatus.PENDING
    return current


_METHOD_LABELS = {
    "midtrans": "Midtrans",
    "bank_transfer": "Bank Transfer",
    "gopay": "GoPay",
    "qris": "QRIS",
    "shopeepay": "ShopeePay",
    "credit_card": "Kartu Kredit/Debit",
    "cstore": "Convenience Store",
    "echannel": "Mandiri Bill Payment",
}


def format_payment_method(method: Optional[str]) -> str:
    """Human-readable label for a stored payment method code."""
    if not method:
        return "-"
    return _METHOD_LABELS.get(method.lower(), method)
