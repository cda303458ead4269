"""Order number value object."""
import random
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

ATTEMPT_SEPARATOR = "-ATTEMPT-"
GATEWAY_ORDER_ID_MAX_LENGTH = 50


@dataclass(frozen=True)
class OrderNumber:
    """
    Externally facing order identifier, passed to the gateway as its
    transaction id.

    Format: <PREFIX>-YYYYMMDD-NNNN
    Examples:
    - ORD-20261017-0042
    - TEE-20250103-9120
    """
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("Order number cannot be empty")

    @classmethod
    def generate(cls, prefix: str = "ORD", now: Optional[datetime] = None) -> "OrderNumber":
        """Date-stamped number with a random four digit suffix."""
        now = now or datetime.now(timezone.utc)
        suffix = f"{random.randint(0, 9999):04d}"
        return cls(value=f"{prefix}-{now.strftime('%Y%m%d')}-{suffix}")

    def attempt_id(self, epoch_ms: Optional[int] = None) -> str:
        """Gateway order id for a repeated payment attempt."""
        return build_attempt_id(self.value, epoch_ms)

    def __str__(self) -> str:
        return self.value


def build_attempt_id(base_order_number: str = "", epoch_ms: Optional[int] = None) -> str:
    """
    Build `<base>-ATTEMPT-<epoch-ms>` truncated to the gateway id limit.

    The suffix is always kept whole; the base is cut when too long.
    """
    trimmed = (base_order_number or "").strip()
    if epoch_ms is None:
        epoch_ms = int(time.time() * 1000)
    suffix = f"{ATTEMPT_SEPARATOR}{epoch_ms}"

    if not trimmed:
        return f"ORDER{suffix}"

    if len(trimmed) + len(suffix) <= GATEWAY_ORDER_ID_MAX_LENGTH:
        return f"{trimmed}{suffix}"

    return f"{trimmed[:GATEWAY_ORDER_ID_MAX_LENGTH - len(suffix)]}{suffix}"


def base_order_number(gateway_order_id: str) -> str:
    """Strip an attempt suffix, if any."""
    return gateway_order_id.split(ATTEMPT_SEPARATOR, 1)[0]
