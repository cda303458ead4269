from .order_status import OrderStatus, ShippingMethod

__all__ = ["OrderStatus", "ShippingMethod"]
