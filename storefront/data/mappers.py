"""Static mappers for domain entities ↔ database models."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from storefront.domain.entities import (
    MaintenanceSettings,
    Order,
    OrderLine,
    PaymentRecord,
    Product,
)
from storefront.domain.enums import OrderStatus
from storefront.domain.value_objects import Money, OrderNumber

from .models import (
    MaintenanceSettingsModel,
    OrderItemModel,
    OrderModel,
    PaymentModel,
    ProductModel,
)
from .models.base import utcnow


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; every stored timestamp is UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class OrderLineMapper:
    """Static mapper for OrderLine ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel) -> OrderLine:
        return OrderLine(
            id=model.id,
            product_id=model.product_id,
            size=model.size,
            quantity=model.quantity,
            unit_price=Money(
                amount=Decimal(str(model.unit_price)),
                currency=model.currency or "IDR",
            ),
        )

    @staticmethod
    def to_persistence(entity: OrderLine, order_id: str) -> OrderItemModel:
        return OrderItemModel(
            order_id=order_id,
            product_id=entity.product_id,
            size=entity.size,
            quantity=entity.quantity,
            unit_price=entity.unit_price.amount,
            currency=entity.unit_price.currency,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested lines."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate (with nested lines).

        Args:
            model: OrderModel instance with items loaded

        Returns:
            Order domain aggregate
        """
        lines = [OrderLineMapper.to_domain(item) for item in model.items]

        return Order(
            id=model.id,
            order_number=OrderNumber(value=model.order_number),
            user_id=model.user_id,
            total=Money(amount=Decimal(str(model.total)), currency=model.currency or "IDR"),
            lines=lines,
            status=OrderStatus(model.status),
            payment_method=model.payment_method,
            payment_url=model.payment_url,
            payment_token=model.payment_token,
            gateway_order_id=model.gateway_order_id,
            tracking_number=model.tracking_number,
            shipping_method=model.shipping_method or "standard",
            shipping_address=model.shipping_address or "",
            buyer_name=model.buyer_name or "",
            buyer_email=model.buyer_email or "",
            buyer_phone=model.buyer_phone or "",
            stock_reserved=bool(model.stock_reserved),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert a new domain aggregate to ORM model (with nested lines).

        Assigns the id and timestamps when the entity has none.
        """
        now = utcnow()
        order_id = entity.id or str(uuid4())
        order_model = OrderModel(
            id=order_id,
            order_number=entity.order_number.value,
            user_id=entity.user_id,
            total=entity.total.amount,
            currency=entity.total.currency,
            created_at=entity.created_at or now,
        )
        OrderMapper.update_persistence(entity, order_model)
        order_model.updated_at = entity.updated_at or now

        order_model.items = [
            OrderLineMapper.to_persistence(line, order_id) for line in entity.lines
        ]
        return order_model

    @staticmethod
    def update_persistence(entity: Order, model: OrderModel) -> OrderModel:
        """Copy mutable header fields onto an existing ORM model.

        Lines are immutable after creation and are left untouched.
        """
        model.status = entity.status.value
        model.payment_method = entity.payment_method
        model.payment_url = entity.payment_url
        model.payment_token = entity.payment_token
        model.gateway_order_id = entity.gateway_order_id
        model.tracking_number = entity.tracking_number
        model.stock_reserved = entity.stock_reserved
        model.shipping_method = entity.shipping_method
        model.shipping_address = entity.shipping_address
        model.buyer_name = entity.buyer_name
        model.buyer_email = entity.buyer_email
        model.buyer_phone = entity.buyer_phone
        model.updated_at = entity.updated_at or utcnow()
        return model


class PaymentMapper:

    @staticmethod
    def to_domain(model: PaymentModel) -> PaymentRecord:
        return PaymentRecord(
            id=model.id,
            order_id=model.order_id,
            amount=Money(amount=Decimal(str(model.amount)), currency=model.currency or "IDR"),
            status=OrderStatus(model.status),
            payment_proof=model.payment_proof,
            updated_at=as_utc(model.updated_at),
        )

    @staticmethod
    def update_persistence(entity: PaymentRecord, model: PaymentModel) -> PaymentModel:
        model.order_id = entity.order_id
        model.amount = entity.amount.amount
        model.currency = entity.amount.currency
        model.status = entity.status.value
        model.payment_proof = entity.payment_proof
        model.updated_at = entity.updated_at or utcnow()
        return model


class ProductMapper:

    @staticmethod
    def to_domain(model: ProductModel) -> Product:
        return Product(
            id=model.id,
            name=model.name,
            price=Money(amount=Decimal(str(model.price)), currency=model.currency or "IDR"),
            category=model.category,
            is_active=bool(model.is_active),
            stock_quantity=model.stock_quantity or 0,
        )


class MaintenanceMapper:

    @staticmethod
    def to_domain(model: MaintenanceSettingsModel) -> MaintenanceSettings:
        return MaintenanceSettings(
            id=model.id,
            is_enabled=bool(model.is_enabled),
            maintenance_start=as_utc(model.maintenance_start),
            maintenance_end=as_utc(model.maintenance_end),
            message=model.message,
        )

    @staticmethod
    def update_persistence(
        entity: MaintenanceSettings, model: MaintenanceSettingsModel
    ) -> MaintenanceSettingsModel:
        model.is_enabled = entity.is_enabled
        model.maintenance_start = entity.maintenance_start
        model.maintenance_end = entity.maintenance_end
        model.message = entity.message
        return model
