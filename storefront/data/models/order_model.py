"""SQLAlchemy ORM models for the Order aggregate."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True)
    order_number = Column(String(50), unique=True, nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    total = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), default="IDR")
    status = Column(String(20), default="pending", nullable=False, index=True)

    payment_method = Column(String(50), nullable=True)
    payment_url = Column(Text, nullable=True)
    payment_token = Column(String(255), nullable=True)
    gateway_order_id = Column(String(50), nullable=True, index=True)
    tracking_number = Column(String(100), nullable=True)
    stock_reserved = Column(Boolean, default=False, nullable=False)

    shipping_method = Column(String(20), default="standard")
    shipping_address = Column(Text, default="")
    buyer_name = Column(String(255), default="")
    buyer_email = Column(String(255), default="")
    buyer_phone = Column(String(50), default="")

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationship to items
    items = relationship(
        "OrderItemModel", back_populates="order", cascade="all, delete-orphan"
    )


class OrderItemModel(Base):
    """SQLAlchemy ORM model for order_items table."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    size = Column(String(20), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), default="IDR")

    # Relationship back to order
    order = relationship("OrderModel", back_populates="items")
