"""SQLAlchemy ORM model for payment records."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text

from .base import Base, utcnow


class PaymentModel(Base):
    """One row per order, upserted on every reconciliation."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id"), unique=True, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), default="IDR")
    status = Column(String(20), default="pending", nullable=False)
    payment_proof = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
