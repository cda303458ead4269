"""SQLAlchemy ORM models for the catalog and per-size stock."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base


class ProductModel(Base):
    """SQLAlchemy ORM model for products table."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), default="IDR")
    category = Column(String(100), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    # Display cache: sum of product_sizes.quantity
    stock_quantity = Column(Integer, default=0, nullable=False)

    sizes = relationship(
        "ProductSizeModel", back_populates="product", cascade="all, delete-orphan"
    )


class ProductSizeModel(Base):
    """SQLAlchemy ORM model for product_sizes table (the stock ledger)."""

    __tablename__ = "product_sizes"
    __table_args__ = (
        UniqueConstraint("product_id", "size", name="uq_product_size"),
        CheckConstraint("quantity >= 0", name="ck_product_size_quantity"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    size = Column(String(20), nullable=False)
    quantity = Column(Integer, default=0, nullable=False)

    product = relationship("ProductModel", back_populates="sizes")
