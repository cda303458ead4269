"""Shared fixtures: in-memory database, seeded catalog, mock gateway."""

from decimal import Decimal
from typing import Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from storefront.application.dtos import CheckoutRequest, CheckoutResponse
from storefront.application.interfaces import AuthenticatedUser
from storefront.application.services import CheckoutService
from storefront.data.models import Base, ProductModel, ProductSizeModel
from storefront.data.uow import create_uow
from storefront.domain.payment_rules import compute_signature
from storefront.infrastructure.adapters.gateway import MockPaymentGateway
from storefront.settings import MidtransSettings, StorefrontSettings


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
SERVER_KEY = "SB-Mid-server-test-key"
ADMIN_KEY = "admin-secret"

PRICES = {
    "tee-black": Decimal("150000"),
    "hoodie-grey": Decimal("300000"),
    "cap-old": Decimal("50000"),
}


@pytest_asyncio.fixture
async def engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    """Session factory over a seeded catalog."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        session.add_all(
            [
                ProductModel(
                    id="tee-black", name="Black Tee", price=PRICES["tee-black"],
                    category="tees", is_active=True, stock_quantity=7,
                ),
                ProductModel(
                    id="hoodie-grey", name="Grey Hoodie", price=PRICES["hoodie-grey"],
                    category="outerwear", is_active=True, stock_quantity=1,
                ),
                ProductModel(
                    id="cap-old", name="Old Cap", price=PRICES["cap-old"],
                    category="caps", is_active=False, stock_quantity=3,
                ),
                ProductSizeModel(product_id="tee-black", size="M", quantity=5),
                ProductSizeModel(product_id="tee-black", size="L", quantity=2),
                ProductSizeModel(product_id="hoodie-grey", size="XL", quantity=1),
                ProductSizeModel(product_id="cap-old", size="M", quantity=3),
            ]
        )
        await session.commit()

    yield factory


@pytest.fixture
def storefront_settings() -> StorefrontSettings:
    return StorefrontSettings(
        _env_file=None,
        public_base_url="https://shop.test",
        admin_api_key=ADMIN_KEY,
    )


@pytest.fixture
def midtrans_settings() -> MidtransSettings:
    return MidtransSettings(_env_file=None, server_key=SERVER_KEY, environment="sandbox")


@pytest.fixture
def gateway() -> MockPaymentGateway:
    return MockPaymentGateway()


@pytest.fixture
def buyer() -> AuthenticatedUser:
    return AuthenticatedUser(id="user-1", email="buyer@example.com")


@pytest.fixture
def other_user() -> AuthenticatedUser:
    return AuthenticatedUser(id="user-2", email="someone@example.com")


@pytest.fixture
def checkout_service(session_factory, gateway, storefront_settings, midtrans_settings) -> CheckoutService:
    return CheckoutService(session_factory, gateway, storefront_settings, midtrans_settings)


@pytest.fixture
def make_cart():
    """Build a CheckoutRequest; the total is computed from catalog prices unless given."""

    def _make(
        items: List[Tuple[str, str, int]],
        shipping_method: str = "standard",
        total: Optional[Decimal] = None,
    ) -> CheckoutRequest:
        if total is None:
            total = sum((PRICES[pid] * qty for pid, _, qty in items), Decimal("0"))
            if shipping_method == "express":
                total += Decimal("20000")
        return CheckoutRequest.model_validate(
            {
                "orderData": {
                    "total": str(total),
                    "nama_pembeli": "Budi Santoso",
                    "email_pembeli": "budi@example.com",
                    "telepon_pembeli": "+62 812-3456-7890",
                    "shipping_address": "Jl. Sudirman No. 1, Jakarta",
                    "shipping_method": shipping_method,
                },
                "items": [
                    {"product_id": pid, "ukuran": size, "quantity": qty}
                    for pid, size, qty in items
                ],
            }
        )

    return _make


@pytest.fixture
def place_order(checkout_service, make_cart, buyer):
    """Check out a cart for the buyer and return the response."""

    async def _place(
        items: Optional[List[Tuple[str, str, int]]] = None,
        shipping_method: str = "standard",
        user: Optional[AuthenticatedUser] = None,
    ) -> CheckoutResponse:
        cart = make_cart(items or [("tee-black", "M", 2)], shipping_method=shipping_method)
        return await checkout_service.checkout(user or buyer, cart)

    return _place


@pytest.fixture
def size_stock(session_factory):
    async def _read(product_id: str, size: str) -> Optional[int]:
        uow = create_uow(session_factory)
        async with uow:
            return await uow.inventory.get_quantity(product_id, size)

    return _read


@pytest.fixture
def product_stock(session_factory):
    async def _read(product_id: str) -> int:
        async with session_factory() as session:
            result = await session.execute(
                select(ProductModel.stock_quantity).where(ProductModel.id == product_id)
            )
            return result.scalar_one()

    return _read


@pytest.fixture
def load_order(session_factory):
    """Fetch (order, payment record) by order number."""

    async def _load(order_number: str):
        uow = create_uow(session_factory)
        async with uow:
            order = await uow.orders.find_by_order_number(order_number)
            payment = await uow.payments.get_for_order(order.id) if order else None
            return order, payment

    return _load


@pytest.fixture
def signed_notification():
    """Gateway notification body with a valid signature."""

    def _sign(
        order_id: str,
        transaction_status: str,
        gross_amount: str = "300000.00",
        status_code: str = "200",
        server_key: str = SERVER_KEY,
        **extra,
    ) -> Dict[str, object]:
        payload = {
            "order_id": order_id,
            "status_code": status_code,
            "gross_amount": gross_amount,
            "transaction_status": transaction_status,
            "signature_key": compute_signature(order_id, status_code, gross_amount, server_key),
        }
        payload.update(extra)
        return payload

    return _sign
