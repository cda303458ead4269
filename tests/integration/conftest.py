"""Pytest configuration and fixtures for API integration tests."""

from types import SimpleNamespace

import httpx
import pytest
import pytest_asyncio

from apps.api import deps
from apps.api.main import app
from storefront.application.interfaces import AuthenticatedUser, IIdentityProvider
from storefront.application.services import MaintenanceSettingsCache
from storefront.domain.errors import AuthError
from storefront.settings import AuthSettings, DatabaseSettings


class FakeIdentityProvider(IIdentityProvider):
    """Maps fixed bearer tokens to users."""

    USERS = {
        "token-buyer": AuthenticatedUser(id="user-1", email="buyer@example.com"),
        "token-other": AuthenticatedUser(id="user-2", email="someone@example.com"),
    }

    async def resolve(self, access_token: str) -> AuthenticatedUser:
        user = self.USERS.get(access_token)
        if user is None:
            raise AuthError("Invalid or expired access token")
        return user


@pytest.fixture
def buyer_headers():
    return {"Authorization": "Bearer token-buyer"}


@pytest.fixture
def other_headers():
    return {"Authorization": "Bearer token-other"}


@pytest.fixture
def app_settings(storefront_settings, midtrans_settings):
    return SimpleNamespace(
        database=DatabaseSettings(_env_file=None, url="sqlite+aiosqlite:///:memory:"),
        midtrans=midtrans_settings,
        auth=AuthSettings(_env_file=None),
        storefront=storefront_settings,
    )


@pytest_asyncio.fixture
async def client(session_factory, gateway, app_settings):
    """HTTP client bound to the app with test dependencies."""
    cache = MaintenanceSettingsCache(session_factory, ttl_seconds=30)

    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_payment_gateway] = lambda: gateway
    app.dependency_overrides[deps.get_settings] = lambda: app_settings
    app.dependency_overrides[deps.get_identity_provider] = FakeIdentityProvider
    app.dependency_overrides[deps.get_maintenance_cache] = lambda: cache

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()


@pytest.fixture
def checkout_body():
    def _body(items=None, total="300000", shipping_method="standard"):
        return {
            "orderData": {
                "total": total,
                "nama_pembeli": "Budi Santoso",
                "email_pembeli": "budi@example.com",
                "telepon_pembeli": "081234567890",
                "shipping_address": "Jl. Sudirman No. 1, Jakarta",
                "shipping_method": shipping_method,
            },
            "items": items if items is not None else [
                {"product_id": "tee-black", "ukuran": "M", "quantity": 2}
            ],
        }

    return _body
