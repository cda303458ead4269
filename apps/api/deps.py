"""FastAPI dependencies for dependency injection."""

import hmac
import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.application.interfaces import AuthenticatedUser, IIdentityProvider, IPaymentGateway
from storefront.application.services import (
    CheckoutService,
    ExpiredOrderCleanupService,
    MaintenanceService,
    MaintenanceSettingsCache,
    OrderApplicationService,
    PaymentRecoveryService,
    PaymentStatusService,
    WebhookReconciler,
)
from storefront.domain.errors import AuthError, ConfigurationError
from storefront.infrastructure.adapters.auth import HostedAuthClient
from storefront.infrastructure.adapters.gateway import MidtransPaymentGateway, MockPaymentGateway
from storefront.infrastructure.database import build_engine, build_session_factory
from storefront.settings import AppSettings, MidtransSettings, get_app_settings

load_dotenv()

logger = logging.getLogger(__name__)

_settings = get_app_settings()

# Create async engine and session factory from DB_* settings
_engine = build_engine(_settings.database)
_session_factory: async_sessionmaker[AsyncSession] = build_session_factory(_engine)

_bearer = HTTPBearer(auto_error=False)

# Singletons
_payment_gateway: Optional[IPaymentGateway] = None
_identity_provider: Optional[IIdentityProvider] = None
_maintenance_cache: Optional[MaintenanceSettingsCache] = None


def get_engine():
    return _engine


def get_settings() -> AppSettings:
    """Get cached application settings."""
    return get_app_settings()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory.

    Returns:
        async_sessionmaker instance
    """
    return _session_factory


# =============================================================================
# EXTERNAL SERVICES (singleton instances)
# =============================================================================


def build_payment_gateway(midtrans: MidtransSettings) -> IPaymentGateway:
    """Midtrans when enabled and configured, the mock gateway otherwise.

    Raises:
        ConfigurationError: Production mode without a usable Midtrans setup
    """
    if midtrans.enabled and midtrans.server_key:
        return MidtransPaymentGateway(midtrans)
    if midtrans.is_production:
        raise ConfigurationError(
            "Midtrans must be enabled with a server key when MIDTRANS_ENVIRONMENT=production"
        )
    logger.warning("Midtrans disabled or not configured, using MockPaymentGateway")
    return MockPaymentGateway()


def get_payment_gateway() -> IPaymentGateway:
    global _payment_gateway
    if _payment_gateway is None:
        _payment_gateway = build_payment_gateway(_settings.midtrans)
    return _payment_gateway


def get_identity_provider() -> IIdentityProvider:
    global _identity_provider
    if _identity_provider is None:
        _identity_provider = HostedAuthClient(_settings.auth)
    return _identity_provider


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
) -> AuthenticatedUser:
    """Resolve the bearer token to the calling user.

    Raises:
        AuthError: Missing or rejected token
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing bearer token")
    return await identity_provider.resolve(credentials.credentials)


async def require_admin_key(
    x_admin_key: Optional[str] = Header(default=None, alias="X-Admin-Key"),
    settings: AppSettings = Depends(get_settings),
) -> None:
    """Guard for operator endpoints."""
    expected = settings.storefront.admin_api_key
    if not expected:
        raise AuthError("Admin access is not configured")
    if not x_admin_key or not hmac.compare_digest(x_admin_key, expected):
        raise AuthError("Invalid admin key")


# =============================================================================
# APPLICATION SERVICES
# =============================================================================


def get_checkout_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
    settings: AppSettings = Depends(get_settings),
) -> CheckoutService:
    return CheckoutService(session_factory, gateway, settings.storefront, settings.midtrans)


def get_webhook_reconciler(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    settings: AppSettings = Depends(get_settings),
) -> WebhookReconciler:
    return WebhookReconciler(
        session_factory,
        server_key=settings.midtrans.server_key,
        amount_tolerance=settings.storefront.amount_tolerance,
    )


def get_payment_status_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
) -> PaymentStatusService:
    return PaymentStatusService(session_factory, gateway)


def get_payment_recovery_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
    settings: AppSettings = Depends(get_settings),
) -> PaymentRecoveryService:
    return PaymentRecoveryService(session_factory, gateway, settings.storefront)


def get_order_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> OrderApplicationService:
    """Get OrderApplicationService instance.

    Returns:
        OrderApplicationService instance
    """
    return OrderApplicationService(session_factory)


def get_cleanup_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    settings: AppSettings = Depends(get_settings),
) -> ExpiredOrderCleanupService:
    return ExpiredOrderCleanupService(
        session_factory, ttl_minutes=settings.storefront.pending_order_ttl_minutes
    )


def get_maintenance_cache(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    settings: AppSettings = Depends(get_settings),
) -> MaintenanceSettingsCache:
    global _maintenance_cache
    if _maintenance_cache is None:
        _maintenance_cache = MaintenanceSettingsCache(
            session_factory, ttl_seconds=settings.storefront.maintenance_cache_ttl_seconds
        )
    return _maintenance_cache


def get_maintenance_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    cache: MaintenanceSettingsCache = Depends(get_maintenance_cache),
) -> MaintenanceService:
    return MaintenanceService(session_factory, cache)
