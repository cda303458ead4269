# Settings package
from storefront.settings.app import AppSettings, get_app_settings
from storefront.settings.sections.auth import AuthSettings
from storefront.settings.sections.database import DatabaseSettings
from storefront.settings.sections.midtrans import MidtransSettings
from storefront.settings.sections.storefront import StorefrontSettings

__all__ = [
    "get_app_settings",
    "AppSettings",
    "AuthSettings",
    "DatabaseSettings",
    "MidtransSettings",
    "StorefrontSettings",
]
