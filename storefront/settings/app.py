# storefront/settings/app.py
from functools import lru_cache

from storefront.settings.sections.auth import AuthSettings
from storefront.settings.sections.database import DatabaseSettings
from storefront.settings.sections.midtrans import MidtransSettings
from storefront.settings.sections.storefront import StorefrontSettings


class AppSettings:
    """
    Central application settings aggregator.
    Settings are loaded lazily inside __init__
    to prevent eager evaluation at import time.
    """

    def __init__(self):
        self.database = DatabaseSettings()
        self.midtrans = MidtransSettings()
        self.auth = AuthSettings()
        self.storefront = StorefrontSettings()


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings()
