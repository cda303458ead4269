from decimal import Decimal
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class StorefrontSettings(BaseSettings):
    """
    Storefront business settings.
    Loaded from .env with exact variable name matching.
    """

    public_base_url: str = Field(default="", alias="PUBLIC_BASE_URL")
    allowed_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        alias="ALLOWED_ORIGINS",
    )
    order_number_prefix: str = Field(default="ORD", alias="ORDER_NUMBER_PREFIX")
    express_shipping_fee: Decimal = Field(default=Decimal("20000"), alias="EXPRESS_SHIPPING_FEE")
    amount_tolerance: Decimal = Field(default=Decimal("0.01"), alias="AMOUNT_TOLERANCE")
    pending_order_ttl_minutes: int = Field(default=120, alias="PENDING_ORDER_TTL_MINUTES")
    maintenance_cache_ttl_seconds: float = Field(default=30.0, alias="MAINTENANCE_CACHE_TTL_SECONDS")
    admin_api_key: str = Field(default="", alias="ADMIN_API_KEY")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def origins(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def base_url(self) -> str:
        """Base URL for gateway callbacks."""
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        origins = self.origins
        return origins[0].rstrip("/") if origins else "http://localhost:5173"
