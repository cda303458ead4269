from pydantic_settings import BaseSettings


class MidtransSettings(BaseSettings):
    """
    Settings for the Midtrans payment gateway.
    Loaded from .env with prefix MIDTRANS_*
    """

    server_key: str = ""
    environment: str = "sandbox"
    enabled: bool = True
    timeout_seconds: float = 15.0

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "MIDTRANS_",
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def snap_url(self) -> str:
        if self.is_production:
            return "https://app.midtrans.com/snap/v1/transactions"
        return "https://app.sandbox.midtrans.com/snap/v1/transactions"

    @property
    def api_base_url(self) -> str:
        if self.is_production:
            return "https://api.midtrans.com"
        return "https://api.sandbox.midtrans.com"
