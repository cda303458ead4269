from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    """
    Hosted identity provider settings.
    Loaded from .env with prefix AUTH_*
    """

    url: str = "http://localhost:54321"
    anon_key: str = ""
    timeout_seconds: float = 10.0

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "AUTH_",
        "extra": "ignore",
    }
