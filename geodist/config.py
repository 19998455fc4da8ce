"""Centralised application settings loaded from environment / .env file."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # HTTP
    app_host: str = "localhost"
    app_port: int = 5000
    cors_allow_origins: list[str] = ["*"]
    rate_limit: str = "100/minute"

    # Result cache
    cache_capacity: int = Field(1024, gt=0)  # entries, fixed for process lifetime

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
