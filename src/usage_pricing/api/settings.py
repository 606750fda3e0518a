"""API runtime settings, loaded from ``USAGE_PRICING_*`` environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """Server settings.  A ``.env`` file in the working directory is read if present."""

    model_config = SettingsConfigDict(
        env_prefix="USAGE_PRICING_",
        env_file=".env",
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Interface the API binds to")
    port: int = Field(default=8000, ge=1, le=65535, description="API port")
    reload: bool = Field(default=False, description="Auto-reload on code changes (development)")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    default_currency: str = Field(
        default="EUR", min_length=3, max_length=3,
        description="Currency used when a request does not name one",
    )


@lru_cache
def get_settings() -> ApiSettings:
    return ApiSettings()
