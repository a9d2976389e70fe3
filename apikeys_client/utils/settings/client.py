"""API key service client settings configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from apikeys_client.api.core.constants import (
    DEFAULT_RETRY_BACKOFF_FACTOR,
    DEFAULT_TIMEOUT_SECONDS,
)


class APIKeysClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    APIKEYS_BASE_URL: str = "http://localhost:8080"
    APIKEYS_TIMEOUT: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    # Set to False only for services that expect raw secrets in the path
    APIKEYS_ESCAPE_SECRETS: bool = True
    # 1 disables retries; applies to reads only
    APIKEYS_RETRY_MAX_ATTEMPTS: int = Field(default=1, ge=1)
    APIKEYS_RETRY_BACKOFF_FACTOR: float = Field(
        default=DEFAULT_RETRY_BACKOFF_FACTOR, ge=0
    )


__all__ = ["APIKeysClientSettings"]
