"""
Settings for the command-line interface.

Read from ``AMBIENT_*`` environment variables or a ``.env`` file. The library
functions never read settings on their own; pass ``Credentials`` explicitly.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ambient_weather.client import MIN_REQUEST_INTERVAL
from ambient_weather.http import DEFAULT_TIMEOUT
from ambient_weather.schemas import Credentials


class Settings(BaseSettings):
    """Environment-backed configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AMBIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "ambient-weather"
    api_key: str = Field(default="", repr=False)
    app_key: str = Field(default="", repr=False)
    device_id: int = Field(default=0, ge=0)
    use_new_endpoint: bool = False
    min_request_interval: float = Field(default=MIN_REQUEST_INTERVAL, ge=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    debug: bool = False

    @property
    def has_keys(self) -> bool:
        return bool(self.api_key and self.app_key)

    def credentials(
        self,
        device_id: int | None = None,
        use_new_endpoint: bool | None = None,
    ) -> Credentials:
        """Build ``Credentials``, optionally overriding the device and host."""
        return Credentials(
            api_key=self.api_key,
            app_key=self.app_key,
            device_id=self.device_id if device_id is None else device_id,
            use_new_endpoint=self.use_new_endpoint if use_new_endpoint is None else use_new_endpoint,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
