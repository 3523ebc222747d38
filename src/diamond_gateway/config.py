from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Runtime settings, read from ``DIAMOND_GATEWAY_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="DIAMOND_GATEWAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: str = "dev"
    log_level: str = "INFO"

    # Unknown chain names resolve to the local profile.
    chain: str = "mumbai"
    rpc_url: str | None = None

    content_gateway_url: str = "https://nftstorage.link/ipfs/"
    content_upload_url: str = "https://api.nft.storage/upload"
    content_api_token: str = ""
    http_timeout_seconds: float = Field(default=20.0, gt=0)

    watch_poll_interval_seconds: float = Field(default=15.0, gt=0)
    handle_cache_enabled: bool = True

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("rpc_url")
    @classmethod
    def _blank_rpc_url_is_unset(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("content_gateway_url")
    @classmethod
    def _gateway_ends_with_slash(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
