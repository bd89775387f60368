"""
Shared configuration management for the ServeX gateway.
"""

import math
from typing import Any, Optional

import httpx
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ITEM_CACHE_TTL_MS = 30000


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="local")
    log_level: str = Field(default="info")

    # Listener
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)


class GatewayConfig(BaseConfig):
    """Gateway configuration: backend endpoints and catalog caching."""

    service_name: str = "gateway"

    # Backend
    backend_base_url: str = Field(default="http://localhost:8080")
    items_api_url: Optional[str] = Field(default=None)
    ui_orders_url: Optional[str] = Field(default=None)
    ui_reviews_url: Optional[str] = Field(default=None)
    backend_timeout_seconds: Optional[float] = Field(default=None)

    # Catalog cache
    item_cache_ttl_ms: int = Field(default=DEFAULT_ITEM_CACHE_TTL_MS)

    # Browser client
    static_dir: str = Field(default="public")

    @field_validator("item_cache_ttl_ms", mode="before")
    @classmethod
    def _coerce_ttl(cls, value: Any) -> int:
        """Anything that is not a positive number falls back to the default TTL."""
        if isinstance(value, bool):
            return DEFAULT_ITEM_CACHE_TTL_MS
        try:
            ttl = float(value)
        except (TypeError, ValueError):
            return DEFAULT_ITEM_CACHE_TTL_MS
        if not math.isfinite(ttl) or int(ttl) <= 0:
            return DEFAULT_ITEM_CACHE_TTL_MS
        return int(ttl)

    @field_validator("items_api_url", "ui_orders_url", "ui_reviews_url", "backend_timeout_seconds", mode="before")
    @classmethod
    def _blank_as_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _resolve_backend_urls(self) -> "GatewayConfig":
        if not self.items_api_url:
            self.items_api_url = build_url(self.backend_base_url, "/api/items")
        if not self.ui_orders_url:
            self.ui_orders_url = build_url(self.backend_base_url, "/ui/orders")
        if not self.ui_reviews_url:
            self.ui_reviews_url = build_url(self.backend_base_url, "/ui/reviews")
        return self


def build_url(base_url: str, path: str) -> str:
    """Resolve ``path`` against ``base_url`` the way a browser resolves links."""
    return str(httpx.URL(base_url).join(path))


def get_config(**overrides: Any) -> GatewayConfig:
    """Get gateway configuration from the environment."""
    return GatewayConfig(**overrides)
