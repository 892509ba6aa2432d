"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "SalesDashboard"
    app_env: Literal["development", "testing", "staging", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # API
    api_host: str = "0.0.0.0"  # noqa: S104
    api_port: int = 3001
    cors_allow_origins: list[str] = [
        "http://localhost:5173",  # Vite dev server (default)
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    # Upstream e-commerce API
    upstream_base_url: str = "https://fakestoreapi.com"
    upstream_source_label: str = "FakeStoreAPI"
    upstream_timeout_seconds: float = 10.0

    # Webhook notification (disabled when empty)
    webhook_url: str = ""
    webhook_timeout_seconds: float = 5.0

    # Trace log (append-only JSONL)
    trace_log_enabled: bool = True
    trace_log_path: str = "./logs/http_trace.jsonl"

    # Dashboard
    dashboard_source: Literal["local", "http"] = "local"
    dashboard_api_base_url: str = "http://localhost:3001"
    dashboard_top_n: int = 5

    @field_validator("upstream_base_url", "dashboard_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended with a leading slash.

        Args:
            v: Base URL string.

        Returns:
            Base URL without trailing slash.

        Raises:
            ValueError: If the URL is not http(s).
        """
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid base URL '{v}'. Expected an http:// or https:// URL")
        return v.rstrip("/")

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: str) -> str:
        """Allow an empty value (webhook disabled) or an http(s) URL."""
        v = v.strip()
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid webhook URL '{v}'. Expected an http:// or https:// URL")
        return v

    @field_validator("dashboard_top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        """Ensure the top-N view size is positive."""
        if v < 1:
            raise ValueError("dashboard_top_n must be >= 1")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def webhook_enabled(self) -> bool:
        """Check if a webhook URL is configured."""
        return bool(self.webhook_url)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
