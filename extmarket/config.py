"""Marketplace client configuration — env-driven.

Centralized config using pydantic-settings for environment variable
support. Reads from a .env file and EXTMARKET_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORE_URL = "https://marketplace.owncloud.com"


class MarketConfig(BaseSettings):
    """Marketplace client configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export EXTMARKET_STORE_URL=https://market.example.org
        export EXTMARKET_API_KEY=s3cr3t
        export EXTMARKET_CACHE_TTL_SECONDS=3600
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="EXTMARKET_",
        env_file_encoding="utf-8",
    )

    # Remote catalog
    store_url: str = DEFAULT_STORE_URL
    api_key: str | None = None
    user_agent: str = "extmarket/0.1"
    http_timeout_seconds: float = 30.0

    # Catalog caching
    cache_ttl_seconds: int = 60 * 60 * 24

    # Downloads land here; system temp dir when unset
    download_dir: Path | None = None

    # Bulk update scan fan-out (1 = sequential)
    scan_workers: int = 1

    def apps_url(self, version: str) -> str:
        """Catalog endpoint for an already-normalized platform version."""
        return f"{self.store_url.rstrip('/')}/api/v1/platform/{version}/apps.json"

    def categories_url(self) -> str:
        return f"{self.store_url.rstrip('/')}/api/v1/categories.json"

    def auth_headers(self) -> dict[str, str]:
        """Headers attached to every outbound marketplace request."""
        if self.api_key is None:
            return {}
        return {"Authorization": f"apikey: {self.api_key}"}


# Module-level singleton: import as `from extmarket.config import config`
config = MarketConfig()
