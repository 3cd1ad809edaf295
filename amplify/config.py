"""Amplify: Central Configuration via Pydantic Settings."""

import os
from typing import List

from pydantic_settings import BaseSettings

from amplify.core.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Record Store (managed Postgres) ──
    database_url: str = ""
    store_api_key: str = ""

    # ── Resend ──
    resend_api_key: str = ""
    resend_base_url: str = "https://api.resend.com"
    email_from: str = ""

    # ── App ──
    log_level: str = "INFO"
    http_timeout: float = 30.0
    send_concurrency: int = 10  # Max in-flight sends per campaign
    allow_sqlite_fallback: bool = False

    @property
    def effective_database_url(self) -> str:
        """Return the async store URL, falling back to a local SQLite file."""
        url = self.database_url
        if not url:
            if os.environ.get("VERCEL"):
                return "sqlite+aiosqlite:////tmp/amplify.db"
            return "sqlite+aiosqlite:///./amplify.db"
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        if url.startswith("postgresql://"):
            return "postgresql+asyncpg://" + url[len("postgresql://"):]
        return url

    def missing(self) -> List[str]:
        """Names of required values that are not configured."""
        required = {
            "database_url": self.database_url or self.allow_sqlite_fallback,
            "store_api_key": self.store_api_key or self.allow_sqlite_fallback,
            "resend_api_key": self.resend_api_key,
            "email_from": self.email_from,
        }
        return [name for name, value in required.items() if not value]

    def require(self) -> "Settings":
        """Fail fast when a required endpoint or credential is absent."""
        missing = self.missing()
        if missing:
            raise ConfigError(
                f"Missing required configuration: {', '.join(missing)}",
                details={"missing": missing},
            )
        return self

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

