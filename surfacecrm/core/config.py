from __future__ import annotations

import os
from pydantic_settings import BaseSettings, SettingsConfigDict


def normalize_database_url(url: str) -> str:
    """
    Force SQLAlchemy to use psycopg (v3) driver on Postgres.

    Accepts any of these and converts to postgresql+psycopg://
      - postgres://
      - postgresql://
      - postgresql+psycopg2://
      - postgresql+psycopg:// (already good)

    SQLite URLs are returned untouched.
    """
    if not url:
        return url

    # Remove hidden whitespace/newlines that often get pasted into env vars
    url = url.strip()

    if url.startswith("postgresql+psycopg://"):
        return url

    if url.startswith("postgresql+psycopg2://"):
        return url.replace("postgresql+psycopg2://", "postgresql+psycopg://", 1)

    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)

    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)

    return url


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Surfaces CRM"
    version: str = "1.0.0"

    # env: dev | prod
    env: str = os.getenv("ENV", os.getenv("APP_ENV", "prod")).lower()

    database_url: str = normalize_database_url(os.getenv("DATABASE_URL", "sqlite:///./dev.db"))

    # Re-bind to a temporary SQLite file when the configured database is unreachable at startup.
    # Always on in dev; opt-in elsewhere.
    storage_fallback: bool = _env_flag("STORAGE_FALLBACK") or (env == "dev")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Comma-separated origins, or "*"
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Follow-up calendar
    follow_up_window_days: int = int(os.getenv("FOLLOW_UP_WINDOW_DAYS", "7"))
    due_soon_days: int = int(os.getenv("DUE_SOON_DAYS", "7"))

    activity_feed_limit: int = int(os.getenv("ACTIVITY_FEED_LIMIT", "50"))
    export_filename_prefix: str = os.getenv("EXPORT_FILENAME_PREFIX", "customers")

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"

    def cors_origins_list(self) -> list[str]:
        if not self.cors_origins or self.cors_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
