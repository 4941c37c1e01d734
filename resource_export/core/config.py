"""
Application configuration — Pydantic Settings.

Loads from .env with strict validation. Single source of truth
for all environment-dependent values.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────────
    APP_NAME: str = "ResourceExport"
    APP_ENV: str = "development"
    DEBUG: bool = False

    # ── Database (exported tables) ───────────────────────────────
    EXPORT_DB_URL: str = "mysql+pymysql://root@localhost:3306/app"

    # ── Storage ──────────────────────────────────────────────────
    STORAGE_ROOT: str = "storage"
    STORAGE_URL: str = "http://127.0.0.1:8000/storage"
    STAGING_DISK: str = "public"
    EXPORTS_DIR: str = "exports"

    # ── Export behaviour ─────────────────────────────────────────
    STREAM_BATCH_SIZE: int = 1000
    FILENAME_WITH_TIME: bool = False

    # ── S3-compatible disk (optional) ────────────────────────────
    S3_ENDPOINT: Optional[str] = None
    S3_ACCESS_KEY: str = ""
    S3_SECRET_KEY: str = ""
    S3_BUCKET: str = "exports"
    S3_URL_EXPIRE_HOURS: int = 24

    # ── Logging ──────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @property
    def filename_date_format(self) -> str:
        """strftime pattern appended to generated export file names."""
        if self.FILENAME_WITH_TIME:
            return "%m_%d_%Y_%H_%M"
        return "%m_%d_%Y"


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


settings = get_settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply ``LOG_LEVEL`` to the root logger (idempotent)."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
