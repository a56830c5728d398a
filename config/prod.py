from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / "env" / ".env.production"


class ProdSettings(BaseSettings):
    DATABASE_URL: str | None = None
    APP_ENV: str = "production"
    SECRET_KEY: str | None = None
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    SESSION_COOKIE_NAME: str = "SESSION_ID"
    SESSION_COOKIE_SECURE: bool = True

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )
