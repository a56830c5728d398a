from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / "env" / ".env.test"


class TestSettings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./maintenance_test.db"
    APP_ENV: str = "test"
    SECRET_KEY: str = "test-secret-key"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 1
    SESSION_COOKIE_NAME: str = "SESSION_ID"
    SESSION_COOKIE_SECURE: bool = False

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )
