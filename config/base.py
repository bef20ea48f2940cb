"""Settings shared by every deployment mode."""
from __future__ import annotations

import json
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


def settings_config(env_name: str) -> SettingsConfigDict:
    """Read env/.env.<env_name> if it exists; real environment variables still win."""
    env_file = ROOT / "env" / f".env.{env_name}"
    return SettingsConfigDict(
        env_file=str(env_file) if env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AppSettings(BaseSettings):
    APP_ENV: str = "local"
    DEBUG: bool = False

    SECRET_KEY: str | None = None
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    LOG_LEVEL: str = "INFO"
    # Create tables from ORM metadata on startup instead of running migrations
    AUTO_CREATE_TABLES: bool = False

    # JSON array or comma-separated list; empty means the local dev defaults
    CORS_ORIGINS: str = ""

    model_config = settings_config("local")

    @property
    def cors_origins(self) -> list[str]:
        raw = self.CORS_ORIGINS.strip()
        if not raw:
            return list(DEFAULT_CORS_ORIGINS)
        try:
            origins = json.loads(raw)
        except json.JSONDecodeError:
            return [o.strip() for o in raw.split(",") if o.strip()]
        if isinstance(origins, list):
            return [str(o) for o in origins]
        return [str(origins)]
