from pydantic import field_validator

from .base import AppSettings, settings_config


class ProdSettings(AppSettings):
    # Must be supplied by the environment, e.g. postgresql+asyncpg://...
    DATABASE_URL: str
    APP_ENV: str = "production"
    SECRET_KEY: str

    model_config = settings_config("production")

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("SECRET_KEY must be set in production")
        return value
