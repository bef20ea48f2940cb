from .base import AppSettings, settings_config


class DevSettings(AppSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./asset_maintenance_dev.db"
    APP_ENV: str = "dev"
    AUTO_CREATE_TABLES: bool = True

    model_config = settings_config("dev")
