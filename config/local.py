from .base import AppSettings, settings_config


class LocalSettings(AppSettings):
    """Developer laptop: SQLite file next to the code, tables created on boot."""
    DATABASE_URL: str = "sqlite+aiosqlite:///./asset_maintenance.db"
    APP_ENV: str = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    AUTO_CREATE_TABLES: bool = True

    model_config = settings_config("local")
