from .base import AppSettings, settings_config


class TestSettings(AppSettings):
    """Used by the pytest suite; the schema is managed by the test fixtures."""
    DATABASE_URL: str = "sqlite+aiosqlite:///./asset_maintenance_test.db"
    APP_ENV: str = "test"
    SECRET_KEY: str = "test-secret-key"
    LOG_LEVEL: str = "WARNING"

    model_config = settings_config("test")
