from .base import AppSettings, settings_config
from .database import get_database_url


class StageSettings(AppSettings):
    """Staging assembles its Postgres URL from the individual DB_* variables."""
    APP_ENV: str = "stage"

    DB_DRIVER: str = "postgresql+asyncpg"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "asset_maintenance"

    model_config = settings_config("staging")

    @property
    def DATABASE_URL(self) -> str:
        return get_database_url(
            driver=self.DB_DRIVER,
            host=self.DB_HOST,
            port=self.DB_PORT,
            user=self.DB_USER,
            password=self.DB_PASSWORD,
            name=self.DB_NAME,
        )
