"""Helpers for working with database URLs."""


def get_database_url(driver: str, host: str, port: int, user: str, password: str, name: str) -> str:
    """
    Build a SQLAlchemy URL from its parts.

        >>> get_database_url("postgresql+asyncpg", "db", 5432, "tracker", "pw", "maintenance")
        'postgresql+asyncpg://tracker:pw@db:5432/maintenance'
    """
    return f"{driver}://{user}:{password}@{host}:{port}/{name}"


def is_sqlite_url(url: str) -> bool:
    """True for sqlite URLs, sync or async (sqlite://, sqlite+aiosqlite://)."""
    return url.split(":", 1)[0].split("+", 1)[0] == "sqlite"
